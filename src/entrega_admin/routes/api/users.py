from http import HTTPStatus

from flask import Blueprint, jsonify

from entrega_admin.decorators import admin_required
from entrega_shared.serializers import success_response
from entrega_shared.services import admin_service

users_bp = Blueprint("admin_users", __name__)


@users_bp.get("/users")
@admin_required
def list_users():
    """Customers with their profiles."""
    return jsonify(success_response(admin_service.list_users())), HTTPStatus.OK
