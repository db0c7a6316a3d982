from http import HTTPStatus

from flask import Blueprint, jsonify

from entrega_admin.decorators import admin_required
from entrega_shared.serializers import success_response
from entrega_shared.services import admin_service

dashboard_bp = Blueprint("admin_dashboard", __name__)


@dashboard_bp.get("/dashboard/stats")
@admin_required
def get_dashboard_stats():
    return jsonify(success_response(admin_service.get_dashboard_stats())), HTTPStatus.OK
