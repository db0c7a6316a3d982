"""
Admin accounts API. Creating accounts is reserved to ``super_admin``.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_admin.decorators import admin_required, role_required
from entrega_shared.constants import AdminRole
from entrega_shared.error_catalog import ERROR_CATALOG
from entrega_shared.schemas import CreateAdminRequest
from entrega_shared.serializers import success_response
from entrega_shared.services import admin_service

admins_bp = Blueprint("admin_accounts", __name__)


@admins_bp.get("/admins")
@admin_required
def list_admins():
    return jsonify(success_response(admin_service.list_admins())), HTTPStatus.OK


@admins_bp.post("/admins")
@role_required([AdminRole.SUPER_ADMIN.value])
def create_admin():
    payload = CreateAdminRequest.model_validate(request.get_json(silent=True) or {})
    return jsonify(success_response(admin_service.create_admin(payload))), HTTPStatus.CREATED


@admins_bp.get("/errors")
@admin_required
def get_error_catalog():
    return jsonify(success_response(ERROR_CATALOG)), HTTPStatus.OK
