"""
Admin Auth API - back-office login with JWT admin tokens.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_admin.decorators import admin_required, get_admin
from entrega_shared.auth import AuthService
from entrega_shared.jwt_service import create_admin_token
from entrega_shared.logging_config import get_logger
from entrega_shared.schemas import AdminLoginRequest
from entrega_shared.security_middleware import rate_limit
from entrega_shared.serializers import success_response

auth_bp = Blueprint("admin_auth", __name__)
logger = get_logger(__name__)


def _admin_payload(admin) -> dict:
    return {"id": admin.id, "username": admin.username, "name": admin.name, "role": admin.role}


@auth_bp.post("/auth/login")
@rate_limit(max_requests=5, window_seconds=60, key_prefix="admin-login")
def post_login():
    """
    Authenticate an admin and issue an admin token.

    Body:
        {"username": str, "password": str}
    """
    payload = AdminLoginRequest.model_validate(request.get_json(silent=True) or {})
    admin = AuthService.authenticate_admin(payload.username, payload.password)

    token = create_admin_token(
        admin_id=admin.id, admin_username=admin.username, admin_role=admin.role
    )
    logger.info(f"Admin {admin.username} logged in")
    return jsonify(
        success_response({"access_token": token, "admin": _admin_payload(admin)})
    ), HTTPStatus.OK


@auth_bp.get("/auth/me")
@admin_required
def get_me():
    return jsonify(success_response(_admin_payload(get_admin()))), HTTPStatus.OK
