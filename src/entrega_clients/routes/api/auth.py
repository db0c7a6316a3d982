"""
Customer Authentication API - JWT access tokens.

Endpoints:
- POST /auth/signup - Create a customer account and log in
- POST /auth/login - Authenticate customer, issue token
- GET /auth/me - Current customer info
"""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, make_response, request

from entrega_shared.auth import AuthService, UserData
from entrega_shared.jwt_middleware import get_current_user, jwt_required
from entrega_shared.jwt_service import create_access_token, get_access_token_expiry
from entrega_shared.logging_config import get_logger
from entrega_shared.schemas import LoginRequest, SignUpRequest
from entrega_shared.security_middleware import rate_limit
from entrega_shared.serializers import success_response

auth_bp = Blueprint("client_auth", __name__)
logger = get_logger(__name__)


def _token_response(user: UserData, status: HTTPStatus):
    access_token = create_access_token(
        user_id=user.id, user_name=user.name, user_email=user.email
    )
    response = make_response(
        jsonify(
            success_response(
                {
                    "access_token": access_token,
                    "user": {"id": user.id, "name": user.name, "email": user.email},
                }
            )
        ),
        status,
    )
    response.set_cookie(
        "access_token",
        access_token,
        max_age=get_access_token_expiry() * 3600,
        httponly=True,
        samesite="Lax",
        secure=request.is_secure,
    )
    return response


@auth_bp.post("/auth/signup")
@rate_limit(max_requests=5, window_seconds=60, key_prefix="signup")
def signup():
    """Create a customer account and return an access token."""
    payload = SignUpRequest.model_validate(request.get_json(silent=True) or {})
    user = AuthService.register_user(payload)
    logger.info(f"Customer {user.id} signed up")
    return _token_response(user, HTTPStatus.CREATED)


@auth_bp.post("/auth/login")
@rate_limit(max_requests=5, window_seconds=60, key_prefix="login")
def login():
    payload = LoginRequest.model_validate(request.get_json(silent=True) or {})
    user = AuthService.authenticate_user(payload.email, payload.password)
    logger.info(f"Customer {user.id} logged in")
    return _token_response(user, HTTPStatus.OK)


@auth_bp.post("/auth/logout")
def logout():
    response = make_response(jsonify(success_response(None, "Logged out")))
    response.delete_cookie("access_token")
    return response


@auth_bp.get("/auth/me")
@jwt_required
def me():
    user = get_current_user()
    return jsonify(
        success_response(
            {"id": user["user_id"], "name": user.get("user_name"), "email": user.get("user_email")}
        )
    ), HTTPStatus.OK
