"""
JWT Service - Token generation and validation for entrega.

Customers and admins receive distinct token types so a storefront token can
never unlock the back-office.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from flask import Request, current_app

JWT_ALGORITHM = "HS256"

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_ADMIN = "admin"


def get_access_token_expiry() -> int:
    try:
        return current_app.config.get("JWT_ACCESS_TOKEN_EXPIRES_HOURS", 24)
    except RuntimeError:
        return int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES_HOURS", "24"))


def get_admin_token_expiry() -> int:
    try:
        return current_app.config.get("JWT_ADMIN_TOKEN_EXPIRES_HOURS", 8)
    except RuntimeError:
        return int(os.getenv("JWT_ADMIN_TOKEN_EXPIRES_HOURS", "8"))


class JWTError(Exception):
    """Base exception for JWT errors."""

    def __init__(self, message: str, status: int = 401):
        self.message = message
        self.status = status
        super().__init__(message)


class TokenExpiredError(JWTError):
    def __init__(self):
        super().__init__("Token expired", 401)


class InvalidTokenError(JWTError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, 401)


def get_jwt_secret() -> str:
    """Get JWT secret key from config or environment."""
    try:
        secret = current_app.config.get("SECRET_KEY")
        if secret:
            return secret
    except RuntimeError:
        pass

    secret = os.getenv("SECRET_KEY", os.getenv("JWT_SECRET_KEY"))
    if not secret:
        raise RuntimeError("JWT_SECRET_KEY or SECRET_KEY must be configured")
    return secret


def create_access_token(
    user_id: int,
    user_name: str,
    user_email: str,
    expires_hours: int | None = None,
) -> str:
    """
    Create a JWT access token for a storefront customer.

    Args:
        user_id: User database ID
        user_name: Display name
        user_email: Login email
        expires_hours: Token expiration in hours (default: 24)

    Returns:
        Encoded JWT token string
    """
    expires = expires_hours or get_access_token_expiry()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(hours=expires),
        "type": TOKEN_TYPE_ACCESS,
        "user_id": user_id,
        "user_name": user_name,
        "user_email": user_email,
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def create_admin_token(
    admin_id: int,
    admin_username: str,
    admin_role: str,
    expires_hours: int | None = None,
) -> str:
    """
    Create a JWT token for a back-office admin session.
    """
    expires = expires_hours or get_admin_token_expiry()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(admin_id),
        "iat": now,
        "exp": now + timedelta(hours=expires),
        "type": TOKEN_TYPE_ADMIN,
        "admin_id": admin_id,
        "admin_username": admin_username,
        "admin_role": admin_role,
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str, verify_type: str | None = None) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string
        verify_type: Expected token type ('access' or 'admin')

    Returns:
        Decoded token payload

    Raises:
        TokenExpiredError: If token has expired
        InvalidTokenError: If token is invalid
    """
    try:
        payload = jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(str(e))

    if verify_type and payload.get("type") != verify_type:
        raise InvalidTokenError(f"Expected {verify_type} token")
    return payload


def extract_token_from_request(request: Request) -> str | None:
    """
    Extract JWT token from request.

    Checks in order:
    1. Authorization header (Bearer token)
    2. X-Access-Token header
    3. access_token cookie
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]

    token_header = request.headers.get("X-Access-Token")
    if token_header:
        return token_header

    return request.cookies.get("access_token")
