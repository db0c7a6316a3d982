"""
JWT Middleware for Flask.

Provides request-level JWT validation and caller context injection.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any

from flask import g, request

from entrega_shared.errors import UnauthenticatedError
from entrega_shared.jwt_service import (
    InvalidTokenError,
    TokenExpiredError,
    decode_token,
    extract_token_from_request,
)

if TYPE_CHECKING:
    from flask import Flask

logger = logging.getLogger(__name__)


def init_jwt_middleware(app: Flask, token_type: str) -> None:
    """
    Initialize JWT middleware for a Flask app.

    Sets up a before_request handler that extracts the token, validates it
    against ``token_type`` and stores the payload in ``g.current_user``.
    Invalid or expired tokens leave the request anonymous; the route
    decorators decide whether that is acceptable.
    """

    @app.before_request
    def load_jwt_user():
        g.current_user = None
        g.jwt_token = None

        token = extract_token_from_request(request)
        if not token:
            return

        try:
            g.current_user = decode_token(token, verify_type=token_type)
            g.jwt_token = token
        except TokenExpiredError:
            logger.debug(f"Expired token on {request.path}")
        except InvalidTokenError as e:
            logger.warning(f"Invalid token on {request.path}: {e}")


def get_current_user() -> dict[str, Any] | None:
    """
    Get current authenticated caller from request context.

    Returns:
        Token payload dict if authenticated, None otherwise
    """
    return getattr(g, "current_user", None)


def get_current_user_id() -> int | None:
    """Customer id of the caller, or None for anonymous requests."""
    user = get_current_user()
    return user.get("user_id") if user else None


def get_current_admin() -> dict[str, Any] | None:
    user = get_current_user()
    if user and user.get("admin_id"):
        return user
    return None


def jwt_required(f):
    """
    Decorator to require a valid customer token for a route.
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if get_current_user_id() is None:
            raise UnauthenticatedError()
        return f(*args, **kwargs)

    return decorated_function
