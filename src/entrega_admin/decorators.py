"""Decorators for back-office route protection using admin JWTs."""

from __future__ import annotations

from functools import wraps

from flask import g

from entrega_shared.auth import AdminData, AuthService
from entrega_shared.constants import AdminRole
from entrega_shared.errors import ForbiddenError, UnauthenticatedError
from entrega_shared.jwt_middleware import get_current_admin
from entrega_shared.logging_config import get_logger

logger = get_logger(__name__)


def _load_admin() -> AdminData:
    """
    Resolve the admin behind the request token. The account is re-read so a
    deactivated or deleted admin loses access before the token expires.
    """
    claims = get_current_admin()
    if not claims:
        raise UnauthenticatedError("Admin authentication required")

    admin = AuthService.get_active_admin(claims["admin_id"])
    if admin is None:
        logger.warning(f"Token for inactive or missing admin {claims['admin_id']} rejected")
        raise UnauthenticatedError("Admin authentication required")

    g.admin = admin
    return admin


def get_admin() -> AdminData | None:
    return getattr(g, "admin", None)


def admin_required(f):
    """Decorator to require a valid admin token for a route."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        _load_admin()
        return f(*args, **kwargs)

    return decorated_function


def role_required(required_roles):
    """
    Decorator factory to require specific admin role(s) for a route.

    ``super_admin`` passes every role check. The role is taken from the
    database, not from the token.

    Args:
        required_roles: Can be a single role (str) or list of roles (list[str])
    """
    if isinstance(required_roles, str):
        required_roles = [required_roles]

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            admin = _load_admin()
            if admin.role != AdminRole.SUPER_ADMIN.value and admin.role not in required_roles:
                logger.warning(f"Admin {admin.username} ({admin.role}) denied {f.__name__}")
                roles_str = ", ".join(required_roles)
                raise ForbiddenError(f"One of these roles is required: {roles_str}")
            return f(*args, **kwargs)

        return decorated_function

    return decorator
