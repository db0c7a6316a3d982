"""Authentication utilities for entrega services."""

from .service import AdminData, AuthError, AuthService, UserData

__all__ = ["AdminData", "AuthError", "AuthService", "UserData"]
