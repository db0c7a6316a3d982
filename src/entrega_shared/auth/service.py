"""Centralized authentication helpers for customers and admins."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from sqlalchemy import select

from entrega_shared.db import get_session
from entrega_shared.errors import ConflictError, DomainError
from entrega_shared.logging_config import get_logger
from entrega_shared.models import Admin, User
from entrega_shared.schemas import SignUpRequest

logger = get_logger(__name__)


class AuthError(DomainError):
    """Raised when an authentication attempt fails."""

    code = "AUTH_001"

    def __init__(self, message: str, status: HTTPStatus = HTTPStatus.UNAUTHORIZED) -> None:
        super().__init__(message, status=status)


@dataclass
class UserData:
    """Customer information detached from the database session."""

    id: int
    name: str
    email: str


@dataclass
class AdminData:
    id: int
    username: str
    name: str
    role: str


class AuthService:
    """Provides utilities to register and authenticate customers and admins."""

    @staticmethod
    def register_user(payload: SignUpRequest) -> UserData:
        with get_session() as session:
            existing = session.execute(
                select(User.id).where(User.email == payload.email)
            ).scalar_one_or_none()
            if existing is not None:
                raise ConflictError("Email already registered")

            user = User(name=payload.name, email=payload.email)
            user.set_password(payload.password)
            session.add(user)
            session.flush()
            logger.info("Registered user %s", user.id)
            return UserData(id=user.id, name=user.name, email=user.email)

    @staticmethod
    def authenticate_user(email: str, password: str) -> UserData:
        with get_session() as session:
            user = session.execute(
                select(User).where(User.email == email.strip().lower())
            ).scalar_one_or_none()
            if user is None or not user.verify_password(password):
                raise AuthError("Invalid credentials")
            return UserData(id=user.id, name=user.name, email=user.email)

    @staticmethod
    def authenticate_admin(username: str, password: str) -> AdminData:
        """
        Check back-office credentials. Unknown usernames, wrong passwords and
        deactivated accounts fail the same way.
        """
        with get_session() as session:
            admin = session.execute(
                select(Admin).where(Admin.username == username.strip())
            ).scalar_one_or_none()
            if admin is None or not admin.is_active or not admin.verify_password(password):
                logger.warning("Failed admin login for %r", username)
                raise AuthError("Invalid credentials")

            admin.sign_in()
            return AdminData(id=admin.id, username=admin.username, name=admin.name, role=admin.role)

    @staticmethod
    def get_active_admin(admin_id: int) -> AdminData | None:
        """Re-read an admin so revoked accounts lose access before their token expires."""
        with get_session() as session:
            admin = session.get(Admin, admin_id)
            if admin is None or not admin.is_active:
                return None
            return AdminData(id=admin.id, username=admin.username, name=admin.name, role=admin.role)
