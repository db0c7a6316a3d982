"""
Customer profile service.

A user has at most one profile. ``create_profile`` refuses to overwrite an
existing one; ``save_profile`` creates or updates.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from entrega_shared.db import get_session
from entrega_shared.errors import ConflictError
from entrega_shared.logging_config import get_logger
from entrega_shared.models import UserProfile
from entrega_shared.schemas import ProfileRequest
from entrega_shared.serializers import serialize_profile
from entrega_shared.services.ownership import require_user

logger = get_logger(__name__)


def _find_profile(session: Session, user_id: int) -> UserProfile | None:
    return session.execute(
        select(UserProfile).where(UserProfile.user_id == user_id)
    ).scalar_one_or_none()


def _apply_fields(profile: UserProfile, payload: ProfileRequest) -> None:
    profile.full_name = payload.full_name
    profile.birth_date = payload.birth_date
    profile.cpf = payload.cpf
    profile.phone = payload.phone


def get_profile(user_id: int | None) -> dict[str, Any] | None:
    require_user(user_id)
    with get_session() as session:
        return serialize_profile(_find_profile(session, user_id))


def create_profile(user_id: int | None, payload: ProfileRequest) -> dict[str, Any]:
    require_user(user_id)
    with get_session() as session:
        if _find_profile(session, user_id) is not None:
            raise ConflictError("Profile already exists")
        profile = UserProfile(user_id=user_id)
        _apply_fields(profile, payload)
        session.add(profile)
        session.flush()
        logger.info("Created profile for user %s", user_id)
        return serialize_profile(profile)


def save_profile(user_id: int | None, payload: ProfileRequest) -> dict[str, Any]:
    require_user(user_id)
    with get_session() as session:
        profile = _find_profile(session, user_id)
        if profile is None:
            profile = UserProfile(user_id=user_id)
            session.add(profile)
            logger.info("Created profile for user %s", user_id)
        _apply_fields(profile, payload)
        session.flush()
        return serialize_profile(profile)
