"""
Ownership guard for user-scoped records.

Every mutation on a record addressed by id re-reads the record and compares
its ``user_id`` to the caller before writing.
"""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.orm import Session

from entrega_shared.errors import NotFoundOrUnauthorizedError, UnauthenticatedError
from entrega_shared.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def require_user(user_id: int | None) -> int:
    """Return the caller id or raise when the request is anonymous."""
    if user_id is None:
        raise UnauthenticatedError()
    return user_id


def get_owned(session: Session, model: type[T], record_id: int, user_id: int | None) -> T:
    """
    Fetch ``model`` by id on behalf of ``user_id``.

    Raises:
        UnauthenticatedError: No caller identity
        NotFoundOrUnauthorizedError: Record missing or owned by another user
    """
    require_user(user_id)
    record = session.get(model, record_id)
    if record is None or record.user_id != user_id:
        if record is not None:
            logger.warning(
                "User %s tried to access %s %s owned by another user",
                user_id,
                model.__name__,
                record_id,
            )
        raise NotFoundOrUnauthorizedError(model.__name__)
    return record
