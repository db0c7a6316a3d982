"""
Promotional banner service.

New banners go to the end of the carousel (``max(order) + 1``); deleting a
banner leaves a gap rather than renumbering the rest.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select

from entrega_shared.db import get_session
from entrega_shared.errors import NotFoundOrUnauthorizedError
from entrega_shared.logging_config import get_logger
from entrega_shared.models import Banner
from entrega_shared.schemas import BannerRequest
from entrega_shared.serializers import serialize_banner

logger = get_logger(__name__)


def list_banners() -> list[dict[str, Any]]:
    with get_session() as session:
        banners = session.execute(select(Banner).order_by(Banner.order, Banner.id)).scalars()
        return [serialize_banner(banner) for banner in banners]


def list_active_banners() -> list[dict[str, Any]]:
    with get_session() as session:
        banners = session.execute(
            select(Banner).where(Banner.is_active.is_(True)).order_by(Banner.order, Banner.id)
        ).scalars()
        return [serialize_banner(banner) for banner in banners]


def create_banner(payload: BannerRequest) -> int:
    with get_session() as session:
        max_order = session.execute(select(func.max(Banner.order))).scalar() or 0
        banner = Banner(
            title=payload.title,
            subtitle=payload.subtitle,
            image=payload.image,
            color=payload.color,
            is_active=payload.is_active,
            order=max_order + 1,
        )
        session.add(banner)
        session.flush()
        logger.info("Created banner %s at position %s", banner.id, banner.order)
        return banner.id


def update_banner(banner_id: int, payload: BannerRequest) -> dict[str, Any]:
    with get_session() as session:
        banner = session.get(Banner, banner_id)
        if banner is None:
            raise NotFoundOrUnauthorizedError("Banner")
        banner.title = payload.title
        banner.subtitle = payload.subtitle
        banner.image = payload.image
        banner.color = payload.color
        banner.is_active = payload.is_active
        return serialize_banner(banner)


def delete_banner(banner_id: int) -> None:
    with get_session() as session:
        banner = session.get(Banner, banner_id)
        if banner is None:
            raise NotFoundOrUnauthorizedError("Banner")
        session.delete(banner)
        logger.info("Deleted banner %s", banner_id)
