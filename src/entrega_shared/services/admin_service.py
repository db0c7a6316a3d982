"""
Back-office service: dashboard counters, order management, user listing and
admin account creation.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from entrega_shared.constants import OrderStatus, RestaurantStatus
from entrega_shared.datetime_utils import utcnow_naive
from entrega_shared.db import get_session
from entrega_shared.errors import ConflictError, NotFoundOrUnauthorizedError
from entrega_shared.logging_config import get_logger
from entrega_shared.models import Admin, Order, Restaurant, User
from entrega_shared.schemas import CreateAdminRequest
from entrega_shared.serializers import (
    money,
    serialize_admin,
    serialize_order,
    serialize_profile,
    serialize_user,
)
from entrega_shared.validation import ValidationError, validate_password

logger = get_logger(__name__)


def get_dashboard_stats(today: date | None = None) -> dict[str, Any]:
    """
    Counters for the dashboard overview. ``today`` is a UTC calendar day and
    defaults to the current one.
    """
    today = today or utcnow_naive().date()
    day_start = datetime.combine(today, time.min)
    day_end = day_start + timedelta(days=1)

    with get_session() as session:
        restaurant_counts = dict(
            session.execute(
                select(Restaurant.status, func.count(Restaurant.id)).group_by(Restaurant.status)
            ).all()
        )
        total_orders, total_revenue = session.execute(
            select(func.count(Order.id), func.coalesce(func.sum(Order.total), 0))
        ).one()
        today_orders, today_revenue = session.execute(
            select(func.count(Order.id), func.coalesce(func.sum(Order.total), 0)).where(
                Order.created_at >= day_start, Order.created_at < day_end
            )
        ).one()
        total_users = session.execute(select(func.count(User.id))).scalar()

    return {
        "totalRestaurants": sum(restaurant_counts.values()),
        "pendingRestaurants": restaurant_counts.get(RestaurantStatus.PENDING.value, 0),
        "approvedRestaurants": restaurant_counts.get(RestaurantStatus.APPROVED.value, 0),
        "totalOrders": total_orders,
        "todayOrders": today_orders,
        "totalUsers": total_users,
        "totalRevenue": money(Decimal(str(total_revenue))),
        "todayRevenue": money(Decimal(str(today_revenue))),
    }


def list_all_orders() -> list[dict[str, Any]]:
    """Every order, newest first, with customer and restaurant summaries."""
    with get_session() as session:
        orders = (
            session.execute(select(Order).order_by(Order.created_at.desc(), Order.id.desc()))
            .scalars()
            .all()
        )
        users = {
            user.id: user
            for user in session.execute(
                select(User).where(User.id.in_({order.user_id for order in orders}))
            ).scalars()
        }
        restaurants = {
            restaurant.id: restaurant
            for restaurant in session.execute(
                select(Restaurant).where(
                    Restaurant.id.in_({order.restaurant_id for order in orders})
                )
            ).scalars()
        }

        result = []
        for order in orders:
            data = serialize_order(order, restaurants.get(order.restaurant_id))
            user = users.get(order.user_id)
            data["user"] = serialize_user(user) if user else None
            result.append(data)
        return result


def update_order_status(
    order_id: int, status: str, admin_notes: str | None = None
) -> dict[str, Any]:
    """
    Move an order to ``status``. Any known status is accepted from any other;
    there is no transition table.
    """
    if status not in OrderStatus.all_values():
        allowed = ", ".join(member.value for member in OrderStatus)
        raise ValidationError(f"Invalid order status. Allowed values: {allowed}")

    with get_session() as session:
        order = session.get(Order, order_id)
        if order is None:
            raise NotFoundOrUnauthorizedError("Order")
        previous = order.status
        order.status = status
        order.admin_notes = admin_notes
        session.flush()
        logger.info("Order %s status %s -> %s", order_id, previous, status)
        return serialize_order(order, session.get(Restaurant, order.restaurant_id))


def list_users() -> list[dict[str, Any]]:
    with get_session() as session:
        users = session.execute(
            select(User).options(selectinload(User.profile)).order_by(User.id)
        ).scalars()
        return [
            {**serialize_user(user), "profile": serialize_profile(user.profile)} for user in users
        ]


def list_admins() -> list[dict[str, Any]]:
    with get_session() as session:
        admins = session.execute(select(Admin).order_by(Admin.id)).scalars()
        return [
            {**serialize_admin(admin), "isActive": admin.is_active} for admin in admins
        ]


def create_admin(payload: CreateAdminRequest) -> dict[str, Any]:
    validate_password(payload.password)
    with get_session() as session:
        existing = session.execute(
            select(Admin.id).where(Admin.username == payload.username)
        ).scalar_one_or_none()
        if existing is not None:
            raise ConflictError("Username already taken")

        admin = Admin(
            username=payload.username,
            name=payload.name,
            role=payload.role,
            is_active=payload.is_active,
        )
        admin.set_password(payload.password)
        session.add(admin)
        session.flush()
        logger.info("Created admin %s with role %s", admin.username, admin.role)
        return serialize_admin(admin)
