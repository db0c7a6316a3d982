"""
Revenue reporting for the back-office.

The report is recomputed from the orders on every call. All arithmetic is
done in ``Decimal`` so ``platformFee + restaurantRevenue == totalRevenue``
holds exactly.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import select

from entrega_shared.constants import PLATFORM_FEE_RATE
from entrega_shared.datetime_utils import parse_date_bound
from entrega_shared.db import get_session
from entrega_shared.logging_config import get_logger
from entrega_shared.models import Order, Restaurant
from entrega_shared.serializers import money
from entrega_shared.validation import ValidationError

logger = get_logger(__name__)


def summarize_revenue(
    orders: Iterable[Order],
    restaurant_names: dict[int, str],
    fee_rate: Decimal = PLATFORM_FEE_RATE,
) -> dict[str, Any]:
    """
    Aggregate already-filtered orders.

    Args:
        orders: Orders in creation order
        restaurant_names: Names of the restaurants that still exist, by id
        fee_rate: Share of revenue retained by the platform

    Returns:
        Report dict; orders of deleted restaurants count in the totals but
        are left out of ``revenueByRestaurant``
    """
    total_revenue = Decimal("0")
    total_orders = 0
    by_restaurant: dict[int, dict[str, Any]] = {}

    for order in orders:
        amount = Decimal(order.total)
        total_revenue += amount
        total_orders += 1

        name = restaurant_names.get(order.restaurant_id)
        if name is None:
            continue
        bucket = by_restaurant.setdefault(
            order.restaurant_id, {"name": name, "revenue": Decimal("0"), "orders": 0}
        )
        bucket["revenue"] += amount
        bucket["orders"] += 1

    platform_fee = total_revenue * Decimal(fee_rate)
    restaurant_revenue = total_revenue - platform_fee

    return {
        "totalRevenue": money(total_revenue),
        "totalOrders": total_orders,
        "platformFee": money(platform_fee),
        "restaurantRevenue": money(restaurant_revenue),
        "revenueByRestaurant": [
            {
                "restaurantId": restaurant_id,
                "name": bucket["name"],
                "revenue": money(bucket["revenue"]),
                "orders": bucket["orders"],
            }
            for restaurant_id, bucket in by_restaurant.items()
        ],
    }


def _parse_bounds(
    start_date: str | None, end_date: str | None
) -> tuple[datetime | None, datetime | None]:
    try:
        start = parse_date_bound(start_date)
        end = parse_date_bound(end_date, end_of_day=True)
    except ValueError:
        raise ValidationError("Dates must use the YYYY-MM-DD or ISO-8601 format")
    if start and end and start > end:
        raise ValidationError("startDate must not be after endDate")
    return start, end


def get_revenue_report(
    start_date: str | None = None,
    end_date: str | None = None,
    fee_rate: Decimal = PLATFORM_FEE_RATE,
) -> dict[str, Any]:
    """
    Revenue of the orders created between ``start_date`` and ``end_date``.

    Each bound is optional and inclusive. A date-only ``end_date`` covers the
    whole day.
    """
    start, end = _parse_bounds(start_date, end_date)

    with get_session() as session:
        stmt = select(Order).order_by(Order.created_at, Order.id)
        if start is not None:
            stmt = stmt.where(Order.created_at >= start)
        if end is not None:
            stmt = stmt.where(Order.created_at <= end)
        orders = session.execute(stmt).scalars().all()

        restaurant_ids = {order.restaurant_id for order in orders}
        names = dict(
            session.execute(
                select(Restaurant.id, Restaurant.name).where(Restaurant.id.in_(restaurant_ids))
            ).all()
        )

        report = summarize_revenue(orders, names, fee_rate)

    logger.info(
        "Revenue report %s..%s: %s order(s), total %s",
        start_date or "-",
        end_date or "-",
        report["totalOrders"],
        report["totalRevenue"],
    )
    return report
