"""
Restaurant catalog and moderation service.

Storefront reads only see approved restaurants; the back-office sees every
restaurant and moves them between ``pending``, ``approved`` and ``rejected``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import delete, select

from entrega_shared.constants import (
    FAST_DELIVERY_MAX_MINUTES,
    LOW_DELIVERY_FEE_MAX,
    MEDIUM_DELIVERY_FEE_MAX,
    MEDIUM_DELIVERY_MAX_MINUTES,
    RestaurantStatus,
)
from entrega_shared.db import get_session
from entrega_shared.errors import NotFoundOrUnauthorizedError
from entrega_shared.logging_config import get_logger
from entrega_shared.models import Product, Restaurant
from entrega_shared.schemas import RestaurantFilters, UpdateRestaurantRequest
from entrega_shared.serializers import serialize_product, serialize_restaurant
from entrega_shared.validation import ValidationError, validate_money

logger = get_logger(__name__)


def _matches_delivery_time(restaurant: Restaurant, bucket: str) -> bool:
    minutes = restaurant.delivery_minutes
    if minutes is None:
        return False
    if bucket == "fast":
        return minutes <= FAST_DELIVERY_MAX_MINUTES
    if bucket == "medium":
        return FAST_DELIVERY_MAX_MINUTES <= minutes <= MEDIUM_DELIVERY_MAX_MINUTES
    return minutes > MEDIUM_DELIVERY_MAX_MINUTES


def _matches_delivery_fee(restaurant: Restaurant, bucket: str) -> bool:
    fee = Decimal(restaurant.delivery_fee)
    if bucket == "free":
        return fee == 0
    if bucket == "low":
        return fee <= LOW_DELIVERY_FEE_MAX
    return LOW_DELIVERY_FEE_MAX <= fee <= MEDIUM_DELIVERY_FEE_MAX


def _matches(restaurant: Restaurant, filters: RestaurantFilters) -> bool:
    if filters.category and restaurant.category != filters.category:
        return False
    if filters.rating and Decimal(restaurant.rating) < Decimal(str(filters.rating)):
        return False
    if filters.free_delivery and Decimal(restaurant.delivery_fee) > 0:
        return False
    if filters.delivery_time and not _matches_delivery_time(restaurant, filters.delivery_time):
        return False
    if filters.delivery_fee and not _matches_delivery_fee(restaurant, filters.delivery_fee):
        return False
    # Restaurants without a declared list are not excluded
    if filters.payment_method and restaurant.payment_methods:
        if filters.payment_method not in restaurant.payment_methods:
            return False
    return True


def list_restaurants(filters: RestaurantFilters | None = None) -> list[dict[str, Any]]:
    """Approved restaurants matching every filter that is set."""
    filters = filters or RestaurantFilters()
    with get_session() as session:
        restaurants = session.execute(
            select(Restaurant)
            .where(Restaurant.status == RestaurantStatus.APPROVED.value)
            .order_by(Restaurant.id)
        ).scalars()
        return [serialize_restaurant(r) for r in restaurants if _matches(r, filters)]


def get_restaurant(restaurant_id: int) -> dict[str, Any]:
    with get_session() as session:
        restaurant = session.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise NotFoundOrUnauthorizedError("Restaurant")
        return serialize_restaurant(restaurant)


def list_products(restaurant_id: int) -> list[dict[str, Any]]:
    with get_session() as session:
        products = session.execute(
            select(Product).where(Product.restaurant_id == restaurant_id).order_by(Product.id)
        ).scalars()
        return [serialize_product(product) for product in products]


def list_all_restaurants() -> list[dict[str, Any]]:
    with get_session() as session:
        restaurants = session.execute(select(Restaurant).order_by(Restaurant.id)).scalars()
        return [serialize_restaurant(restaurant) for restaurant in restaurants]


def update_restaurant_status(
    restaurant_id: int, status: str, admin_notes: str | None = None
) -> dict[str, Any]:
    """Approve, reject or return a restaurant to moderation."""
    if status not in RestaurantStatus.all_values():
        allowed = ", ".join(sorted(RestaurantStatus.all_values()))
        raise ValidationError(f"Invalid restaurant status. Allowed values: {allowed}")

    with get_session() as session:
        restaurant = session.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise NotFoundOrUnauthorizedError("Restaurant")
        previous = restaurant.status
        restaurant.status = status
        if admin_notes is not None:
            restaurant.admin_notes = admin_notes
        logger.info("Restaurant %s status %s -> %s", restaurant_id, previous, status)
        return serialize_restaurant(restaurant)


def update_restaurant(restaurant_id: int, payload: UpdateRestaurantRequest) -> dict[str, Any]:
    with get_session() as session:
        restaurant = session.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise NotFoundOrUnauthorizedError("Restaurant")

        restaurant.name = payload.name
        restaurant.description = payload.description
        restaurant.category = payload.category
        restaurant.delivery_time = payload.delivery_time
        restaurant.delivery_fee = validate_money(payload.delivery_fee, "deliveryFee")
        restaurant.minimum_order = validate_money(payload.minimum_order, "minimumOrder")
        restaurant.is_open = payload.is_open
        restaurant.address = payload.address
        restaurant.phone = payload.phone
        if payload.payment_methods is not None:
            restaurant.payment_methods = payload.payment_methods
        session.flush()
        logger.info("Restaurant %s updated", restaurant_id)
        return serialize_restaurant(restaurant)


def delete_restaurant(restaurant_id: int) -> None:
    """
    Delete a restaurant and its products. Orders keep their ``restaurant_id``
    and stay in the revenue totals.
    """
    with get_session() as session:
        restaurant = session.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise NotFoundOrUnauthorizedError("Restaurant")
        removed = session.execute(delete(Product).where(Product.restaurant_id == restaurant_id))
        session.expire(restaurant, ["products"])
        session.delete(restaurant)
        logger.info(
            "Deleted restaurant %s with %s product(s)", restaurant_id, removed.rowcount or 0
        )
