"""
Cart service.

One row per (user, product): adding a product that is already in the cart
increments the existing row instead of inserting a duplicate.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from entrega_shared.constants import MAX_CART_QUANTITY, MONEY_QUANTUM
from entrega_shared.db import get_session
from entrega_shared.logging_config import get_logger
from entrega_shared.models import CartItem, Product, Restaurant
from entrega_shared.serializers import money, serialize_cart_item
from entrega_shared.services.ownership import get_owned, require_user
from entrega_shared.validation import ValidationError

logger = get_logger(__name__)


def _user_items(session: Session, user_id: int) -> list[CartItem]:
    return list(
        session.execute(select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.id))
        .scalars()
        .all()
    )


def delete_user_cart(session: Session, user_id: int) -> int:
    """Delete every cart row of ``user_id`` inside an open session."""
    result = session.execute(delete(CartItem).where(CartItem.user_id == user_id))
    return result.rowcount or 0


def get_cart(user_id: int | None) -> list[dict[str, Any]]:
    """Cart rows of the caller with product name and restaurant summary."""
    require_user(user_id)
    with get_session() as session:
        items = _user_items(session, user_id)
        products = {
            product.id: product
            for product in session.execute(
                select(Product).where(Product.id.in_({item.product_id for item in items}))
            ).scalars()
        }
        restaurants = {
            restaurant.id: restaurant
            for restaurant in session.execute(
                select(Restaurant).where(
                    Restaurant.id.in_({item.restaurant_id for item in items})
                )
            ).scalars()
        }
        return [
            serialize_cart_item(
                item, products.get(item.product_id), restaurants.get(item.restaurant_id)
            )
            for item in items
        ]


def get_cart_summary(user_id: int | None) -> dict[str, Any]:
    """
    Totals shown before checkout. The delivery fee is the one of the
    restaurant of the first cart row.
    """
    require_user(user_id)
    with get_session() as session:
        items = _user_items(session, user_id)
        subtotal = sum((item.line_total for item in items), Decimal("0"))
        delivery_fee = Decimal("0")
        restaurant_id = None
        if items:
            restaurant_id = items[0].restaurant_id
            restaurant = session.get(Restaurant, restaurant_id)
            if restaurant is not None:
                delivery_fee = Decimal(restaurant.delivery_fee)
        return {
            "restaurantId": restaurant_id,
            "itemCount": sum(item.quantity for item in items),
            "subtotal": money(subtotal),
            "deliveryFee": money(delivery_fee),
            "total": money(subtotal + delivery_fee),
        }


def add_to_cart(
    user_id: int | None,
    product_id: int,
    restaurant_id: int,
    quantity: int,
    price: Decimal,
) -> int:
    """
    Add ``quantity`` units of a product to the caller's cart.

    An existing row for the product has its quantity incremented and keeps the
    price captured when it was first added. Returns the cart row id.
    """
    require_user(user_id)
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1", code="CART_001")

    with get_session() as session:
        existing = session.execute(
            select(CartItem).where(CartItem.user_id == user_id, CartItem.product_id == product_id)
        ).scalar_one_or_none()

        if existing is not None:
            new_quantity = existing.quantity + quantity
            if new_quantity > MAX_CART_QUANTITY:
                raise ValidationError(
                    f"Quantity cannot exceed {MAX_CART_QUANTITY}", code="CART_001"
                )
            existing.quantity = new_quantity
            logger.info(
                "User %s cart item %s quantity -> %s", user_id, existing.id, existing.quantity
            )
            return existing.id

        if quantity > MAX_CART_QUANTITY:
            raise ValidationError(f"Quantity cannot exceed {MAX_CART_QUANTITY}", code="CART_001")

        item = CartItem(
            user_id=user_id,
            product_id=product_id,
            restaurant_id=restaurant_id,
            quantity=quantity,
            price=Decimal(price).quantize(MONEY_QUANTUM),
        )
        session.add(item)
        session.flush()
        logger.info("User %s added product %s to cart", user_id, product_id)
        return item.id


def update_quantity(user_id: int | None, item_id: int, quantity: int) -> None:
    """
    Set the quantity of a cart row. A quantity of zero or less removes the row.
    """
    with get_session() as session:
        item = get_owned(session, CartItem, item_id, user_id)
        if quantity <= 0:
            session.delete(item)
            logger.info("User %s removed cart item %s (quantity %s)", user_id, item_id, quantity)
            return
        if quantity > MAX_CART_QUANTITY:
            raise ValidationError(f"Quantity cannot exceed {MAX_CART_QUANTITY}", code="CART_001")
        item.quantity = quantity


def remove_from_cart(user_id: int | None, item_id: int) -> None:
    with get_session() as session:
        item = get_owned(session, CartItem, item_id, user_id)
        session.delete(item)


def clear_cart(user_id: int | None) -> int:
    require_user(user_id)
    with get_session() as session:
        removed = delete_user_cart(session, user_id)
        logger.info("User %s cleared %s cart item(s)", user_id, removed)
        return removed
