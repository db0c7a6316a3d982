"""
Order service for the storefront.

Checkout turns a list of item lines into an immutable order snapshot. Only the
product ids and quantities of the submitted lines are used: names and unit
prices are resolved here from the caller's cart and the restaurant's catalog,
and the amounts are recomputed with the restaurant's own delivery fee.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from entrega_shared.constants import MAX_ORDER_ITEMS, MONEY_QUANTUM, OrderStatus
from entrega_shared.db import get_session
from entrega_shared.logging_config import LoggerAdapter, get_logger
from entrega_shared.models import Address, CartItem, Order, Product, Restaurant
from entrega_shared.schemas import CreateOrderRequest, OrderItemRequest
from entrega_shared.serializers import serialize_order
from entrega_shared.services.address_service import format_delivery_address
from entrega_shared.services.cart_service import delete_user_cart
from entrega_shared.services.ownership import get_owned, require_user
from entrega_shared.validation import ValidationError

logger = get_logger(__name__)


class OrderValidationError(ValidationError):
    """Checkout payload rejected before anything is written."""

    code = "CHECK_001"


def compute_order_amounts(
    lines: list[dict[str, Any]], delivery_fee: Decimal
) -> tuple[Decimal, Decimal, Decimal]:
    """
    Return ``(subtotal, delivery_fee, total)`` for resolved order lines.

    ``subtotal`` is the sum of ``price * quantity``; ``total`` adds the fee.
    """
    subtotal = sum(
        (Decimal(line["price"]) * line["quantity"] for line in lines), Decimal("0")
    ).quantize(MONEY_QUANTUM)
    fee = Decimal(delivery_fee).quantize(MONEY_QUANTUM)
    return subtotal, fee, subtotal + fee


def _resolve_lines(
    session: Session, user_id: int, restaurant_id: int, items: list[OrderItemRequest]
) -> list[dict[str, Any]]:
    """
    Price each submitted line on the server.

    The product must belong to ``restaurant_id``. The unit price is the one
    captured in the caller's cart for that product, or the catalog price when
    the product is not in the cart. Client-sent names and prices are ignored.
    """
    product_ids = {item.product_id for item in items}
    products = {
        product.id: product
        for product in session.execute(
            select(Product).where(
                Product.id.in_(product_ids), Product.restaurant_id == restaurant_id
            )
        ).scalars()
    }
    cart_prices = {
        row.product_id: row.price
        for row in session.execute(
            select(CartItem).where(
                CartItem.user_id == user_id, CartItem.product_id.in_(product_ids)
            )
        ).scalars()
    }

    lines = []
    for item in items:
        product = products.get(item.product_id)
        if product is None:
            raise OrderValidationError(
                f"Product {item.product_id} is not available at this restaurant"
            )
        price = cart_prices.get(product.id, product.price)
        lines.append(
            {
                "productId": product.id,
                "name": product.name,
                "price": Decimal(price).quantize(MONEY_QUANTUM),
                "quantity": item.quantity,
            }
        )
    return lines


def _snapshot_items(lines: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Frozen copies of the ordered lines; later catalog edits never reach them."""
    return [{**line, "price": float(line["price"])} for line in lines]


def _resolve_delivery_address(
    session: Session, user_id: int, payload: CreateOrderRequest
) -> str:
    if payload.delivery_address:
        return payload.delivery_address

    if payload.address_id is not None:
        address = get_owned(session, Address, payload.address_id, user_id)
        return format_delivery_address(address)

    default = session.execute(
        select(Address).where(Address.user_id == user_id, Address.is_default.is_(True))
    ).scalar_one_or_none()
    if default is None:
        raise OrderValidationError("Select a delivery address", code="CHECK_002")
    return format_delivery_address(default)


def create_order(user_id: int | None, payload: CreateOrderRequest) -> int:
    """
    Place an order for the caller and empty their cart.

    Steps, all in one transaction:
    1. Validate the restaurant and price each line from the cart or catalog.
    2. Recompute subtotal, delivery fee (the restaurant's) and total.
    3. Insert the order as ``pending`` with a snapshot of the lines.
    4. Delete every cart row of the caller, whatever restaurant it belongs to.

    Returns:
        The new order id
    """
    require_user(user_id)
    log = LoggerAdapter(logger, {"user_id": user_id})

    if not payload.items:
        raise OrderValidationError("The order must contain at least one product")
    if len(payload.items) > MAX_ORDER_ITEMS:
        raise OrderValidationError(f"The order cannot contain more than {MAX_ORDER_ITEMS} products")

    with get_session() as session:
        restaurant = session.get(Restaurant, payload.restaurant_id)
        if restaurant is None:
            raise OrderValidationError("Restaurant not found")
        if restaurant.payment_methods and payload.payment_method not in restaurant.payment_methods:
            raise OrderValidationError(
                f"{restaurant.name} does not accept payment method {payload.payment_method}"
            )

        lines = _resolve_lines(session, user_id, restaurant.id, payload.items)
        delivery_address = _resolve_delivery_address(session, user_id, payload)
        subtotal, delivery_fee, total = compute_order_amounts(lines, restaurant.delivery_fee)

        order = Order(
            user_id=user_id,
            restaurant_id=restaurant.id,
            items=_snapshot_items(lines),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=total,
            status=OrderStatus.PENDING.value,
            delivery_address=delivery_address,
            payment_method=payload.payment_method,
        )
        session.add(order)
        session.flush()

        cleared = delete_user_cart(session, user_id)
        log.info(
            "Order %s created for restaurant %s, total %s, %s cart row(s) cleared",
            order.id,
            restaurant.id,
            total,
            cleared,
        )
        return order.id


def list_user_orders(user_id: int | None) -> list[dict[str, Any]]:
    """Orders of the caller, newest first, each with its restaurant summary."""
    require_user(user_id)
    with get_session() as session:
        orders = (
            session.execute(
                select(Order)
                .where(Order.user_id == user_id)
                .order_by(Order.created_at.desc(), Order.id.desc())
            )
            .scalars()
            .all()
        )
        restaurant_ids = {order.restaurant_id for order in orders}
        restaurants = {
            restaurant.id: restaurant
            for restaurant in session.execute(
                select(Restaurant).where(Restaurant.id.in_(restaurant_ids))
            ).scalars()
        }
        return [serialize_order(order, restaurants.get(order.restaurant_id)) for order in orders]


def get_user_order(user_id: int | None, order_id: int) -> dict[str, Any]:
    with get_session() as session:
        order = get_owned(session, Order, order_id, user_id)
        return serialize_order(order, session.get(Restaurant, order.restaurant_id))
