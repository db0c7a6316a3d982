"""
Serializers for consistent API responses.

Field names follow the camelCase shape the storefront and back-office
clients already consume.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from entrega_shared.constants import UNKNOWN_PRODUCT_NAME
from entrega_shared.models import (
    Address,
    Admin,
    Banner,
    CartItem,
    Order,
    Product,
    Restaurant,
    User,
    UserProfile,
)


def _safe_float(value) -> float:
    if value is None:
        return 0.0
    return float(value)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def serialize_user(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "createdAt": _iso(user.created_at),
    }


def serialize_profile(profile: UserProfile | None) -> dict[str, Any] | None:
    if profile is None:
        return None
    return {
        "id": profile.id,
        "userId": profile.user_id,
        "fullName": profile.full_name,
        "birthDate": profile.birth_date,
        "cpf": profile.cpf,
        "phone": profile.phone,
    }


def serialize_address(address: Address) -> dict[str, Any]:
    return {
        "id": address.id,
        "userId": address.user_id,
        "street": address.street,
        "number": address.number,
        "complement": address.complement,
        "neighborhood": address.neighborhood,
        "city": address.city,
        "state": address.state,
        "zipCode": address.zip_code,
        "label": address.label,
        "isDefault": address.is_default,
    }


def serialize_restaurant_summary(restaurant: Restaurant | None) -> dict[str, Any] | None:
    if restaurant is None:
        return None
    return {
        "id": restaurant.id,
        "name": restaurant.name,
        "image": restaurant.image,
        "deliveryFee": _safe_float(restaurant.delivery_fee),
        "deliveryTime": restaurant.delivery_time,
    }


def serialize_restaurant(restaurant: Restaurant) -> dict[str, Any]:
    return {
        "id": restaurant.id,
        "name": restaurant.name,
        "description": restaurant.description,
        "image": restaurant.image,
        "category": restaurant.category,
        "rating": _safe_float(restaurant.rating),
        "deliveryTime": restaurant.delivery_time,
        "deliveryFee": _safe_float(restaurant.delivery_fee),
        "minimumOrder": _safe_float(restaurant.minimum_order),
        "isOpen": restaurant.is_open,
        "paymentMethods": list(restaurant.payment_methods or []),
        "status": restaurant.status,
        "ownerId": restaurant.owner_id,
        "address": restaurant.address,
        "phone": restaurant.phone,
        "cnpj": restaurant.cnpj,
        "adminNotes": restaurant.admin_notes,
    }


def serialize_product(product: Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "restaurantId": product.restaurant_id,
        "name": product.name,
        "description": product.description,
        "price": _safe_float(product.price),
        "image": product.image,
        "category": product.category,
        "available": product.available,
    }


def serialize_cart_item(
    item: CartItem, product: Product | None = None, restaurant: Restaurant | None = None
) -> dict[str, Any]:
    return {
        "id": item.id,
        "userId": item.user_id,
        "productId": item.product_id,
        "restaurantId": item.restaurant_id,
        "quantity": item.quantity,
        "price": _safe_float(item.price),
        "name": product.name if product else UNKNOWN_PRODUCT_NAME,
        "restaurant": serialize_restaurant_summary(restaurant),
    }


def serialize_order(order: Order, restaurant: Restaurant | None = None) -> dict[str, Any]:
    data = {
        "id": order.id,
        "userId": order.user_id,
        "restaurantId": order.restaurant_id,
        "items": [dict(line) for line in order.items],
        "subtotal": _safe_float(order.subtotal),
        "deliveryFee": _safe_float(order.delivery_fee),
        "total": _safe_float(order.total),
        "status": order.status,
        "deliveryAddress": order.delivery_address,
        "paymentMethod": order.payment_method,
        "adminNotes": order.admin_notes,
        "createdAt": _iso(order.created_at),
        "updatedAt": _iso(order.updated_at),
    }
    if restaurant is not None:
        data["restaurant"] = serialize_restaurant_summary(restaurant)
    return data


def serialize_banner(banner: Banner) -> dict[str, Any]:
    return {
        "id": banner.id,
        "title": banner.title,
        "subtitle": banner.subtitle,
        "image": banner.image,
        "color": banner.color,
        "isActive": banner.is_active,
        "order": banner.order,
    }


def serialize_admin(admin: Admin) -> dict[str, Any]:
    return {
        "id": admin.id,
        "username": admin.username,
        "name": admin.name,
        "role": admin.role,
    }


def money(value: Decimal) -> float:
    """Render a Decimal amount for JSON output."""
    return _safe_float(value)


def success_response(data: Any, message: str | None = None) -> dict[str, Any]:
    """Create a standardized success response."""
    response = {"status": "success", "data": data, "error": None}
    if message:
        response["message"] = message
    return response


def error_response(
    error: str, details: dict[str, Any] | None = None, code: str | None = None
) -> dict[str, Any]:
    """Create a standardized error response."""
    response = {"status": "error", "data": None, "error": error}
    if code:
        response["code"] = code
    if details:
        response["details"] = details
    return response
