"""
Cart API.

All endpoints act on the cart of the authenticated customer; cart rows of
other customers answer 404.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_shared.jwt_middleware import get_current_user_id, jwt_required
from entrega_shared.schemas import AddToCartRequest, UpdateCartQuantityRequest
from entrega_shared.serializers import success_response
from entrega_shared.services import cart_service

cart_bp = Blueprint("client_cart", __name__)


@cart_bp.get("/cart")
@jwt_required
def get_cart():
    return jsonify(success_response(cart_service.get_cart(get_current_user_id()))), HTTPStatus.OK


@cart_bp.get("/cart/summary")
@jwt_required
def get_cart_summary():
    return jsonify(
        success_response(cart_service.get_cart_summary(get_current_user_id()))
    ), HTTPStatus.OK


@cart_bp.post("/cart/items")
@jwt_required
def add_to_cart():
    """
    Add a product to the cart. Adding a product already in the cart increments
    its quantity.

    Body: {"productId": int, "restaurantId": int, "quantity": int, "price": number}
    """
    payload = AddToCartRequest.model_validate(request.get_json(silent=True) or {})
    item_id = cart_service.add_to_cart(
        get_current_user_id(),
        payload.product_id,
        payload.restaurant_id,
        payload.quantity,
        payload.price,
    )
    return jsonify(success_response({"id": item_id})), HTTPStatus.CREATED


@cart_bp.patch("/cart/items/<int:item_id>")
@jwt_required
def update_quantity(item_id: int):
    payload = UpdateCartQuantityRequest.model_validate(request.get_json(silent=True) or {})
    cart_service.update_quantity(get_current_user_id(), item_id, payload.quantity)
    return jsonify(success_response(None, "Cart updated")), HTTPStatus.OK


@cart_bp.delete("/cart/items/<int:item_id>")
@jwt_required
def remove_from_cart(item_id: int):
    cart_service.remove_from_cart(get_current_user_id(), item_id)
    return jsonify(success_response(None, "Item removed")), HTTPStatus.OK


@cart_bp.delete("/cart")
@jwt_required
def clear_cart():
    removed = cart_service.clear_cart(get_current_user_id())
    return jsonify(success_response({"removed": removed})), HTTPStatus.OK
