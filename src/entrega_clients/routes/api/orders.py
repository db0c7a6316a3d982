"""
Orders API - checkout and order history of the authenticated customer.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_shared.jwt_middleware import get_current_user_id, jwt_required
from entrega_shared.schemas import CreateOrderRequest
from entrega_shared.serializers import success_response
from entrega_shared.services import order_service

orders_bp = Blueprint("client_orders", __name__)


@orders_bp.post("/orders")
@jwt_required
def create_order():
    """
    Place an order and empty the cart.

    Body:
        {
            "restaurantId": int,
            "items": [{"productId", "name", "price", "quantity"}],
            "deliveryAddress": str (optional when addressId or a default address exists),
            "addressId": int (optional),
            "paymentMethod": "credit_card" | "debit_card" | "pix" | "cash"
        }
    """
    payload = CreateOrderRequest.model_validate(request.get_json(silent=True) or {})
    user_id = get_current_user_id()
    order_id = order_service.create_order(user_id, payload)
    return jsonify(
        success_response(order_service.get_user_order(user_id, order_id), "Order placed")
    ), HTTPStatus.CREATED


@orders_bp.get("/orders")
@jwt_required
def list_orders():
    return jsonify(
        success_response(order_service.list_user_orders(get_current_user_id()))
    ), HTTPStatus.OK


@orders_bp.get("/orders/<int:order_id>")
@jwt_required
def get_order(order_id: int):
    return jsonify(
        success_response(order_service.get_user_order(get_current_user_id(), order_id))
    ), HTTPStatus.OK
