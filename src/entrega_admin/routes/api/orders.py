"""
Order management API.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_admin.decorators import admin_required, get_admin
from entrega_shared.logging_config import get_logger
from entrega_shared.schemas import UpdateOrderStatusRequest
from entrega_shared.serializers import success_response
from entrega_shared.services import admin_service

orders_bp = Blueprint("admin_orders", __name__)
logger = get_logger(__name__)


@orders_bp.get("/orders")
@admin_required
def list_orders():
    return jsonify(success_response(admin_service.list_all_orders())), HTTPStatus.OK


@orders_bp.patch("/orders/<int:order_id>/status")
@admin_required
def update_order_status(order_id: int):
    """
    Body:
        {
            "status": "pending" | "confirmed" | "preparing" | "delivering"
                      | "delivered" | "cancelled",
            "adminNotes": str (optional)
        }
    """
    payload = UpdateOrderStatusRequest.model_validate(request.get_json(silent=True) or {})
    order = admin_service.update_order_status(order_id, payload.status, payload.admin_notes)
    logger.info(f"Admin {get_admin().username} moved order {order_id} to {payload.status}")
    return jsonify(success_response(order)), HTTPStatus.OK
