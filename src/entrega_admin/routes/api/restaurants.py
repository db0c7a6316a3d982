"""
Restaurant moderation API.

Deleting a restaurant also deletes its products and is limited to the
``admin`` and ``super_admin`` roles.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_admin.decorators import admin_required, get_admin, role_required
from entrega_shared.constants import AdminRole
from entrega_shared.logging_config import get_logger
from entrega_shared.schemas import UpdateRestaurantRequest, UpdateRestaurantStatusRequest
from entrega_shared.serializers import success_response
from entrega_shared.services import restaurant_service

restaurants_bp = Blueprint("admin_restaurants", __name__)
logger = get_logger(__name__)


@restaurants_bp.get("/restaurants")
@admin_required
def list_restaurants():
    return jsonify(success_response(restaurant_service.list_all_restaurants())), HTTPStatus.OK


@restaurants_bp.patch("/restaurants/<int:restaurant_id>/status")
@admin_required
def update_restaurant_status(restaurant_id: int):
    """Body: {"status": "pending" | "approved" | "rejected", "adminNotes": str?}"""
    payload = UpdateRestaurantStatusRequest.model_validate(request.get_json(silent=True) or {})
    restaurant = restaurant_service.update_restaurant_status(
        restaurant_id, payload.status, payload.admin_notes
    )
    logger.info(f"Admin {get_admin().username} set restaurant {restaurant_id} to {payload.status}")
    return jsonify(success_response(restaurant)), HTTPStatus.OK


@restaurants_bp.put("/restaurants/<int:restaurant_id>")
@admin_required
def update_restaurant(restaurant_id: int):
    payload = UpdateRestaurantRequest.model_validate(request.get_json(silent=True) or {})
    return jsonify(
        success_response(restaurant_service.update_restaurant(restaurant_id, payload))
    ), HTTPStatus.OK


@restaurants_bp.delete("/restaurants/<int:restaurant_id>")
@role_required([AdminRole.ADMIN.value])
def delete_restaurant(restaurant_id: int):
    restaurant_service.delete_restaurant(restaurant_id)
    logger.info(f"Admin {get_admin().username} deleted restaurant {restaurant_id}")
    return jsonify(success_response(None, "Restaurant deleted")), HTTPStatus.OK
