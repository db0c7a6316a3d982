"""
Catalog API - approved restaurants, their products and the active banners.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_shared.schemas import RestaurantFilters
from entrega_shared.serializers import success_response
from entrega_shared.services import banner_service, restaurant_service

restaurants_bp = Blueprint("client_restaurants", __name__)


@restaurants_bp.get("/restaurants")
def list_restaurants():
    """
    Approved restaurants.

    Query params: category, rating, freeDelivery, deliveryTime (fast|medium|slow),
    deliveryFee (free|low|medium), paymentMethod
    """
    filters = RestaurantFilters.model_validate(request.args.to_dict())
    return jsonify(success_response(restaurant_service.list_restaurants(filters))), HTTPStatus.OK


@restaurants_bp.get("/restaurants/<int:restaurant_id>")
def get_restaurant(restaurant_id: int):
    return jsonify(
        success_response(restaurant_service.get_restaurant(restaurant_id))
    ), HTTPStatus.OK


@restaurants_bp.get("/restaurants/<int:restaurant_id>/products")
def list_products(restaurant_id: int):
    return jsonify(
        success_response(restaurant_service.list_products(restaurant_id))
    ), HTTPStatus.OK


@restaurants_bp.get("/banners")
def list_active_banners():
    return jsonify(success_response(banner_service.list_active_banners())), HTTPStatus.OK
