"""
Address book API.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_shared.jwt_middleware import get_current_user_id, jwt_required
from entrega_shared.schemas import AddressRequest
from entrega_shared.serializers import success_response
from entrega_shared.services import address_service

addresses_bp = Blueprint("client_addresses", __name__)


@addresses_bp.get("/addresses")
@jwt_required
def list_addresses():
    return jsonify(
        success_response(address_service.list_addresses(get_current_user_id()))
    ), HTTPStatus.OK


@addresses_bp.get("/addresses/default")
@jwt_required
def get_default_address():
    return jsonify(
        success_response(address_service.get_default_address(get_current_user_id()))
    ), HTTPStatus.OK


@addresses_bp.post("/addresses")
@jwt_required
def add_address():
    payload = AddressRequest.model_validate(request.get_json(silent=True) or {})
    address_id = address_service.add_address(get_current_user_id(), payload)
    return jsonify(success_response({"id": address_id})), HTTPStatus.CREATED


@addresses_bp.put("/addresses/<int:address_id>")
@jwt_required
def update_address(address_id: int):
    payload = AddressRequest.model_validate(request.get_json(silent=True) or {})
    return jsonify(
        success_response(address_service.update_address(get_current_user_id(), address_id, payload))
    ), HTTPStatus.OK


@addresses_bp.delete("/addresses/<int:address_id>")
@jwt_required
def delete_address(address_id: int):
    address_service.delete_address(get_current_user_id(), address_id)
    return jsonify(success_response(None, "Address deleted")), HTTPStatus.OK


@addresses_bp.post("/addresses/<int:address_id>/default")
@jwt_required
def set_default_address(address_id: int):
    address_service.set_default_address(get_current_user_id(), address_id)
    return jsonify(success_response(None, "Default address updated")), HTTPStatus.OK
