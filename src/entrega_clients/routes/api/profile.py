"""
Profile API.

POST creates the profile and fails when one already exists; PUT creates or
updates it.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_shared.jwt_middleware import get_current_user_id, jwt_required
from entrega_shared.schemas import ProfileRequest
from entrega_shared.serializers import success_response
from entrega_shared.services import profile_service

profile_bp = Blueprint("client_profile", __name__)


@profile_bp.get("/profile")
@jwt_required
def get_profile():
    return jsonify(
        success_response(profile_service.get_profile(get_current_user_id()))
    ), HTTPStatus.OK


@profile_bp.post("/profile")
@jwt_required
def create_profile():
    payload = ProfileRequest.model_validate(request.get_json(silent=True) or {})
    return jsonify(
        success_response(profile_service.create_profile(get_current_user_id(), payload))
    ), HTTPStatus.CREATED


@profile_bp.put("/profile")
@jwt_required
def save_profile():
    payload = ProfileRequest.model_validate(request.get_json(silent=True) or {})
    return jsonify(
        success_response(profile_service.save_profile(get_current_user_id(), payload))
    ), HTTPStatus.OK
