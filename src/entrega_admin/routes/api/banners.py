"""
Banner management API - promotional carousel shown on the storefront.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from entrega_admin.decorators import admin_required
from entrega_shared.schemas import BannerRequest
from entrega_shared.serializers import success_response
from entrega_shared.services import banner_service

banners_bp = Blueprint("admin_banners", __name__)


@banners_bp.get("/banners")
@admin_required
def list_banners():
    return jsonify(success_response(banner_service.list_banners())), HTTPStatus.OK


@banners_bp.post("/banners")
@admin_required
def create_banner():
    payload = BannerRequest.model_validate(request.get_json(silent=True) or {})
    banner_id = banner_service.create_banner(payload)
    return jsonify(success_response({"id": banner_id})), HTTPStatus.CREATED


@banners_bp.put("/banners/<int:banner_id>")
@admin_required
def update_banner(banner_id: int):
    payload = BannerRequest.model_validate(request.get_json(silent=True) or {})
    return jsonify(
        success_response(banner_service.update_banner(banner_id, payload))
    ), HTTPStatus.OK


@banners_bp.delete("/banners/<int:banner_id>")
@admin_required
def delete_banner(banner_id: int):
    banner_service.delete_banner(banner_id)
    return jsonify(success_response(None, "Banner deleted")), HTTPStatus.OK
