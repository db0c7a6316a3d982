"""
Reports API - revenue by date range and by restaurant.
"""

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from entrega_admin.decorators import admin_required
from entrega_shared.constants import PLATFORM_FEE_RATE
from entrega_shared.schemas import RevenueReportQuery
from entrega_shared.serializers import success_response
from entrega_shared.services import report_service

reports_bp = Blueprint("admin_reports", __name__)


@reports_bp.get("/reports/revenue")
@admin_required
def get_revenue_report():
    """
    Revenue report.

    Query params:
    - startDate: YYYY-MM-DD or ISO timestamp (optional, inclusive)
    - endDate: YYYY-MM-DD or ISO timestamp (optional, inclusive; a date covers the whole day)
    """
    query = RevenueReportQuery.model_validate(request.args.to_dict())
    report = report_service.get_revenue_report(
        query.start_date,
        query.end_date,
        current_app.config.get("PLATFORM_FEE_RATE", PLATFORM_FEE_RATE),
    )
    return jsonify(success_response(report)), HTTPStatus.OK
