"""
Centralized error handlers for Flask applications.
"""

from http import HTTPStatus

from flask import Flask, jsonify
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException

from entrega_shared.errors import DomainError, NotFoundOrUnauthorizedError
from entrega_shared.logging_config import get_logger
from entrega_shared.serializers import error_response

logger = get_logger(__name__)


def register_error_handlers(app: Flask) -> None:
    """
    Register centralized error handlers for the Flask app.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, NotFoundOrUnauthorizedError):
            logger.warning(f"Rejected access: {e}")
        else:
            logger.info(f"{type(e).__name__}: {e}")
        return jsonify(error_response(e.message, code=e.code)), e.status

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_validation_error(e: PydanticValidationError):
        logger.warning(f"Pydantic validation error: {e}")
        details = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()
        ]
        return jsonify(
            error_response("Invalid data", {"details": details}, code="VALID_001")
        ), HTTPStatus.BAD_REQUEST

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e: IntegrityError):
        logger.warning(f"Integrity error: {e.orig}")
        return jsonify(
            error_response("Conflicting data", code="CONFLICT_001")
        ), HTTPStatus.CONFLICT

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e: SQLAlchemyError):
        logger.error(f"Database error: {e}", exc_info=True)
        return jsonify(
            error_response("Database error", code="SYSTEM_001")
        ), HTTPStatus.INTERNAL_SERVER_ERROR

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        logger.warning(f"HTTP exception {e.code}: {e.description}")
        return jsonify(error_response(e.description or str(e))), e.code

    @app.errorhandler(Exception)
    def handle_generic_exception(e: Exception):
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify(
            error_response("Internal server error", code="SYSTEM_001")
        ), HTTPStatus.INTERNAL_SERVER_ERROR
