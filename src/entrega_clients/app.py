"""
Factory for the customer-facing Flask application.

Uses JWT for authentication instead of server-side sessions.
"""

from __future__ import annotations

import os
from typing import Any

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from entrega_clients.routes.api import api_bp
from entrega_shared.config import load_config, validate_required_env_vars
from entrega_shared.db import init_db, init_engine
from entrega_shared.error_handlers import register_error_handlers
from entrega_shared.jwt_middleware import init_jwt_middleware
from entrega_shared.jwt_service import TOKEN_TYPE_ACCESS
from entrega_shared.logging_config import configure_logging
from entrega_shared.models import Base
from entrega_shared.security_middleware import configure_security_headers

DEFAULT_DEV_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


def _allowed_origins(debug_mode: bool) -> list[str]:
    raw_origins = os.getenv("CORS_ALLOWED_ORIGINS", "")
    allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    if debug_mode or not allowed_origins:
        return DEFAULT_DEV_ORIGINS
    return allowed_origins


def create_app(overrides: dict[str, Any] | None = None) -> Flask:
    """
    Build and configure the Flask app for customers.

    Args:
        overrides: Extra Flask config applied last (e.g. ``{"TESTING": True}``)
    """
    # Validate all required environment variables (fail-fast)
    validate_required_env_vars(skip_in_debug=True)

    app = Flask(__name__)
    config = load_config("entrega-clients")

    configure_logging(config.app_name, config.log_level)

    # Initialize database engine first (before any DB queries)
    init_engine(config)
    init_db(Base.metadata)

    app.config["SECRET_KEY"] = config.secret_key
    app.config["APP_NAME"] = config.app_name
    app.config["CURRENCY"] = config.currency
    app.config["DEBUG_MODE"] = config.debug_mode
    app.config["DEBUG"] = config.flask_debug
    app.config["JWT_ACCESS_TOKEN_EXPIRES_HOURS"] = config.jwt_access_token_expires_hours
    app.config.update(overrides or {})

    init_jwt_middleware(app, TOKEN_TYPE_ACCESS)

    configure_security_headers(app)
    register_error_handlers(app)

    num_proxies = int(os.getenv("NUM_PROXIES", "0"))
    if num_proxies > 0:
        app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_for=num_proxies,
            x_proto=num_proxies,
            x_host=num_proxies,
            x_port=num_proxies,
        )

    app.register_blueprint(api_bp, url_prefix="/api")

    CORS(
        app,
        resources={r"/api/*": {"origins": _allowed_origins(config.debug_mode)}},
        supports_credentials=True,
    )

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "service": config.app_name}), 200

    return app
