"""
Factory for the admin back-office Flask application.

Admins authenticate with their own token type; storefront tokens are ignored
here.
"""

from __future__ import annotations

import os
from typing import Any

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from entrega_admin.routes.api import api_bp
from entrega_shared.config import load_config, validate_required_env_vars
from entrega_shared.db import init_db, init_engine
from entrega_shared.error_handlers import register_error_handlers
from entrega_shared.jwt_middleware import init_jwt_middleware
from entrega_shared.jwt_service import TOKEN_TYPE_ADMIN
from entrega_shared.logging_config import configure_logging
from entrega_shared.models import Base
from entrega_shared.security_middleware import configure_security_headers

DEFAULT_DEV_ORIGINS = ["http://localhost:5174", "http://127.0.0.1:5174"]


def create_app(overrides: dict[str, Any] | None = None) -> Flask:
    """
    Build and configure the Flask app for the back-office.

    Args:
        overrides: Extra Flask config applied last (e.g. ``{"TESTING": True}``)
    """
    validate_required_env_vars(skip_in_debug=True)

    app = Flask(__name__)
    config = load_config("entrega-admin")

    configure_logging(config.app_name, config.log_level)

    init_engine(config)
    init_db(Base.metadata)

    app.config["SECRET_KEY"] = config.secret_key
    app.config["APP_NAME"] = config.app_name
    app.config["CURRENCY"] = config.currency
    app.config["PLATFORM_FEE_RATE"] = config.platform_fee_rate
    app.config["DEBUG_MODE"] = config.debug_mode
    app.config["DEBUG"] = config.flask_debug
    app.config["JWT_ADMIN_TOKEN_EXPIRES_HOURS"] = config.jwt_admin_token_expires_hours
    app.config.update(overrides or {})

    init_jwt_middleware(app, TOKEN_TYPE_ADMIN)

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

    raw_origins = os.getenv("ADMIN_CORS_ALLOWED_ORIGINS", "")
    allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    if config.debug_mode or not allowed_origins:
        allowed_origins = DEFAULT_DEV_ORIGINS
    CORS(app, resources={r"/api/*": {"origins": allowed_origins}}, supports_credentials=True)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "service": config.app_name}), 200

    return app
