"""
Back-office API - Modular Blueprint Structure

Every endpoint except ``POST /auth/login`` requires an admin token.
"""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("admin_api", __name__)

# Import all sub-blueprints
from entrega_admin.routes.api.admins import admins_bp
from entrega_admin.routes.api.auth import auth_bp
from entrega_admin.routes.api.banners import banners_bp
from entrega_admin.routes.api.dashboard import dashboard_bp
from entrega_admin.routes.api.orders import orders_bp
from entrega_admin.routes.api.reports import reports_bp
from entrega_admin.routes.api.restaurants import restaurants_bp
from entrega_admin.routes.api.users import users_bp

# Register all sub-blueprints with the main API blueprint
api_bp.register_blueprint(auth_bp)
api_bp.register_blueprint(dashboard_bp)
api_bp.register_blueprint(restaurants_bp)
api_bp.register_blueprint(orders_bp)
api_bp.register_blueprint(users_bp)
api_bp.register_blueprint(banners_bp)
api_bp.register_blueprint(reports_bp)
api_bp.register_blueprint(admins_bp)

__all__ = ["api_bp"]
