"""
Storefront API - Modular Blueprint Structure

This package organizes the customer API endpoints into logical sub-blueprints.
All endpoints are registered under the main api_bp blueprint.
"""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("client_api", __name__)

# Import all sub-blueprints
from entrega_clients.routes.api.addresses import addresses_bp
from entrega_clients.routes.api.auth import auth_bp
from entrega_clients.routes.api.cart import cart_bp
from entrega_clients.routes.api.orders import orders_bp
from entrega_clients.routes.api.profile import profile_bp
from entrega_clients.routes.api.restaurants import restaurants_bp

# Register all sub-blueprints with the main API blueprint
api_bp.register_blueprint(auth_bp)
api_bp.register_blueprint(restaurants_bp)
api_bp.register_blueprint(cart_bp)
api_bp.register_blueprint(orders_bp)
api_bp.register_blueprint(addresses_bp)
api_bp.register_blueprint(profile_bp)

__all__ = ["api_bp"]
