"""
Clients API - Modular Blueprint Structure

This package organizes the clients API endpoints into logical sub-blueprints.
All endpoints are registered under the main api_bp blueprint.
"""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("client_api", __name__)

# Import all sub-blueprints
from cardapio_clients.routes.api.business_hours import business_hours_bp
from cardapio_clients.routes.api.combos import combos_bp
from cardapio_clients.routes.api.loyalty import loyalty_bp
from cardapio_clients.routes.api.menu import menu_bp
from cardapio_clients.routes.api.platform import platform_bp
from cardapio_clients.routes.api.pwa import pwa_bp
from cardapio_clients.routes.api.restaurants import restaurants_bp

# Register all sub-blueprints with the main API blueprint
api_bp.register_blueprint(restaurants_bp)
api_bp.register_blueprint(menu_bp)
api_bp.register_blueprint(combos_bp)
api_bp.register_blueprint(business_hours_bp)
api_bp.register_blueprint(loyalty_bp)
api_bp.register_blueprint(platform_bp)
api_bp.register_blueprint(pwa_bp)

__all__ = ["api_bp"]
