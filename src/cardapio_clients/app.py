"""
Factory for the customer-facing Flask application.

All data is read from the hosted Supabase project; authentication and
sessions are owned by Supabase and not handled here.
"""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from cardapio_shared.config import AppConfig, load_config, validate_required_env_vars
from cardapio_shared.error_handlers import register_error_handlers
from cardapio_shared.extensions import QueryState
from cardapio_shared.extensions import csrf as csrf_protection
from cardapio_shared.formatting import format_phone_display, format_price, whatsapp_link
from cardapio_shared.logging_config import configure_logging
from cardapio_shared.supabase.client import SupabaseClientFactory
from cardapio_clients import components
from cardapio_clients.routes.api import api_bp
from cardapio_clients.routes.web import web_bp


def create_app(
    config: AppConfig | None = None,
    supabase_client=None,
    queries: QueryState | None = None,
) -> Flask:
    """
    Build and configure the Flask app for clients.

    ``supabase_client`` and ``queries`` replace the defaults (anon Supabase
    client, fresh cache and refetcher), mainly for tests.
    """
    if config is None:
        validate_required_env_vars(skip_in_debug=True)
        config = load_config("cardapio-clients")

    app = Flask(
        __name__,
        template_folder="templates",
        static_folder="static",
    )

    configure_logging(config.app_name, config.log_level)

    app.config["SECRET_KEY"] = config.secret_key
    app.config["APP_NAME"] = config.app_name
    app.config["RESTAURANT_TIMEZONE"] = config.restaurant_timezone
    app.config["DEFAULT_FAVICON_URL"] = config.default_favicon_url
    app.config["PLATFORM_REFETCH_ENABLED"] = config.platform_refetch_enabled
    app.config["DEBUG_MODE"] = config.debug_mode
    app.config["DEBUG"] = config.flask_debug

    # CSRF Protection configuration
    app.config["WTF_CSRF_ENABLED"] = True
    app.config["WTF_CSRF_TIME_LIMIT"] = 3600  # 1 hour CSRF token validity

    app.extensions["supabase_client"] = supabase_client or SupabaseClientFactory.get_client(config)
    queries = queries or QueryState()
    queries.init_app(app)

    register_error_handlers(app)

    if config.num_proxies > 0:
        app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_for=config.num_proxies,
            x_proto=config.num_proxies,
            x_host=config.num_proxies,
            x_port=config.num_proxies,
        )

    # JSON API is cookie-less apart from the PWA signals
    csrf_protection.exempt(api_bp)

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(web_bp)

    allowed_origins = config.allowed_origins
    if config.debug_mode or not allowed_origins:
        allowed_origins = [
            "http://localhost:5000",
            "http://127.0.0.1:5000",
        ]
    CORS(
        app,
        resources={r"/api/*": {"origins": allowed_origins, "supports_credentials": True}},
    )

    csrf_protection.init_app(app)

    app.jinja_env.filters["price"] = format_price
    app.jinja_env.filters["phone"] = format_phone_display
    app.jinja_env.filters["whatsapp"] = whatsapp_link
    app.jinja_env.globals.update(
        hero_banner=components.hero_banner,
        pwa_install_button=components.pwa_install_button,
        pwa_install_banner=components.pwa_install_banner,
        business_hours_section=components.business_hours_section,
        featured_products_section=components.featured_products_section,
        platform_restaurants_panel=components.platform_restaurants_panel,
    )

    @app.context_processor
    def inject_globals():
        return {
            "app_name": config.app_name,
            "current_year": datetime.now(timezone.utc).year,
            "debug_mode": config.debug_mode,
        }

    @app.route("/health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "service": "cardapio-clients",
                "refetch_tasks": queries.refetcher.get_status(),
            }
        ), 200

    if config.platform_refetch_enabled:
        queries.refetcher.start()

    return app
