"""
Presentational components: Jinja partials plus the conditions that decide
whether they render anything at all.
"""

from __future__ import annotations

from typing import Any

from flask import current_app, render_template
from markupsafe import Markup

from cardapio_shared.constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_THEME_COLOR,
    DEFAULT_TITLE,
    MANIFEST_SHORT_NAME_LENGTH,
    RESTAURANT_STATUS_BADGES,
    SUBSCRIPTION_STATUS_BADGES,
)
from cardapio_shared.formatting import is_allowed_image_url
from cardapio_shared.query_cache import QueryResult
from cardapio_shared.schemas import Restaurant
from cardapio_shared.services.business_hours_service import build_week_schedule
from cardapio_shared.services.platform_service import summarize_overview
from cardapio_shared.tenant import TenantContext
from cardapio_clients.utils.pwa_install import PWAInstallState

EMPTY = Markup("")


def hero_banner(result: QueryResult) -> Markup:
    """
    Banner image of the restaurant.

    Nothing is rendered while loading or without a (secure) banner URL, so the
    page never flashes an empty banner slot.
    """
    if result.is_loading or result.is_error:
        return EMPTY
    restaurant: Restaurant | None = result.data
    if restaurant is None or not is_allowed_image_url(restaurant.hero_banner_url):
        return EMPTY
    return Markup(
        render_template(
            "components/hero_banner.html",
            banner_url=restaurant.hero_banner_url,
            restaurant_name=restaurant.name,
        )
    )


def pwa_install_button(state: PWAInstallState, variant: str = "outline", size: str = "sm") -> Markup:
    if not state.can_show_install_ui:
        return EMPTY
    return Markup(
        render_template("components/pwa_install_button.html", variant=variant, size=size)
    )


def pwa_install_banner(state: PWAInstallState) -> Markup:
    """Second-visit prompt with a dismiss action."""
    if not state.should_show_second_visit_prompt:
        return EMPTY
    return Markup(render_template("components/pwa_install_banner.html"))


def restaurant_layout(tenant: TenantContext, render_content) -> tuple[str, int]:
    """
    Loading indicator while resolving, not-found view for an unknown slug,
    otherwise the nested content.
    """
    if tenant.is_loading:
        return render_template("components/loading.html"), 200
    if tenant.not_found:
        return render_template("not_found.html", slug=tenant.slug), 404
    return render_content(), 200


def head_meta(restaurant: Restaurant | None) -> dict[str, str]:
    default_favicon = current_app.config.get("DEFAULT_FAVICON_URL", "/static/logo.png")
    if restaurant is None:
        return {
            "title": DEFAULT_TITLE,
            "description": DEFAULT_DESCRIPTION,
            "favicon": default_favicon,
            "theme_color": DEFAULT_THEME_COLOR,
            "app_title": DEFAULT_TITLE,
            "og_image": default_favicon,
            "manifest_url": None,
        }
    return {
        "title": f"{restaurant.name} | Delivery",
        "description": restaurant.description or DEFAULT_DESCRIPTION,
        "favicon": restaurant.logo_url or default_favicon,
        "theme_color": restaurant.primary_color or DEFAULT_THEME_COLOR,
        "app_title": restaurant.name,
        "og_image": restaurant.hero_banner_url or restaurant.logo_url or default_favicon,
        "manifest_url": f"/{restaurant.slug}/manifest.webmanifest",
    }


def build_manifest(restaurant: Restaurant) -> dict[str, Any]:
    color = restaurant.primary_color or DEFAULT_THEME_COLOR
    icon_192 = restaurant.logo_url or "/static/pwa-192x192.png"
    icon_512 = restaurant.logo_url or "/static/pwa-512x512.png"
    return {
        "name": restaurant.name,
        "short_name": restaurant.name[:MANIFEST_SHORT_NAME_LENGTH],
        "description": restaurant.description or "Faça seu pedido",
        "theme_color": color,
        "background_color": color,
        "display": "standalone",
        "orientation": "portrait",
        "start_url": f"/{restaurant.slug}/menu",
        "scope": f"/{restaurant.slug}/",
        "icons": [
            {"src": icon_192, "sizes": "192x192", "type": "image/png"},
            {"src": icon_512, "sizes": "512x512", "type": "image/png"},
            {"src": icon_512, "sizes": "512x512", "type": "image/png", "purpose": "maskable"},
        ],
    }


def business_hours_section(hours, today: int) -> Markup:
    return Markup(
        render_template(
            "components/business_hours.html", week=build_week_schedule(hours, today)
        )
    )


def featured_products_section(products, slug: str) -> Markup:
    if not products:
        return EMPTY
    return Markup(
        render_template("components/featured_products.html", products=products, slug=slug)
    )


def platform_restaurants_panel(result: QueryResult) -> Markup:
    if result.is_loading:
        return Markup(render_template("components/skeleton.html", rows=3))
    if result.is_error:
        message = getattr(result.error, "message", None) or str(result.error)
        return Markup(
            render_template("components/platform_error.html", message=message)
        )
    rows = result.data or []
    return Markup(
        render_template(
            "components/platform_panel.html",
            restaurants=rows,
            totals=summarize_overview(rows),
            status_badges=RESTAURANT_STATUS_BADGES,
            plan_badges=SUBSCRIPTION_STATUS_BADGES,
        )
    )
