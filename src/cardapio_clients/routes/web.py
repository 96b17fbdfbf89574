"""
Customer facing web views rendered via Jinja templates.
"""

from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify, render_template, request
from postgrest.exceptions import APIError

from cardapio_shared.constants import PLATFORM_REFETCH_SECONDS
from cardapio_shared.datetime_utils import local_now, sunday_first_weekday, utcnow
from cardapio_shared.query_cache import QueryResult
from cardapio_shared.services.business_hours_service import (
    compute_open_status,
    fetch_business_hours,
)
from cardapio_shared.services.menu_service import (
    fetch_categories,
    fetch_featured_products,
    fetch_products,
    group_products_by_category,
)
from cardapio_shared.services.platform_service import (
    fetch_platform_overview,
    watch_platform_overview,
)
from cardapio_shared.services.restaurant_service import list_restaurants, restaurant_key
from cardapio_clients.components import build_manifest, head_meta, restaurant_layout
from cardapio_clients.utils.pwa_install import apply_cookie_updates, read_install_state
from cardapio_clients.utils.request_context import (
    get_queries,
    get_supabase,
    load_tenant,
    with_tenant,
)

web_bp = Blueprint("client_web", __name__)


@web_bp.before_request
def load_install_state():
    g.pwa_state = read_install_state(request.cookies, utcnow())


@web_bp.after_request
def store_install_state(response):
    state = g.get("pwa_state")
    if state is not None and state.cookie_updates:
        apply_cookie_updates(response, state.cookie_updates)
    return response


def _restaurant_now():
    return local_now(current_app.config.get("RESTAURANT_TIMEZONE"))


@web_bp.get("/")
def marketplace():
    """Active restaurants with their open/closed badge."""
    category = request.args.get("category") or None
    client = get_supabase()
    cache = get_queries().cache
    now = _restaurant_now()

    cards = []
    for restaurant in list_restaurants(client, category, cache):
        hours = fetch_business_hours(client, restaurant.id, cache)
        cards.append(
            {
                "restaurant": restaurant,
                "status": compute_open_status(hours, restaurant.settings, now),
            }
        )

    return render_template(
        "marketplace.html",
        cards=cards,
        category=category or "all",
        meta=head_meta(None),
        pwa_state=g.pwa_state,
    )


@web_bp.get("/<slug>/")
def restaurant_home(slug: str):
    tenant = load_tenant(slug)

    def _content():
        client = get_supabase()
        cache = get_queries().cache
        now = _restaurant_now()
        hours = fetch_business_hours(client, tenant.restaurant_id, cache)
        return render_template(
            "restaurant_home.html",
            restaurant=tenant.restaurant,
            restaurant_state=cache.get_state(restaurant_key(slug)),
            hours=hours,
            today=sunday_first_weekday(now),
            open_status=compute_open_status(hours, tenant.settings, now),
            featured=fetch_featured_products(client, tenant, cache=cache),
            meta=head_meta(tenant.restaurant),
            pwa_state=g.pwa_state,
        )

    return restaurant_layout(tenant, _content)


@web_bp.get("/<slug>/menu")
def restaurant_menu(slug: str):
    tenant = load_tenant(slug)
    category_id = request.args.get("category") or None

    def _content():
        client = get_supabase()
        cache = get_queries().cache
        categories = fetch_categories(client, tenant, cache)
        products = fetch_products(client, tenant, category_id, cache)
        hours = fetch_business_hours(client, tenant.restaurant_id, cache)
        return render_template(
            "menu.html",
            restaurant=tenant.restaurant,
            restaurant_state=cache.get_state(restaurant_key(slug)),
            categories=categories,
            selected_category=category_id,
            sections=group_products_by_category(categories, products),
            open_status=compute_open_status(hours, tenant.settings, _restaurant_now()),
            meta=head_meta(tenant.restaurant),
            pwa_state=g.pwa_state,
        )

    return restaurant_layout(tenant, _content)


@web_bp.get("/<slug>/manifest.webmanifest")
@with_tenant
def restaurant_manifest(tenant):
    response = jsonify(build_manifest(tenant.restaurant))
    response.mimetype = "application/manifest+json"
    return response


@web_bp.get("/platform/restaurants")
def platform_restaurants():
    """Administrative overview of every tenant, refreshed in the background."""
    client = get_supabase()
    queries = get_queries()
    if current_app.config.get("PLATFORM_REFETCH_ENABLED", True):
        watch_platform_overview(client, queries.cache, queries.refetcher)

    try:
        result = QueryResult.success(fetch_platform_overview(client, queries.cache))
    except APIError as exc:
        current_app.logger.error(f"Platform overview failed: {exc.message}")
        result = QueryResult.failure(exc)

    return render_template(
        "platform_restaurants.html",
        result=result,
        refetch_status=queries.refetcher.get_status(),
        refresh_seconds=PLATFORM_REFETCH_SECONDS,
        meta=head_meta(None),
        pwa_state=g.pwa_state,
    )
