"""
Tenant lookup by slug and the marketplace listing.
"""

from __future__ import annotations

from supabase import Client

from cardapio_shared.constants import (
    RESTAURANT_LIST_STALE_SECONDS,
    RESTAURANT_STALE_SECONDS,
    RestaurantStatus,
)
from cardapio_shared.query_cache import QueryCache
from cardapio_shared.schemas import Restaurant, RestaurantListItem
from cardapio_shared.services.query_helpers import cached_query, execute_rows, to_models
from cardapio_shared.tenant import TenantContext

LIST_COLUMNS = "id, name, slug, logo_url, hero_banner_url, category, address, settings"


def restaurant_key(slug: str | None) -> tuple:
    return ("restaurant", slug)


def fetch_restaurant_by_slug(
    client: Client, slug: str | None, cache: QueryCache | None = None
) -> Restaurant | None:
    """
    Look up an active restaurant by slug.

    An empty slug returns None without touching the network; no match also
    returns None. Remote errors propagate.
    """
    if not slug:
        return None

    def _fetch() -> Restaurant | None:
        rows = execute_rows(
            client.table("restaurants")
            .select("*")
            .eq("slug", slug)
            .eq("status", RestaurantStatus.ACTIVE.value)
            .limit(1),
            "restaurants",
        )
        if not rows:
            return None
        return Restaurant.model_validate(rows[0])

    return cached_query(cache, restaurant_key(slug), _fetch, RESTAURANT_STALE_SECONDS)


def resolve_tenant(
    client: Client, slug: str | None, cache: QueryCache | None = None
) -> TenantContext:
    """Resolve ``slug`` into a TenantContext (not-found is a flag, not an error)."""
    if not slug:
        return TenantContext(slug=slug)
    restaurant = fetch_restaurant_by_slug(client, slug, cache)
    return TenantContext(slug=slug, restaurant=restaurant)


def peek_tenant(cache: QueryCache, slug: str | None) -> TenantContext:
    """Tenant state as currently cached, without issuing a read."""
    return TenantContext.from_result(slug, cache.get_state(restaurant_key(slug)))


def list_restaurants(
    client: Client, category: str | None = None, cache: QueryCache | None = None
) -> list[RestaurantListItem]:
    """Active restaurants for the marketplace, by name; ``"all"`` disables the filter."""
    category_filter = category if category and category != "all" else None

    def _fetch() -> list[RestaurantListItem]:
        query = (
            client.table("restaurants")
            .select(LIST_COLUMNS)
            .eq("status", RestaurantStatus.ACTIVE.value)
        )
        if category_filter:
            query = query.eq("category", category_filter)
        return to_models(RestaurantListItem, execute_rows(query.order("name"), "restaurants"))

    return cached_query(
        cache, ("restaurants", category_filter), _fetch, RESTAURANT_LIST_STALE_SECONDS
    )
