"""
Platform-wide restaurant overview for the administrative dashboard.

The metrics are aggregated remotely by ``get_platform_restaurants_overview``;
this module only fetches, keeps the cached copy fresh and totals it.
"""

from __future__ import annotations

import logging

from supabase import Client

from cardapio_shared.constants import PLATFORM_REFETCH_SECONDS
from cardapio_shared.query_cache import QueryCache, QueryRefetcher
from cardapio_shared.schemas import PlatformRestaurantOverview
from cardapio_shared.services.query_helpers import cached_query, execute_rows, to_models

logger = logging.getLogger(__name__)

OVERVIEW_RPC = "get_platform_restaurants_overview"
OVERVIEW_KEY = ("platform-restaurants-overview",)


def _read_overview(client: Client) -> list[PlatformRestaurantOverview]:
    rows = execute_rows(client.rpc(OVERVIEW_RPC, {}), OVERVIEW_RPC)
    return to_models(PlatformRestaurantOverview, rows)


def fetch_platform_overview(
    client: Client, cache: QueryCache | None = None
) -> list[PlatformRestaurantOverview]:
    """
    Per-tenant metrics; served from the cache for up to one refetch interval.
    """
    return cached_query(cache, OVERVIEW_KEY, lambda: _read_overview(client), PLATFORM_REFETCH_SECONDS)


def watch_platform_overview(client: Client, cache: QueryCache, refetcher: QueryRefetcher) -> bool:
    """
    Keep the cached overview refreshed every PLATFORM_REFETCH_SECONDS.

    Idempotent: returns False when the refetch task already exists.
    """

    def _refresh() -> None:
        cache.set(OVERVIEW_KEY, _read_overview(client), PLATFORM_REFETCH_SECONDS)

    added = refetcher.add_task(OVERVIEW_RPC, _refresh, PLATFORM_REFETCH_SECONDS)
    if added:
        logger.info("Platform overview refetch every %ss", PLATFORM_REFETCH_SECONDS)
    return added


def summarize_overview(rows: list[PlatformRestaurantOverview]) -> dict[str, float]:
    totals = {
        "restaurants": 0,
        "orders": 0,
        "revenue": 0.0,
        "revenue_30d": 0.0,
        "orders_30d": 0,
        "customers": 0,
        "products": 0,
    }
    for row in rows:
        totals["restaurants"] += 1
        totals["orders"] += row.total_orders
        totals["revenue"] += row.total_revenue
        totals["revenue_30d"] += row.revenue_30d
        totals["orders_30d"] += row.orders_30d
        totals["customers"] += row.total_customers
        totals["products"] += row.total_products
    return totals
