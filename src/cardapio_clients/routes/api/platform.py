"""Platform administration API."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify

from cardapio_shared.services.platform_service import (
    fetch_platform_overview,
    summarize_overview,
    watch_platform_overview,
)
from cardapio_clients.utils.request_context import get_queries, get_supabase

platform_bp = Blueprint("client_platform", __name__)


@platform_bp.get("/platform/restaurants")
def get_platform_restaurants():
    client = get_supabase()
    queries = get_queries()
    if current_app.config.get("PLATFORM_REFETCH_ENABLED", True):
        watch_platform_overview(client, queries.cache, queries.refetcher)

    rows = fetch_platform_overview(client, queries.cache)
    return jsonify(
        {
            "restaurants": [r.model_dump(mode="json") for r in rows],
            "totals": summarize_overview(rows),
        }
    ), HTTPStatus.OK
