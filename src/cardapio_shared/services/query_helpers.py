"""
Helpers shared by the resource fetchers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from postgrest.exceptions import APIError
from pydantic import BaseModel

from cardapio_shared.query_cache import QueryCache, QueryKey

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def cached_query(
    cache: QueryCache | None,
    key: QueryKey,
    fetcher: Callable[[], Any],
    stale_time: float = 0,
) -> Any:
    """Run ``fetcher`` through the cache when one is given."""
    if cache is None:
        return fetcher()
    return cache.fetch(key, fetcher, stale_time)


def execute_rows(query, source: str) -> list[dict[str, Any]]:
    """
    Execute a PostgREST builder and return its rows.

    Remote failures are logged with the table/RPC name and re-raised as is.
    """
    try:
        response = query.execute()
    except APIError as exc:
        logger.error("Remote read on '%s' failed: %s", source, exc.message or exc)
        raise
    if response is None:
        return []
    return response.data or []


def to_models(model: type[ModelT], rows: list[dict[str, Any]]) -> list[ModelT]:
    return [model.model_validate(row) for row in rows]
