"""
Accessors for the per-application collaborators used by the routes.
"""

from __future__ import annotations

from functools import wraps
from typing import TypeVar

from flask import current_app
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from supabase import Client

from cardapio_shared.errors import InvalidQuery
from cardapio_shared.extensions import QueryState
from cardapio_shared.logging_config import tenant_logger
from cardapio_shared.services.restaurant_service import resolve_tenant
from cardapio_shared.tenant import TenantContext

QueryModelT = TypeVar("QueryModelT", bound=BaseModel)


def get_supabase() -> Client:
    return current_app.extensions["supabase_client"]


def get_queries() -> QueryState:
    return current_app.extensions["cardapio_queries"]


def parse_query(model: type[QueryModelT], **values) -> QueryModelT:
    """Validate request parameters; failures are the caller's fault (400)."""
    try:
        return model.model_validate(values)
    except PydanticValidationError as exc:
        raise InvalidQuery(exc.errors(include_url=False)) from exc


def load_tenant(slug: str | None) -> TenantContext:
    tenant = resolve_tenant(get_supabase(), slug, get_queries().cache)
    if tenant.not_found:
        tenant_logger(__name__, slug, None).info("No active restaurant for slug")
    return tenant


def with_tenant(view):
    """
    Resolve the ``slug`` URL parameter and pass the TenantContext to the view.

    Unknown slugs raise RestaurantNotFound; remote failures propagate as is.
    """

    @wraps(view)
    def wrapper(slug: str, *args, **kwargs):
        tenant = load_tenant(slug)
        tenant.require()
        return view(tenant, *args, **kwargs)

    return wrapper
