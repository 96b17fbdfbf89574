"""Menu read API for client host."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from cardapio_shared.constants import FEATURED_PRODUCTS_DEFAULT_LIMIT
from cardapio_shared.schemas import LimitQuery, ProductsQuery
from cardapio_shared.services.menu_service import (
    fetch_categories,
    fetch_featured_products,
    fetch_products,
)
from cardapio_clients.utils.request_context import (
    get_queries,
    get_supabase,
    parse_query,
    with_tenant,
)

menu_bp = Blueprint("client_menu_api", __name__)


@menu_bp.get("/restaurants/<slug>/categories")
@with_tenant
def get_categories(tenant):
    categories = fetch_categories(get_supabase(), tenant, get_queries().cache)
    return jsonify([c.model_dump(mode="json") for c in categories]), HTTPStatus.OK


@menu_bp.get("/restaurants/<slug>/products")
@with_tenant
def get_products(tenant):
    params = parse_query(ProductsQuery, category_id=request.args.get("category_id") or None)
    products = fetch_products(get_supabase(), tenant, params.category_id, get_queries().cache)
    return jsonify([p.model_dump(mode="json") for p in products]), HTTPStatus.OK


@menu_bp.get("/restaurants/<slug>/featured-products")
@with_tenant
def get_featured_products(tenant):
    params = parse_query(
        LimitQuery, limit=request.args.get("limit", FEATURED_PRODUCTS_DEFAULT_LIMIT)
    )
    products = fetch_featured_products(
        get_supabase(), tenant, params.limit, cache=get_queries().cache
    )
    return jsonify([p.model_dump(mode="json") for p in products]), HTTPStatus.OK
