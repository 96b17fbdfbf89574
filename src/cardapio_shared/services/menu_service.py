"""
Menu reads for a tenant: categories, products and featured products.
"""

from __future__ import annotations

from supabase import Client

from cardapio_shared.constants import FEATURED_PRODUCTS_DEFAULT_LIMIT, FEATURED_STALE_SECONDS
from cardapio_shared.query_cache import QueryCache
from cardapio_shared.schemas import Category, FeaturedProduct, Product
from cardapio_shared.services.query_helpers import cached_query, execute_rows, to_models
from cardapio_shared.tenant import TenantContext

FEATURED_COLUMNS = "id, name, description, price, image_url"


def fetch_categories(
    client: Client, tenant: TenantContext, cache: QueryCache | None = None
) -> list[Category]:
    restaurant_id = tenant.restaurant_id
    if not restaurant_id:
        return []

    def _fetch() -> list[Category]:
        rows = execute_rows(
            client.table("categories")
            .select("*")
            .eq("restaurant_id", restaurant_id)
            .order("order_index", desc=False),
            "categories",
        )
        return to_models(Category, rows)

    return cached_query(cache, ("categories", restaurant_id), _fetch)


def fetch_products(
    client: Client,
    tenant: TenantContext,
    category_id: str | None = None,
    cache: QueryCache | None = None,
) -> list[Product]:
    """Active products of the tenant, optionally one category, by order index."""
    restaurant_id = tenant.restaurant_id
    if not restaurant_id:
        return []

    def _fetch() -> list[Product]:
        query = (
            client.table("products")
            .select("*")
            .eq("restaurant_id", restaurant_id)
            .eq("is_active", True)
        )
        if category_id:
            query = query.eq("category_id", category_id)
        rows = execute_rows(query.order("order_index", desc=False), "products")
        return to_models(Product, rows)

    return cached_query(cache, ("products", restaurant_id, category_id), _fetch)


def fetch_featured_products(
    client: Client,
    tenant: TenantContext,
    limit: int = FEATURED_PRODUCTS_DEFAULT_LIMIT,
    cache: QueryCache | None = None,
) -> list[FeaturedProduct]:
    """First ``limit`` active products by order index, for the restaurant home."""
    restaurant_id = tenant.restaurant_id
    if not restaurant_id:
        return []
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")

    def _fetch() -> list[FeaturedProduct]:
        rows = execute_rows(
            client.table("products")
            .select(FEATURED_COLUMNS)
            .eq("restaurant_id", restaurant_id)
            .eq("is_active", True)
            .order("order_index", desc=False)
            .limit(limit),
            "products",
        )
        return to_models(FeaturedProduct, rows)

    return cached_query(
        cache, ("featured-products", restaurant_id, limit), _fetch, FEATURED_STALE_SECONDS
    )


def group_products_by_category(
    categories: list[Category], products: list[Product]
) -> list[dict]:
    """
    Pair each category with its products for the menu page.

    Categories keep their order; products without a known category are
    collected last under ``None``.
    """
    by_category: dict[str | None, list[Product]] = {}
    known = {category.id for category in categories}
    for product in products:
        key = product.category_id if product.category_id in known else None
        by_category.setdefault(key, []).append(product)

    sections = [
        {"category": category, "products": by_category[category.id]}
        for category in categories
        if by_category.get(category.id)
    ]
    if by_category.get(None):
        sections.append({"category": None, "products": by_category[None]})
    return sections
