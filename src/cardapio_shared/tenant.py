"""
Explicit tenant context passed into every data-access call.
"""

from __future__ import annotations

from dataclasses import dataclass

from cardapio_shared.errors import RestaurantNotFound
from cardapio_shared.query_cache import QueryResult
from cardapio_shared.schemas import DEFAULT_SETTINGS, Restaurant, RestaurantSettings


@dataclass(frozen=True)
class TenantContext:
    """Outcome of resolving a restaurant slug."""

    slug: str | None
    restaurant: Restaurant | None = None
    is_loading: bool = False
    is_fetched: bool = True

    @property
    def restaurant_id(self) -> str | None:
        return self.restaurant.id if self.restaurant else None

    @property
    def settings(self) -> RestaurantSettings:
        return self.restaurant.settings if self.restaurant else DEFAULT_SETTINGS

    @property
    def not_found(self) -> bool:
        return self.is_fetched and self.restaurant is None and bool(self.slug)

    @classmethod
    def loading(cls, slug: str | None) -> TenantContext:
        return cls(slug=slug, is_loading=True, is_fetched=False)

    @classmethod
    def from_result(cls, slug: str | None, result: QueryResult) -> TenantContext:
        if result.is_loading:
            return cls.loading(slug)
        return cls(slug=slug, restaurant=result.data)

    @classmethod
    def for_restaurant(cls, restaurant: Restaurant) -> TenantContext:
        return cls(slug=restaurant.slug, restaurant=restaurant)

    def require(self) -> Restaurant:
        """The resolved restaurant, or ``RestaurantNotFound`` for the slug."""
        if self.restaurant is None:
            raise RestaurantNotFound(self.slug)
        return self.restaurant
