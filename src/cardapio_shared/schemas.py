"""
Pydantic models for rows read from the hosted database.

The models are projections of remote tables: the database enforces every
invariant, so fields are permissive and unknown columns are ignored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, validator

from cardapio_shared.constants import (
    DEFAULT_MIN_ORDER,
    DEFAULT_REWARD_VALUE,
    DEFAULT_STAMPS_GOAL,
    ScheduleMode,
)


class RestaurantSettings(BaseModel):
    is_open: bool = True
    kds_enabled: bool = True
    delivery_fee: float = 5
    local_ddd: str = "73"
    loyalty_enabled: bool = False
    loyalty_stamps_goal: int = DEFAULT_STAMPS_GOAL
    loyalty_min_order: float = DEFAULT_MIN_ORDER
    loyalty_reward_value: float = DEFAULT_REWARD_VALUE
    schedule_mode: str = ScheduleMode.AUTO.value

    @classmethod
    def from_raw(cls, raw: Any) -> RestaurantSettings:
        """Merge the stored JSONB settings over the defaults."""
        if isinstance(raw, RestaurantSettings):
            return raw
        if not isinstance(raw, dict):
            return cls()
        return cls(**{key: value for key, value in raw.items() if value is not None})


DEFAULT_SETTINGS = RestaurantSettings()


class Restaurant(BaseModel):
    id: str
    slug: str
    name: str
    logo_url: str | None = None
    hero_banner_url: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    address: str | None = None
    description: str | None = None
    category: str | None = None
    status: str | None = None
    settings: RestaurantSettings = Field(default_factory=RestaurantSettings)
    instagram: str | None = None
    facebook: str | None = None
    accepted_payments: list[str] | None = None
    gallery_urls: list[str] | None = None
    min_order: float | None = None
    avg_delivery_time: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @validator("settings", pre=True, always=True)
    def merge_settings(cls, v):
        return RestaurantSettings.from_raw(v)


class RestaurantListItem(BaseModel):
    id: str
    name: str
    slug: str
    logo_url: str | None = None
    hero_banner_url: str | None = None
    category: str | None = None
    address: str | None = None
    settings: RestaurantSettings = Field(default_factory=RestaurantSettings)

    @validator("settings", pre=True, always=True)
    def merge_settings(cls, v):
        return RestaurantSettings.from_raw(v)


class Category(BaseModel):
    id: str
    name: str
    order_index: int | None = None
    restaurant_id: str | None = None


class Product(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None
    category_id: str | None = None
    restaurant_id: str | None = None
    is_active: bool | None = None
    is_combo: bool | None = None
    order_index: int | None = None


class FeaturedProduct(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None


class ComboSlot(BaseModel):
    id: str
    combo_id: str
    slot_label: str
    category_id: str | None = None
    quantity: int | None = None
    slot_order: int | None = None
    created_at: datetime | None = None


class ComboProductProjection(BaseModel):
    id: str
    name: str
    price: float
    image_url: str | None = None


class ComboSlotProduct(BaseModel):
    id: str
    slot_id: str
    product_id: str
    price_difference: float | None = None
    is_default: bool | None = None
    created_at: datetime | None = None
    products: ComboProductProjection | None = None


class BusinessHour(BaseModel):
    id: str | None = None
    day_of_week: int
    open_time: str | None = None
    close_time: str | None = None
    is_closed: bool | None = None


class StampCustomer(BaseModel):
    name: str | None = None
    phone: str


class StampTransaction(BaseModel):
    id: str
    customer_id: str | None = None
    order_id: str | None = None
    amount: int
    balance_after: int
    type: str
    notes: str | None = None
    created_at: datetime | None = None
    customer: StampCustomer | None = None


class CustomerStamps(BaseModel):
    stamps_count: int = 0
    stamps_redeemed: int = 0
    last_stamp_at: datetime | None = None
    stamps_expire_at: datetime | None = None

    @validator("stamps_count", "stamps_redeemed", pre=True)
    def none_as_zero(cls, v):
        return 0 if v is None else v


class PlatformRestaurantOverview(BaseModel):
    id: str
    name: str
    slug: str
    status: str
    logo_url: str | None = None
    category: str | None = None
    created_at: datetime
    phone: str | None = None
    owner_id: str | None = None
    plan_name: str
    subscription_status: str
    trial_ends_at: datetime | None = None
    total_orders: int = 0
    total_revenue: float = 0
    orders_30d: int = 0
    revenue_30d: float = 0
    total_customers: int = 0
    total_products: int = 0


class ProductsQuery(BaseModel):
    category_id: str | None = None


class LimitQuery(BaseModel):
    limit: int = Field(..., gt=0, le=500)


class CustomerStampsQuery(BaseModel):
    phone: str = Field(..., min_length=1, max_length=32)
