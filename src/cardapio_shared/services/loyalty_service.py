"""
Loyalty stamp ledger and balances.
"""

from __future__ import annotations

from supabase import Client

from cardapio_shared.constants import (
    CUSTOMER_STAMPS_STALE_SECONDS,
    PHONE_MIN_DIGITS,
    STAMP_TRANSACTIONS_DEFAULT_LIMIT,
)
from cardapio_shared.formatting import get_phone_digits
from cardapio_shared.query_cache import QueryCache
from cardapio_shared.schemas import CustomerStamps, StampTransaction
from cardapio_shared.services.query_helpers import cached_query, execute_rows, to_models
from cardapio_shared.tenant import TenantContext

TRANSACTION_COLUMNS = "*, customer:customers(name, phone)"
STAMP_COLUMNS = "stamps_count, stamps_redeemed, last_stamp_at, stamps_expire_at"


def fetch_stamp_transactions(
    client: Client,
    tenant: TenantContext,
    limit: int = STAMP_TRANSACTIONS_DEFAULT_LIMIT,
    cache: QueryCache | None = None,
) -> list[StampTransaction]:
    """Newest-first ledger rows of the tenant, never more than ``limit``."""
    restaurant_id = tenant.restaurant_id
    if not restaurant_id:
        return []
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")

    def _fetch() -> list[StampTransaction]:
        rows = execute_rows(
            client.table("stamp_transactions")
            .select(TRANSACTION_COLUMNS)
            .eq("restaurant_id", restaurant_id)
            .order("created_at", desc=True)
            .limit(limit),
            "stamp_transactions",
        )
        # The row cap is part of the contract even if the server ignores it.
        return to_models(StampTransaction, rows[:limit])

    return cached_query(cache, ("stamp-transactions", restaurant_id, limit), _fetch)


def fetch_customer_stamps(
    client: Client,
    tenant: TenantContext,
    phone: str | None,
    cache: QueryCache | None = None,
) -> CustomerStamps | None:
    """
    Stamp balance of a customer identified by phone.

    Returns None (no read) when loyalty is disabled for the tenant or the phone
    is too short; a phone with no customer row has a zero balance.
    """
    restaurant_id = tenant.restaurant_id
    if not restaurant_id or not phone or not tenant.settings.loyalty_enabled:
        return None
    digits = get_phone_digits(phone)
    if len(digits) < PHONE_MIN_DIGITS:
        return None

    def _fetch() -> CustomerStamps:
        rows = execute_rows(
            client.table("customers")
            .select(STAMP_COLUMNS)
            .eq("restaurant_id", restaurant_id)
            .eq("phone", digits)
            .limit(1),
            "customers",
        )
        if not rows:
            return CustomerStamps()
        return CustomerStamps.model_validate(rows[0])

    return cached_query(
        cache, ("customer-stamps", restaurant_id, digits), _fetch, CUSTOMER_STAMPS_STALE_SECONDS
    )


def stamp_progress(stamps: CustomerStamps, goal: int) -> dict:
    """Progress towards the next reward for the stamp card."""
    goal = max(goal, 1)
    earned = stamps.stamps_count
    return {
        "stamps": earned,
        "goal": goal,
        "remaining": max(goal - earned, 0),
        "reward_ready": earned >= goal,
        "percent": min(100, round(earned * 100 / goal)),
    }
