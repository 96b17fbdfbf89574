"""
Combo slot reads.
"""

from __future__ import annotations

from supabase import Client

from cardapio_shared.query_cache import QueryCache
from cardapio_shared.schemas import ComboSlot, ComboSlotProduct
from cardapio_shared.services.query_helpers import cached_query, execute_rows, to_models

SLOT_PRODUCT_COLUMNS = "*, products(id, name, price, image_url)"


def fetch_combo_slots(
    client: Client, combo_id: str | None, cache: QueryCache | None = None
) -> list[ComboSlot]:
    if not combo_id:
        return []

    def _fetch() -> list[ComboSlot]:
        rows = execute_rows(
            client.table("combo_slots")
            .select("*")
            .eq("combo_id", combo_id)
            .order("slot_order", desc=False),
            "combo_slots",
        )
        return to_models(ComboSlot, rows)

    return cached_query(cache, ("combo-slots", combo_id), _fetch)


def fetch_combo_slot_products(
    client: Client, slot_id: str | None, cache: QueryCache | None = None
) -> list[ComboSlotProduct]:
    """Products allowed in a slot, with the price/image projection of each product."""
    if not slot_id:
        return []

    def _fetch() -> list[ComboSlotProduct]:
        rows = execute_rows(
            client.table("combo_slot_products")
            .select(SLOT_PRODUCT_COLUMNS)
            .eq("slot_id", slot_id)
            .order("id", desc=False),
            "combo_slot_products",
        )
        return to_models(ComboSlotProduct, rows)

    return cached_query(cache, ("combo-slot-products", slot_id), _fetch)
