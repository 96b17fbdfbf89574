"""Combo slot endpoints used by the combo picker."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify

from cardapio_shared.services.combo_service import (
    fetch_combo_slot_products,
    fetch_combo_slots,
)
from cardapio_clients.utils.request_context import get_queries, get_supabase

combos_bp = Blueprint("client_combos", __name__)


@combos_bp.get("/combos/<combo_id>/slots")
def get_combo_slots(combo_id: str):
    slots = fetch_combo_slots(get_supabase(), combo_id, get_queries().cache)
    return jsonify([s.model_dump(mode="json") for s in slots]), HTTPStatus.OK


@combos_bp.get("/combo-slots/<slot_id>/products")
def get_combo_slot_products(slot_id: str):
    products = fetch_combo_slot_products(get_supabase(), slot_id, get_queries().cache)
    return jsonify([p.model_dump(mode="json") for p in products]), HTTPStatus.OK
