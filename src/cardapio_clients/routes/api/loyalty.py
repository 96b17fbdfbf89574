"""Loyalty ledger and stamp balance endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from cardapio_shared.constants import STAMP_TRANSACTION_LABELS, STAMP_TRANSACTIONS_DEFAULT_LIMIT
from cardapio_shared.schemas import CustomerStampsQuery, LimitQuery
from cardapio_shared.services.loyalty_service import (
    fetch_customer_stamps,
    fetch_stamp_transactions,
    stamp_progress,
)
from cardapio_clients.utils.request_context import (
    get_queries,
    get_supabase,
    parse_query,
    with_tenant,
)

loyalty_bp = Blueprint("client_loyalty", __name__)


@loyalty_bp.get("/restaurants/<slug>/stamp-transactions")
@with_tenant
def get_stamp_transactions(tenant):
    params = parse_query(
        LimitQuery, limit=request.args.get("limit", STAMP_TRANSACTIONS_DEFAULT_LIMIT)
    )
    transactions = fetch_stamp_transactions(
        get_supabase(), tenant, params.limit, cache=get_queries().cache
    )
    return jsonify(
        [
            {**t.model_dump(mode="json"), "label": STAMP_TRANSACTION_LABELS.get(t.type, t.type)}
            for t in transactions
        ]
    ), HTTPStatus.OK


@loyalty_bp.get("/restaurants/<slug>/customer-stamps")
@with_tenant
def get_customer_stamps(tenant):
    params = parse_query(CustomerStampsQuery, phone=request.args.get("phone", ""))
    stamps = fetch_customer_stamps(get_supabase(), tenant, params.phone, get_queries().cache)
    if stamps is None:
        return jsonify(
            {"loyalty_enabled": tenant.settings.loyalty_enabled, "stamps": None}
        ), HTTPStatus.OK

    return jsonify(
        {
            "loyalty_enabled": True,
            "stamps": stamps.model_dump(mode="json"),
            "progress": stamp_progress(stamps, tenant.settings.loyalty_stamps_goal),
        }
    ), HTTPStatus.OK
