"""Restaurant lookup endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from cardapio_shared.services.restaurant_service import list_restaurants
from cardapio_clients.utils.request_context import get_queries, get_supabase, with_tenant

restaurants_bp = Blueprint("client_restaurants", __name__)


@restaurants_bp.get("/restaurants")
def get_restaurants():
    restaurants = list_restaurants(
        get_supabase(), request.args.get("category"), get_queries().cache
    )
    return jsonify([r.model_dump(mode="json") for r in restaurants]), HTTPStatus.OK


@restaurants_bp.get("/restaurants/<slug>")
@with_tenant
def get_restaurant(tenant):
    return jsonify(tenant.restaurant.model_dump(mode="json")), HTTPStatus.OK
