"""
Business hours endpoint for clients API.
"""

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify

from cardapio_shared.datetime_utils import local_now
from cardapio_shared.services.business_hours_service import (
    compute_open_status,
    fetch_business_hours,
)
from cardapio_clients.utils.request_context import get_queries, get_supabase, with_tenant

business_hours_bp = Blueprint("client_business_hours", __name__)


@business_hours_bp.get("/restaurants/<slug>/business-hours")
@with_tenant
def get_business_hours(tenant):
    """Weekly schedule plus whether the restaurant is open right now."""
    hours = fetch_business_hours(get_supabase(), tenant.restaurant_id, get_queries().cache)
    now = local_now(current_app.config.get("RESTAURANT_TIMEZONE"))
    status = compute_open_status(hours, tenant.settings, now)

    return jsonify(
        {
            "schedule": [h.model_dump(mode="json") for h in hours],
            "schedule_mode": tenant.settings.schedule_mode,
            **status.to_dict(),
        }
    ), HTTPStatus.OK
