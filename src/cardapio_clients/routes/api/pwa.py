"""
PWA install prompt signals.

The page script reports what the browser told it; the answers are kept in
cookies and read back when rendering the install UI.
"""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from cardapio_shared.datetime_utils import utcnow
from cardapio_shared.extensions import csrf
from cardapio_clients.utils.pwa_install import (
    INSTALL_DISMISSED_COOKIE,
    INSTALLABLE_COOKIE,
    INSTALLED_COOKIE,
    apply_cookie_updates,
    dismiss_value,
)

pwa_bp = Blueprint("client_pwa", __name__)


@pwa_bp.post("/pwa/dismiss")
@csrf.exempt
def dismiss_install():
    response = jsonify({"dismissed": True})
    apply_cookie_updates(response, {INSTALL_DISMISSED_COOKIE: dismiss_value(utcnow())})
    return response, HTTPStatus.OK


@pwa_bp.post("/pwa/signal")
@csrf.exempt
def signal_install():
    """
    Body: ``{"installable": bool, "installed": bool}``; missing keys keep
    their current cookie value.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    updates = {}
    if "installable" in payload:
        updates[INSTALLABLE_COOKIE] = "1" if payload["installable"] else None
    if "installed" in payload:
        updates[INSTALLED_COOKIE] = "1" if payload["installed"] else None
        if payload["installed"]:
            updates[INSTALLABLE_COOKIE] = None

    response = jsonify(
        {
            "installable": bool(payload.get("installable")),
            "installed": bool(payload.get("installed")),
        }
    )
    apply_cookie_updates(response, updates)
    return response, HTTPStatus.OK
