"""
PWA install prompt state kept in cookies.

The browser signals installability (``beforeinstallprompt``) and installation
(``appinstalled`` / standalone display) to the page script, which mirrors them
into cookies so the server knows whether to render the install UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from cardapio_shared.constants import PWA_DISMISS_HOURS, PWA_SECOND_VISIT_THRESHOLD

VISIT_COUNT_COOKIE = "cardapio_visit_count"
LAST_VISIT_COOKIE = "cardapio_last_visit"
INSTALL_DISMISSED_COOKIE = "cardapio_install_dismissed"
INSTALLABLE_COOKIE = "cardapio_pwa_installable"
INSTALLED_COOKIE = "cardapio_pwa_installed"

COOKIE_MAX_AGE = 365 * 24 * 3600
SESSION_COOKIES = frozenset({INSTALLABLE_COOKIE})


def _to_int(value: str | None, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _elapsed_since(epoch_ms: str, now: datetime) -> timedelta | None:
    """Time since a stored epoch-milliseconds stamp; None when unreadable or in the future."""
    try:
        moment = datetime.fromtimestamp(int(epoch_ms) / 1000, tz=now.tzinfo)
    except (ValueError, OverflowError, OSError):
        return None
    elapsed = now - moment
    return elapsed if elapsed >= timedelta(0) else None


@dataclass
class PWAInstallState:
    is_installable: bool = False
    is_installed: bool = False
    visit_count: int = 1
    is_dismissed: bool = False
    # cookies to write back (name -> value, None deletes)
    cookie_updates: dict[str, str | None] = field(default_factory=dict)

    @property
    def can_show_install_ui(self) -> bool:
        return self.is_installable and not self.is_installed

    @property
    def should_show_second_visit_prompt(self) -> bool:
        return (
            self.visit_count >= PWA_SECOND_VISIT_THRESHOLD
            and self.is_installable
            and not self.is_installed
            and not self.is_dismissed
        )


def read_install_state(cookies, now: datetime) -> PWAInstallState:
    """
    Build the install state for this request and count today's visit.

    A visit is counted at most once per calendar day. A dismissal older than
    PWA_DISMISS_HOURS is forgotten.
    """
    state = PWAInstallState(
        is_installable=cookies.get(INSTALLABLE_COOKIE) == "1",
        is_installed=cookies.get(INSTALLED_COOKIE) == "1",
    )

    dismissed_at = cookies.get(INSTALL_DISMISSED_COOKIE)
    if dismissed_at:
        elapsed = _elapsed_since(dismissed_at, now)
        if elapsed is not None and elapsed < timedelta(hours=PWA_DISMISS_HOURS):
            state.is_dismissed = True
        else:
            state.cookie_updates[INSTALL_DISMISSED_COOKIE] = None

    today = now.date().isoformat()
    if cookies.get(LAST_VISIT_COOKIE) != today:
        state.visit_count = _to_int(cookies.get(VISIT_COUNT_COOKIE), 0) + 1
        state.cookie_updates[VISIT_COUNT_COOKIE] = str(state.visit_count)
        state.cookie_updates[LAST_VISIT_COOKIE] = today
    else:
        state.visit_count = _to_int(cookies.get(VISIT_COUNT_COOKIE), 1)

    return state


def dismiss_value(now: datetime) -> str:
    """Cookie value recording a dismissal at ``now`` (epoch milliseconds)."""
    return str(int(now.timestamp() * 1000))


def apply_cookie_updates(response, updates: dict[str, str | None]) -> None:
    """
    Write cookie changes to ``response``.

    Installability is a per-session signal: ``beforeinstallprompt`` fires again
    on every page load of a session where the browser can install, so that
    cookie has no max age and ends with the browser session.
    """
    for name, value in updates.items():
        if value is None:
            response.delete_cookie(name)
        elif name in SESSION_COOKIES:
            response.set_cookie(name, value, samesite="Lax")
        else:
            response.set_cookie(name, value, max_age=COOKIE_MAX_AGE, samesite="Lax")
