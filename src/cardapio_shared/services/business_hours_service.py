"""Business hours reads and the open/closed status derived from them."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from supabase import Client

from cardapio_shared.constants import (
    BUSINESS_HOURS_STALE_SECONDS,
    DAY_NAMES,
    DAY_NAMES_LONG,
    ScheduleMode,
)
from cardapio_shared.datetime_utils import sunday_first_weekday
from cardapio_shared.query_cache import QueryCache
from cardapio_shared.schemas import BusinessHour, RestaurantSettings
from cardapio_shared.services.query_helpers import cached_query, execute_rows, to_models

HOURS_COLUMNS = "id, day_of_week, open_time, close_time, is_closed"


@dataclass
class OpenStatus:
    is_open: bool
    is_loading: bool = False
    next_open_time: str | None = None
    next_close_time: str | None = None
    today_hours: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def fetch_business_hours(
    client: Client, restaurant_id: str | None, cache: QueryCache | None = None
) -> list[BusinessHour]:
    """One row per configured weekday, Sunday (0) first."""
    if not restaurant_id:
        return []

    def _fetch() -> list[BusinessHour]:
        rows = execute_rows(
            client.table("business_hours")
            .select(HOURS_COLUMNS)
            .eq("restaurant_id", restaurant_id)
            .order("day_of_week", desc=False),
            "business_hours",
        )
        return to_models(BusinessHour, rows)

    return cached_query(
        cache, ("business-hours", restaurant_id), _fetch, BUSINESS_HOURS_STALE_SECONDS
    )


def format_time(value: str | None) -> str:
    """'18:00:00' -> '18h', '11:30:00' -> '11:30'."""
    if not value:
        return ""
    hours, minutes = value.split(":")[:2]
    if minutes == "00":
        return f"{int(hours)}h"
    return f"{hours}:{minutes}"


def _hhmm(value: str | None) -> str | None:
    return value[:5] if value else None


def _find_next_open_day(hours: list[BusinessHour], current_day: int) -> BusinessHour | None:
    by_day = {hour.day_of_week: hour for hour in hours}
    for offset in range(1, 8):
        candidate = by_day.get((current_day + offset) % 7)
        if candidate and not candidate.is_closed and candidate.open_time:
            return candidate
    return None


def _format_next_open(next_day: BusinessHour, current_day: int) -> str:
    day_diff = (next_day.day_of_week - current_day + 7) % 7
    day_name = "Amanhã" if day_diff == 1 else DAY_NAMES[next_day.day_of_week]
    return f"Abre {day_name} às {format_time(next_day.open_time)}"


def compute_open_status(
    hours: list[BusinessHour] | None,
    settings: RestaurantSettings,
    now: datetime,
    is_loading: bool = False,
) -> OpenStatus:
    """
    Decide whether the restaurant is open at ``now`` (restaurant local time).

    Manual schedule mode and tenants without hours use the ``is_open`` flag.
    The closing minute itself counts as closed.
    """
    if is_loading:
        return OpenStatus(is_open=False, is_loading=True)

    if settings.schedule_mode == ScheduleMode.MANUAL.value or not hours:
        return OpenStatus(is_open=settings.is_open)

    current_day = sunday_first_weekday(now)
    current_time = now.strftime("%H:%M")
    today = next((hour for hour in hours if hour.day_of_week == current_day), None)

    if today is None or today.is_closed:
        next_day = _find_next_open_day(hours, current_day)
        return OpenStatus(
            is_open=False,
            next_open_time=_format_next_open(next_day, current_day) if next_day else None,
            today_hours=(
                {"open_time": today.open_time, "close_time": today.close_time, "is_closed": True}
                if today
                else None
            ),
        )

    open_time, close_time = _hhmm(today.open_time), _hhmm(today.close_time)
    if not (open_time and close_time):
        return OpenStatus(is_open=settings.is_open)

    today_hours = {
        "open_time": today.open_time,
        "close_time": today.close_time,
        "is_closed": False,
    }
    if open_time <= current_time < close_time:
        return OpenStatus(
            is_open=True, next_close_time=format_time(today.close_time), today_hours=today_hours
        )
    if current_time < open_time:
        return OpenStatus(
            is_open=False,
            next_open_time=f"Abre às {format_time(today.open_time)}",
            today_hours=today_hours,
        )

    next_day = _find_next_open_day(hours, current_day)
    return OpenStatus(
        is_open=False,
        next_open_time=_format_next_open(next_day, current_day) if next_day else None,
        today_hours=today_hours,
    )


def build_week_schedule(hours: list[BusinessHour], today: int) -> list[dict[str, Any]]:
    """Seven display rows, Sunday first; days without a row are closed."""
    by_day = {hour.day_of_week: hour for hour in hours}
    week = []
    for day in range(7):
        hour = by_day.get(day)
        is_closed = hour.is_closed if hour and hour.is_closed is not None else True
        open_time = hour.open_time if hour else None
        close_time = hour.close_time if hour else None
        week.append(
            {
                "day": day,
                "day_name": DAY_NAMES_LONG[day],
                "is_today": day == today,
                "is_closed": is_closed,
                "label": "Fechado"
                if is_closed
                else f"{_hhmm(open_time) or '--:--'} - {_hhmm(close_time) or '--:--'}",
            }
        )
    return week
