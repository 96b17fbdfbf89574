"""Tests for open/closed status and the weekly schedule."""

from datetime import datetime

from cardapio_shared.schemas import BusinessHour, RestaurantSettings
from cardapio_shared.services.business_hours_service import (
    build_week_schedule,
    compute_open_status,
    format_time,
)
from tests.conftest import make_hours

# 2024-06-03 is a Monday (day_of_week 1)
MONDAY = datetime(2024, 6, 3)
AUTO = RestaurantSettings()


def hours(**kwargs):
    return [BusinessHour.model_validate(row) for row in make_hours(**kwargs)]


def at(hour, minute=0):
    return MONDAY.replace(hour=hour, minute=minute)


class TestFormatTime:
    def test_whole_hours(self):
        assert format_time("18:00:00") == "18h"
        assert format_time("09:00:00") == "9h"

    def test_with_minutes(self):
        assert format_time("11:30:00") == "11:30"

    def test_empty(self):
        assert format_time(None) == ""


class TestOpenStatus:
    def test_open_inside_window(self):
        status = compute_open_status(hours(), AUTO, at(19))
        assert status.is_open
        assert status.next_close_time == "23h"
        assert status.today_hours["close_time"] == "23:00:00"

    def test_before_opening_today(self):
        status = compute_open_status(hours(), AUTO, at(17, 59))
        assert not status.is_open
        assert status.next_open_time == "Abre às 18h"

    def test_closing_minute_counts_as_closed(self):
        status = compute_open_status(hours(), AUTO, at(23))
        assert not status.is_open
        assert status.next_open_time == "Abre Amanhã às 18h"

    def test_closed_today_opens_tomorrow(self):
        status = compute_open_status(hours(closed=(1,)), AUTO, at(19))
        assert not status.is_open
        assert status.next_open_time == "Abre Amanhã às 18h"
        assert status.today_hours["is_closed"] is True

    def test_next_open_day_is_named(self):
        status = compute_open_status(hours(closed=(1, 2)), AUTO, at(19))
        assert status.next_open_time == "Abre Quarta às 18h"

    def test_missing_row_for_today(self):
        status = compute_open_status(hours(days=[3]), AUTO, at(19))
        assert not status.is_open
        assert status.today_hours is None
        assert status.next_open_time == "Abre Quarta às 18h"

    def test_no_open_day_at_all(self):
        status = compute_open_status(hours(closed=range(7)), AUTO, at(19))
        assert not status.is_open
        assert status.next_open_time is None

    def test_manual_mode_uses_flag(self):
        settings = RestaurantSettings(schedule_mode="manual", is_open=False)
        status = compute_open_status(hours(), settings, at(19))
        assert not status.is_open
        assert status.next_open_time is None

    def test_without_hours_uses_flag(self):
        assert compute_open_status([], AUTO, at(3)).is_open
        assert not compute_open_status(None, RestaurantSettings(is_open=False), at(3)).is_open

    def test_loading(self):
        status = compute_open_status(hours(), AUTO, at(19), is_loading=True)
        assert status.is_loading
        assert not status.is_open

    def test_opening_with_minutes(self):
        status = compute_open_status(hours(open_time="11:30:00"), AUTO, at(11))
        assert status.next_open_time == "Abre às 11:30"


class TestWeekSchedule:
    def test_seven_rows_sunday_first(self):
        week = build_week_schedule(hours(days=[1]), today=1)
        assert [row["day_name"] for row in week][:2] == ["Domingo", "Segunda-feira"]
        assert len(week) == 7

    def test_missing_days_are_closed(self):
        week = build_week_schedule(hours(days=[1]), today=1)
        assert week[0]["is_closed"]
        assert week[0]["label"] == "Fechado"
        assert week[1]["label"] == "18:00 - 23:00"
        assert week[1]["is_today"]
        assert not week[2]["is_today"]

    def test_null_closed_flag_is_closed(self):
        row = BusinessHour(day_of_week=2, open_time="10:00:00", close_time="14:00:00")
        week = build_week_schedule([row], today=0)
        assert week[2]["is_closed"]
