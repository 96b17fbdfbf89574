"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from postgrest.exceptions import APIError

from cardapio_shared.config import AppConfig
from cardapio_shared.extensions import QueryState
from cardapio_shared.query_cache import QueryCache, QueryRefetcher
from cardapio_clients.app import create_app


class FakeClock:
    """Manually advanced clock for cache and refetch timing."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 6, 3, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


class FakeQuery:
    """Subset of the PostgREST request builder, evaluated over in-memory rows."""

    def __init__(self, client: FakeSupabase, source: str, rows: list[dict]):
        self._client = client
        self._call = {
            "source": source,
            "select": None,
            "filters": [],
            "order": None,
            "limit": None,
        }
        self._rows = rows

    def select(self, columns: str = "*"):
        self._call["select"] = columns
        return self

    def eq(self, column: str, value):
        self._call["filters"].append((column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self._call["order"] = (column, desc)
        return self

    def limit(self, size: int):
        self._call["limit"] = size
        return self

    def execute(self):
        self._client.calls.append(self._call)
        error = self._client.errors.get(self._call["source"])
        if error is not None:
            raise APIError(error)

        rows = [
            row
            for row in self._rows
            if all(row.get(column) == value for column, value in self._call["filters"])
        ]
        if self._call["order"]:
            column, desc = self._call["order"]
            rows.sort(key=lambda row: (row.get(column) is None, row.get(column)), reverse=desc)
        if self._call["limit"] is not None and not self._client.ignore_limit:
            rows = rows[: self._call["limit"]]
        return SimpleNamespace(data=[dict(row) for row in rows])


class FakeSupabase:
    """Records every read; ``errors`` maps a table/RPC name to an APIError payload."""

    def __init__(self, tables: dict[str, list[dict]] | None = None):
        self.tables = tables or {}
        self.rpcs: dict[str, list[dict]] = {}
        self.errors: dict[str, dict] = {}
        self.calls: list[dict] = []
        self.ignore_limit = False

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name, self.tables.get(name, []))

    def rpc(self, name: str, params: dict | None = None) -> FakeQuery:
        return FakeQuery(self, name, self.rpcs.get(name, []))

    def fail(self, source: str, message: str = "connection refused", code: str = "PGRST000"):
        self.errors[source] = {"message": message, "code": code, "details": None, "hint": None}

    def calls_to(self, source: str) -> list[dict]:
        return [call for call in self.calls if call["source"] == source]


def make_restaurant(**overrides) -> dict:
    row = {
        "id": "rest-1",
        "slug": "pizzaria-bella",
        "name": "Pizzaria Bella",
        "status": "active",
        "logo_url": "https://cdn.example.com/logo.png",
        "hero_banner_url": "https://cdn.example.com/banner.png",
        "primary_color": "#d32f2f",
        "phone": "73988887777",
        "whatsapp": "73988887777",
        "address": "Rua das Flores, 10",
        "description": "A melhor pizza da cidade",
        "category": "pizza",
        "settings": {"loyalty_enabled": True, "loyalty_stamps_goal": 10},
    }
    row.update(overrides)
    return row


def make_product(index: int, restaurant_id: str = "rest-1", **overrides) -> dict:
    row = {
        "id": f"prod-{index}",
        "name": f"Produto {index}",
        "description": None,
        "price": 10.0 + index,
        "image_url": None,
        "category_id": "cat-1",
        "restaurant_id": restaurant_id,
        "is_active": True,
        "order_index": index,
    }
    row.update(overrides)
    return row


def make_hours(days=range(7), open_time="18:00:00", close_time="23:00:00", closed=()) -> list[dict]:
    return [
        {
            "id": f"bh-{day}",
            "restaurant_id": "rest-1",
            "day_of_week": day,
            "open_time": open_time,
            "close_time": close_time,
            "is_closed": day in closed,
        }
        for day in days
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase(
        {
            "restaurants": [
                make_restaurant(),
                make_restaurant(
                    id="rest-2",
                    slug="sushi-zen",
                    name="Sushi Zen",
                    category="japonesa",
                    hero_banner_url=None,
                    settings={"loyalty_enabled": False},
                ),
                make_restaurant(id="rest-3", slug="fechado", name="Antigo", status="inactive"),
            ],
            "categories": [
                {"id": "cat-2", "name": "Bebidas", "order_index": 2, "restaurant_id": "rest-1"},
                {"id": "cat-1", "name": "Pizzas", "order_index": 1, "restaurant_id": "rest-1"},
            ],
            "products": [make_product(i) for i in range(10, 0, -1)]
            + [make_product(99, category_id="cat-2", name="Refrigerante")]
            + [make_product(50, is_active=False)],
            "business_hours": make_hours(),
        }
    )


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        app_name="cardapio-clients-test",
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon-key",
        secret_key="test-secret",
        log_level="WARNING",
        restaurant_timezone="America/Sao_Paulo",
        default_favicon_url="/static/logo.png",
        debug_mode=True,
        flask_debug=False,
        platform_refetch_enabled=False,
        cors_allowed_origins="",
        num_proxies=0,
    )


@pytest.fixture
def queries(clock) -> QueryState:
    return QueryState(QueryCache(clock=clock), QueryRefetcher(clock=clock))


@pytest.fixture
def app(app_config, supabase, queries):
    """Application wired to the fake client; the refetch thread is never started."""
    application = create_app(app_config, supabase_client=supabase, queries=queries)
    application.config["TESTING"] = True
    yield application
    queries.refetcher.stop()


@pytest.fixture
def client(app):
    return app.test_client()
