"""Tests for the platform overview and its background refetch."""

from cardapio_shared.query_cache import QueryCache, QueryRefetcher
from cardapio_shared.services.platform_service import (
    OVERVIEW_KEY,
    OVERVIEW_RPC,
    fetch_platform_overview,
    summarize_overview,
    watch_platform_overview,
)


def overview_rows(count=2, orders=10):
    return [
        {
            "id": f"rest-{i}",
            "name": f"Restaurante {i}",
            "slug": f"restaurante-{i}",
            "status": "active",
            "created_at": "2024-01-15T10:00:00+00:00",
            "plan_name": "Pro",
            "subscription_status": "active",
            "total_orders": orders,
            "total_revenue": 100.0,
            "orders_30d": 3,
            "revenue_30d": 30.0,
            "total_customers": 5,
            "total_products": 7,
        }
        for i in range(count)
    ]


class TestOverview:
    def test_totals(self, supabase):
        supabase.rpcs[OVERVIEW_RPC] = overview_rows()
        totals = summarize_overview(fetch_platform_overview(supabase))
        assert totals == {
            "restaurants": 2,
            "orders": 20,
            "revenue": 200.0,
            "revenue_30d": 60.0,
            "orders_30d": 6,
            "customers": 10,
            "products": 14,
        }

    def test_cached_within_refetch_interval(self, supabase, clock):
        supabase.rpcs[OVERVIEW_RPC] = overview_rows()
        cache = QueryCache(clock=clock)
        fetch_platform_overview(supabase, cache)
        clock.advance(30)
        fetch_platform_overview(supabase, cache)
        assert len(supabase.calls_to(OVERVIEW_RPC)) == 1


class TestRefetch:
    def test_refetches_every_sixty_seconds(self, supabase, clock):
        supabase.rpcs[OVERVIEW_RPC] = overview_rows(orders=1)
        cache = QueryCache(clock=clock)
        refetcher = QueryRefetcher(clock=clock)
        fetch_platform_overview(supabase, cache)

        assert watch_platform_overview(supabase, cache, refetcher)
        assert not watch_platform_overview(supabase, cache, refetcher)

        supabase.rpcs[OVERVIEW_RPC] = overview_rows(orders=9)
        clock.advance(59)
        assert refetcher.run_pending() == []
        clock.advance(1)
        assert refetcher.run_pending() == [OVERVIEW_RPC]

        assert len(supabase.calls_to(OVERVIEW_RPC)) == 2
        assert cache.get_state(OVERVIEW_KEY).data[0].total_orders == 9

    def test_failed_refetch_keeps_previous_data(self, supabase, clock):
        supabase.rpcs[OVERVIEW_RPC] = overview_rows()
        cache = QueryCache(clock=clock)
        refetcher = QueryRefetcher(clock=clock)
        fetch_platform_overview(supabase, cache)
        watch_platform_overview(supabase, cache, refetcher)

        supabase.fail(OVERVIEW_RPC)
        clock.advance(60)
        refetcher.run_pending()

        assert len(cache.get_state(OVERVIEW_KEY).data) == 2
        assert refetcher.get_status()[OVERVIEW_RPC]["last_error"] is not None


class TestPlatformPage:
    def test_page_renders_and_refreshes(self, client, supabase):
        supabase.rpcs[OVERVIEW_RPC] = overview_rows()
        response = client.get("/platform/restaurants")
        html = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Restaurante 1" in html
        assert 'http-equiv="refresh" content="60"' in html

    def test_page_shows_error_inline(self, client, supabase):
        supabase.fail(OVERVIEW_RPC, message="permission denied")
        response = client.get("/platform/restaurants")
        assert response.status_code == 200
        assert "Erro ao carregar restaurantes: permission denied" in response.get_data(as_text=True)

    def test_visit_registers_refetch(self, app, client, supabase, queries):
        supabase.rpcs[OVERVIEW_RPC] = overview_rows()
        app.config["PLATFORM_REFETCH_ENABLED"] = True
        client.get("/platform/restaurants")
        assert queries.refetcher.has_task(OVERVIEW_RPC)

    def test_api(self, client, supabase):
        supabase.rpcs[OVERVIEW_RPC] = overview_rows(count=3)
        data = client.get("/api/platform/restaurants").get_json()
        assert len(data["restaurants"]) == 3
        assert data["totals"]["restaurants"] == 3

    def test_api_remote_failure(self, client, supabase):
        supabase.fail(OVERVIEW_RPC)
        assert client.get("/api/platform/restaurants").status_code == 502
