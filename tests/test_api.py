"""Tests for the JSON API."""

from tests.conftest import make_product

API = "/api"


class TestRestaurantsApi:
    def test_list(self, client):
        response = client.get(f"{API}/restaurants")
        assert response.status_code == 200
        assert [r["slug"] for r in response.get_json()] == ["pizzaria-bella", "sushi-zen"]

    def test_list_by_category(self, client):
        data = client.get(f"{API}/restaurants?category=japonesa").get_json()
        assert [r["slug"] for r in data] == ["sushi-zen"]

    def test_detail_merges_settings(self, client):
        data = client.get(f"{API}/restaurants/pizzaria-bella").get_json()
        assert data["id"] == "rest-1"
        assert data["settings"]["loyalty_enabled"] is True
        assert data["settings"]["delivery_fee"] == 5
        assert data["settings"]["local_ddd"] == "73"

    def test_unknown_slug(self, client):
        response = client.get(f"{API}/restaurants/nao-existe")
        assert response.status_code == 404
        assert response.get_json()["slug"] == "nao-existe"

    def test_remote_failure(self, client, supabase):
        supabase.fail("restaurants", message="timeout", code="57014")
        response = client.get(f"{API}/restaurants/pizzaria-bella")
        assert response.status_code == 502
        body = response.get_json()
        assert body["error"] == "timeout"
        assert body["code"] == "57014"


class TestMenuApi:
    def test_categories(self, client):
        data = client.get(f"{API}/restaurants/pizzaria-bella/categories").get_json()
        assert [c["name"] for c in data] == ["Pizzas", "Bebidas"]

    def test_products_by_category(self, client):
        data = client.get(
            f"{API}/restaurants/pizzaria-bella/products?category_id=cat-2"
        ).get_json()
        assert [p["name"] for p in data] == ["Refrigerante"]

    def test_featured_limit(self, client):
        data = client.get(f"{API}/restaurants/pizzaria-bella/featured-products?limit=2").get_json()
        assert [p["id"] for p in data] == ["prod-1", "prod-2"]

    def test_featured_invalid_limit(self, client):
        response = client.get(f"{API}/restaurants/pizzaria-bella/featured-products?limit=0")
        assert response.status_code == 400
        assert response.get_json()["error"] == "Dados inválidos"

    def test_bad_row_is_502_not_400(self, client, supabase):
        supabase.tables["products"] = [make_product(1, price=None)]
        response = client.get(f"{API}/restaurants/pizzaria-bella/products")
        assert response.status_code == 502
        assert response.get_json() == {"error": "Resposta inválida do banco de dados"}

    def test_unknown_restaurant(self, client, supabase):
        response = client.get(f"{API}/restaurants/nao-existe/products")
        assert response.status_code == 404
        assert supabase.calls_to("products") == []


class TestCombosApi:
    def test_slots(self, client, supabase):
        supabase.tables["combo_slots"] = [
            {"id": "s1", "combo_id": "c1", "slot_label": "Lanche", "slot_order": 1},
        ]
        data = client.get(f"{API}/combos/c1/slots").get_json()
        assert data[0]["slot_label"] == "Lanche"

    def test_slot_products(self, client, supabase):
        supabase.tables["combo_slot_products"] = [
            {
                "id": "sp1",
                "slot_id": "s1",
                "product_id": "prod-1",
                "products": {"id": "prod-1", "name": "X-Burger", "price": 20},
            }
        ]
        data = client.get(f"{API}/combo-slots/s1/products").get_json()
        assert data[0]["products"]["name"] == "X-Burger"


class TestBusinessHoursApi:
    def test_schedule_and_status(self, client):
        data = client.get(f"{API}/restaurants/pizzaria-bella/business-hours").get_json()
        assert len(data["schedule"]) == 7
        assert data["schedule_mode"] == "auto"
        assert "is_open" in data
        assert data["is_loading"] is False


class TestLoyaltyApi:
    def test_stamp_transactions_limit(self, client, supabase):
        supabase.tables["stamp_transactions"] = [
            {
                "id": f"tx-{i}",
                "restaurant_id": "rest-1",
                "amount": 1,
                "balance_after": i,
                "type": "earned",
                "created_at": f"2024-05-{i + 1:02d}T10:00:00+00:00",
                "customer": {"name": "Ana", "phone": "73988887777"},
            }
            for i in range(5)
        ]
        data = client.get(
            f"{API}/restaurants/pizzaria-bella/stamp-transactions?limit=3"
        ).get_json()
        assert [t["id"] for t in data] == ["tx-4", "tx-3", "tx-2"]
        assert data[0]["label"] == "Ganho"
        assert data[0]["customer"]["name"] == "Ana"

    def test_customer_stamps(self, client, supabase):
        supabase.tables["customers"] = [
            {"restaurant_id": "rest-1", "phone": "73988887777", "stamps_count": 7}
        ]
        data = client.get(
            f"{API}/restaurants/pizzaria-bella/customer-stamps",
            query_string={"phone": "(73) 98888-7777"},
        ).get_json()
        assert data["stamps"]["stamps_count"] == 7
        assert data["progress"]["remaining"] == 3

    def test_customer_stamps_loyalty_disabled(self, client):
        data = client.get(
            f"{API}/restaurants/sushi-zen/customer-stamps?phone=73988887777"
        ).get_json()
        assert data == {"loyalty_enabled": False, "stamps": None}

    def test_customer_stamps_requires_phone(self, client):
        response = client.get(f"{API}/restaurants/pizzaria-bella/customer-stamps")
        assert response.status_code == 400


class TestPwaApi:
    def test_dismiss_sets_cookie(self, client):
        response = client.post(f"{API}/pwa/dismiss")
        assert response.status_code == 200
        assert client.get_cookie("cardapio_install_dismissed") is not None

    def test_signal_installable_then_installed(self, client):
        client.post(f"{API}/pwa/signal", json={"installable": True})
        assert client.get_cookie("cardapio_pwa_installable").value == "1"

        client.post(f"{API}/pwa/signal", json={"installed": True})
        assert client.get_cookie("cardapio_pwa_installed").value == "1"
        assert client.get_cookie("cardapio_pwa_installable") is None

    def test_installable_cookie_lasts_for_the_session(self, client):
        response = client.post(f"{API}/pwa/signal", json={"installable": True})
        [header] = [
            h for h in response.headers.getlist("Set-Cookie") if h.startswith("cardapio_pwa_installable=")
        ]
        assert "Max-Age" not in header
        assert "Expires" not in header

    def test_signal_with_non_object_body(self, client):
        for body in ([1], "yes", None):
            response = client.post(f"{API}/pwa/signal", json=body)
            assert response.status_code == 200
        assert client.get_cookie("cardapio_pwa_installable") is None


class TestQueryCacheGrowth:
    def test_unknown_slugs_do_not_accumulate(self, client, clock, queries):
        for i in range(50):
            assert client.get(f"{API}/restaurants/nope-{i}").status_code == 404
        assert len(queries.cache) == 50

        clock.advance(300)
        client.get(f"{API}/restaurants/pizzaria-bella")
        assert len(queries.cache) == 1
