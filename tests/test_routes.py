"""
Integration tests for the JSON routes.

Uses the Flask test client against create_app() with the testing config
and an in-memory menu.
"""

import pytest

from app import create_app
from models.menu import MenuItem
from modules.menu_catalog import MenuCatalog


class FixedCatalog(MenuCatalog):
    source_name = "fixed"

    def __init__(self, items):
        self.items = items

    def _load_items(self):
        return list(self.items)


class DownCatalog(MenuCatalog):
    source_name = "down"

    def _load_items(self):
        raise ConnectionError("menu API down")


MENU = [
    MenuItem(id="m01", name="Edamame", price=550, category="Snacks", recommend=80),
    MenuItem(id="m02", name="Negima", price=600, category="Skewers", recommend=20),
    MenuItem(id="m03", name="Karaage", price=700, category="Fried", sold_out=True),
]


# Fixtures

@pytest.fixture
def app():
    return create_app("config.TestingConfig", catalog=FixedCatalog(MENU))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def down_client():
    return create_app("config.TestingConfig", catalog=DownCatalog()).test_client()


class TestSeatRoutes:

    def test_default_seat(self, client):
        response = client.get("/api/seat")
        assert response.status_code == 200
        assert response.get_json()["seatId"] == "C-01"

    def test_select_seat_is_remembered(self, client):
        response = client.post("/api/seat", json={"seatId": "b3"})
        assert response.status_code == 200
        assert response.get_json()["seatId"] == "B-03"

        assert client.get("/api/seat").get_json()["seatId"] == "B-03"
        with client.session_transaction() as session:
            assert session["seat_id"] == "B-03"

    def test_select_seat_from_form(self, client):
        response = client.post("/api/seat", data={"seatId": "A 2"})
        assert response.get_json()["seatId"] == "A-02"

    def test_invalid_seat(self, client):
        response = client.post("/api/seat", json={"seatId": "table nine"})
        assert response.status_code == 400
        body = response.get_json()
        assert body["success"] is False
        assert body["errorType"] == "ValidationError"
        assert client.get("/api/seat").get_json()["seatId"] == "C-01"

    def test_seat_options(self, client):
        seats = client.get("/api/seats").get_json()["seats"]
        assert len(seats) == 30
        assert seats[-1]["value"] == "B-15"


class TestCartRoutes:

    def test_add_and_read_cart(self, client):
        client.post("/api/cart/add", json={"itemId": "m01"})
        response = client.post("/api/cart/add", json={"itemId": "m01"})
        assert response.get_json()["cart"] == {"m01": 2}

        body = client.get("/api/cart").get_json()
        assert body["seatId"] == "C-01"
        assert body["total"] == 1100
        assert body["count"] == 2
        assert body["deliveryStatus"] == {"delivered": 0, "pending": 0}

    def test_markup_is_stripped_from_item_id(self, client):
        response = client.post("/api/cart/add", data={"itemId": "<b>m02</b>"})
        assert response.get_json()["cart"] == {"m02": 1}

    def test_update_and_decrement(self, client):
        client.post("/api/cart/update", json={"itemId": "m01", "quantity": 3})
        response = client.post("/api/cart/decrement", json={"itemId": "m01"})
        assert response.get_json()["cart"] == {"m01": 2}

        response = client.post("/api/cart/update", json={"itemId": "m01", "quantity": 0})
        assert response.get_json()["cart"] == {}

    def test_bad_quantity(self, client):
        response = client.post("/api/cart/update", json={"itemId": "m01", "quantity": "lots"})
        assert response.status_code == 400

    def test_sold_out(self, client):
        response = client.post("/api/cart/add", json={"itemId": "m03"})
        assert response.status_code == 400
        assert "sold out" in response.get_json()["error"]

    @pytest.mark.parametrize("item_id", [5, ["m01"], None])
    def test_non_string_item_id_is_a_bad_request(self, client, item_id):
        response = client.post("/api/cart/add", json={"itemId": item_id})
        assert response.status_code == 400
        assert response.get_json()["errorType"] == "ValidationError"

    def test_infinite_quantity_is_a_bad_request(self, client):
        response = client.post(
            "/api/cart/update",
            data='{"itemId": "m01", "quantity": Infinity}',
            content_type="application/json",
        )
        assert response.status_code == 400
        assert client.get("/api/cart").get_json()["cart"] == {}

    def test_fractional_quantity_is_a_bad_request(self, client):
        response = client.post("/api/cart/update", json={"itemId": "m01", "quantity": 2.5})
        assert response.status_code == 400

    def test_ampersand_in_item_id_survives(self, client):
        response = client.post("/api/cart/add", data={"itemId": "a&b"})
        assert response.get_json()["cart"] == {"a&b": 1}

    def test_overlong_item_id_rejected_not_truncated(self, client):
        response = client.post("/api/cart/add", json={"itemId": "m" * 80})
        assert response.status_code == 400
        assert client.get("/api/cart").get_json()["cart"] == {}

    def test_unknown_action(self, client):
        assert client.post("/api/cart/explode", json={"itemId": "m01"}).status_code == 404

    def test_carts_are_per_seat(self, app):
        first = app.test_client()
        second = app.test_client()
        first.post("/api/seat", json={"seatId": "A-01"})
        second.post("/api/seat", json={"seatId": "A-02"})

        first.post("/api/cart/add", json={"itemId": "m01"})

        assert second.get("/api/cart").get_json()["cart"] == {}
        assert first.get("/api/cart").get_json()["cart"] == {"m01": 1}

    def test_two_terminals_share_a_seat(self, app):
        first = app.test_client()
        second = app.test_client()
        for terminal in (first, second):
            terminal.post("/api/seat", json={"seatId": "B-07"})

        first.post("/api/cart/add", json={"itemId": "m01"})
        second.post("/api/cart/add", json={"itemId": "m02"})

        assert first.get("/api/cart").get_json()["cart"] == {"m01": 1, "m02": 1}


class TestOrderRoutes:

    def _confirm(self, client):
        client.post("/api/cart/update", json={"itemId": "m01", "quantity": 2})
        client.post("/api/cart/add", json={"itemId": "m02"})
        return client.post("/api/orders/confirm")

    def test_confirm(self, client):
        response = self._confirm(client)
        assert response.status_code == 200
        orders = response.get_json()["orders"]
        assert [(o["id"], o["qty"], o["price"]) for o in orders] == [("m01", 2, 550), ("m02", 1, 600)]
        assert client.get("/api/cart").get_json()["cart"] == {}

    def test_confirm_empty_cart(self, client):
        response = client.post("/api/orders/confirm")
        assert response.status_code == 400
        assert response.get_json()["errorType"] == "EmptyCartError"

    def test_history_and_toggle(self, client):
        orders = self._confirm(client).get_json()["orders"]
        record_id = orders[0]["recordId"]

        response = client.post(f"/api/orders/{record_id}/toggle")
        assert response.get_json()["order"]["delivered"] is True
        assert response.get_json()["message"] == "Marked as delivered"

        body = client.get("/api/orders?filter=pending").get_json()
        assert [o["id"] for o in body["orders"]] == ["m02"]
        assert body["deliveryStatus"] == {"delivered": 2, "pending": 1}

    def test_get_one_order(self, client):
        record_id = self._confirm(client).get_json()["orders"][1]["recordId"]
        response = client.get(f"/api/orders/{record_id}")
        assert response.status_code == 200
        assert response.get_json()["order"]["id"] == "m02"
        assert client.get("/api/orders/999").status_code == 404

    def test_set_delivered(self, client):
        record_id = self._confirm(client).get_json()["orders"][1]["recordId"]
        for _ in range(2):
            response = client.post(f"/api/orders/{record_id}/delivered", json={"delivered": True})
            assert response.get_json()["order"]["delivered"] is True

        response = client.post(f"/api/orders/{record_id}/delivered", data={"delivered": "false"})
        assert response.get_json()["order"]["delivered"] is False

    def test_toggle_missing(self, client):
        self._confirm(client)
        response = client.post("/api/orders/999/toggle")
        assert response.status_code == 404
        assert response.get_json()["errorType"] == "NotFoundError"

    def test_delete(self, client):
        record_id = self._confirm(client).get_json()["orders"][0]["recordId"]

        first = client.delete(f"/api/orders/{record_id}")
        assert first.status_code == 200
        assert first.get_json()["removed"] is True

        again = client.delete(f"/api/orders/{record_id}")
        assert again.status_code == 200
        assert again.get_json()["success"] is False

    def test_clear(self, client):
        self._confirm(client)
        response = client.post("/api/orders/clear")
        assert response.get_json()["removed"] == 2
        assert client.get("/api/orders").get_json()["orders"] == []

    def test_invalid_filter(self, client):
        assert client.get("/api/orders?filter=eaten").status_code == 400


class TestStaffCallRoute:

    def test_call_then_throttled(self, client):
        first = client.post("/api/call")
        assert first.status_code == 200
        assert first.get_json()["message"] == "Staff has been called (seat: C-01)"

        second = client.post("/api/call")
        assert second.status_code == 429
        assert 1 <= second.get_json()["remainingSeconds"] <= 30

    def test_other_seat_not_throttled(self, app):
        first = app.test_client()
        second = app.test_client()
        second.post("/api/seat", json={"seatId": "C-02"})

        assert first.post("/api/call").status_code == 200
        assert second.post("/api/call").status_code == 200


class TestMenuAndStatusRoutes:

    def test_menu(self, client):
        body = client.get("/api/menu").get_json()
        assert [item["id"] for item in body["items"]] == ["m01", "m02", "m03"]
        assert body["items"][2]["soldOut"] is True
        assert body["categories"] == ["Snacks", "Skewers", "Fried"]

    def test_menu_search(self, client):
        body = client.get("/api/menu?search=NEGI").get_json()
        assert [item["id"] for item in body["items"]] == ["m02"]

    def test_menu_non_string_search(self, client):
        response = client.get("/api/menu", json={"search": 5})
        assert response.status_code == 400

    def test_menu_unavailable(self, down_client):
        response = down_client.get("/api/menu")
        assert response.status_code == 503
        assert response.get_json()["errorType"] == "CatalogUnavailableError"

    def test_cart_survives_catalog_outage(self, down_client):
        down_client.post("/api/cart/add", json={"itemId": "m01"})
        body = down_client.get("/api/cart").get_json()
        assert body["cart"] == {"m01": 1}
        assert body["total"] == 0

    def test_index(self, client):
        body = client.get("/").get_json()
        assert body["storeName"]
        assert body["seatId"] == "C-01"
        assert "displayText" in body["lastOrder"]

    def test_last_order(self, client):
        body = client.get("/api/last-order").get_json()
        assert body["minutesRemaining"] >= 0

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["checks"]["menu_catalog"] == "ok"

    def test_health_degraded(self, down_client):
        response = down_client.get("/health")
        assert response.status_code == 503
        assert response.get_json()["status"] == "degraded"

    def test_unknown_url_is_json(self, client):
        response = client.get("/nope")
        assert response.status_code == 404
        assert response.get_json()["success"] is False
