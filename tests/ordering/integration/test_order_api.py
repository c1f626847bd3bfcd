"""Integration tests for the order history and tracking endpoints."""


def _checkout(client, *product_ids):
    for product_id in product_ids:
        client.post("/cart/items", json={"product_id": product_id})
    return client.post("/cart/checkout", json={}).json()


class TestListOrders:
    def test_empty_history(self, client):
        assert client.get("/orders").json() == []

    def test_most_recent_first(self, client):
        first = _checkout(client, "beer")
        second = _checkout(client, "soda", "water")

        data = client.get("/orders").json()
        assert [o["order_id"] for o in data] == [second["order_id"], first["order_id"]]
        assert data[0]["headline"] == f"#{second['order_id']} • recebido"
        assert data[0]["caption"] == "2 itens • R$ 18,90"


class TestGetOrder:
    def test_detail(self, client):
        placed = _checkout(client, "beer", "beer")
        data = client.get(f"/orders/{placed['order_id']}").json()
        assert data["items"][0]["quantity"] == 2
        assert data["subtotal"] == "20.00"
        assert data["total_display"] == "R$ 28,90"

    def test_unknown_order(self, client):
        response = client.get("/orders/999")
        assert response.status_code == 404

    def test_status_moves_with_the_clock(self, client, clock):
        placed = _checkout(client, "beer")
        clock.advance(6)
        data = client.get(f"/orders/{placed['order_id']}").json()
        assert data["status"] == "Out_For_Delivery"
        assert data["status_label"] == "a caminho"


class TestTracking:
    def test_no_active_order(self, client):
        response = client.get("/orders/active")
        assert response.status_code == 200
        assert response.json() is None

    def test_active_order_steps(self, client, clock):
        placed = _checkout(client, "beer")
        clock.advance(3)
        data = client.get("/orders/active").json()

        assert data["order_id"] == placed["order_id"]
        assert data["current_step"] == 1
        assert data["delivered"] is False
        assert [s["label"] for s in data["steps"]] == ["RECEBIDO", "PREPARANDO", "A CAMINHO", "ENTREGUE"]
        assert [s["reached"] for s in data["steps"]] == [True, True, False, False]

    def test_delivered(self, client, clock):
        placed = _checkout(client, "beer")
        clock.advance(10)
        data = client.get(f"/orders/{placed['order_id']}/tracking").json()
        assert data["delivered"] is True
        assert all(s["reached"] for s in data["steps"])

    def test_track_past_order(self, client):
        first = _checkout(client, "beer")
        _checkout(client, "soda")

        response = client.post(f"/orders/{first['order_id']}/track")
        assert response.status_code == 200
        assert client.get("/orders/active").json()["order_id"] == first["order_id"]

    def test_track_unknown_order(self, client):
        assert client.post("/orders/12345/track").status_code == 404


class TestHealth:
    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert data["catalogue"]["products"] == 3
