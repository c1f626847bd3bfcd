"""Integration tests for the checkout preferences endpoints."""


class TestPreferences:
    def test_defaults(self, client):
        response = client.get("/profile/preferences")
        assert response.status_code == 200
        assert response.json() == {"address": "Av. Paulista, 1000", "payment_method": "Pix"}

    def test_update(self, client):
        response = client.put("/profile/preferences", json={"address": "Rua Augusta, 500", "payment_method": "card"})
        assert response.status_code == 200
        assert response.json() == {"address": "Rua Augusta, 500", "payment_method": "Cartão"}
        assert client.get("/profile/preferences").json()["payment_method"] == "Cartão"

    def test_partial_update(self, client):
        client.put("/profile/preferences", json={"payment_method": "Dinheiro"})
        data = client.get("/profile/preferences").json()
        assert data == {"address": "Av. Paulista, 1000", "payment_method": "Dinheiro"}

    def test_unknown_payment_method(self, client):
        response = client.put("/profile/preferences", json={"payment_method": "Bitcoin"})
        assert response.status_code == 422
        assert "payment_method" in response.json()["errors"]

    def test_blank_address(self, client):
        response = client.put("/profile/preferences", json={"address": " "})
        assert response.status_code == 422
        assert "address" in response.json()["errors"]

    def test_checkout_uses_preferences(self, client):
        client.put("/profile/preferences", json={"address": "Rua Augusta, 500", "payment_method": "Dinheiro"})
        client.post("/cart/items", json={"product_id": "beer"})

        response = client.post("/cart/checkout", json={})
        assert response.status_code == 201
        data = response.json()
        assert data["address"] == "Rua Augusta, 500"
        assert data["payment_method"] == "Dinheiro"
