"""Integration tests for the product listing endpoint via TestClient."""

import pytest
from app import create_app
from fastapi.testclient import TestClient
from shared.settings import Settings


@pytest.fixture()
def client():
    return TestClient(create_app(Settings(seed_catalogue=False)))


class TestListProducts:
    def test_empty_catalogue(self, client):
        response = client.get("/api/products")
        assert response.status_code == 200
        assert response.json() == []

    def test_lifespan_seeds_catalogue(self):
        with TestClient(create_app(Settings(seed_catalogue=True))) as client:
            response = client.get("/api/products")

        assert response.status_code == 200
        products = response.json()
        assert len(products) == 8
        assert {"id", "name", "price", "image", "description"} <= set(products[0])
        assert {p["name"] for p in products} >= {"Wireless Headphones", "Smart Watch"}

    def test_listing_is_public(self, client):
        response = client.get("/api/products", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 200


class TestCartWithSeededCatalogue:
    def test_add_seeded_product_to_cart(self):
        with TestClient(create_app(Settings(seed_catalogue=True))) as client:
            product = next(p for p in client.get("/api/products").json() if p["name"] == "Wireless Headphones")
            token = client.post(
                "/api/auth/register",
                json={"name": "Alice", "email": "alice@example.com", "password": "secret123"},
            ).json()["token"]
            headers = {"Authorization": f"Bearer {token}"}

            client.post("/api/cart", json={"productId": product["id"], "quantity": 3}, headers=headers)
            receipt = client.post("/api/checkout", json={"customerInfo": {"name": "Alice"}}, headers=headers).json()

        assert receipt["total"] == 299.97
        assert receipt["items"][0]["name"] == "Wireless Headphones"
