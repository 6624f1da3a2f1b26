"""Catalog read tests"""
from fastapi.testclient import TestClient


class TestListProducts:
    def test_lists_seeded_catalog(self, client: TestClient):
        response = client.get("/api/v1/products")

        assert response.status_code == 200
        assert len(response.json()) == 12

    def test_featured_first_then_newest(self, client: TestClient):
        products = client.get("/api/v1/products").json()

        ids = [product["id"] for product in products]
        assert ids == [11, 5, 3, 2, 1, 12, 10, 9, 8, 7, 6, 4]
        assert all(product["is_featured"] for product in products[:5])
        assert not any(product["is_featured"] for product in products[5:])

    def test_listing_needs_no_session(self, client: TestClient):
        assert client.get("/api/v1/auth/session").json()["authenticated"] is False
        assert client.get("/api/v1/products").status_code == 200


class TestGetProduct:
    def test_get_product(self, client: TestClient):
        response = client.get("/api/v1/products/1")

        assert response.status_code == 200
        product = response.json()
        assert product["name"] == "Celestial Chronograph"
        assert product["price"] == 2499.99
        assert product["previous_price"] == 2999.99
        assert product["on_sale"] is True
        assert product["brand"] == "Angel Swiss"
        assert product["stock"] == 5

    def test_product_without_previous_price_is_not_on_sale(self, client: TestClient):
        product = client.get("/api/v1/products/2").json()

        assert product["previous_price"] is None
        assert product["on_sale"] is False

    def test_missing_product(self, client: TestClient):
        response = client.get("/api/v1/products/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_oversized_id(self, client: TestClient):
        response = client.get(f"/api/v1/products/{10**20}")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_non_numeric_id(self, client: TestClient):
        response = client.get("/api/v1/products/abc")

        assert response.status_code == 400
