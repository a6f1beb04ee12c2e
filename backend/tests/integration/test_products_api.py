"""
Integration tests for the product catalog endpoints.

Requests go through the full ASGI stack against the seeded in-memory database.
"""

import pytest


class TestCreateProduct:

    @pytest.mark.anyio
    async def test_create_product(self, client):
        """
        Test product creation.

        Arrange: Valid camelCase body
        Act: POST /api/products
        Assert: 201 with string id, EUR price and stock
        """
        # Act
        response = await client.post(
            "/api/products",
            json={"name": "Monitor", "description": "27 inch", "price": 349.9, "stockQuantity": 12},
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["productId"], str)
        assert data["name"] == "Monitor"
        assert data["price"] == 349.9
        assert data["currency"] == "EUR"
        assert data["stockQuantity"] == 12

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "body",
        [
            {"name": "", "price": 10, "stockQuantity": 1},
            {"name": "   ", "price": 10, "stockQuantity": 1},
            {"name": "Thing", "price": 0, "stockQuantity": 1},
            {"name": "Thing", "price": -5, "stockQuantity": 1},
            {"name": "Thing", "price": 0.001, "stockQuantity": 1},
            {"name": "Thing", "price": 9.999, "stockQuantity": 1},
            {"name": "Thing", "price": 10, "stockQuantity": -1},
            {"price": 10, "stockQuantity": 1},
        ],
    )
    async def test_invalid_body_returns_400(self, client, body):
        response = await client.post("/api/products", json=body)

        assert response.status_code == 400
        assert "detail" in response.json()


class TestReadProducts:

    @pytest.mark.anyio
    async def test_get_product(self, client):
        response = await client.get("/api/products/1")

        assert response.status_code == 200
        data = response.json()
        assert data["productId"] == "1"
        assert data["name"] == "Laptop"
        assert data["price"] == 1299.99

    @pytest.mark.anyio
    async def test_get_missing_product_returns_404(self, client):
        response = await client.get("/api/products/9999")

        assert response.status_code == 404

    @pytest.mark.anyio
    async def test_list_products(self, client):
        response = await client.get("/api/products")

        assert response.status_code == 200
        names = [p["name"] for p in response.json()]
        assert "Laptop" in names
        assert "Smartphone" in names

    @pytest.mark.anyio
    async def test_search_products(self, client):
        response = await client.get("/api/products/search", params={"name": "Computer"})

        assert response.status_code == 200
        assert len(response.json()) == 2

    @pytest.mark.anyio
    async def test_search_requires_name(self, client):
        response = await client.get("/api/products/search")

        assert response.status_code == 400

    @pytest.mark.anyio
    @pytest.mark.parametrize("term", ["%", "_", "Lap%"])
    async def test_search_treats_wildcards_literally(self, client, term):
        response = await client.get("/api/products/search", params={"name": term})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.anyio
    async def test_oversized_product_id_returns_400(self, client):
        response = await client.get("/api/products/99999999999999999999")

        assert response.status_code == 400


class TestDeleteProduct:

    @pytest.mark.anyio
    async def test_delete_product(self, client):
        created = await client.post(
            "/api/products", json={"name": "Temp", "price": 1, "stockQuantity": 0}
        )
        product_id = created.json()["productId"]

        response = await client.delete(f"/api/products/{product_id}")

        assert response.status_code == 204
        assert (await client.get(f"/api/products/{product_id}")).status_code == 404

    @pytest.mark.anyio
    async def test_delete_missing_product_returns_404(self, client):
        response = await client.delete("/api/products/9999")

        assert response.status_code == 404
