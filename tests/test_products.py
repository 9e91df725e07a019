"""Tests for Product API endpoints."""
from unittest.mock import patch

from product_api.services.exceptions import StoreFault


def test_create_product(client):
    """Test creating a new product."""
    response = client.post(
        "/api/v1/products",
        json={
            "name": "Test Product",
            "price": 99.99,
            "description": "A product for testing",
            "stock": 10
        }
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Test Product"
    assert data["price"] == 99.99
    assert data["description"] == "A product for testing"
    assert data["stock"] == 10
    assert 100000 <= data["id"] <= 999999
    assert "created_at" in data
    assert response.headers["location"].endswith(f"/api/v1/products/{data['id']}")


def test_create_product_ignores_client_id(client):
    """Test that an id in the request body is not used."""
    response = client.post(
        "/api/v1/products",
        json={"id": 42, "name": "Test Product", "price": 5.00, "stock": 1}
    )

    assert response.status_code == 201
    assert response.json()["id"] != 42


def test_create_product_default_stock(client):
    """Test that stock defaults to zero when omitted."""
    response = client.post(
        "/api/v1/products",
        json={"name": "No Stock", "price": 5.00}
    )

    assert response.status_code == 201
    assert response.json()["stock"] == 0


def test_create_product_invalid_price(client):
    """Test creating product with invalid price fails."""
    response = client.post(
        "/api/v1/products",
        json={
            "name": "Test Product",
            "price": -10.00,  # Invalid: negative price
            "stock": 10
        }
    )

    assert response.status_code == 400


def test_create_product_invalid_stock(client):
    """Test creating product with negative stock fails."""
    response = client.post(
        "/api/v1/products",
        json={
            "name": "Test Product",
            "price": 99.99,
            "stock": -5  # Invalid: negative stock
        }
    )

    assert response.status_code == 400


def test_create_product_missing_name(client):
    """Test creating product without a name fails."""
    response = client.post(
        "/api/v1/products",
        json={"price": 99.99, "stock": 1}
    )

    assert response.status_code == 400


def test_created_products_have_unique_ids(client, create_product):
    """Test that every created product gets its own id."""
    ids = {create_product(name=f"Product {i}")["id"] for i in range(20)}

    assert len(ids) == 20


def test_get_product(client, create_product):
    """Test getting a product by ID."""
    created = create_product(name="Test Product", price=50.00, stock=5)

    response = client.get(f"/api/v1/products/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_product_not_found(client):
    """Test getting non-existent product returns 404."""
    response = client.get("/api/v1/products/9999")

    assert response.status_code == 404


def test_list_products(client, create_product):
    """Test listing all products."""
    for i in range(15):
        create_product(name=f"Product {i}", price=10.00 + i)

    response = client.get("/api/v1/products")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 15
    assert [item["id"] for item in data] == sorted(item["id"] for item in data)


def test_list_products_empty(client):
    """Test listing with no products returns an empty list."""
    response = client.get("/api/v1/products")

    assert response.status_code == 200
    assert response.json() == []


def test_update_product(client, create_product):
    """Test updating a product."""
    created = create_product(name="Original Name", price=50.00, stock=10)
    product_id = created["id"]

    response = client.put(
        f"/api/v1/products/{product_id}",
        json={"name": "Updated Name", "price": 75.00}
    )

    assert response.status_code == 204

    data = client.get(f"/api/v1/products/{product_id}").json()
    assert data["name"] == "Updated Name"
    assert data["price"] == 75.00
    assert data["stock"] == 10  # Stock should remain unchanged
    assert data["created_at"] == created["created_at"]


def test_update_product_partial(client, create_product):
    """Test that omitted and null fields are preserved."""
    created = create_product(name="A", price=10.00, stock=5, description="Keep me")
    product_id = created["id"]

    response = client.put(
        f"/api/v1/products/{product_id}",
        json={"name": "B", "description": None}
    )

    assert response.status_code == 204
    data = client.get(f"/api/v1/products/{product_id}").json()
    assert data["name"] == "B"
    assert data["price"] == 10.00
    assert data["stock"] == 5
    assert data["description"] == "Keep me"


def test_update_product_stock_syncs_stock_record(client, create_product):
    """Test that setting stock through an update is visible on the stock endpoint."""
    product_id = create_product(stock=5)["id"]

    client.put(f"/api/v1/products/{product_id}", json={"stock": 12})

    response = client.get(f"/api/v1/products/{product_id}/stock")
    assert response.json() == {"product_id": product_id, "stock": 12}


def test_update_product_not_found(client):
    """Test updating a non-existent product returns 404."""
    response = client.put("/api/v1/products/9999", json={"name": "Ghost"})

    assert response.status_code == 404


def test_update_product_invalid_body(client, create_product):
    """Test updating with a negative stock is rejected."""
    product_id = create_product(stock=5)["id"]

    response = client.put(f"/api/v1/products/{product_id}", json={"stock": -1})

    assert response.status_code == 400
    assert client.get(f"/api/v1/products/{product_id}").json()["stock"] == 5


def test_delete_product(client, create_product):
    """Test deleting a product."""
    product_id = create_product(name="To Delete", price=25.00, stock=5)["id"]

    response = client.delete(f"/api/v1/products/{product_id}")
    assert response.status_code == 204

    # Verify it's deleted
    get_response = client.get(f"/api/v1/products/{product_id}")
    assert get_response.status_code == 404


def test_delete_product_twice(client, create_product):
    """Test deleting an already deleted product returns 404."""
    product_id = create_product()["id"]

    client.delete(f"/api/v1/products/{product_id}")
    response = client.delete(f"/api/v1/products/{product_id}")

    assert response.status_code == 404


def test_list_products_store_fault_returns_500(client):
    """Test that a wrapped store fault is answered with 500."""
    with patch(
        "product_api.services.product_service.ProductRepository.get_all",
        side_effect=StoreFault("connection refused")
    ):
        response = client.get("/api/v1/products")

    assert response.status_code == 500
    assert response.json()["detail"] == "An error occurred while retrieving products."
