from tests.helpers import create_product


def test_create_and_list_products(user_client):
    rack = create_product(user_client, title="Steel Rack", price=2499.0, description="5 shelves")
    create_product(user_client, title="Bin", price=120.5)

    assert rack["price"] == 2499.0
    assert rack["description"] == "5 shelves"

    resp = user_client.get("/api/v1/products/")
    assert resp.status_code == 200
    titles = [p["title"] for p in resp.json()]
    assert titles == ["Steel Rack", "Bin"]


def test_products_require_authentication(client):
    assert client.get("/api/v1/products/").status_code == 401
    assert client.post("/api/v1/products/", json={"title": "x", "price": 1}).status_code == 401


def test_negative_price_rejected(user_client):
    resp = user_client.post("/api/v1/products/", json={"title": "Refund", "price": -1})
    assert resp.status_code == 422


def test_partial_update_keeps_description(user_client):
    product = create_product(user_client, description="Galvanised")

    resp = user_client.put(
        f"/api/v1/products/{product['id']}",
        json={"title": "Steel Rack XL", "price": 2999},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Steel Rack XL"
    assert body["price"] == 2999.0
    assert body["description"] == "Galvanised"


def test_update_cannot_clear_required_fields(user_client):
    product = create_product(user_client)
    url = f"/api/v1/products/{product['id']}"

    assert user_client.put(url, json={"price": None}).status_code == 422
    assert user_client.put(url, json={"title": None}).status_code == 422

    # description is optional and may be cleared
    resp = user_client.put(url, json={"description": None})
    assert resp.status_code == 200
    assert resp.json()["description"] is None

    stored = user_client.get(url).json()
    assert stored["title"] == "Steel Rack"
    assert stored["price"] == 2499.0


def test_products_are_tenant_scoped(user_client, other_client):
    mine = create_product(user_client)
    create_product(other_client, title="Kapoor Shelf")

    assert [p["title"] for p in other_client.get("/api/v1/products/").json()] == ["Kapoor Shelf"]

    assert other_client.get(f"/api/v1/products/{mine['id']}").status_code == 404
    resp = other_client.put(f"/api/v1/products/{mine['id']}", json={"price": 1})
    assert resp.status_code == 404

    # Untouched for the owner
    assert user_client.get(f"/api/v1/products/{mine['id']}").json()["price"] == 2499.0


def test_missing_product_is_not_found(user_client):
    assert user_client.get("/api/v1/products/424242").status_code == 404
