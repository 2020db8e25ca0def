from tests.helpers import create_customer


def test_create_customer(user_client):
    customer = create_customer(user_client)
    assert customer["name"] == "Meera Shah"
    assert customer["email"] == "meera@shah-exports.in"


def test_invalid_customer_email_rejected(user_client):
    resp = user_client.post("/api/v1/customers/", json={"name": "Nope", "email": "not-an-email"})
    assert resp.status_code == 422


def test_customer_pagination(user_client):
    for i in range(3):
        create_customer(user_client, name=f"Customer {i}", email=f"c{i}@shah-exports.in")

    first = user_client.get("/api/v1/customers/", params={"page": 1, "limit": 2}).json()
    assert first["total"] == 3
    assert first["page"] == 1
    assert first["limit"] == 2
    assert [c["name"] for c in first["customers"]] == ["Customer 0", "Customer 1"]

    second = user_client.get("/api/v1/customers/", params={"page": 2, "limit": 2}).json()
    assert [c["name"] for c in second["customers"]] == ["Customer 2"]


def test_customer_pagination_bounds(user_client):
    assert user_client.get("/api/v1/customers/", params={"page": 0}).status_code == 422
    assert user_client.get("/api/v1/customers/", params={"limit": 1000}).status_code == 422


def test_update_customer(user_client):
    customer = create_customer(user_client)
    resp = user_client.put(
        f"/api/v1/customers/{customer['id']}",
        json={"phone": "+91 90000 22222"},
    )
    assert resp.status_code == 200
    assert resp.json()["phone"] == "+91 90000 22222"
    assert resp.json()["name"] == "Meera Shah"


def test_update_cannot_clear_name_or_email(user_client):
    customer = create_customer(user_client)
    url = f"/api/v1/customers/{customer['id']}"

    assert user_client.put(url, json={"name": None}).status_code == 422
    assert user_client.put(url, json={"email": None}).status_code == 422

    stored = user_client.get(url).json()
    assert stored["name"] == "Meera Shah"
    assert stored["email"] == "meera@shah-exports.in"


def test_customers_are_tenant_scoped(user_client, other_client):
    mine = create_customer(user_client)

    listing = other_client.get("/api/v1/customers/").json()
    assert listing["total"] == 0
    assert listing["customers"] == []

    assert other_client.get(f"/api/v1/customers/{mine['id']}").status_code == 404
    resp = other_client.put(f"/api/v1/customers/{mine['id']}", json={"name": "Hijacked"})
    assert resp.status_code == 404

    assert user_client.get(f"/api/v1/customers/{mine['id']}").json()["name"] == "Meera Shah"
