"""Request helpers shared by the API tests"""


def register(client, email="asha@verma-traders.in", password="s3cret-pass", **extra):
    payload = {
        "name": "Asha Verma",
        "email": email,
        "password": password,
        "business_name": "Verma Traders",
        "phone": "+91 98200 00000",
        "address": "12 MG Road, Pune",
        "gstin": "27aapfu0939f1zv",
    }
    payload.update(extra)
    return client.post("/api/v1/auth/register", json=payload)


def login(client, email="asha@verma-traders.in", password="s3cret-pass"):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


def create_product(c, title="Steel Rack", price=2499.0, **extra):
    resp = c.post("/api/v1/products/", json={"title": title, "price": price, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_customer(c, name="Meera Shah", email="meera@shah-exports.in", **extra):
    payload = {"name": name, "email": email, "phone": "+91 90000 11111", "address": "Surat"}
    payload.update(extra)
    resp = c.post("/api/v1/customers/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()
