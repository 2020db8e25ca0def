# backend/tests/conftest.py
import os

# Configure the app for tests before anything imports invoice_it
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["COOKIE_SECURE"] = "false"
os.environ["COOKIE_SAMESITE"] = "lax"
os.environ["FROM_EMAIL"] = "billing@invoice-it.io"

import pytest
from fastapi.testclient import TestClient

from invoice_it.core.database_utils import create_all_tables, drop_all_tables
from invoice_it.main import app

from tests.helpers import login, register


@pytest.fixture(autouse=True)
def fresh_database():
    create_all_tables()
    yield
    drop_all_tables()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user_client():
    """Factory: a TestClient logged in as a freshly registered account"""

    def _make(email="asha@verma-traders.in", business_name="Verma Traders"):
        c = TestClient(app)
        assert register(c, email=email, business_name=business_name).status_code == 201
        assert login(c, email=email).status_code == 200
        return c

    return _make


@pytest.fixture
def user_client(make_user_client):
    return make_user_client()


@pytest.fixture
def other_client(make_user_client):
    return make_user_client(email="ravi@kapoor-stores.in", business_name="Kapoor Stores")

