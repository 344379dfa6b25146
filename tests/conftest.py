# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import ProductStore
from catalog.main import create_app

API_KEY = "test-secret"
HEADERS = {"x-api-key": API_KEY}


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(store):
    return create_app(Settings(api_key=API_KEY), store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def create(client):
    def _create(**body):
        r = client.post("/api/products", json=body, headers=HEADERS)
        assert r.status_code == 201, r.text
        return r.json()
    return _create


@pytest.fixture
def headers():
    return dict(HEADERS)
