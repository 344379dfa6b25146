# tests/test_sdk_client.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from sdk.pystore import CatalogClient

API_KEY = "test-secret"


@pytest.fixture
def sdk_client(app):
    # TestClient speaks the same get/post/put/delete surface as a requests session
    return CatalogClient(base_url="http://testserver", api_key=API_KEY, session=TestClient(app))


def test_create_get_list_delete(sdk_client):
    created = sdk_client.create_product("Widget", 9.99, category="tools", in_stock=True)
    assert created["inStock"] is True
    assert "description" not in created
    assert sdk_client.get_product(created["id"]) == created

    page = sdk_client.list_products(category="tools", q="widg", page=1, limit=5)
    assert page["total"] == 1
    assert page["limit"] == 5

    assert sdk_client.delete_product(created["id"]) == created
    with pytest.raises(httpx.HTTPStatusError):
        sdk_client.get_product(created["id"])


def test_update_fills_in_required_fields(sdk_client):
    created = sdk_client.create_product("Lamp", 20, category="home")
    updated = sdk_client.update_product(created["id"], in_stock=False)
    assert updated == {**created, "inStock": False}
    assert sdk_client.update_product(created["id"], price=30)["price"] == 30


def test_wrong_key_raises(app):
    c = CatalogClient(base_url="http://testserver", api_key="wrong", session=TestClient(app))
    with pytest.raises(httpx.HTTPStatusError):
        c.list_products()


def test_create_product_async(app, store):
    c = CatalogClient(base_url="http://testserver", api_key=API_KEY)
    created = asyncio.run(c.create_product_async("Async", 1, transport=httpx.ASGITransport(app=app)))
    assert created["name"] == "Async"
    assert store.get(created["id"]) == created
