# tests/test_listing.py
import pytest


@pytest.fixture
def fifteen(create):
    return [create(name=f"Item {i}", price=i, category="a" if i % 3 else "b") for i in range(15)]


def test_default_listing(client, headers, fifteen):
    body = client.get("/api/products", headers=headers).json()
    assert body["total"] == 15
    assert body["page"] == 1
    assert body["limit"] == 10
    assert [p["id"] for p in body["data"]] == [p["id"] for p in fifteen[:10]]


def test_second_page(client, headers, fifteen):
    body = client.get("/api/products?page=2&limit=10", headers=headers).json()
    assert body["total"] == 15
    assert len(body["data"]) == 5
    assert body["data"] == fifteen[10:]


def test_empty_collection(client, headers):
    assert client.get("/api/products", headers=headers).json() == {"total": 0, "page": 1, "limit": 10, "data": []}


def test_category_filter_total_is_filtered_count(client, headers, fifteen):
    body = client.get("/api/products?category=a", headers=headers).json()
    assert body["total"] == 10
    assert all(p["category"] == "a" for p in body["data"])
    body = client.get("/api/products?category=b", headers=headers).json()
    assert body["total"] == 5


def test_name_search_is_case_insensitive(client, headers, create):
    create(name="Blue Widget", price=1)
    create(name="widget mini", price=2)
    create(name="Gadget", price=3)
    body = client.get("/api/products?q=WIDGET", headers=headers).json()
    assert body["total"] == 2
    assert [p["name"] for p in body["data"]] == ["Blue Widget", "widget mini"]


def test_filters_combine(client, headers, create):
    create(name="Red shirt", price=1, category="clothes")
    create(name="Red mug", price=2, category="kitchen")
    body = client.get("/api/products?category=kitchen&q=red", headers=headers).json()
    assert [p["name"] for p in body["data"]] == ["Red mug"]


def test_empty_filters_are_ignored(client, headers, fifteen):
    assert client.get("/api/products?category=&q=", headers=headers).json()["total"] == 15


@pytest.mark.parametrize("query,page,limit", [
    ("page=abc&limit=xyz", 1, 10),
    ("page=0&limit=0", 1, 10),
    ("page=2abc&limit=5.9", 2, 5),
    ("page=%20%203&limit=0x4", 3, 4),
])
def test_lenient_page_and_limit(client, headers, fifteen, query, page, limit):
    body = client.get(f"/api/products?{query}", headers=headers).json()
    assert body["page"] == page
    assert body["limit"] == limit


def test_large_limit_returns_everything(client, headers, fifteen):
    body = client.get("/api/products?limit=1000", headers=headers).json()
    assert len(body["data"]) == 15


def test_negative_page_uses_slice_semantics(client, headers, fifteen):
    # start=-20, end=-10 over 15 items -> the first five
    body = client.get("/api/products?page=-1&limit=10", headers=headers).json()
    assert body["page"] == -1
    assert body["data"] == fifteen[:5]


def test_page_past_the_end(client, headers, fifteen):
    body = client.get("/api/products?page=5", headers=headers).json()
    assert body["total"] == 15
    assert body["data"] == []
