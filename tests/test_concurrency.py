# tests/test_concurrency.py
from concurrent.futures import ThreadPoolExecutor

import pytest

from catalog.core import CatalogError, make_product
from catalog.database import ProductStore


def test_concurrent_inserts_keep_every_product():
    store = ProductStore()
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda i: store.insert(make_product(f"id-{i}", {"name": "p", "price": i})), range(200)))
    assert len(store) == 200
    assert len({p["id"] for p in store.list()}) == 200


def test_concurrent_updates_are_not_lost():
    store = ProductStore()
    store.insert({"id": "counter", "name": "c", "price": 0})

    def bump(_):
        return store.update("counter", lambda p: {**p, "price": p["price"] + 1})

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(bump, range(300)))
    assert store.get("counter")["price"] == 300


def test_concurrent_removes_remove_each_product_once():
    store = ProductStore()
    store.clear([{"id": str(i), "name": "p", "price": i} for i in range(100)])

    def remove(i):
        try:
            return store.remove(str(i % 100))
        except CatalogError:
            return None

    with ThreadPoolExecutor(max_workers=8) as pool:
        removed = [r for r in pool.map(remove, range(200)) if r is not None]
    assert len(removed) == 100
    assert len(store) == 0


def test_list_is_a_snapshot():
    store = ProductStore()
    store.insert({"id": "a", "name": "a", "price": 1})
    snapshot = store.list()
    store.insert({"id": "b", "name": "b", "price": 2})
    assert [p["id"] for p in snapshot] == ["a"]
    with pytest.raises(CatalogError):
        store.get("b-missing")
