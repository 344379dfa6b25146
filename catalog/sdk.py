from typing import Optional, Dict, Any

from .core import (
    int_or_default, make_product, merge_product, new_product_id
)
from .database import ProductStore

# This file contains the core logic for all API endpoints.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    q: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    result = store.list()

    if category:
        result = [p for p in result if p.get("category") == category]

    if q:
        term = q.lower()
        result = [p for p in result if term in str(p.get("name", "")).lower()]

    page_no = int_or_default(page, DEFAULT_PAGE)
    per_page = int_or_default(limit, DEFAULT_LIMIT)
    start = (page_no - 1) * per_page
    end = start + per_page

    return {
        "total": len(result),
        "page": page_no,
        "limit": per_page,
        "data": result[start:end],
    }


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    return store.get(product_id)


def create_product_logic(store: ProductStore, payload: Dict[str, Any]) -> Dict[str, Any]:
    return store.insert(make_product(new_product_id(), payload))


def update_product_logic(store: ProductStore, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return store.update(product_id, lambda existing: merge_product(existing, payload))


def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    return store.remove(product_id)
