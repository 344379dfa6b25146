# catalog/database.py
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .core import CatalogError

# This file holds the in-memory product collection and its lock.

logger = logging.getLogger(__name__)

Product = Dict[str, Any]


class ProductStore:
    """
    Ordered, process-local product collection. Every method holds the
    lock for its whole body, so each call is atomic with respect to the
    others. Lookups raise ``CatalogError.not_found()`` for unknown ids.
    """

    def __init__(self):
        self._products: List[Product] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p["id"] == product_id:
                return i
        raise CatalogError.not_found()

    def list(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def get(self, product_id: str) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)]

    def insert(self, product: Product) -> Product:
        with self._lock:
            self._products.append(product)
        logger.debug("inserted product %s", product["id"])
        return product

    def update(self, product_id: str, fn: Callable[[Product], Product]) -> Product:
        with self._lock:
            i = self._index_of(product_id)
            self._products[i] = fn(self._products[i])
            updated = self._products[i]
        logger.debug("updated product %s", product_id)
        return updated

    def remove(self, product_id: str) -> Product:
        with self._lock:
            removed = self._products.pop(self._index_of(product_id))
        logger.debug("removed product %s", product_id)
        return removed

    def clear(self, products: Optional[List[Product]] = None) -> None:
        with self._lock:
            self._products = list(products or [])
