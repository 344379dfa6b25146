# sdk/pystore.py
import requests
import httpx
from typing import Optional, Dict, Any

from catalog.models import ProductIn


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None, timeout: int = 10,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, product_id: Optional[str] = None) -> str:
        if product_id is None:
            return f"{self.base_url}/api/products"
        return f"{self.base_url}/api/products/{product_id}"

    @staticmethod
    def _payload(name: str, price: float, description: Optional[str], category: Optional[str],
                 in_stock: Optional[bool]) -> Dict[str, Any]:
        body = ProductIn(name=name, price=price, description=description, category=category, in_stock=in_stock)
        return body.model_dump(by_alias=True, exclude_none=True)

    def list_products(self, category: Optional[str] = None, q: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if q:
            params["q"] = q
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url(), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(product_id), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, price: float, description: Optional[str] = None,
                       category: Optional[str] = None, in_stock: Optional[bool] = None):
        payload = self._payload(name, price, description, category, in_stock)
        r = self.session.post(self._url(), json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, **fields):
        # the server wants name and price on every update, fill them in from the current product
        if "name" not in fields or "price" not in fields:
            current = self.get_product(product_id)
            fields.setdefault("name", current.get("name"))
            fields.setdefault("price", current.get("price"))
        if "in_stock" in fields:
            fields["inStock"] = fields.pop("in_stock")
        r = self.session.put(self._url(product_id), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(product_id), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create (example)
    async def create_product_async(self, name: str, price: float, description: Optional[str] = None,
                                   category: Optional[str] = None, in_stock: Optional[bool] = None,
                                   transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        payload = self._payload(name, price, description, category, in_stock)
        async with httpx.AsyncClient(timeout=self.timeout, headers=headers, transport=transport) as client:
            r = await client.post(self._url(), json=payload)
            r.raise_for_status()
            return r.json()


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="Catalog client")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000")
    parser.add_argument("--api-key", required=True)
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--q", help="Search term for product names")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--description")
    cp.add_argument("--category")

    up = subparsers.add_parser("update-product", help="Update a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name")
    up.add_argument("--price", type=float)
    up.add_argument("--category")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        print(c.list_products(args.category, args.q, args.page, args.limit))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.price, args.description, args.category))
    elif args.command == "update-product":
        changes = {k: v for k, v in (("name", args.name), ("price", args.price), ("category", args.category)) if v is not None}
        print(c.update_product(args.product_id, **changes))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
