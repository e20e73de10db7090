# sdk/client.py
import os
import httpx
import requests
from typing import Any, Dict, Optional
from rich import print

DEFAULT_BASE_URL = os.getenv("STOREFRONT_API_URL", "http://127.0.0.1:8080")


class StoreClient:
    """
    Thin client for the storefront HTTP API.

    Every call raises for non-2xx responses and returns the envelope's `data`.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 10,
                 async_transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        self.async_transport = async_transport

    def _data(self, r) -> Any:
        r.raise_for_status()
        return r.json()["data"]

    # Products
    def list_products(self, limit: Optional[int] = None):
        params = {"limit": limit} if limit else {}
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        return self._data(r)

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return self._data(r)

    def create_product(self, title: str, description: str, code: str, price: float, stock: int,
                       category: str, status: bool = True, thumbnails: Optional[str] = None):
        payload: Dict[str, Any] = {
            "title": title, "description": description, "code": code, "price": price,
            "status": status, "stock": stock, "category": category,
        }
        if thumbnails:
            payload["thumbnails"] = thumbnails
        r = self.session.post(f"{self.base_url}/api/products", json=payload, timeout=self.timeout)
        return self._data(r)

    def update_product(self, product_id: int, **fields):
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json=fields, timeout=self.timeout)
        return self._data(r)

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()

    # Carts
    def create_cart(self):
        r = self.session.post(f"{self.base_url}/api/carts", timeout=self.timeout)
        return self._data(r)

    def get_cart(self, cart_id: int):
        r = self.session.get(f"{self.base_url}/api/carts/{cart_id}", timeout=self.timeout)
        return self._data(r)

    def add_product_to_cart(self, cart_id: int, product_id: int):
        r = self.session.post(f"{self.base_url}/api/carts/{cart_id}/product/{product_id}", timeout=self.timeout)
        return self._data(r)

    async def add_product_to_cart_async(self, cart_id: int, product_id: int):
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.async_transport) as client:
            r = await client.post(f"{self.base_url}/api/carts/{cart_id}/product/{product_id}")
            return self._data(r)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Storefront CLI")
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--limit", type=int, help="Return at most this many products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--title", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--code", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--stock", type=int, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--inactive", action="store_true", help="Create with status=false")
    cp.add_argument("--thumbnails", help="Uploaded file reference")

    up = subparsers.add_parser("update-product", help="Update a product")
    up.add_argument("--product-id", type=int, required=True)
    up.add_argument("--title")
    up.add_argument("--price", type=float)
    up.add_argument("--stock", type=int)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True)

    # ---------------------------
    # Cart commands
    # ---------------------------
    subparsers.add_parser("create-cart", help="Create an empty cart")

    gc = subparsers.add_parser("get-cart", help="Show a cart")
    gc.add_argument("--cart-id", type=int, required=True)

    add = subparsers.add_parser("add-to-cart", help="Add one unit of a product to a cart")
    add.add_argument("--cart-id", type=int, required=True)
    add.add_argument("--product-id", type=int, required=True)

    args = parser.parse_args()
    c = StoreClient(base_url=args.url)

    if args.command == "list-products":
        print(c.list_products(args.limit))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.title, args.description, args.code, args.price, args.stock,
                               args.category, status=not args.inactive, thumbnails=args.thumbnails))
    elif args.command == "update-product":
        fields = {k: v for k, v in (("title", args.title), ("price", args.price), ("stock", args.stock)) if v is not None}
        print(c.update_product(args.product_id, **fields))
    elif args.command == "delete-product":
        c.delete_product(args.product_id)
        print(f"[green]Deleted product {args.product_id}[/green]")
    elif args.command == "create-cart":
        print(c.create_cart())
    elif args.command == "get-cart":
        print(c.get_cart(args.cart_id))
    elif args.command == "add-to-cart":
        print(c.add_product_to_cart(args.cart_id, args.product_id))
