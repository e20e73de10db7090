# storefront/stores.py
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from pydantic import ValidationError

from .core import (
    REQUIRED_PRODUCT_FIELDS, CartNotFoundError, InsufficientStockError,
    InvalidProductError, ProductNotFoundError, next_id, parse_id
)
from .database import JsonDocument
from .models import Cart, LineItem, Product

# Every operation reloads its collection from disk; nothing is cached between calls.
# Mutations hold the document lock across the whole read-modify-write cycle.

logger = logging.getLogger(__name__)


def _find(items: List[Dict[str, Any]], ident: int):
    return next((item for item in items if item.get("id") == ident), None)


class ProductStore:
    def __init__(self, path: Union[str, Path]):
        self._doc = JsonDocument(path, model=Product)

    @property
    def path(self) -> Path:
        return self._doc.path

    def _require(self, products: List[Dict[str, Any]], pid) -> Dict[str, Any]:
        ident = parse_id(pid, "pid")
        product = _find(products, ident)
        if product is None:
            raise ProductNotFoundError(f"No product exists with id {ident}")
        return product

    async def add_product(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        missing = [name for name in REQUIRED_PRODUCT_FIELDS if fields.get(name) is None]
        if missing:
            raise InvalidProductError(f"Missing required fields: {', '.join(missing)}")

        async with self._doc.lock:
            products = await self._doc.load()
            try:
                record = Product(
                    id=next_id(products),
                    thumbnails=fields.get("thumbnails"),
                    **{name: fields[name] for name in REQUIRED_PRODUCT_FIELDS},
                )
            except ValidationError as e:
                bad = sorted({str(err["loc"][0]) for err in e.errors()})
                raise InvalidProductError(f"Invalid product fields: {', '.join(bad)}")
            product = record.model_dump(exclude_none=True)
            products.append(product)
            await self._doc.save(products)

        logger.info("Created product %s (%s)", product["id"], product["code"])
        return product

    async def get_products(self) -> List[Dict[str, Any]]:
        return await self._doc.load()

    async def get_product_by_id(self, pid) -> Dict[str, Any]:
        return self._require(await self._doc.load(), pid)

    async def update_product(self, fields: Mapping[str, Any]) -> List[Dict[str, Any]]:
        # Validates and rewrites the collection; incoming fields are not merged.
        async with self._doc.lock:
            products = await self._doc.load()
            product = self._require(products, fields.get("id"))
            await self._doc.save(products)
        return [p for p in products if p.get("id") == product["id"]]

    async def delete_product(self, pid):
        async with self._doc.lock:
            products = await self._doc.load()
            product = self._require(products, pid)
            products = [p for p in products if p.get("id") != product["id"]]
            await self._doc.save(products)
        logger.info("Deleted product %s", product["id"])

    async def product_exists(self, pid):
        self._require(await self._doc.load(), pid)


class CartStore:
    def __init__(self, path: Union[str, Path], products: ProductStore):
        self._doc = JsonDocument(path, model=Cart)
        self._products = products

    @property
    def path(self) -> Path:
        return self._doc.path

    def _require(self, carts: List[Dict[str, Any]], cid) -> Dict[str, Any]:
        ident = parse_id(cid, "cid")
        cart = _find(carts, ident)
        if cart is None:
            raise CartNotFoundError(f"No cart exists with id {ident}")
        return cart

    async def create_cart(self) -> Dict[str, Any]:
        async with self._doc.lock:
            carts = await self._doc.load()
            cart = Cart(id=next_id(carts), products=[]).model_dump()
            carts.append(cart)
            await self._doc.save(carts)
        logger.info("Created cart %s", cart["id"])
        return cart

    async def get_cart_by_id(self, cid) -> Dict[str, Any]:
        return self._require(await self._doc.load(), cid)

    async def add_product_in_cart(self, cid, pid) -> List[Dict[str, Any]]:
        async with self._doc.lock:
            carts = await self._doc.load()
            cart = self._require(carts, cid)
            await self._products.product_exists(pid)
            product = await self._products.get_product_by_id(pid)

            # Stock is checked here but never decremented.
            if product["stock"] < 1:
                raise InsufficientStockError(f"Product {product['id']} does not have enough stock")

            line = next((item for item in cart["products"] if item["product"] == product["id"]), None)
            if line is not None:
                line["quantity"] += 1
            else:
                cart["products"].append(LineItem(product=product["id"], quantity=1).model_dump())
            await self._doc.save(carts)

        logger.info("Added product %s to cart %s", product["id"], cart["id"])
        return [c for c in carts if c["id"] == cart["id"]]

    async def cart_exists(self, cid):
        self._require(await self._doc.load(), cid)
