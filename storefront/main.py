# storefront/main.py
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, configure_logging
from .core import ProductIn, ProductNotFoundError, ProductUpdate, StoreError
from .models import Envelope
from .stores import CartStore, ProductStore

logger = logging.getLogger(__name__)


# ---------------------------
# Response envelope
# ---------------------------
def _reply(status_code: int, message: str, data: Any = None) -> JSONResponse:
    body = Envelope(status="success", message=message, data=data)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _fail(status_code: int, message: str, data: Any = None) -> JSONResponse:
    body = Envelope(status="error", message=message, data=data)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ---------------------------
# Store dependencies
# ---------------------------
def get_product_store(request: Request) -> ProductStore:
    return request.app.state.products


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.carts


# ---------------------------
# Product endpoints
# ---------------------------
products_router = APIRouter(prefix="/api/products", tags=["products"])


@products_router.get("")
async def list_products(limit: Optional[str] = Query(None), store: ProductStore = Depends(get_product_store)):
    products = await store.get_products()
    # a limit that is not a positive integer is ignored
    count = int(limit) if limit and limit.strip().isdecimal() else 0
    if count > 0:
        return _reply(200, f"Products limited to {count}", products[:count])
    return _reply(200, "All products", products)


@products_router.get("/{pid}")
async def get_product(pid: str, store: ProductStore = Depends(get_product_store)):
    try:
        product = await store.get_product_by_id(pid)
    except ProductNotFoundError as e:
        return _fail(404, e.message, {})
    except StoreError as e:
        return _fail(400, e.message, {})
    return _reply(200, "Product found", product)


@products_router.post("")
async def create_product(payload: ProductIn, store: ProductStore = Depends(get_product_store)):
    try:
        product = await store.add_product(payload.model_dump())
    except StoreError as e:
        return _fail(400, e.message, {})
    return _reply(201, "Product created", product)


@products_router.put("/{pid}")
async def update_product(pid: str, payload: ProductUpdate, store: ProductStore = Depends(get_product_store)):
    try:
        products = await store.update_product({**payload.model_dump(), "id": pid})
    except StoreError as e:
        return _fail(400, e.message, {})
    return _reply(200, "Product updated", products)


@products_router.delete("/{pid}")
async def delete_product(pid: str, store: ProductStore = Depends(get_product_store)):
    try:
        await store.delete_product(pid)
    except StoreError as e:
        return _fail(400, e.message, {})
    return Response(status_code=204)


# ---------------------------
# Cart endpoints
# ---------------------------
carts_router = APIRouter(prefix="/api/carts", tags=["carts"])


@carts_router.post("")
async def create_cart(store: CartStore = Depends(get_cart_store)):
    cart = await store.create_cart()
    return _reply(201, "Cart created", cart)


@carts_router.get("/{cid}")
async def get_cart(cid: str, store: CartStore = Depends(get_cart_store)):
    try:
        cart = await store.get_cart_by_id(cid)
    except StoreError as e:
        return _fail(400, e.message, [])
    return _reply(200, "Cart found", cart)


@carts_router.post("/{cid}/product/{pid}")
async def add_product_to_cart(cid: str, pid: str, store: CartStore = Depends(get_cart_store)):
    try:
        cart = await store.add_product_in_cart(cid, pid)
    except StoreError as e:
        return _fail(400, e.message, [])
    return _reply(201, "Product added to cart", cart)


# ---------------------------
# App factory
# ---------------------------
async def _validation_error(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _fail(400, details or "Invalid request", {})


async def _http_error(request: Request, exc: StarletteHTTPException):
    # unknown routes and methods
    return _fail(400, "Bad request", [])


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="storefront (flat-file JSON store)")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    products = ProductStore(settings.products_path)
    app.state.settings = settings
    app.state.products = products
    app.state.carts = CartStore(settings.carts_path, products)
    logger.info("Products document: %s, carts document: %s", settings.products_path, settings.carts_path)

    app.include_router(products_router)
    app.include_router(carts_router)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
