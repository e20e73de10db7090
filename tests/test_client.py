# tests/test_client.py
import asyncio

import httpx
import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from conftest import make_product
from sdk.client import StoreClient
from storefront.main import create_app

BASE_URL = "http://testserver"


class AppAdapter(BaseAdapter):
    """Serves a requests.Session from an in-process TestClient."""

    def __init__(self, client):
        super().__init__()
        self.client = client

    def send(self, request, **kwargs):
        r = self.client.request(request.method, request.url, content=request.body,
                                headers={"Content-Type": request.headers.get("Content-Type", "")})
        resp = requests.Response()
        resp.status_code = r.status_code
        resp.reason = r.reason_phrase
        resp._content = r.content
        resp.headers = CaseInsensitiveDict(r.headers)
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        pass


@pytest.fixture
def store_client(client):
    c = StoreClient(base_url=BASE_URL)
    c.session.mount(BASE_URL, AppAdapter(client))
    return c


def test_product_calls(store_client):
    created = store_client.create_product("Mate", "Gourd", "MAT-1", 12.5, 4, "kitchen", thumbnails="m.png")
    assert created["id"] == 1
    assert created["thumbnails"] == "m.png"
    store_client.create_product("Bombilla", "Straw", "BOM-1", 5, 2, "kitchen", status=False)

    assert [p["code"] for p in store_client.list_products()] == ["MAT-1", "BOM-1"]
    assert len(store_client.list_products(limit=1)) == 1
    assert store_client.get_product(2)["status"] is False
    assert store_client.update_product(1, title="Other")[0]["id"] == 1
    store_client.delete_product(2)


def test_errors_raise_http_error(store_client):
    with pytest.raises(requests.HTTPError) as missing:
        store_client.get_product(2)
    assert missing.value.response.status_code == 404
    assert missing.value.response.json()["message"] == "No product exists with id 2"

    with pytest.raises(requests.HTTPError) as bad_cart:
        store_client.get_cart(1)
    assert bad_cart.value.response.status_code == 400

    with pytest.raises(requests.HTTPError) as bad_delete:
        store_client.delete_product(9)
    assert bad_delete.value.response.status_code == 400


def test_cart_calls(store_client):
    store_client.create_product("Mate", "Gourd", "MAT-1", 12.5, 4, "kitchen")
    cart = store_client.create_cart()
    store_client.add_product_to_cart(cart["id"], 1)
    assert store_client.get_cart(cart["id"])["products"] == [{"product": 1, "quantity": 1}]


def test_async_add_to_cart(settings):
    app = create_app(settings)
    c = StoreClient(base_url="http://test", async_transport=httpx.ASGITransport(app=app))

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            await ac.post("/api/products", json=make_product())
            await ac.post("/api/carts")
        first = await c.add_product_to_cart_async(1, 1)
        second = await asyncio.gather(*(c.add_product_to_cart_async(1, 1) for _ in range(3)))
        return first, second

    first, second = asyncio.run(scenario())
    assert first == [{"id": 1, "products": [{"product": 1, "quantity": 1}]}]
    quantities = sorted(r[0]["products"][0]["quantity"] for r in second)
    assert quantities == [2, 3, 4]


def test_async_add_to_cart_raises_on_error(settings):
    c = StoreClient(base_url="http://test", async_transport=httpx.ASGITransport(app=create_app(settings)))
    with pytest.raises(httpx.HTTPStatusError) as missing:
        asyncio.run(c.add_product_to_cart_async(1, 1))
    assert missing.value.response.status_code == 400
