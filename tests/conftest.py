# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.main import create_app
from storefront.stores import CartStore, ProductStore


def make_product(**overrides):
    product = {
        "title": "Mate",
        "description": "Calabash gourd",
        "code": "MAT-001",
        "price": 12.5,
        "status": True,
        "stock": 5,
        "category": "kitchen",
    }
    product.update(overrides)
    return product


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path)


@pytest.fixture
def product_store(settings):
    return ProductStore(settings.products_path)


@pytest.fixture
def cart_store(settings, product_store):
    return CartStore(settings.carts_path, product_store)


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
