# tests/test_database.py
import asyncio
import json
import logging

from storefront.database import JsonDocument
from storefront.models import Cart, Product


def test_missing_file_reads_empty(tmp_path):
    assert JsonDocument(tmp_path / "nope.json").read() == []


def test_corrupt_file_reads_empty(tmp_path, caplog):
    path = tmp_path / "products.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert JsonDocument(path).read() == []
    assert "Could not load" in caplog.text


def test_non_list_document_reads_empty(tmp_path):
    path = tmp_path / "carts.json"
    path.write_text(json.dumps({"id": 1}), encoding="utf-8")
    assert JsonDocument(path).read() == []


def test_write_creates_dirs_and_indents(tmp_path):
    path = tmp_path / "nested" / "data" / "products.json"
    doc = JsonDocument(path)
    doc.write([{"id": 1, "title": "Café"}])

    text = path.read_text(encoding="utf-8")
    assert "\n  " in text
    assert "Café" in text
    assert doc.read() == [{"id": 1, "title": "Café"}]
    # no temp files left behind
    assert [p.name for p in path.parent.iterdir()] == ["products.json"]


def test_list_of_non_records_reads_empty(tmp_path, caplog):
    path = tmp_path / "products.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert JsonDocument(path).read() == []
    assert "Malformed record 0" in caplog.text


def test_record_ids_must_be_ints(tmp_path):
    path = tmp_path / "products.json"
    for ids in (["1"], [None], [True], [1.5]):
        path.write_text(json.dumps([{"id": i} for i in ids]), encoding="utf-8")
        assert JsonDocument(path).read() == []


def test_cart_records_are_validated(tmp_path):
    path = tmp_path / "carts.json"
    doc = JsonDocument(path, model=Cart)

    path.write_text(json.dumps([{"id": 1}]), encoding="utf-8")
    assert doc.read() == []

    path.write_text(json.dumps([{"id": 1, "products": [{"product": "1", "quantity": 1}]}]), encoding="utf-8")
    assert doc.read() == []

    path.write_text(json.dumps([{"id": 1, "products": [{"product": 1, "quantity": 0}]}]), encoding="utf-8")
    assert doc.read() == []

    good = [{"id": 1, "products": [{"product": 1, "quantity": 2}]}, {"id": 2, "products": []}]
    path.write_text(json.dumps(good), encoding="utf-8")
    assert doc.read() == good


def test_product_records_are_validated(tmp_path):
    path = tmp_path / "products.json"
    doc = JsonDocument(path, model=Product)
    record = {"id": 1, "title": "Mate", "description": "Gourd", "code": "M", "price": 3,
              "status": True, "stock": 2, "category": "kitchen"}

    path.write_text(json.dumps([record]), encoding="utf-8")
    assert doc.read() == [record]

    path.write_text(json.dumps([{**record, "stock": "2"}]), encoding="utf-8")
    assert doc.read() == []


def test_load_and_save_run_off_the_loop(tmp_path):
    doc = JsonDocument(tmp_path / "carts.json", model=Cart)

    async def cycle():
        await doc.save([{"id": 1, "products": []}])
        return await doc.load()

    assert asyncio.run(cycle()) == [{"id": 1, "products": []}]
