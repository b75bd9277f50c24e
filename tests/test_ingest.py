import logging
import pytest
import json
import tempfile
import os
from app.core.exceptions import InvalidProductError
from ingestion.ingest import load_json_file, load_catalog, ingest_one, ingest_many
from models.product import Product

# -------------------------------
# Sample catalog documents
# -------------------------------
valid_product = {
    "_id": "1",
    "title": "Sundarban Natural Honey",
    "brand": "Madhu",
    "prices": [{"currency": "BDT", "amount": 850}],
    "keywords": "honey, natural honey",
    "createdAt": "2024-11-02T12:00:00Z",
}

invalid_product_missing_title = {
    "_id": "2",
    "brand": "Nobody",
    "prices": [{"currency": "BDT", "amount": 10}],
}

invalid_product_wrong_type = "This is not a dict"

# -------------------------------
# load_json_file tests
# -------------------------------

def test_load_json_file_array():
    with tempfile.NamedTemporaryFile(mode="w+", delete=False) as f:
        json.dump([valid_product, valid_product], f)
        path = f.name

    try:
        data = list(load_json_file(path))
        assert all(isinstance(d, dict) for d in data)
        assert len(data) == 2
    finally:
        os.remove(path)

def test_load_json_file_jsonl():
    with tempfile.NamedTemporaryFile(mode="w+", delete=False) as f:
        for _ in range(2):
            f.write(json.dumps(valid_product) + "\n")
        path = f.name

    try:
        data = list(load_json_file(path))
        assert len(data) == 2
    finally:
        os.remove(path)

def test_load_json_file_invalid_json(caplog):
    with tempfile.NamedTemporaryFile(mode="w+", delete=False) as f:
        f.write('{"_id": "1", "title": "Good"}\n')
        f.write('INVALID_JSON\n')
        f.write('\n')
        path = f.name

    try:
        data = list(load_json_file(path))
        assert len(data) == 1
        assert "Skipping invalid JSON line 2" in caplog.text
    finally:
        os.remove(path)

# -------------------------------
# ingest_one tests
# -------------------------------

def test_ingest_one_valid():
    result = ingest_one(valid_product)
    assert isinstance(result, Product)
    assert result.keywords == ["honey", "natural honey"]

def test_ingest_one_invalid_type(caplog):
    result = ingest_one(invalid_product_wrong_type) # type: ignore
    assert result is None
    assert "This is not a dict" in caplog.text

def test_ingest_one_missing_required_field(caplog):
    result = ingest_one(invalid_product_missing_title)
    assert result is None
    assert "Skipping doc id=2" in caplog.text

# -------------------------------
# ingest_many tests
# -------------------------------

def test_ingest_many_all_valid():
    results = ingest_many([valid_product, valid_product])
    assert len(results) == 2

def test_ingest_many_some_invalid_continue(caplog):
    results = ingest_many([valid_product, invalid_product_missing_title, valid_product], continue_on_error=True)
    assert len(results) == 2
    assert "Skipping doc id=2" in caplog.text

def test_ingest_many_some_invalid_stop():
    with pytest.raises(InvalidProductError):
        ingest_many([valid_product, invalid_product_missing_title, valid_product], continue_on_error=False)

# -------------------------------
# load_catalog tests
# -------------------------------

def test_bundled_catalog_loads():
    products = load_catalog(os.path.join(os.path.dirname(__file__), "..", "app", "data", "products.json"))
    assert len(products) == 5
    assert products[0].title == "Panjabi Collection 2025"

def test_load_catalog_skips_out_of_range_epoch(tmp_path, caplog):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([
        {"_id": "x", "title": "Broken clock", "createdAt": 1e20},
        {"_id": "y", "title": "Ok"},
    ]), encoding="utf-8")

    products = load_catalog(str(path))
    assert [p.id for p in products] == ["y"]
    assert "Skipping doc id=x" in caplog.text
