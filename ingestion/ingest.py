from models.product import Product
from app.core.exceptions import InvalidProductError
import logging
from typing import Optional, Iterable, List
import json

def ingest_one(raw: dict) -> Optional[Product]:
    if not isinstance(raw, dict):
        logging.warning("Skipping non-dict catalog entry: %r", raw)
        return None

    try:
        product = Product.from_dict(raw)
    except InvalidProductError as e:
        logging.warning("Skipping doc id=%s: %s", raw.get("_id", raw.get("id", "<missing>")), e)
        return None

    return product

def ingest_many(raw_list: Iterable[dict], continue_on_error=True) -> List[Product]:
    results = []
    ok_count = 0
    skipped_count = 0

    for raw in raw_list:
        result = ingest_one(raw)

        if result is None:
            if not continue_on_error:
                raise InvalidProductError("Invalid catalog document during batch ingestion", details=raw)
            skipped_count += 1
            continue

        ok_count += 1
        results.append(result)

    logging.info("OK=%s SKIP=%s", ok_count, skipped_count)

    return results

def load_json_file(path):
    with open(path, "r", encoding="utf-8") as f:
        first_char = f.read(1)
        f.seek(0)

        # Case 1: JSON array
        if first_char == "[":
            data = json.load(f)

            for item in data:
                if isinstance(item, dict):
                    yield item
                else:
                    logging.warning("Item in JSON file is not a dict!")

        # Case 2: NDJSON
        else:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    obj = json.loads(line)
                except json.JSONDecodeError as e:
                    logging.warning("Skipping invalid JSON line %d: %s", lineno, e)
                    continue

                if isinstance(obj, dict):
                    yield obj
                else:
                    logging.warning("Line %d is not an object, skipping", lineno)

def load_catalog(path) -> List[Product]:
    products = ingest_many(load_json_file(path))
    logging.info("Loaded %d products from %s", len(products), path)
    return products
