import itertools
from datetime import datetime, timedelta, timezone

import pytest

from app.core.gateway import InMemoryCatalog
from app.core.search_service import SearchService
from models.product import Product

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

_ids = itertools.count(1)


def make_product(**fields):
    """Build a Product from raw catalog fields; unscored extras are off by default."""
    data = {
        "_id": f"p{next(_ids)}",
        "title": "Untitled",
        "availability": "OutOfStock",
    }
    data.update(fields)
    return Product.from_dict(data)


def days_ago(days):
    return (NOW - timedelta(days=days)).isoformat()


class RecordingCatalog(InMemoryCatalog):
    """In-memory catalog that remembers every find/count call."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.find_calls = []
        self.count_calls = []

    async def find(self, predicate, skip, limit):
        self.find_calls.append((predicate, skip, limit))
        return await super().find(predicate, skip, limit)

    async def count(self, predicate):
        self.count_calls.append(predicate)
        return await super().count(predicate)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def service_for():
    def build(products, categories=()):
        catalog = RecordingCatalog(products, categories)
        return SearchService(catalog=catalog, categories=catalog, clock=lambda: NOW)
    return build


def clause_of(predicate, kind):
    for clause in predicate.clauses:
        if clause.kind == kind:
            return clause
    return None
