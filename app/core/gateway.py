"""
Collaborator contracts for the search service and an in-memory implementation.

The search service only talks to the catalog through ``CatalogGateway`` and
``CategoryResolver``. Any store can sit behind them as long as it can run a
``Predicate`` (see ``search.mongo_filter`` for a document-store compilation).
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from models.product import Category, Product
from search.matcher import compile_predicate
from search.predicate import Predicate


@runtime_checkable
class CatalogGateway(Protocol):
    async def find(self, predicate: Predicate, skip: int, limit: int) -> List[Product]: ...

    async def count(self, predicate: Predicate) -> int: ...


@runtime_checkable
class CategoryResolver(Protocol):
    async def find_by_slug_or_name(self, text: str) -> Optional[Category]: ...

    async def search(self, q: str, limit: int) -> List[Category]: ...


class InMemoryCatalog:
    """
    Read-only catalog held in a list, in insertion order.

    Serves as both gateway and category resolver. Categories come from the
    products themselves plus any passed in explicitly.
    """
    def __init__(self, products: Iterable[Product] = (), categories: Iterable[Category] = ()):
        self.products: List[Product] = list(products)

        by_id: dict[str, Category] = {}
        for category in categories:
            by_id.setdefault(category.id, category)
        for product in self.products:
            if product.category is not None and product.category.name:
                by_id.setdefault(product.category.id, product.category)
        self.categories: List[Category] = list(by_id.values())

    @property
    def total_products(self) -> int:
        return len(self.products)

    def _matching(self, predicate: Predicate) -> List[Product]:
        match = compile_predicate(predicate)
        return [p for p in self.products if match(p)]

    async def find(self, predicate: Predicate, skip: int, limit: int) -> List[Product]:
        skip = max(skip, 0)
        return self._matching(predicate)[skip:skip + limit]

    async def count(self, predicate: Predicate) -> int:
        return len(self._matching(predicate))

    async def find_by_slug_or_name(self, text: str) -> Optional[Category]:
        needle = text.strip().lower()
        if not needle:
            return None

        for category in self.categories:
            if category.id == text.strip():
                return category
        for category in self.categories:
            if category.slug == text.strip():
                return category
        for category in self.categories:
            if category.name.lower() == needle:
                return category
        for category in self.categories:
            if needle in category.name.lower():
                return category
        return None

    async def search(self, q: str, limit: int) -> List[Category]:
        needle = (q or "").strip().lower()
        if not needle:
            return self.categories[:limit]

        found = [
            c for c in self.categories
            if needle in c.name.lower() or needle in c.slug.lower()
        ]
        return found[:limit]
