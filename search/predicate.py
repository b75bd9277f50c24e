"""
Store-agnostic filter predicates.

A ``Predicate`` is an AND over clauses. The text clause is itself an OR over
every (token, field) pair, so a product qualifies for the text part as soon as
any token matches any field. Relevance is restored afterwards by scoring.

Backends compile the same predicate their own way, see ``search.matcher`` for
plain Python evaluation and ``search.mongo_filter`` for a document-store query.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Protocol, Union

logger = logging.getLogger(__name__)

TEXT_FIELDS = (
    "title",
    "description",
    "short_description",
    "brand",
    "keywords",
    "product_code",
    "sizes.name",
    "specifications.name",
    "specifications.value",
    "faqs.question",
    "faqs.answer",
    "category.name",
)

PRICE_CURRENCY = "BDT"

_OBJECT_ID = re.compile(r"^[0-9a-fA-F]{24}$")


class CategoryLookup(Protocol):
    async def find_by_slug_or_name(self, text: str): ...


@dataclass(frozen=True)
class TextClause:
    tokens: tuple[str, ...]
    fields: tuple[str, ...] = TEXT_FIELDS
    kind: str = field(default="text", init=False)

    def pairs(self) -> Iterator[tuple[str, str]]:
        for token in self.tokens:
            for name in self.fields:
                yield token, name

    def patterns(self) -> dict[str, "re.Pattern[str]"]:
        return {token: re.compile(re.escape(token), re.IGNORECASE) for token in self.tokens}


@dataclass(frozen=True)
class CategoryClause:
    category_id: str
    kind: str = field(default="category", init=False)


@dataclass(frozen=True)
class PriceClause:
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    currency: str = PRICE_CURRENCY
    kind: str = field(default="price", init=False)

    def accepts(self, amount: float) -> bool:
        if self.min_amount is not None and amount < self.min_amount:
            return False
        if self.max_amount is not None and amount > self.max_amount:
            return False
        return True


@dataclass(frozen=True)
class AvailabilityClause:
    availability: str
    kind: str = field(default="availability", init=False)


@dataclass(frozen=True)
class BrandClause:
    brand: str
    kind: str = field(default="brand", init=False)


Clause = Union[TextClause, CategoryClause, PriceClause, AvailabilityClause, BrandClause]


@dataclass(frozen=True)
class Predicate:
    clauses: tuple[Clause, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.clauses)

    def describe(self) -> dict:
        return {
            "and": [
                {"kind": c.kind, **{k: v for k, v in vars(c).items() if k not in ("kind", "fields")}}
                for c in self.clauses
            ]
        }


def is_category_id(value: str) -> bool:
    return bool(_OBJECT_ID.match(value))


def parse_price_bound(value) -> Optional[float]:
    """
    Turn a raw price bound into a float, or None when it cannot be used.

    Anything that is not a finite, non-negative number is ignored as a bound.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return amount


def _requested(value) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


async def resolve_category(category: str, resolver: CategoryLookup) -> Optional[str]:
    category = category.strip()
    if not category:
        return None

    if is_category_id(category):
        return category

    found = await resolver.find_by_slug_or_name(category)
    if found is None:
        logger.warning("Category %r not found, searching without category filter", category)
        return None
    return found.id


async def build_predicate(
    tokens: Iterable[str],
    *,
    resolver: CategoryLookup,
    category: Optional[str] = None,
    min_price=None,
    max_price=None,
    availability: Optional[str] = None,
    brand: Optional[str] = None,
) -> Predicate:
    clauses: list[Clause] = []

    ordered_tokens = tuple(sorted(set(tokens)))
    if ordered_tokens:
        clauses.append(TextClause(tokens=ordered_tokens))

    if category:
        category_id = await resolve_category(category, resolver)
        if category_id is not None:
            clauses.append(CategoryClause(category_id=category_id))

    if _requested(min_price) or _requested(max_price):
        clauses.append(
            PriceClause(
                min_amount=parse_price_bound(min_price),
                max_amount=parse_price_bound(max_price),
            )
        )

    if availability:
        clauses.append(AvailabilityClause(availability=availability))

    if brand and brand.strip():
        clauses.append(BrandClause(brand=brand.strip()))

    return Predicate(clauses=tuple(clauses))
