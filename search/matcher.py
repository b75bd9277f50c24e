"""Evaluate a ``Predicate`` directly against ``Product`` objects."""
from __future__ import annotations

from typing import Callable

from search.predicate import (
    AvailabilityClause,
    BrandClause,
    CategoryClause,
    Clause,
    Predicate,
    PriceClause,
    TextClause,
)

FIELD_GETTERS: dict[str, Callable] = {
    "title": lambda p: [p.title],
    "description": lambda p: [p.description],
    "short_description": lambda p: [p.short_description or ""],
    "brand": lambda p: [p.brand],
    "keywords": lambda p: p.keywords,
    "product_code": lambda p: [p.product_code],
    "sizes.name": lambda p: p.sizes,
    "specifications.name": lambda p: [s.name for s in p.specifications],
    "specifications.value": lambda p: [s.value for s in p.specifications],
    "faqs.question": lambda p: [f.question for f in p.faqs],
    "faqs.answer": lambda p: [f.answer for f in p.faqs],
    "category.name": lambda p: [p.category.name] if p.category else [],
}


def field_values(product, name: str) -> list[str]:
    getter = FIELD_GETTERS.get(name)
    if getter is None:
        raise KeyError(f"Unknown searchable field: {name}")
    return getter(product)


def _text_matcher(clause: TextClause):
    patterns = clause.patterns()

    def match(product) -> bool:
        for token, name in clause.pairs():
            pattern = patterns[token]
            if any(pattern.search(value) for value in field_values(product, name)):
                return True
        return False

    return match


def _price_matcher(clause: PriceClause):
    def match(product) -> bool:
        return any(
            price.currency == clause.currency and clause.accepts(price.amount)
            for price in product.prices
        )

    return match


def compile_clause(clause: Clause) -> Callable:
    if isinstance(clause, TextClause):
        return _text_matcher(clause)
    if isinstance(clause, CategoryClause):
        return lambda p: p.category is not None and p.category.id == clause.category_id
    if isinstance(clause, PriceClause):
        return _price_matcher(clause)
    if isinstance(clause, AvailabilityClause):
        return lambda p: p.availability == clause.availability
    if isinstance(clause, BrandClause):
        brand = clause.brand.lower()
        return lambda p: brand in p.brand.lower()
    raise TypeError(f"Unsupported clause: {clause!r}")


def compile_predicate(predicate: Predicate) -> Callable:
    matchers = [compile_clause(c) for c in predicate.clauses]

    def match(product) -> bool:
        return all(m(product) for m in matchers)

    return match
