"""
Compile a ``Predicate`` into a document-store filter.

The output is a plain dict in MongoDB query syntax, so any driver can run it:
``{"$and": [{"$or": [...]}, {"category": ...}, {"prices": {"$elemMatch": ...}}]}``.
Nested fields use dotted paths, which match inside arrays of subdocuments.
"""
from __future__ import annotations

import re

from search.predicate import (
    AvailabilityClause,
    BrandClause,
    CategoryClause,
    Clause,
    Predicate,
    PriceClause,
    TextClause,
)


# engine field name -> stored document path
DOCUMENT_FIELDS = {
    "short_description": "shortDescription",
}


def _regex(text: str) -> dict:
    return {"$regex": re.escape(text), "$options": "i"}


def _text_filter(clause: TextClause) -> dict:
    return {"$or": [{DOCUMENT_FIELDS.get(name, name): _regex(token)} for token, name in clause.pairs()]}


def _price_filter(clause: PriceClause) -> dict:
    condition: dict = {"currency": clause.currency}
    amount: dict = {}
    if clause.min_amount is not None:
        amount["$gte"] = clause.min_amount
    if clause.max_amount is not None:
        amount["$lte"] = clause.max_amount
    if amount:
        condition["amount"] = amount
    return {"prices": {"$elemMatch": condition}}


def clause_filter(clause: Clause) -> dict:
    if isinstance(clause, TextClause):
        return _text_filter(clause)
    if isinstance(clause, CategoryClause):
        return {"category": clause.category_id}
    if isinstance(clause, PriceClause):
        return _price_filter(clause)
    if isinstance(clause, AvailabilityClause):
        return {"availability": clause.availability}
    if isinstance(clause, BrandClause):
        return {"brand": _regex(clause.brand)}
    raise TypeError(f"Unsupported clause: {clause!r}")


def to_mongo_filter(predicate: Predicate) -> dict:
    if not predicate:
        return {}
    return {"$and": [clause_filter(c) for c in predicate.clauses]}
