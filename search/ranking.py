from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable


class SortMode(str, Enum):
    RELEVANCE = "relevance"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEWEST = "newest"
    RATING = "rating"

    @classmethod
    def parse(cls, value) -> "SortMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.RELEVANCE


@dataclass(frozen=True)
class ScoredCandidate:
    product: object
    score: int


_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _created(candidate: ScoredCandidate) -> datetime:
    return candidate.product.created_at or _OLDEST


def rank(scored: Iterable[ScoredCandidate], sort_mode: SortMode, text_search_active: bool) -> list[ScoredCandidate]:
    """
    Filter and order one fetched page of scored candidates.

    With an active text search, zero-score candidates are dropped. Ordering
    relies on ``sorted`` being stable, so ties keep the order the catalog
    returned them in.
    """
    candidates = list(scored)

    if text_search_active:
        candidates = [c for c in candidates if c.score > 0]

    sort_mode = SortMode.parse(sort_mode)

    if sort_mode is SortMode.PRICE_ASC:
        return sorted(candidates, key=lambda c: c.product.bdt_price)
    if sort_mode is SortMode.PRICE_DESC:
        return sorted(candidates, key=lambda c: c.product.bdt_price, reverse=True)
    if sort_mode is SortMode.NEWEST:
        return sorted(candidates, key=_created, reverse=True)
    if sort_mode is SortMode.RATING:
        return sorted(candidates, key=lambda c: c.product.rating_value, reverse=True)

    return sorted(candidates, key=lambda c: c.score, reverse=True)
