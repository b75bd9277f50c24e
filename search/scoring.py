from datetime import datetime, timezone
from typing import Iterable

import regex

# --- Per-token field weights ---
FIELD_WEIGHTS = {
    "title": 10,
    "brand": 8,
    "category": 7,
    "keywords": 6,
    "description": 5,
}
PARTIAL_TITLE_WEIGHT = 4
YEAR_IN_TITLE_WEIGHT = 3

PARTIAL_MIN_TOKEN_LEN = 4
PARTIAL_MIN_PREFIX_LEN = 3

# --- Flat bonuses ---
IN_STOCK_BONUS = 2
RECENT_DAYS = 30
RECENT_BONUS = 3
NEW_DAYS = 7
NEW_BONUS = 2
HIGH_RATING = 4.0
HIGH_RATING_BONUS = 2

# products without a creation date are treated as old
UNKNOWN_AGE_DAYS = 1000.0

_YEAR = regex.compile(r"\d{4}")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def age_in_days(created_at, now: datetime) -> float:
    if created_at is None:
        return UNKNOWN_AGE_DAYS
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - created_at).total_seconds() / 86400


def searchable_text(product) -> dict[str, str]:
    return {
        "title": product.title.lower(),
        "brand": product.brand.lower(),
        "category": product.category.name.lower() if product.category else "",
        "keywords": " ".join(product.keywords).lower(),
        "description": product.description.lower(),
    }


def token_score(token: str, text: dict[str, str]) -> int:
    score = 0
    title = text["title"]

    for field, weight in FIELD_WEIGHTS.items():
        if token in text[field]:
            score += weight

    if len(token) >= PARTIAL_MIN_TOKEN_LEN:
        prefix = token[:max(PARTIAL_MIN_PREFIX_LEN, len(token) - 1)]
        if prefix in title:
            score += PARTIAL_TITLE_WEIGHT

    if _YEAR.search(token) and token in title:
        score += YEAR_IN_TITLE_WEIGHT

    return score


def bonus_score(product, now: datetime) -> int:
    score = 0

    if product.availability == "InStock":
        score += IN_STOCK_BONUS

    days_old = age_in_days(product.created_at, now)
    if days_old < RECENT_DAYS:
        score += RECENT_BONUS
    if days_old < NEW_DAYS:
        score += NEW_BONUS

    if product.rating_value >= HIGH_RATING:
        score += HIGH_RATING_BONUS

    return score


def score_product(product, tokens: Iterable[str], now: datetime) -> int:
    """
    Relevance of one product for the normalized query tokens.

    ``now`` is the single instant the whole request is scored against, so
    every product in one response sees the same age.
    """
    text = searchable_text(product)
    score = sum(token_score(token, text) for token in tokens)
    score += bonus_score(product, now)
    return max(score, 0)
