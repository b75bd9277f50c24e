from typing import Iterable, Mapping, Sequence

from search.dictionaries import RELATED_TERMS

MAX_SUGGESTIONS = 10


def generate_suggestions(
    query,
    results: Sequence,
    related: Mapping[str, Sequence[str]] = RELATED_TERMS,
    max_items: int = MAX_SUGGESTIONS,
) -> list[str]:
    """
    Related searches for a query, taken from the results it produced.

    Order is category names, brands, keywords containing the query, then the
    related terms of every dictionary key found in the query. The first
    occurrence of a string wins and the list is capped at ``max_items``.
    """
    if not query or not query.strip() or not results:
        return []

    lowered = query.lower()
    collected: list[str] = []

    collected.extend(_category_names(results))
    collected.extend(r.brand for r in results if r.brand)
    for result in results:
        collected.extend(k for k in result.keywords if lowered in k.lower())

    for key, terms in related.items():
        if key in lowered:
            collected.extend(terms)

    return list(dict.fromkeys(collected))[:max_items]


def _category_names(results: Iterable) -> list[str]:
    names = []
    for result in results:
        category = getattr(result, "category", None)
        if category is not None and category.name:
            names.append(category.name)
    return names
