import logging
import math
import time
from datetime import datetime
from typing import Callable, List

from app.core.exceptions import GatewayError, InvalidQueryError, SearchError
from app.core.gateway import CatalogGateway, CategoryResolver
from app.models.search_query import SearchQuery
from app.models.search_response import CategorySummary, Pagination, SearchResponse, SearchResult
from search.predicate import Predicate, build_predicate
from search.ranking import ScoredCandidate, rank
from search.scoring import score_product, utc_now
from search.suggestions import generate_suggestions
from search.tokenizer import normalize_query

logger = logging.getLogger(__name__)


class SearchService:
    def __init__(self, catalog: CatalogGateway, categories: CategoryResolver,
                 clock: Callable[[], datetime] = utc_now):
        self.catalog = catalog
        self.categories = categories
        self.clock = clock

    async def search(self, query: SearchQuery) -> SearchResponse:
        """
        Run one search request end to end.

        Never raises: any failure, including the catalog being unreachable,
        comes back as a response with ``success=False``.
        """
        try:
            return await self._search(query)
        except Exception as e:
            logger.exception("Search failed for q=%r", query.q)
            return SearchResponse.failure(str(e))

    async def _search(self, query: SearchQuery) -> SearchResponse:
        if not query.q.strip() and not query.category:
            return SearchResponse.empty(query.limit)

        start = time.perf_counter()

        tokens = normalize_query(query.q)
        logger.info("Search q=%r tokens=%s", query.q, sorted(tokens))

        predicate = await build_predicate(
            tokens,
            resolver=self.categories,
            category=query.category,
            min_price=query.minPrice,
            max_price=query.maxPrice,
            availability=query.availability,
            brand=query.brand,
        )
        logger.debug("Predicate: %s", predicate.describe())

        candidates, total_results = await self._fetch(predicate, query)

        now = self.clock()
        text_search_active = bool(tokens)
        # without query text there is nothing to score, so the catalog order stands
        scored = [
            ScoredCandidate(product=p, score=score_product(p, tokens, now) if text_search_active else 0)
            for p in candidates
        ]
        ranked = rank(scored, query.sort, text_search_active=text_search_active)

        results = [SearchResult.from_product(c.product, c.score, now) for c in ranked]
        suggestions = generate_suggestions(query.q, results)

        took_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Search done q=%r fetched=%d kept=%d total=%d took=%.2fms",
            query.q, len(candidates), len(results), total_results, took_ms,
        )

        return SearchResponse(
            success=True,
            data=results,
            pagination=Pagination(
                page=query.page,
                limit=query.limit,
                totalPages=math.ceil(total_results / query.limit),
                totalResults=total_results,
            ),
            suggestions=suggestions,
            searchTerms=sorted(tokens),
        )

    async def _fetch(self, predicate: Predicate, query: SearchQuery):
        try:
            candidates = await self.catalog.find(predicate, skip=query.skip, limit=query.limit)
            total_results = await self.catalog.count(predicate)
        except SearchError:
            raise
        except Exception as e:
            raise GatewayError(f"Catalog query failed: {e}") from e
        return candidates, total_results

    async def search_categories(self, q: str, limit: int) -> List[CategorySummary]:
        if limit < 1:
            raise InvalidQueryError(details={"limit": limit})

        found = await self.categories.search(q, limit)
        return [CategorySummary(id=c.id, name=c.name, slug=c.slug) for c in found]

    async def health_check(self):
        return {
            "status": "ok",
            "totalProducts": await self.catalog.count(Predicate()),
        }
