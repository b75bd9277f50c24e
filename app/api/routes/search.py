from typing import List, Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from app.models.search_query import SearchQuery
from app.models.search_response import CategorySummary

router = APIRouter()

DEFAULT_CATEGORY_LIMIT = 10


def _category_limit(raw: Optional[str]) -> int:
    try:
        return int(raw.strip()) if raw and raw.strip() else DEFAULT_CATEGORY_LIMIT
    except ValueError:
        return DEFAULT_CATEGORY_LIMIT


@router.get("/")
async def search(
    request: Request,
    q: Optional[str] = Query(None, description="Search query string"),
    page: Optional[str] = Query(None, description="Page number (1-based)"),
    limit: Optional[str] = Query(None, description="Number of results per page"),
    category: Optional[str] = Query(None, description="Category id, slug or name"),
    sort: Optional[str] = Query(None, description="relevance, price_asc, price_desc, newest or rating"),
    minPrice: Optional[str] = Query(None, description="Lower BDT price bound"),
    maxPrice: Optional[str] = Query(None, description="Upper BDT price bound"),
    availability: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    ):
    service = request.app.state.search_service

    query = SearchQuery(
        q=q,
        page=page,
        limit=limit,
        category=category,
        sort=sort,
        minPrice=minPrice,
        maxPrice=maxPrice,
        availability=availability,
        brand=brand,
    )

    response = await service.search(query)

    return JSONResponse(
        status_code=200 if response.success else 500,
        content=response.model_dump(mode="json", exclude_none=True),
    )

@router.get("/categories", response_model=List[CategorySummary])
async def search_categories(
    request: Request,
    q: str = Query("", description="Category name or slug fragment"),
    limit: Optional[str] = Query(None, description="Maximum number of categories"),
    ):
    service = request.app.state.search_service
    return await service.search_categories(q, _category_limit(limit))

@router.get("/health")
async def health(request: Request):
    service = request.app.state.search_service
    return await service.health_check()
