from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

FAILURE_PAGE = 1
FAILURE_LIMIT = 12


class CategoryRef(BaseModel):
    id: str = ""
    name: str = "Uncategorized"
    slug: str = "uncategorized"


class PriceEntry(BaseModel):
    currency: str
    amount: float


class Rating(BaseModel):
    ratingValue: float = 0.0
    reviewCount: int = 0


class SearchResult(BaseModel):
    id: str
    title: str
    slug: str = ""
    mainImage: str = ""
    mainImageAlt: str = ""
    prices: List[PriceEntry] = []
    description: str = ""
    shortDescription: Optional[str] = None
    category: CategoryRef = CategoryRef()
    brand: str = ""
    quantity: int = 0
    availability: str = "InStock"
    aggregateRating: Rating = Rating()
    isGlobal: bool = False
    targetCountry: Optional[str] = None
    targetCity: Optional[str] = None
    keywords: List[str] = []
    createdAt: datetime
    bdtPrice: float = 0.0
    relevanceScore: int = 0

    @classmethod
    def from_product(cls, product, score: int, now: datetime) -> "SearchResult":
        category = CategoryRef()
        if product.category is not None:
            category = CategoryRef(
                id=product.category.id,
                name=product.category.name or "Uncategorized",
                slug=product.category.slug or "uncategorized",
            )

        rating = Rating()
        if product.aggregate_rating is not None:
            rating = Rating(
                ratingValue=product.aggregate_rating.value,
                reviewCount=product.aggregate_rating.review_count,
            )

        return cls(
            id=product.id,
            title=product.title,
            slug=product.slug,
            mainImage=product.main_image,
            mainImageAlt=product.main_image_alt,
            prices=[PriceEntry(currency=p.currency, amount=p.amount) for p in product.prices],
            description=product.description,
            shortDescription=product.short_description,
            category=category,
            brand=product.brand,
            quantity=product.quantity,
            availability=product.availability,
            aggregateRating=rating,
            isGlobal=product.is_global,
            targetCountry=product.target_country,
            targetCity=product.target_city,
            keywords=product.keywords[:],
            createdAt=product.created_at or now,
            bdtPrice=product.bdt_price,
            relevanceScore=score,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    totalPages: int
    totalResults: int


class SearchResponse(BaseModel):
    success: bool
    data: List[SearchResult]
    pagination: Pagination
    suggestions: List[str]
    searchTerms: List[str] = []
    error: Optional[str] = None

    @classmethod
    def empty(cls, limit: int) -> "SearchResponse":
        return cls(
            success=True,
            data=[],
            pagination=Pagination(page=1, limit=limit, totalPages=0, totalResults=0),
            suggestions=[],
            searchTerms=[],
        )

    @classmethod
    def failure(cls, message: str) -> "SearchResponse":
        return cls(
            success=False,
            error=message or "Internal server error",
            data=[],
            pagination=Pagination(page=FAILURE_PAGE, limit=FAILURE_LIMIT, totalPages=0, totalResults=0),
            suggestions=[],
            searchTerms=[],
        )


class CategorySummary(BaseModel):
    id: str
    name: str
    slug: str
