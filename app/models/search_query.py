from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from app.core.config import settings
from search.ranking import SortMode

DEFAULT_PAGE = 1


def _positive_int(value, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number >= 1 else default


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class SearchQuery(BaseModel):
    """
    Parsed search parameters.

    Paging never fails validation: missing or unusable values fall back to
    their defaults. Price bounds are kept as given and interpreted when the
    filter predicate is built.
    """
    q: str = Field(default="", description="Search query string")

    page: int = Field(default=DEFAULT_PAGE, ge=1, description="Page number (1-based)")

    limit: int = Field(default=settings.default_limit, ge=1, description="Number of results per page")

    category: Optional[str] = Field(default=None, description="Category id, slug or name")

    sort: SortMode = Field(default=SortMode.RELEVANCE)

    minPrice: Optional[Union[float, str]] = Field(default=None, description="Lower BDT price bound")

    maxPrice: Optional[Union[float, str]] = Field(default=None, description="Upper BDT price bound")

    availability: Optional[str] = Field(default=None)

    brand: Optional[str] = Field(default=None)

    @field_validator("q", mode="before")
    @classmethod
    def _default_query(cls, value):
        return value if isinstance(value, str) else ""

    @field_validator("page", mode="before")
    @classmethod
    def _default_page(cls, value):
        return _positive_int(value, DEFAULT_PAGE)

    @field_validator("limit", mode="before")
    @classmethod
    def _default_limit(cls, value):
        return min(_positive_int(value, settings.default_limit), settings.max_limit)

    @field_validator("sort", mode="before")
    @classmethod
    def _default_sort(cls, value):
        return SortMode.parse(value) if value is not None else SortMode.RELEVANCE

    @field_validator("category", "availability", "brand", "minPrice", "maxPrice", mode="before")
    @classmethod
    def _strip_blank(cls, value):
        return _blank_to_none(value)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit
