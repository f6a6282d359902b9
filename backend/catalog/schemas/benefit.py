"""
Domain and wire models for the benefits catalog.
Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SortBy(str, Enum):
    """Available orderings for a benefits query."""
    RELEVANCE = "relevance"
    EXPIRES_ASC = "expiresAsc"
    EXPIRES_DESC = "expiresDesc"
    DISCOUNT_DESC = "discountDesc"
    TITLE_ASC = "titleAsc"


class ImageRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    uri: str


class Benefit(BaseModel):
    """A discount/perk catalog record. Never mutated once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    discount: str
    category: str
    description: str = ""
    valid_days: Tuple[str, ...] = Field(default=(), alias="validDays")
    expires_at: datetime = Field(..., alias="expiresAt")
    image_square: Optional[ImageRef] = Field(None, alias="imageSquare")
    image_hero: Optional[ImageRef] = Field(None, alias="imageHero")

    @field_validator("expires_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes; stored values are UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class FilterCriteria(BaseModel):
    """
    Filter, sort and pagination parameters for one query.

    Every filter field defaults to "no constraint". Invalid values
    (page < 1, limit <= 0, negative discount floor) are rejected, never coerced,
    both on construction and on attribute assignment.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    category: Optional[str] = None
    search_query: str = Field("", alias="searchQuery")
    valid_days: List[str] = Field(default_factory=list, alias="validDays")
    only_active: bool = Field(False, alias="onlyActive")
    min_discount_percent: Optional[int] = Field(None, ge=0, alias="minDiscountPercent")
    sort_by: SortBy = Field(SortBy.RELEVANCE, alias="sortBy")
    page: int = Field(1, ge=1)
    limit: int = Field(20, gt=0)

    @field_validator("category")
    @classmethod
    def blank_category_is_unset(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @property
    def normalized_query(self) -> str:
        return self.search_query.strip().lower()

    def criteria_key(self) -> Tuple[Any, ...]:
        """Hashable identity of the filter/sort fields, ignoring pagination."""
        return (
            self.category,
            self.search_query,
            tuple(sorted(self.valid_days)),
            self.only_active,
            self.min_discount_percent,
            self.sort_by.value,
        )

    def for_page(self, page: int, limit: Optional[int] = None) -> "FilterCriteria":
        data = self.model_dump()
        data.update(page=page, limit=self.limit if limit is None else limit)
        return FilterCriteria(**data)

    def to_query_params(self) -> Dict[str, Any]:
        """Query-string form understood by GET /benefits."""
        params: Dict[str, Any] = {
            "sortBy": self.sort_by.value,
            "page": self.page,
            "limit": self.limit,
        }
        if self.category:
            params["category"] = self.category
        if self.search_query.strip():
            params["search"] = self.search_query.strip()
        if self.valid_days:
            params["days"] = ",".join(self.valid_days)
        if self.only_active:
            params["onlyActive"] = "true"
        if self.min_discount_percent is not None:
            params["minDiscountPercent"] = self.min_discount_percent
        return params


class QueryResult(BaseModel):
    """One page of matched benefits plus the criteria-wide total."""

    data: List[Benefit]
    total: int
    page: int
    limit: int


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------

class BenefitsResponse(BaseModel):
    data: List[Dict[str, Any]]
    total: int
    page: int
    limit: int
    success: bool = True


class BenefitResponse(BaseModel):
    data: Dict[str, Any]
    success: bool = True


class ListResponse(BaseModel):
    data: List[str]
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
    success: bool = False
