"""
Benefits catalog routes.
Query parameters are validated here, before the query engine runs. Database
failures surface as 503 through the shared error handlers.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
import logging

from catalog.core.config import settings
from catalog.core.i18n import day_labels, DEFAULT_LANG, SUPPORTED_LANGS
from catalog.core.monitoring import track_performance
from catalog.core.rate_limiting import limiter, BENEFITS_LIMIT, DETAIL_LIMIT
from catalog.db.database import get_db
from catalog.db.repositories import BenefitRepository
from catalog.schemas.benefit import (
    BenefitResponse,
    BenefitsResponse,
    FilterCriteria,
    ListResponse,
    SortBy,
)
from catalog.services.query_engine import find_benefit, list_categories, query_benefits

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/benefits", tags=["benefits"])


def parse_days(days: Optional[str]) -> List[str]:
    """Split the comma-separated `days` parameter, ignoring blanks."""
    if not days:
        return []
    return [d.strip() for d in days.split(",") if d.strip()]


@router.get("", response_model=BenefitsResponse)
@limiter.limit(BENEFITS_LIMIT)
@track_performance("list_benefits")
def list_benefits(
    request: Request,
    category: Optional[str] = Query(None, description="Exact category name"),
    search: Optional[str] = Query(None, description="Free-text search"),
    days: Optional[str] = Query(None, description="Comma-separated weekdays (Lun,Mar or Mon,Tue)"),
    only_active: bool = Query(False, alias="onlyActive", description="Exclude expired benefits"),
    min_discount_percent: Optional[int] = Query(None, ge=0, alias="minDiscountPercent"),
    sort_by: SortBy = Query(SortBy.RELEVANCE, alias="sortBy"),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(settings.default_page_size, gt=0, le=settings.max_page_size, description="Page size"),
    db: Session = Depends(get_db),
):
    """
    Filtered, sorted, paginated benefits.
    `total` counts every match across pages.
    """
    criteria = FilterCriteria(
        category=category,
        search_query=search or "",
        valid_days=parse_days(days),
        only_active=only_active,
        min_discount_percent=min_discount_percent,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )

    result = query_benefits(BenefitRepository(db).list_benefits(), criteria)
    logger.debug(
        f"Benefits query {criteria.criteria_key()} page={page}: "
        f"{len(result.data)}/{result.total}"
    )
    return BenefitsResponse(
        data=[b.to_api() for b in result.data],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


@router.get("/categories", response_model=ListResponse)
def get_categories(db: Session = Depends(get_db)):
    """Distinct categories in catalog order."""
    return ListResponse(data=list_categories(BenefitRepository(db).list_benefits()))


@router.get("/meta/days", response_model=Dict[str, Any])
def list_days(lang: str = Query(DEFAULT_LANG.value, description="Language code (es, en)")):
    """Weekday labels for the day filter, Monday first."""
    resolved = lang.lower() if lang.lower() in SUPPORTED_LANGS else DEFAULT_LANG.value
    return {"data": day_labels(resolved), "lang": resolved, "success": True}


@router.get("/{benefit_id}", response_model=BenefitResponse)
@limiter.limit(DETAIL_LIMIT)
def get_benefit(request: Request, benefit_id: str, db: Session = Depends(get_db)):
    """Single benefit by id."""
    benefit = find_benefit(BenefitRepository(db).list_benefits(), benefit_id)
    if benefit is None:
        raise HTTPException(status_code=404, detail="Benefit not found")
    return BenefitResponse(data=benefit.to_api())
