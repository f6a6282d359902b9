"""
Benefit query engine.

Filter -> (conditionally) sort -> paginate -> summarize, over an in-memory
sequence of immutable benefits. Pure and synchronous: no I/O, no shared state,
safe to call concurrently for different criteria.
"""

from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence
import unicodedata

from catalog.core.i18n import normalize_day
from catalog.schemas.benefit import Benefit, FilterCriteria, QueryResult, SortBy
from catalog.services.discounts import parse_percent


# ============================================================================
# FILTERING
# ============================================================================

def _days_overlap(wanted: Iterable[str], offered: Iterable[str]) -> bool:
    offered_canonical = {normalize_day(d) for d in offered}
    return any(normalize_day(d) in offered_canonical for d in wanted)


def matches(benefit: Benefit, criteria: FilterCriteria, now: datetime) -> bool:
    """Return True if the benefit satisfies every constraint in criteria."""
    if criteria.category and benefit.category != criteria.category:
        return False

    if criteria.only_active and benefit.expires_at < now:
        return False

    if criteria.valid_days and not _days_overlap(criteria.valid_days, benefit.valid_days):
        return False

    if criteria.min_discount_percent is not None:
        percent = parse_percent(benefit.discount)
        if percent is None or percent < criteria.min_discount_percent:
            return False

    query = criteria.normalized_query
    if not query:
        return True

    haystack = f"{benefit.title}\n{benefit.category}\n{benefit.description}".lower()
    return query in haystack


# ============================================================================
# SORTING
# ============================================================================

def _sign(value) -> int:
    return (value > 0) - (value < 0)


def _collation_key(text: str):
    """Accent- and case-insensitive primary key, with the raw text as tie-break."""
    stripped = "".join(
        c for c in unicodedata.normalize("NFKD", text) if not unicodedata.combining(c)
    )
    return (stripped.casefold(), text)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_benefits(a: Benefit, b: Benefit, sort_by: SortBy, search_query: str = "") -> int:
    """Three-way comparison of two benefits under a sort strategy."""
    sort_by = SortBy(sort_by)

    if sort_by is SortBy.TITLE_ASC:
        return _cmp(_collation_key(a.title), _collation_key(b.title))

    if sort_by is SortBy.EXPIRES_ASC:
        return _cmp(a.expires_at, b.expires_at)

    if sort_by is SortBy.EXPIRES_DESC:
        return _cmp(b.expires_at, a.expires_at)

    if sort_by is SortBy.DISCOUNT_DESC:
        a_pct = parse_percent(a.discount)
        b_pct = parse_percent(b.discount)
        a_pct = -1 if a_pct is None else a_pct
        b_pct = -1 if b_pct is None else b_pct
        return _sign(b_pct - a_pct)

    # Relevance: only meaningful with a query
    query = (search_query or "").strip().lower()
    if not query:
        return 0

    a_title = a.title.lower()
    b_title = b.title.lower()
    gates = (
        (a_title.startswith(query), b_title.startswith(query)),
        (query in a_title, query in b_title),
        (query in a.category.lower(), query in b.category.lower()),
    )
    for a_hit, b_hit in gates:
        if a_hit != b_hit:
            return -1 if a_hit else 1
    return 0


def should_sort(criteria: FilterCriteria) -> bool:
    """Relevance without a query keeps insertion order, so no sort at all."""
    return not (criteria.sort_by is SortBy.RELEVANCE and not criteria.normalized_query)


def sort_benefits(benefits: Sequence[Benefit], sort_by: SortBy, search_query: str = "") -> List[Benefit]:
    """Stable sort; ties keep their prior relative order."""
    return sorted(
        benefits,
        key=cmp_to_key(lambda a, b: compare_benefits(a, b, sort_by, search_query)),
    )


# ============================================================================
# QUERY
# ============================================================================

def query_benefits(
    benefits: Sequence[Benefit],
    criteria: FilterCriteria,
    now: Optional[datetime] = None,
) -> QueryResult:
    """
    Run one catalog query.

    "now" is captured once per call so every record is judged against the same
    instant. A page past the end returns an empty slice with the real total.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    filtered = [b for b in benefits if matches(b, criteria, now)]

    if should_sort(criteria):
        filtered = sort_benefits(filtered, criteria.sort_by, criteria.search_query)

    start = (criteria.page - 1) * criteria.limit
    return QueryResult(
        data=filtered[start:start + criteria.limit],
        total=len(filtered),
        page=criteria.page,
        limit=criteria.limit,
    )


def find_benefit(benefits: Iterable[Benefit], benefit_id: str) -> Optional[Benefit]:
    return next((b for b in benefits if b.id == benefit_id), None)


def list_categories(benefits: Iterable[Benefit]) -> List[str]:
    """Distinct categories in first-seen order."""
    seen: List[str] = []
    for b in benefits:
        if b.category not in seen:
            seen.append(b.category)
    return seen
