"""
Infinite-scroll accumulation of query pages.

Pages fetched for one criteria key are concatenated in fetch order. A new key
throws everything away, and fetches started under an old key are ignored when
they complete.
"""

from dataclasses import dataclass
from typing import Any, Hashable, List, Optional, Set
import logging

from catalog.schemas.benefit import Benefit, QueryResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchTicket:
    """Identifies one in-flight page request."""
    generation: int
    page: int


class ResultAccumulator:
    """Single-writer list of benefits built from successive pages."""

    def __init__(self, criteria_key: Hashable = None):
        self._generation = 0
        self._in_flight: Optional[FetchTicket] = None
        self.criteria_key: Any = criteria_key
        self._reset_items()

    def _reset_items(self) -> None:
        self._items: List[Benefit] = []
        self._seen_ids: Set[str] = set()
        self.pages_loaded = 0
        self.last_page: Optional[QueryResult] = None
        self._exhausted = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def items(self) -> List[Benefit]:
        return list(self._items)

    @property
    def total(self) -> int:
        return self.last_page.total if self.last_page else 0

    @property
    def has_more(self) -> bool:
        """Before the first page arrives there is always something to load."""
        if self.last_page is None:
            return True
        return not self._exhausted and len(self._items) < self.last_page.total

    @property
    def next_page(self) -> int:
        return self.pages_loaded + 1

    @property
    def is_fetching(self) -> bool:
        return self._in_flight is not None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def reset(self, criteria_key: Hashable) -> None:
        """Start over for new criteria; outstanding fetches become stale."""
        self._generation += 1
        self._in_flight = None
        self.criteria_key = criteria_key
        self._reset_items()

    def begin_fetch(self) -> Optional[FetchTicket]:
        """
        Reserve the next page request. Returns None while another request is
        outstanding or when everything has been loaded.
        """
        if self._in_flight is not None or not self.has_more:
            return None
        self._in_flight = FetchTicket(self._generation, self.next_page)
        return self._in_flight

    def complete_fetch(self, ticket: FetchTicket, result: QueryResult) -> bool:
        """Merge a page. Returns False (and drops it) unless the ticket is the one in flight."""
        if ticket.generation != self._generation:
            logger.debug(f"Dropping stale page {ticket.page} (generation {ticket.generation})")
            return False
        if ticket != self._in_flight:
            logger.debug(f"Dropping page {ticket.page}: not the outstanding request")
            return False
        self._in_flight = None

        for benefit in result.data:
            if benefit.id in self._seen_ids:
                continue
            self._seen_ids.add(benefit.id)
            self._items.append(benefit)

        self.pages_loaded = max(self.pages_loaded, ticket.page)
        # An empty page means the server has nothing further
        if not result.data:
            self._exhausted = True
        self.last_page = result
        return True

    def fail_fetch(self, ticket: FetchTicket) -> None:
        """Release the in-flight slot after a failed request."""
        if self._in_flight == ticket:
            self._in_flight = None
