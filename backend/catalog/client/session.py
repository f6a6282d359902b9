"""
One browsing session: filter state + accumulated results + API client.
This is the object a UI layer drives.
"""

from typing import List, Optional
import logging

from catalog.client.accumulator import ResultAccumulator
from catalog.client.api_client import BenefitsApiClient
from catalog.client.errors import CatalogApiError, ErrorInfo, describe_error
from catalog.client.filter_state import FilterStateStore
from catalog.schemas.benefit import Benefit, FilterCriteria

logger = logging.getLogger(__name__)


class BenefitsBrowser:
    """
    Keeps the visible benefit list in step with the applied filters.

    Any change to the applied criteria resets accumulation to page 1; a page
    that arrives for superseded criteria is discarded by the accumulator.
    """

    def __init__(
        self,
        api: BenefitsApiClient,
        store: Optional[FilterStateStore] = None,
        page_size: int = 20,
    ):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.api = api
        self.store = store or FilterStateStore()
        self.page_size = page_size
        self.results = ResultAccumulator(self.store.applied.criteria_key())
        self.error: Optional[ErrorInfo] = None
        self.store.subscribe(self._on_applied_change)

    @property
    def items(self) -> List[Benefit]:
        return self.results.items

    @property
    def has_more(self) -> bool:
        return self.results.has_more

    @property
    def total(self) -> int:
        return self.results.total

    def _on_applied_change(self, applied: FilterCriteria) -> None:
        self.error = None
        self.results.reset(applied.criteria_key())

    def load_more(self) -> bool:
        """
        Fetch the next page for the applied criteria.
        Returns False when nothing was merged (already fetching, no more
        results, stale response or a failure recorded in `error`).
        """
        ticket = self.results.begin_fetch()
        if ticket is None:
            return False

        criteria = self.store.applied.for_page(ticket.page, self.page_size)
        try:
            page = self.api.list_benefits(criteria)
        except CatalogApiError as e:
            self.results.fail_fetch(ticket)
            self.error = describe_error(e)
            logger.warning(f"Loading page {ticket.page} failed: {e}")
            return False

        self.error = None
        return self.results.complete_fetch(ticket, page)

    def refresh(self) -> bool:
        """Drop accumulated pages and load page 1 again (retry action)."""
        self.results.reset(self.store.applied.criteria_key())
        return self.load_more()

    def retry(self) -> bool:
        """Retry action shown next to a retryable error."""
        if self.error is None or not self.error.is_retryable:
            return False
        return self.refresh()

    def search(self, query: str) -> bool:
        """Search-as-you-type: applies immediately, no Apply step."""
        self.store.apply_direct(search_query=query)
        if self.results.pages_loaded == 0:
            return self.load_more()
        return False

    def apply_filters(self) -> bool:
        self.store.apply()
        if self.results.pages_loaded == 0:
            return self.load_more()
        return False

    def reset_filters(self) -> bool:
        """The "reset filters" action offered alongside client errors."""
        self.store.clear()
        return self.load_more()
