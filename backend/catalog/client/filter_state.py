"""
Two-phase filter state: a draft being edited and the applied criteria that
actually drive queries. They only converge through apply / reset / clear.
"""

from typing import Any, Callable, List, Optional
import logging

from catalog.schemas.benefit import FilterCriteria

logger = logging.getLogger(__name__)

# Fields a filter editor may change; pagination belongs to the accumulator
EDITABLE_FIELDS = (
    "category",
    "search_query",
    "valid_days",
    "only_active",
    "min_discount_percent",
    "sort_by",
)


def default_criteria() -> FilterCriteria:
    return FilterCriteria()


class FilterStateStore:
    """
    Owns one session's `draft` and `applied` criteria.

    `draft` and `applied` are never the same object: every transition copies.
    `applied_version` increases whenever `applied` changes, so observers can
    tell stale results apart from current ones.
    """

    def __init__(self, initial: Optional[FilterCriteria] = None):
        base = initial or default_criteria()
        self._applied = base.model_copy(deep=True)
        self._draft = base.model_copy(deep=True)
        self.applied_version = 0
        self._listeners: List[Callable[[FilterCriteria], None]] = []

    @property
    def draft(self) -> FilterCriteria:
        return self._draft

    @property
    def applied(self) -> FilterCriteria:
        return self._applied

    @property
    def has_unapplied_changes(self) -> bool:
        return self._draft.criteria_key() != self._applied.criteria_key()

    def subscribe(self, listener: Callable[[FilterCriteria], None]) -> None:
        """Call `listener(applied)` after every change to the applied criteria."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Draft edits
    # ------------------------------------------------------------------

    def edit_draft(self, field: str, value: Any) -> None:
        """Set one draft field. Never touches `applied`."""
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown filter field: {field}")
        if isinstance(value, (list, tuple, set)):
            value = list(value)
        setattr(self._draft, field, value)

    def toggle_draft_day(self, day: str) -> None:
        days = list(self._draft.valid_days)
        if day in days:
            days.remove(day)
        else:
            days.append(day)
        self._draft.valid_days = days

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def apply(self) -> None:
        """applied := snapshot of draft."""
        if self._draft.criteria_key() == self._applied.criteria_key():
            return
        self._set_applied(self._draft.model_copy(deep=True))

    def clear(self) -> None:
        """Reset both draft and applied to the unconstrained default."""
        self._draft = default_criteria()
        self._set_applied(default_criteria())

    def reset_draft_to_applied(self) -> None:
        """Discard unsaved draft edits."""
        self._draft = self._applied.model_copy(deep=True)

    def apply_direct(self, **patch: Any) -> None:
        """
        Change applied criteria immediately (search-as-you-type) and mirror the
        same fields into the draft so the editor stays consistent.
        """
        unknown = set(patch) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown filter field(s): {', '.join(sorted(unknown))}")

        data = self._applied.model_dump()
        data.update(patch)
        updated = FilterCriteria(**data)

        for field, value in patch.items():
            setattr(self._draft, field, list(value) if isinstance(value, (list, tuple, set)) else value)

        if updated.criteria_key() != self._applied.criteria_key():
            self._set_applied(updated)

    def _set_applied(self, criteria: FilterCriteria) -> None:
        self._applied = criteria
        self.applied_version += 1
        logger.debug(f"Applied filters v{self.applied_version}: {criteria.criteria_key()}")
        for listener in list(self._listeners):
            listener(self._applied)
