"""Unit tests for infinite-scroll result accumulation."""

from catalog.client.accumulator import FetchTicket, ResultAccumulator
from catalog.schemas.benefit import QueryResult
from conftest import make_benefit


def page(ids, total, number, limit=2):
    return QueryResult(data=[make_benefit(i) for i in ids], total=total, page=number, limit=limit)


def ids(accumulator):
    return [b.id for b in accumulator.items]


class TestResultAccumulator:

    def test_pages_concatenate_in_fetch_order(self):
        acc = ResultAccumulator("k")
        assert acc.has_more and acc.next_page == 1

        ticket = acc.begin_fetch()
        assert ticket.page == 1
        assert acc.complete_fetch(ticket, page(["a", "b"], total=3, number=1))
        assert ids(acc) == ["a", "b"]
        assert acc.has_more and acc.next_page == 2

        ticket = acc.begin_fetch()
        assert acc.complete_fetch(ticket, page(["c"], total=3, number=2))
        assert ids(acc) == ["a", "b", "c"]
        assert not acc.has_more
        assert acc.begin_fetch() is None

    def test_second_load_more_ignored_while_in_flight(self):
        acc = ResultAccumulator("k")
        first = acc.begin_fetch()
        assert acc.is_fetching
        assert acc.begin_fetch() is None
        acc.complete_fetch(first, page(["a", "b"], total=4, number=1))
        assert not acc.is_fetching
        assert acc.begin_fetch() is not None

    def test_duplicates_dropped_by_id(self):
        acc = ResultAccumulator("k")
        acc.complete_fetch(acc.begin_fetch(), page(["a", "b"], total=4, number=1))
        acc.complete_fetch(acc.begin_fetch(), page(["b", "c"], total=4, number=2))
        assert ids(acc) == ["a", "b", "c"]

    def test_reset_returns_to_first_page_state(self):
        acc = ResultAccumulator("old")
        acc.complete_fetch(acc.begin_fetch(), page(["a", "b"], total=2, number=1))
        assert not acc.has_more

        acc.reset("new")
        assert acc.items == []
        assert acc.has_more
        assert acc.next_page == 1
        assert acc.total == 0
        assert acc.criteria_key == "new"

    def test_stale_fetch_discarded_after_reset(self):
        acc = ResultAccumulator("old")
        stale = acc.begin_fetch()
        acc.reset("new")

        assert not acc.complete_fetch(stale, page(["x", "y"], total=10, number=1))
        assert acc.items == []
        assert acc.has_more
        assert acc.begin_fetch().page == 1

    def test_fail_fetch_releases_slot(self):
        acc = ResultAccumulator("k")
        ticket = acc.begin_fetch()
        acc.fail_fetch(ticket)
        assert not acc.is_fetching
        assert acc.begin_fetch() == ticket

    def test_empty_page_stops_loading(self):
        acc = ResultAccumulator("k")
        acc.complete_fetch(acc.begin_fetch(), page(["a", "b"], total=5, number=1))
        acc.complete_fetch(acc.begin_fetch(), page([], total=5, number=2))
        assert not acc.has_more

    def test_ticket_completed_twice_is_ignored(self):
        acc = ResultAccumulator("k")
        ticket = acc.begin_fetch()
        assert acc.complete_fetch(ticket, page(["a", "b"], total=6, number=1))
        first_page = acc.last_page

        assert not acc.complete_fetch(ticket, page(["c", "d"], total=99, number=1))
        assert ids(acc) == ["a", "b"]
        assert acc.last_page is first_page
        assert acc.total == 6
        assert acc.next_page == 2

    def test_ticket_not_issued_by_begin_fetch_is_ignored(self):
        acc = ResultAccumulator("k")
        outstanding = acc.begin_fetch()
        forged = FetchTicket(outstanding.generation, 5)
        assert not acc.complete_fetch(forged, page(["x"], total=1, number=5))
        assert acc.is_fetching
        assert acc.pages_loaded == 0
