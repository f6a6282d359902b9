"""Tests for the HTTP client and its error taxonomy."""

import httpx
import pytest
import respx

from catalog.client.api_client import BenefitsApiClient
from catalog.client.errors import (
    ClientError,
    NetworkError,
    NotFound,
    ServerError,
    describe_error,
    error_for_status,
)
from catalog.schemas.benefit import FilterCriteria, SortBy
from conftest import API_BASE

REMOTE = "http://catalog.test/api/v1"


def ok_page(**overrides):
    body = {"data": [], "total": 0, "page": 1, "limit": 20, "success": True}
    body.update(overrides)
    return httpx.Response(200, json=body)


@pytest.fixture
def client(api):
    return BenefitsApiClient(base_url=API_BASE, http=api, sleep=lambda _: None)


class TestAgainstApp:
    """Client round-trips through the real application."""

    def test_list_benefits(self, client):
        result = client.list_benefits(FilterCriteria(category="Café", limit=5, sort_by=SortBy.TITLE_ASC))
        assert result.limit == 5
        assert 0 < len(result.data) <= 5
        assert all(b.category == "Café" for b in result.data)
        assert result.data[0].expires_at.tzinfo is not None

    def test_get_benefit(self, client, sample_catalog):
        assert client.get_benefit("1").title == sample_catalog[0].title

    def test_missing_benefit_raises_not_found(self, client):
        with pytest.raises(NotFound) as exc:
            client.get_benefit("nope")
        assert exc.value.status_code == 404
        assert isinstance(exc.value, ClientError)

    def test_rejected_criteria_raise_client_error(self, client):
        with pytest.raises(ClientError) as exc:
            client.list_benefits(FilterCriteria(limit=500))
        assert exc.value.status_code == 400

    def test_categories_and_days(self, client):
        assert "Viajes" in client.list_categories()
        assert client.day_labels("en")[-1] == "Sun"


class TestTransportFailures:
    """Retry policy and status mapping, with the transport mocked."""

    @respx.mock
    def test_network_error_retried_then_raised(self):
        route = respx.get(url__startswith=f"{REMOTE}/benefits").mock(
            side_effect=httpx.ConnectError("connection refused")
        )
        delays = []
        api = BenefitsApiClient(base_url=REMOTE, max_retries=2, retry_delay=0.5, sleep=delays.append)
        with pytest.raises(NetworkError):
            api.list_benefits(FilterCriteria())
        assert route.call_count == 3
        assert delays == [0.5, 1.0]

    @respx.mock
    def test_server_error_recovers_on_retry(self):
        route = respx.get(url__startswith=f"{REMOTE}/benefits").mock(side_effect=[
            httpx.Response(503, json={"error": "down", "success": False}),
            ok_page(total=7),
        ])
        api = BenefitsApiClient(base_url=REMOTE, sleep=lambda _: None)
        assert api.list_benefits(FilterCriteria()).total == 7
        assert route.call_count == 2

    @respx.mock
    def test_server_error_gives_up_after_cap(self):
        route = respx.get(url__startswith=f"{REMOTE}/benefits").mock(
            return_value=httpx.Response(500, json={"error": "boom", "success": False})
        )
        api = BenefitsApiClient(base_url=REMOTE, max_retries=1, sleep=lambda _: None)
        with pytest.raises(ServerError) as exc:
            api.list_benefits(FilterCriteria())
        assert exc.value.message == "boom"
        assert route.call_count == 2

    @respx.mock
    def test_client_errors_are_not_retried(self):
        route = respx.get(url__startswith=f"{REMOTE}/benefits/42").mock(
            return_value=httpx.Response(404, json={"error": "Benefit not found", "success": False})
        )
        api = BenefitsApiClient(base_url=REMOTE, sleep=lambda _: None)
        with pytest.raises(NotFound):
            api.get_benefit("42")
        assert route.call_count == 1

    @respx.mock
    def test_query_parameters_sent(self):
        route = respx.get(url__startswith=f"{REMOTE}/benefits").mock(return_value=ok_page())
        api = BenefitsApiClient(base_url=REMOTE)
        api.list_benefits(FilterCriteria(valid_days=["Lun", "Mar"], only_active=True, page=2))
        params = route.calls.last.request.url.params
        assert params["days"] == "Lun,Mar"
        assert params["onlyActive"] == "true"
        assert params["page"] == "2"
        assert "category" not in params


class TestDescribeError:

    def test_network_error(self):
        info = describe_error(NetworkError("offline"))
        assert info.is_retryable and info.should_reset_filters
        assert info.status_code == 0

    def test_server_error(self):
        info = describe_error(ServerError("bad gateway", 502))
        assert info.title == "Server Error"
        assert info.is_retryable

    def test_bad_request_offers_reset_not_retry(self):
        info = describe_error(error_for_status(400, "bad"))
        assert not info.is_retryable
        assert info.should_reset_filters

    def test_not_found(self):
        info = describe_error(NotFound())
        assert info.title == "Not Found"
        assert info.description == "The requested resource was not found."

    @pytest.mark.parametrize("status,retryable,reset", [
        (401, False, False),
        (403, False, False),
        (408, True, True),
        (429, True, False),
        (418, False, True),
    ])
    def test_other_client_statuses(self, status, retryable, reset):
        info = describe_error(error_for_status(status, "x"))
        assert (info.is_retryable, info.should_reset_filters) == (retryable, reset)

    def test_error_for_status_mapping(self):
        assert type(error_for_status(404, "")) is NotFound
        assert type(error_for_status(422, "")) is ClientError
        assert type(error_for_status(503, "")) is ServerError
