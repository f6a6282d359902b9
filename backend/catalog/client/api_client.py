"""
HTTP client for the benefits API.

Maps transport failures and error statuses onto the client error taxonomy and
retries transient ones (network, 5xx) a capped number of times.
"""

from typing import Any, Callable, Dict, List, Optional
import logging
import time

import httpx

from catalog.client.errors import (
    CatalogApiError,
    NetworkError,
    ServerError,
    error_for_status,
)
from catalog.schemas.benefit import Benefit, FilterCriteria, QueryResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8890/api/v1"


class BenefitsApiClient:
    """Synchronous client over httpx; one instance per UI session."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        http: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._owns_http = http is None
        self._http = http or httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "BenefitsApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def list_benefits(self, criteria: FilterCriteria) -> QueryResult:
        payload = self._get("/benefits", params=criteria.to_query_params())
        return QueryResult(
            data=[Benefit.model_validate(item) for item in payload.get("data", [])],
            total=payload["total"],
            page=payload["page"],
            limit=payload["limit"],
        )

    def get_benefit(self, benefit_id: str) -> Benefit:
        payload = self._get(f"/benefits/{benefit_id}")
        return Benefit.model_validate(payload["data"])

    def list_categories(self) -> List[str]:
        return list(self._get("/benefits/categories").get("data", []))

    def day_labels(self, lang: str = "es") -> List[str]:
        return list(self._get("/benefits/meta/days", params={"lang": lang}).get("data", []))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        attempt = 0
        while True:
            try:
                return self._request_once("GET", path, params)
            except (NetworkError, ServerError) as e:
                if attempt >= self.max_retries:
                    logger.error(f"GET {path} failed after {attempt + 1} attempts: {e}")
                    raise
                attempt += 1
                delay = self.retry_delay * attempt
                logger.warning(
                    f"GET {path} attempt {attempt}/{self.max_retries + 1} failed: {e}, "
                    f"retrying in {delay:.1f}s..."
                )
                self._sleep(delay)

    def _request_once(self, method: str, path: str, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._http.request(method, url, params=params)
        except httpx.TransportError as e:
            raise NetworkError(f"Unable to reach {url}: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            message = response.reason_phrase or f"HTTP {response.status_code}"
            if isinstance(payload, dict) and payload.get("error"):
                message = str(payload["error"])
            raise error_for_status(response.status_code, message)

        if not isinstance(payload, dict):
            raise ServerError(f"Malformed response from {url}", response.status_code)
        if payload.get("success") is False:
            raise CatalogApiError(str(payload.get("error", "Request failed")), response.status_code)
        return payload
