"""Shared httpx plumbing for HTTP-based food data connectors."""

from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mealprint.config import get_settings
from mealprint.ingest.connectors.base import (
    ConnectorError,
    ConnectorResponse,
    FoodDataConnector,
    RateLimitError,
)
from mealprint.logging_config import get_logger

logger = get_logger(__name__)


class HttpFoodConnector(FoodDataConnector):
    """Food data connector backed by a lazily created httpx.AsyncClient."""

    DEFAULT_TIMEOUT = 10.0
    BACKOFF_BASE = 1
    BACKOFF_MAX = 10

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        settings = get_settings()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or settings.food_lookup_timeout or self.DEFAULT_TIMEOUT
        self.max_retries = max_retries or settings.food_lookup_max_retries
        self._client: httpx.AsyncClient | None = None

    def _default_headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        return {
            "Accept": "application/json",
            "User-Agent": "Mealprint/1.0",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=self._default_headers(),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint}" if endpoint else self.base_url

    async def _request(
        self,
        endpoint: str = "",
        params: dict[str, Any] | None = None,
    ) -> ConnectorResponse:
        """Make an HTTP GET request with retry logic."""
        url = self._url(endpoint)
        client = await self._get_client()

        @retry(
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.BACKOFF_BASE, max=self.BACKOFF_MAX),
            reraise=True,
        )
        async def _do_request() -> httpx.Response:
            return await client.get(url, params=params)

        try:
            response = await _do_request()
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            logger.error(f"Request failed after {self.max_retries} attempts: {url}")
            raise ConnectorError(
                f"Request failed after {self.max_retries} attempts",
                response=str(e),
            ) from e

        headers = dict(response.headers)

        if response.status_code == 429:
            result = ConnectorResponse(data={}, status_code=429, headers=headers)
            raise RateLimitError(f"{self.name} rate limit exceeded", result.retry_after)

        if response.status_code >= 400 and response.status_code != 404:
            error_detail = response.text[:500] if response.text else "No details"
            logger.error(f"API error {response.status_code} for {url}: {error_detail}")
            raise ConnectorError(
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
                response=error_detail,
            )

        try:
            data = response.json() if response.text else {}
        except ValueError as e:
            logger.warning(f"Failed to parse JSON response: {e}")
            data = {}

        return ConnectorResponse(
            data=data,
            status_code=response.status_code,
            headers=headers,
            raw_response=data,
        )

    async def _ping(self, endpoint: str = "", params: dict[str, Any] | None = None) -> bool:
        """GET an endpoint and report whether the API answered without a server error."""
        try:
            client = await self._get_client()
            response = await client.get(self._url(endpoint), params=params)
            return response.status_code < 500
        except httpx.HTTPError as e:
            logger.warning(f"{self.name} health check failed: {e}")
            return False

    async def __aenter__(self) -> "HttpFoodConnector":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
