"""Base async client for downstream HTTP services."""

import asyncio
import logging
from typing import Optional

import httpx

from .exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


class Client:
    """Base class for downstream service clients.

    Provides a lazily created httpx.AsyncClient, configurable timeout,
    retries and headers via dict config.

    Config keys:
        base_url (required): Base URL for all requests
        timeout: Request timeout in seconds (default: 30)
        retry_attempts: Attempts for connect/timeout failures (default: 3)
        retry_delay: Delay between retries in seconds (default: 1)
        headers: Additional headers to include in requests
        transport: Optional httpx.AsyncBaseTransport (tests use MockTransport)
    """

    def __init__(self, config: dict):
        if "base_url" not in config:
            raise ValueError("config must include 'base_url'")

        self._config = config
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"])

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def retry_attempts(self) -> int:
        return max(1, int(self._config.get("retry_attempts", 3)))

    @property
    def retry_delay(self) -> float:
        return float(self._config.get("retry_delay", 1))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialized httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                transport=self._config.get("transport"),
            )
        return self._client

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Map HTTP errors to exceptions.

        Raises:
            NotFoundError: For 404 responses
            RateLimitError: For 429 responses
            APIError: For other non-2xx responses
        """
        if response.is_success:
            return response

        status_code = response.status_code

        if status_code == 404:
            raise NotFoundError(f"Resource not found: {response.url}")
        elif status_code == 429:
            raise RateLimitError(f"Rate limit exceeded: {response.url}")
        else:
            raise APIError(
                f"API error {status_code}: {response.url}",
                status_code=status_code,
                body=response.text,
            )

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs,
    ) -> httpx.Response:
        """Make a request, retrying connect errors and timeouts.

        Raises:
            ConnectionError: If all retry attempts fail due to network issues
            APIError: If the service returns a non-2xx response
        """
        last_exception: Exception | None = None

        for attempt in range(self.retry_attempts):
            try:
                response = await self.client.request(method, path, **kwargs)
                return self._handle_response(response)
            except httpx.ConnectError as e:
                last_exception = e
                logger.warning(
                    "Connection error (attempt %d/%d): %s", attempt + 1, self.retry_attempts, e
                )
            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "Timeout (attempt %d/%d): %s", attempt + 1, self.retry_attempts, e
                )
            if attempt < self.retry_attempts - 1:
                await asyncio.sleep(self.retry_delay)

        msg = f"Connection to {self.base_url} failed after {self.retry_attempts} attempts"
        raise ConnectionError(msg) from last_exception

    async def get(self, path: str, **kwargs) -> httpx.Response:
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> httpx.Response:
        return await self._request("POST", path, **kwargs)


def user_headers(user_id: Optional[str]) -> dict[str, str]:
    """CJSCPPUID header for the acting user, when one is known."""
    if user_id and user_id.strip():
        return {"CJSCPPUID": user_id.strip()}
    return {}
