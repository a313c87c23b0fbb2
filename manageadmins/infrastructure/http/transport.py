"""Transport client for the Meraki dashboard REST API.

Hides the specifics of httpx: performs exactly one call per request with the
configured base URL, bearer-token header and timeouts, and translates every
non-2xx response or network failure into a TransportError. No retry logic
lives here; see infrastructure.resilience.api_retry.
"""

import logging
from typing import Any, Optional

import httpx

from manageadmins import __version__
from manageadmins.domain.models.errors import TransportError
from manageadmins.infrastructure.config.settings import DashboardConfig

logger = logging.getLogger(__name__)


class TransportClient:
    """Async HTTP client bound to one dashboard API key."""

    USER_AGENT = f"manageadmins/{__version__}"

    def __init__(self, config: DashboardConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initializes the underlying httpx client.

        Args:
            config: Immutable dashboard configuration (base URL, key, timeouts).
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
        """
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": self.USER_AGENT,
            },
            timeout=httpx.Timeout(config.transmit_timeout_s, connect=config.connect_timeout_s),
            transport=transport,
        )
        logger.debug(f"TransportClient initialized for {config.base_url}")

    async def __aenter__(self) -> "TransportClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, path: str, json_body: Optional[Any] = None) -> Any:
        """Performs one HTTP call and returns the decoded JSON body.

        Args:
            method: HTTP verb, e.g. 'GET'.
            path: Path relative to the base URL, e.g. '/organizations'.
            json_body: Optional request body, serialized as JSON.

        Returns:
            The decoded body, or None when the response has no content.

        Raises:
            TransportError: On a network failure, a non-2xx status, or a body
                that is not valid JSON.
        """
        try:
            response = await self._client.request(method, path, json=json_body)
        except httpx.HTTPError as e:
            logger.debug(f"{method} {path} failed before a response arrived: {type(e).__name__}: {e}")
            raise TransportError(f"{method} {path} failed: {type(e).__name__}: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"{method} {path} returned HTTP {response.status_code}: {self._error_detail(response)}",
                status_code=response.status_code,
                headers=response.headers,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"{method} {path} returned a body that is not valid JSON",
                status_code=response.status_code,
                headers=response.headers,
            ) from e

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Extracts the dashboard's error list when present, else the reason phrase."""
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase or "no detail"
        if isinstance(body, dict) and isinstance(body.get("errors"), list):
            return "; ".join(str(error) for error in body["errors"])
        return response.reason_phrase or "no detail"
