"""
HOOPSTATS - Base Collector

Shared HTTP plumbing for upstream data providers. One attempt per call:
fallbacks across endpoints are the caller's business.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from hoopstats.core.exceptions import UpstreamTransportError

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """
    Abstract base class for upstream collectors.

    Provides:
    - Lazily created HTTP client with connection pooling
    - Request logging
    - Mapping of transport failures to UpstreamTransportError
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._get_headers(),
                limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers. Override in subclasses for auth."""
        return {"Accept": "application/json"}

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make a single HTTP request and return the decoded JSON body.

        Raises:
            UpstreamTransportError: timeout, connection error, non-2xx status
                or a body that is not JSON
        """
        client = await self.get_client()
        full_url = f"{self.base_url}{endpoint}"
        logger.info(f"[{self.name}] {method} {full_url}")

        try:
            response = await client.request(method=method, url=endpoint, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[{self.name}] HTTP {e.response.status_code} from {endpoint}")
            raise UpstreamTransportError(
                f"Upstream returned HTTP {e.response.status_code}",
                f"Request failed with status code {e.response.status_code}",
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"[{self.name}] Timeout calling {endpoint}: {e}")
            raise UpstreamTransportError("Upstream request timed out", str(e) or "timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"[{self.name}] Transport error calling {endpoint}: {e}")
            raise UpstreamTransportError(detail=str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.error(f"[{self.name}] Malformed body from {endpoint}: {e}")
            raise UpstreamTransportError("Upstream returned a malformed body", str(e)) from e

        logger.info(f"[{self.name}] HTTP {response.status_code} from {endpoint}")
        return data

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make GET request."""
        return await self._make_request("GET", endpoint, params=params)

    async def fetch(self, endpoint: str) -> Any:
        """GET an endpoint and return its unwrapped payload."""
        return self.unwrap(await self.get(endpoint), endpoint)

    @abstractmethod
    def unwrap(self, body: Any, endpoint: str) -> Any:
        """
        Extract the payload from the provider's response envelope.

        Must be implemented by subclasses.
        """
        pass
