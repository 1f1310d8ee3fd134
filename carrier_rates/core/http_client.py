"""
HTTP transport for carrier API calls

Carriers only ever POST, so the transport contract is a single coroutine:

    post(url, body, headers=..., timeout_ms=...) -> HTTPResponse

HTTP error statuses are returned, never raised. Transport failures propagate
as httpx exceptions so callers can tell a timeout (httpx.TimeoutException)
from any other connection failure (httpx.RequestError).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000


@dataclass
class HTTPResponse:
    """Status, decoded body and headers of a completed request."""
    status: int
    data: Any
    headers: Dict[str, str] = field(default_factory=dict)


@runtime_checkable
class HTTPTransport(Protocol):
    async def post(
        self,
        url: str,
        body: Any,
        *,
        headers: Dict[str, str],
        timeout_ms: Optional[int] = None,
    ) -> HTTPResponse:
        ...


class HttpxTransport:
    """
    httpx-backed transport.

    String bodies are sent as-is (form-encoded OAuth grants); anything else is
    serialized as JSON. JSON responses are decoded, other bodies come back as
    text so error paths can still attach them.

    Usage:
        async with HttpxTransport() as transport:
            response = await transport.post(url, body, headers=headers, timeout_ms=5000)
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ):
        self._client = client
        self._owns_client = client is None
        self.default_timeout_ms = default_timeout_ms

    async def __aenter__(self):
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.default_timeout_ms / 1000,
            )
            self._owns_client = True
        return self._client

    async def close(self):
        """Close HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def post(
        self,
        url: str,
        body: Any,
        *,
        headers: Dict[str, str],
        timeout_ms: Optional[int] = None,
    ) -> HTTPResponse:
        client = self._get_client()
        timeout = (timeout_ms or self.default_timeout_ms) / 1000

        if isinstance(body, (str, bytes)):
            response = await client.post(url, content=body, headers=headers, timeout=timeout)
        else:
            response = await client.post(url, json=body, headers=headers, timeout=timeout)

        logger.debug(f"POST {url} -> {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            data = response.text

        return HTTPResponse(
            status=response.status_code,
            data=data,
            headers=dict(response.headers),
        )
