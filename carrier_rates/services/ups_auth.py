"""
UPS OAuth Token Manager

Implements the UPS client-credentials exchange and caches a single bearer
token per manager instance.

- Token is reused until 60s before its declared expiry
- Concurrent callers during a refresh share one in-flight exchange
- invalidate_token() drops the cache (used by the carrier on a 401)
"""
import asyncio
import base64
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from carrier_rates.core.config import UPSConfig
from carrier_rates.core.exceptions import CarrierError, CarrierErrorCode
from carrier_rates.core.http_client import HTTPTransport
from carrier_rates.schemas.enums import CarrierCode
from carrier_rates.schemas.ups import UPSOAuthResponse

logger = logging.getLogger(__name__)

# Refresh this many seconds before the declared expiry
TOKEN_EXPIRY_BUFFER_SECONDS = 60

GRANT_BODY = "grant_type=client_credentials"


@dataclass(frozen=True)
class CachedToken:
    access_token: str
    expires_at: float  # clock() seconds


class UPSAuthManager:
    """
    Produces valid bearer tokens for the UPS Rating API.

    At most one credential exchange is in flight at any time; every caller that
    arrives while it runs awaits the same task and gets the same token (or the
    same CarrierError).
    """

    def __init__(
        self,
        transport: HTTPTransport,
        config: UPSConfig,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._transport = transport
        self._config = config
        self._clock = clock
        self._cached_token: Optional[CachedToken] = None
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def has_valid_token(self) -> bool:
        token = self._cached_token
        return token is not None and self._clock() < token.expires_at

    async def get_access_token(self) -> str:
        """Return a cached token, or exchange credentials for a new one."""
        token = self._cached_token
        if token is not None and self._clock() < token.expires_at:
            return token.access_token

        if self._refresh_task is None:
            self._refresh_task = asyncio.create_task(self._refresh())

        # shield: a cancelled caller must not cancel the exchange other callers share
        return await asyncio.shield(self._refresh_task)

    def invalidate_token(self) -> None:
        """Drop the cached token. Does not touch an in-flight refresh."""
        self._cached_token = None

    async def _refresh(self) -> str:
        try:
            return await self._acquire_token()
        finally:
            self._refresh_task = None

    def _basic_auth_header(self) -> str:
        auth_string = f"{self._config.client_id}:{self._config.client_secret}"
        return "Basic " + base64.b64encode(auth_string.encode()).decode()

    async def _acquire_token(self) -> str:
        carrier = CarrierCode.UPS.value

        try:
            response = await self._transport.post(
                self._config.oauth_url,
                GRANT_BODY,
                headers={
                    "Authorization": self._basic_auth_header(),
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                timeout_ms=self._config.auth_timeout_ms,
            )
        except (httpx.RequestError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"UPS OAuth request failed: {e!r}")
            raise CarrierError(
                code=CarrierErrorCode.NETWORK_ERROR,
                message="Failed to acquire UPS OAuth token",
                carrier=carrier,
                retryable=True,
                cause=e,
            ) from e

        if response.status != 200:
            logger.error(f"UPS OAuth failed: {response.status}")
            raise CarrierError(
                code=CarrierErrorCode.AUTH_FAILED,
                message=f"UPS OAuth failed with status {response.status}",
                carrier=carrier,
                http_status=response.status,
                retryable=response.status >= 500,
            )

        try:
            parsed = UPSOAuthResponse.model_validate(response.data)
        except ValidationError as e:
            logger.error(f"UPS OAuth response failed validation: {e.error_count()} issue(s)")
            raise CarrierError(
                code=CarrierErrorCode.MALFORMED_RESPONSE,
                message="UPS OAuth returned unexpected response format",
                carrier=carrier,
                details={"issues": e.errors(include_url=False)},
            ) from e

        expires_in = int(parsed.expires_in)
        self._cached_token = CachedToken(
            access_token=parsed.access_token,
            expires_at=self._clock() + expires_in - TOKEN_EXPIRY_BUFFER_SECONDS,
        )

        logger.info(f"UPS OAuth token obtained, expires in {expires_in}s")
        return parsed.access_token
