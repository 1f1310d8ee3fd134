"""
UPS Carrier Implementation

Rates shipments against the UPS Rating API:
- Rate mode when a service level is requested, Shop mode otherwise
- One transparent re-authentication when UPS answers 401
- Every other failure surfaces as a CarrierError; nothing else is retried
"""
import asyncio
import logging
import uuid
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from carrier_rates.core.config import UPSConfig
from carrier_rates.core.exceptions import CarrierError, CarrierErrorCode
from carrier_rates.core.http_client import HTTPResponse, HTTPTransport, HttpxTransport
from carrier_rates.schemas.enums import CarrierCode
from carrier_rates.schemas.shipping import RateRequest, RateResponse
from carrier_rates.schemas.ups import UPSErrorResponse, UPSRateResponseBody
from carrier_rates.services.ups_auth import UPSAuthManager
from carrier_rates.services.ups_rating_mapper import UPSRatingMapper

logger = logging.getLogger(__name__)

RATING_PATH = "/api/rating/{version}/{option}"


class UPSCarrier:
    """
    UPS rating carrier.

    Owns one UPSAuthManager and one UPSRatingMapper. The transport may be
    shared; it is only closed here when this carrier created it.
    """

    carrier_code = CarrierCode.UPS

    def __init__(self, config: UPSConfig, transport: Optional[HTTPTransport] = None):
        self._config = config
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport()
        self.auth = UPSAuthManager(self._transport, config)
        self.mapper = UPSRatingMapper(config)

    async def close(self):
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.close()

    def _rating_url(self, option: str) -> str:
        path = RATING_PATH.format(version=self._config.version, option=option)
        return f"{self._config.base_url}{path}"

    async def get_rates(self, request: RateRequest) -> RateResponse:
        """Get shipping rates from UPS."""
        return await self._execute_rate_request(request, is_retry=False)

    async def _execute_rate_request(self, request: RateRequest, is_retry: bool) -> RateResponse:
        body = self.mapper.to_ups_rate_request(request)
        url = self._rating_url(self.mapper.request_option(request))

        token = await self.auth.get_access_token()

        response = await self._post(url, body, token)

        if response.status == 401 and not is_retry:
            logger.warning("UPS rating returned 401, refreshing token and retrying once")
            self.auth.invalidate_token()
            return await self._execute_rate_request(request, is_retry=True)

        if response.status == 429:
            logger.error("UPS rate limit exceeded")
            raise CarrierError(
                code=CarrierErrorCode.RATE_LIMITED,
                message="UPS rate limit exceeded",
                carrier=self.carrier_code.value,
                http_status=429,
                retryable=True,
            )

        if response.status >= 400:
            raise self._api_error(response)

        try:
            parsed = UPSRateResponseBody.model_validate(response.data)
            return self.mapper.to_rate_response(parsed)
        except ValueError as e:
            issues = e.errors(include_url=False) if isinstance(e, ValidationError) else [{"msg": str(e)}]
            logger.error(f"UPS rating response failed validation: {len(issues)} issue(s)")
            raise CarrierError(
                code=CarrierErrorCode.MALFORMED_RESPONSE,
                message="UPS returned an unexpected response format",
                carrier=self.carrier_code.value,
                details={"issues": issues},
            ) from e

    async def _post(self, url: str, body: Dict[str, Any], token: str) -> HTTPResponse:
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "transId": str(uuid.uuid4()),
            "transactionSrc": self._config.transaction_src,
        }

        try:
            return await self._transport.post(
                url,
                body,
                headers=headers,
                timeout_ms=self._config.rating_timeout_ms,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(f"UPS rating request timed out: {e!r}")
            raise CarrierError(
                code=CarrierErrorCode.TIMEOUT,
                message="UPS API request timed out",
                carrier=self.carrier_code.value,
                retryable=True,
                cause=e,
            ) from e
        except (httpx.RequestError, OSError) as e:
            logger.error(f"UPS rating request failed: {e!r}")
            raise CarrierError(
                code=CarrierErrorCode.NETWORK_ERROR,
                message="Failed to connect to UPS API",
                carrier=self.carrier_code.value,
                retryable=True,
                cause=e,
            ) from e

    def _api_error(self, response: HTTPResponse) -> CarrierError:
        """Build a CARRIER_API_ERROR from a 4xx/5xx response."""
        message = f"UPS API error: {response.status}"
        try:
            envelope = UPSErrorResponse.model_validate(response.data)
        except ValidationError:
            details: Dict[str, Any] = {"raw_data": response.data}
        else:
            errors = envelope.response.errors
            if errors:
                message = errors[0].message
            details = {"errors": [error.model_dump() for error in errors]}

        logger.error(f"UPS API error: {response.status} - {message}")
        return CarrierError(
            code=CarrierErrorCode.CARRIER_API_ERROR,
            message=message,
            carrier=self.carrier_code.value,
            http_status=response.status,
            retryable=response.status >= 500,
            details=details,
        )
