"""
Rate Service

Entry point for callers. Validates rate requests, dispatches them to one
carrier (get_rates) or to every registered carrier at once (shop_rates) and
merges the results.

Shopping tolerates partial failure: a carrier that fails contributes a
warning instead of aborting the whole request.
"""
import asyncio
import logging
from typing import Any, List, Mapping, Union

from pydantic import BaseModel, ValidationError

from carrier_rates.core.exceptions import CarrierError, CarrierErrorCode
from carrier_rates.modules.shipping.carriers import CarrierRegistry
from carrier_rates.schemas.enums import CarrierCode
from carrier_rates.schemas.shipping import RateQuote, RateRequest, RateResponse

logger = logging.getLogger(__name__)

RateRequestInput = Union[RateRequest, Mapping[str, Any]]


class RateService:
    def __init__(self, registry: CarrierRegistry):
        self.registry = registry

    async def get_rates(self, carrier_code: CarrierCode, request: RateRequestInput) -> RateResponse:
        """
        Get rates from a specific carrier.

        Raises:
            CarrierError: VALIDATION_ERROR, CARRIER_NOT_FOUND, or whatever the
                carrier raised, unchanged
        """
        validated = self.validate(request)
        carrier = self.registry.get(carrier_code)
        return await carrier.get_rates(validated)

    async def shop_rates(self, request: RateRequestInput) -> RateResponse:
        """
        Shop rates across all registered carriers.

        Returns combined quotes sorted by total charges ascending (ties keep
        arrival order). One carrier failing does not block the others.
        """
        validated = self.validate(request)
        carriers = self.registry.get_all()

        if not carriers:
            raise CarrierError(
                code=CarrierErrorCode.CARRIER_NOT_FOUND,
                message="No carriers registered",
            )

        quotes: List[RateQuote] = []
        warnings: List[str] = []

        async def settle(carrier):
            try:
                result = await carrier.get_rates(validated)
            except Exception as e:
                code = getattr(carrier.carrier_code, "value", carrier.carrier_code)
                message = e.message if isinstance(e, CarrierError) else (str(e) or "Unknown error")
                logger.warning(f"Carrier {code} failed during shopping: {message}")
                warnings.append(f"{code}: {message}")
                return
            quotes.extend(result.quotes)
            if result.warnings:
                warnings.extend(result.warnings)

        # Each task records its own outcome as it completes
        await asyncio.gather(*(settle(carrier) for carrier in carriers))

        quotes.sort(key=lambda quote: quote.total_charges.amount)

        logger.info(
            f"Shopped {len(carriers)} carrier(s): {len(quotes)} quote(s), {len(warnings)} warning(s)"
        )
        return RateResponse(quotes=quotes, warnings=warnings or None)

    @staticmethod
    def validate(request: RateRequestInput) -> RateRequest:
        """
        Validate a request given as a model or a plain mapping.

        Models are re-validated from their dumped fields so instances built
        with model_construct() cannot bypass the checks.
        """
        data = request.model_dump() if isinstance(request, BaseModel) else request
        try:
            return RateRequest.model_validate(data)
        except ValidationError as e:
            raise CarrierError(
                code=CarrierErrorCode.VALIDATION_ERROR,
                message="Invalid rate request",
                details={"issues": e.errors(include_url=False)},
            ) from e
