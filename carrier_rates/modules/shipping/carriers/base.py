"""
Carrier Contracts

Carriers are structural: anything with a `carrier_code` and an async
`get_rates` is a carrier. There is no shared base class to inherit from.
Each carrier owns its own auth manager and wire mapper.
"""
from typing import Protocol, runtime_checkable

from carrier_rates.schemas.enums import CarrierCode
from carrier_rates.schemas.shipping import RateRequest, RateResponse


@runtime_checkable
class CarrierProvider(Protocol):
    """Minimum contract for a rating carrier."""

    carrier_code: CarrierCode

    async def get_rates(self, request: RateRequest) -> RateResponse:
        """
        Rate a validated request against the carrier.

        Raises:
            CarrierError: on any auth, transport or carrier-side failure
        """
        ...


@runtime_checkable
class AuthProvider(Protocol):
    """Bearer-token source for one carrier's API."""

    async def get_access_token(self) -> str:
        ...

    def invalidate_token(self) -> None:
        ...
