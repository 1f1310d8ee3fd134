"""
Carrier Registry

- CarrierRegistry maps CarrierCode -> carrier instance
- One registry per application, built at startup and passed to RateService
- Registering a code twice replaces the earlier carrier
"""
import logging
import threading
from typing import Dict, List

from carrier_rates.core.exceptions import CarrierError, CarrierErrorCode
from carrier_rates.modules.shipping.carriers.base import AuthProvider, CarrierProvider
from carrier_rates.modules.shipping.carriers.ups import UPSCarrier
from carrier_rates.schemas.enums import CarrierCode

logger = logging.getLogger(__name__)


class CarrierRegistry:
    """
    Runtime directory of available carriers.

    Usage:
        registry = CarrierRegistry()
        registry.register(UPSCarrier(load_ups_config()))
        service = RateService(registry)
    """

    def __init__(self):
        self._carriers: Dict[CarrierCode, CarrierProvider] = {}
        self._lock = threading.Lock()

    def register(self, carrier: CarrierProvider) -> None:
        """Store a carrier under its code. Last registration wins."""
        code = CarrierCode(carrier.carrier_code)
        with self._lock:
            replaced = code in self._carriers
            self._carriers[code] = carrier

        if replaced:
            logger.info(f"Replaced carrier: {code.value} -> {type(carrier).__name__}")
        else:
            logger.info(f"Registered carrier: {code.value} -> {type(carrier).__name__}")

    def get(self, carrier_code: CarrierCode) -> CarrierProvider:
        """
        Get the carrier registered for a code.

        Raises:
            CarrierError: CARRIER_NOT_FOUND if nothing is registered for the code
        """
        carrier = self._carriers.get(carrier_code)
        if carrier is None:
            code = getattr(carrier_code, "value", carrier_code)
            raise CarrierError(
                code=CarrierErrorCode.CARRIER_NOT_FOUND,
                message=f"No provider registered for carrier: {code}",
                carrier=str(code),
            )
        return carrier

    def get_all(self) -> List[CarrierProvider]:
        """Snapshot of registered carriers. Order is not guaranteed."""
        with self._lock:
            return list(self._carriers.values())

    def codes(self) -> List[CarrierCode]:
        with self._lock:
            return list(self._carriers.keys())

    def __contains__(self, carrier_code) -> bool:
        return carrier_code in self._carriers

    def __len__(self) -> int:
        return len(self._carriers)


__all__ = [
    "AuthProvider",
    "CarrierProvider",
    "CarrierRegistry",
    "UPSCarrier",
]
