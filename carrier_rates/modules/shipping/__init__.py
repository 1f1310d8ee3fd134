"""
Shipping Module

- CarrierProvider protocol implemented by every carrier
- CarrierRegistry for dependency injection into RateService
"""
from carrier_rates.modules.shipping.carriers import CarrierRegistry, UPSCarrier
from carrier_rates.modules.shipping.carriers.base import CarrierProvider

__all__ = [
    "CarrierRegistry",
    "CarrierProvider",
    "UPSCarrier",
]
