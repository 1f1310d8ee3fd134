"""
carrier-rates

Normalized multi-carrier shipping rate quotes.

    registry = CarrierRegistry()
    registry.register(UPSCarrier(load_ups_config()))
    response = await RateService(registry).shop_rates(request)
"""
from carrier_rates.core.config import Settings, UPSConfig, load_ups_config
from carrier_rates.core.exceptions import CarrierError, CarrierErrorCode
from carrier_rates.core.http_client import HTTPResponse, HTTPTransport, HttpxTransport
from carrier_rates.modules.shipping import CarrierProvider, CarrierRegistry, UPSCarrier
from carrier_rates.schemas.enums import CarrierCode, DimensionUnit, ServiceLevel, WeightUnit
from carrier_rates.schemas.shipping import (
    Address,
    GuaranteedDelivery,
    MonetaryAmount,
    PackageDimensions,
    PackageWeight,
    RateQuote,
    RateRequest,
    RateResponse,
    ShipmentPackage,
)
from carrier_rates.services.rate_service import RateService
from carrier_rates.services.ups_auth import UPSAuthManager

__version__ = "1.0.0"

__all__ = [
    "Address",
    "CarrierCode",
    "CarrierError",
    "CarrierErrorCode",
    "CarrierProvider",
    "CarrierRegistry",
    "DimensionUnit",
    "GuaranteedDelivery",
    "HTTPResponse",
    "HTTPTransport",
    "HttpxTransport",
    "MonetaryAmount",
    "PackageDimensions",
    "PackageWeight",
    "RateQuote",
    "RateRequest",
    "RateResponse",
    "RateService",
    "ServiceLevel",
    "Settings",
    "ShipmentPackage",
    "UPSAuthManager",
    "UPSCarrier",
    "UPSConfig",
    "WeightUnit",
    "load_ups_config",
]
