"""
UPS Rating Mapper

Translates between the normalized RateRequest/RateResponse models and the
UPS Rating API JSON bodies. Pure functions of their input: no I/O.
"""
import logging
from typing import Any, Dict, List

from carrier_rates.core.config import UPSConfig
from carrier_rates.schemas.enums import CarrierCode, ServiceLevel, WeightUnit
from carrier_rates.schemas.shipping import (
    Address,
    GuaranteedDelivery,
    MonetaryAmount,
    PackageWeight,
    RateQuote,
    RateRequest,
    RateResponse,
    ShipmentPackage,
)
from carrier_rates.schemas.ups import UPSMonetary, UPSRatedShipment, UPSRateResponseBody

logger = logging.getLogger(__name__)

# UPS API service code -> normalized service level
UPS_SERVICE_CODE_MAP: Dict[str, ServiceLevel] = {
    "01": ServiceLevel.UPS_NEXT_DAY_AIR,
    "02": ServiceLevel.UPS_SECOND_DAY_AIR,
    "03": ServiceLevel.UPS_GROUND,
    "07": ServiceLevel.UPS_WORLDWIDE_EXPRESS,
    "08": ServiceLevel.UPS_WORLDWIDE_EXPEDITED,
    "11": ServiceLevel.UPS_STANDARD,
    "12": ServiceLevel.UPS_THREE_DAY_SELECT,
    "13": ServiceLevel.UPS_NEXT_DAY_AIR_SAVER,
    "14": ServiceLevel.UPS_WORLDWIDE_EXPRESS_PLUS,
    "15": ServiceLevel.UPS_NEXT_DAY_AIR_EARLY,
    "59": ServiceLevel.UPS_SECOND_DAY_AIR_AM,
    "65": ServiceLevel.UPS_SAVER,
}

SERVICE_LEVEL_TO_UPS_CODE: Dict[ServiceLevel, str] = {
    level: code for code, level in UPS_SERVICE_CODE_MAP.items()
}

UPS_SERVICE_NAMES: Dict[str, str] = {
    "01": "UPS Next Day Air",
    "02": "UPS 2nd Day Air",
    "03": "UPS Ground",
    "07": "UPS Worldwide Express",
    "08": "UPS Worldwide Expedited",
    "11": "UPS Standard",
    "12": "UPS 3-Day Select",
    "13": "UPS Next Day Air Saver",
    "14": "UPS Worldwide Express Plus",
    "15": "UPS Next Day Air Early",
    "59": "UPS 2nd Day Air A.M.",
    "65": "UPS Saver",
}

DEFAULT_SERVICE_CODE = "03"  # UPS Ground
CUSTOMER_SUPPLIED_PACKAGE = {"Code": "02", "Description": "Customer Supplied Package"}


def _format_number(value: float) -> str:
    """Render 10.0 as '10' and 10.5 as '10.5'."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


class UPSRatingMapper:
    def __init__(self, config: UPSConfig):
        self._config = config

    # ==================== Request ====================

    def request_option(self, request: RateRequest) -> str:
        return "Rate" if request.service_level is not None else "Shop"

    def to_ups_rate_request(self, request: RateRequest) -> Dict[str, Any]:
        """Build the UPS RateRequest body for a normalized request."""
        if request.service_level is not None:
            service_code = SERVICE_LEVEL_TO_UPS_CODE.get(request.service_level, DEFAULT_SERVICE_CODE)
        else:
            service_code = DEFAULT_SERVICE_CODE

        shipper: Dict[str, Any] = {
            "Name": request.origin.name or "Shipper",
            "Address": self._map_address(request.origin),
        }
        if self._config.account_number:
            shipper["ShipperNumber"] = self._config.account_number

        ship_to_address = self._map_address(request.destination)
        if request.destination.residential:
            ship_to_address["ResidentialAddressIndicator"] = ""
        ship_to: Dict[str, Any] = {"Address": ship_to_address}
        if request.destination.name:
            ship_to["Name"] = request.destination.name

        shipment: Dict[str, Any] = {
            "Shipper": shipper,
            "ShipTo": ship_to,
            "Service": {"Code": service_code},
            "Package": [self._map_package(pkg) for pkg in request.packages],
        }

        if request.ship_from:
            ship_from: Dict[str, Any] = {"Address": self._map_address(request.ship_from)}
            if request.ship_from.name:
                ship_from["Name"] = request.ship_from.name
            shipment["ShipFrom"] = ship_from

        if self._config.account_number:
            shipment["PaymentDetails"] = {
                "ShipmentCharge": [
                    {
                        "Type": "01",
                        "BillShipper": {"AccountNumber": self._config.account_number},
                    }
                ]
            }

        return {
            "RateRequest": {
                "Request": {
                    "RequestOption": self.request_option(request),
                    "TransactionReference": {"CustomerContext": "Rating Request"},
                },
                "Shipment": shipment,
            }
        }

    def _map_address(self, address: Address) -> Dict[str, Any]:
        ups_address: Dict[str, Any] = {
            "AddressLine": list(address.address_lines),
            "City": address.city,
        }
        if address.state_province:
            ups_address["StateProvinceCode"] = address.state_province
        ups_address["PostalCode"] = address.postal_code
        ups_address["CountryCode"] = address.country_code
        return ups_address

    def _map_package(self, package: ShipmentPackage) -> Dict[str, Any]:
        ups_package: Dict[str, Any] = {"PackagingType": dict(CUSTOMER_SUPPLIED_PACKAGE)}

        if package.dimensions:
            ups_package["Dimensions"] = {
                "UnitOfMeasurement": {"Code": package.dimensions.unit.value},
                "Length": _format_number(package.dimensions.length),
                "Width": _format_number(package.dimensions.width),
                "Height": _format_number(package.dimensions.height),
            }

        ups_package["PackageWeight"] = {
            "UnitOfMeasurement": {"Code": package.weight.unit.value},
            "Weight": _format_number(package.weight.value),
        }
        return ups_package

    # ==================== Response ====================

    def to_rate_response(self, body: UPSRateResponseBody) -> RateResponse:
        rate_response = body.RateResponse
        alerts = rate_response.Response.Alert or []

        quotes = [self._map_rated_shipment(rs) for rs in rate_response.RatedShipment]
        warnings: List[str] = [f"{alert.Code}: {alert.Description}" for alert in alerts]

        return RateResponse(quotes=quotes, warnings=warnings or None)

    def _map_rated_shipment(self, shipment: UPSRatedShipment) -> RateQuote:
        service_code = shipment.Service.Code
        service_level = UPS_SERVICE_CODE_MAP.get(service_code)
        if service_level is None:
            logger.warning(f"Unknown UPS service code: {service_code}, defaulting to UPS_GROUND")
            service_level = UPS_SERVICE_CODE_MAP[DEFAULT_SERVICE_CODE]

        guaranteed = None
        if shipment.GuaranteedDelivery:
            guaranteed = GuaranteedDelivery(
                business_days=int(shipment.GuaranteedDelivery.BusinessDaysInTransit),
                delivery_by_time=shipment.GuaranteedDelivery.DeliveryByTime or None,
            )

        return RateQuote(
            carrier=CarrierCode.UPS,
            service_level=service_level,
            service_name=UPS_SERVICE_NAMES.get(service_code, f"UPS Service {service_code}"),
            total_charges=self._map_monetary(shipment.TotalCharges),
            transportation_charges=self._map_monetary(shipment.TransportationCharges),
            billing_weight=PackageWeight(
                value=float(shipment.BillingWeight.Weight),
                unit=self._map_weight_unit(shipment.BillingWeight.UnitOfMeasurement.Code),
            ),
            guaranteed_delivery=guaranteed,
        )

    @staticmethod
    def _map_monetary(monetary: UPSMonetary) -> MonetaryAmount:
        return MonetaryAmount(
            amount=float(monetary.MonetaryValue),
            currency=monetary.CurrencyCode,
        )

    @staticmethod
    def _map_weight_unit(code: str) -> WeightUnit:
        try:
            return WeightUnit(code.upper())
        except ValueError:
            return WeightUnit.LBS
