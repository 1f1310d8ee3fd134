"""
Unit tests for the UPS request/response mapper.
"""
import dataclasses

import pytest

from carrier_rates.schemas.enums import CarrierCode, ServiceLevel, WeightUnit
from carrier_rates.schemas.shipping import RateRequest
from carrier_rates.schemas.ups import UPSRateResponseBody
from carrier_rates.services.ups_rating_mapper import UPSRatingMapper, _format_number


@pytest.fixture
def mapper(ups_config) -> UPSRatingMapper:
    return UPSRatingMapper(ups_config)


def build_request(data: dict, **overrides) -> RateRequest:
    return RateRequest.model_validate({**data, **overrides})


class TestRequestMapping:

    def test_shop_mode_without_service_level(self, mapper, sample_request):
        body = mapper.to_ups_rate_request(sample_request)

        assert mapper.request_option(sample_request) == "Shop"
        assert body["RateRequest"]["Request"]["RequestOption"] == "Shop"
        assert body["RateRequest"]["Request"]["TransactionReference"] == {
            "CustomerContext": "Rating Request"
        }
        assert body["RateRequest"]["Shipment"]["Service"] == {"Code": "03"}

    def test_rate_mode_maps_service_level_to_code(self, mapper, sample_request_data):
        request = build_request(sample_request_data, service_level=ServiceLevel.UPS_NEXT_DAY_AIR)

        body = mapper.to_ups_rate_request(request)

        assert mapper.request_option(request) == "Rate"
        assert body["RateRequest"]["Request"]["RequestOption"] == "Rate"
        assert body["RateRequest"]["Shipment"]["Service"] == {"Code": "01"}

    def test_shipper_and_payment_use_account_number(self, mapper, sample_request):
        shipment = mapper.to_ups_rate_request(sample_request)["RateRequest"]["Shipment"]

        assert shipment["Shipper"]["ShipperNumber"] == "123456"
        assert shipment["PaymentDetails"] == {
            "ShipmentCharge": [
                {"Type": "01", "BillShipper": {"AccountNumber": "123456"}}
            ]
        }

    def test_no_account_number_omits_billing(self, ups_config, sample_request):
        mapper = UPSRatingMapper(dataclasses.replace(ups_config, account_number=None))

        shipment = mapper.to_ups_rate_request(sample_request)["RateRequest"]["Shipment"]

        assert "ShipperNumber" not in shipment["Shipper"]
        assert "PaymentDetails" not in shipment

    def test_addresses(self, mapper, sample_request):
        shipment = mapper.to_ups_rate_request(sample_request)["RateRequest"]["Shipment"]

        assert shipment["Shipper"]["Name"] == "Acme Corp"
        assert shipment["Shipper"]["Address"] == {
            "AddressLine": ["100 Main Street"],
            "City": "TIMONIUM",
            "StateProvinceCode": "MD",
            "PostalCode": "21093",
            "CountryCode": "US",
        }
        assert shipment["ShipTo"]["Name"] == "John Smith"
        assert shipment["ShipTo"]["Address"]["AddressLine"] == ["200 Oak Avenue", "Apt 5"]
        assert shipment["ShipTo"]["Address"]["ResidentialAddressIndicator"] == ""
        assert "ShipFrom" not in shipment

    def test_unnamed_origin_defaults_shipper_name(self, mapper, sample_request_data):
        origin = {k: v for k, v in sample_request_data["origin"].items() if k != "name"}
        destination = {k: v for k, v in sample_request_data["destination"].items() if k != "name"}
        request = build_request(sample_request_data, origin=origin, destination=destination)

        shipment = mapper.to_ups_rate_request(request)["RateRequest"]["Shipment"]

        assert shipment["Shipper"]["Name"] == "Shipper"
        assert "Name" not in shipment["ShipTo"]

    def test_commercial_destination_has_no_residential_indicator(self, mapper, sample_request_data):
        destination = {**sample_request_data["destination"], "residential": False}
        request = build_request(sample_request_data, destination=destination)

        shipment = mapper.to_ups_rate_request(request)["RateRequest"]["Shipment"]

        assert "ResidentialAddressIndicator" not in shipment["ShipTo"]["Address"]

    def test_address_without_state(self, mapper, sample_request_data):
        destination = {
            "address_lines": ["10 Downing Street"],
            "city": "London",
            "postal_code": "SW1A2AA",
            "country_code": "GB",
        }
        request = build_request(sample_request_data, destination=destination)

        address = mapper.to_ups_rate_request(request)["RateRequest"]["Shipment"]["ShipTo"]["Address"]

        assert "StateProvinceCode" not in address
        assert address["CountryCode"] == "GB"

    def test_ship_from(self, mapper, sample_request_data):
        ship_from = {
            "name": "Warehouse 7",
            "address_lines": ["9 Dock Road"],
            "city": "Baltimore",
            "state_province": "MD",
            "postal_code": "21230",
            "country_code": "US",
        }
        request = build_request(sample_request_data, ship_from=ship_from)

        shipment = mapper.to_ups_rate_request(request)["RateRequest"]["Shipment"]

        assert shipment["ShipFrom"]["Name"] == "Warehouse 7"
        assert shipment["ShipFrom"]["Address"]["PostalCode"] == "21230"

    def test_packages(self, mapper, sample_request_data):
        packages = [
            {"weight": {"value": 10, "unit": "LBS"}, "dimensions": {
                "length": 12, "width": 8, "height": 6.5, "unit": "IN",
            }},
            {"weight": {"value": 2.5, "unit": "KGS"}},
        ]
        request = build_request(sample_request_data, packages=packages)

        ups_packages = mapper.to_ups_rate_request(request)["RateRequest"]["Shipment"]["Package"]

        assert ups_packages[0] == {
            "PackagingType": {"Code": "02", "Description": "Customer Supplied Package"},
            "Dimensions": {
                "UnitOfMeasurement": {"Code": "IN"},
                "Length": "12",
                "Width": "8",
                "Height": "6.5",
            },
            "PackageWeight": {"UnitOfMeasurement": {"Code": "LBS"}, "Weight": "10"},
        }
        assert "Dimensions" not in ups_packages[1]
        assert ups_packages[1]["PackageWeight"] == {
            "UnitOfMeasurement": {"Code": "KGS"},
            "Weight": "2.5",
        }

    def test_format_number(self):
        assert _format_number(10.0) == "10"
        assert _format_number(10.5) == "10.5"
        assert _format_number(3) == "3"


class TestResponseMapping:

    def test_maps_shop_response(self, mapper, shop_fixture):
        result = mapper.to_rate_response(UPSRateResponseBody.model_validate(shop_fixture))

        assert [q.service_level for q in result.quotes] == [
            ServiceLevel.UPS_GROUND,
            ServiceLevel.UPS_SECOND_DAY_AIR,
            ServiceLevel.UPS_NEXT_DAY_AIR,
        ]
        assert [q.service_name for q in result.quotes] == [
            "UPS Ground",
            "UPS 2nd Day Air",
            "UPS Next Day Air",
        ]
        assert all(q.carrier == CarrierCode.UPS for q in result.quotes)
        second_day = result.quotes[1]
        assert second_day.total_charges.amount == 38.91
        assert second_day.guaranteed_delivery.business_days == 2
        assert second_day.billing_weight.value == 10.0
        assert second_day.billing_weight.unit == WeightUnit.LBS

    def test_single_rated_shipment_object(self, mapper, single_fixture):
        result = mapper.to_rate_response(UPSRateResponseBody.model_validate(single_fixture))

        assert len(result.quotes) == 1
        assert result.quotes[0].total_charges.amount == 15.72
        assert result.warnings is None

    def test_unknown_service_code_falls_back_to_ground(self, mapper, single_fixture):
        single_fixture["RateResponse"]["RatedShipment"]["Service"]["Code"] = "96"

        result = mapper.to_rate_response(UPSRateResponseBody.model_validate(single_fixture))

        assert result.quotes[0].service_level == ServiceLevel.UPS_GROUND
        assert result.quotes[0].service_name == "UPS Service 96"

    def test_unknown_weight_unit_falls_back_to_pounds(self, mapper, single_fixture):
        billing = single_fixture["RateResponse"]["RatedShipment"]["BillingWeight"]
        billing["UnitOfMeasurement"]["Code"] = "OZS"

        result = mapper.to_rate_response(UPSRateResponseBody.model_validate(single_fixture))

        assert result.quotes[0].billing_weight.unit == WeightUnit.LBS

    def test_single_alert_object(self, mapper, single_fixture):
        single_fixture["RateResponse"]["Response"]["Alert"] = {
            "Code": "110920",
            "Description": "Ship To Address Classification is changed from Commercial to Residential",
        }

        result = mapper.to_rate_response(UPSRateResponseBody.model_validate(single_fixture))

        assert result.warnings == [
            "110920: Ship To Address Classification is changed from Commercial to Residential"
        ]

    def test_delivery_by_time_blank_is_none(self, mapper, single_fixture):
        single_fixture["RateResponse"]["RatedShipment"]["GuaranteedDelivery"] = {
            "BusinessDaysInTransit": "3",
            "DeliveryByTime": "",
        }

        result = mapper.to_rate_response(UPSRateResponseBody.model_validate(single_fixture))

        assert result.quotes[0].guaranteed_delivery.business_days == 3
        assert result.quotes[0].guaranteed_delivery.delivery_by_time is None
