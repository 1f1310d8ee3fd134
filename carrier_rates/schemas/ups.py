"""
UPS Wire Schemas

Pydantic models mirroring the raw UPS OAuth and Rating API JSON. Field names
keep the UPS PascalCase keys and string values so a payload validates as-is.
Unknown keys are ignored.

UPS returns a bare object instead of a one-element array for some list
fields (RatedShipment, Alert); those are normalized to lists on parse.
"""
import math
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


def _as_list(v):
    if isinstance(v, dict):
        return [v]
    return v


def _numeric_string(v: str) -> str:
    try:
        number = float(v)
    except ValueError:
        raise ValueError(f"Expected a numeric string, got {v!r}")
    if not math.isfinite(number):
        raise ValueError(f"Expected a finite number, got {v!r}")
    return v


# ==================== OAuth ====================


class UPSOAuthResponse(BaseModel):
    access_token: str
    token_type: str
    expires_in: str
    issued_at: Optional[str] = None
    client_id: Optional[str] = None
    scope: Optional[str] = None
    status: Optional[str] = None

    @field_validator("expires_in")
    @classmethod
    def validate_expires_in(cls, v):
        try:
            int(v)
        except ValueError:
            raise ValueError("expires_in must be an integer number of seconds")
        return v


# ==================== Rating: request ====================


class UPSCode(BaseModel):
    Code: str
    Description: Optional[str] = None


class UPSAddress(BaseModel):
    AddressLine: List[str]
    City: str
    StateProvinceCode: Optional[str] = None
    PostalCode: str
    CountryCode: str
    ResidentialAddressIndicator: Optional[str] = None


class UPSParty(BaseModel):
    Name: Optional[str] = None
    ShipperNumber: Optional[str] = None
    Address: UPSAddress


class UPSWeight(BaseModel):
    UnitOfMeasurement: UPSCode
    Weight: str

    @field_validator("Weight")
    @classmethod
    def validate_weight(cls, v):
        return _numeric_string(v)


class UPSDimensions(BaseModel):
    UnitOfMeasurement: UPSCode
    Length: str
    Width: str
    Height: str


class UPSPackage(BaseModel):
    PackagingType: UPSCode
    Dimensions: Optional[UPSDimensions] = None
    PackageWeight: UPSWeight


class UPSBillShipper(BaseModel):
    AccountNumber: str


class UPSShipmentCharge(BaseModel):
    Type: str
    BillShipper: UPSBillShipper


class UPSPaymentDetails(BaseModel):
    ShipmentCharge: List[UPSShipmentCharge]


class UPSShipment(BaseModel):
    Shipper: UPSParty
    ShipTo: UPSParty
    ShipFrom: Optional[UPSParty] = None
    Service: Optional[UPSCode] = None
    Package: List[UPSPackage] = Field(..., min_length=1)
    PaymentDetails: Optional[UPSPaymentDetails] = None


class UPSTransactionReference(BaseModel):
    CustomerContext: Optional[str] = None


class UPSRequestHeader(BaseModel):
    RequestOption: Literal["Rate", "Shop"]
    SubVersion: Optional[str] = None
    TransactionReference: Optional[UPSTransactionReference] = None


class UPSRateRequest(BaseModel):
    Request: UPSRequestHeader
    Shipment: UPSShipment


class UPSRateRequestBody(BaseModel):
    RateRequest: UPSRateRequest


# ==================== Rating: response ====================


class UPSMonetary(BaseModel):
    CurrencyCode: str
    MonetaryValue: str

    @field_validator("MonetaryValue")
    @classmethod
    def validate_monetary_value(cls, v):
        return _numeric_string(v)


class UPSAlert(BaseModel):
    Code: str
    Description: str


class UPSGuaranteedDelivery(BaseModel):
    BusinessDaysInTransit: str
    DeliveryByTime: Optional[str] = None

    @field_validator("BusinessDaysInTransit")
    @classmethod
    def validate_business_days(cls, v):
        if not v.strip().isdigit():
            raise ValueError("BusinessDaysInTransit must be a whole number")
        return v


class UPSRatedPackage(BaseModel):
    TransportationCharges: UPSMonetary
    ServiceOptionsCharges: Optional[UPSMonetary] = None
    TotalCharges: UPSMonetary


class UPSRatedShipment(BaseModel):
    Service: UPSCode
    RatedShipmentAlert: Optional[List[UPSAlert]] = None
    BillingWeight: UPSWeight
    TransportationCharges: UPSMonetary
    BaseServiceCharge: Optional[UPSMonetary] = None
    ServiceOptionsCharges: Optional[UPSMonetary] = None
    TotalCharges: UPSMonetary
    GuaranteedDelivery: Optional[UPSGuaranteedDelivery] = None
    RatedPackage: Optional[List[UPSRatedPackage]] = None

    @field_validator("RatedShipmentAlert", "RatedPackage", mode="before")
    @classmethod
    def normalize_lists(cls, v):
        return _as_list(v)


class UPSResponseStatus(BaseModel):
    Code: str
    Description: str


class UPSResponseHeader(BaseModel):
    ResponseStatus: UPSResponseStatus
    Alert: Optional[List[UPSAlert]] = None
    TransactionReference: Optional[UPSTransactionReference] = None

    @field_validator("Alert", mode="before")
    @classmethod
    def normalize_alert(cls, v):
        return _as_list(v)


class UPSRateResponse(BaseModel):
    Response: UPSResponseHeader
    RatedShipment: List[UPSRatedShipment] = Field(..., min_length=1)

    @field_validator("RatedShipment", mode="before")
    @classmethod
    def normalize_rated_shipment(cls, v):
        return _as_list(v)


class UPSRateResponseBody(BaseModel):
    RateResponse: UPSRateResponse


# ==================== Errors ====================


class UPSErrorDetail(BaseModel):
    code: str
    message: str


class UPSErrorList(BaseModel):
    errors: List[UPSErrorDetail]


class UPSErrorResponse(BaseModel):
    response: UPSErrorList
