"""
Shipping Schemas

Normalized, carrier-agnostic request and response models. All models are
frozen: a RateRequest handed to a carrier is never mutated by it.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from carrier_rates.schemas.enums import CarrierCode, DimensionUnit, ServiceLevel, WeightUnit


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ==================== Request Schemas ====================


class Address(_Frozen):
    name: Optional[str] = Field(None, max_length=35)
    address_lines: List[str] = Field(..., min_length=1, max_length=3)
    city: str = Field(..., min_length=1, max_length=30)
    state_province: Optional[str] = Field(None, min_length=2, max_length=2)
    postal_code: str = Field(..., min_length=1, max_length=9)
    country_code: str = Field(..., min_length=2, max_length=2)
    residential: Optional[bool] = None

    @field_validator("address_lines")
    @classmethod
    def validate_address_lines(cls, v):
        for line in v:
            if not 1 <= len(line) <= 35:
                raise ValueError("Each address line must be 1-35 characters")
        return v


class PackageWeight(_Frozen):
    value: float = Field(..., gt=0)
    unit: WeightUnit


class PackageDimensions(_Frozen):
    length: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    unit: DimensionUnit


class ShipmentPackage(_Frozen):
    weight: PackageWeight
    dimensions: Optional[PackageDimensions] = None


class RateRequest(_Frozen):
    """Request quotes between two addresses for a set of packages."""
    origin: Address
    destination: Address
    packages: List[ShipmentPackage] = Field(..., min_length=1, max_length=200)
    service_level: Optional[ServiceLevel] = Field(
        None, description="Rate one service; omit to shop all services"
    )
    ship_from: Optional[Address] = None


# ==================== Response Schemas ====================


class MonetaryAmount(_Frozen):
    amount: float
    currency: str


class GuaranteedDelivery(_Frozen):
    business_days: int
    delivery_by_time: Optional[str] = None


class RateQuote(_Frozen):
    """A single priced shipping option."""
    carrier: CarrierCode
    service_level: ServiceLevel
    service_name: str
    total_charges: MonetaryAmount
    transportation_charges: MonetaryAmount
    billing_weight: PackageWeight
    guaranteed_delivery: Optional[GuaranteedDelivery] = None


class RateResponse(_Frozen):
    quotes: List[RateQuote]
    warnings: Optional[List[str]] = None
