"""Closed enumerations shared by requests, quotes and carriers."""
from enum import Enum


class CarrierCode(str, Enum):
    UPS = "UPS"
    FEDEX = "FEDEX"
    USPS = "USPS"
    DHL = "DHL"


class WeightUnit(str, Enum):
    LBS = "LBS"
    KGS = "KGS"


class DimensionUnit(str, Enum):
    IN = "IN"
    CM = "CM"


class ServiceLevel(str, Enum):
    """Normalized service levels a caller may request."""
    UPS_NEXT_DAY_AIR = "UPS_NEXT_DAY_AIR"
    UPS_NEXT_DAY_AIR_SAVER = "UPS_NEXT_DAY_AIR_SAVER"
    UPS_NEXT_DAY_AIR_EARLY = "UPS_NEXT_DAY_AIR_EARLY"
    UPS_SECOND_DAY_AIR = "UPS_SECOND_DAY_AIR"
    UPS_SECOND_DAY_AIR_AM = "UPS_SECOND_DAY_AIR_AM"
    UPS_THREE_DAY_SELECT = "UPS_THREE_DAY_SELECT"
    UPS_GROUND = "UPS_GROUND"
    UPS_STANDARD = "UPS_STANDARD"
    UPS_WORLDWIDE_EXPRESS = "UPS_WORLDWIDE_EXPRESS"
    UPS_WORLDWIDE_EXPEDITED = "UPS_WORLDWIDE_EXPEDITED"
    UPS_WORLDWIDE_EXPRESS_PLUS = "UPS_WORLDWIDE_EXPRESS_PLUS"
    UPS_SAVER = "UPS_SAVER"
