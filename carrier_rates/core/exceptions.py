"""
Carrier Rates Error Model

Every failure surfaced by the rating layer is a CarrierError tagged with a
code from the closed CarrierErrorCode set. Callers branch on `code` and
`retryable`; there are no subclasses.

Codes:
    AUTH_FAILED         OAuth exchange rejected by the carrier
    VALIDATION_ERROR    Rate request failed input validation
    BAD_REQUEST         Request rejected before reaching the carrier
    RATE_LIMITED        Carrier returned 429
    TIMEOUT             Network call exceeded its timeout
    NETWORK_ERROR       Connection-level failure
    MALFORMED_RESPONSE  Carrier body did not match the expected shape
    CARRIER_API_ERROR   Carrier returned another 4xx/5xx
    CARRIER_NOT_FOUND   No provider registered for the carrier
    UNKNOWN             Anything else
"""
from enum import Enum
from typing import Any, Dict, Optional


class CarrierErrorCode(str, Enum):
    AUTH_FAILED = "AUTH_FAILED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    RATE_LIMITED = "RATE_LIMITED"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    CARRIER_API_ERROR = "CARRIER_API_ERROR"
    CARRIER_NOT_FOUND = "CARRIER_NOT_FOUND"
    UNKNOWN = "UNKNOWN"


class CarrierError(Exception):
    """
    Structured error raised by auth managers, carriers and the rate service.

    Attributes:
        code: CarrierErrorCode for programmatic handling
        message: Human-readable error description
        carrier: Carrier identifier the error came from, if any
        http_status: HTTP status returned by the carrier, if any
        retryable: Advisory flag; nothing in this package retries on it
        details: Structured context (validation issues, carrier error list, raw body)
        cause: Underlying exception, if this error wraps one
    """

    def __init__(
        self,
        code: CarrierErrorCode,
        message: str,
        carrier: Optional[str] = None,
        http_status: Optional[int] = None,
        retryable: bool = False,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        self.code = code
        self.message = message
        self.carrier = carrier
        self.http_status = http_status
        self.retryable = retryable
        self.details = details
        self.cause = cause
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "carrier": self.carrier,
            "http_status": self.http_status,
            "retryable": self.retryable,
            "details": self.details,
            "cause": repr(self.cause) if self.cause else None,
        }

    def __repr__(self) -> str:
        return f"CarrierError(code={self.code.value!r}, message={self.message!r})"
