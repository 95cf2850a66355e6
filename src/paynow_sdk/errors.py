"""Exceptions raised by the Paynow client and the vendor error classifier."""

import enum
from decimal import Decimal
from typing import Dict, Optional


class PaynowError(Exception):
    """Base exception for every error raised by this package."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(PaynowError, ValueError):
    """Raised when the client is configured with unusable values."""


class InvalidKeyError(ConfigurationError):
    """Raised when an integration key is not a UUID."""


class InvalidUrlError(ConfigurationError):
    """Raised when an endpoint URL cannot be built from the base URL."""


# Transport failures


class TransportError(PaynowError):
    """Raised when the HTTP exchange with Paynow fails."""


class SendingRequestError(TransportError):
    """Raised when a request could not be sent to Paynow."""

    def __init__(self, message: str = "Failed to send request to Paynow"):
        super().__init__(message)


class ReadingResponseError(TransportError):
    """Raised when the response body could not be read."""

    def __init__(self, message: str = "Failed to retrieve Paynow response text"):
        super().__init__(message)


# Protocol failures


class ResponseError(PaynowError):
    """Raised when Paynow answers with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Paynow returned HTTP {status_code}")


class UnexpectedResponseError(PaynowError):
    """Raised when a response body matches none of the known shapes.

    The raw body is kept so callers can inspect what Paynow sent.
    """

    def __init__(self, body: str, cause: Optional[Exception] = None):
        self.body = body
        self.cause = cause
        super().__init__("Got unexpected response from Paynow")


# Vendor-rejected business errors


class VendorErrorKind(str, enum.Enum):
    """Structured kinds for the error messages Paynow returns."""
    INVALID_MERCHANT_ID = "invalid_merchant_id"
    INVALID_AMOUNT = "invalid_amount"
    AMOUNT_OVERFLOW = "amount_overflow"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    OPAQUE = "opaque"


VENDOR_ERROR_MESSAGES: Dict[str, VendorErrorKind] = {
    "Invalid Id.": VendorErrorKind.INVALID_MERCHANT_ID,
    "Invalid amount field.": VendorErrorKind.INVALID_AMOUNT,
    "Conversion overflows.": VendorErrorKind.AMOUNT_OVERFLOW,
    "Insufficient balance": VendorErrorKind.INSUFFICIENT_BALANCE,
}


def classify_vendor_error(message: str) -> VendorErrorKind:
    """Map a Paynow error message onto a structured kind.

    Args:
        message: The ``error`` field of a ``status=Error`` response.

    Returns:
        The matching kind, or ``VendorErrorKind.OPAQUE`` for unknown messages.
    """
    return VENDOR_ERROR_MESSAGES.get(message, VendorErrorKind.OPAQUE)


class VendorError(PaynowError):
    """Raised when Paynow rejects a request with ``status=Error``."""
    kind: VendorErrorKind = VendorErrorKind.OPAQUE

    def __init__(self, message: str):
        self.vendor_message = message
        super().__init__(message)


class InvalidIdError(VendorError):
    kind = VendorErrorKind.INVALID_MERCHANT_ID

    def __init__(self, merchant_id: int, message: str = "Invalid Id."):
        self.merchant_id = merchant_id
        super().__init__(message)


class InvalidAmountError(VendorError):
    kind = VendorErrorKind.INVALID_AMOUNT

    def __init__(self, amount: Decimal, message: str = "Invalid amount field."):
        self.amount = amount
        super().__init__(message)


class AmountOverflowError(VendorError):
    """Raised when the amount is larger than Paynow can handle."""
    kind = VendorErrorKind.AMOUNT_OVERFLOW

    def __init__(self, amount: Decimal, message: str = "Conversion overflows."):
        self.amount = amount
        super().__init__(message)


class InsufficientBalanceError(VendorError):
    kind = VendorErrorKind.INSUFFICIENT_BALANCE

    def __init__(self, message: str = "Insufficient balance"):
        super().__init__(message)


class OpaqueVendorError(VendorError):
    """Raised for Paynow error messages without a dedicated kind."""
    kind = VendorErrorKind.OPAQUE


# Integrity failures


class HashMismatchError(PaynowError):
    """Raised when an inbound payload's hash does not match its contents."""

    def __init__(self, payload: str):
        self.payload = payload
        super().__init__(f"Received invalid hash for {payload}")


class NotFoundError(PaynowError):
    """Raised when a merchant trace lookup finds no transaction."""

    def __init__(self, merchant_trace: str):
        self.merchant_trace = merchant_trace
        super().__init__(f"Merchant trace ID not found: {merchant_trace}")
