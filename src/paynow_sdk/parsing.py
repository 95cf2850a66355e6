"""Decoding of Paynow response bodies.

Paynow answers with form-encoded bodies whether a call succeeded or not, and
the only discriminant is which fields are present. Bodies are therefore
decoded speculatively: first as the expected success shape, then as a
vendor error, then (for trace lookups) as a not-found answer.
"""

import logging
from decimal import Decimal
from typing import Dict, Optional, Type, TypeVar, Union
from urllib.parse import parse_qsl

from pydantic import BaseModel, ValidationError

from .errors import (
    AmountOverflowError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidIdError,
    OpaqueVendorError,
    PaynowError,
    UnexpectedResponseError,
    VendorError,
    VendorErrorKind,
    classify_vendor_error,
)
from .payments.responses import NotFoundResponse, VendorErrorResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def decode_text(body: Union[str, bytes]) -> str:
    """Return a raw body as text.

    Raises:
        UnexpectedResponseError: If a bytes body is not valid UTF-8.
    """
    if isinstance(body, str):
        return body
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise UnexpectedResponseError(body.decode("utf-8", "replace"), e) from e


def decode_form(body: Union[str, bytes]) -> Dict[str, str]:
    """Decode a form-encoded body into a dict.

    Blank values are kept.

    Raises:
        UnexpectedResponseError: If the body is not UTF-8 or a field repeats.
    """
    body = decode_text(body)
    fields: Dict[str, str] = {}
    for name, value in parse_qsl(body, keep_blank_values=True):
        if name in fields:
            raise UnexpectedResponseError(body, ValueError(f"Duplicate field: {name}"))
        fields[name] = value
    return fields


def parse_as(model: Type[M], body: str) -> M:
    """Decode a body as the given shape.

    Args:
        model: Response model to validate against.
        body: Raw response text.

    Returns:
        The decoded model instance.

    Raises:
        UnexpectedResponseError: If the body does not match the shape.
    """
    try:
        return model.model_validate(decode_form(body))
    except ValidationError as e:
        raise UnexpectedResponseError(body, e) from e


def try_parse(model: Type[M], body: str) -> Optional[M]:
    try:
        return model.model_validate(decode_form(body))
    except (ValidationError, UnexpectedResponseError):
        return None


def vendor_error_from(
    response: VendorErrorResponse,
    merchant_id: int,
    amount: Optional[Decimal] = None,
) -> Optional[VendorError]:
    """Build the exception for a vendor error response.

    Amount errors need the submitted amount; without one (polls and trace
    lookups) they are not a recognised answer and ``None`` is returned.
    """
    kind = classify_vendor_error(response.error)
    if kind is VendorErrorKind.INVALID_MERCHANT_ID:
        return InvalidIdError(merchant_id, response.error)
    if kind is VendorErrorKind.INSUFFICIENT_BALANCE:
        return InsufficientBalanceError(response.error)
    if kind is VendorErrorKind.INVALID_AMOUNT:
        return InvalidAmountError(amount, response.error) if amount is not None else None
    if kind is VendorErrorKind.AMOUNT_OVERFLOW:
        return AmountOverflowError(amount, response.error) if amount is not None else None
    return OpaqueVendorError(response.error)


def reinterpret(
    error: UnexpectedResponseError,
    merchant_id: int,
    amount: Optional[Decimal] = None,
) -> PaynowError:
    """Re-read a body that failed to decode as the expected success shape.

    Args:
        error: The original decode failure, carrying the raw body.
        merchant_id: Integration ID the request was made with.
        amount: Amount of the submitted payment, if any.

    Returns:
        The classified vendor error, or the original error when the body is
        not a recognised error shape.
    """
    response = try_parse(VendorErrorResponse, error.body)
    if response is None:
        return error
    vendor_error = vendor_error_from(response, merchant_id, amount)
    if vendor_error is None:
        return error
    logger.warning(f"Paynow rejected request: {vendor_error.kind.value}")
    return vendor_error


def parse_not_found(body: str) -> Optional[NotFoundResponse]:
    return try_parse(NotFoundResponse, body)
