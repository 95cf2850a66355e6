"""Canonical field concatenation for Paynow hashes.

Paynow computes its hash over the values of a message concatenated in a
fixed order with no separators, so each payload shape gets its own function
here. All functions are pure: the same values always give the same string.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .payments.models import ExpressPaymentRequest, PaymentMethod, PaymentRequest
    from .payments.responses import (
        ExpressPaymentResponse,
        NotFoundResponse,
        StandardPaymentResponse,
        StatusUpdate,
        Token,
    )

# Paynow writes English month abbreviations whatever the server locale
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def render_optional(value: Optional[str]) -> str:
    return "" if value is None else str(value)


def render_bool(value: Optional[bool]) -> str:
    if value is None:
        return ""
    return "true" if value else "false"


def render_amount(amount: Decimal) -> str:
    """Render a decimal exactly as written, never in exponent notation."""
    return format(amount, "f")


def render_date(value: date) -> str:
    """Render a date as ``05Jan2024``."""
    return f"{value.day:02d}{MONTH_ABBREVIATIONS[value.month - 1]}{value.year:04d}"


def parse_date(text: str) -> date:
    """Parse a ``05Jan2024`` date, the inverse of :func:`render_date`.

    Raises:
        ValueError: If the text is not in that form.
    """
    day, month, year = text[:2], text[2:5], text[5:]
    if len(text) != 9 or month not in MONTH_ABBREVIATIONS or not (day + year).isdigit():
        raise ValueError(f"Invalid date: {text!r}")
    return date(int(year), MONTH_ABBREVIATIONS.index(month) + 1, int(day))


def render_value(value) -> str:
    """Render any supported field value as canonical text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return render_bool(value)
    if isinstance(value, Decimal):
        return render_amount(value)
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, date):
        return render_date(value)
    return str(value)


def concat(*values) -> str:
    return "".join(render_value(v) for v in values)


def canonicalize_payment(payment: "PaymentRequest") -> str:
    """Canonical string for an ``initiatetransaction`` request."""
    return concat(
        payment.merchant_id,
        payment.reference,
        payment.amount,
        payment.additional_info,
        payment.return_url,
        payment.result_url,
        payment.auth_email,
        payment.tokenize,
        payment.merchant_trace,
        payment.status,
    )


def method_fields(method: "PaymentMethod") -> Tuple[str, ...]:
    """Values of the method-specific express fields in hash order.

    The order is phone, card number, card name, cvv, expiry, billing line 1,
    line 2, city, province, country, token. Fields a method does not carry
    are empty.
    """
    phone = getattr(method, "phone", None)
    card = getattr(method, "card", None)
    address = getattr(method, "billing_address", None)
    return (
        render_optional(phone),
        render_optional(card.number if card else None),
        render_optional(card.name if card else None),
        render_optional(card.cvv if card else None),
        render_optional(card.expiry if card else None),
        render_optional(address.line1 if address else None),
        render_optional(address.line2 if address else None),
        render_optional(address.city if address else None),
        render_optional(address.province if address else None),
        render_optional(address.country if address else None),
        render_optional(getattr(method, "token", None)),
    )


def canonicalize_express_payment(express: "ExpressPaymentRequest") -> str:
    """Canonical string for a ``remotetransaction`` request.

    The method name leads so that the same phone number paid through
    different wallets hashes differently.
    """
    return (
        express.method.name()
        + canonicalize_payment(express.payment)
        + "".join(method_fields(express.method))
    )


def canonicalize_trace(merchant_id: int, merchant_trace: str, status: str = "Message") -> str:
    """Canonical string for a ``trace`` lookup."""
    return concat(merchant_id, merchant_trace, status)


def canonicalize_standard_response(response: "StandardPaymentResponse") -> str:
    return concat(response.status, response.browser_url, response.poll_url)


def canonicalize_express_response(response: "ExpressPaymentResponse") -> str:
    return concat(
        response.status,
        response.instructions,
        response.paynow_reference,
        response.poll_url,
    )


def canonicalize_token(token: Optional["Token"]) -> str:
    if token is None:
        return ""
    return concat(token.token, token.expiry)


def canonicalize_status_update(update: "StatusUpdate") -> str:
    """Canonical string for a status update, pushed or polled."""
    return (
        concat(
            update.reference,
            update.paynow_reference,
            update.amount,
            update.status,
            update.poll_url,
        )
        + canonicalize_token(update.token)
    )


def canonicalize_not_found(response: "NotFoundResponse") -> str:
    return concat(response.status)
