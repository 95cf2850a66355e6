"""Response shapes decoded from Paynow's form-encoded bodies.

None of these objects should be handed to callers before their hash has
been verified; ``PaynowClient`` does that for every call it makes.
"""

import enum
from datetime import date
from decimal import Decimal
from typing import Annotated, Any, Dict, Literal, Optional

import httpx
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator

from ..canonical import parse_date, render_amount, render_date


class TransactionStatus(str, enum.Enum):
    """Transaction states reported by Paynow, keyed by their wire text."""
    CREATED = "Created"
    SENT = "Sent"
    CANCELLED = "Cancelled"
    AWAITING_DELIVERY = "Awaiting Delivery"
    DELIVERED = "Delivered"
    PAID = "Paid"
    DISPUTED = "Disputed"
    REFUNDED = "Refunded"

    @property
    def is_paid(self) -> bool:
        """Whether the customer has paid, even if funds are still held."""
        return self in (
            TransactionStatus.PAID,
            TransactionStatus.AWAITING_DELIVERY,
            TransactionStatus.DELIVERED,
        )

    @property
    def is_final(self) -> bool:
        return self in (
            TransactionStatus.PAID,
            TransactionStatus.CANCELLED,
            TransactionStatus.REFUNDED,
        )


def _validate_url(value: str) -> str:
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as e:
        raise ValueError(f"invalid URL: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError("URL must be an absolute http(s) URL")
    # keep the text exactly as sent, it is part of the hash
    return value


UrlText = Annotated[str, AfterValidator(_validate_url)]


class WireModel(BaseModel):
    """Base for inbound shapes: wire field names, unknown fields ignored."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class StandardPaymentResponse(WireModel):
    """Successful answer to a standard payment."""
    status: Literal["Ok"]
    browser_url: UrlText = Field(..., alias="browserurl")
    poll_url: UrlText = Field(..., alias="pollurl")
    hash: str = Field(..., repr=False)


class ExpressPaymentResponse(WireModel):
    """Successful answer to an express payment."""
    status: Literal["Ok"]
    instructions: str
    paynow_reference: int = Field(..., alias="paynowreference")
    poll_url: UrlText = Field(..., alias="pollurl")
    hash: str = Field(..., repr=False)


class Token(WireModel):
    """Tokenized payment instrument returned when ``tokenize`` was requested.

    Tokens are valid for up to six months, depending on the expiry of the
    underlying instrument.
    """
    token: str
    expiry: date = Field(..., alias="tokenexpiry")

    @field_validator("expiry", mode="before")
    @classmethod
    def _parse_expiry(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_date(value)
        return value


class StatusUpdate(WireModel):
    """Transaction status, polled by the merchant or pushed to the result URL."""
    reference: str
    paynow_reference: int = Field(..., alias="paynowreference")
    amount: Decimal
    status: TransactionStatus
    poll_url: UrlText = Field(..., alias="pollurl")
    token: Optional[Token] = None
    hash: str = Field(..., repr=False)

    @model_validator(mode="before")
    @classmethod
    def _collect_token(cls, data: Any) -> Any:
        # token and tokenexpiry arrive as flat fields next to the others
        if not isinstance(data, dict) or isinstance(data.get("token"), (Token, dict)):
            return data
        data = dict(data)
        token = data.pop("token", None)
        expiry = data.pop("tokenexpiry", None)
        if token is not None and expiry is not None:
            data["token"] = {"token": token, "tokenexpiry": expiry}
        return data

    def to_form(self) -> Dict[str, str]:
        """Flat wire fields, as Paynow posts them to the result URL."""
        fields = {
            "reference": self.reference,
            "paynowreference": str(self.paynow_reference),
            "amount": render_amount(self.amount),
            "status": self.status.value,
            "pollurl": self.poll_url,
        }
        if self.token is not None:
            fields["token"] = self.token.token
            fields["tokenexpiry"] = render_date(self.token.expiry)
        fields["hash"] = self.hash
        return fields


class VendorErrorResponse(WireModel):
    """``status=Error`` body; only used to classify failures."""
    status: Literal["Error"]
    error: str


class NotFoundResponse(WireModel):
    """Answer to a trace lookup for an unknown merchant trace ID."""
    status: Literal["NotFound"]
    hash: str = Field(..., repr=False)
