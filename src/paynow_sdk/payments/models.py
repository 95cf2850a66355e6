"""Payment request models for standard and express Paynow transactions."""

import enum
from abc import abstractmethod
from decimal import Decimal
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..canonical import render_amount, render_bool

MESSAGE_STATUS = "Message"


class PaymentMethodType(str, enum.Enum):
    """Express payment methods and their wire names."""
    ECOCASH = "ecocash"
    ONEMONEY = "onemoney"
    VMC = "vmc"


class Card(BaseModel):
    """Card details, passed through to Paynow unvalidated."""
    number: str = Field(..., repr=False)
    name: str
    cvv: str = Field(..., repr=False)
    expiry: str


class BillingAddress(BaseModel):
    line1: str
    line2: Optional[str] = None
    city: str
    province: Optional[str] = None
    country: str = Field(..., description="Validated country name")


class MethodBase(BaseModel):
    """Common interface of the express payment methods."""
    type: PaymentMethodType

    def name(self) -> str:
        """Wire value of the ``method`` field, also the first hashed value."""
        return self.type.value

    @abstractmethod
    def form_fields(self) -> Dict[str, str]:
        raise NotImplementedError


class Ecocash(MethodBase):
    type: Literal[PaymentMethodType.ECOCASH] = PaymentMethodType.ECOCASH
    phone: str

    def form_fields(self) -> Dict[str, str]:
        return {"phone": self.phone}


class OneMoney(MethodBase):
    type: Literal[PaymentMethodType.ONEMONEY] = PaymentMethodType.ONEMONEY
    phone: str

    def form_fields(self) -> Dict[str, str]:
        return {"phone": self.phone}


class CardPayment(MethodBase):
    """Visa or Mastercard payment."""
    type: Literal[PaymentMethodType.VMC] = PaymentMethodType.VMC
    card: Card
    billing_address: BillingAddress
    token: str

    def form_fields(self) -> Dict[str, str]:
        fields = {
            "cardnumber": self.card.number,
            "cardname": self.card.name,
            "cardcvv": self.card.cvv,
            "cardexpiry": self.card.expiry,
            "billingline1": self.billing_address.line1,
        }
        if self.billing_address.line2 is not None:
            fields["billingline2"] = self.billing_address.line2
        fields["billingcity"] = self.billing_address.city
        if self.billing_address.province is not None:
            fields["billingprovince"] = self.billing_address.province
        fields["billingcountry"] = self.billing_address.country
        fields["token"] = self.token
        return fields


PaymentMethod = Annotated[Union[Ecocash, OneMoney, CardPayment], Field(discriminator="type")]


class PaymentRequest(BaseModel):
    """A standard payment, sent to ``initiatetransaction``.

    Optional fields are set with the chainable ``set_*`` methods::

        payment = client.standard_payment(ref, amount, return_url, result_url)
        payment.set_auth_email("buyer@example.com").set_tokenize(True)

    Amounts and strings are not checked locally; Paynow rejects bad values
    through its error responses.
    """
    model_config = ConfigDict(validate_assignment=True)

    merchant_id: int
    reference: str
    amount: Decimal
    additional_info: Optional[str] = None
    return_url: Optional[str] = None
    result_url: str
    auth_email: Optional[str] = None
    tokenize: Optional[bool] = None
    merchant_trace: Optional[str] = None
    status: Literal["Message"] = MESSAGE_STATUS

    @field_validator("return_url", "result_url", mode="before")
    @classmethod
    def _url_to_str(cls, value: Any) -> Any:
        # accept httpx.URL and similar objects
        return None if value is None else str(value)

    def set_additional_info(self, info: str) -> "PaymentRequest":
        self.additional_info = info
        return self

    def set_auth_email(self, email: str) -> "PaymentRequest":
        self.auth_email = email
        return self

    def set_merchant_trace(self, trace_id: str) -> "PaymentRequest":
        self.merchant_trace = trace_id
        return self

    def set_tokenize(self, tokenize: bool) -> "PaymentRequest":
        self.tokenize = tokenize
        return self

    def form_fields(self) -> Dict[str, str]:
        """Wire fields in protocol order, absent optional fields omitted."""
        fields = {
            "id": str(self.merchant_id),
            "reference": self.reference,
            "amount": render_amount(self.amount),
            "additionalinfo": self.additional_info,
            "returnurl": self.return_url,
            "resulturl": self.result_url,
            "authemail": self.auth_email,
            "tokenize": render_bool(self.tokenize) if self.tokenize is not None else None,
            "merchanttrace": self.merchant_trace,
            "status": self.status,
        }
        return {k: v for k, v in fields.items() if v is not None}


class ExpressPaymentRequest(BaseModel):
    """An express (mobile money or card) payment, sent to ``remotetransaction``.

    Express payments have no browser redirect, so there is no return URL.
    """
    model_config = ConfigDict(validate_assignment=True)

    payment: PaymentRequest
    method: PaymentMethod

    @field_validator("payment")
    @classmethod
    def _no_return_url(cls, value: PaymentRequest) -> PaymentRequest:
        if value.return_url is not None:
            raise ValueError("express payments do not take a return URL")
        return value

    @property
    def reference(self) -> str:
        return self.payment.reference

    @property
    def amount(self) -> Decimal:
        return self.payment.amount

    def set_additional_info(self, info: str) -> "ExpressPaymentRequest":
        self.payment.set_additional_info(info)
        return self

    def set_auth_email(self, email: str) -> "ExpressPaymentRequest":
        self.payment.set_auth_email(email)
        return self

    def set_merchant_trace(self, trace_id: str) -> "ExpressPaymentRequest":
        self.payment.set_merchant_trace(trace_id)
        return self

    def set_tokenize(self, tokenize: bool) -> "ExpressPaymentRequest":
        self.payment.set_tokenize(tokenize)
        return self

    def form_fields(self) -> Dict[str, str]:
        fields = {"method": self.method.name()}
        fields.update(self.payment.form_fields())
        fields.update(self.method.form_fields())
        return fields
