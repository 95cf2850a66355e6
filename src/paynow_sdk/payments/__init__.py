"""Paynow request and response models."""

from .models import (
    MESSAGE_STATUS,
    PaymentMethodType,
    PaymentMethod,
    MethodBase,
    Ecocash,
    OneMoney,
    CardPayment,
    Card,
    BillingAddress,
    PaymentRequest,
    ExpressPaymentRequest,
)
from .responses import (
    TransactionStatus,
    StandardPaymentResponse,
    ExpressPaymentResponse,
    StatusUpdate,
    Token,
    VendorErrorResponse,
    NotFoundResponse,
)

__all__ = [
    # Requests
    "MESSAGE_STATUS",
    "PaymentMethodType",
    "PaymentMethod",
    "MethodBase",
    "Ecocash",
    "OneMoney",
    "CardPayment",
    "Card",
    "BillingAddress",
    "PaymentRequest",
    "ExpressPaymentRequest",
    # Responses
    "TransactionStatus",
    "StandardPaymentResponse",
    "ExpressPaymentResponse",
    "StatusUpdate",
    "Token",
    "VendorErrorResponse",
    "NotFoundResponse",
]
