# paynow_sdk package
__version__ = "0.1.0"

from .client import PaynowClient, SubmissionResponse
from .config import ClientConfig, DEFAULT_BASE_URL
from .credentials import IntegrationKey
from .errors import (
    PaynowError,
    ConfigurationError,
    InvalidKeyError,
    InvalidUrlError,
    TransportError,
    SendingRequestError,
    ReadingResponseError,
    ResponseError,
    UnexpectedResponseError,
    VendorError,
    VendorErrorKind,
    InvalidIdError,
    InvalidAmountError,
    AmountOverflowError,
    InsufficientBalanceError,
    OpaqueVendorError,
    HashMismatchError,
    NotFoundError,
    classify_vendor_error,
)
from .payments import (
    PaymentRequest,
    ExpressPaymentRequest,
    PaymentMethodType,
    Ecocash,
    OneMoney,
    CardPayment,
    Card,
    BillingAddress,
    StandardPaymentResponse,
    ExpressPaymentResponse,
    StatusUpdate,
    TransactionStatus,
    Token,
)
from .signing import sign, verify
from .transport import TransportBase, TransportResponse, HttpxTransport
