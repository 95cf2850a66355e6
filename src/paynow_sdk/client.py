"""Paynow client: signs requests, submits them and verifies what comes back."""

import logging
import uuid
from decimal import Decimal
from typing import Dict, Optional, Union

import httpx

from .canonical import (
    canonicalize_express_payment,
    canonicalize_express_response,
    canonicalize_not_found,
    canonicalize_payment,
    canonicalize_standard_response,
    canonicalize_status_update,
    canonicalize_trace,
)
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig
from .credentials import IntegrationKey
from .errors import (
    InvalidUrlError,
    NotFoundError,
    ResponseError,
    UnexpectedResponseError,
)
from .parsing import decode_text, parse_as, parse_not_found, reinterpret
from .payments.models import (
    MESSAGE_STATUS,
    ExpressPaymentRequest,
    PaymentMethod,
    PaymentRequest,
)
from .payments.responses import (
    ExpressPaymentResponse,
    StandardPaymentResponse,
    StatusUpdate,
)
from .signing import ensure_signature, sign
from .transport import HttpxTransport, TransportBase

logger = logging.getLogger(__name__)

INITIATE_TRANSACTION_PATH = "initiatetransaction"
REMOTE_TRANSACTION_PATH = "remotetransaction"
TRACE_PATH = "trace"

SubmissionResponse = Union[StandardPaymentResponse, ExpressPaymentResponse]


class PaynowClient:
    """
    Client for Paynow's HTTP interface.

    The client holds only read-only configuration (integration ID, key, base
    URL and transport), so one instance can serve any number of concurrent
    calls. Nothing is retried: transport failures, vendor rejections and
    hash mismatches are raised to the caller as ``PaynowError`` subclasses.
    """

    def __init__(
        self,
        integration_id: int,
        integration_key: Union[IntegrationKey, str, uuid.UUID],
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[TransportBase] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            integration_id: Paynow integration (merchant) ID.
            integration_key: Paynow integration key.
            base_url: Base URL the operation paths are joined to.
            transport: Transport to send requests with. Defaults to an
                ``HttpxTransport`` owned by this client.
            timeout: Timeout in seconds for the default transport.

        Raises:
            InvalidKeyError: If the key is not a UUID.
            InvalidUrlError: If the base URL cannot be parsed.
        """
        self._id = int(integration_id)
        self._key = (
            integration_key
            if isinstance(integration_key, IntegrationKey)
            else IntegrationKey(integration_key)
        )
        if not base_url.endswith("/"):
            base_url += "/"
        try:
            self._base = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise InvalidUrlError(f"Invalid Paynow base URL: {base_url}") from e
        self._transport = transport or HttpxTransport(timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[TransportBase] = None) -> "PaynowClient":
        return cls(
            integration_id=config.integration_id,
            integration_key=config.integration_key,
            base_url=config.base_url,
            transport=transport,
            timeout=config.timeout,
        )

    @classmethod
    def from_env(cls, transport: Optional[TransportBase] = None) -> "PaynowClient":
        """Create a client from ``PAYNOW_INTEGRATION_ID`` and ``PAYNOW_INTEGRATION_KEY``."""
        return cls.from_config(ClientConfig.from_env(), transport=transport)

    @property
    def integration_id(self) -> int:
        return self._id

    @property
    def base_url(self) -> str:
        return str(self._base)

    def __repr__(self) -> str:
        return f"PaynowClient(integration_id={self._id}, base_url='{self._base}')"

    async def __aenter__(self) -> "PaynowClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    # Builders

    def standard_payment(
        self,
        reference: str,
        amount: Decimal,
        return_url: Union[str, httpx.URL],
        result_url: Union[str, httpx.URL],
    ) -> PaymentRequest:
        """Start a standard payment; optional fields are set on the result."""
        return PaymentRequest(
            merchant_id=self._id,
            reference=reference,
            amount=amount,
            return_url=return_url,
            result_url=result_url,
        )

    def express_payment(
        self,
        method: PaymentMethod,
        reference: str,
        amount: Decimal,
        result_url: Union[str, httpx.URL],
        auth_email: str,
        merchant_trace: str,
    ) -> ExpressPaymentRequest:
        """Start an express payment through Ecocash, OneMoney or card."""
        payment = PaymentRequest(
            merchant_id=self._id,
            reference=reference,
            amount=amount,
            result_url=result_url,
            auth_email=auth_email,
            merchant_trace=merchant_trace,
        )
        return ExpressPaymentRequest(payment=payment, method=method)

    # Hashing

    def sign(self, canonical: str) -> str:
        """Hash a canonical string with this client's integration key."""
        return sign(canonical, self._key)

    def verify_status_update(self, update: StatusUpdate) -> StatusUpdate:
        """Check the hash of a decoded status update.

        Raises:
            HashMismatchError: If the hash does not match the update's fields.
        """
        ensure_signature(update.hash, canonicalize_status_update(update), self._key, "status update")
        return update

    # Operations

    async def submit(self, request: Union[PaymentRequest, ExpressPaymentRequest]) -> SubmissionResponse:
        """Sign and submit a payment.

        Args:
            request: A standard or express payment.

        Returns:
            ``StandardPaymentResponse`` for a standard payment or
            ``ExpressPaymentResponse`` for an express payment, with its hash
            already verified.

        Raises:
            SendingRequestError: If the request could not be sent.
            ReadingResponseError: If the response body could not be read.
            ResponseError: On a non-success HTTP status.
            VendorError: If Paynow rejected the payment.
            UnexpectedResponseError: If the body matches no known shape.
            HashMismatchError: If the response hash does not verify.
        """
        if isinstance(request, ExpressPaymentRequest):
            return await self._submit_express(request)
        if isinstance(request, PaymentRequest):
            return await self._submit_standard(request)
        raise TypeError(f"Cannot submit {type(request).__name__}")

    async def _submit_standard(self, payment: PaymentRequest) -> StandardPaymentResponse:
        fields = payment.form_fields()
        fields["hash"] = self.sign(canonicalize_payment(payment))
        logger.info(f"Initiating payment {payment.reference}")
        body = await self._post(self._endpoint(INITIATE_TRANSACTION_PATH), fields)
        try:
            response = parse_as(StandardPaymentResponse, body)
        except UnexpectedResponseError as e:
            error = reinterpret(e, self._id, payment.amount)
            if error is e:
                raise
            raise error from e
        ensure_signature(
            response.hash, canonicalize_standard_response(response), self._key, "payment response"
        )
        return response

    async def _submit_express(self, express: ExpressPaymentRequest) -> ExpressPaymentResponse:
        fields = express.form_fields()
        fields["hash"] = self.sign(canonicalize_express_payment(express))
        logger.info(f"Initiating {express.method.name()} express payment {express.reference}")
        body = await self._post(self._endpoint(REMOTE_TRANSACTION_PATH), fields)
        try:
            response = parse_as(ExpressPaymentResponse, body)
        except UnexpectedResponseError as e:
            error = reinterpret(e, self._id, express.amount)
            if error is e:
                raise
            raise error from e
        ensure_signature(
            response.hash, canonicalize_express_response(response), self._key, "express payment response"
        )
        return response

    async def poll_status(self, poll_url: Union[str, httpx.URL]) -> StatusUpdate:
        """Fetch the current status of a transaction from its poll URL.

        Returns:
            The verified status update.

        Raises:
            VendorError: If Paynow answered with a recognised error.
            UnexpectedResponseError: If the body matches no known shape.
            HashMismatchError: If the update's hash does not verify.
        """
        logger.info("Polling transaction status")
        body = await self._post(str(poll_url))
        try:
            update = parse_as(StatusUpdate, body)
        except UnexpectedResponseError as e:
            error = reinterpret(e, self._id)
            if error is e:
                raise
            raise error from e
        return self.verify_status_update(update)

    async def trace_payment(self, merchant_trace: str) -> StatusUpdate:
        """Look up a transaction by the merchant trace ID it was created with.

        Raises:
            NotFoundError: If Paynow has no transaction with that trace ID.
            HashMismatchError: If the update, or the not-found answer, has a
                hash that does not verify.
        """
        fields = {
            "id": str(self._id),
            "merchanttrace": merchant_trace,
            "status": MESSAGE_STATUS,
            "hash": self.sign(canonicalize_trace(self._id, merchant_trace, MESSAGE_STATUS)),
        }
        logger.info(f"Tracing payment {merchant_trace}")
        body = await self._post(self._endpoint(TRACE_PATH), fields)
        try:
            update = parse_as(StatusUpdate, body)
        except UnexpectedResponseError as e:
            error = reinterpret(e, self._id)
            if error is e:
                not_found = parse_not_found(e.body)
                if not_found is None:
                    raise
                # an unsigned not-found could hide a real transaction
                ensure_signature(
                    not_found.hash, canonicalize_not_found(not_found), self._key, "not-found response"
                )
                error = NotFoundError(merchant_trace)
            raise error from e
        return self.verify_status_update(update)

    def parse_status_update(self, body: Union[str, bytes]) -> StatusUpdate:
        """Decode and verify a status update Paynow posted to the result URL.

        Args:
            body: Raw form-encoded request body.

        Raises:
            UnexpectedResponseError: If the body is not UTF-8 or not a status
                update.
            HashMismatchError: If the hash does not verify.
        """
        return self.verify_status_update(parse_as(StatusUpdate, decode_text(body)))

    # Transport

    def _endpoint(self, path: str) -> str:
        return str(self._base.join(path))

    async def _post(self, url: str, fields: Optional[Dict[str, str]] = None) -> str:
        if fields is None:
            response = await self._transport.post_empty(url)
        else:
            response = await self._transport.post_form(url, fields)
        if not response.is_success:
            logger.warning(f"Paynow returned HTTP {response.status_code}")
            raise ResponseError(response.status_code, response.text)
        return response.text
