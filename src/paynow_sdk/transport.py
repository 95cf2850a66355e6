"""HTTP transport used by the Paynow client."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from .config import DEFAULT_TIMEOUT
from .errors import InvalidUrlError, ReadingResponseError, SendingRequestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and full body text of an HTTP response."""
    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class TransportBase(ABC):
    """
    Minimal transport interface: send a POST, get status and body back.
    Implementations must not retry; failures are raised to the caller.
    """

    @abstractmethod
    async def post_form(self, url: str, fields: Dict[str, str]) -> TransportResponse:
        """POST a form-encoded body."""
        raise NotImplementedError

    @abstractmethod
    async def post_empty(self, url: str) -> TransportResponse:
        """POST with no body and an explicit zero Content-Length."""
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


class HttpxTransport(TransportBase):
    """Transport backed by ``httpx.AsyncClient``.

    Connection pooling, TLS and timeouts are left to httpx. A client passed
    in by the caller is not closed by :meth:`aclose`.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = DEFAULT_TIMEOUT):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _build(self, url: str, **kwargs) -> httpx.Request:
        try:
            return self._client.build_request("POST", url, **kwargs)
        except httpx.InvalidURL as e:
            raise InvalidUrlError(f"Invalid Paynow URL: {url}") from e

    async def _send(self, request: httpx.Request) -> TransportResponse:
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error(f"Failed to send request to {request.url.path}: {type(e).__name__}")
            raise SendingRequestError() from e
        try:
            await response.aread()
        except httpx.HTTPError as e:
            logger.error(f"Failed to read response from {request.url.path}: {type(e).__name__}")
            raise ReadingResponseError() from e
        finally:
            await response.aclose()
        logger.debug(f"Paynow responded {response.status_code} for {request.url.path}")
        return TransportResponse(status_code=response.status_code, text=response.text)

    async def post_form(self, url: str, fields: Dict[str, str]) -> TransportResponse:
        return await self._send(self._build(url, data=fields))

    async def post_empty(self, url: str) -> TransportResponse:
        return await self._send(self._build(url, content=b"", headers={"Content-Length": "0"}))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
