"""Shared test fixtures and configuration."""

import os
import hashlib
import pytest
from decimal import Decimal
from unittest.mock import MagicMock, AsyncMock
from urllib.parse import urlencode
from typing import Dict

# Set up test environment variables before importing modules
os.environ.setdefault("PAYNOW_INTEGRATION_ID", "1201")
os.environ.setdefault("PAYNOW_INTEGRATION_KEY", "3e9fed89-60e1-4ce5-ab6e-6b1eb2d4f977")

from paynow_sdk import IntegrationKey, PaynowClient
from paynow_sdk.transport import TransportBase, TransportResponse

MERCHANT_ID = 1201
KEY_TEXT = "3e9fed89-60e1-4ce5-ab6e-6b1eb2d4f977"
OTHER_KEY_TEXT = "0b1c2d3e-4f50-4617-8293-a4b5c6d7e8f9"


def expected_hash(canonical: str, key_text: str = KEY_TEXT) -> str:
    """Reference hash computed independently of the package."""
    return hashlib.sha512((canonical + key_text).encode("utf-8")).hexdigest().upper()


def form_body(fields: Dict[str, str]) -> str:
    return urlencode(fields)


@pytest.fixture
def integration_key():
    """Return the integration key used across tests."""
    return IntegrationKey(KEY_TEXT)


@pytest.fixture
def other_key():
    """Return a different, equally valid integration key."""
    return IntegrationKey(OTHER_KEY_TEXT)


@pytest.fixture
def transport():
    """Create a mock transport whose responses tests configure."""
    mock = MagicMock(spec=TransportBase)
    mock.post_form = AsyncMock()
    mock.post_empty = AsyncMock()
    mock.aclose = AsyncMock()
    return mock


@pytest.fixture
def client(integration_key, transport):
    """Create a PaynowClient that talks to the mock transport."""
    return PaynowClient(MERCHANT_ID, integration_key, transport=transport)


@pytest.fixture
def respond(transport):
    """Configure the mock transport to answer every call with a body."""
    def _respond(body: str, status_code: int = 200):
        response = TransportResponse(status_code=status_code, text=body)
        transport.post_form.return_value = response
        transport.post_empty.return_value = response
        return response
    return _respond


@pytest.fixture
def amount():
    return Decimal("314.1874")


@pytest.fixture
def status_update_fields() -> Dict[str, str]:
    """Return the unsigned wire fields of a paid status update."""
    return {
        "reference": "REF-1",
        "paynowreference": "987654",
        "amount": "314.19",
        "status": "Paid",
        "pollurl": "https://www.paynow.co.zw/Interface/CheckPayment/?guid=abc",
    }


@pytest.fixture
def signed_status_update(status_update_fields) -> str:
    """Return a correctly signed status update body."""
    canonical = (
        "REF-1" + "987654" + "314.19" + "Paid"
        + "https://www.paynow.co.zw/Interface/CheckPayment/?guid=abc"
    )
    fields = dict(status_update_fields, hash=expected_hash(canonical))
    return form_body(fields)
