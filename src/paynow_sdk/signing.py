"""Paynow hash generation and verification."""

import hashlib
import logging
import secrets

from .credentials import IntegrationKey
from .errors import HashMismatchError

logger = logging.getLogger(__name__)


def sign(canonical: str, key: IntegrationKey) -> str:
    """Compute the Paynow hash of a canonical string.

    The key is appended directly after the canonical values and the result is
    hashed with SHA-512.

    Args:
        canonical: Output of one of the ``paynow_sdk.canonical`` functions.
        key: The integration key.

    Returns:
        The digest as 128 uppercase hexadecimal characters.
    """
    message = canonical + key.get_secret_value()
    return hashlib.sha512(message.encode("utf-8")).hexdigest().upper()


def verify(signature: str, canonical: str, key: IntegrationKey) -> bool:
    """Check a hash against the canonical string it should cover.

    Comparison is constant-time and case-sensitive.
    """
    expected = sign(canonical, key)
    return secrets.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))


def ensure_signature(signature: str, canonical: str, key: IntegrationKey, payload: str) -> None:
    """Verify a hash and raise if it does not match.

    Args:
        signature: Hash received from Paynow.
        canonical: Canonical string of the received fields.
        key: The integration key.
        payload: Name of the payload shape, used in logs and the error.

    Raises:
        HashMismatchError: If the hash does not match.
    """
    if not verify(signature, canonical, key):
        logger.warning(f"Hash mismatch on {payload}")
        raise HashMismatchError(payload)
