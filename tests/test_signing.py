"""Tests for hash generation and verification."""

import pytest

from paynow_sdk import HashMismatchError, IntegrationKey
from paynow_sdk.signing import ensure_signature, sign, verify

from conftest import KEY_TEXT, OTHER_KEY_TEXT, expected_hash

CANONICAL = "1201REF-1314.1874https://x/https://x/Message"


class TestSign:
    """Tests for hash generation."""

    def test_matches_sha512_of_canonical_plus_key(self, integration_key):
        """Test that the hash is SHA-512 over the canonical text then the key."""
        assert sign(CANONICAL, integration_key) == expected_hash(CANONICAL)

    def test_uppercase_hex(self, integration_key):
        """Test the hash is 128 uppercase hexadecimal characters."""
        signature = sign(CANONICAL, integration_key)
        assert len(signature) == 128
        assert signature == signature.upper()
        int(signature, 16)

    def test_deterministic(self, integration_key):
        """Test that the same inputs always give the same hash."""
        assert sign(CANONICAL, integration_key) == sign(CANONICAL, IntegrationKey(KEY_TEXT))

    def test_single_character_change_in_message(self, integration_key):
        """Test that changing one character of the canonical text changes the hash."""
        tampered = CANONICAL.replace("314.1874", "314.1875")
        assert sign(tampered, integration_key) != sign(CANONICAL, integration_key)

    def test_different_key(self, integration_key, other_key):
        """Test that a different key changes the hash."""
        assert sign(CANONICAL, integration_key) != sign(CANONICAL, other_key)

    def test_non_ascii_text(self, integration_key):
        """Test that canonical text is hashed as UTF-8."""
        assert sign("Café", integration_key) == expected_hash("Café")


class TestVerify:
    """Tests for hash verification."""

    @pytest.mark.parametrize("canonical", ["", "a", CANONICAL, "OkDial *151#42https://poll/"])
    def test_round_trip(self, integration_key, canonical):
        """Test that a hash always verifies against what it was made from."""
        assert verify(sign(canonical, integration_key), canonical, integration_key)

    def test_wrong_key_fails(self, integration_key):
        """Test that a hash made with another key does not verify."""
        signature = expected_hash(CANONICAL, OTHER_KEY_TEXT)
        assert not verify(signature, CANONICAL, integration_key)

    def test_tampered_message_fails(self, integration_key):
        """Test that a hash does not verify against altered text."""
        signature = sign(CANONICAL, integration_key)
        assert not verify(signature, CANONICAL + "x", integration_key)

    def test_lowercase_hash_fails(self, integration_key):
        """Test that comparison is case-sensitive."""
        signature = sign(CANONICAL, integration_key).lower()
        assert not verify(signature, CANONICAL, integration_key)

    def test_empty_hash_fails(self, integration_key):
        """Test that an empty hash never verifies."""
        assert not verify("", CANONICAL, integration_key)


class TestEnsureSignature:
    """Tests for the raising variant of verification."""

    def test_valid_passes(self, integration_key):
        """Test that a matching hash raises nothing."""
        ensure_signature(sign(CANONICAL, integration_key), CANONICAL, integration_key, "payment response")

    def test_mismatch_raises(self, integration_key):
        """Test that a mismatch raises HashMismatchError naming the payload."""
        with pytest.raises(HashMismatchError) as exc_info:
            ensure_signature("F" * 128, CANONICAL, integration_key, "status update")
        assert exc_info.value.payload == "status update"

    def test_mismatch_does_not_leak_key(self, integration_key):
        """Test that the error message never contains the key."""
        with pytest.raises(HashMismatchError) as exc_info:
            ensure_signature("F" * 128, CANONICAL, integration_key, "status update")
        assert KEY_TEXT not in str(exc_info.value)
