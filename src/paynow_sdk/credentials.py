"""Secret handling for the Paynow integration key."""

import secrets
import uuid
from typing import Union

from .errors import InvalidKeyError

REDACTED = "**********"


class IntegrationKey:
    """Paynow integration key held as a secret.

    The raw value is only reachable through :meth:`get_secret_value`. The
    default textual representations print a redacted placeholder, and
    :meth:`zeroize` overwrites the backing buffer once the key is no longer
    needed. Zeroizing also happens when the object is garbage collected or
    leaves a ``with`` block.
    """

    __slots__ = ("_buffer", "_zeroized")

    def __init__(self, value: Union[str, uuid.UUID, "IntegrationKey"]):
        """Wrap a UUID-shaped integration key.

        Args:
            value: The key as issued by Paynow, a ``uuid.UUID`` or another
                ``IntegrationKey`` to copy.

        Raises:
            InvalidKeyError: If the value is not a valid UUID.
        """
        if isinstance(value, IntegrationKey):
            value = value.get_secret_value()
        try:
            parsed = value if isinstance(value, uuid.UUID) else uuid.UUID(str(value).strip())
        except (ValueError, AttributeError, TypeError) as e:
            raise InvalidKeyError("Integration key must be a UUID") from e
        self._buffer = bytearray(str(parsed).encode("ascii"))
        self._zeroized = False

    def get_secret_value(self) -> str:
        """Return the raw key text (lowercase hyphenated UUID).

        Raises:
            ValueError: If the key has already been zeroized.
        """
        if self._zeroized:
            raise ValueError("Integration key has been zeroized")
        return self._buffer.decode("ascii")

    @property
    def is_zeroized(self) -> bool:
        return self._zeroized

    def zeroize(self) -> None:
        """Overwrite the key material in place."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._zeroized = True

    def __enter__(self) -> "IntegrationKey":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.zeroize()

    def __del__(self):
        # __init__ may have failed before the buffer existed
        if getattr(self, "_buffer", None) is not None:
            self.zeroize()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntegrationKey):
            return NotImplemented
        return secrets.compare_digest(bytes(self._buffer), bytes(other._buffer))

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"IntegrationKey('{REDACTED}')"

    def __str__(self) -> str:
        return REDACTED

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __copy__(self) -> "IntegrationKey":
        return IntegrationKey(self)

    def __deepcopy__(self, memo) -> "IntegrationKey":
        return IntegrationKey(self)

    def __reduce__(self):
        raise TypeError("IntegrationKey cannot be pickled")
