"""Exceptions raised while encoding CBOR items."""

from typing import Any


class CBOREncodeError(ValueError):
    """Base class for CBOR encoding failures."""


class UnsupportedLength(CBOREncodeError):
    """Raised when a length or integer argument cannot be encoded.

    CBOR heads carry at most an 8-byte argument, so anything outside
    ``0 <= argument < 2**64`` has no representation.
    """

    def __init__(self, major_type: int, value: int, reason: str = ""):
        self.major_type = major_type
        self.value = value
        message = f"cannot encode argument {value} for major type {major_type}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidItemType(CBOREncodeError, TypeError):
    """Raised when a value does not fit the requested CBOR major type."""

    def __init__(self, value: Any, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(f"expected {expected}, got {type(value).__name__}: {value!r}")
