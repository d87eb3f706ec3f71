"""Text encodings for produced CBOR bytes."""

import base64


def to_hex(data: bytes) -> str:
    """Return the lowercase hex representation of data."""
    return bytes(data).hex()


def to_base64(data: bytes) -> str:
    """Return standard base64 with padding."""
    return base64.b64encode(data).decode("ascii")


def to_base64url(data: bytes) -> str:
    """Return base64url without padding.

    Standard base64 with ``+`` replaced by ``-``, ``/`` by ``_`` and the
    trailing ``=`` padding removed.
    """
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def from_base64url(text: str) -> bytes:
    """Decode base64url, restoring any stripped padding."""
    padding = "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(text + padding)
