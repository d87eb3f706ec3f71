"""CBOR decoding utilities.

This module isolates the third-party decoder used to inspect what the encoder
produced. The encoder itself never depends on it.

Currently uses cbor2 as the underlying implementation.
"""

from typing import Any

import cbor2

CBORDecodeError = cbor2.CBORDecodeError


def decode(data: bytes) -> Any:
    """Decode CBOR bytes to an object.

    Args:
        data: CBOR-encoded bytes

    Returns:
        The decoded object

    Raises:
        CBORDecodeError: If the data is not valid CBOR
    """
    return cbor2.loads(data)


def decode_cose_sign1(data: bytes) -> tuple[dict[Any, Any], dict[Any, Any], Any, bytes]:
    """Decode a COSE_Sign1 message into its four parts.

    The protected header and payload byte strings are decoded as well, so
    the result holds the header maps and the claims map rather than bytes.

    Args:
        data: Encoded COSE_Sign1 array

    Returns:
        Tuple of (protected header, unprotected header, payload, signature)

    Raises:
        ValueError: If the data is not a 4-element COSE_Sign1 array
    """
    message = decode(data)
    if not isinstance(message, list) or len(message) != 4:
        raise ValueError("COSE_Sign1 must be a 4-element array")

    protected_bytes, unprotected, payload_bytes, signature = message
    if not isinstance(protected_bytes, bytes):
        raise ValueError("COSE_Sign1 protected header must be a byte string")
    if not isinstance(unprotected, dict):
        raise ValueError("COSE_Sign1 unprotected header must be a map")
    if not isinstance(payload_bytes, bytes) or not isinstance(signature, bytes):
        raise ValueError("COSE_Sign1 payload and signature must be byte strings")

    protected = decode(protected_bytes) if protected_bytes else {}
    payload = decode(payload_bytes) if payload_bytes else None
    return protected, unprotected, payload, signature
