"""Diagnostic notation (EDN) rendering of produced CBOR.

Wraps the cbor-diag library so the rest of the package does not depend on
its API directly.
"""

import cbor_diag  # type: ignore[import-untyped]

from . import cbor_utils


def cbor_to_diag(cbor_data: bytes) -> str:
    """Convert CBOR data to diagnostic notation.

    Args:
        cbor_data: CBOR encoded bytes

    Returns:
        Diagnostic notation string
    """
    return cbor_diag.cbor2diag(cbor_data)  # type: ignore[no-any-return]


def diag_to_cbor(diag_str: str) -> bytes:
    """Convert diagnostic notation to CBOR data.

    Args:
        diag_str: Diagnostic notation string

    Returns:
        CBOR encoded bytes
    """
    return cbor_diag.diag2cbor(diag_str)  # type: ignore[no-any-return]


def cose_sign1_to_diag(data: bytes) -> dict[str, str]:
    """Render each part of a COSE_Sign1 message in diagnostic notation.

    The protected header and payload are rendered from the bytes they wrap,
    which is how a debugger shows them.

    Args:
        data: Encoded COSE_Sign1 array

    Returns:
        Mapping of part name ("message", "protected", "payload") to notation

    Raises:
        ValueError: If the data is not a 4-element COSE_Sign1 array
    """
    message = cbor_utils.decode(data)
    if not isinstance(message, list) or len(message) != 4:
        raise ValueError("COSE_Sign1 must be a 4-element array")

    protected_bytes, _, payload_bytes, _ = message
    return {
        "message": cbor_to_diag(data),
        "protected": cbor_to_diag(protected_bytes) if protected_bytes else "{}",
        "payload": cbor_to_diag(payload_bytes),
    }
