"""COSE_Sign1 assembly with pluggable signers.

A COSE_Sign1 structure is a 4-element CBOR array::

    [protected: bstr, unprotected: map, payload: bstr, signature: bstr]

The protected header map is encoded on its own and carried as a byte string.
The unprotected header map is written inline. The payload is the encoded CWT
claims map, again carried as a byte string. Signature bytes come from a
``Signer``; fixtures use ``PlaceholderSigner``, which produces dummy bytes
that will never verify.
"""

import hashlib
import hmac
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, utils

from . import cbor_utils, encoding
from .cbor_encoder import CBOREncoder, dumps
from .claims import SAMPLE_KID, CoseAlgorithm, HeaderParameter
from .errors import InvalidItemType

logger = logging.getLogger(__name__)

COSE_SIGN1_ELEMENTS = 4
SIG_STRUCTURE_CONTEXT = "Signature1"
PLACEHOLDER_SIGNATURE_LENGTH = 64


class Signer(Protocol):
    """Protocol for COSE_Sign1 signers."""

    def sign(self, message: bytes) -> bytes:
        """Sign a message and return the signature.

        Args:
            message: The encoded Sig_structure to sign

        Returns:
            The signature bytes
        """

    @property
    def algorithm(self) -> int:
        """Get the COSE algorithm identifier.

        Returns:
            COSE algorithm identifier (e.g., -7 for ES256)
        """


class PlaceholderSigner:
    """Produces dummy signature bytes for test fixtures.

    The output ignores the message entirely: ASCII digits ``0123456789``
    repeated to the requested length. Such a signature never verifies.
    """

    def __init__(self, length: int = PLACEHOLDER_SIGNATURE_LENGTH, algorithm: int = CoseAlgorithm.ES256):
        if length < 0:
            raise ValueError(f"Signature length must not be negative, got {length}")
        self.length = length
        self._algorithm = int(algorithm)

    def sign(self, message: bytes) -> bytes:
        """Return placeholder bytes, independent of the message."""
        return bytes(0x30 + (i % 10) for i in range(self.length))

    @property
    def algorithm(self) -> int:
        return self._algorithm


class ES256Signer:
    """ECDSA P-256 SHA-256 signer implementation."""

    def __init__(self, private_key_bytes: bytes):
        """Initialize ES256 signer with private key.

        Args:
            private_key_bytes: The private key bytes (32 bytes for P-256)
        """
        private_value = int.from_bytes(private_key_bytes, byteorder="big")
        self.private_key = ec.derive_private_key(
            private_value,
            ec.SECP256R1(),
            default_backend(),
        )

    def sign(self, message: bytes) -> bytes:
        """Sign a message with ES256."""
        signature_der = self.private_key.sign(message, ec.ECDSA(hashes.SHA256()))

        # COSE carries the raw r||s form, not DER
        r, s = utils.decode_dss_signature(signature_der)
        return r.to_bytes(32, byteorder="big") + s.to_bytes(32, byteorder="big")

    @property
    def algorithm(self) -> int:
        """Get COSE algorithm identifier for ES256."""
        return int(CoseAlgorithm.ES256)


class HMAC256Signer:
    """HMAC-SHA256 signer (COSE algorithm 5, full 256-bit tag)."""

    def __init__(self, secret: bytes):
        if not secret:
            raise ValueError("HMAC secret must not be empty")
        self.secret = bytes(secret)

    def sign(self, message: bytes) -> bytes:
        return hmac.new(self.secret, message, hashlib.sha256).digest()

    @property
    def algorithm(self) -> int:
        return int(CoseAlgorithm.HMAC256)


def build_protected_header(header: Optional[Mapping[Any, Any]] = None) -> bytes:
    """Encode the protected header map.

    Args:
        header: Header parameters; defaults to ``{1: -7}`` (alg: ES256)

    Returns:
        The encoded map. ``assemble_cose_sign1`` wraps it in a byte string.
    """
    if header is None:
        header = {HeaderParameter.ALG: CoseAlgorithm.ES256}
    return dumps(header)


def build_unprotected_header(header: Optional[Mapping[Any, Any]] = None, kid: str = SAMPLE_KID) -> bytes:
    """Encode the unprotected header map.

    Args:
        header: Header parameters; defaults to ``{4: kid}``
        kid: Key identifier used when no header is given

    Returns:
        The encoded map, spliced inline into the envelope
    """
    if header is None:
        header = {HeaderParameter.KID: kid}
    return dumps(header)


def sig_structure(protected: bytes, payload: bytes, external_aad: bytes = b"") -> bytes:
    """Encode the Sig_structure that a COSE_Sign1 signature covers."""
    return dumps([SIG_STRUCTURE_CONTEXT, protected, external_aad, payload])


def assemble_cose_sign1(protected: bytes, unprotected: bytes, payload: bytes, signature: bytes) -> bytes:
    """Lay out the four COSE_Sign1 elements as a CBOR array.

    Args:
        protected: Encoded protected header map (wrapped as bstr here)
        unprotected: Encoded unprotected header map (written inline)
        payload: Payload bytes (wrapped as bstr here)
        signature: Signature bytes

    Returns:
        The encoded, untagged COSE_Sign1 array

    Raises:
        InvalidItemType: If ``unprotected`` does not start with one complete
            encoded CBOR map
    """
    try:
        header = cbor_utils.decode(unprotected)
    except cbor_utils.CBORDecodeError:
        header = None
    if not isinstance(header, dict):
        raise InvalidItemType(unprotected, "encoded CBOR map for the unprotected header")

    encoder = CBOREncoder()
    encoder.encode_array_header(COSE_SIGN1_ELEMENTS)
    encoder.encode_bytes(protected)
    encoder.encode_raw(unprotected)
    encoder.encode_bytes(payload)
    encoder.encode_bytes(signature)
    return encoder.getvalue()


@dataclass(frozen=True)
class CoseSign1:
    """An assembled COSE_Sign1 message.

    Attributes:
        protected: Encoded protected header map
        unprotected: Encoded unprotected header map
        payload: Payload bytes
        signature: Signature bytes
    """

    protected: bytes
    unprotected: bytes
    payload: bytes
    signature: bytes

    @property
    def encoded(self) -> bytes:
        return assemble_cose_sign1(self.protected, self.unprotected, self.payload, self.signature)

    def hex(self) -> str:
        return encoding.to_hex(self.encoded)

    def base64url(self) -> str:
        return encoding.to_base64url(self.encoded)

    def __bytes__(self) -> bytes:
        return self.encoded


def sign1(
    payload: bytes,
    signer: Signer,
    protected_header: Optional[Mapping[Any, Any]] = None,
    unprotected_header: Optional[Mapping[Any, Any]] = None,
    external_aad: bytes = b"",
) -> CoseSign1:
    """Create a COSE_Sign1 message.

    Args:
        payload: The payload bytes (for a CWT, the encoded claims map)
        signer: Produces the signature over the Sig_structure
        protected_header: Protected header parameters; ``alg`` is taken from
            the signer when absent
        unprotected_header: Unprotected header parameters (default: empty map)
        external_aad: External additional authenticated data

    Returns:
        The assembled ``CoseSign1``
    """
    protected_params = dict(protected_header or {})
    if HeaderParameter.ALG not in protected_params:
        protected_params[HeaderParameter.ALG] = signer.algorithm

    protected = build_protected_header(protected_params)
    unprotected = build_unprotected_header(dict(unprotected_header or {}))

    signature = signer.sign(sig_structure(protected, payload, external_aad))
    logger.debug(
        "Signed COSE_Sign1 with alg %s: protected=%d bytes, payload=%d bytes, signature=%d bytes",
        signer.algorithm,
        len(protected),
        len(payload),
        len(signature),
    )

    return CoseSign1(
        protected=protected,
        unprotected=unprotected,
        payload=bytes(payload),
        signature=bytes(signature),
    )
