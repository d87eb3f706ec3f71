"""Test key generation for CWT signature verification.

Produces an ES256 (ECDSA P-256) key pair and an HMAC-SHA256 secret, each in
the encodings a debugger's key dialog accepts: PEM, JWK, hex and base64.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Any

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from . import encoding
from .claims import SAMPLE_KID

logger = logging.getLogger(__name__)

CURVE_P256 = "P-256"
P256_COORDINATE_SIZE = 32

# Curve names accepted for P-256, including the OpenSSL and SEC names
_P256_ALIASES = {"P-256", "prime256v1", "secp256r1"}


@dataclass(frozen=True)
class ES256KeyPair:
    """An ECDSA P-256 key pair and its exported forms.

    Attributes:
        public_key_pem: SubjectPublicKeyInfo PEM
        private_key_pem: Unencrypted PKCS#8 PEM
        public_key_jwk: JWK with kty, crv, x, y, use and kid
        public_key_raw: Uncompressed point (0x04 || x || y), 65 bytes
        private_key_bytes: Private scalar, 32 bytes big-endian
    """

    public_key_pem: str
    private_key_pem: str
    public_key_jwk: dict[str, str]
    public_key_raw: bytes
    private_key_bytes: bytes

    @property
    def public_key_hex(self) -> str:
        return encoding.to_hex(self.public_key_raw)

    @property
    def public_key_base64(self) -> str:
        return encoding.to_base64(self.public_key_raw)

    def to_dict(self) -> dict[str, Any]:
        """Export the public forms as a JSON-serializable dictionary."""
        return {
            "publicKeyPEM": self.public_key_pem,
            "privateKeyPEM": self.private_key_pem,
            "publicKeyJWK": dict(self.public_key_jwk),
            "publicKeyHex": self.public_key_hex,
            "publicKeyBase64": self.public_key_base64,
        }


@dataclass(frozen=True)
class HMACKey:
    """A random HMAC secret."""

    secret: bytes

    @property
    def hex(self) -> str:
        return encoding.to_hex(self.secret)

    @property
    def base64(self) -> str:
        return encoding.to_base64(self.secret)

    @property
    def base64url(self) -> str:
        return encoding.to_base64url(self.secret)

    def to_dict(self) -> dict[str, str]:
        return {
            "secretHex": self.hex,
            "secretBase64": self.base64,
            "secretBase64Url": self.base64url,
        }


def generate_es256_key_pair(kid: str = SAMPLE_KID) -> ES256KeyPair:
    """Generate an ES256 (ECDSA P-256) key pair.

    Args:
        kid: Key identifier placed in the JWK

    Returns:
        The key pair with PEM, JWK and raw exports
    """
    private_key = ec.generate_private_key(ec.SECP256R1(), default_backend())
    public_key = private_key.public_key()

    public_key_pem = public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    private_key_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")

    public_key_raw = public_key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    x = public_key_raw[1 : 1 + P256_COORDINATE_SIZE]
    y = public_key_raw[1 + P256_COORDINATE_SIZE :]

    private_value = private_key.private_numbers().private_value
    private_key_bytes = private_value.to_bytes(P256_COORDINATE_SIZE, byteorder="big")

    logger.debug("Generated ES256 key pair with kid %r", kid)
    return ES256KeyPair(
        public_key_pem=public_key_pem,
        private_key_pem=private_key_pem,
        public_key_jwk={
            "kty": "EC",
            "crv": CURVE_P256,
            "x": encoding.to_base64url(x),
            "y": encoding.to_base64url(y),
            "use": "sig",
            "kid": kid,
        },
        public_key_raw=public_key_raw,
        private_key_bytes=private_key_bytes,
    )


def generate_hmac_key(bit_length: int = 256) -> HMACKey:
    """Generate a random HMAC secret.

    Args:
        bit_length: Secret size in bits; a positive multiple of 8

    Returns:
        The secret with hex, base64 and base64url exports

    Raises:
        ValueError: If bit_length is not a positive multiple of 8
    """
    if isinstance(bit_length, bool) or not isinstance(bit_length, int):
        raise ValueError(f"Key length must be an integer number of bits, got {bit_length!r}")
    if bit_length <= 0 or bit_length % 8:
        raise ValueError(f"Key length must be a positive multiple of 8 bits, got {bit_length}")

    logger.debug("Generated %d-bit HMAC secret", bit_length)
    return HMACKey(secret=secrets.token_bytes(bit_length // 8))


def generate_asymmetric_key_pair(curve: str = CURVE_P256, kid: str = SAMPLE_KID) -> ES256KeyPair:
    """Generate a signing key pair on the named curve.

    Raises:
        ValueError: If the curve is not P-256
    """
    if curve not in _P256_ALIASES:
        raise ValueError(f"Unsupported curve: {curve} (only {CURVE_P256} is supported)")
    return generate_es256_key_pair(kid)


def generate_symmetric_key(bit_length: int = 256) -> HMACKey:
    """Alias for ``generate_hmac_key``."""
    return generate_hmac_key(bit_length)
