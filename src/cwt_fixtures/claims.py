"""CWT claim and COSE header registries, and the sample claim set."""

from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Optional

from .cbor_encoder import CBOREncoder


class CWTClaim(IntEnum):
    """Claim keys from the CWT claims registry (RFC 8392)."""

    ISS = 1
    SUB = 2
    AUD = 3
    EXP = 4
    NBF = 5
    IAT = 6
    CTI = 7


class HeaderParameter(IntEnum):
    """COSE header parameter labels (RFC 9052)."""

    ALG = 1
    KID = 4


class CoseAlgorithm(IntEnum):
    """COSE algorithm identifiers used by the fixtures."""

    ES256 = -7
    HMAC256 = 5


CUSTOM_CLAIM_ENVIRONMENT = 100
CUSTOM_CLAIM_ROLES = 101

CLAIM_NAMES: Mapping[int, str] = MappingProxyType(
    {
        CWTClaim.ISS: "iss",
        CWTClaim.SUB: "sub",
        CWTClaim.AUD: "aud",
        CWTClaim.EXP: "exp",
        CWTClaim.NBF: "nbf",
        CWTClaim.IAT: "iat",
        CWTClaim.CTI: "cti",
        CUSTOM_CLAIM_ENVIRONMENT: "environment",
        CUSTOM_CLAIM_ROLES: "roles",
    }
)

# Claim values from RFC 8392 Appendix A.1 plus two custom claims.
# Key order is significant: it is the order written to the map.
SAMPLE_CLAIMS: Mapping[int, Any] = MappingProxyType(
    {
        CWTClaim.ISS: "coap://as.example.com",
        CWTClaim.SUB: "erikw",
        CWTClaim.AUD: "coap://light.example.com",
        CWTClaim.EXP: 1444064944,
        CWTClaim.NBF: 1443944944,
        CWTClaim.IAT: 1443944944,
        CWTClaim.CTI: bytes.fromhex("0b71"),
        CUSTOM_CLAIM_ENVIRONMENT: "production",
        CUSTOM_CLAIM_ROLES: ("admin", "edit", "read"),
    }
)

SAMPLE_KID = "test-key"


def claim_name(key: Any) -> str:
    """Return the short name of a claim key, or the key itself as text."""
    if isinstance(key, int) and key in CLAIM_NAMES:
        return CLAIM_NAMES[key]
    return str(key)


def build_claims(claims: Optional[Mapping[Any, Any]] = None) -> bytes:
    """Encode a CWT claims map.

    Args:
        claims: Claims keyed by claim key, in the order they should be
            written. Defaults to ``SAMPLE_CLAIMS``.

    Returns:
        CBOR-encoded claims map
    """
    if claims is None:
        claims = SAMPLE_CLAIMS

    encoder = CBOREncoder()
    encoder.encode_map(claims)
    return encoder.getvalue()
