"""The sample COSE_Sign1 CWT used to exercise a CWT debugger.

The sample carries the claims from RFC 8392 Appendix A.1 plus two custom
claims, a protected ``{1: -7}`` header, an unprotected ``{4: "test-key"}``
header, and by default a 64-byte placeholder signature.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from . import cbor_utils, diagnostic
from .claims import SAMPLE_KID, CoseAlgorithm, HeaderParameter, build_claims, claim_name
from .cose_sign1 import CoseSign1, PlaceholderSigner, Signer, sign1

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    """A generated sample and whether its signature is a placeholder."""

    message: CoseSign1
    placeholder_signature: bool = True

    @property
    def encoded(self) -> bytes:
        return self.message.encoded

    @property
    def hex(self) -> str:
        return self.message.hex()

    @property
    def base64url(self) -> str:
        return self.message.base64url()

    @property
    def summary(self) -> list[str]:
        return describe(self.message, placeholder_signature=self.placeholder_signature)


def create_cose_sign1(
    signer: Optional[Signer] = None,
    claims: Optional[Mapping[Any, Any]] = None,
    kid: str = SAMPLE_KID,
) -> CoseSign1:
    """Build the sample COSE_Sign1 message.

    Args:
        signer: Signature source; defaults to a ``PlaceholderSigner``
        claims: Claims map; defaults to ``SAMPLE_CLAIMS``
        kid: Key identifier for the unprotected header

    Returns:
        The assembled message
    """
    if signer is None:
        signer = PlaceholderSigner()

    payload = build_claims(claims)
    logger.debug("Encoded CWT claims: %d bytes", len(payload))

    return sign1(
        payload,
        signer,
        protected_header={HeaderParameter.ALG: signer.algorithm},
        unprotected_header={HeaderParameter.KID: kid},
    )


def generate_sample(signer: Optional[Signer] = None) -> Sample:
    """Generate the sample, with a placeholder signature unless a signer is given."""
    message = create_cose_sign1(signer)
    logger.info("Generated COSE_Sign1 sample of %d bytes", len(message.encoded))
    placeholder = signer is None or isinstance(signer, PlaceholderSigner)
    return Sample(message=message, placeholder_signature=placeholder)


def _algorithm_name(alg: Any) -> Optional[str]:
    try:
        return CoseAlgorithm(alg).name
    except (ValueError, TypeError):
        return None


def _decode_or_none(data: bytes) -> Any:
    if not data:
        return None
    try:
        return cbor_utils.decode(data)
    except cbor_utils.CBORDecodeError:
        logger.debug("Not decodable as CBOR: %d bytes", len(data))
        return None


def describe(message: CoseSign1, placeholder_signature: bool = False) -> list[str]:
    """Summarise the structure of a COSE_Sign1 message, one line per element.

    Parts that are not CBOR (an opaque payload, say) are shown by size.
    """
    protected = _decode_or_none(message.protected)
    if protected is None:
        protected_line = f"- Protected: {len(message.protected)} bytes"
    else:
        protected_line = f"- Protected: {diagnostic.cbor_to_diag(message.protected)}"
        alg_name = _algorithm_name(protected.get(HeaderParameter.ALG)) if isinstance(protected, dict) else None
        if alg_name:
            protected_line += f" ({alg_name})"

    payload = _decode_or_none(message.payload)
    if isinstance(payload, dict):
        names = ", ".join(claim_name(key) for key in payload)
        payload_line = f"- Payload: CWT claims ({names})"
    else:
        payload_line = f"- Payload: {len(message.payload)} bytes"

    kind = "dummy data" if placeholder_signature else "signature"
    return [
        protected_line,
        f"- Unprotected: {diagnostic.cbor_to_diag(message.unprotected)}",
        payload_line,
        f"- Signature: {len(message.signature)} bytes {kind}",
    ]
