"""CDDL validation of produced COSE_Sign1 / CWT bytes.

The schemas follow RFC 9052 (COSE_Sign1) and RFC 8392 (CWT claims),
reduced to what the fixtures carry. Validation goes through pycddl and runs
against the encoded bytes, so it also checks the encoder's output is
well-formed CBOR.
"""

import logging
from typing import Optional

import pycddl

from . import cbor_utils

logger = logging.getLogger(__name__)

COSE_SIGN1_CDDL = """
COSE_Sign1 = [
    protected: bstr,
    unprotected: header-map,
    payload: bstr,
    signature: bstr
]

header-map = {
    * label => any
}

label = int / tstr
"""

PROTECTED_HEADER_CDDL = """
protected-header = {
    1 => int / tstr,    ; alg
    * label => any
}

label = int / tstr
"""

CWT_CLAIMS_CDDL = """
cwt-claims = {
    ? 1 => tstr,             ; iss
    ? 2 => tstr,             ; sub
    ? 3 => tstr / [* tstr],  ; aud
    ? 4 => int,              ; exp
    ? 5 => int,              ; nbf
    ? 6 => int,              ; iat
    ? 7 => bstr,             ; cti
    * label => any
}

label = int / tstr
"""


class CoseSign1Validator:
    """Validates a COSE_Sign1 message and the CWT it carries."""

    def __init__(
        self,
        envelope_schema: str = COSE_SIGN1_CDDL,
        protected_schema: str = PROTECTED_HEADER_CDDL,
        claims_schema: str = CWT_CLAIMS_CDDL,
    ):
        self.envelope = pycddl.Schema(envelope_schema)
        self.protected = pycddl.Schema(protected_schema)
        self.claims = pycddl.Schema(claims_schema)

    @staticmethod
    def _check(schema: pycddl.Schema, data: bytes, part: str) -> None:
        try:
            schema.validate_cbor(data)
        except pycddl.ValidationError as e:
            raise ValueError(f"{part} does not match its CDDL schema: {e}") from e

    def validate(self, data: bytes) -> None:
        """Validate an encoded COSE_Sign1 message.

        Args:
            data: Encoded COSE_Sign1 array

        Raises:
            ValueError: Naming the first part (envelope, protected header or
                payload) that does not match its schema
        """
        self._check(self.envelope, data, "COSE_Sign1 envelope")

        protected_bytes, _, payload_bytes, _ = cbor_utils.decode(data)
        if protected_bytes:
            self._check(self.protected, protected_bytes, "Protected header")
        self._check(self.claims, payload_bytes, "CWT claims payload")
        logger.debug("COSE_Sign1 message of %d bytes is valid", len(data))

    def is_valid(self, data: bytes) -> bool:
        """Return True if ``validate`` accepts the data."""
        try:
            self.validate(data)
            return True
        except ValueError:
            return False


_default_validator: Optional[CoseSign1Validator] = None


def validate_cose_sign1(data: bytes) -> None:
    """Validate an encoded COSE_Sign1 message with the default schemas.

    Raises:
        ValueError: If the message, its protected header or its claims do
            not match the schemas
    """
    global _default_validator
    if _default_validator is None:
        _default_validator = CoseSign1Validator()
    _default_validator.validate(data)
