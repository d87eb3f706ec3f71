"""cwt-fixtures: CBOR, COSE_Sign1 and CWT test fixtures for CWT debuggers."""

__version__ = "0.1.0"

# Hide module imports
from . import cbor_encoder, claims, cose_sign1, errors, keys, sample
from .cbor_encoder import (
    CBOREncoder,
    dumps,
    encode_head,
)
from .claims import (
    SAMPLE_CLAIMS,
    CoseAlgorithm,
    CWTClaim,
    HeaderParameter,
    build_claims,
)
from .cose_sign1 import (
    CoseSign1,
    ES256Signer,
    HMAC256Signer,
    PlaceholderSigner,
    Signer,
    assemble_cose_sign1,
    build_protected_header,
    build_unprotected_header,
    sign1,
)
from .errors import (
    CBOREncodeError,
    InvalidItemType,
    UnsupportedLength,
)
from .keys import (
    ES256KeyPair,
    HMACKey,
    generate_asymmetric_key_pair,
    generate_es256_key_pair,
    generate_hmac_key,
    generate_symmetric_key,
)
from .sample import (
    Sample,
    create_cose_sign1,
    generate_sample,
)

del cbor_encoder, claims, cose_sign1, errors, keys, sample


__all__ = [
    "__version__",
    # CBOR encoder
    "CBOREncoder",
    "dumps",
    "encode_head",
    # Errors
    "CBOREncodeError",
    "InvalidItemType",
    "UnsupportedLength",
    # Registries and claims
    "CWTClaim",
    "CoseAlgorithm",
    "HeaderParameter",
    "SAMPLE_CLAIMS",
    "build_claims",
    # COSE_Sign1 assembly
    "CoseSign1",
    "Signer",
    "PlaceholderSigner",
    "ES256Signer",
    "HMAC256Signer",
    "assemble_cose_sign1",
    "build_protected_header",
    "build_unprotected_header",
    "sign1",
    # Sample fixture
    "Sample",
    "create_cose_sign1",
    "generate_sample",
    # Key material
    "ES256KeyPair",
    "HMACKey",
    "generate_es256_key_pair",
    "generate_hmac_key",
    "generate_asymmetric_key_pair",
    "generate_symmetric_key",
]
