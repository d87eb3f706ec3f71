"""Pytest configuration and shared fixtures for cwt-fixtures tests."""

from typing import Any

import pytest

from cwt_fixtures.claims import SAMPLE_CLAIMS
from cwt_fixtures.keys import ES256KeyPair, generate_es256_key_pair

# RFC 8392 Appendix A.1 claims (iss through cti)
RFC8392_CLAIMS_HEX = (
    "0175636f61703a2f2f61732e6578616d706c652e636f6d"
    "02656572696b77"
    "037818636f61703a2f2f6c696768742e6578616d706c652e636f6d"
    "041a5612aeb0"
    "051a5610d9f0"
    "061a5610d9f0"
    "07420b71"
)

SAMPLE_CLAIMS_HEX = (
    "a9"
    + RFC8392_CLAIMS_HEX
    + "1864" + "6a" + "70726f64756374696f6e"  # 100: "production"
    + "1865" + "83" + "6561646d696e" + "6465646974" + "6472656164"  # 101: ["admin", "edit", "read"]
)

PLACEHOLDER_SIGNATURE_HEX = "30313233343536373839" * 6 + "30313233"

SAMPLE_COSE_SIGN1_HEX = (
    "84"
    + "43a10126"  # protected: << {1: -7} >>
    + "a104" + "68746573742d6b6579"  # unprotected: {4: "test-key"}
    + "5870" + SAMPLE_CLAIMS_HEX  # payload: << claims >>
    + "5840" + PLACEHOLDER_SIGNATURE_HEX  # signature: 64 placeholder bytes
)


@pytest.fixture
def sample_claims() -> dict[int, Any]:
    """Provide a mutable copy of the sample CWT claims."""
    return dict(SAMPLE_CLAIMS)


@pytest.fixture(scope="session")
def es256_key_pair() -> ES256KeyPair:
    """Generate one ES256 key pair for the session."""
    return generate_es256_key_pair()


@pytest.fixture
def hmac_secret() -> bytes:
    """Provide a fixed HMAC secret."""
    return bytes(range(32))


@pytest.fixture
def sample_claims_cbor() -> bytes:
    """Expected encoding of the sample claims map."""
    return bytes.fromhex(SAMPLE_CLAIMS_HEX)


@pytest.fixture
def sample_cose_sign1_cbor() -> bytes:
    """Expected encoding of the sample COSE_Sign1 message."""
    return bytes.fromhex(SAMPLE_COSE_SIGN1_HEX)


def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line("markers", "unit: fast tests of a single module")
    config.addinivalue_line("markers", "integration: tests spanning several modules")
    config.addinivalue_line(
        "markers", "requires_crypto: mark test as requiring cryptographic operations"
    )
