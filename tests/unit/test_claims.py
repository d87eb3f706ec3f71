"""Unit tests for the CWT claims registry and claims map builder."""

import cbor2
import pytest

from cwt_fixtures.claims import (
    CLAIM_NAMES,
    CUSTOM_CLAIM_ROLES,
    SAMPLE_CLAIMS,
    CoseAlgorithm,
    CWTClaim,
    HeaderParameter,
    build_claims,
    claim_name,
)
from cwt_fixtures.errors import InvalidItemType


class TestRegistry:
    """Registry constants."""

    @pytest.mark.unit
    def test_claim_keys(self) -> None:
        assert [int(c) for c in CWTClaim] == [1, 2, 3, 4, 5, 6, 7]
        assert CWTClaim.CTI == 7

    @pytest.mark.unit
    def test_header_and_algorithm_values(self) -> None:
        assert HeaderParameter.ALG == 1
        assert HeaderParameter.KID == 4
        assert [h.name for h in HeaderParameter] == ["ALG", "KID"]
        assert CoseAlgorithm.ES256 == -7
        assert CoseAlgorithm.HMAC256 == 5

    @pytest.mark.unit
    def test_claim_names(self) -> None:
        assert claim_name(1) == "iss"
        assert claim_name(CWTClaim.AUD) == "aud"
        assert claim_name(CUSTOM_CLAIM_ROLES) == "roles"
        assert claim_name(999) == "999"
        assert claim_name("custom") == "custom"
        assert len(CLAIM_NAMES) == 9

    @pytest.mark.unit
    def test_sample_claims_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            SAMPLE_CLAIMS[1] = "changed"  # type: ignore[index]


class TestBuildClaims:
    """Claims map encoding."""

    @pytest.mark.unit
    def test_sample_claims_encoding(self, sample_claims_cbor: bytes) -> None:
        """The default claims map matches the expected bytes exactly."""
        assert build_claims() == sample_claims_cbor

    @pytest.mark.unit
    def test_starts_with_nine_entry_map(self) -> None:
        encoded = build_claims()
        assert encoded[0] == 0xA9

    @pytest.mark.unit
    def test_key_order(self) -> None:
        """Keys decode in the order 1..7, 100, 101."""
        decoded = cbor2.loads(build_claims())
        assert list(decoded) == [1, 2, 3, 4, 5, 6, 7, 100, 101]
        assert decoded[101] == ["admin", "edit", "read"]
        assert decoded[7] == b"\x0b\x71"

    @pytest.mark.unit
    def test_custom_claims(self, sample_claims) -> None:
        claims = {CWTClaim.SUB: "alice", 200: {"scope": ["read"]}, -70000: b"\x01"}
        decoded = cbor2.loads(build_claims(claims))
        assert decoded == {2: "alice", 200: {"scope": ["read"]}, -70000: b"\x01"}

        sample_claims[CWTClaim.EXP] = 2**40
        assert cbor2.loads(build_claims(sample_claims))[4] == 2**40

    @pytest.mark.unit
    def test_empty_claims(self) -> None:
        assert build_claims({}) == b"\xa0"

    @pytest.mark.unit
    def test_unsupported_claim_value(self) -> None:
        with pytest.raises(InvalidItemType):
            build_claims({CWTClaim.EXP: 1444064944.5})
