"""Tests for the cwt-fixtures command-line interface."""

import json

import pytest

from cwt_fixtures import __version__, generate_sample
from cwt_fixtures.cli import main
from cwt_fixtures.encoding import from_base64url


def test_version(capsys):
    """Test that --version prints the package version."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: cwt-fixtures" in capsys.readouterr().out


def test_sample_default_output(capsys):
    assert main(["sample"]) == 0
    out = capsys.readouterr().out

    sample = generate_sample()
    assert "Generated COSE_Sign1 CWT Sample:" in out
    assert f"Base64URL: {sample.base64url}" in out
    assert f"Hex: {sample.hex}" in out
    assert "- Signature: 64 bytes dummy data" in out


@pytest.mark.parametrize("fmt", ["hex", "base64url"])
def test_sample_single_format(capsys, fmt):
    assert main(["sample", "--format", fmt]) == 0
    out = capsys.readouterr().out.strip()

    expected = generate_sample().encoded
    decoded = bytes.fromhex(out) if fmt == "hex" else from_base64url(out)
    assert decoded == expected


def test_sample_raw(capsysbinary):
    assert main(["sample", "-f", "raw"]) == 0
    assert capsysbinary.readouterr().out == generate_sample().encoded


def test_sample_signed_and_validated(capsys):
    assert main(["sample", "--sign", "--validate"]) == 0
    out = capsys.readouterr().out
    assert "dummy data" not in out
    assert '"kty": "EC"' in out


def test_keys_text(capsys):
    assert main(["keys"]) == 0
    out = capsys.readouterr().out
    assert "-----BEGIN PUBLIC KEY-----" in out
    assert '"kid": "test-key"' in out
    assert "HMAC-SHA256 Secret (256 bits):" in out
    assert "Usage Instructions:" in out


def test_keys_json(capsys):
    assert main(["keys", "--json", "--kid", "debugger", "--hmac-bits", "128"]) == 0
    exported = json.loads(capsys.readouterr().out)
    assert exported["es256"]["publicKeyJWK"]["kid"] == "debugger"
    assert len(bytes.fromhex(exported["hmac"]["secretHex"])) == 16


def test_keys_invalid_hmac_bits(capsys):
    assert main(["keys", "--hmac-bits", "12"]) == 1
    assert "error: " in capsys.readouterr().err
