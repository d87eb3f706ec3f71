"""Command-line interface for cwt-fixtures."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Optional

from . import __version__
from .claims import SAMPLE_KID
from .cose_sign1 import ES256Signer
from .errors import CBOREncodeError
from .keys import generate_es256_key_pair, generate_hmac_key
from .sample import generate_sample
from .validation import validate_cose_sign1

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

USAGE_INSTRUCTIONS = (
    "1. Load the sample CWT in the debugger",
    '2. Click "Add Key" in the Signature Status section',
    '3. Select "ECDSA P-256 (ES256)" as key type',
    "4. Choose your preferred format (PEM, JWK, Hex, or Base64)",
    "5. Paste the corresponding public key",
    '6. Click "Save Key" then "Verify Signature"',
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cwt-fixtures",
        description="Generate COSE_Sign1 CWT samples and test keys for a CWT debugger",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Sample subcommand
    sample_parser = subparsers.add_parser("sample", help="Generate the sample COSE_Sign1 CWT")
    sample_parser.add_argument(
        "--format",
        "-f",
        choices=["all", "base64url", "hex", "raw"],
        default="all",
        help="Output encoding (default: all, with a structure summary)",
    )
    sample_parser.add_argument(
        "--sign",
        action="store_true",
        help="Sign with a fresh ES256 key instead of placeholder bytes",
    )
    sample_parser.add_argument(
        "--validate",
        action="store_true",
        help="Check the output against the COSE_Sign1 and CWT CDDL schemas",
    )

    # Keys subcommand
    keys_parser = subparsers.add_parser("keys", help="Generate ES256 and HMAC test keys")
    keys_parser.add_argument("--kid", default=SAMPLE_KID, help="Key ID for the JWK")
    keys_parser.add_argument(
        "--hmac-bits",
        type=int,
        default=256,
        help="HMAC secret size in bits (default: 256)",
    )
    keys_parser.add_argument("--json", action="store_true", help="Print keys as JSON")

    return parser


def _cmd_sample(args: argparse.Namespace) -> int:
    signer = None
    if args.sign:
        key_pair = generate_es256_key_pair()
        signer = ES256Signer(key_pair.private_key_bytes)

    sample = generate_sample(signer)

    if args.validate:
        validate_cose_sign1(sample.encoded)

    if args.format == "raw":
        sys.stdout.buffer.write(sample.encoded)
        sys.stdout.flush()
        return 0
    if args.format == "base64url":
        print(sample.base64url)
        return 0
    if args.format == "hex":
        print(sample.hex)
        return 0

    print("Generated COSE_Sign1 CWT Sample:")
    print("=====================================")
    print("Base64URL:", sample.base64url)
    print()
    print("Hex:", sample.hex)
    print()
    print("Structure:")
    for line in sample.summary:
        print(line)
    if args.sign:
        print()
        print("Public Key (JWK):")
        print(json.dumps(key_pair.public_key_jwk, indent=2))
    return 0


def _cmd_keys(args: argparse.Namespace) -> int:
    es256 = generate_es256_key_pair(kid=args.kid)
    hmac_key = generate_hmac_key(args.hmac_bits)

    if args.json:
        print(json.dumps({"es256": es256.to_dict(), "hmac": hmac_key.to_dict()}, indent=2))
        return 0

    print("Test Keys for CWT Verification")
    print("================================")
    print()
    print("ES256 (ECDSA P-256) Keys:")
    print("----------------------------")
    print("Public Key (PEM):")
    print(es256.public_key_pem)
    print("Public Key (JWK):")
    print(json.dumps(es256.public_key_jwk, indent=2))
    print()
    print("Public Key (Hex):")
    print(es256.public_key_hex)
    print()
    print("Public Key (Base64):")
    print(es256.public_key_base64)
    print()
    print(f"HMAC-SHA256 Secret ({args.hmac_bits} bits):")
    print("----------------------")
    print("Secret (Hex):")
    print(hmac_key.hex)
    print()
    print("Secret (Base64):")
    print(hmac_key.base64)
    print()
    print("Usage Instructions:")
    print("---------------------")
    for line in USAGE_INSTRUCTIONS:
        print(line)
    print()
    print("Note: the sample CWT carries a dummy signature,")
    print("so verification against these keys is expected to fail.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "sample":
            return _cmd_sample(args)
        return _cmd_keys(args)
    except (CBOREncodeError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
