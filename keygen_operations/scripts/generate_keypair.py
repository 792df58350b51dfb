#!/usr/bin/env python3
"""Generate an ssh key pair with ssh-keygen and optionally print it as JSON."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from keygen_operations.lib.config import KeyFormat, KeygenConfig
from keygen_operations.lib.errors import KeygenError
from keygen_operations.lib.keygen import generate_keypair
from keygen_operations.lib.logging_config import LOGGER


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; unset options fall back to config defaults."""
    parser = argparse.ArgumentParser(description="Generate an ssh key pair")
    parser.add_argument(
        "--location",
        type=Path,
        help="Private key path; public key is written next to it with .pub (default: <tmp>/id_rsa)",
    )
    parser.add_argument("--keygen-path", help="ssh-keygen executable (default: ssh-keygen)")
    parser.add_argument("--type", dest="key_type", help="Key type (default: rsa)")
    parser.add_argument("--bits", dest="bit_size", help="Key size in bits (default: 2048)")
    parser.add_argument("--comment", help="Key comment (default: empty)")
    parser.add_argument("--passphrase", help="Key passphrase (default: empty)")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=[f.value for f in KeyFormat],
        help="Key format (default: RFC4716)",
    )
    parser.add_argument(
        "--no-force",
        dest="force",
        action="store_false",
        default=None,
        help="Fail instead of overwriting existing key files",
    )
    parser.add_argument(
        "--no-read",
        dest="read",
        action="store_false",
        default=None,
        help="Leave the keys on disk without printing them",
    )
    parser.add_argument(
        "--destroy",
        action="store_true",
        default=None,
        help="Delete the key files after reading them",
    )
    parser.add_argument("--timeout", type=float, help="Seconds to wait for ssh-keygen")
    return parser


def main() -> int:
    """Generate a key pair from command line options.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args()

    try:
        config = KeygenConfig.from_options(
            {
                "location": args.location,
                "executable_path": args.keygen_path,
                "key_type": args.key_type,
                "bit_size": args.bit_size,
                "comment": args.comment,
                "passphrase": args.passphrase,
                "output_format": args.output_format,
                "read": args.read,
                "force": args.force,
                "destroy": args.destroy,
                "timeout": args.timeout,
            }
        )

        LOGGER.info("Generating %s key pair at %s", config.key_type, config.location)
        result = asyncio.run(generate_keypair(config))

        if result is None:
            LOGGER.info("Key pair written:")
            LOGGER.info("  Key: %s", config.location)
            LOGGER.info("  Public key: %s.pub", config.location)
        else:
            print(json.dumps(result.to_dict(), indent=2))
        return 0

    except ValueError as e:
        LOGGER.error("Invalid options: %s", e)
        return 1
    except KeygenError as e:
        LOGGER.error("Key generation failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
