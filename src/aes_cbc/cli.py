"""Command-line interface for the AES-256-CBC cipher."""

from __future__ import annotations

import json
import logging
import random
import secrets
import sys

import click

from . import DEFAULT_KEY_HEX, DEFAULT_PT_HEX, __version__
from .cbc import cbc_decrypt_blocks, cbc_encrypt_blocks, decrypt_message, encrypt_message, pad
from .codec import AES256CBC
from .config import CipherConfig
from .engine import encrypt_block
from .errors import BlockLengthMismatch, CipherError
from .golden import (
    FIPS_197_TEST_VECTORS,
    SP800_38A_CBC_VECTOR,
    golden_encrypt_block,
    validate_against_golden,
)
from .key_schedule import KEY_SIZE, key_expansion
from .key_source import KEY_SOURCES
from .trace import TraceRecorder, print_header, print_result, print_state
from .utils import BLOCK_SIZE, bytes_to_hex, bytes_to_state, hex_to_bytes

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="aes-cbc")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level (default: WARNING)",
)
def main(log_level: str) -> None:
    """AES-256-CBC payload cipher.

    Encrypt text with a fresh key and IV, decrypt with an explicit key
    and IV, and validate the cipher against reference vectors.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("message")
@click.option(
    "--key-source",
    type=click.Choice(sorted(KEY_SOURCES)),
    default="timestamp",
    help="How the key is generated (default: timestamp)",
)
@click.option(
    "--verify",
    is_flag=True,
    help="Cross-check the ciphertext against PyCryptodome",
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print key, IV and ciphertext as JSON",
)
def encrypt(message: str, key_source: str, verify: bool, as_json: bool) -> None:
    """Encrypt MESSAGE with a freshly generated key and IV."""
    try:
        cipher = AES256CBC(config=CipherConfig(key_source=key_source, verify_blocks=verify))
        ciphertext = cipher.encrypt(message)
        logger.debug("Encrypted %d characters with %s key source", len(message), key_source)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "key": cipher.key_hex,
            "iv": cipher.iv_hex,
            "ciphertext": ciphertext,
        }))
    else:
        click.echo(f"Key:        {cipher.key_hex}")
        click.echo(f"IV:         {cipher.iv_hex}")
        click.echo(f"Ciphertext: {ciphertext}")


@main.command()
@click.argument("ciphertext")
@click.option("--key", required=True, help="Key as 64 hex chars")
@click.option("--iv", required=True, help="IV as 32 hex chars")
def decrypt(ciphertext: str, key: str, iv: str) -> None:
    """Decrypt hex CIPHERTEXT with the given key and IV."""
    try:
        plaintext = AES256CBC(config=CipherConfig(key_source="random")).decrypt(key, iv, ciphertext)
    except CipherError as e:
        click.echo(f"Error: {e.__class__.__name__}: {e}", err=True)
        sys.exit(1)
    click.echo(plaintext)


@main.command()
@click.option(
    "--n",
    "num_tests",
    type=int,
    default=100,
    help="Number of random payloads (default: 100)",
)
@click.option(
    "--max-len",
    type=int,
    default=100,
    help="Maximum random payload length in bytes (default: 100)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducibility",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output",
)
def validate(num_tests: int, max_len: int, seed: int | None, verbose: bool) -> None:
    """Validate the cipher against FIPS-197, SP 800-38A and random tests."""
    failures = 0

    click.echo("Running FIPS-197 KAT tests...")
    for i, vec in enumerate(FIPS_197_TEST_VECTORS):
        result = encrypt_block(vec["plaintext"], key_expansion(vec["key"]))
        if result == vec["ciphertext"]:
            if verbose:
                click.echo(f"  FIPS test {i+1}: PASS")
        else:
            failures += 1
            click.echo(
                f"  FIPS test {i+1}: FAIL - expected {vec['ciphertext'].hex()}, "
                f"got {result.hex()}"
            )

    click.echo("Running SP 800-38A CBC-AES256 test...")
    vec = SP800_38A_CBC_VECTOR
    ct = cbc_encrypt_blocks(vec["key"], vec["iv"], vec["plaintext"])
    pt = cbc_decrypt_blocks(vec["key"], vec["iv"], vec["ciphertext"])
    if ct != vec["ciphertext"] or pt != vec["plaintext"]:
        failures += 1
        click.echo("  SP 800-38A: FAIL")
    elif verbose:
        click.echo("  SP 800-38A: PASS")

    click.echo(f"\nRunning {num_tests} random tests...")
    if seed is not None:
        rng = random.Random(seed)
        random_bytes = lambda n: bytes(rng.randint(0, 255) for _ in range(n))
        random_len = lambda: rng.randint(0, max_len)
    else:
        random_bytes = secrets.token_bytes
        random_len = lambda: secrets.randbelow(max_len + 1)

    random_passed = 0
    for i in range(num_tests):
        key = random_bytes(KEY_SIZE)
        iv = random_bytes(BLOCK_SIZE)
        message = random_bytes(random_len())

        ciphertext = encrypt_message(key, iv, message)
        correct, error_detail = validate_against_golden(key, iv, pad(message), ciphertext)
        if correct and decrypt_message(key, iv, ciphertext) != message:
            correct, error_detail = False, "Round trip mismatch"

        if correct:
            random_passed += 1
        else:
            failures += 1
            if verbose:
                click.echo(f"  Random test {i+1}: FAIL - {error_detail}")

    click.echo(f"Random tests: {random_passed}/{num_tests} passed")

    click.echo("")
    if failures == 0:
        click.echo("VALIDATION PASSED")
        sys.exit(0)
    else:
        click.echo(f"VALIDATION FAILED: {failures} failures")
        sys.exit(1)


@main.command()
@click.option("--key", default=DEFAULT_KEY_HEX, help="Key as 64 hex chars (default: FIPS-197 C.3)")
@click.option("--pt", default=DEFAULT_PT_HEX, help="Plaintext block as 32 hex chars (default: FIPS-197 C.3)")
@click.option(
    "--trace-file",
    type=click.File("w"),
    default=None,
    help="Write a JSON Lines trace to this file",
)
def trace(key: str, pt: str, trace_file) -> None:
    """Print the state after every round operation for one block."""
    try:
        key_bytes = hex_to_bytes(key)
        plaintext = hex_to_bytes(pt)
        round_keys = key_expansion(key_bytes)
        if len(plaintext) != BLOCK_SIZE:
            raise BlockLengthMismatch(f"Plaintext must be 32 hex chars (16 bytes), got {len(pt)} chars")
    except CipherError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    print_header("AES-256 Encryption Trace")
    click.echo(f"Key:       {key}")
    click.echo(f"Plaintext: {pt}")
    print_state("Input state", bytes_to_state(plaintext))

    tracer = TraceRecorder(verbose=True, trace_file=trace_file)
    ciphertext = encrypt_block(plaintext, round_keys, tracer)
    passed = ciphertext == golden_encrypt_block(key_bytes, plaintext)
    print_result(bytes_to_hex(ciphertext), passed)


if __name__ == "__main__":
    main()
