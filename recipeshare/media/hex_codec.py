"""
Storage encoding for `bytea` columns.

Postgres (and PostgREST) exchange byte strings as text in hex format:
a literal backslash-x followed by two hex digits per byte.
"""

from __future__ import annotations

import binascii

from recipeshare.media.errors import FormatError

STORAGE_PREFIX = "\\x"


def encode_hex(data: bytes) -> str:
    """
    Encode raw bytes as `\\x` + lowercase hex. Empty input gives `\\x`.
    """
    return STORAGE_PREFIX + bytes(data).hex()


def decode_hex(text: str) -> bytes:
    """
    Decode a `\\x`-prefixed hex string back to raw bytes.

    Raises:
        FormatError: missing prefix, odd length, or any non-hex character
        (whitespace included).
    """
    if not isinstance(text, str):
        raise FormatError(f"Expected str, got {type(text).__name__}")

    if not text.startswith(STORAGE_PREFIX):
        raise FormatError("Stored value is missing the \\x prefix")

    digits = text[len(STORAGE_PREFIX):]
    if len(digits) % 2:
        raise FormatError(f"Odd-length hex payload ({len(digits)} digits)")

    try:
        return binascii.unhexlify(digits)
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"Invalid hex payload: {e}") from e
