"""
Read-side tolerance for the legacy storage shape.

An earlier ingestion path wrote the JSON serialization of a byte-array
wrapper, `{"type": "Buffer", "data": [137, 80, ...]}`, into the bytea column
instead of the bytes themselves. Those rows are still in the database and
are never rewritten; they are recognised here, at read time, by content
alone. There is no version tag, so a binary payload that happens to be
exactly such a JSON document would be misread. That is accepted.
"""

from __future__ import annotations

import json
import logging

from recipeshare.validator import matches_schema

_JSON_WHITESPACE = b" \t\n\r"


def is_legacy_wrapper(value: object) -> bool:
    """True if a parsed JSON value has the Buffer wrapper shape."""
    return matches_schema("legacy_buffer", value)


def normalize(data: bytes) -> bytes:
    """
    Return the raw bytes behind `data`.

    If `data` is UTF-8 JSON for a Buffer wrapper, rebuild the bytes from its
    `data` list; in every other case return `data` unchanged. Never raises.
    """
    # Only a JSON object can be a wrapper; skip decoding real binaries.
    if not data.lstrip(_JSON_WHITESPACE).startswith(b"{"):
        return data

    try:
        parsed = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError):
        return data

    if not is_legacy_wrapper(parsed):
        return data

    logging.info("[LEGACY MEDIA] unwrapped %d-byte Buffer wrapper", len(parsed["data"]))
    return bytes(int(v) for v in parsed["data"])
