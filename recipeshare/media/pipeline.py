"""
Media ingest and retrieval pipelines.

    upload → validate → hex            (ingest, before persistence)
    bytea text → hex decode → legacy normalize → base64   (retrieve)

Ingest errors propagate to the caller. Retrieval errors never do: each
field of each record gets its own MediaResult, and failures are logged
and shown as null.
"""

from __future__ import annotations

import base64
import logging
import os
from typing import Iterable, List, Optional, Tuple

from recipeshare import config
from recipeshare.media.errors import MediaError, RetrievalFailure, ValidationError
from recipeshare.media.hex_codec import decode_hex, encode_hex
from recipeshare.media.legacy import normalize
from recipeshare.media.models import FIELD_FOR_KIND, MEDIA_KINDS, MediaResult, MediaUpload, StoredMedia

# Declared MIME type → format tag
MIME_TYPES = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/pjpeg": "JPEG",
    "image/png": "PNG",
    "application/msword": "DOC",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "DOCX",
    "text/plain": "TXT",
}

# File extension → format tag, used when the MIME type is missing/generic
EXTENSIONS = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "doc": "DOC",
    "docx": "DOCX",
    "txt": "TXT",
}

# MIME types that say nothing about the format
GENERIC_MIME_TYPES = {"application/octet-stream"}

ALLOWED_TYPES = {
    "image": {"JPEG", "PNG"},
    "document": {"DOC", "DOCX", "TXT"},
}


# ================================
# INGEST
# ================================
def declared_type(filename: str, content_type: Optional[str]) -> Optional[str]:
    """
    Derive the format tag ("PNG", "DOCX", ...) from the MIME type. The file
    extension is only consulted when the MIME type is missing or generic;
    any other unrecognised MIME type gives None.
    """
    if content_type:
        mime = content_type.split(";", 1)[0].strip().lower()
        if mime in MIME_TYPES:
            return MIME_TYPES[mime]
        if mime not in GENERIC_MIME_TYPES:
            return None

    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    return EXTENSIONS.get(ext)


def ingest(
    upload: Optional[MediaUpload],
    kind: str,
    max_bytes: Optional[int] = None,
) -> StoredMedia:
    """
    Validate one uploaded file and produce its storage encoding.

    Args:
        upload: The received file, or None if the form field was missing.
        kind: "image" or "document".
        max_bytes: Size cap; defaults to config.max_upload_bytes().

    Raises:
        ValidationError: naming the form field and the broken constraint.
    """
    if kind not in MEDIA_KINDS:
        raise ValueError(f"Unknown media kind: {kind!r}")

    field = FIELD_FOR_KIND[kind]
    limit = config.max_upload_bytes() if max_bytes is None else max_bytes

    # A part without a file name is an empty file input; zero-byte files are valid.
    if upload is None or not upload.filename:
        raise ValidationError(field, "required", f"{field} file is required")

    if upload.size > limit:
        raise ValidationError(
            field,
            "max_size",
            f"{field} is {upload.size} bytes; the limit is {limit} bytes",
        )

    fmt = declared_type(upload.filename, upload.content_type)
    allowed = ALLOWED_TYPES[kind]
    if fmt not in allowed:
        raise ValidationError(
            field,
            "type",
            f"{field} must be one of {', '.join(sorted(allowed))} "
            f"(got {upload.content_type or 'unknown type'})",
        )

    return StoredMedia(
        encoded=encode_hex(upload.data),
        file_name=upload.filename or "",
        declared_type=fmt,
    )


# ================================
# RETRIEVE
# ================================
def decode_stored(encoded: Optional[str]) -> MediaResult:
    """
    Storage text → base64, as an explicit result. Never raises.

    Absent media (None or empty) is a success with value None.
    """
    if not encoded:
        return MediaResult.success(None)

    try:
        raw = normalize(decode_hex(encoded))
        return MediaResult.success(base64.b64encode(raw).decode("ascii"))
    except MediaError as e:
        return MediaResult.failure(RetrievalFailure(str(e)))
    except Exception as e:  # noqa: BLE001
        return MediaResult.failure(RetrievalFailure(f"{type(e).__name__}: {e}"))


def retrieve(
    encoded: Optional[str],
    record_id: Optional[str | int] = None,
    label: Optional[str] = None,
    field: str = "image_data",
) -> Optional[str]:
    """
    Storage text → base64, or None.

    Failures are logged with the record id and label so the broken row can
    be found, then rendered as absent media.
    """
    result = decode_stored(encoded)
    if not result.ok:
        failure = result.error.with_context(field, record_id, label)
        logging.error("[MEDIA ERROR] could not decode %s: %s", field, failure)
        return None
    return result.value


def retrieve_batch(
    items: Iterable[Tuple[Optional[str | int], Optional[str], Optional[str]]],
    field: str = "image_data",
) -> List[Optional[str]]:
    """
    Retrieve many (record_id, label, encoded) items. One broken item yields
    None in its slot and does not affect the others.
    """
    return [
        retrieve(encoded, record_id=record_id, label=label, field=field)
        for record_id, label, encoded in items
    ]
