"""
Binary media codec for recipe images and documents.

- hex_codec: raw bytes ↔ `\\x`-prefixed hex (bytea storage encoding)
- legacy: unwraps the old JSON Buffer wrapper found in some rows
- pipeline: upload → storage text (ingest), storage text → base64 (retrieve)

Nothing in this package talks to Flask or Supabase.
"""

from .errors import FormatError, MediaError, RetrievalFailure, ValidationError
from .models import MediaResult, MediaUpload, StoredMedia
from .pipeline import decode_stored, ingest, retrieve, retrieve_batch

__all__ = [
    "FormatError",
    "MediaError",
    "RetrievalFailure",
    "ValidationError",
    "MediaResult",
    "MediaUpload",
    "StoredMedia",
    "decode_stored",
    "ingest",
    "retrieve",
    "retrieve_batch",
]
