from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from recipeshare.media.errors import RetrievalFailure

MEDIA_KINDS = ("image", "document")

# Form field carrying each media kind on create, and the key it is
# returned under in list/detail responses.
FIELD_FOR_KIND = {
    "image": "image_data",
    "document": "doc_data",
}


@dataclass
class MediaUpload:
    """
    One file received from a multipart form.

    Fields:
        filename: Original client file name (may be empty).
        content_type: Declared MIME type, e.g. "image/png".
        data: Raw bytes of the file.
        size: Reported size in bytes. Defaults to len(data).
    """

    filename: str
    content_type: Optional[str]
    data: bytes
    size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.size is None:
            self.size = len(self.data)


@dataclass(frozen=True)
class StoredMedia:
    """
    Storage-ready output of ingest.

    `encoded` goes into the bytea column; `file_name` and `declared_type`
    are persisted next to it as plain metadata.
    """

    encoded: str
    file_name: str
    declared_type: str


@dataclass(frozen=True)
class MediaResult:
    """
    Outcome of decoding one stored media field.

    Exactly one of `value` (base64 text) or `error` is set, except for the
    absent-media case where both are None.
    """

    value: Optional[str] = None
    error: Optional[RetrievalFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[str]) -> "MediaResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: RetrievalFailure) -> "MediaResult":
        return cls(error=error)

    def unwrap_or_none(self) -> Optional[str]:
        return self.value if self.ok else None
