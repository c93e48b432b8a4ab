from __future__ import annotations

from typing import Optional


class MediaError(Exception):
    """Base class for everything the media package raises or reports."""


class ValidationError(MediaError):
    """
    An upload broke a size/type/presence rule before any encoding happened.

    Always caller-correctable; the API turns it into a 400 naming `field`.

    Fields:
        field: Form field name ("image_data" / "doc_data").
        constraint: "required", "max_size" or "type".
    """

    def __init__(self, field: str, constraint: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.constraint = constraint
        self.message = message


class FormatError(MediaError):
    """Stored text is not a valid `\\x`-prefixed hex string."""


class RetrievalFailure(MediaError):
    """
    Describes why one media field of one record could not be decoded.

    Not raised across the pipeline boundary: it travels inside a
    MediaResult and ends up logged, with the field rendered as null.
    """

    def __init__(
        self,
        reason: str,
        field: Optional[str] = None,
        record_id: Optional[str | int] = None,
        label: Optional[str] = None,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.field = field
        self.record_id = record_id
        self.label = label

    def with_context(
        self,
        field: Optional[str],
        record_id: Optional[str | int],
        label: Optional[str],
    ) -> "RetrievalFailure":
        return RetrievalFailure(self.reason, field=field, record_id=record_id, label=label)

    def __str__(self) -> str:
        return (
            f"{self.reason} (field={self.field!r}, "
            f"record_id={self.record_id!r}, label={self.label!r})"
        )
