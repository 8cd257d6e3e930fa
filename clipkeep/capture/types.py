"""Capture cycle types: formats, payload variants, records and outcomes."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from clipkeep.capture.content import generate_preview, strip_head_and_meta
from clipkeep.capture.fingerprint import canonical_file_list, fingerprint
from clipkeep.core.errors import FormatReadError


class ContentKind(Enum):
    """Clipboard formats a capture cycle can persist."""

    FILES = "files"
    IMAGE = "image"
    HTML = "html"
    TEXT = "text"
    RTF = "rtf"


@dataclass(frozen=True)
class AvailableFormats:
    """Which formats the clipboard currently advertises."""

    files: bool = False
    image: bool = False
    html: bool = False
    text: bool = False
    rtf: bool = False

    def has(self, kind: ContentKind) -> bool:
        return bool(getattr(self, kind.value))

    def kinds(self) -> list[ContentKind]:
        """Advertised formats in ContentKind declaration order."""
        return [kind for kind in ContentKind if self.has(kind)]


# === Payload variants (one per format) ===


@dataclass(frozen=True)
class ClipboardPayload:
    """Base for per-format clipboard content.

    Subclasses set `kind` and implement serialize()/preview(). The
    serialized form is what gets stored and fingerprinted.
    """

    kind: ClassVar[ContentKind]

    def serialize(self) -> str:
        raise NotImplementedError

    def preview(self, max_chars: int = 100) -> str:
        raise NotImplementedError

    def is_empty(self) -> bool:
        return not self.serialize()

    def fingerprint(self) -> str:
        return fingerprint(self.serialize())


@dataclass(frozen=True)
class FilesPayload(ClipboardPayload):
    kind: ClassVar[ContentKind] = ContentKind.FILES

    paths: tuple[str, ...] = ()

    def serialize(self) -> str:
        return canonical_file_list(self.paths)

    def is_empty(self) -> bool:
        return not self.paths

    def preview(self, max_chars: int = 100) -> str:
        if len(self.paths) == 1:
            return f"1 file: {self.paths[0]}"
        return f"{len(self.paths)} files"


@dataclass(frozen=True)
class ImagePayload(ClipboardPayload):
    kind: ClassVar[ContentKind] = ContentKind.IMAGE

    encoded: str = ""  # base64 image data

    def serialize(self) -> str:
        return self.encoded

    def preview(self, max_chars: int = 100) -> str:
        return "Image"


@dataclass(frozen=True)
class HtmlPayload(ClipboardPayload):
    kind: ClassVar[ContentKind] = ContentKind.HTML

    markup: str = ""

    def serialize(self) -> str:
        return strip_head_and_meta(self.markup)

    def preview(self, max_chars: int = 100) -> str:
        return "HTML content"


@dataclass(frozen=True)
class TextPayload(ClipboardPayload):
    kind: ClassVar[ContentKind] = ContentKind.TEXT

    text: str = ""

    def serialize(self) -> str:
        return self.text

    def preview(self, max_chars: int = 100) -> str:
        return generate_preview(self.text, max_chars)


@dataclass(frozen=True)
class RtfPayload(ClipboardPayload):
    kind: ClassVar[ContentKind] = ContentKind.RTF

    rtf: str = ""

    def serialize(self) -> str:
        return self.rtf

    def preview(self, max_chars: int = 100) -> str:
        return "RTF text"


# === Records and outcomes ===


@dataclass(frozen=True)
class ProducerAttribution:
    """The application that owned the clipboard when it changed."""

    name: str | None = None
    bundle_id: str | None = None


@dataclass(frozen=True)
class ContentRecord:
    """A history entry ready for the storage sink. Never mutated."""

    kind: ContentKind
    content: str
    fingerprint: str
    preview: str
    timestamp: float = field(default_factory=time.time)  # Unix timestamp
    producer: ProducerAttribution | None = None

    @classmethod
    def from_payload(
        cls,
        payload: ClipboardPayload,
        *,
        producer: ProducerAttribution | None = None,
        preview_chars: int = 100,
    ) -> ContentRecord:
        """Serialize, fingerprint and preview a payload.

        Raises:
            FormatReadError: The content is not valid Unicode (e.g. lone
                surrogates from a broken clipboard owner).
        """
        content = payload.serialize()
        try:
            content.encode("utf-8")
        except UnicodeEncodeError as e:
            raise FormatReadError(payload.kind.value, "content is not valid UTF-8") from e
        return cls(
            kind=payload.kind,
            content=content,
            fingerprint=fingerprint(content),
            preview=payload.preview(preview_chars),
            producer=producer,
        )


@dataclass(frozen=True)
class CaptureOutcome:
    """Result of one capture cycle.

    Attributes:
        persisted: True only if a new record was stored.
        kind: Format that was chosen, or None if nothing was usable.
        record_id: Storage id of the new record.
        fingerprint: Fingerprint of the chosen content.
        duplicate: True if the chosen content was already stored.
    """

    persisted: bool
    kind: ContentKind | None = None
    record_id: int | None = None
    fingerprint: str | None = None
    duplicate: bool = False
