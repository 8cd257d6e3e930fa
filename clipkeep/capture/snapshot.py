"""Per-change view of the clipboard with lazy, memoized reads."""

from __future__ import annotations

import logging
from collections.abc import Callable

from clipkeep.capture.interfaces import ClipboardSource
from clipkeep.capture.types import (
    AvailableFormats,
    ClipboardPayload,
    ContentKind,
    FilesPayload,
    HtmlPayload,
    ImagePayload,
    RtfPayload,
    TextPayload,
)
from clipkeep.core.errors import FormatReadError

logger = logging.getLogger(__name__)


def _readers(source: ClipboardSource) -> dict[ContentKind, Callable[[], ClipboardPayload]]:
    return {
        ContentKind.FILES: lambda: FilesPayload(paths=tuple(source.read_files())),
        ContentKind.IMAGE: lambda: ImagePayload(encoded=source.read_image_base64()),
        ContentKind.HTML: lambda: HtmlPayload(markup=source.read_html()),
        ContentKind.TEXT: lambda: TextPayload(text=source.read_text()),
        ContentKind.RTF: lambda: RtfPayload(rtf=source.read_rtf()),
    }


class ClipboardSnapshot:
    """Available formats plus lazily-read content for one clipboard change.

    Each format is read at most once; a failed read is remembered as
    "unavailable this cycle". Owned by a single capture cycle and then
    discarded.
    """

    def __init__(self, source: ClipboardSource, available: AvailableFormats) -> None:
        self._available = available
        self._readers = _readers(source)
        self._cache: dict[ContentKind, ClipboardPayload | None] = {}

    @classmethod
    def capture(cls, source: ClipboardSource) -> ClipboardSnapshot:
        """Snapshot the formats the source currently advertises.

        A clipboard that cannot be queried (locked by another process)
        yields a snapshot with nothing available.
        """
        try:
            available = source.available_formats()
        except (FormatReadError, OSError) as e:
            logger.warning("Could not query clipboard formats: %s", e)
            available = AvailableFormats()
        return cls(source, available)

    @property
    def available(self) -> AvailableFormats:
        return self._available

    def read(self, kind: ContentKind) -> ClipboardPayload | None:
        """Read a format, or None if it is not advertised or the read failed."""
        if not self._available.has(kind):
            return None
        if kind not in self._cache:
            self._cache[kind] = self._read(kind)
        return self._cache[kind]

    def _read(self, kind: ContentKind) -> ClipboardPayload | None:
        try:
            return self._readers[kind]()
        except FormatReadError as e:
            logger.debug("Skipping %s this cycle: %s", kind.value, e.reason)
        except OSError as e:
            logger.debug("Skipping %s this cycle: %s", kind.value, e)
        return None
