"""Collaborator interfaces (protocols) for the capture pipeline.

The OS clipboard, the history database and frontmost-app lookup live
outside clipkeep's core. Using Protocols lets any object with the right
methods plug in without inheriting from a clipkeep class.
"""

from typing import Protocol

from clipkeep.capture.types import AvailableFormats, ContentRecord, ProducerAttribution


class ClipboardSource(Protocol):
    """Platform clipboard access.

    Each read may fail independently. A failed read raises FormatReadError
    (OSError is treated the same way) and only excludes that format from
    the current cycle.

    Example:
        class StaticClipboard:
            def __init__(self, text: str) -> None:
                self._text = text

            def available_formats(self) -> AvailableFormats:
                return AvailableFormats(text=True)

            def read_text(self) -> str:
                return self._text
            ...
    """

    def available_formats(self) -> AvailableFormats:
        """Formats advertised by the current clipboard contents."""
        ...

    def read_text(self) -> str:
        ...

    def read_html(self) -> str:
        ...

    def read_rtf(self) -> str:
        ...

    def read_image_base64(self) -> str:
        """Image content as an encoded (base64) string."""
        ...

    def read_files(self) -> list[str]:
        """Paths of copied files, in clipboard order."""
        ...


class StorageSink(Protocol):
    """Persists content records and enforces fingerprint uniqueness."""

    def insert(self, record: ContentRecord) -> int:
        """Store a record.

        Returns:
            The new record id.

        Raises:
            DuplicateContentError: A record with the same fingerprint exists.
            StorageError: Any other storage failure.
        """
        ...


class ProducerAttributionSource(Protocol):
    """Resolves the application that owns the clipboard."""

    def current_producer(self) -> ProducerAttribution | None:
        ...
