"""The capture cycle: one clipboard change in, at most one record out."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from clipkeep.analysis.analyzer import HtmlAnalyzer
from clipkeep.capture.interfaces import (
    ClipboardSource,
    ProducerAttributionSource,
    StorageSink,
)
from clipkeep.capture.prioritizer import FormatPrioritizer
from clipkeep.capture.snapshot import ClipboardSnapshot
from clipkeep.capture.types import CaptureOutcome, ContentRecord, ProducerAttribution
from clipkeep.core.errors import DuplicateContentError, FormatReadError, StorageError

logger = logging.getLogger(__name__)

PersistedCallback = Callable[[ContentRecord, int], None]


class CapturePipeline:
    """Turns clipboard change events into history records.

    Cycles are single-flight: a change is not classified while the
    previous one is still being processed.

    Example:
        pipeline = CapturePipeline(source, HistoryStorage(db_path), HtmlAnalyzer())
        pipeline.on_persisted(lambda record, record_id: refresh_ui())
        pipeline.process_event()  # call from the clipboard-change listener
    """

    def __init__(
        self,
        source: ClipboardSource,
        sink: StorageSink,
        analyzer: HtmlAnalyzer,
        *,
        attribution: ProducerAttributionSource | None = None,
        preview_chars: int = 100,
    ) -> None:
        self._source = source
        self._sink = sink
        self._prioritizer = FormatPrioritizer(analyzer)
        self._attribution = attribution
        self._preview_chars = preview_chars
        self._lock = threading.Lock()
        self._callbacks: list[PersistedCallback] = []

    def on_persisted(self, callback: PersistedCallback) -> None:
        """Register a callback invoked after a new record is stored."""
        self._callbacks.append(callback)

    def process_event(self) -> CaptureOutcome | None:
        """Handle a change event, logging storage failures instead of raising.

        Returns:
            The cycle outcome, or None if the cycle was abandoned.
        """
        try:
            return self.handle_change()
        except StorageError as e:
            logger.error("Clipboard change not captured: %s", e.message)
            return None

    def handle_change(self) -> CaptureOutcome:
        """Run one capture cycle.

        Raises:
            StorageError: The sink failed for a reason other than a duplicate.
        """
        with self._lock:
            snapshot = ClipboardSnapshot.capture(self._source)
            producer = self._resolve_producer()

            for kind in self._prioritizer.prioritize(snapshot):
                payload = snapshot.read(kind)
                if payload is None or payload.is_empty():
                    continue

                try:
                    record = ContentRecord.from_payload(
                        payload, producer=producer, preview_chars=self._preview_chars
                    )
                except FormatReadError as e:
                    logger.debug("Skipping %s this cycle: %s", kind.value, e.reason)
                    continue

                try:
                    record_id = self._sink.insert(record)
                except DuplicateContentError:
                    logger.debug("Duplicate %s content, skipped", kind.value)
                    return CaptureOutcome(
                        persisted=False,
                        kind=kind,
                        fingerprint=record.fingerprint,
                        duplicate=True,
                    )

                logger.info("Saved %s record %d", kind.value, record_id)
                self._notify(record, record_id)
                return CaptureOutcome(
                    persisted=True,
                    kind=kind,
                    record_id=record_id,
                    fingerprint=record.fingerprint,
                )

            logger.debug("No clipboard data was saved")
            return CaptureOutcome(persisted=False)

    def _resolve_producer(self) -> ProducerAttribution | None:
        if self._attribution is None:
            return None
        try:
            return self._attribution.current_producer()
        except Exception as e:
            # Attribution is decoration; never lose a capture over it
            logger.debug("Producer lookup failed: %s", e)
            return None

    def _notify(self, record: ContentRecord, record_id: int) -> None:
        for callback in self._callbacks:
            try:
                callback(record, record_id)
            except Exception as e:
                logger.warning("Persisted-record callback failed: %s", e)
