"""Clipboard capture: format priority, fingerprints and the capture cycle.

The composition root lives in clipkeep.capture.bootstrap and is imported
from there directly.
"""

from clipkeep.capture.fingerprint import canonical_file_list, fingerprint
from clipkeep.capture.pipeline import CapturePipeline
from clipkeep.capture.prioritizer import FormatPrioritizer
from clipkeep.capture.snapshot import ClipboardSnapshot
from clipkeep.capture.types import (
    AvailableFormats,
    CaptureOutcome,
    ClipboardPayload,
    ContentKind,
    ContentRecord,
    FilesPayload,
    HtmlPayload,
    ImagePayload,
    ProducerAttribution,
    RtfPayload,
    TextPayload,
)

__all__ = [
    "AvailableFormats",
    "CaptureOutcome",
    "CapturePipeline",
    "ClipboardPayload",
    "ClipboardSnapshot",
    "ContentKind",
    "ContentRecord",
    "FilesPayload",
    "FormatPrioritizer",
    "HtmlPayload",
    "ImagePayload",
    "ProducerAttribution",
    "RtfPayload",
    "TextPayload",
    "canonical_file_list",
    "fingerprint",
]
