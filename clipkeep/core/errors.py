"""Typed exception hierarchy for clipkeep."""

from __future__ import annotations


class ClipkeepError(Exception):
    """Base class for all clipkeep errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(ClipkeepError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


# === Analysis errors (recovered inside the decision subsystem) ===


class AnalysisError(ClipkeepError):
    """Base class for failures of the budgeted HTML analysis."""


class AnalysisTimeout(AnalysisError):
    """Analysis ran past its time budget."""

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"Analysis timed out: exceeded {timeout_ms}ms budget")


class ContentTooLarge(AnalysisError):
    """Content exceeds the size ceiling for budgeted analysis."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Content too large: {size:,} bytes exceeds limit of {limit:,} bytes")


# === Capture errors ===


class FormatReadError(ClipkeepError):
    """A clipboard format flagged as available could not be read."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"Failed to read {kind} from clipboard: {reason}")


class StorageError(ClipkeepError):
    """Raised when the history store fails to persist or query a record."""


class DuplicateContentError(StorageError):
    """A record with the same fingerprint already exists.

    This is an expected outcome of a capture cycle, not a failure.
    """

    def __init__(self, fingerprint: str) -> None:
        self.fingerprint = fingerprint
        super().__init__(f"Content already stored (fingerprint {fingerprint[:12]})")
