"""Core errors and paths shared across clipkeep."""

from clipkeep.core.errors import (
    AnalysisError,
    AnalysisTimeout,
    ClipkeepError,
    ConfigError,
    ContentTooLarge,
    DuplicateContentError,
    FormatReadError,
    StorageError,
)

__all__ = [
    "AnalysisError",
    "AnalysisTimeout",
    "ClipkeepError",
    "ConfigError",
    "ContentTooLarge",
    "DuplicateContentError",
    "FormatReadError",
    "StorageError",
]
