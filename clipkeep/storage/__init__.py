"""Clipboard history persistence."""

from clipkeep.storage.history import HistoryStorage

__all__ = ["HistoryStorage"]
