"""clipkeep - clipboard history capture with HTML/text classification and dedup."""

__version__ = "0.1.0"
