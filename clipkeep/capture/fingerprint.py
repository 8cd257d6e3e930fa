"""Content fingerprints used as the history dedup key."""

from __future__ import annotations

import hashlib
import json

FINGERPRINT_HEX_LENGTH = 64


def fingerprint(content: str | bytes) -> str:
    """SHA-256 hex digest of content (strings are hashed as UTF-8).

    Deterministic across processes: equal content always yields the same
    64-character lowercase hex string.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def canonical_file_list(paths: list[str] | tuple[str, ...]) -> str:
    """Canonical serialization of a file list: compact JSON, order preserved.

    File lists are fingerprinted through this form, never as a Python list.
    """
    return json.dumps(list(paths), ensure_ascii=False, separators=(",", ":"))
