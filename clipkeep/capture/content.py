"""Text helpers for previews and stored HTML."""

from __future__ import annotations

import re

_HEAD_RE = re.compile(r"<head.*?>.*?</head>", re.IGNORECASE | re.DOTALL)
_META_RE = re.compile(r"<meta.*?>", re.IGNORECASE | re.DOTALL)

# Applied in order
HTML_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&#x60;", "`"),
    ("&#x3D;", "="),
)


def generate_preview(content: str, max_chars: int = 100) -> str:
    """First max_chars characters of content, with '...' when truncated."""
    if len(content) <= max_chars:
        return content
    return content[:max_chars] + "..."


def strip_head_and_meta(html: str) -> str:
    """Drop <head>...</head> and <meta> tags from a full HTML document.

    Clipboard HTML often arrives as a whole document; the head carries
    generator and charset noise that would defeat fingerprint dedup.
    """
    return _META_RE.sub("", _HEAD_RE.sub("", html))


def decode_html_entities(text: str) -> str:
    """Decode the handful of entities clipboard producers commonly emit."""
    for entity, replacement in HTML_ENTITIES:
        text = text.replace(entity, replacement)
    return text
