"""Constant-time-ish HTML-vs-text decision for when the budget runs out."""

from __future__ import annotations

from clipkeep.analysis import rules


def fallback_decision(html: str, text: str) -> tuple[bool, str]:
    """Decide without scoring, using only a few substring checks.

    Used after a timeout or an oversize payload. Only rich media keeps
    the HTML; everything else falls back to text.

    Returns:
        Tuple of (prefer_html, reason).
    """
    html_lower = html.lower()

    if rules.first_marker(html_lower, rules.FALLBACK_RICH_MEDIA) is not None:
        return True, "rich_media"

    for marker in rules.FALLBACK_TEXT_MARKERS:
        if marker.pattern in html_lower:
            return False, f"{marker.category.value}_marker"

    if len(html) > len(text) * rules.FALLBACK_MAX_LENGTH_RATIO:
        return False, "length_ratio"

    return False, "default_text"
