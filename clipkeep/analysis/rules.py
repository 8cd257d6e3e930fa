"""Declarative markup tables and the evaluator that scores them.

Every substring heuristic used by the analysis lives here as data. The
scanning code in features.py, scoring.py and fallback.py only walks these
tables, so tuning a weight or adding a marker never touches control flow.
All patterns are matched against lower-cased HTML.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from clipkeep.analysis.types import ProducerKind

if TYPE_CHECKING:
    from clipkeep.analysis.budget import PerformanceBudget


@dataclass(frozen=True)
class MarkerRule:
    """A literal substring that contributes a weight when present."""

    pattern: str
    weight: float
    category: ProducerKind


# --- Redundancy indicators (additive, each counted once) ---

REDUNDANCY_INDICATORS: tuple[MarkerRule, ...] = (
    MarkerRule("mso-", 3.0, ProducerKind.OFFICE_SUITE),
    MarkerRule("microsoft", 2.5, ProducerKind.OFFICE_SUITE),
    MarkerRule("office", 2.5, ProducerKind.OFFICE_SUITE),
    MarkerRule("xmlns:o=", 3.5, ProducerKind.OFFICE_SUITE),
    MarkerRule("<!--[if", 3.5, ProducerKind.OFFICE_SUITE),
    MarkerRule("apple-converted-space", 2.5, ProducerKind.NATIVE_ECOSYSTEM),
    MarkerRule("webkit-", 2.0, ProducerKind.NATIVE_ECOSYSTEM),
    MarkerRule("chatgpt", 3.0, ProducerKind.CHAT_ASSISTANT),
    MarkerRule("conversation-turn", 4.0, ProducerKind.CHAT_ASSISTANT),
    MarkerRule('data-testid="conversation', 4.0, ProducerKind.CHAT_ASSISTANT),
)

# --- Producer fingerprints, checked in order; first family with a hit wins ---

PRODUCER_SIGNATURES: tuple[tuple[ProducerKind, tuple[str, ...]], ...] = (
    (ProducerKind.CHAT_ASSISTANT, ('data-testid="conversation-turn', "markdown prose w-full")),
    (ProducerKind.OFFICE_SUITE, ("mso-", "xmlns:o=", "<!--[if")),
    (ProducerKind.NATIVE_ECOSYSTEM, ("apple-converted-space", "webkit-")),
)

# Markup fingerprints are a coarse signal; every match gets the same confidence.
PRODUCER_MATCH_CONFIDENCE = 0.8

# (bonus inside the redundancy helper, bonus at the call site)
PRODUCER_BONUS: dict[ProducerKind, tuple[float, float]] = {
    ProducerKind.CHAT_ASSISTANT: (2.0, 3.0),
    ProducerKind.OFFICE_SUITE: (1.5, 2.5),
    ProducerKind.NATIVE_ECOSYSTEM: (1.0, 1.5),
    ProducerKind.UNKNOWN: (0.5, 1.0),
}

# --- Feature tag sets ---

RICH_MEDIA_TAGS: tuple[str, ...] = (
    "<img", "<video", "<audio", "<iframe", "<embed", "<object", "<canvas", "<svg",
)
STRUCTURE_TAGS: tuple[str, ...] = (
    "<table", "<ul", "<ol", "<dl", "<nav", "<section", "<article",
)
LINK_OPENING = "<a "
MULTIPLE_LINKS_THRESHOLD = 2
MEANINGFUL_STYLES: tuple[str, ...] = (
    "background-color:", "border:", "margin:", "padding:", "color:", "font-weight:",
)

# --- Value score weights ---

VALUE_RICH_CONTENT = 4.0
VALUE_COMPLEX_STRUCTURE = 3.0
VALUE_MULTIPLE_LINKS = 2.0
VALUE_MEANINGFUL_STYLING = 2.0
VALUE_LOW_SIMILARITY = 1.0
LOW_SIMILARITY_BELOW = 0.7

# --- Similarity-driven redundancy (cumulative) ---

SIMILARITY_REDUNDANCY_STEPS: tuple[tuple[float, float], ...] = (
    (0.8, 2.0),  # similarity > 0.8 -> +2.0
    (0.95, 3.0),  # similarity > 0.95 -> +3.0 more
)

SCORE_CEILING = 10.0

# --- Constant-time fallback markers ---

FALLBACK_RICH_MEDIA: tuple[str, ...] = ("<img", "<video", "<audio")
FALLBACK_TEXT_MARKERS: tuple[MarkerRule, ...] = (
    MarkerRule('data-testid="conversation', 0.0, ProducerKind.CHAT_ASSISTANT),
    MarkerRule("chatgpt", 0.0, ProducerKind.CHAT_ASSISTANT),
    MarkerRule("mso-", 0.0, ProducerKind.OFFICE_SUITE),
    MarkerRule("xmlns:o=", 0.0, ProducerKind.OFFICE_SUITE),
)
FALLBACK_MAX_LENGTH_RATIO = 3


def evaluate_markers(
    html_lower: str,
    rules: tuple[MarkerRule, ...],
    budget: PerformanceBudget | None = None,
) -> tuple[float, list[MarkerRule]]:
    """Sum the weights of every rule whose pattern occurs in the HTML.

    The budget is polled after each rule, never in the middle of a
    substring search.

    Returns:
        Tuple of (total weight, rules that matched, in table order).
    """
    total = 0.0
    matched: list[MarkerRule] = []
    for rule in rules:
        if rule.pattern in html_lower:
            total += rule.weight
            matched.append(rule)
        if budget is not None:
            budget.check_timeout()
    return total, matched


def first_marker(html_lower: str, patterns: tuple[str, ...]) -> str | None:
    """Return the first pattern found in the HTML, or None."""
    for pattern in patterns:
        if pattern in html_lower:
            return pattern
    return None
