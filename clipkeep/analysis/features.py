"""HTML feature extraction and producer fingerprinting."""

from __future__ import annotations

from clipkeep.analysis import rules
from clipkeep.analysis.budget import PerformanceBudget
from clipkeep.analysis.types import DetectedProducer, HtmlFeatures


def extract_features(html_lower: str, budget: PerformanceBudget) -> HtmlFeatures:
    """Detect rich media, structure, link density and inline styling.

    The budget is checked between feature groups.
    """
    budget.check_timeout()
    has_rich_content = rules.first_marker(html_lower, rules.RICH_MEDIA_TAGS) is not None

    budget.check_timeout()
    has_complex_structure = rules.first_marker(html_lower, rules.STRUCTURE_TAGS) is not None

    budget.check_timeout()
    link_count = html_lower.count(rules.LINK_OPENING)
    has_multiple_links = link_count > rules.MULTIPLE_LINKS_THRESHOLD

    has_meaningful_styling = rules.first_marker(html_lower, rules.MEANINGFUL_STYLES) is not None

    return HtmlFeatures(
        has_rich_content=has_rich_content,
        has_complex_structure=has_complex_structure,
        has_multiple_links=has_multiple_links,
        has_meaningful_styling=has_meaningful_styling,
    )


def detect_producer(html_lower: str, budget: PerformanceBudget) -> DetectedProducer | None:
    """Match known producer fingerprints; first family with a hit wins.

    Returns:
        The detected producer, or None when no fingerprint matched.
    """
    for kind, patterns in rules.PRODUCER_SIGNATURES:
        budget.check_timeout()
        marker = rules.first_marker(html_lower, patterns)
        if marker is not None:
            return DetectedProducer(
                kind=kind,
                confidence=rules.PRODUCER_MATCH_CONFIDENCE,
                marker=marker,
            )
    return None
