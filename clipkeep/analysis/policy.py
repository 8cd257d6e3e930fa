"""Layered HTML-vs-text decision rules.

Rules run in strict priority order and the first one that returns a
verdict decides. "Obviously redundant" signals are checked before
"obviously rich" ones, and both preempt the numeric net-score tie-break.
Each rule returns True (HTML), False (text) or None (no opinion).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from clipkeep.analysis.types import (
    HtmlAnalysisResult,
    OfficeRedundancyLevel,
    PolicyVerdict,
    ProducerKind,
)

logger = logging.getLogger(__name__)

Rule = Callable[[HtmlAnalysisResult], bool | None]

# Office tiers: level -> (similarity above, value below or None)
OFFICE_TIER_THRESHOLDS: dict[OfficeRedundancyLevel, tuple[float, float | None]] = {
    OfficeRedundancyLevel.HIGH: (0.85, None),
    OfficeRedundancyLevel.MEDIUM: (0.9, 3.0),
    OfficeRedundancyLevel.LOW: (0.95, 2.0),
}


def near_duplicate(r: HtmlAnalysisResult) -> bool | None:
    """Near-perfect similarity with some redundancy -> text."""
    if r.similarity >= 0.98 and r.redundancy_score > 2.0:
        return False
    return None


def chat_assistant(r: HtmlAnalysisResult) -> bool | None:
    p = r.producer
    if (
        p is not None
        and p.kind is ProducerKind.CHAT_ASSISTANT
        and p.confidence > 0.7
        and r.similarity > 0.8
    ):
        return False
    return None


def office_suite(r: HtmlAnalysisResult) -> bool | None:
    """Office markup: graded tiers when available, else a confidence gate."""
    p = r.producer
    if p is None or p.kind is not ProducerKind.OFFICE_SUITE:
        return None

    if r.office is not None:
        thresholds = OFFICE_TIER_THRESHOLDS.get(r.office.redundancy_level)
        if thresholds is None:
            return None
        min_similarity, max_value = thresholds
        if r.similarity > min_similarity and (max_value is None or r.value_score < max_value):
            return False
        return None

    if p.confidence > 0.8 and r.similarity > 0.9:
        return False
    return None


def native_ecosystem(r: HtmlAnalysisResult) -> bool | None:
    p = r.producer
    if (
        p is not None
        and p.kind is ProducerKind.NATIVE_ECOSYSTEM
        and p.confidence > 0.9
        and r.similarity > 0.95
        and r.value_score < 2.0
    ):
        return False
    return None


def chat_like_signature(r: HtmlAnalysisResult) -> bool | None:
    if r.redundancy_score > 4.5 and r.similarity > 0.8:
        return False
    return None


def very_high_redundancy(r: HtmlAnalysisResult) -> bool | None:
    if r.redundancy_score > 6.0 and r.value_score < 2.0:
        return False
    return None


def rich_content(r: HtmlAnalysisResult) -> bool | None:
    if r.features.has_rich_content:
        return True
    return None


def complex_structure(r: HtmlAnalysisResult) -> bool | None:
    if (
        r.features.has_complex_structure
        and r.html_text_ratio < 3.0
        and r.redundancy_score < 4.0
        and r.similarity < 0.8
    ):
        return True
    return None


def net_score(r: HtmlAnalysisResult) -> bool:
    """Tie-break on value - redundancy. Always decides."""
    net = r.net_score
    if net > 3.0:
        return True
    if net < -2.0:
        return False
    if -1.0 < net <= 1.0:
        # Boundary band leans to text unless the HTML clearly adds something
        return r.similarity < 0.6 and r.value_score > 2.0
    return net > 0.0


DEFAULT_RULES: tuple[tuple[str, Rule], ...] = (
    ("near_duplicate", near_duplicate),
    ("chat_assistant", chat_assistant),
    ("office_suite", office_suite),
    ("native_ecosystem", native_ecosystem),
    ("chat_like_signature", chat_like_signature),
    ("very_high_redundancy", very_high_redundancy),
    ("rich_content", rich_content),
    ("complex_structure", complex_structure),
    ("net_score", net_score),
)


class DecisionPolicy:
    """Stateless evaluator for the ordered rule table."""

    def __init__(
        self,
        rules: tuple[tuple[str, Rule], ...] = DEFAULT_RULES,
        verbose: bool = False,
    ) -> None:
        self._rules = rules
        self._log_level = logging.INFO if verbose else logging.DEBUG

    def decide(self, result: HtmlAnalysisResult) -> PolicyVerdict:
        """Return the verdict of the first rule with an opinion.

        Raises:
            ValueError: If no rule decided (only possible with a custom
                table that lacks a terminal rule).
        """
        for name, rule in self._rules:
            verdict = rule(result)
            if verdict is not None:
                logger.log(
                    self._log_level,
                    "Rule %s -> %s (net=%.2f, similarity=%.2f, value=%.2f, redundancy=%.2f)",
                    name,
                    "HTML" if verdict else "TEXT",
                    result.net_score,
                    result.similarity,
                    result.value_score,
                    result.redundancy_score,
                )
                return PolicyVerdict(prefer_html=verdict, rule=name)
        raise ValueError("No decision rule matched; the rule table needs a terminal rule")
