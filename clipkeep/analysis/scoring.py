"""Value and redundancy scoring.

Both scores are pure functions of their inputs and land in [0, 10].

The producer-family bonus is added twice: once inside the marker helper
(first column of rules.PRODUCER_BONUS) and once more at the call site
(second column). tests/unit/analysis/test_scoring.py pins the resulting
numbers; dropping one of the two additions must be a deliberate change.
"""

from __future__ import annotations

from clipkeep.analysis import rules
from clipkeep.analysis.budget import PerformanceBudget
from clipkeep.analysis.types import DetectedProducer, HtmlFeatures


def _clamp(score: float) -> float:
    return max(0.0, min(rules.SCORE_CEILING, score))


class ScoringEngine:
    """Combines similarity, features and producer into value/redundancy.

    Args:
        enable_redundancy_scoring: When False the marker-indicator table
            (and the helper's producer bonus) is skipped; the call-site
            producer bonus and the similarity steps still apply.
    """

    def __init__(self, enable_redundancy_scoring: bool = True) -> None:
        self._enable_redundancy_scoring = enable_redundancy_scoring

    def value_score(self, features: HtmlFeatures, similarity: float) -> float:
        """How much presentation the HTML carries beyond plain text."""
        score = 0.0
        if features.has_rich_content:
            score += rules.VALUE_RICH_CONTENT
        if features.has_complex_structure:
            score += rules.VALUE_COMPLEX_STRUCTURE
        if features.has_multiple_links:
            score += rules.VALUE_MULTIPLE_LINKS
        if features.has_meaningful_styling:
            score += rules.VALUE_MEANINGFUL_STYLING
        if similarity < rules.LOW_SIMILARITY_BELOW:
            score += rules.VALUE_LOW_SIMILARITY
        return _clamp(score)

    def marker_redundancy(
        self,
        html_lower: str,
        producer: DetectedProducer | None,
        budget: PerformanceBudget | None = None,
    ) -> float:
        """Indicator-table weights plus the helper's producer bonus, capped at 10."""
        if not self._enable_redundancy_scoring:
            return 0.0

        score, _ = rules.evaluate_markers(html_lower, rules.REDUNDANCY_INDICATORS, budget)
        if producer is not None:
            score += rules.PRODUCER_BONUS[producer.kind][0]
        return min(rules.SCORE_CEILING, score)

    def redundancy_score(
        self,
        html_lower: str,
        similarity: float,
        producer: DetectedProducer | None,
        budget: PerformanceBudget | None = None,
    ) -> float:
        """How much the HTML merely restates its text."""
        score = self.marker_redundancy(html_lower, producer, budget)

        if producer is not None:
            score += rules.PRODUCER_BONUS[producer.kind][1]

        for threshold, bonus in rules.SIMILARITY_REDUNDANCY_STEPS:
            if similarity > threshold:
                score += bonus

        return _clamp(score)
