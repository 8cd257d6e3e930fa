"""Budgeted HTML-vs-text analysis with fallback.

HtmlAnalyzer is built once by the composition root (see
clipkeep.capture.bootstrap) and shared read-only; every call builds its own
PerformanceBudget.

Decision flow:
    budget -> size checks -> similarity + features + producer
           -> value/redundancy scores -> DecisionPolicy
    on AnalysisTimeout / ContentTooLarge -> fallback_decision()
    on any other failure                 -> text
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from clipkeep.analysis.budget import AnalysisStats, Clock, PerformanceBudget
from clipkeep.analysis.fallback import fallback_decision
from clipkeep.analysis.features import detect_producer, extract_features
from clipkeep.analysis.office import inspect_office_markup
from clipkeep.analysis.policy import DecisionPolicy
from clipkeep.analysis.scoring import ScoringEngine
from clipkeep.analysis.similarity import estimate_similarity
from clipkeep.analysis.types import (
    DecisionPath,
    HtmlAnalysisResult,
    HtmlDecision,
    ProducerKind,
)
from clipkeep.config.schema import AnalysisConfig
from clipkeep.core.errors import AnalysisTimeout, ContentTooLarge

logger = logging.getLogger(__name__)

R = TypeVar("R")


class HtmlAnalyzer:
    """Decides whether clipboard HTML is worth keeping over its plain text."""

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        *,
        stats: AnalysisStats | None = None,
        clock: Clock | None = None,
        policy: DecisionPolicy | None = None,
    ) -> None:
        """Initialize analyzer.

        Args:
            config: Analysis configuration (defaults to AnalysisConfig()).
            stats: Diagnostic counters (defaults to the process-wide ones).
            clock: Monotonic clock for budgets (for testing).
            policy: Decision policy override.
        """
        self._config = config or AnalysisConfig()
        self._stats = stats
        self._clock = clock
        self._detail_level = logging.INFO if self._config.log_analysis_details else logging.DEBUG
        self._scoring = ScoringEngine(self._config.enable_redundancy_scoring)
        self._policy = policy or DecisionPolicy(verbose=self._config.log_analysis_details)

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    def new_budget(self) -> PerformanceBudget:
        """Create a fresh budget from the configured limits."""
        return PerformanceBudget(
            self._config.analysis_timeout_ms,
            self._config.max_content_size,
            stats=self._stats,
            clock=self._clock,
        )

    def measure(self, content: str, fn: Callable[[str, PerformanceBudget], R]) -> R:
        """Run fn under a fresh budget after checking the content size.

        Raises:
            ContentTooLarge: If content is over the size ceiling.
            AnalysisTimeout: If fn polls the budget after it ran out.
        """
        budget = self.new_budget()
        budget.check_content_size(content)
        result = fn(content, budget)
        elapsed = budget.record_completion()
        logger.log(self._detail_level, "Analysis completed in %.1fms", elapsed)
        return result

    def analyze(
        self, html_lower: str, text_lower: str, budget: PerformanceBudget
    ) -> HtmlAnalysisResult:
        """Score lower-cased HTML against its lower-cased text.

        Raises:
            AnalysisTimeout: If the budget runs out mid-analysis.
        """
        budget.check_timeout()

        html_length = len(html_lower)
        text_length = len(text_lower)
        tag_count = html_lower.count("<")

        similarity = estimate_similarity(html_lower, text_lower, budget)
        budget.check_timeout()

        tag_density = tag_count / text_length if text_length > 0 else 0.0
        html_text_ratio = html_length / max(text_length, 1)

        features = extract_features(html_lower, budget)
        budget.check_timeout()

        value = self._scoring.value_score(features, similarity)

        producer = None
        if self._config.enable_app_detection:
            producer = detect_producer(html_lower, budget)
        budget.check_timeout()

        redundancy = self._scoring.redundancy_score(html_lower, similarity, producer, budget)

        office = None
        if (
            self._config.enable_office_tiers
            and producer is not None
            and producer.kind is ProducerKind.OFFICE_SUITE
        ):
            office = inspect_office_markup(html_lower, budget)

        result = HtmlAnalysisResult(
            similarity=similarity,
            tag_density=tag_density,
            html_text_ratio=html_text_ratio,
            value_score=value,
            redundancy_score=redundancy,
            features=features,
            producer=producer,
            office=office,
        )
        logger.log(
            self._detail_level,
            "HTML analysis: similarity=%.2f tag_density=%.3f ratio=%.2f html_len=%d "
            "text_len=%d value=%.2f redundancy=%.2f features=%s producer=%s office=%s",
            similarity,
            tag_density,
            html_text_ratio,
            html_length,
            text_length,
            value,
            redundancy,
            features,
            producer.kind.value if producer else None,
            office.redundancy_level.value if office else None,
        )
        return result

    def should_prefer_html(self, html: str, text: str) -> HtmlDecision:
        """Decide between an HTML payload and its plain-text sibling.

        Never raises: budget exhaustion and oversize payloads go through
        the fallback heuristic, any other failure prefers text.
        """

        def run(content: str, budget: PerformanceBudget) -> HtmlDecision:
            budget.check_content_size(text)
            analysis = self.analyze(content.lower(), text.lower(), budget)
            verdict = self._policy.decide(analysis)
            return HtmlDecision(
                prefer_html=verdict.prefer_html,
                path=DecisionPath.ANALYZED,
                rule=verdict.rule,
                analysis=analysis,
            )

        try:
            return self.measure(html, run)
        except AnalysisTimeout as e:
            logger.info("Analysis timed out after %dms, using fallback decision", e.timeout_ms)
            return self._fallback(html, text, DecisionPath.FALLBACK_TIMEOUT)
        except ContentTooLarge as e:
            logger.info(
                "Content too large (%d > %d bytes), using fallback decision", e.size, e.limit
            )
            return self._fallback(html, text, DecisionPath.FALLBACK_OVERSIZE)
        except Exception as e:
            # Capture must not stall or crash on a bad payload; keep the text.
            logger.warning("HTML analysis failed, preferring text: %s", e, exc_info=True)
            return HtmlDecision(
                prefer_html=False,
                path=DecisionPath.FALLBACK_ERROR,
                rule="internal_error",
            )

    def _fallback(self, html: str, text: str, path: DecisionPath) -> HtmlDecision:
        prefer_html, reason = fallback_decision(html, text)
        logger.log(
            self._detail_level,
            "Fallback decision: %s (%s)",
            "HTML" if prefer_html else "TEXT",
            reason,
        )
        return HtmlDecision(prefer_html=prefer_html, path=path, rule=reason)
