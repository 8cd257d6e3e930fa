"""HTML-vs-text analysis: budget, similarity, features, scoring and policy."""

from clipkeep.analysis.analyzer import HtmlAnalyzer
from clipkeep.analysis.budget import GLOBAL_STATS, AnalysisStats, PerformanceBudget
from clipkeep.analysis.fallback import fallback_decision
from clipkeep.analysis.policy import DecisionPolicy
from clipkeep.analysis.scoring import ScoringEngine
from clipkeep.analysis.types import (
    DecisionPath,
    DetectedProducer,
    HtmlAnalysisResult,
    HtmlDecision,
    HtmlFeatures,
    OfficeDetection,
    OfficeRedundancyLevel,
    PolicyVerdict,
    ProducerKind,
)

__all__ = [
    "AnalysisStats",
    "DecisionPath",
    "DecisionPolicy",
    "DetectedProducer",
    "GLOBAL_STATS",
    "HtmlAnalysisResult",
    "HtmlAnalyzer",
    "HtmlDecision",
    "HtmlFeatures",
    "OfficeDetection",
    "OfficeRedundancyLevel",
    "PerformanceBudget",
    "PolicyVerdict",
    "ProducerKind",
    "ScoringEngine",
    "fallback_decision",
]
