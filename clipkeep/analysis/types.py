"""Value types produced by the HTML analysis.

All dataclasses are frozen: an analysis result is computed fresh for every
decision and never mutated or persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProducerKind(Enum):
    """Application family inferred from clipboard HTML markup."""

    CHAT_ASSISTANT = "chat_assistant"
    OFFICE_SUITE = "office_suite"
    NATIVE_ECOSYSTEM = "native_ecosystem"
    UNKNOWN = "unknown"


class OfficeRedundancyLevel(Enum):
    """How much an Office HTML payload merely restates its text."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DecisionPath(Enum):
    """Which path produced an HTML-vs-text decision."""

    ANALYZED = "analyzed"
    FALLBACK_TIMEOUT = "fallback_timeout"
    FALLBACK_OVERSIZE = "fallback_oversize"
    FALLBACK_ERROR = "fallback_error"

    @property
    def is_fallback(self) -> bool:
        return self is not DecisionPath.ANALYZED


@dataclass(frozen=True)
class HtmlFeatures:
    """Structural and stylistic signals found in HTML."""

    has_rich_content: bool = False  # img, video, audio, iframe, ...
    has_complex_structure: bool = False  # table, lists, nav, section, article
    has_multiple_links: bool = False  # more than 2 anchors
    has_meaningful_styling: bool = False  # inline css properties


@dataclass(frozen=True)
class DetectedProducer:
    """A producer fingerprint match.

    Attributes:
        kind: Producer family.
        confidence: Confidence in [0, 1].
        marker: The literal markup marker that matched, if any.
    """

    kind: ProducerKind
    confidence: float
    marker: str | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {self.confidence}")


@dataclass(frozen=True)
class OfficeFeature:
    """One Office markup feature found while grading redundancy."""

    feature_type: str
    pattern: str
    match_count: int
    score: float


@dataclass(frozen=True)
class OfficeDetection:
    """Office-specific redundancy classification."""

    specific_app: str
    redundancy_level: OfficeRedundancyLevel
    confidence: float
    features: tuple[OfficeFeature, ...] = ()


@dataclass(frozen=True)
class HtmlAnalysisResult:
    """Full analysis of an HTML payload against its plain-text sibling."""

    similarity: float  # [0, 1]
    tag_density: float
    html_text_ratio: float
    value_score: float  # [0, 10]
    redundancy_score: float  # [0, 10]
    features: HtmlFeatures = field(default_factory=HtmlFeatures)
    producer: DetectedProducer | None = None
    office: OfficeDetection | None = None

    @property
    def net_score(self) -> float:
        return self.value_score - self.redundancy_score


@dataclass(frozen=True)
class PolicyVerdict:
    """Outcome of DecisionPolicy: the preference and the rule that fired."""

    prefer_html: bool
    rule: str


@dataclass(frozen=True)
class HtmlDecision:
    """Final HTML-vs-text decision for one clipboard change.

    Attributes:
        prefer_html: True to persist HTML, False to persist text.
        path: Whether the budgeted analysis or a fallback decided.
        rule: Name of the policy rule (or fallback reason) that decided.
        analysis: The analysis result when path is ANALYZED, else None.
    """

    prefer_html: bool
    path: DecisionPath
    rule: str
    analysis: HtmlAnalysisResult | None = None
