"""Tests for the ordered HTML-vs-text decision rules."""

import pytest

from clipkeep.analysis.policy import DEFAULT_RULES, DecisionPolicy, net_score
from clipkeep.analysis.types import (
    DetectedProducer,
    HtmlAnalysisResult,
    HtmlFeatures,
    OfficeDetection,
    OfficeRedundancyLevel,
    PolicyVerdict,
    ProducerKind,
)


def make_result(
    similarity: float = 0.5,
    value: float = 0.0,
    redundancy: float = 0.0,
    ratio: float = 1.0,
    features: HtmlFeatures | None = None,
    producer: DetectedProducer | None = None,
    office: OfficeDetection | None = None,
) -> HtmlAnalysisResult:
    return HtmlAnalysisResult(
        similarity=similarity,
        tag_density=0.1,
        html_text_ratio=ratio,
        value_score=value,
        redundancy_score=redundancy,
        features=features or HtmlFeatures(),
        producer=producer,
        office=office,
    )


def office_producer(confidence: float = 0.8) -> DetectedProducer:
    return DetectedProducer(ProducerKind.OFFICE_SUITE, confidence, "mso-")


def office_detection(level: OfficeRedundancyLevel) -> OfficeDetection:
    return OfficeDetection(specific_app="Word", redundancy_level=level, confidence=0.7)


@pytest.fixture
def policy() -> DecisionPolicy:
    return DecisionPolicy()


class TestRedundancyRules:
    """Rules 1-6: signals that the HTML only restates the text."""

    def test_near_duplicate(self, policy) -> None:
        verdict = policy.decide(make_result(similarity=0.99, redundancy=2.5))
        assert verdict == PolicyVerdict(prefer_html=False, rule="near_duplicate")

    def test_near_duplicate_needs_some_redundancy(self, policy) -> None:
        verdict = policy.decide(make_result(similarity=0.99, redundancy=2.0, value=0.5))
        assert verdict.rule != "near_duplicate"

    def test_chat_assistant(self, policy) -> None:
        producer = DetectedProducer(ProducerKind.CHAT_ASSISTANT, 0.8)
        verdict = policy.decide(make_result(similarity=0.85, producer=producer))
        assert verdict == PolicyVerdict(prefer_html=False, rule="chat_assistant")

    def test_chat_assistant_low_confidence_falls_through(self, policy) -> None:
        producer = DetectedProducer(ProducerKind.CHAT_ASSISTANT, 0.6)
        verdict = policy.decide(make_result(similarity=0.85, producer=producer, value=5.0))
        assert verdict.rule == "net_score"

    def test_office_confidence_gate(self, policy) -> None:
        verdict = policy.decide(make_result(similarity=0.95, producer=office_producer(0.9)))
        assert verdict == PolicyVerdict(prefer_html=False, rule="office_suite")

    def test_office_default_confidence_does_not_fire(self, policy) -> None:
        """Markup detection yields 0.8, which is not above the gate."""
        verdict = policy.decide(make_result(similarity=0.95, producer=office_producer()))
        assert verdict.rule != "office_suite"

    @pytest.mark.parametrize(
        ("level", "similarity", "value", "fires"),
        [
            (OfficeRedundancyLevel.HIGH, 0.9, 9.0, True),
            (OfficeRedundancyLevel.HIGH, 0.85, 0.0, False),
            (OfficeRedundancyLevel.MEDIUM, 0.92, 2.0, True),
            (OfficeRedundancyLevel.MEDIUM, 0.92, 3.5, False),
            (OfficeRedundancyLevel.LOW, 0.96, 1.0, True),
            (OfficeRedundancyLevel.LOW, 0.94, 1.0, False),
            (OfficeRedundancyLevel.NONE, 0.97, 0.0, False),
        ],
    )
    def test_office_tiers(
        self, policy, level: OfficeRedundancyLevel, similarity: float, value: float, fires: bool
    ) -> None:
        result = make_result(
            similarity=similarity,
            value=value,
            producer=office_producer(),
            office=office_detection(level),
        )
        verdict = policy.decide(result)
        assert (verdict.rule == "office_suite") is fires
        if fires:
            assert verdict.prefer_html is False

    def test_native_ecosystem(self, policy) -> None:
        producer = DetectedProducer(ProducerKind.NATIVE_ECOSYSTEM, 0.95)
        verdict = policy.decide(make_result(similarity=0.96, value=1.0, producer=producer))
        assert verdict == PolicyVerdict(prefer_html=False, rule="native_ecosystem")

    def test_native_ecosystem_default_confidence_does_not_fire(self, policy) -> None:
        producer = DetectedProducer(ProducerKind.NATIVE_ECOSYSTEM, 0.8)
        verdict = policy.decide(make_result(similarity=0.96, value=1.0, producer=producer))
        assert verdict.rule != "native_ecosystem"

    def test_chat_like_signature(self, policy) -> None:
        verdict = policy.decide(make_result(similarity=0.85, redundancy=5.0, value=8.0))
        assert verdict == PolicyVerdict(prefer_html=False, rule="chat_like_signature")

    def test_very_high_redundancy(self, policy) -> None:
        verdict = policy.decide(make_result(similarity=0.5, redundancy=7.0, value=1.0))
        assert verdict == PolicyVerdict(prefer_html=False, rule="very_high_redundancy")


class TestValueRules:
    """Rules 7-8: signals that the HTML carries real presentation."""

    def test_rich_content_regardless_of_net_score(self, policy) -> None:
        result = make_result(
            similarity=0.5,
            redundancy=5.0,
            value=0.0,
            features=HtmlFeatures(has_rich_content=True),
        )
        assert result.net_score < -2.0
        assert policy.decide(result) == PolicyVerdict(prefer_html=True, rule="rich_content")

    def test_redundancy_rules_preempt_rich_content(self, policy) -> None:
        result = make_result(
            similarity=1.0,
            redundancy=5.0,
            value=4.0,
            features=HtmlFeatures(has_rich_content=True),
        )
        assert policy.decide(result) == PolicyVerdict(prefer_html=False, rule="near_duplicate")

    def test_complex_structure(self, policy) -> None:
        result = make_result(
            similarity=0.5,
            redundancy=1.0,
            value=0.0,
            ratio=2.0,
            features=HtmlFeatures(has_complex_structure=True),
        )
        assert policy.decide(result) == PolicyVerdict(prefer_html=True, rule="complex_structure")

    def test_complex_structure_with_heavy_markup_falls_through(self, policy) -> None:
        result = make_result(
            similarity=0.7,
            redundancy=3.0,
            value=3.0,
            ratio=4.0,
            features=HtmlFeatures(has_complex_structure=True),
        )
        assert policy.decide(result) == PolicyVerdict(prefer_html=False, rule="net_score")


class TestNetScore:
    """Rule 9: the value - redundancy tie-break."""

    @pytest.mark.parametrize(
        ("value", "redundancy", "similarity", "expected"),
        [
            (5.0, 1.0, 0.5, True),  # net 4.0
            (0.0, 3.0, 0.5, False),  # net -3.0
            (3.0, 2.5, 0.5, True),  # net 0.5, boundary band, clearly adds value
            (3.0, 2.5, 0.65, False),  # net 0.5, boundary band, too similar
            (2.0, 2.0, 0.5, False),  # net 0.0, boundary band, value not above 2
            (2.5, 1.0, 0.5, True),  # net 1.5
            (0.5, 2.0, 0.5, False),  # net -1.5
            (1.0, 2.0, 0.5, False),  # net -1.0, just outside the band
        ],
    )
    def test_bands(self, value: float, redundancy: float, similarity: float, expected: bool) -> None:
        result = make_result(similarity=similarity, value=value, redundancy=redundancy)
        assert net_score(result) is expected


class TestDecisionPolicy:
    """Tests for rule evaluation."""

    def test_rule_order(self) -> None:
        assert [name for name, _ in DEFAULT_RULES] == [
            "near_duplicate",
            "chat_assistant",
            "office_suite",
            "native_ecosystem",
            "chat_like_signature",
            "very_high_redundancy",
            "rich_content",
            "complex_structure",
            "net_score",
        ]

    def test_deterministic(self, policy) -> None:
        result = make_result(similarity=0.6, value=3.0, redundancy=1.0)
        assert policy.decide(result) == policy.decide(result)

    def test_custom_table_without_terminal_rule(self) -> None:
        policy = DecisionPolicy(rules=(("never", lambda r: None),))
        with pytest.raises(ValueError):
            policy.decide(make_result())

    def test_custom_rule_decides(self) -> None:
        policy = DecisionPolicy(rules=(("always_html", lambda r: True),))
        assert policy.decide(make_result()) == PolicyVerdict(prefer_html=True, rule="always_html")
