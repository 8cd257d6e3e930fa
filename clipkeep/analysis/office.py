"""Office-suite markup grading.

Office applications wrap even a one-word copy in namespaces, conditional
comments and mso-* styles. This module names the specific application and
grades how much of the payload is that boilerplate, so the decision policy
can treat heavy Word chatter differently from an Excel range that carries
real table structure.
"""

from __future__ import annotations

from clipkeep.analysis.budget import PerformanceBudget
from clipkeep.analysis.types import OfficeDetection, OfficeFeature, OfficeRedundancyLevel

# Checked in order; the first application with a hit names the payload.
OFFICE_APP_SIGNATURES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Excel", ("urn:schemas-microsoft-com:office:excel", "content=excel.sheet", "mso-number-format")),
    ("PowerPoint", ("urn:schemas-microsoft-com:office:powerpoint", "content=powerpoint.slide")),
    ("OneNote", ("urn:schemas-microsoft-com:office:onenote", "content=onenote")),
    ("Outlook", ("mso-style-type:personal", "content=outlook")),
    ("Word", ("urn:schemas-microsoft-com:office:word", "content=word.document", "msonormal")),
)
GENERIC_OFFICE_APP = "Office"

# Spreadsheet ranges keep their HTML more often; grade them one tier lower.
LOW_REDUNDANCY_APPS = frozenset({"Excel"})

# (feature_type, pattern, weight per occurrence)
OFFICE_FEATURES: tuple[tuple[str, str, float], ...] = (
    ("namespace", "xmlns:o=", 2.0),
    ("namespace", "xmlns:w=", 2.0),
    ("namespace", "xmlns:x=", 1.0),
    ("conditional_comment", "<!--[if", 1.0),
    ("style", "mso-", 0.5),
    ("class", "msonormal", 0.5),
    ("generator", "microsoft", 1.0),
    ("fragment", "<!--startfragment-->", 1.5),
)
MAX_COUNTED_OCCURRENCES = 5

HIGH_THRESHOLD = 8.0
MEDIUM_THRESHOLD = 4.0
CONFIDENCE_SCALE = 10.0

_TIERS = (
    OfficeRedundancyLevel.NONE,
    OfficeRedundancyLevel.LOW,
    OfficeRedundancyLevel.MEDIUM,
    OfficeRedundancyLevel.HIGH,
)


def identify_office_app(html_lower: str) -> str:
    """Name the Office application that produced the markup."""
    for app, patterns in OFFICE_APP_SIGNATURES:
        if any(pattern in html_lower for pattern in patterns):
            return app
    return GENERIC_OFFICE_APP


def grade_level(total_score: float, app: str) -> OfficeRedundancyLevel:
    """Map a weighted feature score to a redundancy tier."""
    if total_score >= HIGH_THRESHOLD:
        tier = 3
    elif total_score >= MEDIUM_THRESHOLD:
        tier = 2
    elif total_score > 0:
        tier = 1
    else:
        tier = 0
    if app in LOW_REDUNDANCY_APPS and tier > 0:
        tier -= 1
    return _TIERS[tier]


def inspect_office_markup(html_lower: str, budget: PerformanceBudget) -> OfficeDetection:
    """Grade Office boilerplate in lower-cased HTML.

    Each feature row counts its occurrences (capped) and contributes
    weight * count. The budget is checked between rows.
    """
    budget.check_timeout()
    app = identify_office_app(html_lower)

    features: list[OfficeFeature] = []
    total = 0.0
    for feature_type, pattern, weight in OFFICE_FEATURES:
        budget.check_timeout()
        count = html_lower.count(pattern)
        if count == 0:
            continue
        score = weight * min(count, MAX_COUNTED_OCCURRENCES)
        total += score
        features.append(
            OfficeFeature(
                feature_type=feature_type,
                pattern=pattern,
                match_count=count,
                score=score,
            )
        )

    return OfficeDetection(
        specific_app=app,
        redundancy_level=grade_level(total, app),
        confidence=min(1.0, total / CONFIDENCE_SCALE),
        features=tuple(features),
    )
