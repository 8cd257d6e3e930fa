"""Cheap lexical similarity between an HTML payload and its plain text.

This is a bounded-cost proxy for "does the HTML say the same thing as the
text", not a semantic comparison. Inputs are expected lower-cased.
"""

from __future__ import annotations

from clipkeep.analysis.budget import PerformanceBudget

# Above this many characters (either input) only a positional sample is compared
SAMPLING_THRESHOLD_CHARS = 50_000
SAMPLE_CHARS = 1_000
SAMPLE_CHECK_INTERVAL = 100

# Tag stripping looks at no more than this much HTML
EXTRACT_MAX_CHARS = 100_000
EXTRACT_CHECK_INTERVAL = 1_000


def estimate_similarity(html: str, text: str, budget: PerformanceBudget) -> float:
    """Similarity in [0, 1] between HTML and its plain-text sibling.

    Large inputs take the sampling path; everything else strips tags and
    compares word sets.
    """
    budget.check_timeout()

    if len(html) > SAMPLING_THRESHOLD_CHARS or len(text) > SAMPLING_THRESHOLD_CHARS:
        return sampled_similarity(html, text, budget)

    return standard_similarity(html, text, budget)


def sampled_similarity(html: str, text: str, budget: PerformanceBudget) -> float:
    """Positional character match rate over the first SAMPLE_CHARS characters.

    Deliberately crude: it bounds cost for huge payloads, nothing more.
    """
    budget.check_timeout()

    sample_size = min(SAMPLE_CHARS, len(html), len(text))
    if sample_size == 0:
        return 0.0

    matches = 0
    for i in range(sample_size):
        if html[i] == text[i]:
            matches += 1
        if i % SAMPLE_CHECK_INTERVAL == 0:
            budget.check_timeout()

    return matches / sample_size


def standard_similarity(html: str, text: str, budget: PerformanceBudget) -> float:
    """Word-set Jaccard similarity of the HTML's visible text and the text."""
    budget.check_timeout()

    html_text = extract_text_from_html(html, budget)
    text_clean = " ".join(text.split())

    if not html_text or not text_clean:
        return 0.0

    budget.check_timeout()
    return jaccard_similarity(html_text, text_clean, budget)


def extract_text_from_html(html: str, budget: PerformanceBudget) -> str:
    """Strip tags and script/style bodies, then collapse whitespace.

    Tag names are tracked one at a time with no nesting awareness and no
    attribute quoting: a '>' inside an attribute value ends the tag early.
    That is accepted; decisions are tuned against this behavior.
    """
    budget.check_timeout()

    if len(html) > EXTRACT_MAX_CHARS:
        html = html[:EXTRACT_MAX_CHARS]

    out: list[str] = []
    tag_name: list[str] = []
    in_tag = False
    in_script_or_style = False

    for i, ch in enumerate(html):
        if i % EXTRACT_CHECK_INTERVAL == 0:
            budget.check_timeout()

        if ch == "<":
            in_tag = True
            tag_name.clear()
        elif ch == ">":
            if in_tag:
                in_tag = False
                name = "".join(tag_name).lower()
                if name.startswith(("script", "style")):
                    in_script_or_style = True
                elif name.startswith(("/script", "/style")):
                    in_script_or_style = False
        elif in_tag:
            tag_name.append(ch)
        elif not in_script_or_style:
            out.append(ch)

    return " ".join("".join(out).split())


def jaccard_similarity(text1: str, text2: str, budget: PerformanceBudget) -> float:
    """|intersection| / |union| of the whitespace-split word sets."""
    budget.check_timeout()

    words1 = set(text1.split())
    words2 = set(text2.split())

    budget.check_timeout()

    union = len(words1 | words2)
    if union == 0:
        return 0.0
    return len(words1 & words2) / union
