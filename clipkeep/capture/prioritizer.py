"""Ordering of clipboard formats for one capture cycle."""

from __future__ import annotations

import logging

from clipkeep.analysis.analyzer import HtmlAnalyzer
from clipkeep.capture.snapshot import ClipboardSnapshot
from clipkeep.capture.types import ContentKind, HtmlPayload, TextPayload

logger = logging.getLogger(__name__)


class FormatPrioritizer:
    """Decides the order in which formats are tried.

    files > image > (HTML or text, never both) > rtf. The HTML-vs-text
    analysis only runs when both are advertised and both reads succeed.
    """

    def __init__(self, analyzer: HtmlAnalyzer) -> None:
        self._analyzer = analyzer

    def prioritize(self, snapshot: ClipboardSnapshot) -> list[ContentKind]:
        """Formats to attempt, highest priority first."""
        available = snapshot.available
        order: list[ContentKind] = []

        if available.files:
            order.append(ContentKind.FILES)
        if available.image:
            order.append(ContentKind.IMAGE)

        if available.html and available.text:
            order.append(self._resolve_html_or_text(snapshot))
        elif available.html:
            order.append(ContentKind.HTML)
        elif available.text:
            order.append(ContentKind.TEXT)

        if available.rtf:
            order.append(ContentKind.RTF)

        logger.debug("Format priority: %s", [kind.value for kind in order])
        return order

    def _resolve_html_or_text(self, snapshot: ClipboardSnapshot) -> ContentKind:
        html = snapshot.read(ContentKind.HTML)
        text = snapshot.read(ContentKind.TEXT)

        if isinstance(html, HtmlPayload) and isinstance(text, TextPayload):
            decision = self._analyzer.should_prefer_html(html.markup, text.text)
            logger.debug(
                "HTML vs text: %s via %s (%s)",
                "HTML" if decision.prefer_html else "TEXT",
                decision.path.value,
                decision.rule,
            )
            return ContentKind.HTML if decision.prefer_html else ContentKind.TEXT
        if text is not None:
            return ContentKind.TEXT
        # HTML read ok, or both failed (then HTML reads as nothing later)
        return ContentKind.HTML
