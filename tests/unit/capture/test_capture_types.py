"""Tests for capture payloads, records and format flags."""

import pytest

from clipkeep.capture.fingerprint import fingerprint
from clipkeep.capture.types import (
    AvailableFormats,
    ContentKind,
    ContentRecord,
    FilesPayload,
    HtmlPayload,
    ImagePayload,
    ProducerAttribution,
    RtfPayload,
    TextPayload,
)
from clipkeep.core.errors import FormatReadError


class TestAvailableFormats:
    """Tests for AvailableFormats."""

    def test_nothing_by_default(self) -> None:
        assert AvailableFormats().kinds() == []

    def test_kinds_in_declaration_order(self) -> None:
        formats = AvailableFormats(rtf=True, text=True, files=True)
        assert formats.kinds() == [ContentKind.FILES, ContentKind.TEXT, ContentKind.RTF]

    def test_has(self) -> None:
        formats = AvailableFormats(html=True)
        assert formats.has(ContentKind.HTML) is True
        assert formats.has(ContentKind.TEXT) is False


class TestPayloads:
    """Tests for per-format serialization and previews."""

    def test_files_payload(self) -> None:
        payload = FilesPayload(paths=("/a.txt", "/b.txt"))

        assert payload.kind is ContentKind.FILES
        assert payload.serialize() == '["/a.txt","/b.txt"]'
        assert payload.preview() == "2 files"
        assert payload.is_empty() is False

    def test_single_file_preview(self) -> None:
        assert FilesPayload(paths=("/a.txt",)).preview() == "1 file: /a.txt"

    def test_empty_file_list_is_empty(self) -> None:
        # Serializes to "[]" but carries nothing
        assert FilesPayload().is_empty() is True

    def test_html_payload_strips_head(self) -> None:
        payload = HtmlPayload(markup="<head><meta charset=utf-8></head><p>x</p>")

        assert payload.serialize() == "<p>x</p>"
        assert payload.preview() == "HTML content"
        assert payload.fingerprint() == fingerprint("<p>x</p>")

    def test_html_payloads_differing_only_in_head_share_fingerprint(self) -> None:
        a = HtmlPayload(markup='<head><meta name=generator content="A"></head><p>x</p>')
        b = HtmlPayload(markup='<head><meta name=generator content="B"></head><p>x</p>')
        assert a.fingerprint() == b.fingerprint()

    def test_text_payload_preview_truncates(self) -> None:
        payload = TextPayload(text="x" * 150)
        assert payload.preview() == "x" * 100 + "..."
        assert payload.preview(10) == "x" * 10 + "..."

    @pytest.mark.parametrize(
        ("payload", "preview"),
        [(ImagePayload(encoded="iVBORw0KGgo="), "Image"), (RtfPayload(rtf="{\\rtf1 x}"), "RTF text")],
    )
    def test_fixed_previews(self, payload, preview: str) -> None:
        assert payload.preview() == preview

    @pytest.mark.parametrize(
        "payload",
        [TextPayload(), HtmlPayload(), ImagePayload(), RtfPayload()],
    )
    def test_empty_payloads(self, payload) -> None:
        assert payload.is_empty() is True

    def test_head_only_html_is_empty(self) -> None:
        payload = HtmlPayload(markup="<head><meta charset=utf-8></head>")
        assert payload.is_empty() is True


class TestContentRecord:
    """Tests for ContentRecord.from_payload()."""

    def test_from_text_payload(self) -> None:
        producer = ProducerAttribution(name="Terminal", bundle_id="com.apple.Terminal")
        record = ContentRecord.from_payload(
            TextPayload(text="hello"), producer=producer, preview_chars=3
        )

        assert record.kind is ContentKind.TEXT
        assert record.content == "hello"
        assert record.fingerprint == fingerprint("hello")
        assert record.preview == "hel..."
        assert record.producer == producer
        assert record.timestamp > 0

    def test_fingerprint_covers_stored_form(self) -> None:
        record = ContentRecord.from_payload(FilesPayload(paths=("/a",)))
        assert record.content == '["/a"]'
        assert record.fingerprint == fingerprint('["/a"]')

    def test_lone_surrogate_rejected(self) -> None:
        with pytest.raises(FormatReadError) as exc_info:
            ContentRecord.from_payload(TextPayload(text="abc\ud800"))

        assert exc_info.value.kind == "text"
