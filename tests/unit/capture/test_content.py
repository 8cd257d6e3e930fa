"""Tests for preview and HTML text helpers."""

from clipkeep.capture.content import (
    decode_html_entities,
    generate_preview,
    strip_head_and_meta,
)


class TestGeneratePreview:
    """Tests for generate_preview()."""

    def test_short_content_unchanged(self) -> None:
        assert generate_preview("hello") == "hello"

    def test_exact_length_unchanged(self) -> None:
        assert generate_preview("a" * 100) == "a" * 100

    def test_truncated_with_ellipsis(self) -> None:
        assert generate_preview("a" * 101) == "a" * 100 + "..."

    def test_custom_length(self) -> None:
        assert generate_preview("abcdef", max_chars=3) == "abc..."


class TestStripHeadAndMeta:
    """Tests for strip_head_and_meta()."""

    def test_removes_head(self) -> None:
        html = "<html><head><title>t</title>\n<style>p{}</style></head><body>x</body></html>"
        assert strip_head_and_meta(html) == "<html><body>x</body></html>"

    def test_removes_meta_outside_head(self) -> None:
        html = '<meta charset="utf-8"><p>x</p><META name=Generator content="Word">'
        assert strip_head_and_meta(html) == "<p>x</p>"

    def test_case_insensitive(self) -> None:
        assert strip_head_and_meta("<HEAD><TITLE>t</TITLE></HEAD><p>x</p>") == "<p>x</p>"

    def test_fragment_unchanged(self) -> None:
        assert strip_head_and_meta("<b>bold</b>") == "<b>bold</b>"


class TestDecodeHtmlEntities:
    """Tests for decode_html_entities()."""

    def test_common_entities(self) -> None:
        assert decode_html_entities("a&nbsp;&lt;b&gt;&quot;c&quot;&#39;") == "a <b>\"c\"'"

    def test_hex_entities(self) -> None:
        assert decode_html_entities("&#x2F;&#x60;&#x3D;&#x27;") == "/`='"

    def test_amp_decoded_once_in_order(self) -> None:
        # &amp; runs before &lt;, so an escaped entity is fully decoded
        assert decode_html_entities("&amp;lt;") == "<"
