#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_html_renderer.py
"""Unit tests for HtmlRenderer.

Tests cover:
- One block-level tag per output line
- Tight and loose list layout, task list checkboxes
- Tables with alignment
- Raw HTML omission and dangerous URL blanking
- Options type validation and serialization errors

"""

import pytest

from mdsync.ast import (
    Code,
    CodeBlock,
    Document,
    Emphasis,
    HTMLBlock,
    HTMLInline,
    Image,
    Link,
    Paragraph,
    Strong,
    Text,
)
from mdsync.constants import RAW_HTML_OMITTED
from mdsync.exceptions import InvalidOptionsError, RenderError
from mdsync.options import FormatterOptions, HtmlRendererOptions
from mdsync.parsers.markdown import markdown_to_ast
from mdsync.renderers.html import HtmlRenderer, is_safe_url, render_html


def _render(markdown, flavor="gfm"):
    return render_html(markdown_to_ast(markdown, flavor=flavor))


@pytest.mark.unit
class TestBlockLayout:
    """Test block element output."""

    def test_heading_and_paragraph(self):
        """Test the simplest document."""
        assert _render("# Title\n\nBody") == "<h1>Title</h1>\n<p>Body</p>\n"

    def test_tight_list(self):
        """Test that tight list items render without paragraphs."""
        assert _render("- a\n- b\n") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_loose_list(self):
        """Test that loose list items wrap paragraphs."""
        assert _render("- a\n\n- b\n") == "<ul>\n<li>\n<p>a</p>\n</li>\n<li>\n<p>b</p>\n</li>\n</ul>\n"

    def test_nested_tight_list(self):
        """Test a nested list inside a tight item."""
        expected = "<ul>\n<li>a\n<ul>\n<li>b</li>\n</ul>\n</li>\n</ul>\n"
        assert _render("- a\n  - b\n") == expected

    def test_ordered_list_start(self):
        """Test the start attribute on ordered lists."""
        assert _render("1. a\n").startswith("<ol>\n")
        assert _render("4. a\n").startswith('<ol start="4">\n')

    def test_task_list_checkboxes(self):
        """Test disabled checkboxes for task items."""
        html = _render("- [x] done\n- [ ] todo\n")
        assert '<li><input type="checkbox" checked="" disabled="" /> done</li>' in html
        assert '<li><input type="checkbox" disabled="" /> todo</li>' in html

    def test_code_block_language_class(self):
        """Test fenced code with and without a language."""
        assert _render("```py\nx < 1\n```\n") == '<pre><code class="language-py">x &lt; 1\n</code></pre>\n'
        assert _render("    plain\n") == "<pre><code>plain\n</code></pre>\n"

    def test_custom_language_prefix(self):
        """Test the configurable language class prefix."""
        doc = markdown_to_ast("```py\nx\n```\n")
        html = HtmlRenderer(HtmlRendererOptions(language_class_prefix="lang-")).render_to_string(doc)
        assert 'class="lang-py"' in html

    def test_blockquote(self):
        """Test block quote layout."""
        assert _render("> quoted\n") == "<blockquote>\n<p>quoted</p>\n</blockquote>\n"

    def test_thematic_break(self):
        """Test horizontal rule output."""
        assert _render("---\n") == "<hr />\n"

    def test_table(self):
        """Test tables with one row or cell tag per line."""
        html = _render("| a | b |\n|:-:|---|\n| 1 | 2 |\n")
        assert html == (
            "<table>\n<thead>\n<tr>\n"
            '<th align="center">a</th>\n<th>b</th>\n'
            "</tr>\n</thead>\n<tbody>\n<tr>\n"
            '<td align="center">1</td>\n<td>2</td>\n'
            "</tr>\n</tbody>\n</table>\n"
        )

    def test_table_without_body(self):
        """Test that a header-only table has no tbody."""
        assert "<tbody>" not in _render("| a |\n|---|\n")

    def test_empty_document(self):
        """Test that an empty document renders nothing."""
        assert _render("") == ""

    def test_every_block_tag_starts_a_line(self, sample_markdown):
        """Test the one-block-tag-per-line layout."""
        for line in _render(sample_markdown).splitlines():
            if "<p>" in line or "<h1>" in line or "<li>" in line:
                assert line.startswith(("<p>", "<h1>", "<li>"))


@pytest.mark.unit
class TestInlineOutput:
    """Test inline element output."""

    def test_emphasis_strong_code(self):
        """Test inline containers."""
        html = _render("*a* **b** `<c>`")
        assert html == "<p><em>a</em> <strong>b</strong> <code>&lt;c&gt;</code></p>\n"

    def test_links_and_images(self):
        """Test link and image attributes."""
        html = _render('[x](https://e.com "T") ![alt](i.png)')
        assert '<a href="https://e.com" title="T">x</a>' in html
        assert '<img src="i.png" alt="alt" />' in html

    def test_breaks(self):
        """Test soft and hard break output."""
        assert _render("a\nb\\\nc") == "<p>a\nb<br />\nc</p>\n"

    def test_strikethrough_and_subscript(self):
        """Test GFM inline extensions."""
        assert _render("~~x~~ H~2~O") == "<p><del>x</del> H<sub>2</sub>O</p>\n"

    def test_text_is_escaped(self):
        """Test HTML escaping of text."""
        assert _render("a & b < c") == "<p>a &amp; b &lt; c</p>\n"

    def test_smart_punctuation(self):
        """Test curly quotes in rendered output."""
        assert _render('"hi"') == "<p>“hi”</p>\n"


@pytest.mark.unit
class TestSecurity:
    """Test raw HTML omission and URL filtering."""

    def test_html_block_omitted(self):
        """Test that raw HTML blocks are replaced."""
        assert _render("<script>alert(1)</script>\n") == f"{RAW_HTML_OMITTED}\n"

    def test_inline_html_omitted(self):
        """Test that inline HTML is replaced."""
        assert _render("a <b>bold</b>") == f"<p>a {RAW_HTML_OMITTED}bold{RAW_HTML_OMITTED}</p>\n"

    def test_html_nodes_directly(self):
        """Test omission on hand-built nodes."""
        doc = Document(children=[HTMLBlock(content="<div>x</div>"), Paragraph(content=[HTMLInline(content="<i>")])])
        assert HtmlRenderer().render_to_string(doc) == f"{RAW_HTML_OMITTED}\n<p>{RAW_HTML_OMITTED}</p>\n"

    @pytest.mark.parametrize(
        "url",
        ["javascript:alert(1)", "JAVASCRIPT:alert(1)", " vbscript:x", "file:///etc/passwd", "data:text/html;base64,x"],
    )
    def test_dangerous_urls(self, url):
        """Test that dangerous schemes are rejected."""
        assert not is_safe_url(url)

    @pytest.mark.parametrize("url", ["https://e.com", "/rel", "#frag", "mailto:a@b.c", "data:image/png;base64,AAAA"])
    def test_safe_urls(self, url):
        """Test that ordinary destinations pass."""
        assert is_safe_url(url)

    def test_dangerous_link_blanked(self):
        """Test that hand-built dangerous links render an empty href."""
        doc = Document(children=[Paragraph(content=[Link(url="javascript:x", content=[Text("go")])])])
        assert HtmlRenderer().render_to_string(doc) == '<p><a href="">go</a></p>\n'

    def test_dangerous_image_blanked(self):
        """Test that hand-built dangerous images render an empty src."""
        doc = Document(children=[Paragraph(content=[Image(url="vbscript:x", alt_text="a")])])
        assert '<img src="" alt="a" />' in HtmlRenderer().render_to_string(doc)


@pytest.mark.unit
class TestRendererErrors:
    """Test option validation and error wrapping."""

    def test_wrong_options_type(self):
        """Test that other renderers' options are rejected."""
        with pytest.raises(InvalidOptionsError):
            HtmlRenderer(FormatterOptions())  # type: ignore[arg-type]

    def test_serialization_failure_wrapped(self):
        """Test that node errors surface as RenderError."""
        doc = Document(children=[CodeBlock(content=None)])  # type: ignore[arg-type]
        with pytest.raises(RenderError) as exc_info:
            HtmlRenderer().render_to_string(doc)
        assert exc_info.value.rendering_stage == "serialize"
        assert exc_info.value.original_error is not None

    def test_hand_built_inline_nodes(self):
        """Test rendering nodes built without the parser."""
        doc = Document(
            children=[Paragraph(content=[Emphasis(content=[Text("a")]), Strong(content=[Code(content="b")])])]
        )
        assert HtmlRenderer().render_to_string(doc) == "<p><em>a</em><strong><code>b</code></strong></p>\n"
