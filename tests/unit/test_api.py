#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_api.py
"""Unit tests for the public API.

Tests cover:
- render_markdown output (HTML, anchors, path links, metrics, line map)
- Flavor selection through the API
- RenderResult serialization
- Package-level exports

"""

import json

import pytest

import mdsync
from mdsync.api import RenderResult, render_markdown
from mdsync.exceptions import ParsingError


@pytest.mark.unit
class TestRenderMarkdown:
    """Test rendering through the public API."""

    def test_documented_example(self):
        """Test heading and paragraph with line anchors."""
        result = render_markdown("# Title\n\nBody\n")
        assert result.html == '<h1 data-source-line="1">Title</h1>\n<p data-source-line="2">Body</p>\n'
        assert result.line_map == {1: 0, 2: 8, 3: 9, 4: 14}

    def test_metrics_included(self):
        """Test counts computed from the source."""
        result = render_markdown("one two\nthree\n")
        assert result.line_count == 2
        assert result.word_count == 3
        assert result.char_count == 14
        assert result.widest_column == 7

    def test_path_links(self):
        """Test file paths become anchors."""
        result = render_markdown("See ./notes.md for details\n")
        assert 'href="./notes.md"' in result.html
        assert 'class="file-path-link"' in result.html

    def test_parent_relative_path_linked(self):
        """Test that a ../ path survives smart punctuation and becomes an anchor."""
        result = render_markdown("Open ../docs/guide.md now\n")
        assert 'href="../docs/guide.md"' in result.html
        assert "\u2026" not in result.html

    def test_too_deep_document_raises(self):
        """Test that nesting past the engine limit is reported."""
        with pytest.raises(ParsingError):
            render_markdown("> " * 150 + "deep\n")

    def test_paths_in_code_not_linked(self):
        """Test code spans and blocks keep paths as text."""
        result = render_markdown("Run `./build.sh now`\n\n```\ncat ./a/b.txt\n```\n")
        assert "file-path-link" not in result.html

    def test_empty_document(self):
        """Test empty input."""
        result = render_markdown("")
        assert result.html == ""
        assert result.line_count == 0
        assert result.line_map == {1: 0}

    def test_raw_html_omitted(self):
        """Test that raw HTML never reaches the preview."""
        result = render_markdown("<script>alert(1)</script>\n\ntext <b>bold</b>\n")
        assert "<script>" not in result.html
        assert "<b>" not in result.html
        assert "raw HTML omitted" in result.html

    def test_gfm_extensions_by_default(self):
        """Test strikethrough and task lists under the default flavor."""
        result = render_markdown("~~gone~~\n\n- [x] done\n")
        assert "<del>gone</del>" in result.html
        assert 'type="checkbox"' in result.html

    def test_commonmark_flavor(self):
        """Test that CommonMark leaves extension syntax as text."""
        result = render_markdown("~~gone~~\n", flavor="commonmark")
        assert "<del>" not in result.html
        assert "~~gone~~" in result.html

    def test_unknown_flavor_falls_back(self):
        """Test that unknown flavors render as GFM."""
        assert render_markdown("~~x~~\n", flavor="markdown-extra").html == render_markdown("~~x~~\n").html


@pytest.mark.unit
class TestRenderResult:
    """Test the result container."""

    def test_to_dict_is_json_ready(self):
        """Test stringified line map keys."""
        data = render_markdown("a\nb\n").to_dict()
        assert data["line_map"] == {"1": 0, "2": 2, "3": 4}
        assert json.loads(json.dumps(data)) == data

    def test_frozen(self):
        """Test that results are immutable."""
        result = RenderResult(html="")
        with pytest.raises(AttributeError):
            result.html = "x"  # type: ignore[misc]


@pytest.mark.unit
class TestPackageExports:
    """Test the top-level package."""

    def test_version(self):
        """Test the version string."""
        assert mdsync.__version__ == "0.1.0"

    @pytest.mark.parametrize(
        "name",
        [
            "render_markdown",
            "format_markdown",
            "calculate_text_metrics",
            "calculate_cursor_metrics",
            "get_markdown_flavors",
            "resolve_flavor",
            "FormatterOptions",
            "FormatError",
            "MdSyncError",
        ],
    )
    def test_exported(self, name):
        """Test names available from the package root."""
        assert name in mdsync.__all__
        assert hasattr(mdsync, name)

    def test_format_example(self):
        """Test the package docstring example."""
        assert mdsync.format_markdown("* a\n* b\n", bullet_char="+") == "+ a\n+ b\n"
