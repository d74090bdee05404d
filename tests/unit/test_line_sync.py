#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_line_sync.py
"""Unit tests for data-source-line annotation.

Tests cover:
- Counter advancement over major block tags
- Clamping to the source line count
- Tags that are never stamped (closing, self-closing, inline, comments)
- Byte preservation apart from inserted attributes
- Monotonic, in-range values for arbitrary input

"""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdsync.line_sync import annotate_source_lines, count_source_lines
from mdsync.parsers.markdown import markdown_to_ast
from mdsync.renderers.html import render_html

_VALUE_RE = re.compile(r' data-source-line="(\d+)"')


def _values(html):
    return [int(value) for value in _VALUE_RE.findall(html)]


@pytest.mark.unit
class TestCountSourceLines:
    """Test source line counting."""

    @pytest.mark.parametrize(
        "source,expected",
        [("", 0), ("a", 1), ("a\n", 1), ("a\nb", 2), ("a\nb\n", 2), ("\n", 1), ("\n\n", 2)],
    )
    def test_counts(self, source, expected):
        """Test that a trailing newline does not open a line."""
        assert count_source_lines(source) == expected


@pytest.mark.unit
class TestAnnotateSourceLines:
    """Test attribute insertion."""

    def test_heading_and_paragraph(self):
        """Test the basic two-block case."""
        html = annotate_source_lines("<h1>Title</h1>\n<p>Body</p>\n", "# Title\n\nBody\n")
        assert html == '<h1 data-source-line="1">Title</h1>\n<p data-source-line="2">Body</p>\n'

    def test_counter_clamped_to_source(self):
        """Test that values never exceed the source line count."""
        html = annotate_source_lines("<p>a</p>\n<p>b</p>\n<p>c</p>\n", "one line")
        assert _values(html) == [1, 1, 1]

    def test_empty_source_clamps_to_one(self):
        """Test the lower bound of the clamp."""
        assert _values(annotate_source_lines("<p>a</p>\n<p>b</p>\n", "")) == [1, 1]

    def test_list_container_does_not_advance(self):
        """Test that <ul> is stamped but only <li> advances."""
        html = annotate_source_lines("<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n", "- a\n- b\n- c\n")
        assert html == (
            '<ul data-source-line="1">\n<li data-source-line="1">a</li>\n<li data-source-line="2">b</li>\n</ul>\n'
        )

    def test_existing_attributes_kept(self):
        """Test insertion after existing attributes."""
        html = annotate_source_lines('<ol start="3">\n<li>x</li>\n</ol>\n', "3. x\n")
        assert html.startswith('<ol start="3" data-source-line="1">\n')

    @pytest.mark.parametrize(
        "line",
        ["</p>", "<!-- raw HTML omitted -->", "<hr />", "<span>x</span>", "<br/>", "text only"],
    )
    def test_unstamped_lines(self, line):
        """Test lines that never receive an attribute."""
        assert annotate_source_lines(f"{line}\n", "a\nb\n") == f"{line}\n"

    def test_self_closing_hr_still_advances(self):
        """Test that <hr /> moves the counter without being stamped."""
        html = annotate_source_lines("<hr />\n<p>after</p>\n", "---\n\nafter\n")
        assert html == '<hr />\n<p data-source-line="2">after</p>\n'

    def test_indented_tags(self):
        """Test that leading whitespace is tolerated."""
        assert annotate_source_lines("  <p>x</p>", "x") == '  <p data-source-line="1">x</p>'

    def test_empty_html(self):
        """Test that empty HTML is returned unchanged."""
        assert annotate_source_lines("", "# x") == ""

    def test_only_attributes_inserted(self, sample_markdown):
        """Test that removing the attributes restores the input."""
        html = render_html(markdown_to_ast(sample_markdown))
        annotated = annotate_source_lines(html, sample_markdown)
        assert _VALUE_RE.sub("", annotated) == html
        assert annotated.count("\n") == html.count("\n")


@pytest.mark.unit
@pytest.mark.fuzzing
class TestLineSyncProperties:
    """Property-based checks on rendered documents."""

    @given(st.text(alphabet=st.sampled_from(list("ab #>-*1.`|\n")), max_size=200))
    def test_values_monotonic_and_in_range(self, source):
        """Test that stamped values are in range and never decrease."""
        html = annotate_source_lines(render_html(markdown_to_ast(source)), source)
        values = _values(html)
        upper = max(count_source_lines(source), 1)
        assert all(1 <= value <= upper for value in values)
        assert values == sorted(values)
