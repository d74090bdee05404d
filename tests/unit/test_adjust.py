#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_adjust.py
"""Unit tests for post-print line adjustments.

Tests cover:
- Fence scanning with container prefixes
- Bullet and fence conversion outside code bodies
- Nested list re-indentation and clamping
- Hard-break and blank-line normalization
- The combined adjustment entry point

"""

import logging

import pytest

from mdsync.formatter.adjust import (
    CODE_BODY,
    FENCE_CLOSE,
    FENCE_OPEN,
    TEXT,
    Fence,
    adjust_formatted_markdown,
    convert_bullets,
    convert_fences_to_tilde,
    limit_blank_lines,
    normalize_hard_breaks,
    rescale_list_indent,
    scan_fences,
)
from mdsync.options.formatter import FormatterOptions


@pytest.mark.unit
class TestScanFences:
    """Test line classification."""

    def test_basic_fence(self):
        """Test opener, body and closer."""
        kinds, fences = scan_fences(["text", "```py", "x = 1", "```", "after"])
        assert kinds == [TEXT, FENCE_OPEN, CODE_BODY, FENCE_CLOSE, TEXT]
        assert fences[0].open_index == 1
        assert fences[0].close_index == 3

    def test_shorter_closer_is_body(self):
        """Test that a closer must be at least as long as the opener."""
        kinds, fences = scan_fences(["````", "```", "````"])
        assert kinds == [FENCE_OPEN, CODE_BODY, FENCE_CLOSE]
        assert fences[0].length == 4

    def test_fence_in_blockquote_and_list(self):
        """Test fences behind container markers."""
        kinds, _ = scan_fences(["> ```", "> code", "> ```", "- ~~~", "  code", "  ~~~"])
        assert kinds == [FENCE_OPEN, CODE_BODY, FENCE_CLOSE, FENCE_OPEN, CODE_BODY, FENCE_CLOSE]

    def test_backtick_in_info_is_not_a_fence(self):
        """Test that a backtick fence info string cannot hold backticks."""
        kinds, fences = scan_fences(["``` a`b", "text"])
        assert kinds == [TEXT, TEXT]
        assert fences == []

    def test_unclosed_fence(self):
        """Test a fence running to the end of the document."""
        kinds, fences = scan_fences(["```", "code"])
        assert kinds == [FENCE_OPEN, CODE_BODY]
        assert fences[0].close_index is None

    def test_protected_lines_never_open(self):
        """Test that restored lines are skipped."""
        kinds, _ = scan_fences(["```", "text"], protected={0})
        assert kinds == [TEXT, TEXT]


@pytest.mark.unit
class TestConvertBullets:
    """Test bullet marker conversion."""

    def test_nested_and_quoted_markers(self):
        """Test markers at every nesting level."""
        lines = ["- a", "  - b", "> - quoted", "- - chained"]
        assert convert_bullets(lines) == ["+ a", "  + b", "> + quoted", "+ + chained"]

    def test_code_and_rules_untouched(self):
        """Test that code bodies and thematic breaks keep their dashes."""
        lines = ["---", "```", "- not a list", "```", "text - dash"]
        assert convert_bullets(lines) == lines

    def test_protected_line_untouched(self):
        """Test protected line indices."""
        assert convert_bullets(["- ├ a"], protected={0}) == ["- ├ a"]


@pytest.mark.unit
class TestConvertFences:
    """Test backtick to tilde fence conversion."""

    def test_simple_fence(self):
        """Test info strings survive conversion."""
        assert convert_fences_to_tilde(["```js", "code", "```"]) == ["~~~js", "code", "~~~"]

    def test_tilde_run_in_body(self):
        """Test that the fence outgrows tilde runs in the body."""
        result = convert_fences_to_tilde(["```", "a ~~~~ b", "```"])
        assert result == ["~~~~~", "a ~~~~ b", "~~~~~"]

    def test_fence_inside_list(self):
        """Test that container prefixes are preserved."""
        result = convert_fences_to_tilde(["- ```sh", "  ls", "  ```"])
        assert result == ["- ~~~sh", "  ls", "  ~~~"]

    def test_tilde_fences_unchanged(self):
        """Test that existing tilde fences are left alone."""
        lines = ["~~~", "```", "~~~"]
        assert convert_fences_to_tilde(lines) == lines

    def test_unmatched_opener_skipped(self, monkeypatch):
        """Test that a fence whose opener no longer matches is left as it is."""

        def fake_scan(lines, protected=()):
            return [FENCE_OPEN, CODE_BODY], [Fence(open_index=0, close_index=None, char="`", length=3)]

        monkeypatch.setattr("mdsync.formatter.adjust.scan_fences", fake_scan)
        assert convert_fences_to_tilde(["not a fence", "body"]) == ["not a fence", "body"]


@pytest.mark.unit
class TestRescaleListIndent:
    """Test nested list re-indentation."""

    def test_widen_nesting(self):
        """Test four-column nesting."""
        lines = ["- a", "  - b", "    - c", "- d"]
        assert rescale_list_indent(lines, 4) == ["- a", "    - b", "        - c", "- d"]

    def test_continuation_moves_with_item(self):
        """Test continuation paragraphs of a nested item."""
        lines = ["- a", "  - b", "", "    more b", "- c"]
        assert rescale_list_indent(lines, 4) == ["- a", "    - b", "", "      more b", "- c"]

    def test_narrow_indent_clamped_to_marker_width(self):
        """Test that nesting never drops below the parent marker width."""
        lines = ["- a", "  - b"]
        assert rescale_list_indent(lines, 1) == lines

    def test_wide_indent_capped(self):
        """Test the cap three columns past the marker width."""
        lines = ["1. a", "   - b"]
        assert rescale_list_indent(lines, 8) == ["1. a", "      - b"]

    @pytest.mark.parametrize("list_indent,expected", [(1, "2"), (8, "5")])
    def test_adjusted_indent_logged(self, caplog, list_indent, expected):
        """Test that widening or capping the requested indent is reported."""
        with caplog.at_level(logging.WARNING, logger="mdsync.formatter.adjust"):
            rescale_list_indent(["- a", "  - b"], list_indent)
        assert f"list_indent={list_indent}" in caplog.text
        assert f"use {expected} columns" in caplog.text

    def test_fitting_indent_not_logged(self, caplog):
        """Test that an indent inside the allowed range logs nothing."""
        with caplog.at_level(logging.WARNING, logger="mdsync.formatter.adjust"):
            rescale_list_indent(["- a", "  - b"], 4)
        assert caplog.records == []

    def test_code_body_moves_with_item(self):
        """Test fenced code inside a nested item."""
        lines = ["- a", "  - b", "    ```", "    code", "    ```"]
        assert rescale_list_indent(lines, 4) == ["- a", "    - b", "      ```", "      code", "      ```"]

    def test_top_level_unchanged(self):
        """Test that top-level items and paragraphs never move."""
        lines = ["- a", "- b", "", "para"]
        assert rescale_list_indent(lines, 4) == lines


@pytest.mark.unit
class TestHardBreaksAndBlankLines:
    """Test hard-break and blank-line passes."""

    def test_hard_break_parity(self):
        """Test that only an odd backslash run is a hard break."""
        lines = ["a\\", "b", "c\\\\", "d", "e\\", ""]
        assert normalize_hard_breaks(lines) == ["a  ", "b", "c\\\\", "d", "e\\", ""]

    def test_hard_break_in_code_untouched(self):
        """Test that backslashes in code are literal."""
        lines = ["```", "echo \\", "x", "```"]
        assert normalize_hard_breaks(lines) == lines

    def test_blank_runs_capped(self):
        """Test blank run limiting and whitespace-only lines."""
        lines = ["a", "", "", "", "b", "  ", "c"]
        assert limit_blank_lines(lines, 1) == ["a", "", "b", "", "c"]

    def test_blank_lines_in_code_kept(self):
        """Test code bodies keep every blank line."""
        lines = ["```", "", "", "", "```"]
        assert limit_blank_lines(lines, 0) == lines

    def test_zero_cap_keeps_block_separator(self):
        """Test that a zero cap still leaves one blank line between blocks."""
        lines = ["- a", "- b", "", "", "", "para"]
        assert limit_blank_lines(lines, 0) == ["- a", "- b", "", "para"]

    def test_zero_cap_removes_padding(self):
        """Test that whitespace-only lines are emptied under a zero cap."""
        assert limit_blank_lines(["a", "   ", "  ", "b"], 0) == ["a", "", "b"]


@pytest.mark.unit
class TestAdjustFormattedMarkdown:
    """Test the combined adjustment pass."""

    def test_defaults_leave_printer_output(self):
        """Test that default options need no adjustment."""
        text = "- a\n  - b\n\n```\ncode\n```\n"
        assert adjust_formatted_markdown(text, FormatterOptions()) == text

    def test_all_conventions(self):
        """Test every adjustment together."""
        options = FormatterOptions(bullet_char="+", code_block_fence="~~~", list_indent=4)
        text = "- a\n  - b\n\n```sh\nls - x\n```\n"
        assert adjust_formatted_markdown(text, options) == "+ a\n    + b\n\n~~~sh\nls - x\n~~~\n"

    def test_hard_break_converted(self):
        """Test the trailing backslash rewrite."""
        assert adjust_formatted_markdown("line\\\nnext\n", FormatterOptions()) == "line  \nnext\n"

    def test_protected_indices_respected(self):
        """Test that restored lines are not adjusted."""
        options = FormatterOptions(bullet_char="+")
        text = "- a\n- ├ tree\n"
        assert adjust_formatted_markdown(text, options, protected={1}) == "+ a\n- ├ tree\n"

    def test_no_trailing_newline_preserved(self):
        """Test that a missing final newline stays missing."""
        assert adjust_formatted_markdown("- a", FormatterOptions(bullet_char="+")) == "+ a"
