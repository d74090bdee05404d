#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_protect.py
"""Unit tests for box-drawing line protection.

Tests cover:
- Token generation and indentation handling
- Texts without structural glyphs
- Whole-line restoration, including merged and missing tokens
- Property-based byte identity of protected lines

"""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdsync.formatter.protect import (
    PROTECTED_TOKEN_RE,
    ProtectedLines,
    make_token,
    protect_lines,
    restore_lines,
)


@pytest.mark.unit
class TestProtectLines:
    """Test replacing structural lines with tokens."""

    def test_token_format(self):
        """Test that tokens are plain alphanumerics."""
        token = make_token(12)
        assert token == "MDSYNCPROTECTEDLINE000012X"
        assert token.isalnum()
        assert PROTECTED_TOKEN_RE.fullmatch(token)

    def test_wide_index_still_recognized(self):
        """Test that indices wider than the padding still form valid tokens."""
        token = make_token(1_234_567)
        assert token == "MDSYNCPROTECTEDLINE1234567X"
        assert PROTECTED_TOKEN_RE.fullmatch(token).group(1) == "1234567"

    def test_indentation_kept(self):
        """Test that leading indentation stays in front of the token."""
        text, table = protect_lines("Tree:\n  ├── src\n")
        assert text == "Tree:\n  MDSYNCPROTECTEDLINE000001X\n"
        assert table.entries == [("MDSYNCPROTECTEDLINE000001X", "  ├── src")]

    def test_no_glyphs(self):
        """Test that plain text is returned untouched."""
        text, table = protect_lines("# Title\n\n- item\n")
        assert text == "# Title\n\n- item\n"
        assert not table
        assert len(table) == 0

    def test_block_elements_are_protected(self):
        """Test the block-element range."""
        text, table = protect_lines("bar ▇▇▇▁▁\n")
        assert text == f"{make_token(0)}\n"
        assert len(table) == 1

    def test_tokens_carry_source_line_index(self):
        """Test that each token names the line it replaced."""
        source = "┌──┐\nplain\n└──┘"
        text, table = protect_lines(source)
        assert text.split("\n") == [make_token(0), "plain", make_token(2)]
        assert [original for _, original in table.entries] == ["┌──┐", "└──┘"]

    def test_lookup(self):
        """Test the token to line mapping."""
        _, table = protect_lines("│ a\n│ b")
        assert table.lookup() == {make_token(0): "│ a", make_token(1): "│ b"}


@pytest.mark.unit
class TestRestoreLines:
    """Test putting protected lines back."""

    def test_empty_table(self):
        """Test that an empty table is a no-op."""
        assert restore_lines("anything\n", ProtectedLines()) == ("anything\n", set())

    def test_restore_replaces_whole_line(self):
        """Test that surrounding printer output is discarded."""
        _, table = protect_lines("    ├── a")
        text, restored = restore_lines(f"- {make_token(0)}\nnext", table)
        assert text == "    ├── a\nnext"
        assert restored == {0}

    def test_merged_tokens_expand(self):
        """Test a line that ended up holding two tokens."""
        _, table = protect_lines("├ a\n└ b")
        text, restored = restore_lines(f"intro\n{make_token(0)} {make_token(1)}\n", table)
        assert text == "intro\n├ a\n└ b\n"
        assert restored == {1, 2}

    def test_unknown_token_left_alone(self):
        """Test that tokens not in the table are kept as text."""
        _, table = protect_lines("├ a")
        stray = make_token(7)
        text, _ = restore_lines(f"{make_token(0)}\n{stray}", table)
        assert text == f"├ a\n{stray}"

    def test_missing_token_logs_warning(self, caplog):
        """Test the warning when a token vanished from the output."""
        _, table = protect_lines("├ a\n└ b")
        with caplog.at_level(logging.WARNING, logger="mdsync.formatter.protect"):
            restore_lines(make_token(0), table)
        assert "1 protected lines were not found" in caplog.text

    def test_round_trip_without_printer(self):
        """Test that protect followed by restore returns the input."""
        source = "# Tree\n\n```\n.\n├── src\n│   └── main.py\n└── tests\n```\n"
        text, table = protect_lines(source)
        assert restore_lines(text, table)[0] == source


@pytest.mark.unit
@pytest.mark.fuzzing
class TestProtectProperties:
    """Property-based tests for protection."""

    glyph_lines = st.lists(
        st.one_of(
            st.text(alphabet=st.characters(blacklist_characters="\n", blacklist_categories=("Cs",)), max_size=20),
            st.builds(
                lambda pad, glyph, tail: f"{pad}{glyph}{tail}",
                st.sampled_from(["", "  ", "\t", "    "]),
                st.sampled_from(["├", "└", "│", "─", "┌", "█", "▒"]),
                st.text(alphabet="abc ─│", max_size=10),
            ),
        ),
        max_size=15,
    )

    @given(lines=glyph_lines)
    def test_protected_lines_restored_byte_for_byte(self, lines):
        """Test that restore reproduces every original line exactly."""
        source = "\n".join(lines)
        text, table = protect_lines(source)
        assert not any("─" <= ch <= "▟" for ch in text)
        restored, indices = restore_lines(text, table)
        assert restored == source
        assert len(indices) == len(table)
