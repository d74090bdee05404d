#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/metrics.py
"""Document and cursor statistics for the editor status bar.

All positions exchanged with the editor are UTF-8 byte offsets, while every
count reported back (characters, columns, line lengths) is in Unicode code
points. Lines are delimited by ``\\n``; a trailing newline does not open a
new counted line and a ``\\r`` before the newline is not counted as a column.

Functions
---------
calculate_text_metrics : Line, word, character and widest-column counts
calculate_cursor_metrics : Text metrics plus the position of a cursor
build_line_map : 1-based line number to UTF-8 byte offset of the line start

"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any

logger = logging.getLogger(__name__)

# Letter, digit and underscore runs, joined across inner apostrophes, periods and colons
WORD_RE = re.compile(r"\w+(?:['’.:·]\w+)*")


@dataclass(frozen=True)
class TextMetrics:
    """Counts describing a whole document.

    Parameters
    ----------
    line_count : int
        Number of lines (0 for empty text)
    word_count : int
        Number of word tokens
    char_count : int
        Number of code points, newlines included
    widest_column : int
        Code points in the longest line, terminator excluded

    """

    line_count: int
    word_count: int
    char_count: int
    widest_column: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CursorMetrics:
    """Document counts plus the cursor position.

    Parameters
    ----------
    line_count : int
        Number of lines in the document
    word_count : int
        Number of words in the document
    char_count : int
        Number of code points in the document
    cursor_line : int
        1-based line of the cursor
    cursor_col : int
        1-based column of the cursor, in code points
    current_line_length : int
        Code points on the cursor's line, terminator excluded
    current_word_index : int
        Number of words that start before the cursor

    """

    line_count: int
    word_count: int
    char_count: int
    cursor_line: int
    cursor_col: int
    current_line_length: int
    current_word_index: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return asdict(self)


def _split_lines(content: str) -> list[str]:
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _line_width(line: str) -> int:
    return len(line[:-1]) if line.endswith("\r") else len(line)


def count_words(text: str) -> int:
    """Count word tokens in text.

    A word is a run of letters, digits and underscores. Scripts written
    without spaces between words, such as Chinese or Japanese, count each
    unbroken run as a single word, so their counts are an approximation.
    Words never span a line break.
    """
    return sum(1 for _ in WORD_RE.finditer(text))


def calculate_text_metrics(content: str) -> TextMetrics:
    """Compute line, word, character and widest-column counts in one pass over the lines.

    Parameters
    ----------
    content : str
        Document text

    Returns
    -------
    TextMetrics
        Document counts

    Examples
    --------
    >>> calculate_text_metrics("a b\\nc\\n")
    TextMetrics(line_count=2, word_count=3, char_count=6, widest_column=3)
    >>> calculate_text_metrics("")
    TextMetrics(line_count=0, word_count=0, char_count=0, widest_column=0)

    """
    line_count = words = widest = 0
    for line in _split_lines(content):
        line_count += 1
        words += count_words(line)
        widest = max(widest, _line_width(line))
    return TextMetrics(
        line_count=line_count,
        word_count=words,
        char_count=len(content),
        widest_column=widest,
    )


def build_line_map(content: str) -> dict[int, int]:
    """Map each 1-based line number to the UTF-8 byte offset of its start.

    Line 1 starts at offset 0 and a new line starts after every ``\\n``,
    so a trailing newline adds one final entry pointing at the end of the
    text.

    Parameters
    ----------
    content : str
        Document text

    Returns
    -------
    dict[int, int]
        Ordered mapping of line number to byte offset

    Examples
    --------
    >>> build_line_map("a\\nbé\\n")
    {1: 0, 2: 2, 3: 6}

    """
    line_map = {1: 0}
    offset = 0
    line = 1
    for segment in content.split("\n")[:-1]:
        offset += len(segment.encode("utf-8")) + 1
        line += 1
        line_map[line] = offset
    return line_map


def _char_index_for_byte_offset(encoded: bytes, byte_offset: int) -> int:
    """Clamp a byte offset into the text and snap it back to a code point boundary."""
    offset = min(max(byte_offset, 0), len(encoded))
    # UTF-8 continuation bytes look like 0b10xxxxxx
    while offset > 0 and offset < len(encoded) and (encoded[offset] & 0xC0) == 0x80:
        offset -= 1
    return len(encoded[:offset].decode("utf-8"))


def calculate_cursor_metrics(content: str, byte_offset: int) -> CursorMetrics:
    """Compute document counts and the position of a cursor.

    Parameters
    ----------
    content : str
        Document text
    byte_offset : int
        Cursor position as a UTF-8 byte offset. Values outside the text are
        clamped and offsets inside a multi-byte character snap back to the
        start of that character.

    Returns
    -------
    CursorMetrics
        Counts plus cursor line, column, line length and word index

    Examples
    --------
    >>> m = calculate_cursor_metrics("one two\\nthree", 10)
    >>> (m.cursor_line, m.cursor_col, m.current_line_length, m.current_word_index)
    (2, 3, 5, 3)

    """
    text_metrics = calculate_text_metrics(content)
    encoded = content.encode("utf-8")
    index = _char_index_for_byte_offset(encoded, byte_offset)

    prefix = content[:index]
    line_start = prefix.rfind("\n") + 1
    line_end = content.find("\n", index)
    if line_end == -1:
        line_end = len(content)

    metrics = CursorMetrics(
        line_count=text_metrics.line_count,
        word_count=text_metrics.word_count,
        char_count=text_metrics.char_count,
        cursor_line=prefix.count("\n") + 1,
        cursor_col=index - line_start + 1,
        current_line_length=_line_width(content[line_start:line_end]),
        current_word_index=count_words(prefix),
    )
    logger.debug("Cursor at byte %d resolved to line %d col %d", byte_offset, metrics.cursor_line, metrics.cursor_col)
    return metrics
