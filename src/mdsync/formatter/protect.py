#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/formatter/protect.py
"""Shield box-drawing lines from the pretty-printer.

Text diagrams and directory trees drawn with box-drawing characters rely on
exact spacing that a markdown pretty-printer would collapse. Before
reformatting, every line containing a box-drawing (U+2500-U+257F) or
block-element (U+2580-U+259F) glyph is swapped for its leading indentation
plus an opaque placeholder token. After printing, any output line that
still contains a token is replaced by the original line, byte for byte.

Tokens are plain ASCII letters and digits so the printer treats them as
ordinary words. Each token carries the 0-based index of the source line it
replaced.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from mdsync.constants import PROTECTED_TOKEN_INDEX_WIDTH, PROTECTED_TOKEN_PREFIX, PROTECTED_TOKEN_SUFFIX

logger = logging.getLogger(__name__)

STRUCTURAL_GLYPH_RE = re.compile(r"[\u2500-\u259F]")
PROTECTED_TOKEN_RE = re.compile(
    rf"{PROTECTED_TOKEN_PREFIX}(\d{{{PROTECTED_TOKEN_INDEX_WIDTH},}}){PROTECTED_TOKEN_SUFFIX}"
)


def make_token(index: int) -> str:
    """Build the placeholder token for the 0-based source line ``index``."""
    return f"{PROTECTED_TOKEN_PREFIX}{index:0{PROTECTED_TOKEN_INDEX_WIDTH}d}{PROTECTED_TOKEN_SUFFIX}"


@dataclass
class ProtectedLines:
    """Originals of the lines replaced during one reformat call.

    Parameters
    ----------
    entries : list of (str, str)
        ``(token, original_line)`` pairs in document order

    """

    entries: list[tuple[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def lookup(self) -> dict[str, str]:
        """Map every token to the line it stands for."""
        return dict(self.entries)


def protect_lines(content: str) -> tuple[str, ProtectedLines]:
    """Replace lines containing structural glyphs with placeholder tokens.

    Parameters
    ----------
    content : str
        Markdown source

    Returns
    -------
    tuple[str, ProtectedLines]
        The text with protected lines swapped for ``indentation + token``,
        and the table needed to restore them. Text without glyphs is
        returned unchanged with an empty table.

    Examples
    --------
    >>> text, table = protect_lines("Tree:\\n  ├── src\\n")
    >>> text
    'Tree:\\n  MDSYNCPROTECTEDLINE000001X\\n'
    >>> table.entries
    [('MDSYNCPROTECTEDLINE000001X', '  ├── src')]

    """
    table = ProtectedLines()
    if not STRUCTURAL_GLYPH_RE.search(content):
        return content, table

    lines = content.split("\n")
    for index, line in enumerate(lines):
        if not STRUCTURAL_GLYPH_RE.search(line):
            continue
        token = make_token(index)
        indentation = line[: len(line) - len(line.lstrip(" \t"))]
        table.entries.append((token, line))
        lines[index] = f"{indentation}{token}"

    logger.debug("Protected %d structural lines", len(table))
    return "\n".join(lines), table


def restore_lines(content: str, table: ProtectedLines) -> tuple[str, set[int]]:
    """Put protected lines back in place of their tokens.

    Any line containing a token is replaced as a whole by the original
    line. A line that ended up holding several tokens is replaced by all of
    their originals, one per line, in token order.

    Parameters
    ----------
    content : str
        Pretty-printed markdown
    table : ProtectedLines
        Table returned by :func:`protect_lines`

    Returns
    -------
    tuple[str, set[int]]
        The restored text and the 0-based indices of restored lines in it

    """
    if not table:
        return content, set()

    originals = table.lookup()
    output: list[str] = []
    restored: set[int] = set()
    for line in content.split("\n"):
        found = (match.group(0) for match in PROTECTED_TOKEN_RE.finditer(line))
        replacements = [originals[token] for token in found if token in originals]
        if not replacements:
            output.append(line)
            continue
        for original in replacements:
            restored.add(len(output))
            output.append(original)

    missing = len(table) - len(restored)
    if missing > 0:
        logger.warning("%d protected lines were not found in the formatted output", missing)
    return "\n".join(output), restored
