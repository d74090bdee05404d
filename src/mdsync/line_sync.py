#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/line_sync.py
"""Source line annotation for rendered HTML.

This module stamps block-level opening tags in rendered HTML with a
``data-source-line`` attribute so an editor can scroll the preview and the
source together. The mapping is heuristic: it walks the HTML line by line
and advances a counter over the "major" block tags, assuming the renderer
emits one block tag per line. It never consults parser positions, which
keeps it usable on any HTML that follows the one-block-per-line layout.

Guarantees
----------
- Every stamped value lies in ``[1, max(1, source line count)]``.
- Stamped values never decrease from the top of the document to the bottom.
- Only whole-attribute insertions are made; no other byte of the HTML
  changes and the line structure (including a trailing newline) is kept.

Examples
--------
    >>> annotate_source_lines("<h1>Title</h1>\\n<p>Body</p>\\n", "# Title\\n\\nBody\\n")
    '<h1 data-source-line="1">Title</h1>\\n<p data-source-line="2">Body</p>\\n'

"""

from __future__ import annotations

import logging
import re

from mdsync.constants import SOURCE_LINE_ADVANCE_PREFIXES, SOURCE_LINE_ATTRIBUTE, SOURCE_LINE_BLOCK_TAGS

logger = logging.getLogger(__name__)

# Leading whitespace, tag name and attribute text of the first tag on a line
_OPENING_TAG_RE = re.compile(r"^(\s*)<([A-Za-z][A-Za-z0-9]*)([^>]*)>")


def count_source_lines(source: str) -> int:
    """Count lines the way the editor numbers them.

    A trailing newline does not open a new line; empty text has no lines.

    Parameters
    ----------
    source : str
        Markdown source

    Returns
    -------
    int
        Number of source lines

    """
    if not source:
        return 0
    count = source.count("\n")
    if not source.endswith("\n"):
        count += 1
    return count


def _advances_counter(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and stripped.startswith(SOURCE_LINE_ADVANCE_PREFIXES)


def _stamp(line: str, source_line: int) -> str:
    match = _OPENING_TAG_RE.match(line)
    if match is None:
        return line

    tag_name = match.group(2).lower()
    attributes = match.group(3)
    if tag_name not in SOURCE_LINE_BLOCK_TAGS or attributes.rstrip().endswith("/"):
        return line

    insert_at = match.end() - 1
    return f'{line[:insert_at]} {SOURCE_LINE_ATTRIBUTE}="{source_line}"{line[insert_at:]}'


def annotate_source_lines(html: str, source: str) -> str:
    """Insert ``data-source-line`` attributes into block-level opening tags.

    The counter starts at 1 and is clamped to the source line count. Each
    HTML line whose first tag opens a recognized block element is stamped
    with the current counter; after each line the counter advances if the
    trimmed line starts with a heading, paragraph, list item, code block,
    blockquote, table, table row or horizontal rule tag. Closing tags,
    comments, self-closing tags and blank lines never advance it.

    Parameters
    ----------
    html : str
        HTML rendered with one block-level tag per line
    source : str
        Markdown source the HTML was rendered from

    Returns
    -------
    str
        The HTML with attributes inserted

    """
    if not html:
        return html

    max_line = max(count_source_lines(source), 1)
    counter = 1
    stamped = 0

    lines = html.split("\n")
    for index, line in enumerate(lines):
        if line:
            annotated = _stamp(line, min(counter, max_line))
            if annotated is not line:
                stamped += 1
            lines[index] = annotated
        if _advances_counter(line):
            counter += 1

    logger.debug("Annotated %d block tags across %d source lines", stamped, max_line)
    return "\n".join(lines)
