#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/formatter/adjust.py
"""Line-level adjustments applied after pretty-printing.

The pretty-printer emits one house style: ``-`` bullets, backtick fences,
list content indented to the marker width and trailing-backslash hard
breaks. The passes in this module move that output to the conventions
requested in :class:`~mdsync.options.FormatterOptions`:

1. Bullets: ``-`` markers become ``+`` when ``bullet_char`` is ``+``.
2. Fences: backtick fences become tilde fences when ``code_block_fence``
   starts with ``~``.
3. List indentation: nested list items move to ``list_indent`` columns per
   level, dragging their continuation lines and code along.
4. Hard breaks: a trailing backslash becomes two trailing spaces.
5. Blank lines: runs longer than ``max_blank_lines`` (at least one) are
   shortened when ``normalize_whitespace`` is set.

Code block bodies and restored protected lines are never edited by any
pass; only the fence lines themselves are rewritten. Every pass is a pure
string transform that cannot fail, and each runs only when it has
something to do.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Collection, Optional

from mdsync.constants import PRINTER_LIST_INDENT
from mdsync.options.formatter import FormatterOptions

logger = logging.getLogger(__name__)

# Container prefix (blockquote markers, list markers, indentation) and a fence run
FENCE_OPEN_RE = re.compile(
    r"^(?P<prefix>(?:[ \t]*(?:>[ \t]?|(?:[-*+]|\d{1,9}[.)])[ \t]+))*[ \t]*)(?P<fence>`{3,}|~{3,})(?P<info>.*)$"
)
FENCE_CLOSE_PREFIX_RE = re.compile(r"^(?:[ \t]*>[ \t]?)*[ \t]*")

# One or more list markers (and blockquote markers) at the start of a line
MARKER_CHAIN_RE = re.compile(r"^(?:[ \t]*(?:>|[-*+]|\d{1,9}[.)])(?:[ \t]+|$))+")
DASH_MARKER_RE = re.compile(r"(?<![^ \t>])-(?=[ \t]|$)")

LIST_ITEM_RE = re.compile(r"^(?P<indent> *)(?P<marker>[-*+]|\d{1,9}[.)])(?P<space> +|$)")

TRAILING_BACKSLASHES_RE = re.compile(r"\\+$")
TILDE_RUN_RE = re.compile(r"~+")

TEXT, FENCE_OPEN, CODE_BODY, FENCE_CLOSE = "text", "open", "body", "close"


@dataclass
class Fence:
    """A fenced code block located in the output lines."""

    open_index: int
    close_index: Optional[int]
    char: str
    length: int


def scan_fences(lines: list[str], protected: Collection[int] = ()) -> tuple[list[str], list[Fence]]:
    """Classify each line as text, fence opener, code body or fence closer.

    A fence closes on a line holding only the same fence character, at
    least as many times as the opener, behind any blockquote markers and
    indentation. Protected lines never open a fence.

    Parameters
    ----------
    lines : list[str]
        Document lines without terminators
    protected : collection of int
        Indices of restored protected lines

    Returns
    -------
    tuple[list[str], list[Fence]]
        Line kinds (``"text"``, ``"open"``, ``"body"``, ``"close"``) and
        the fences found, in order

    """
    kinds: list[str] = []
    fences: list[Fence] = []
    current: Fence | None = None

    for index, line in enumerate(lines):
        if current is not None:
            rest = line[FENCE_CLOSE_PREFIX_RE.match(line).end() :].rstrip()  # type: ignore[union-attr]
            if rest and len(rest) >= current.length and rest == current.char * len(rest):
                current.close_index = index
                kinds.append(FENCE_CLOSE)
                current = None
            else:
                kinds.append(CODE_BODY)
            continue

        match = FENCE_OPEN_RE.match(line) if index not in protected else None
        if match and not (match.group("fence")[0] == "`" and "`" in match.group("info")):
            fence = match.group("fence")
            current = Fence(open_index=index, close_index=None, char=fence[0], length=len(fence))
            fences.append(current)
            kinds.append(FENCE_OPEN)
        else:
            kinds.append(TEXT)

    return kinds, fences


def convert_bullets(lines: list[str], protected: Collection[int] = ()) -> list[str]:
    """Turn ``-`` list markers into ``+`` markers outside code blocks."""
    kinds, _ = scan_fences(lines, protected)
    result = list(lines)
    for index, line in enumerate(lines):
        if index in protected or kinds[index] not in (TEXT, FENCE_OPEN):
            continue
        match = MARKER_CHAIN_RE.match(line)
        if match and "-" in match.group(0):
            chain = DASH_MARKER_RE.sub("+", match.group(0))
            result[index] = chain + line[match.end() :]
    return result


def convert_fences_to_tilde(lines: list[str], protected: Collection[int] = ()) -> list[str]:
    """Rewrite backtick fences as tilde fences.

    The tilde fence is made longer than any tilde run in the code body so
    the body can never close it early. Bodies are left untouched.
    """
    _, fences = scan_fences(lines, protected)
    result = list(lines)
    for fence in fences:
        if fence.char != "`":
            continue
        end = fence.close_index if fence.close_index is not None else len(lines)
        body = "\n".join(lines[fence.open_index + 1 : end])
        longest = max((len(m.group(0)) for m in TILDE_RUN_RE.finditer(body)), default=0)
        tildes = "~" * max(3, longest + 1)

        match = FENCE_OPEN_RE.match(lines[fence.open_index])
        if match is None:
            continue
        result[fence.open_index] = f"{match.group('prefix')}{tildes}{match.group('info')}"

        if fence.close_index is not None:
            closer = lines[fence.close_index]
            prefix_end = FENCE_CLOSE_PREFIX_RE.match(closer).end()  # type: ignore[union-attr]
            result[fence.close_index] = f"{closer[:prefix_end]}{tildes}"
    return result


@dataclass
class _ListLevel:
    old_marker: int
    old_content: int
    new_marker: int
    marker_width: int

    @property
    def delta(self) -> int:
        return self.new_marker - self.old_marker


def _shift(line: str, delta: int) -> str:
    if not line or delta == 0:
        return line
    if delta > 0:
        return " " * delta + line
    removable = len(line) - len(line.lstrip(" "))
    return line[min(removable, -delta) :]


def rescale_list_indent(
    lines: list[str],
    list_indent: int,
    protected: Collection[int] = (),
) -> list[str]:
    """Re-indent nested list items to ``list_indent`` columns per level.

    Each nested item is placed ``list_indent`` columns right of its parent's
    marker, widened to the parent's marker width and capped three columns
    beyond it so the item stays nested and never turns into indented code.
    Continuation lines and code bodies move with the item they belong to.
    Siblings share one column.
    A warning is logged when ``list_indent`` had to be widened or capped.

    Parameters
    ----------
    lines : list[str]
        Printed lines, nested at the printer's native indentation
    list_indent : int
        Requested columns per nesting level
    protected : collection of int
        Indices of restored protected lines, left untouched

    Returns
    -------
    list[str]
        Re-indented lines

    """
    kinds, _ = scan_fences(lines, protected)
    stack: list[_ListLevel] = []
    code_delta = 0
    used_offsets: set[int] = set()
    result: list[str] = []

    for index, line in enumerate(lines):
        kind = kinds[index]
        if kind in (CODE_BODY, FENCE_CLOSE):
            result.append(_shift(line, code_delta))
            continue
        if index in protected or not line.strip():
            result.append(line)
            continue

        indent = len(line) - len(line.lstrip(" "))
        sibling_marker: int | None = None
        while stack and indent < stack[-1].old_content:
            popped = stack.pop()
            if popped.old_marker == indent:
                sibling_marker = popped.new_marker

        match = LIST_ITEM_RE.match(line)
        if match:
            line = _push_items(stack, line, indent, sibling_marker, list_indent, used_offsets)
        elif stack:
            line = _shift(line, stack[-1].delta)

        if kind == FENCE_OPEN:
            code_delta = stack[-1].delta if stack else 0
        result.append(line)

    adjusted = sorted(used_offsets - {list_indent})
    if adjusted:
        logger.warning(
            "list_indent=%d does not fit the list markers; nested items use %s columns instead",
            list_indent,
            ", ".join(str(offset) for offset in adjusted),
        )
    return result


def _push_items(
    stack: list[_ListLevel],
    line: str,
    indent: int,
    sibling_marker: int | None,
    list_indent: int,
    used_offsets: set[int],
) -> str:
    """Place a list item line and record it (plus any items chained on the same line)."""
    if sibling_marker is not None:
        new_marker = sibling_marker
    elif stack:
        parent = stack[-1]
        offset = min(max(list_indent, parent.marker_width), parent.marker_width + 3)
        used_offsets.add(offset)
        new_marker = parent.new_marker + offset
    else:
        new_marker = indent

    content = line[indent:]
    shifted = " " * new_marker + content

    # Items opened on the same line (``- - item``) cannot move independently
    position = 0
    old_marker, new_at = indent, new_marker
    while True:
        match = LIST_ITEM_RE.match(content[position:])
        if not match or (position and match.group("indent")):
            break
        width = len(match.group("marker")) + max(len(match.group("space")), 1)
        stack.append(
            _ListLevel(old_marker=old_marker, old_content=old_marker + width, new_marker=new_at, marker_width=width)
        )
        position += match.end()
        old_marker += width
        new_at += width
        if not match.group("space"):
            break
    return shifted


def normalize_hard_breaks(lines: list[str], protected: Collection[int] = ()) -> list[str]:
    """Turn a trailing hard-break backslash into two trailing spaces.

    Only an odd run of trailing backslashes ends in a hard break; an even
    run is a sequence of escaped backslashes. The next line must hold text,
    since a hard break never ends a block.
    """
    kinds, _ = scan_fences(lines, protected)
    result = list(lines)
    for index, line in enumerate(lines[:-1]):
        if index in protected or kinds[index] != TEXT:
            continue
        match = TRAILING_BACKSLASHES_RE.search(line)
        if not match or len(match.group(0)) % 2 == 0:
            continue
        if not lines[index + 1].strip():
            continue
        result[index] = f"{line[:-1]}  "
    return result


def limit_blank_lines(lines: list[str], max_blank_lines: int, protected: Collection[int] = ()) -> list[str]:
    """Empty whitespace-only lines and cap blank runs outside code blocks.

    A run is never shortened below one line: the blank line between two
    blocks is what keeps them apart, so ``max_blank_lines=0`` behaves like 1.
    """
    cap = max(max_blank_lines, 1)
    kinds, _ = scan_fences(lines, protected)
    result: list[str] = []
    run = 0
    for index, line in enumerate(lines):
        if kinds[index] == TEXT and index not in protected and not line.strip():
            run += 1
            if run <= cap:
                result.append("")
            continue
        run = 0
        result.append(line)
    return result


def adjust_formatted_markdown(
    content: str,
    options: FormatterOptions,
    protected: Collection[int] = (),
) -> str:
    """Apply every post-print adjustment the options call for.

    Parameters
    ----------
    content : str
        Pretty-printed markdown with protected lines restored
    options : FormatterOptions
        Style conventions
    protected : collection of int
        0-based indices of restored protected lines

    Returns
    -------
    str
        Adjusted markdown. When no pass applies the input is returned
        unchanged.

    """
    bullets = options.bullet_char == "+"
    tildes = options.code_block_fence.startswith("~") and "```" in content
    rescale = options.list_indent != PRINTER_LIST_INDENT
    hard_breaks = "\\\n" in content
    blanks = options.normalize_whitespace and (
        "\n" * (max(options.max_blank_lines, 1) + 2) in content or bool(re.search(r"\n[ \t]+\n", content))
    )

    if not (bullets or tildes or rescale or hard_breaks or blanks):
        logger.debug("No post-print adjustments needed")
        return content

    trailing_newline = content.endswith("\n")
    lines = (content[:-1] if trailing_newline else content).split("\n")
    protected = frozenset(protected)

    applied: list[str] = []
    if bullets:
        lines = convert_bullets(lines, protected)
        applied.append("bullets")
    if tildes:
        lines = convert_fences_to_tilde(lines, protected)
        applied.append("fences")
    if rescale:
        lines = rescale_list_indent(lines, options.list_indent, protected)
        applied.append("list-indent")
    if hard_breaks:
        lines = normalize_hard_breaks(lines, protected)
        applied.append("hard-breaks")
    if blanks:
        lines = limit_blank_lines(lines, options.max_blank_lines, protected)
        applied.append("blank-lines")

    logger.debug("Applied post-print adjustments: %s", ", ".join(applied))
    result = "\n".join(lines)
    return f"{result}\n" if trailing_newline else result
