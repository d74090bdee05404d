#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/path_links.py
"""Wrap file-system paths in rendered HTML with clickable anchors.

The editor intercepts clicks on ``a.file-path-link`` and opens the target
file. Paths are recognized in three shapes:

- drive-letter absolute paths (``C:/dir/file`` or ``C:\\dir\\file``)
- Unix absolute paths with at least two components (``/usr/bin``)
- explicit relative paths (``./file``, ``../dir/file``, ``~/notes.md``)

A path must start the line or follow whitespace. Lines that open with an
anchor, a code element, a ``<pre>`` or a closing tag are left alone, as is
any line mentioning ``<code`` or ``</code>``. Within other lines only text
between tags is considered, and text inside an existing ``<a>`` element or
a multi-line ``<pre>`` block is never rewritten.

"""

from __future__ import annotations

import logging
import re

from mdsync.constants import PATH_LINK_CLASS, PATH_LINK_SKIP_PREFIXES, PATH_LINK_STYLE

logger = logging.getLogger(__name__)

_PATH_PATTERN = (
    r"[A-Za-z]:[/\\][^\s<>\"'|?*`]*"
    r"|(?:\./|\.\./|~/)[^\s<>\"'|?*`]+"
    r"|/(?:[^/\s<>\"'|?*`]+/)+[^/\s<>\"'|?*`]+"
)

_PATH_RE = re.compile(rf"(^|\s)({_PATH_PATTERN})")
_FULL_PATH_RE = re.compile(rf"(?:{_PATH_PATTERN})\Z")

_TAG_SPLIT_RE = re.compile(r"(<[^>]*>)")
_ANCHOR_OPEN_RE = re.compile(r"^<a[\s>]", re.IGNORECASE)
_ANCHOR_CLOSE_RE = re.compile(r"^</a\s*>", re.IGNORECASE)

_TRAILING_PUNCTUATION = ".,;:!)"


def make_path_anchor(path: str) -> str:
    """Build the anchor element for a path.

    Parameters
    ----------
    path : str
        The matched path text

    Returns
    -------
    str
        ``<a>`` element with the file-path-link class and inline style

    """
    return f'<a href="{path}" class="{PATH_LINK_CLASS}" style="{PATH_LINK_STYLE}">{path}</a>'


def _split_trailing_punctuation(path: str) -> tuple[str, str]:
    trimmed = path.rstrip(_TRAILING_PUNCTUATION)
    if trimmed == path or not _FULL_PATH_RE.match(trimmed):
        return path, ""
    return trimmed, path[len(trimmed) :]


def _linkify_text(text: str, at_line_start: bool) -> tuple[str, int]:
    count = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal count
        lead, path = match.group(1), match.group(2)
        if not lead and not (at_line_start and match.start() == 0):
            return match.group(0)
        path, trailing = _split_trailing_punctuation(path)
        count += 1
        return f"{lead}{make_path_anchor(path)}{trailing}"

    return _PATH_RE.sub(replace, text), count


def _should_skip_line(line: str) -> bool:
    stripped = line.lstrip()
    return stripped.startswith(PATH_LINK_SKIP_PREFIXES) or "<code" in line or "</code>" in line


def linkify_paths(html: str) -> str:
    """Wrap file paths found in HTML text with ``file-path-link`` anchors.

    Parameters
    ----------
    html : str
        HTML fragment, one block-level tag per line

    Returns
    -------
    str
        The HTML with every eligible path wrapped in an anchor. Lines
        without a path are returned unchanged.

    Examples
    --------
    >>> linkify_paths("<p>See ./notes.md</p>")  # doctest: +ELLIPSIS
    '<p>See <a href="./notes.md" class="file-path-link" style="...">./notes.md</a></p>'

    """
    if not html:
        return html

    lines = html.split("\n")
    in_pre = False
    anchor_depth = 0
    linked = 0

    for index, line in enumerate(lines):
        lowered = line.lower()
        if in_pre:
            if "</pre>" in lowered:
                in_pre = False
            continue
        pre_start = lowered.rfind("<pre")
        if pre_start != -1 and "</pre>" not in lowered[pre_start:]:
            in_pre = True

        if _should_skip_line(line):
            continue

        parts = _TAG_SPLIT_RE.split(line)
        offset = 0
        changed = False
        for part_index, part in enumerate(parts):
            if part_index % 2 == 1:
                if _ANCHOR_OPEN_RE.match(part):
                    anchor_depth += 1
                elif _ANCHOR_CLOSE_RE.match(part) and anchor_depth > 0:
                    anchor_depth -= 1
            elif part and anchor_depth == 0:
                rewritten, count = _linkify_text(part, at_line_start=offset == 0)
                if count:
                    parts[part_index] = rewritten
                    linked += count
                    changed = True
            offset += len(part)

        if changed:
            lines[index] = "".join(parts)

    if linked:
        logger.debug("Linked %d file paths", linked)
    return "\n".join(lines)
