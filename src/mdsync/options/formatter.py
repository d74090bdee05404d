#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the markdown reformatter.

Options are validated loosely: a value of the wrong type or outside its
allowed set is replaced by the field default and a warning is logged. Option
handling never raises, so a reformat request can only fail in the
pretty-print stage.
"""
# src/mdsync/options/formatter.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from mdsync.constants import (
    DEFAULT_BULLET_CHAR,
    DEFAULT_CODE_BLOCK_FENCE,
    DEFAULT_EMPHASIS_CHAR,
    DEFAULT_LIST_INDENT,
    DEFAULT_MAX_BLANK_LINES,
    DEFAULT_NORMALIZE_WHITESPACE,
    DEFAULT_TABLE_ALIGNMENT,
    VALID_BULLET_CHARS,
    VALID_CODE_BLOCK_FENCES,
    VALID_EMPHASIS_CHARS,
    BulletChar,
    CodeFence,
    EmphasisChar,
)
from mdsync.options.base import BaseRendererOptions

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "no", "off"})


@dataclass(frozen=True)
class FormatterOptions(BaseRendererOptions):
    """Style conventions applied when reformatting markdown.

    Parameters
    ----------
    flavor : Flavor, default Flavor.GFM
        Flavor used to parse the document. Pipe tables are only recognized
        (and realigned) under GFM.
    list_indent : int, default 2
        Spaces per nesting level for nested list items. The value is applied
        relative to the parent item's marker: narrower values are widened to
        the marker width and wider ones capped three columns beyond it, so a
        nested item never escapes its parent or turns into indented code. A
        warning is logged when that happens.
    bullet_char : {"-", "*", "+"}, default "-"
        Marker for unordered list items.
    code_block_fence : {"```", "~~~"}, default "```"
        Fence style for code blocks.
    emphasis_char : {"*", "_"}, default "*"
        Delimiter for emphasis and strong emphasis.
    table_alignment : bool, default True
        Pad table cells so that columns line up.
    normalize_whitespace : bool, default True
        Cap runs of blank lines at ``max_blank_lines``.
    max_blank_lines : int, default 2
        Longest run of consecutive blank lines kept outside code blocks. The
        blank line separating two blocks is always kept, so 0 acts like 1.

    Examples
    --------
    >>> options = FormatterOptions(bullet_char="+", list_indent=4)
    >>> options.create_updated(bullet_char="?").bullet_char
    '-'

    """

    list_indent: int = field(
        default=DEFAULT_LIST_INDENT,
        metadata={
            "help": "Spaces per nesting level for nested list items (kept between the parent marker width and 3 more)",
            "type": int,
            "importance": "core",
        },
    )
    bullet_char: BulletChar = field(
        default=DEFAULT_BULLET_CHAR,
        metadata={
            "help": "Marker for unordered list items",
            "choices": sorted(VALID_BULLET_CHARS),
            "importance": "core",
        },
    )
    code_block_fence: CodeFence = field(
        default=DEFAULT_CODE_BLOCK_FENCE,
        metadata={
            "help": "Fence style for code blocks",
            "choices": sorted(VALID_CODE_BLOCK_FENCES),
            "importance": "core",
        },
    )
    emphasis_char: EmphasisChar = field(
        default=DEFAULT_EMPHASIS_CHAR,
        metadata={
            "help": "Delimiter for emphasis and strong emphasis",
            "choices": sorted(VALID_EMPHASIS_CHARS),
            "importance": "core",
        },
    )
    table_alignment: bool = field(
        default=DEFAULT_TABLE_ALIGNMENT,
        metadata={
            "help": "Pad table cells so columns line up",
            "cli_name": "no-table-alignment",
            "importance": "advanced",
        },
    )
    normalize_whitespace: bool = field(
        default=DEFAULT_NORMALIZE_WHITESPACE,
        metadata={
            "help": "Cap runs of blank lines at max_blank_lines",
            "cli_name": "no-normalize-whitespace",
            "importance": "advanced",
        },
    )
    max_blank_lines: int = field(
        default=DEFAULT_MAX_BLANK_LINES,
        metadata={"help": "Longest run of blank lines kept outside code blocks", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Replace out-of-range values with defaults instead of rejecting them."""
        super().__post_init__()

        if not (_is_int(self.list_indent) and self.list_indent >= 1):
            self._fallback("list_indent", DEFAULT_LIST_INDENT)

        if not (isinstance(self.bullet_char, str) and self.bullet_char.strip() in VALID_BULLET_CHARS):
            self._fallback("bullet_char", DEFAULT_BULLET_CHAR)
        else:
            object.__setattr__(self, "bullet_char", self.bullet_char.strip())

        fence = self.code_block_fence.strip() if isinstance(self.code_block_fence, str) else ""
        if fence.startswith("~"):
            object.__setattr__(self, "code_block_fence", "~~~")
        elif fence.startswith("`"):
            object.__setattr__(self, "code_block_fence", "```")
        else:
            self._fallback("code_block_fence", DEFAULT_CODE_BLOCK_FENCE)

        if not (isinstance(self.emphasis_char, str) and self.emphasis_char.strip() in VALID_EMPHASIS_CHARS):
            self._fallback("emphasis_char", DEFAULT_EMPHASIS_CHAR)
        else:
            object.__setattr__(self, "emphasis_char", self.emphasis_char.strip())

        if not isinstance(self.table_alignment, bool):
            self._fallback("table_alignment", DEFAULT_TABLE_ALIGNMENT)
        if not isinstance(self.normalize_whitespace, bool):
            self._fallback("normalize_whitespace", DEFAULT_NORMALIZE_WHITESPACE)

        if not (_is_int(self.max_blank_lines) and self.max_blank_lines >= 0):
            self._fallback("max_blank_lines", DEFAULT_MAX_BLANK_LINES)

    def _fallback(self, name: str, default: Any) -> None:
        logger.warning("Invalid formatter option %s=%r; using default %r", name, getattr(self, name), default)
        object.__setattr__(self, name, default)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> FormatterOptions:
        """Build options from loosely typed input such as parsed JSON or CLI values.

        Numeric strings become integers and common boolean spellings
        (``"true"``, ``"off"``, ...) become booleans. Unknown keys are ignored.

        Parameters
        ----------
        data : Mapping[str, Any] or None
            Option names mapped to raw values

        Returns
        -------
        FormatterOptions
            Options with every unusable value replaced by its default

        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown formatter option: %s", key)
                continue
            if value is None:
                continue
            kwargs[key] = _coerce(value)
        return cls(**kwargs)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    text = value.strip()
    lowered = text.lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    if text.isdigit():
        return int(text)
    return value
