#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the markdown parser.

The same parser serves two callers. The HTML path wants every flavor
extension and typographic substitution; the reformatter wants a faithful
tree that remembers escapes and reference definitions so it can write the
document back out without losing content.
"""
# src/mdsync/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from mdsync.constants import PARSER_MAX_NESTING
from mdsync.flavors import Flavor
from mdsync.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    flavor : Flavor, default Flavor.GFM
        Markdown flavor to parse. Determines which extensions are enabled.
    preserve_source : bool, default False
        Parse for round-tripping: keep backslash escapes and entities in
        their source spelling, keep link reference definitions as nodes,
        disable typographic substitution, and leave inline extensions that
        only affect HTML output (strikethrough, subscript, task lists, bare
        URL linking) as literal text.
    max_nesting : int, default PARSER_MAX_NESTING
        Maximum block and inline nesting depth handed to the engine.

    """

    flavor: Flavor = field(
        default=Flavor.GFM,
        metadata={"help": "Markdown flavor to parse", "importance": "core"},
    )
    preserve_source: bool = field(
        default=False,
        metadata={
            "help": "Keep escapes, entities and reference definitions for round-tripping",
            "importance": "advanced",
        },
    )
    max_nesting: int = field(
        default=PARSER_MAX_NESTING,
        metadata={"help": "Maximum nesting depth of parsed blocks and inlines", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Resolve the flavor and keep the nesting limit positive."""
        object.__setattr__(self, "flavor", Flavor.from_name(self.flavor))
        if not isinstance(self.max_nesting, int) or self.max_nesting < 1:
            object.__setattr__(self, "max_nesting", PARSER_MAX_NESTING)
