"""The major exported API functions for rendering and reformatting markdown."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdsync/api.py
import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from mdsync.flavors import Flavor, get_markdown_flavors, resolve_flavor
from mdsync.formatter.pipeline import format_markdown
from mdsync.line_sync import annotate_source_lines
from mdsync.metrics import (
    CursorMetrics,
    TextMetrics,
    build_line_map,
    calculate_cursor_metrics,
    calculate_text_metrics,
)
from mdsync.options.html import HtmlRendererOptions
from mdsync.options.markdown import MarkdownParserOptions
from mdsync.parsers.markdown import MarkdownToAstConverter
from mdsync.path_links import linkify_paths
from mdsync.renderers.html import HtmlRenderer

logger = logging.getLogger(__name__)

__all__ = [
    "CursorMetrics",
    "RenderResult",
    "TextMetrics",
    "calculate_cursor_metrics",
    "calculate_text_metrics",
    "format_markdown",
    "get_markdown_flavors",
    "render_markdown",
    "resolve_flavor",
]


@dataclass(frozen=True)
class RenderResult:
    """HTML preview of a document together with its source statistics.

    Parameters
    ----------
    html : str
        HTML fragment with ``data-source-line`` anchors and path links
    line_map : dict[int, int]
        1-based source line number to the UTF-8 byte offset of its start
    line_count : int
        Number of source lines
    word_count : int
        Number of words in the source
    char_count : int
        Number of code points in the source
    widest_column : int
        Code points in the longest source line

    """

    html: str
    line_map: dict[int, int] = field(default_factory=dict)
    line_count: int = 0
    word_count: int = 0
    char_count: int = 0
    widest_column: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary.

        JSON object keys are strings, so line map keys are stringified.
        """
        data = asdict(self)
        data["line_map"] = {str(line): offset for line, offset in self.line_map.items()}
        return data


def render_markdown(content: str, flavor: str | Flavor | None = None) -> RenderResult:
    """Render markdown to an annotated HTML preview.

    The document is parsed with the resolved flavor, serialized to HTML,
    stamped with ``data-source-line`` attributes and scanned for file-system
    paths, which become clickable anchors. Metrics and the line map are
    computed from the source text.

    Parameters
    ----------
    content : str
        Markdown source
    flavor : str, Flavor or None, default None
        Flavor selector; unknown values resolve to GFM

    Returns
    -------
    RenderResult
        HTML and source statistics

    Raises
    ------
    ParsingError
        If the markdown engine fails on the input or the document nests
        blocks deeper than ``PARSER_MAX_NESTING`` levels
    RenderError
        If HTML serialization fails

    Examples
    --------
    >>> result = render_markdown("# Title\\n\\nBody\\n")
    >>> result.html
    '<h1 data-source-line="1">Title</h1>\\n<p data-source-line="2">Body</p>\\n'
    >>> result.line_map
    {1: 0, 2: 8, 3: 9, 4: 14}

    """
    resolved = resolve_flavor(flavor)
    logger.debug("Rendering %d characters (flavor=%s)", len(content), resolved.name)

    document = MarkdownToAstConverter(MarkdownParserOptions(flavor=resolved.flavor)).parse(content)
    html = HtmlRenderer(HtmlRendererOptions(flavor=resolved.flavor)).render_to_string(document)
    html = linkify_paths(annotate_source_lines(html, content))

    metrics = calculate_text_metrics(content)
    return RenderResult(
        html=html,
        line_map=build_line_map(content),
        line_count=metrics.line_count,
        word_count=metrics.word_count,
        char_count=metrics.char_count,
        widest_column=metrics.widest_column,
    )
