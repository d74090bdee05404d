"""mdsync - Markdown rendering and reformatting backend for editors.

mdsync turns author-written Markdown into two products: an HTML preview
annotated for scroll synchronization, and canonicalized Markdown text that
follows configurable style conventions.

Key Features
------------
- CommonMark and GitHub Flavored Markdown through markdown-it-py
- ``data-source-line`` anchors on block elements for preview scroll-sync
- Clickable anchors for file-system paths in the preview
- UTF-8 byte-offset line maps and document/cursor metrics
- Idempotent reformatting that leaves box-drawing diagrams untouched

Examples
--------
Render a preview:

    >>> from mdsync import render_markdown
    >>> result = render_markdown("# Notes\\n\\nSee ./todo.md")
    >>> result.word_count
    3

Reformat with a different bullet style:

    >>> from mdsync import format_markdown
    >>> format_markdown("* a\\n* b\\n", bullet_char="+")
    '+ a\\n+ b\\n'

See Also
--------
mdsync.formatter : Reformatting pipeline
mdsync.ast : AST node definitions

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdsync requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from mdsync.api import (
    RenderResult,
    calculate_cursor_metrics,
    calculate_text_metrics,
    format_markdown,
    get_markdown_flavors,
    render_markdown,
    resolve_flavor,
)
from mdsync.exceptions import FormatError, MdSyncError, ParsingError, RenderError
from mdsync.flavors import Flavor, MarkdownFlavor
from mdsync.metrics import CursorMetrics, TextMetrics
from mdsync.options import FormatterOptions, HtmlRendererOptions, MarkdownParserOptions

__all__ = [
    "__version__",
    # Main API
    "render_markdown",
    "format_markdown",
    "calculate_text_metrics",
    "calculate_cursor_metrics",
    "get_markdown_flavors",
    "resolve_flavor",
    # Results
    "RenderResult",
    "TextMetrics",
    "CursorMetrics",
    # Flavors and options
    "Flavor",
    "MarkdownFlavor",
    "FormatterOptions",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
    # Exceptions
    "MdSyncError",
    "ParsingError",
    "RenderError",
    "FormatError",
]
