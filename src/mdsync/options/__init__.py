#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/options/__init__.py
"""Option dataclasses for the parser, the HTML renderer and the reformatter."""

from mdsync.options.base import BaseRendererOptions, CloneFrozenMixin
from mdsync.options.formatter import FormatterOptions
from mdsync.options.html import HtmlRendererOptions
from mdsync.options.markdown import MarkdownParserOptions

__all__ = [
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "FormatterOptions",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
]
