#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/renderers/__init__.py
"""AST renderers: HTML for the preview and canonical markdown for the reformatter."""

from mdsync.renderers.base import BaseRenderer, InlineContentMixin
from mdsync.renderers.html import HtmlRenderer, render_html
from mdsync.renderers.markdown import MarkdownRenderer

__all__ = [
    "BaseRenderer",
    "HtmlRenderer",
    "InlineContentMixin",
    "MarkdownRenderer",
    "render_html",
]
