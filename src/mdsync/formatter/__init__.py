#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/formatter/__init__.py
"""Markdown reformatter: protect, pretty-print, restore and adjust."""

from mdsync.formatter.adjust import adjust_formatted_markdown
from mdsync.formatter.pipeline import format_markdown, resolve_formatter_options
from mdsync.formatter.protect import ProtectedLines, protect_lines, restore_lines
from mdsync.formatter.worker import run_with_stack

__all__ = [
    "ProtectedLines",
    "adjust_formatted_markdown",
    "format_markdown",
    "protect_lines",
    "resolve_formatter_options",
    "restore_lines",
    "run_with_stack",
]
