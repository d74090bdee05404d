#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/parsers/__init__.py
"""Markdown parsing into the mdsync AST."""

from mdsync.parsers.markdown import MarkdownToAstConverter, create_markdown_engine, markdown_to_ast

__all__ = [
    "MarkdownToAstConverter",
    "create_markdown_engine",
    "markdown_to_ast",
]
