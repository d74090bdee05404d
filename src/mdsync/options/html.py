#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering."""
# src/mdsync/options/html.py

from __future__ import annotations

from dataclasses import dataclass, field

from mdsync.options.base import BaseRendererOptions


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-HTML rendering.

    Raw HTML is never passed through and dangerous URL schemes are always
    blanked; neither behavior is configurable.

    Parameters
    ----------
    language_class_prefix : str, default "language-"
        Prefix of the class attribute written on ``<code>`` inside fenced
        code blocks that declare a language.

    """

    language_class_prefix: str = field(
        default="language-",
        metadata={"help": "Class prefix for fenced code languages", "importance": "advanced"},
    )
