#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class shared by the HTML renderer and
the markdown pretty-printer, plus the inline capture mixin both use.

"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mdsync.ast import Document
from mdsync.ast.nodes import Node
from mdsync.exceptions import InvalidOptionsError
from mdsync.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document

        Raises
        ------
        RenderError
            If rendering fails

        """
        pass

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                renderer_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )


class InlineContentMixin:
    """Mixin providing inline content rendering for text-based renderers.

    The implementing class must have:
    - A `_output` attribute (list[str]) for accumulating output
    - Visitor methods that append to `_output`

    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of inline nodes to text.

        Temporarily captures the output from rendering the nodes and returns
        it as a string, leaving the surrounding output untouched.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content as a string

        """
        saved_output = self._output
        self._output = []

        for node in content:
            node.accept(self)

        result = "".join(self._output)
        self._output = saved_output
        return result
