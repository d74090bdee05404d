#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Renderers subclass :class:`NodeVisitor` and implement one ``visit_*`` method
per node type. Every method is abstract so a renderer that forgets a node
type fails at instantiation rather than silently dropping content.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mdsync.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    LinkReferenceDefinition,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Subscript,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    All visit methods accept a node and return Any (typically None for
    renderers that accumulate output on the instance).

    Examples
    --------
    Visitor that collects plain text:

        >>> class TextCollector(NodeVisitor):
        ...     def visit_text(self, node):
        ...         self.parts.append(node.content)
        ...     # ... remaining visit_* methods

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_html_block(self, node: HTMLBlock) -> Any:
        """Visit an HTMLBlock node."""
        pass

    @abstractmethod
    def visit_link_reference_definition(self, node: LinkReferenceDefinition) -> Any:
        """Visit a LinkReferenceDefinition node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        pass

    @abstractmethod
    def visit_subscript(self, node: Subscript) -> Any:
        """Visit a Subscript node."""
        pass

    @abstractmethod
    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Visit an HTMLInline node."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None
