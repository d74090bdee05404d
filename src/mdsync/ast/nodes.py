#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/ast/nodes.py
"""AST node classes for document representation.

This module defines the node hierarchy produced by the markdown parser and
consumed by the HTML renderer and the markdown pretty-printer. Each node
represents a structural or inline element of a document.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLBlock, LinkReferenceDefinition

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Code
    - Link, Image, LineBreak
    - Strikethrough, Subscript, HTMLInline

Block nodes built by the parser carry a :class:`SourceLocation` whose
``line`` is the 1-based source line the block starts on.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from mdsync.constants import Alignment

LinkStyle = Literal["inline", "autolink", "linkify"]


@dataclass
class SourceLocation:
    """Source location information for AST nodes.

    Parameters
    ----------
    format : str
        Source format (always ``'markdown'`` for parsed documents)
    line : int or None, default = None
        1-based line number the node starts on
    end_line : int or None, default = None
        1-based line number the node ends on (inclusive)
    metadata : dict, default = empty dict
        Additional location information

    """

    format: str
    line: Optional[int] = None
    end_line: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict)


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node
    source_location : SourceLocation or None, default = None
        Information about where this node came from in the source

    """

    metadata: dict[str, Any]
    source_location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata (flavor, parse mode)
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_document(self)``."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    setext : bool, default = False
        True when the source used an underline (``===`` / ``---``) heading
    metadata : dict, default = empty dict
        Heading metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    level: int
    content: list[Node] = field(default_factory=list)
    setext: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_heading(self)``."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content
    metadata : dict, default = empty dict
        Paragraph metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_paragraph(self)``."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Code block node with optional info string.

    Represents a fenced or indented code block.

    Parameters
    ----------
    content : str
        Code content (not parsed as markdown), newline terminated
    language : str or None, default = None
        First word of the info string, used for syntax highlighting classes
    info : str, default = ''
        Complete info string following the opening fence
    fence_char : str, default = '`'
        Character used for fencing (` or ~)
    fence_length : int, default = 3
        Number of fence characters
    fenced : bool, default = True
        False for indented code blocks
    metadata : dict, default = empty dict
        Code block metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    language: Optional[str] = None
    info: str = ""
    fence_char: str = "`"
    fence_length: int = 3
    fenced: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_code_block(self)``."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the quote
    metadata : dict, default = empty dict
        Block quote metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_block_quote(self)``."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists
    tight : bool, default = True
        Whether list is tight (no blank lines between items)
    delimiter : str, default = '-'
        Source marker: the bullet character, or ``.``/``)`` for ordered lists
    metadata : dict, default = empty dict
        List metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    delimiter: str = "-"
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_list(self)``."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node containing block content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the list item
    task_status : {'checked', 'unchecked'} or None, default = None
        For task lists (GFM extension)
    metadata : dict, default = empty dict
        List item metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    task_status: Optional[Literal["checked", "unchecked"]] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_list_item(self)``."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node with header and column alignment (GFM extension).

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Body rows (excluding header)
    header : TableRow or None, default = None
        Header row
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None)
    metadata : dict, default = empty dict
        Table metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Alignment | None] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_table(self)``."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    is_header : bool, default = False
        Whether this is a header row
    metadata : dict, default = empty dict
        Row metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_table_row(self)``."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node with optional alignment.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline content of the cell
    alignment : {'left', 'center', 'right'} or None, default = None
        Cell alignment
    metadata : dict, default = empty dict
        Cell metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    alignment: Alignment | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_table_cell(self)``."""
        return visitor.visit_table_cell(self)


@dataclass
class ThematicBreak(Node):
    """Thematic break node (horizontal rule)."""

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_thematic_break(self)``."""
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block node.

    The HTML renderer never emits this content; it is kept so the markdown
    pretty-printer can reproduce it verbatim.

    Parameters
    ----------
    content : str
        Raw HTML content
    metadata : dict, default = empty dict
        HTML block metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_html_block(self)``."""
        return visitor.visit_html_block(self)


@dataclass
class LinkReferenceDefinition(Node):
    """Link reference definition (``[label]: url "title"``).

    Definitions render nothing in HTML; links that use them are resolved by
    the parser. The pretty-printer re-emits them where they appeared.

    Parameters
    ----------
    label : str
        Label exactly as written between the brackets
    url : str
        Normalized destination URL
    title : str, default = ''
        Optional title
    metadata : dict, default = empty dict
        Definition metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    label: str
    url: str
    title: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_link_reference_definition(self)``."""
        return visitor.visit_link_reference_definition(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Text content after escape and entity decoding
    raw : str or None, default = None
        Source spelling when it differs from ``content`` (a backslash escape
        such as ``\\*`` or an entity such as ``&amp;``)
    metadata : dict, default = empty dict
        Text metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    raw: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_text(self)``."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node.

    Parameters
    ----------
    content : list of Node, default = empty list
        Emphasized inline nodes
    delimiter : str, default = '*'
        Delimiter character used in the source
    metadata : dict, default = empty dict
        Emphasis metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    delimiter: str = "*"
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_emphasis(self)``."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) node.

    Parameters
    ----------
    content : list of Node, default = empty list
        Strongly emphasized inline nodes
    delimiter : str, default = '*'
        Delimiter character used in the source
    metadata : dict, default = empty dict
        Strong metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    delimiter: str = "*"
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_strong(self)``."""
        return visitor.visit_strong(self)


@dataclass
class Code(Node):
    """Inline code node.

    Parameters
    ----------
    content : str
        Code content with line endings folded to spaces
    metadata : dict, default = empty dict
        Code metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_code(self)``."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Link node.

    Parameters
    ----------
    url : str
        Normalized link destination
    content : list of Node, default = empty list
        Inline nodes representing link text
    title : str or None, default = None
        Optional link title (tooltip)
    style : {'inline', 'autolink', 'linkify'}, default = 'inline'
        How the link was written: bracketed text, ``<url>``, or a bare URL
        picked up by the GFM autolink extension
    metadata : dict, default = empty dict
        Link metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    style: LinkStyle = "inline"
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_link(self)``."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image node.

    Parameters
    ----------
    url : str
        Normalized image source
    alt_text : str, default = ''
        Plain-text alternative description
    title : str or None, default = None
        Optional image title
    content : list of Node, default = empty list
        Inline nodes of the alt text as written in the source
    metadata : dict, default = empty dict
        Image metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_image(self)``."""
        return visitor.visit_image(self)


@dataclass
class LineBreak(Node):
    """Line break node.

    Parameters
    ----------
    soft : bool, default = False
        True for soft breaks (newline in source), False for hard breaks
    metadata : dict, default = empty dict
        Line break metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_line_break(self)``."""
        return visitor.visit_line_break(self)


@dataclass
class Strikethrough(Node):
    """Strikethrough node (GFM extension)."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_strikethrough(self)``."""
        return visitor.visit_strikethrough(self)


@dataclass
class Subscript(Node):
    """Subscript node (``~text~``, GFM mode only)."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_subscript(self)``."""
        return visitor.visit_subscript(self)


@dataclass
class HTMLInline(Node):
    """Inline HTML node.

    Like :class:`HTMLBlock`, the content is only reproduced by the markdown
    pretty-printer; the HTML renderer replaces it with a placeholder comment.

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_html_inline(self)``."""
        return visitor.visit_html_inline(self)
