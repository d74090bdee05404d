#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/ast/__init__.py
"""Abstract syntax tree shared by the HTML renderer and the pretty-printer."""

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
    SourceLocation,
    Strikethrough,
    Strong,
    Subscript,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdsync.ast.visitors import NodeVisitor

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "HTMLBlock",
    "HTMLInline",
    "Heading",
    "Image",
    "LineBreak",
    "Link",
    "LinkReferenceDefinition",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Subscript",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
]
