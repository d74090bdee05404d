#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/renderers/html.py
"""HTML rendering from AST.

This module provides the HtmlRenderer class which converts AST nodes to an
HTML fragment. Output follows a strict layout with every block-level opening
tag at the start of its own line (``<p>...</p>``, ``<ul>`` / ``<li>...</li>``
/ ``</ul>``, one table row or cell per line). The line-sync annotator and the
path linkifier both scan this output line by line and depend on that layout.

Security rules are fixed and independent of the flavor:

- Raw HTML blocks and inline HTML are replaced by ``<!-- raw HTML omitted -->``.
- Link and image URLs using ``javascript:``, ``vbscript:``, ``file:`` or a
  non-image ``data:`` scheme render with an empty destination.

"""

from __future__ import annotations

import logging

from markdown_it.common.utils import escapeHtml

from mdsync.ast import (
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
    NodeVisitor,
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
from mdsync.constants import DANGEROUS_SCHEMES, RAW_HTML_OMITTED, SAFE_DATA_IMAGE_PREFIXES
from mdsync.exceptions import RenderError
from mdsync.options.html import HtmlRendererOptions
from mdsync.renderers.base import BaseRenderer, InlineContentMixin

logger = logging.getLogger(__name__)


def is_safe_url(url: str) -> bool:
    """Check a link or image destination against the dangerous scheme list.

    Parameters
    ----------
    url : str
        Destination URL

    Returns
    -------
    bool
        False for ``javascript:``, ``vbscript:``, ``file:`` and ``data:``
        URLs other than common raster images

    """
    lowered = url.strip().lower()
    if lowered.startswith(SAFE_DATA_IMAGE_PREFIXES):
        return True
    return not lowered.startswith(DANGEROUS_SCHEMES)


class HtmlRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST to an HTML fragment with one block tag per line.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
        >>> from mdsync.ast import Document, Paragraph, Text
        >>> doc = Document(children=[Paragraph(content=[Text("Hello")])])
        >>> HtmlRenderer().render_to_string(doc)
        '<p>Hello</p>\\n'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._output: list[str] = []
        self._tight_stack: list[bool] = []

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to an HTML string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            HTML text, newline terminated unless empty

        Raises
        ------
        RenderError
            If a node cannot be serialized

        """
        self._output = []
        self._tight_stack = []
        try:
            doc.accept(self)
        except RenderError:
            raise
        except (AttributeError, TypeError, ValueError, RecursionError) as e:
            raise RenderError(
                f"Failed to render HTML: {e!s}", rendering_stage="serialize", original_error=e
            ) from e
        return "".join(self._output)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        for child in node.children:
            child.accept(self)

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node."""
        content = self._render_inline_content(node.content)
        self._output.append(f"<h{node.level}>{content}</h{node.level}>\n")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node.

        Paragraphs directly inside a tight list item render without ``<p>``.
        """
        content = self._render_inline_content(node.content)
        if self._tight_stack and self._tight_stack[-1]:
            self._output.append(content)
        else:
            self._output.append(f"<p>{content}</p>\n")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node."""
        class_attr = ""
        if node.language:
            language = escapeHtml(node.language)
            class_attr = f' class="{self.options.language_class_prefix}{language}"'
        self._output.append(f"<pre><code{class_attr}>{escapeHtml(node.content)}</code></pre>\n")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        self._output.append("<blockquote>\n")
        self._tight_stack.append(False)
        for child in node.children:
            child.accept(self)
        self._tight_stack.pop()
        self._output.append("</blockquote>\n")

    def visit_list(self, node: List) -> None:
        """Render a List node."""
        if node.ordered:
            start_attr = f' start="{node.start}"' if node.start != 1 else ""
            self._output.append(f"<ol{start_attr}>\n")
        else:
            self._output.append("<ul>\n")

        self._tight_stack.append(node.tight)
        for item in node.items:
            item.accept(self)
        self._tight_stack.pop()

        self._output.append("</ol>\n" if node.ordered else "</ul>\n")

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node.

        In a tight list the first paragraph shares the ``<li>`` line; any
        block that follows it starts on a new line.
        """
        tight = bool(self._tight_stack and self._tight_stack[-1])
        self._output.append("<li>")

        if node.task_status:
            checked = 'checked="" ' if node.task_status == "checked" else ""
            self._output.append(f'<input type="checkbox" {checked}disabled="" /> ')

        if not tight and node.children:
            self._output.append("\n")

        previous_inline = False
        for child in node.children:
            if previous_inline:
                self._output.append("\n")
            child.accept(self)
            previous_inline = tight and isinstance(child, Paragraph)

        self._output.append("</li>\n")

    def visit_table(self, node: Table) -> None:
        """Render a Table node."""
        self._output.append("<table>\n")
        if node.header:
            self._output.append("<thead>\n")
            node.header.accept(self)
            self._output.append("</thead>\n")
        if node.rows:
            self._output.append("<tbody>\n")
            for row in node.rows:
                row.accept(self)
            self._output.append("</tbody>\n")
        self._output.append("</table>\n")

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node with one cell per line."""
        self._output.append("<tr>\n")
        tag = "th" if node.is_header else "td"
        for cell in node.cells:
            align_attr = f' align="{cell.alignment}"' if cell.alignment else ""
            content = self._render_inline_content(cell.content)
            self._output.append(f"<{tag}{align_attr}>{content}</{tag}>\n")
        self._output.append("</tr>\n")

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node on its own (outside a row)."""
        self._output.append(self._render_inline_content(node.content))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append("<hr />\n")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Replace a raw HTML block with the omission marker."""
        logger.debug("Omitting raw HTML block")
        self._output.append(f"{RAW_HTML_OMITTED}\n")

    def visit_link_reference_definition(self, node: LinkReferenceDefinition) -> None:
        """Definitions produce no output."""
        pass

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node."""
        self._output.append(escapeHtml(node.content))

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(f"<em>{self._render_inline_content(node.content)}</em>")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(f"<strong>{self._render_inline_content(node.content)}</strong>")

    def visit_code(self, node: Code) -> None:
        """Render a Code node."""
        self._output.append(f"<code>{escapeHtml(node.content)}</code>")

    def visit_link(self, node: Link) -> None:
        """Render a Link node, blanking dangerous destinations."""
        content = self._render_inline_content(node.content)
        href = escapeHtml(node.url) if is_safe_url(node.url) else ""
        title_attr = f' title="{escapeHtml(node.title)}"' if node.title else ""
        self._output.append(f'<a href="{href}"{title_attr}>{content}</a>')

    def visit_image(self, node: Image) -> None:
        """Render an Image node, blanking dangerous sources."""
        src = escapeHtml(node.url) if is_safe_url(node.url) else ""
        title_attr = f' title="{escapeHtml(node.title)}"' if node.title else ""
        self._output.append(f'<img src="{src}" alt="{escapeHtml(node.alt_text)}"{title_attr} />')

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node; both kinds keep the source line structure."""
        self._output.append("\n" if node.soft else "<br />\n")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._output.append(f"<del>{self._render_inline_content(node.content)}</del>")

    def visit_subscript(self, node: Subscript) -> None:
        """Render a Subscript node."""
        self._output.append(f"<sub>{self._render_inline_content(node.content)}</sub>")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Replace inline raw HTML with the omission marker."""
        self._output.append(RAW_HTML_OMITTED)


def render_html(doc: Document, options: HtmlRendererOptions | None = None) -> str:
    """Render a document to an HTML fragment.

    Parameters
    ----------
    doc : Document
        Parsed document
    options : HtmlRendererOptions or None, default = None
        Rendering options

    Returns
    -------
    str
        HTML fragment

    """
    return HtmlRenderer(options).render_to_string(doc)
