#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/renderers/markdown.py
"""Markdown rendering from AST.

This module provides the MarkdownRenderer class, the pretty-printer behind
the reformatter. It renders a document parsed in source-preserving mode
(escapes, entities and link reference definitions keep their original
spelling) back to canonical markdown:

- soft line breaks are kept where the author put them
- headings use ``#`` markers unless the source used a setext underline
- every code block is fenced; the fence grows past any backtick run in the
  body
- list markers are normalized and ordered lists renumbered from their start
- tables are re-emitted with padded, aligned columns (or minimally)
- blocks are separated by exactly one blank line

The output is stable: rendering the parse of the output reproduces it. Text
that would change meaning when moved to the start of a line (``# ``,
``> ``, ``- ``, ``1. ``, setext underlines, fences) is escaped there.

"""

from __future__ import annotations

import logging
import re

from markdown_it.common.normalize_url import normalizeLinkText

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
    Node,
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
from mdsync.options.formatter import FormatterOptions
from mdsync.renderers.base import BaseRenderer, InlineContentMixin

logger = logging.getLogger(__name__)

# Line openings that would start a block if a wrapped line began with them,
# including pipe table delimiter rows
_BLOCK_START_RE = re.compile(
    r"^(?:"
    r"#{1,6}(?:[ \t]|$)"
    r"|>"
    r"|[-+*][ \t]+\S"
    r"|0*1(?P<delim>[.)])[ \t]+\S"
    r"|(?:=+|-+)[ \t]*$"
    r"|(?:\*[ \t]*){3,}$"
    r"|(?:_[ \t]*){3,}$"
    r"|`{3,}"
    r"|~{3,}"
    r"|\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)*\|?[ \t]*$"
    r")"
)

_TRAILING_BACKSLASHES_RE = re.compile(r"\\+$")
_BACKTICK_RUN_RE = re.compile(r"`+")
_TILDE_RUN_RE = re.compile(r"~+")

_ALTERNATE_BULLET = {"-": "*", "*": "-"}
_ALTERNATE_DELIMITER = {".": ")", ")": "."}


def _longest_run(pattern: re.Pattern[str], text: str) -> int:
    return max((len(m.group(0)) for m in pattern.finditer(text)), default=0)


def _escape_line_start(line: str) -> str:
    match = _BLOCK_START_RE.match(line)
    if match is None:
        return line
    if match.group("delim"):
        position = match.start("delim")
        return f"{line[:position]}\\{line[position:]}"
    return f"\\{line}"


def _is_balanced(text: str) -> bool:
    depth = 0
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def format_link_destination(url: str) -> str:
    """Spell a link destination so that parsing it yields ``url`` again.

    Parameters
    ----------
    url : str
        Normalized destination as stored on the AST node

    Returns
    -------
    str
        Destination text, wrapped in ``<...>`` when it holds spaces or
        unbalanced parentheses

    """
    if not url:
        return ""
    text = normalizeLinkText(url)
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in text):
        text = url
    text = text.replace("\\", "\\\\")
    if any(char.isspace() for char in text) or text.startswith("<") or not _is_balanced(text):
        return "<" + text.replace("<", "\\<").replace(">", "\\>") + ">"
    return text


def format_link_title(title: str | None) -> str:
    """Spell an optional link title, including its leading space."""
    if not title:
        return ""
    escaped = title.replace("\\", "\\\\").replace('"', '\\"')
    return f' "{escaped}"'


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to canonical markdown text.

    Parameters
    ----------
    options : FormatterOptions or None, default = None
        Style conventions. ``bullet_char`` ``+`` and ``~~~`` fences are
        applied afterwards by the reformatter's line adjustments; this
        renderer emits ``-`` bullets and backtick fences for them.

    Examples
    --------
        >>> from mdsync.parsers.markdown import markdown_to_ast
        >>> doc = markdown_to_ast("Title\\n=====\\n* one\\n* two", preserve_source=True)
        >>> print(MarkdownRenderer().render_to_string(doc), end="")
        Title
        =====
        <BLANKLINE>
        - one
        - two

    """

    def __init__(self, options: FormatterOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, FormatterOptions, "markdown")
        options = options or FormatterOptions()
        BaseRenderer.__init__(self, options)
        self.options: FormatterOptions = options
        self._output: list[str] = []
        self._tight_stack: list[bool] = []
        self._marker_stack: list[str] = []
        self._list_item_depth: int = 0
        self._next_list_marker: str | None = None

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to markdown.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            Markdown ending in exactly one newline, or an empty string for an
            empty document

        """
        self._output = []
        self._tight_stack = []
        self._marker_stack = []
        self._list_item_depth = 0
        self._next_list_marker = None

        doc.accept(self)
        result = "".join(self._output).rstrip("\n")
        self._output = []
        return f"{result}\n" if result else ""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render_block(self, node: Node) -> str:
        saved_output = self._output
        self._output = []
        node.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result

    def _render_blocks(self, children: list[Node], separator: str) -> str:
        """Render sibling blocks, alternating markers between adjacent lists.

        Two lists that follow each other directly only stay separate when
        their markers differ, so the second one takes the alternate marker.
        """
        rendered: list[str] = []
        previous_marker: str | None = None
        for child in children:
            if isinstance(child, List):
                marker = self._list_marker(child)
                if marker == previous_marker:
                    marker = (_ALTERNATE_DELIMITER if child.ordered else _ALTERNATE_BULLET)[marker]
                self._next_list_marker = marker
                previous_marker = marker
            else:
                previous_marker = None
            rendered.append(self._render_block(child))
        return separator.join(rendered)

    def _list_marker(self, node: List) -> str:
        if node.ordered:
            return node.delimiter if node.delimiter in _ALTERNATE_DELIMITER else "."
        return "*" if self.options.bullet_char == "*" else "-"

    def _render_inline_block(self, content: list[Node]) -> str:
        """Render the inline content of a leaf block.

        Wrapped lines are escaped where they would otherwise open a new
        block, and an odd run of trailing backslashes is completed so the
        block never ends in something that reads as a hard break.
        """
        text = self._render_inline_content(content)
        if "\n" in text:
            first, *rest = text.split("\n")
            text = "\n".join([first, *(_escape_line_start(line) for line in rest)])
        match = _TRAILING_BACKSLASHES_RE.search(text)
        if match and len(match.group(0)) % 2 == 1:
            text += "\\"
        return text

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render inline nodes, picking emphasis delimiters from their neighbors.

        ``_`` cannot open or close emphasis inside a word, and a delimiter
        equal to the first or last character of the emphasized text would
        merge with it; in both cases the other delimiter is used.
        """
        pieces: list[str] = []
        pending: list[tuple[int, int, str]] = []
        for node in content:
            if isinstance(node, (Emphasis, Strong)):
                width = 1 if isinstance(node, Emphasis) else 2
                pending.append((len(pieces), width, self._render_inline_content(node.content)))
                pieces.append("")
            else:
                pieces.append(InlineContentMixin._render_inline_content(self, [node]))

        for index, width, inner in pending:
            before = pieces[index - 1][-1:] if index > 0 else ""
            after = pieces[index + 1][:1] if index + 1 < len(pieces) else ""
            delimiter = self._pick_emphasis_char(inner, before, after) * width
            pieces[index] = f"{delimiter}{inner}{delimiter}"
        return "".join(pieces)

    def _pick_emphasis_char(self, inner: str, before: str, after: str) -> str:
        preferred = self.options.emphasis_char
        for char in (preferred, "*" if preferred == "_" else "_"):
            if inner.startswith(char) or inner.endswith(char):
                continue
            if char == "_" and (before.isalnum() or after.isalnum()):
                continue
            return char
        return "*"

    @staticmethod
    def _prefix_lines(text: str, first: str, rest: str) -> str:
        lines = text.split("\n")
        prefixed = [f"{first}{lines[0]}" if lines[0] else first.rstrip()]
        prefixed.extend(f"{rest}{line}" if line else "" for line in lines[1:])
        return "\n".join(prefixed)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._output.append(self._render_blocks(node.children, "\n\n"))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node.

        Setext headings keep their underline, sized to the last content
        line. All other headings use ``#`` markers.
        """
        content = self._render_inline_block(node.content)
        if node.setext and node.level <= 2:
            last_line = content.rsplit("\n", 1)[-1]
            underline = ("=" if node.level == 1 else "-") * max(3, len(last_line))
            self._output.append(f"{content}\n{underline}")
            return

        content = content.replace("\n", " ")
        prefix = "#" * node.level
        self._output.append(f"{prefix} {content}" if content else prefix)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline_block(node.content))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node as a fenced block.

        Indented code is converted to a fence. A backtick in the info string
        forces a tilde fence.
        """
        info = node.info
        if "`" in info:
            fence = "~" * max(3, _longest_run(_TILDE_RUN_RE, node.content) + 1)
        else:
            fence = "`" * max(3, _longest_run(_BACKTICK_RUN_RE, node.content) + 1)

        body = node.content
        if body and not body.endswith("\n"):
            body += "\n"
        self._output.append(f"{fence}{info}\n{body}{fence}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        saved_tight = self._tight_stack
        self._tight_stack = []
        inner = self._render_blocks(node.children, "\n\n")
        self._tight_stack = saved_tight
        lines = inner.split("\n") if inner else [""]
        self._output.append("\n".join(f"> {line}" if line else ">" for line in lines))

    def visit_list(self, node: List) -> None:
        """Render a List node."""
        marker = self._next_list_marker or self._list_marker(node)
        self._next_list_marker = None

        self._tight_stack.append(node.tight)
        rendered: list[str] = []
        for i, item in enumerate(node.items):
            self._marker_stack.append(f"{node.start + i}{marker}" if node.ordered else marker)
            rendered.append(self._render_block(item))
            self._marker_stack.pop()
        self._tight_stack.pop()

        self._output.append(("\n" if node.tight else "\n\n").join(rendered))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node.

        The first line follows the marker; later lines are indented to the
        item's content column.
        """
        marker = self._marker_stack[-1] if self._marker_stack else "-"
        tight = self._tight_stack[-1] if self._tight_stack else True

        self._list_item_depth += 1
        body = self._render_blocks(node.children, "\n" if tight else "\n\n")
        self._list_item_depth -= 1

        if node.task_status:
            checkbox = "[x]" if node.task_status == "checked" else "[ ]"
            body = f"{checkbox} {body}" if body else checkbox

        if not body:
            self._output.append(marker)
            return
        self._output.append(self._prefix_lines(body, f"{marker} ", " " * (len(marker) + 1)))

    def visit_table(self, node: Table) -> None:
        """Render a Table node with escaped pipes and optional padding."""
        rows = ([node.header] if node.header else []) + node.rows
        if not rows:
            return

        num_cols = len(rows[0].cells)
        rendered_rows = [
            [self._render_inline_content(cell.content).replace("|", "\\|") for cell in row.cells[:num_cols]]
            for row in rows
        ]
        for cells in rendered_rows:
            cells.extend([""] * (num_cols - len(cells)))

        alignments = list(node.alignments[:num_cols])
        alignments.extend([None] * (num_cols - len(alignments)))

        if self.options.table_alignment:
            widths = [max(3, *(len(cells[j]) for cells in rendered_rows)) for j in range(num_cols)]
        else:
            widths = []

        lines: list[str] = []
        for i, cells in enumerate(rendered_rows):
            if widths:
                cells = [cell.ljust(widths[j]) for j, cell in enumerate(cells)]
            lines.append("| " + " | ".join(cells) + " |")
            if i == 0 and node.header:
                lines.append(self._delimiter_row(alignments, widths))
        self._output.append("\n".join(lines))

    @staticmethod
    def _delimiter_row(alignments: list, widths: list[int]) -> str:
        cells: list[str] = []
        for j, alignment in enumerate(alignments):
            width = widths[j] if widths else 3
            if alignment == "center":
                cells.append(":" + "-" * (width - 2) + ":")
            elif alignment == "left":
                cells.append(":" + "-" * (width - 1))
            elif alignment == "right":
                cells.append("-" * (width - 1) + ":")
            else:
                cells.append("-" * width)
        return "| " + " | ".join(cells) + " |"

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node outside of a table."""
        cells = [self._render_inline_content(cell.content).replace("|", "\\|") for cell in node.cells]
        self._output.append("| " + " | ".join(cells) + " |")

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node outside of a row."""
        self._output.append(self._render_inline_content(node.content).replace("|", "\\|"))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node.

        Inside list items ``___`` is used, since ``---`` under a paragraph
        line would read as a setext underline.
        """
        self._output.append("___" if self._list_item_depth else "---")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        self._output.append(node.content.rstrip("\n"))

    def visit_link_reference_definition(self, node: LinkReferenceDefinition) -> None:
        """Render a link reference definition in place."""
        destination = format_link_destination(node.url) or "<>"
        self._output.append(f"[{node.label}]: {destination}{format_link_title(node.title)}")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node in its source spelling."""
        self._output.append(node.raw if node.raw is not None else node.content)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(self._render_inline_content([node]))

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(self._render_inline_content([node]))

    def visit_code(self, node: Code) -> None:
        """Render a Code node with a fence longer than any backtick run inside."""
        fence = "`" * (_longest_run(_BACKTICK_RUN_RE, node.content) + 1)
        content = node.content
        padded = content.startswith(" ") and content.endswith(" ") and content.strip(" ")
        if content.startswith("`") or content.endswith("`") or padded:
            content = f" {content} "
        self._output.append(f"{fence}{content}{fence}")

    def visit_link(self, node: Link) -> None:
        """Render a Link node."""
        content = self._render_inline_content(node.content)
        if node.style == "autolink":
            self._output.append(f"<{content}>")
        elif node.style == "linkify":
            self._output.append(content)
        else:
            destination = format_link_destination(node.url)
            self._output.append(f"[{content}]({destination}{format_link_title(node.title)})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        alt = self._render_inline_content(node.content) if node.content else node.alt_text
        destination = format_link_destination(node.url)
        self._output.append(f"![{alt}]({destination}{format_link_title(node.title)})")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node; hard breaks use a trailing backslash."""
        self._output.append("\n" if node.soft else "\\\n")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._output.append(f"~~{self._render_inline_content(node.content)}~~")

    def visit_subscript(self, node: Subscript) -> None:
        """Render a Subscript node."""
        self._output.append(f"~{self._render_inline_content(node.content)}~")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._output.append(node.content)
