#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/parsers/markdown.py
"""Markdown to AST converter.

This module parses Markdown with markdown-it-py and converts the flat token
stream into the AST defined in :mod:`mdsync.ast`. The engine is configured
from a :class:`~mdsync.flavors.MarkdownFlavor`: GFM switches on pipe tables,
strikethrough, bare URL linking (linkify-it-py), task lists and subscript
(mdit-py-plugins).

Conversion walks the token stream with an explicit stack of open container
nodes, so document depth is bounded only by the engine's nesting limit and
never by the interpreter's recursion limit.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Literal, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token
from mdit_py_plugins.subscript import sub_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

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
from mdsync.exceptions import ParsingError
from mdsync.flavors import MarkdownFlavor, resolve_flavor
from mdsync.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

_TASK_CHECKBOX_CLASS = "task-list-item-checkbox"

_ALIGNMENTS = {"text-align:left": "left", "text-align:center": "center", "text-align:right": "right"}

# Containers whose content the engine tokenizes one nesting level deeper
_NESTED_BLOCK_OPENERS = frozenset({"blockquote_open", "list_item_open"})

_ELLIPSIS_RE = re.compile(r"(?<!\.)\.\.\.(?!\.)")
_EM_DASH_RE = re.compile(r"(?<!-)---(?!-)")
_EN_DASH_RE = re.compile(r"(?<!-)--(?!-)")


def smart_punctuation_rule(state: StateCore) -> None:
    """Replace ``...``, ``---`` and ``--`` in text with typographic characters.

    Only these three sequences change. Two dots, as in ``../docs``, and the
    other markdown-it replacements (``(c)``, ``+-``, runs of ``?``) are left
    alone. Text inside autolinks keeps its spelling.
    """
    for block in state.tokens:
        if block.type != "inline" or not block.children:
            continue
        inside_autolink = 0
        for token in block.children:
            if token.type == "text" and not inside_autolink and ("..." in token.content or "--" in token.content):
                content = _ELLIPSIS_RE.sub("\u2026", token.content)
                content = _EM_DASH_RE.sub("\u2014", content)
                token.content = _EN_DASH_RE.sub("\u2013", content)
            elif token.type == "link_open" and token.info == "auto":
                inside_autolink += 1
            elif token.type == "link_close" and token.info == "auto":
                inside_autolink -= 1


def create_markdown_engine(options: MarkdownParserOptions) -> MarkdownIt:
    """Build a markdown-it instance configured for a flavor and parse mode.

    A fresh instance is built for every call; instances are never shared
    between parses.

    Parameters
    ----------
    options : MarkdownParserOptions
        Flavor and parse mode

    Returns
    -------
    MarkdownIt
        Configured parser

    """
    flavor = resolve_flavor(options.flavor)
    preserve = options.preserve_source

    md = MarkdownIt(
        "commonmark",
        {
            "html": True,
            "typographer": flavor.smart_punctuation and not preserve,
            "linkify": flavor.supports_autolinks() and not preserve,
            "maxNesting": options.max_nesting,
            "inline_definitions": preserve,
        },
    )

    if flavor.supports_tables():
        md.enable("table")

    if preserve:
        # Escapes and entities stay separate tokens that remember their spelling
        md.disable("text_join")
        return md

    if flavor.smart_punctuation:
        md.core.ruler.before("smartquotes", "smart_punctuation", smart_punctuation_rule)
        md.enable("smartquotes")
    if flavor.supports_strikethrough():
        md.enable("strikethrough")
    if flavor.supports_autolinks():
        md.enable("linkify")
    if flavor.supports_task_lists():
        md.use(tasklists_plugin)
    if flavor.supports_subscript():
        md.use(sub_plugin)
    return md


class MarkdownToAstConverter:
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\\n\\nThis is **bold**.")

    Parsing for the reformatter:

        >>> options = MarkdownParserOptions(flavor="commonmark", preserve_source=True)
        >>> doc = MarkdownToAstConverter(options).parse(markdown_text)

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        self.options = options or MarkdownParserOptions()
        self.flavor: MarkdownFlavor = resolve_flavor(self.options.flavor)

    def parse(self, markdown_content: str) -> Document:
        """Parse Markdown text into an AST Document.

        Parameters
        ----------
        markdown_content : str
            Markdown source

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ParsingError
            If the engine fails on the input. Well-formed text never triggers
            this; it indicates a defect in the engine or a plugin.

        """
        md = create_markdown_engine(self.options)
        try:
            tokens = md.parse(markdown_content)
        except Exception as e:
            raise ParsingError(
                f"Markdown engine failed to parse input: {e!s}", parsing_stage="tokenize", original_error=e
            ) from e

        logger.debug("Parsed %d block tokens (flavor=%s)", len(tokens), self.flavor.name)
        self._check_nesting(tokens)

        try:
            return self._convert_blocks(tokens)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise ParsingError(
                f"Could not convert markdown tokens: {e!s}", parsing_stage="convert", original_error=e
            ) from e

    def _check_nesting(self, tokens: list[Token]) -> None:
        """Reject documents whose blocks reach the engine's nesting limit.

        markdown-it stops tokenizing a container that opens at the limit and
        silently drops what is inside it.
        """
        limit = self.options.max_nesting
        for token in tokens:
            if token.type in _NESTED_BLOCK_OPENERS and token.level + 1 >= limit:
                line = token.map[0] + 1 if token.map else "?"
                raise ParsingError(
                    f"Document nests blocks deeper than {limit} levels (line {line})",
                    parsing_stage="tokenize",
                )

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _convert_blocks(self, tokens: list[Token]) -> Document:
        document = Document(
            metadata={"flavor": self.flavor.name, "preserve_source": self.options.preserve_source},
            source_location=SourceLocation(format="markdown", line=1),
        )
        stack: list[Node] = [document]
        in_header = False

        for token in tokens:
            token_type = token.type
            parent = stack[-1]

            if token_type == "paragraph_open":
                node: Node = Paragraph(source_location=self._location(token))
                if token.hidden:
                    node.metadata["tight"] = True
                self._attach_block(parent, node)
                stack.append(node)
            elif token_type == "heading_open":
                node = Heading(
                    level=int(token.tag[1]),
                    setext=token.markup in ("=", "-"),
                    source_location=self._location(token),
                )
                self._attach_block(parent, node)
                stack.append(node)
            elif token_type == "blockquote_open":
                node = BlockQuote(source_location=self._location(token))
                self._attach_block(parent, node)
                stack.append(node)
            elif token_type in ("bullet_list_open", "ordered_list_open"):
                ordered = token_type == "ordered_list_open"
                start = token.attrGet("start") if ordered else None
                node = List(
                    ordered=ordered,
                    start=int(start) if start is not None else 1,
                    delimiter=token.markup or ("." if ordered else "-"),
                    source_location=self._location(token),
                )
                self._attach_block(parent, node)
                stack.append(node)
            elif token_type == "list_item_open":
                node = ListItem(source_location=self._location(token))
                if "task-list-item" in str(token.attrGet("class") or ""):
                    node.metadata["task_item"] = True
                self._attach_block(parent, node)
                stack.append(node)
            elif token_type == "table_open":
                node = Table(source_location=self._location(token))
                self._attach_block(parent, node)
                stack.append(node)
            elif token_type == "thead_open":
                in_header = True
            elif token_type == "thead_close":
                in_header = False
            elif token_type == "tr_open":
                assert isinstance(parent, Table)
                row = TableRow(is_header=in_header, source_location=self._location(token))
                if in_header:
                    parent.header = row
                else:
                    parent.rows.append(row)
                stack.append(row)
            elif token_type in ("th_open", "td_open"):
                assert isinstance(parent, TableRow)
                alignment = _ALIGNMENTS.get(str(token.attrGet("style") or ""))
                cell = TableCell(alignment=alignment)  # type: ignore[arg-type]
                parent.cells.append(cell)
                stack.append(cell)
            elif token_type == "inline":
                self._fill_inline(parent, token)
            elif token_type.endswith("_close") and token_type not in ("tbody_close",):
                closed = stack.pop()
                self._finish_block(closed, token)
            elif token_type in ("fence", "code_block"):
                self._attach_block(parent, self._code_block(token))
            elif token_type == "hr":
                self._attach_block(parent, ThematicBreak(source_location=self._location(token)))
            elif token_type == "html_block":
                self._attach_block(parent, HTMLBlock(content=token.content, source_location=self._location(token)))
            elif token_type == "definition":
                meta = token.meta or {}
                self._attach_block(
                    parent,
                    LinkReferenceDefinition(
                        label=meta.get("label", ""),
                        url=meta.get("url", ""),
                        title=meta.get("title") or "",
                        source_location=self._location(token),
                    ),
                )
            elif token_type == "tbody_open":
                continue
            else:
                logger.debug("Skipping unsupported block token: %s", token_type)

        return document

    def _location(self, token: Token) -> Optional[SourceLocation]:
        if not token.map:
            return None
        start, end = token.map
        return SourceLocation(format="markdown", line=start + 1, end_line=max(start + 1, end))

    @staticmethod
    def _attach_block(parent: Node, node: Node) -> None:
        if isinstance(parent, List):
            assert isinstance(node, ListItem)
            parent.items.append(node)
        elif isinstance(parent, (Document, BlockQuote, ListItem)):
            parent.children.append(node)
        else:
            raise TypeError(f"{type(parent).__name__} cannot contain {type(node).__name__}")

    def _finish_block(self, node: Node, token: Token) -> None:
        if isinstance(node, List):
            # markdown-it hides the paragraphs of tight lists
            for item in node.items:
                for child in item.children:
                    if isinstance(child, Paragraph):
                        node.tight = bool(child.metadata.get("tight"))
                        return
        elif isinstance(node, Table):
            header_cells = node.header.cells if node.header else []
            node.alignments = [cell.alignment for cell in header_cells]
        elif isinstance(node, ListItem) and node.metadata.pop("task_item", False):
            self._extract_task_status(node)

    @staticmethod
    def _extract_task_status(item: ListItem) -> None:
        if not item.children or not isinstance(item.children[0], Paragraph):
            return
        content = item.children[0].content
        if not content or not isinstance(content[0], HTMLInline) or _TASK_CHECKBOX_CLASS not in content[0].content:
            return
        checkbox = content.pop(0)
        item.task_status = "checked" if 'checked="checked"' in checkbox.content else "unchecked"
        if content and isinstance(content[0], Text):
            content[0].content = content[0].content.lstrip()

    def _code_block(self, token: Token) -> CodeBlock:
        location = self._location(token)
        if token.type == "code_block":
            return CodeBlock(content=token.content, fenced=False, fence_length=0, source_location=location)
        info = token.info.strip()
        language = info.split()[0] if info else None
        markup = token.markup or "```"
        return CodeBlock(
            content=token.content,
            language=language,
            info=info,
            fence_char=markup[0],
            fence_length=len(markup),
            source_location=location,
        )

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _fill_inline(self, parent: Node, token: Token) -> None:
        if not isinstance(parent, (Paragraph, Heading, TableCell)):
            logger.debug("Ignoring inline content under %s", type(parent).__name__)
            return
        parent.content.extend(self._convert_inline(token.children or []))

    def _convert_inline(self, tokens: list[Token]) -> list[Node]:
        """Convert inline tokens using an explicit stack of open containers."""
        root: list[Node] = []
        stack: list[list[Node]] = [root]

        for token in tokens:
            token_type = token.type
            target = stack[-1]

            if token_type == "text":
                if token.content:
                    target.append(Text(content=token.content))
            elif token_type == "text_special":
                raw = token.markup if token.markup and token.markup != token.content else None
                target.append(Text(content=token.content, raw=raw))
            elif token_type == "softbreak":
                target.append(LineBreak(soft=True))
            elif token_type == "hardbreak":
                target.append(LineBreak(soft=False))
            elif token_type == "code_inline":
                target.append(Code(content=token.content))
            elif token_type == "html_inline":
                target.append(HTMLInline(content=token.content))
            elif token_type == "image":
                target.append(self._image(token))
            elif token_type.endswith("_open"):
                container = self._open_inline(token)
                if container is None:
                    logger.debug("Skipping unsupported inline token: %s", token_type)
                    continue
                target.append(container)
                stack.append(container.content)  # type: ignore[attr-defined]
            elif token_type.endswith("_close"):
                if len(stack) > 1:
                    stack.pop()
            else:
                logger.debug("Skipping unsupported inline token: %s", token_type)

        return root

    @staticmethod
    def _open_inline(token: Token) -> Node | None:
        token_type = token.type
        if token_type == "em_open":
            return Emphasis(delimiter=token.markup or "*")
        if token_type == "strong_open":
            return Strong(delimiter=(token.markup or "*")[0])
        if token_type == "s_open":
            return Strikethrough()
        if token_type == "sub_open":
            return Subscript()
        if token_type == "link_open":
            style: Literal["inline", "autolink", "linkify"] = "inline"
            if token.markup == "autolink":
                style = "autolink"
            elif token.markup == "linkify":
                style = "linkify"
            title = token.attrGet("title")
            return Link(
                url=str(token.attrGet("href") or ""),
                title=str(title) if title is not None else None,
                style=style,
            )
        return None

    def _image(self, token: Token) -> Image:
        title = token.attrGet("title")
        return Image(
            url=str(token.attrGet("src") or ""),
            alt_text=token.content,
            title=str(title) if title is not None else None,
            content=self._convert_inline(token.children or []),
        )


def markdown_to_ast(
    markdown_content: str,
    flavor: Any = None,
    preserve_source: bool = False,
) -> Document:
    r"""Convert a Markdown string to AST.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    flavor : str, Flavor or None, default = None
        Flavor selector; unknown values resolve to GFM
    preserve_source : bool, default = False
        Parse for round-tripping instead of HTML output

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    options = MarkdownParserOptions(flavor=resolve_flavor(flavor).flavor, preserve_source=preserve_source)
    return MarkdownToAstConverter(options).parse(markdown_content)
