#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/formatter/pipeline.py
"""Reformat markdown to canonical style.

The reformatter chains four stages:

1. :func:`~mdsync.formatter.protect.protect_lines` swaps box-drawing lines
   for placeholder tokens.
2. The document is parsed in source-preserving mode and pretty-printed by
   :class:`~mdsync.renderers.markdown.MarkdownRenderer` on a worker thread
   with an enlarged stack.
3. :func:`~mdsync.formatter.protect.restore_lines` puts the protected lines
   back verbatim.
4. :func:`~mdsync.formatter.adjust.adjust_formatted_markdown` applies the
   bullet, fence, indentation, hard-break and blank-line conventions.

Only stage 2 can fail. It raises :class:`~mdsync.exceptions.FormatError`
and no partial output is produced.

"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping, Union

from mdsync.constants import FORMATTER_MAX_NESTING
from mdsync.exceptions import FormatError
from mdsync.formatter.adjust import adjust_formatted_markdown
from mdsync.formatter.protect import protect_lines, restore_lines
from mdsync.formatter.worker import run_with_stack
from mdsync.options.formatter import FormatterOptions
from mdsync.options.markdown import MarkdownParserOptions
from mdsync.parsers.markdown import MarkdownToAstConverter
from mdsync.renderers.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)

FormatterOptionsLike = Union[FormatterOptions, Mapping[str, Any], None]


def resolve_formatter_options(
    options: FormatterOptionsLike = None,
    overrides: Mapping[str, Any] | None = None,
) -> FormatterOptions:
    """Merge an options object or mapping with keyword overrides.

    Parameters
    ----------
    options : FormatterOptions, mapping or None
        Base options. Mappings go through :meth:`FormatterOptions.from_mapping`;
        anything else is ignored with a warning.
    overrides : mapping, optional
        Field values that take precedence over ``options``

    Returns
    -------
    FormatterOptions
        Validated options

    """
    if isinstance(options, FormatterOptions):
        base = {f.name: getattr(options, f.name) for f in fields(options)}
    elif isinstance(options, Mapping):
        base = dict(options)
    else:
        if options is not None:
            logger.warning("Ignoring formatter options of type %s", type(options).__name__)
        base = {}

    if not overrides and isinstance(options, FormatterOptions):
        return options
    return FormatterOptions.from_mapping({**base, **(overrides or {})})


def _parse_and_print(content: str, options: FormatterOptions) -> str:
    parser_options = MarkdownParserOptions(
        flavor=options.flavor, preserve_source=True, max_nesting=FORMATTER_MAX_NESTING
    )
    document = MarkdownToAstConverter(parser_options).parse(content)
    return MarkdownRenderer(options).render_to_string(document)


def format_markdown(content: str, options: FormatterOptionsLike = None, **overrides: Any) -> str:
    """Reformat markdown text according to style options.

    Parameters
    ----------
    content : str
        Markdown source
    options : FormatterOptions, mapping or None, default None
        Style conventions; defaults apply when omitted
    **overrides
        Individual option values, e.g. ``bullet_char="+"``

    Returns
    -------
    str
        Canonical markdown ending in a single newline, or ``""`` when the
        input holds no content

    Raises
    ------
    FormatError
        If parsing or pretty-printing fails, including when the document
        nests blocks deeper than ``FORMATTER_MAX_NESTING`` levels

    Examples
    --------
    >>> format_markdown("* one\\n* two\\n\\n\\n\\nText", bullet_char="+")
    '+ one\\n+ two\\n\\nText\\n'

    """
    resolved = resolve_formatter_options(options, overrides)
    logger.debug("Formatting %d characters (flavor=%s)", len(content), resolved.flavor.value)

    protected_text, table = protect_lines(content)
    try:
        printed = run_with_stack(_parse_and_print, protected_text, resolved)
    except FormatError as e:
        logger.debug("Pretty-print stage failed: %s", e)
        raise

    restored, restored_indices = restore_lines(printed, table)
    return adjust_formatted_markdown(restored, resolved, restored_indices)
