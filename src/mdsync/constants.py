#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdsync library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Formatter Defaults - Default values for FormatterOptions
3. HTML Rendering - Tag catalogs used by the line-sync annotator and linkifier
4. Security Constants - URL schemes that never survive rendering
5. Pretty-Printer Resources - Worker thread stack and recursion budgets
6. Protected Content - Placeholder token layout for protected lines
7. Command Line - Environment variables read by the CLI
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

BulletChar = Literal["-", "*", "+"]
CodeFence = Literal["```", "~~~"]
EmphasisChar = Literal["*", "_"]
Alignment = Literal["left", "center", "right"]

# =============================================================================
# Formatter Defaults
# =============================================================================

DEFAULT_LIST_INDENT = 2
DEFAULT_BULLET_CHAR: BulletChar = "-"
DEFAULT_CODE_BLOCK_FENCE: CodeFence = "```"
DEFAULT_EMPHASIS_CHAR: EmphasisChar = "*"
DEFAULT_TABLE_ALIGNMENT = True
DEFAULT_NORMALIZE_WHITESPACE = True
DEFAULT_MAX_BLANK_LINES = 2

VALID_BULLET_CHARS = frozenset({"-", "*", "+"})
VALID_CODE_BLOCK_FENCES = frozenset({"```", "~~~"})
VALID_EMPHASIS_CHARS = frozenset({"*", "_"})

# Indentation unit emitted by the pretty-printer under "- " bullets
PRINTER_LIST_INDENT = 2

# =============================================================================
# HTML Rendering
# =============================================================================

# Block elements that receive a data-source-line attribute
SOURCE_LINE_BLOCK_TAGS = frozenset(
    {
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "p",
        "pre",
        "blockquote",
        "ul",
        "ol",
        "li",
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
        "div",
        "section",
        "article",
        "header",
        "footer",
        "hr",
        "dl",
        "dt",
        "dd",
    }
)

# Trimmed-line prefixes that advance the source line counter
SOURCE_LINE_ADVANCE_PREFIXES = (
    "<h1",
    "<h2",
    "<h3",
    "<h4",
    "<h5",
    "<h6",
    "<p",
    "<li",
    "<pre",
    "<blockquote",
    "<table",
    "<tr",
    "<hr",
)

SOURCE_LINE_ATTRIBUTE = "data-source-line"

RAW_HTML_OMITTED = "<!-- raw HTML omitted -->"

# Trimmed-line prefixes the path linkifier never touches
PATH_LINK_SKIP_PREFIXES = ("<a", "<code", "<pre", "</")

PATH_LINK_CLASS = "file-path-link"
PATH_LINK_STYLE = "color: var(--color-accent-filepath); text-decoration: underline; cursor: pointer;"

# =============================================================================
# Security Constants
# =============================================================================

DANGEROUS_SCHEMES = ("javascript:", "vbscript:", "file:", "data:")
SAFE_DATA_IMAGE_PREFIXES = ("data:image/gif;", "data:image/png;", "data:image/jpeg;", "data:image/webp;")

# =============================================================================
# Pretty-Printer Resources
# =============================================================================

PRETTY_PRINT_STACK_SIZE = 64 * 1024 * 1024
PRETTY_PRINT_RECURSION_LIMIT = 20_000
PRETTY_PRINT_THREAD_NAME = "mdsync-pretty-print"

# Nesting depth handed to the markdown engine; deeper documents are rejected
PARSER_MAX_NESTING = 100

# Nesting depth for the reformatter, which parses on the enlarged-stack worker
FORMATTER_MAX_NESTING = 1000

# =============================================================================
# Protected Content
# =============================================================================

PROTECTED_TOKEN_PREFIX = "MDSYNCPROTECTEDLINE"
PROTECTED_TOKEN_SUFFIX = "X"
PROTECTED_TOKEN_INDEX_WIDTH = 6

# =============================================================================
# Command Line
# =============================================================================

FLAVOR_ENV_VAR = "MDSYNC_FLAVOR"
