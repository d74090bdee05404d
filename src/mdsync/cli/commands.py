#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdsync/cli/commands.py
"""Subcommand handlers for the mdsync CLI.

Each handler receives the parsed namespace and returns an exit code.
Library errors propagate to :func:`mdsync.cli.main`, which maps them to
exit codes.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from mdsync.api import render_markdown
from mdsync.cli.builder import EXIT_ERROR, EXIT_SUCCESS, DynamicCLIBuilder
from mdsync.exceptions import FileError, FileNotFoundError, ValidationError
from mdsync.flavors import get_markdown_flavors, is_known_flavor
from mdsync.formatter import format_markdown
from mdsync.metrics import calculate_cursor_metrics, calculate_text_metrics
from mdsync.options.formatter import FormatterOptions

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"

METRIC_LABELS = {
    "line_count": "Lines",
    "word_count": "Words",
    "char_count": "Characters",
    "widest_column": "Widest column",
    "cursor_line": "Cursor line",
    "cursor_col": "Cursor column",
    "current_line_length": "Current line length",
    "current_word_index": "Current word",
}


def read_input(source: str) -> str:
    """Read UTF-8 markdown from a file path or stdin.

    Parameters
    ----------
    source : str
        File path, or ``"-"`` for stdin

    Returns
    -------
    str
        Document text

    Raises
    ------
    FileNotFoundError
        If the path does not exist
    FileError
        If the file cannot be read or is not valid UTF-8

    """
    if source == STDIN_MARKER:
        return sys.stdin.read()

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(source)
    try:
        # newline="" keeps CRLF so byte offsets match the file on disk
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except UnicodeDecodeError as e:
        raise FileError(f"File is not valid UTF-8: {source}", file_path=source, original_error=e) from e
    except OSError as e:
        raise FileError(f"Could not read {source}: {e}", file_path=source, original_error=e) from e


def write_output(content: str, destination: Optional[str]) -> None:
    """Write text to a file, or to stdout when no destination is given."""
    if not destination:
        sys.stdout.write(content)
        return
    try:
        with open(destination, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as e:
        raise FileError(f"Could not write {destination}: {e}", file_path=destination, original_error=e) from e
    logger.info("Wrote %s", destination)


def _validate_flavor(flavor: Optional[str]) -> None:
    if flavor is not None and not is_known_flavor(flavor):
        raise ValidationError(
            f"Unknown flavor '{flavor}'. Choose from: {', '.join(get_markdown_flavors())}",
            parameter_name="flavor",
            parameter_value=flavor,
        )


def _dump_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def handle_render_command(parsed: argparse.Namespace) -> int:
    """Render a markdown file to annotated HTML."""
    _validate_flavor(parsed.flavor)
    content = read_input(parsed.input)
    result = render_markdown(content, flavor=parsed.flavor)

    output = _dump_json(result.to_dict()) if parsed.json else result.html
    write_output(output, parsed.out)
    return EXIT_SUCCESS


def handle_format_command(parsed: argparse.Namespace) -> int:
    """Reformat a markdown file.

    Without ``--in-place`` or ``--check`` the result goes to stdout (or
    ``--out``). ``--check`` writes nothing and exits with status 1 when the
    file is not already formatted.

    Parameters
    ----------
    parsed : argparse.Namespace
        Parsed ``format`` arguments

    Returns
    -------
    int
        Exit code

    """
    _validate_flavor(parsed.flavor)
    if parsed.in_place and parsed.input == STDIN_MARKER:
        raise ValidationError("--in-place cannot be used with stdin", parameter_name="in_place", parameter_value=True)
    if parsed.in_place and parsed.out:
        raise ValidationError(
            "--in-place cannot be combined with --out", parameter_name="out", parameter_value=parsed.out
        )

    overrides = DynamicCLIBuilder.collect_options(parsed, FormatterOptions)
    overrides["flavor"] = parsed.flavor
    options = FormatterOptions.from_mapping(overrides)

    content = read_input(parsed.input)
    formatted = format_markdown(content, options)

    if parsed.check:
        if formatted != content:
            print(f"would reformat {parsed.input}", file=sys.stderr)
            return EXIT_ERROR
        logger.info("%s is already formatted", parsed.input)
        return EXIT_SUCCESS

    if parsed.in_place:
        if formatted == content:
            logger.info("%s unchanged", parsed.input)
            return EXIT_SUCCESS
        write_output(formatted, parsed.input)
        return EXIT_SUCCESS

    write_output(formatted, parsed.out)
    return EXIT_SUCCESS


def _render_rich_metrics(title: str, metrics: Dict[str, int]) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=title)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="green", justify="right")
    for key, value in metrics.items():
        table.add_row(METRIC_LABELS.get(key, key), str(value))

    Console().print(table)


def handle_metrics_command(parsed: argparse.Namespace) -> int:
    """Print document metrics, plus cursor metrics when ``--cursor`` is given."""
    content = read_input(parsed.input)
    if parsed.cursor is None:
        metrics = calculate_text_metrics(content).to_dict()
    else:
        metrics = calculate_cursor_metrics(content, parsed.cursor).to_dict()

    if parsed.json:
        sys.stdout.write(_dump_json(metrics))
    else:
        name = "stdin" if parsed.input == STDIN_MARKER else parsed.input
        _render_rich_metrics(f"Metrics for {name}", metrics)
    return EXIT_SUCCESS


def handle_flavors_command(parsed: argparse.Namespace) -> int:
    """List the canonical flavor names."""
    names = get_markdown_flavors()
    if parsed.json:
        sys.stdout.write(_dump_json(names))
    else:
        for name in names:
            print(name)
    return EXIT_SUCCESS


COMMANDS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "render": handle_render_command,
    "format": handle_format_command,
    "metrics": handle_metrics_command,
    "flavors": handle_flavors_command,
}
