#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser construction for the mdsync CLI.

Formatter flags are generated from :class:`~mdsync.options.FormatterOptions`
field metadata, so the help text and accepted values stay in one place.
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import MISSING, fields
from typing import Any, Dict, Optional, Type

from mdsync import __version__
from mdsync.constants import FLAVOR_ENV_VAR
from mdsync.exceptions import FileError, FormatError, ParsingError, RenderError, ValidationError
from mdsync.options.base import BaseRendererOptions
from mdsync.options.formatter import FormatterOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_FORMAT_ERROR = 5
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class DynamicCLIBuilder:
    """Builds CLI arguments dynamically from options dataclasses.

    Every field contributes one flag named after the field in kebab case,
    unless its metadata sets ``cli_name``. Boolean fields that default to
    ``True`` become ``store_false`` switches. Flags default to
    ``argparse.SUPPRESS`` so that only values given on the command line
    appear in the namespace.
    """

    @staticmethod
    def snake_to_kebab(name: str) -> str:
        """Convert snake_case to kebab-case."""
        return name.replace("_", "-")

    def infer_cli_name(self, field: Any) -> str:
        """Return the ``--flag`` name for a dataclass field.

        Parameters
        ----------
        field : Field
            Dataclass field

        Returns
        -------
        str
            CLI argument name with ``--`` prefix

        """
        metadata = field.metadata
        if "cli_name" in metadata:
            return f"--{metadata['cli_name']}"
        kebab_name = self.snake_to_kebab(field.name)
        if field.default is True and not kebab_name.startswith("no-"):
            kebab_name = f"no-{kebab_name}"
        return f"--{kebab_name}"

    def get_argument_kwargs(self, field: Any) -> Dict[str, Any]:
        """Build argparse kwargs from field metadata.

        Parameters
        ----------
        field : Field
            Dataclass field

        Returns
        -------
        dict
            Kwargs for ``argparse.add_argument()``

        """
        metadata = field.metadata
        kwargs: Dict[str, Any] = {
            "dest": field.name,
            "default": argparse.SUPPRESS,
            "help": metadata.get("help", f"Configure {field.name}"),
        }

        if isinstance(field.default, bool):
            kwargs["action"] = "store_false" if field.default else "store_true"
            return kwargs

        if metadata.get("type") in (int, float):
            kwargs["type"] = metadata["type"]
        if "choices" in metadata:
            kwargs["choices"] = list(metadata["choices"])
        if field.default is not MISSING:
            kwargs["help"] = f"{kwargs['help']} (default: {field.default})"
        return kwargs

    def add_options_arguments(
        self,
        parser: argparse.ArgumentParser,
        options_class: Type[Any],
        title: Optional[str] = None,
        exclude_base_fields: bool = True,
    ) -> argparse._ArgumentGroup:
        """Add one flag per options field to an argument group.

        Parameters
        ----------
        parser : argparse.ArgumentParser
            Parser receiving the group
        options_class : type
            Options dataclass to introspect
        title : str, optional
            Group title; defaults to the class name
        exclude_base_fields : bool, default True
            Skip fields inherited from :class:`BaseRendererOptions`

        Returns
        -------
        argparse._ArgumentGroup
            The populated group

        """
        group = parser.add_argument_group(title or options_class.__name__)
        base_field_names = {f.name for f in fields(BaseRendererOptions)} if exclude_base_fields else set()

        for field in fields(options_class):
            if field.name in base_field_names:
                continue
            group.add_argument(self.infer_cli_name(field), **self.get_argument_kwargs(field))
        return group

    @staticmethod
    def collect_options(parsed_args: argparse.Namespace, options_class: Type[Any]) -> Dict[str, Any]:
        """Collect the option values present on a parsed namespace."""
        return {f.name: getattr(parsed_args, f.name) for f in fields(options_class) if hasattr(parsed_args, f.name)}


def _add_input_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="Markdown file to read, or '-' for stdin")


def _add_flavor_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--flavor",
        default=os.environ.get(FLAVOR_ENV_VAR),
        help=f"Markdown flavor: commonmark or gfm (default: ${FLAVOR_ENV_VAR} or gfm)",
    )


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-o", "--out", help="Write output to this file instead of stdout")


def create_parser() -> argparse.ArgumentParser:
    """Create the ``mdsync`` argument parser with all subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="mdsync",
        description="Render markdown to annotated HTML, reformat it, and report document metrics.",
    )
    parser.add_argument("--version", "-V", action="version", version=f"mdsync {__version__}")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Set logging level for debugging (default: WARNING)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--trace", action="store_true", help="Enable debug logging with timestamps and logger names")
    parser.add_argument("--log-file", help="Also write log output to this file")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    render = subparsers.add_parser("render", help="Render markdown to annotated HTML")
    _add_input_argument(render)
    _add_flavor_argument(render)
    render.add_argument("--json", action="store_true", help="Emit HTML, line map and metrics as JSON")
    _add_output_argument(render)

    fmt = subparsers.add_parser("format", help="Reformat markdown to canonical style")
    _add_input_argument(fmt)
    _add_flavor_argument(fmt)
    DynamicCLIBuilder().add_options_arguments(fmt, FormatterOptions, title="formatting options")
    mode = fmt.add_mutually_exclusive_group()
    mode.add_argument("--in-place", "-i", action="store_true", help="Rewrite the input file")
    mode.add_argument("--check", action="store_true", help="Exit with status 1 if the file would be reformatted")
    _add_output_argument(fmt)

    metrics = subparsers.add_parser("metrics", help="Report line, word and character counts")
    _add_input_argument(metrics)
    metrics.add_argument("--cursor", type=int, metavar="OFFSET", help="UTF-8 byte offset of the cursor")
    metrics.add_argument("--json", action="store_true", help="Emit metrics as JSON")

    flavors = subparsers.add_parser("flavors", help="List supported markdown flavors")
    flavors.add_argument("--json", action="store_true", help="Emit the flavor list as JSON")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, FormatError):
        return EXIT_FORMAT_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
