"""Command-line interface for the mdsync markdown backend.

Environment Variable Support
----------------------------
``MDSYNC_FLAVOR`` sets the default flavor for ``render`` and ``format``.
An explicit ``--flavor`` always overrides it.

Examples
--------
Render a preview::

    $ mdsync render notes.md -o notes.html

Emit HTML, line map and metrics as JSON::

    $ mdsync render notes.md --json

Reformat in place with plus bullets and four-space nesting::

    $ mdsync format notes.md --bullet-char + --list-indent 4 --in-place

Check formatting in CI::

    $ mdsync format notes.md --check

Show cursor metrics::

    $ mdsync metrics notes.md --cursor 120

"""

import argparse
import logging
from typing import Optional

from mdsync.cli.builder import EXIT_ERROR, create_parser, get_exit_code_for_exception
from mdsync.cli.commands import COMMANDS
from mdsync.exceptions import MdSyncError
from mdsync.logging_utils import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["create_parser", "main"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def main(args: Optional[list[str]] = None) -> int:
    """Run the mdsync CLI.

    Parameters
    ----------
    args : list[str], optional
        Arguments to parse instead of ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = create_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        # argparse exits on --help, --version and usage errors
        return e.code if isinstance(e.code, int) else 0

    _setup_logging_level(parsed_args)
    handler = COMMANDS[parsed_args.command]

    try:
        return handler(parsed_args)
    except MdSyncError as e:
        logger.error("%s", e)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=logger.isEnabledFor(logging.DEBUG))
        return EXIT_ERROR
