"""Centralized logging utilities for mdsync entry points."""

from __future__ import annotations

import logging
import sys
from typing import Optional


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the command-line interface.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file receiving a copy of the output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for pipeline traces.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%H:%M:%S")
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.debug("Logging to file: %s", log_file)

    return root_logger
