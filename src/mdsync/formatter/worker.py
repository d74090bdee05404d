#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/formatter/worker.py
"""Run a recursive job on a dedicated thread with an enlarged stack.

The pretty-printer walks the document tree recursively, so its stack depth
grows with the nesting depth of the input. Running it on the caller's
thread would tie the largest document we can reformat to whatever stack
the caller happens to have. Instead each job gets its own thread created
with ``PRETTY_PRINT_STACK_SIZE`` bytes of stack and runs under a raised
recursion limit. The caller blocks until the job finishes; the result or
the exception comes back through a queue.

Both the thread stack size and the recursion limit are process-wide. They
are changed under ``_state_lock``: the stack size only for the instant a
worker thread is created, and the recursion limit for as long as any job
is running. The limit that was in place before the first of a group of
overlapping jobs is put back when the last of them finishes.

"""

from __future__ import annotations

import logging
import queue
import sys
import threading
from typing import Any, Callable, Optional, TypeVar

from mdsync.constants import PRETTY_PRINT_RECURSION_LIMIT, PRETTY_PRINT_STACK_SIZE, PRETTY_PRINT_THREAD_NAME
from mdsync.exceptions import FormatError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_state_lock = threading.Lock()
_active_jobs = 0
_saved_recursion_limit: Optional[int] = None


def _acquire_recursion_limit(recursion_limit: int) -> None:
    global _active_jobs, _saved_recursion_limit
    with _state_lock:
        if _active_jobs == 0:
            _saved_recursion_limit = sys.getrecursionlimit()
        _active_jobs += 1
        if sys.getrecursionlimit() < recursion_limit:
            sys.setrecursionlimit(recursion_limit)


def _release_recursion_limit() -> None:
    global _active_jobs, _saved_recursion_limit
    with _state_lock:
        _active_jobs -= 1
        if _active_jobs == 0 and _saved_recursion_limit is not None:
            sys.setrecursionlimit(_saved_recursion_limit)
            _saved_recursion_limit = None


def _start_thread(target: Callable[[], None], stack_size: int) -> threading.Thread:
    with _state_lock:
        previous: Optional[int] = threading.stack_size()
        try:
            threading.stack_size(stack_size)
        except (ValueError, RuntimeError) as e:
            logger.warning("Could not set worker stack size to %d bytes: %s", stack_size, e)
            previous = None

        try:
            thread = threading.Thread(target=target, name=PRETTY_PRINT_THREAD_NAME, daemon=True)
            thread.start()
        finally:
            if previous is not None:
                threading.stack_size(previous)
    return thread


def run_with_stack(
    func: Callable[..., T],
    *args: Any,
    stack_size: int = PRETTY_PRINT_STACK_SIZE,
    recursion_limit: int = PRETTY_PRINT_RECURSION_LIMIT,
    stage: str = "pretty-print",
) -> T:
    """Call ``func(*args)`` on a worker thread and wait for its result.

    Safe to call from several threads at once.

    Parameters
    ----------
    func : callable
        Job to run
    *args
        Positional arguments for ``func``
    stack_size : int, default PRETTY_PRINT_STACK_SIZE
        Stack size in bytes for the worker thread
    recursion_limit : int, default PRETTY_PRINT_RECURSION_LIMIT
        Minimum interpreter recursion limit while the job runs. A limit that
        is already higher is left alone; the previous limit is restored once
        no job is running.
    stage : str, default "pretty-print"
        Stage name recorded on a resulting :class:`FormatError`

    Returns
    -------
    T
        Whatever ``func`` returned

    Raises
    ------
    FormatError
        If ``func`` raised anything, recursion exhaustion included. The
        original exception is attached as ``original_error``.

    """
    results: queue.Queue[tuple[bool, Any]] = queue.Queue(maxsize=1)

    def target() -> None:
        try:
            results.put((True, func(*args)))
        except BaseException as e:  # noqa: BLE001 - handed back to the calling thread
            results.put((False, e))

    _acquire_recursion_limit(recursion_limit)
    try:
        thread = _start_thread(target, stack_size)
        ok, value = results.get()
        thread.join()
    finally:
        _release_recursion_limit()

    if ok:
        return value
    if isinstance(value, FormatError):
        raise value
    if not isinstance(value, Exception):
        raise value

    logger.debug("Worker job failed in %s stage: %r", stage, value)
    raise FormatError(f"Markdown formatting failed: {value!s}", stage=stage, original_error=value) from value
