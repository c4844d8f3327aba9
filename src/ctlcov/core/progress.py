"""User-facing progress feedback for CLI runs.

Design principles:
- Progress bar only when a TTY processes many documents
- Status and warning lines go to stderr, the report goes to stdout
- Suppress structlog console output while a bar is live

Usage::

    from ctlcov.core.progress import progress, status

    for document in progress(documents, desc="Parsing"):
        parse(document)

    status("Could not read foo.xml", style="warning")
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

T = TypeVar("T")

# Threshold for showing progress bar
_PROGRESS_THRESHOLD = 20

_console = Console(stderr=True)

_STYLES = {
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
}

# Process-wide: worker threads log while the main thread drives the bar
_console_suppressed = threading.Event()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return _console_suppressed.is_set()


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output while a live display runs."""
    _console_suppressed.set()
    try:
        yield
    finally:
        _console_suppressed.clear()


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from ctlcov.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def status(message: str, *, style: str = "info") -> None:
    """Print a styled status message (``info`` or ``warning``) to stderr."""
    prefix = _STYLES.get(style, "")
    _console.print(f"{prefix}{escape(message)}", highlight=False, soft_wrap=True)

    _get_logger().debug("status", message=message, style=style)


def progress(
    iterable: Iterable[T],
    *,
    desc: str | None = None,
    total: int | None = None,
    unit: str = "files",
) -> Iterator[T]:
    """Wrap an iterable with a progress bar if TTY and more than a handful of items."""
    if total is None:
        try:
            total = len(iterable)  # type: ignore[arg-type]
        except TypeError:
            total = None

    show_bar = _is_tty() and total is not None and total > _PROGRESS_THRESHOLD

    if show_bar:
        with (
            suppress_console_logs(),
            Progress(
                TextColumn("    {task.description}:"),
                BarColumn(bar_width=25, style="cyan", complete_style="cyan"),
                TaskProgressColumn(),
                TextColumn("{task.completed}/{task.total} {task.fields[unit]}"),
                console=_console,
                transient=True,
            ) as pbar,
        ):
            task_id = pbar.add_task(desc or "Processing", total=total, unit=unit)
            for item in iterable:
                yield item
                pbar.advance(task_id)
    else:
        log = _get_logger()
        if desc and total:
            log.debug("progress_start", desc=desc, total=total)
        for item in iterable:
            yield item
        if desc and total:
            log.debug("progress_done", desc=desc, total=total)
