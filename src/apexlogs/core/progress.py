"""User-facing progress feedback for CLI operations.

Usage::

    from apexlogs.core.progress import export_progress, status

    status("Saved 3 logs", style="success")  # ✓ Saved 3 logs

    with export_progress(total=len(logs), desc="Downloading") as advance:
        export_all(..., on_progress=lambda _: advance())
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Below this many items the bar only flickers
_PROGRESS_THRESHOLD = 5

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

# Process-wide so log lines from export worker threads are held back too
_suppress_console_logs = threading.Event()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return _suppress_console_logs.is_set()


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output while a live display is active."""
    _suppress_console_logs.set()
    try:
        yield
    finally:
        _suppress_console_logs.clear()


def _get_logger() -> BoundLogger:
    from apexlogs.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)

    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return "1 log" / "3 logs" style counts."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


@contextmanager
def export_progress(total: int, *, desc: str = "Downloading", unit: str = "logs") -> Iterator[Callable[[], None]]:
    """Yield an ``advance()`` callable backed by a progress bar when on a TTY.

    ``advance`` is safe to call from worker threads.
    """
    if not (_is_tty() and total >= _PROGRESS_THRESHOLD):
        log = _get_logger()
        log.debug("progress_start", desc=desc, total=total)
        yield lambda: None
        log.debug("progress_done", desc=desc, total=total)
        return

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
        task_id = pbar.add_task(desc, total=total, unit=unit)
        yield lambda: pbar.advance(task_id)
