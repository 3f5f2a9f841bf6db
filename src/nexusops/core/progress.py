"""Terminal feedback for generate runs.

Status lines and the summary table go to stderr through one shared Rich
console, leaving stdout free. A progress bar is drawn only for large
projects on a real terminal; anywhere else ``progress()`` is a plain
pass-through. While the bar is live, console log handlers are muted (see
``ConsoleSuppressingFilter``) so log lines do not tear the bar.

Usage::

    for item in progress(files, desc="Generating"):
        ...
    status("12 artifacts written", style="success")  # ✓ 12 artifacts written
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.table import Table

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Below this many files a run finishes before a bar is worth drawing
_PROGRESS_THRESHOLD = 100

_console = Console(stderr=True)

_MARKERS = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
}

_live = threading.local()


def is_console_suppressed() -> bool:
    return getattr(_live, "bar", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Mute console log handlers for the duration of the block."""
    _live.bar = True
    try:
        yield
    finally:
        _live.bar = False


def _get_logger() -> BoundLogger:
    from nexusops.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def get_console() -> Console:
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print one status line to stderr, prefixed by the style's marker."""
    _console.print(f"{' ' * indent}{_MARKERS.get(style, '')}{message}", highlight=False)
    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``pluralize(1, "file")`` -> "1 file", ``pluralize(3, "file")`` -> "3 files"."""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def _bar() -> Progress:
    return Progress(
        TextColumn("    {task.description}:"),
        BarColumn(bar_width=25, style="cyan", complete_style="cyan"),
        MofNCompleteColumn(),
        TextColumn("{task.fields[unit]}"),
        console=_console,
        transient=True,
    )


T = TypeVar("T")


def progress(
    iterable: Iterable[T],
    *,
    desc: str | None = None,
    total: int | None = None,
    unit: str = "files",
    force: bool = False,
) -> Iterator[T]:
    """Yield every item of ``iterable``, with a bar on a TTY for large totals."""
    if total is None and hasattr(iterable, "__len__"):
        total = len(iterable)  # type: ignore[arg-type]

    if not (_is_tty() and total is not None and (force or total > _PROGRESS_THRESHOLD)):
        log = _get_logger()
        log.debug("progress_start", desc=desc, total=total)
        yield from iterable
        log.debug("progress_done", desc=desc, total=total)
        return

    with suppress_console_logs(), _bar() as bar:
        task_id = bar.add_task(desc or "Processing", total=total, unit=unit)
        for item in iterable:
            yield item
            bar.advance(task_id)


def make_counts_table(counts: dict[str, int], *, title: str | None = None) -> Table:
    """Borderless label/count table; zero counts are left out."""
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("label", style="dim")
    table.add_column("count", justify="right")
    for label, count in counts.items():
        if count:
            table.add_row(label.replace("_", " "), str(count))
    return table
