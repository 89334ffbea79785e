# src/dataitem/core/logging.py
"""Console logging built on rich."""

import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Sequence

from rich.console import Console
from rich.table import Table

# All modules print through this single console instance.
console = Console()

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


def _markup(style: str) -> Callable[[Any], str]:
    return lambda value: f"[{style}]{value}[/{style}]"


color_palette: Dict[str, Callable[[Any], str]] = {
    "kind": _markup("magenta"),
    "table": _markup("blue"),
    "filter": _markup("cyan"),
    "order": _markup("yellow"),
    "count": _markup("bold green"),
}


class Logger:
    """Small leveled logger with sections, timers and indentation."""

    def __init__(self, level: str = "INFO"):
        self.level = LEVELS[level]
        self._indent = 0

    def set_level(self, level: str) -> None:
        if level.upper() not in LEVELS:
            raise ValueError(f"Unknown log level '{level}'")
        self.level = LEVELS[level.upper()]

    def _emit(self, level: int, prefix: str, message: str) -> None:
        if level < self.level:
            return
        console.print(f"{'  ' * self._indent}{prefix} {message}")

    def debug(self, message: str) -> None:
        self._emit(10, "[dim]DEBUG[/dim]", message)

    def info(self, message: str) -> None:
        self._emit(20, "[blue]INFO[/blue] ", message)

    def success(self, message: str) -> None:
        self._emit(20, "[green]✓[/green]    ", message)

    def warn(self, message: str) -> None:
        self._emit(30, "[yellow]WARN[/yellow] ", message)

    def error(self, message: str) -> None:
        self._emit(40, "[bold red]ERROR[/bold red]", message)

    def section(self, title: str) -> None:
        if self.level > LEVELS["INFO"]:
            return
        console.rule(f"[bold]{title}[/bold]")

    @contextmanager
    def indented(self) -> Iterator[None]:
        self._indent += 1
        try:
            yield
        finally:
            self._indent -= 1

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Report how long the wrapped block took."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.info(f"{label} took {elapsed:.4f}s")

    def table(self, headers: Sequence[str], rows: List[Sequence[Any]]) -> None:
        if self.level > LEVELS["INFO"]:
            return
        table = Table(box=None, padding=(0, 1))
        for header in headers:
            table.add_column(header, style="cyan")
        for row in rows:
            table.add_row(*[str(cell) for cell in row])
        console.print(table)


log = Logger()
