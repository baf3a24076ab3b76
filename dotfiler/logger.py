"""Rich console output for sync operations."""

from dataclasses import dataclass
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape


class SyncLogger:
    """Rich console output for sync operations.

    One logger is created per run and handed to every component that
    reports progress. It counts errors so callers can derive an exit code.
    """

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Enable verbose output
        """
        self.console = console or Console()
        self.verbose = verbose
        self.error_count = 0
        self.warning_count = 0

    def debug(self, message: str) -> None:
        """Dim message, only shown in verbose mode."""
        if self.verbose:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def info(self, message: str) -> None:
        """Blue info message."""
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        """Green success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        """Yellow warning message."""
        self.warning_count += 1
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Red error message."""
        self.error_count += 1
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def raw(self, message: str) -> None:
        """Plain text without markup or highlighting."""
        self.console.print(message, markup=False, highlight=False)

    @property
    def has_errors(self) -> bool:
        """Check if any error was logged."""
        return self.error_count > 0


@dataclass
class TaskEvent:
    """A single operation started on a task."""

    op: str
    item: Any


class TaskReporter:
    """Collects events generated by tasks and logs their progress."""

    _OPS = {"sync": "Syncing"}

    def __init__(self, logger: Optional[SyncLogger] = None):
        """Initialize reporter.

        Args:
            logger: Logger used to print progress. Events are only recorded if None.
        """
        self.logger = logger
        self._events: list[TaskEvent] = []

    def events(self, op: Optional[str] = None) -> list[TaskEvent]:
        """Return recorded events, optionally only those for one operation."""
        if op is None:
            return list(self._events)
        return [event for event in self._events if event.op == op]

    def start(self, item: Any, op: str) -> None:
        """Record that an operation started on an item."""
        self._events.append(TaskEvent(op=op, item=item))

        op_name = self._OPS.get(op)
        description = getattr(item, "description", None)
        if self.logger is None or op_name is None or not description:
            return

        if item.children:
            self.logger.info(f"{op_name} {description}:")
        else:
            self.logger.info(f"{op_name} {description}")
