# Dotfiler Console Output
# Rich-based console output for user-friendly display

from typing import Union

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from dotfiler.sync.engine import CleanupResult, SyncResult
from dotfiler.sync.status import GroupStatus, StatusKind, SyncState
from dotfiler.sync.tasks import Package

_STATUS_STYLES = {
    StatusKind.UP_TO_DATE: "green",
    StatusKind.NEEDS_BACKUP: "yellow",
    StatusKind.NEEDS_RESTORE: "yellow",
    StatusKind.NEEDS_RESYNC: "yellow",
    StatusKind.OVERWRITE_DATA: "red",
    StatusKind.ERROR: "red",
}


def format_status(status: Union[SyncState, GroupStatus], level: int = 0) -> str:
    """
    Render a status tree as indented text.

    Each level is indented by four spaces. Unnamed groups do not add a
    level of their own.

    Args:
        status: File or group status.
        level: Starting indentation level.

    Returns:
        One line per named status.
    """
    if isinstance(status, GroupStatus):
        lines = []
        child_level = level
        if status.name:
            lines.append(" " * 4 * level + status.name)
            child_level = level + 1
        for item in status.items:
            text = format_status(item, child_level)
            if text:
                lines.append(text)
        return "\n".join(lines)

    return " " * 4 * level + status.status_str


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync operations.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored, highlight=False)

    @property
    def rich(self) -> RichConsole:
        """The underlying Rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)

    def print_status(self, status: GroupStatus, *, plain: bool = False) -> None:
        """
        Print the nested status of all enabled packages.

        Args:
            status: Status of the root package.
            plain: Print unstyled text, e.g. for scripts.
        """
        if plain:
            self._console.print(format_status(status), markup=False, highlight=False)
            return
        self._console.print("Current status:\n")
        self._print_status_tree(status, 0)

    def _print_status_tree(self, status: Union[SyncState, GroupStatus], level: int) -> None:
        indent = " " * 4 * level
        if isinstance(status, GroupStatus):
            child_level = level
            if status.name:
                self._console.print(f"{indent}[bold]{escape(status.name)}[/bold]")
                child_level += 1
            for item in status.items:
                self._print_status_tree(item, child_level)
            return

        style = _STATUS_STYLES.get(status.kind, "white")
        text = f"{escape(status.name)}: " if status.name else ""
        line = f"{indent}{text}[{style}]{status.label}[/{style}]"
        if status.message:
            line += f": {escape(status.message)}"
        self._console.print(line)

    def print_sync_result(self, result: SyncResult, *, dry_run: bool = False) -> None:
        """
        Print sync result summary.

        Args:
            result: Sync result to display.
            dry_run: Whether this was a dry run (changes wording).
        """
        sync_verb = "would sync" if dry_run else "synced"
        status_text = "Dry run completed" if dry_run else "Sync completed"

        if result.success:
            body = f"[green]{status_text}[/green]\nFiles: {len(result.synced)} {sync_verb}, {result.errors} errors"
        else:
            body = f"[red]{status_text} with errors[/red]\nFiles: {len(result.synced)} {sync_verb}, {result.errors} errors"

        if self.verbose:
            for name in result.synced:
                body += f"\n  • {name}"

        self._console.print()
        self._console.print(Panel(body, title="Summary", border_style="green" if result.success else "red"))

    def print_cleanup_result(self, result: CleanupResult, *, dry_run: bool = False) -> None:
        """Print cleanup result summary."""
        delete_verb = "would delete" if dry_run else "deleted"
        self._console.print()
        self._console.print(
            Panel(
                f"Candidates: {len(result.candidates)}\nFiles: {len(result.deleted)} {delete_verb}",
                title="Cleanup",
                border_style="blue",
            )
        )

    def print_packages(self, packages: dict[str, Package], *, title: str = "Packages") -> None:
        """
        Print packages with their files as a tree.

        Args:
            packages: Package key to package task.
            title: Tree label.
        """
        tree = Tree(f"[bold]{title}[/bold]")
        for key, package in packages.items():
            label = f"[cyan]{escape(package.name)}[/cyan] [dim]({escape(key)})[/dim]"
            if package.skip_reason:
                label += f" [yellow]{package.skip_reason}[/yellow]"
            branch = tree.add(label)
            for item in package:
                branch.add(escape(str(item.description)))
        self._console.print(tree)

    def print_available_packages(self, packages: dict[str, Package], enabled: list[str]) -> None:
        """Print a table of every known package."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("Package")
        table.add_column("Name")
        table.add_column("Status")
        table.add_column("Platforms", style="dim")
        table.add_column("Description", style="dim")

        for key, package in sorted(packages.items()):
            if key in enabled:
                status = "[green]enabled[/green]"
            elif package.skip_reason:
                status = f"[dim]{package.skip_reason.lower()}[/dim]"
            else:
                status = "[dim]available[/dim]"
            platforms = ", ".join(package.platforms) or "all"
            table.add_row(escape(key), escape(package.name), status, platforms, escape(package.summary))

        self._console.print(table)


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
