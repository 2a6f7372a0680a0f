# ghbackup Console Output
# Rich-based console output for sync diagnostics

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from ghbackup.sync.models import PassResult


@dataclass
class FileStatus:
    """Read-only comparison of one tracked file with its remote copy."""

    remote_key: str
    local_size: Optional[int]
    remote_size: Optional[int]
    plan: str
    error: Optional[str] = None


class Console:
    """
    Console output manager using Rich.

    All sync diagnostics go through this class. Messages are printed as
    plain text; paths and API errors are escaped so they never render as
    markup.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=not colored)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_debug(self, message: str) -> None:
        """Print message only in verbose mode."""
        if self.verbose:
            self._console.print(f"[dim]{escape(message)}[/dim]")

    def print_pass_result(self, result: "PassResult", *, dry_run: bool = False) -> None:
        """
        Print summary of one backup pass.

        Args:
            result: Pass result to display.
            dry_run: Whether this was a dry run.
        """
        prefix = "[yellow](dry run)[/yellow] " if dry_run else ""

        changed = [r for r in result.results if r.wrote or not r.success]
        if changed:
            table = Table(show_header=True, header_style="bold")
            table.add_column("File", style="cyan")
            table.add_column("Step")
            table.add_column("Result")
            for r in changed:
                if r.success:
                    outcome = f"[green]{r.action_type.value}[/green]"
                else:
                    outcome = f"[red]error[/red] [dim]{escape(r.error or '')}[/dim]"
                table.add_row(escape(r.remote_key or str(r.local_path)), r.direction.value, outcome)
            self._console.print(table)

        summary = (
            f"{prefix}Pass {result.cycle}: "
            f"[blue]{result.pulled} pulled[/blue], "
            f"[green]{result.pushed} pushed[/green], "
            f"[red]{result.errors} errors[/red]"
        )
        style = "red" if result.has_errors else "green"
        self._console.print(Panel(summary, title="Backup Pass", border_style=style))

    def print_file_status(self, statuses: list[FileStatus]) -> None:
        """Print local/remote comparison table."""
        if not statuses:
            self._console.print("[dim]No tracked files[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("File", style="cyan")
        table.add_column("Local", justify="right")
        table.add_column("Remote", justify="right")
        table.add_column("Next pass")

        for status in statuses:
            local = f"{status.local_size} B" if status.local_size is not None else "[dim]missing[/dim]"
            remote = f"{status.remote_size} B" if status.remote_size is not None else "[dim]absent[/dim]"
            if status.error:
                plan = f"[red]error[/red] [dim]{escape(status.error)}[/dim]"
            else:
                plan = _PLAN_STYLES.get(status.plan, status.plan)
            table.add_row(escape(status.remote_key), local, remote, plan)

        self._console.print()
        self._console.print(table)
        self._console.print()

    def print_config_summary(self, config_path: str, repository: str, files_count: int) -> None:
        """Print configuration summary."""
        self._console.print(f"[bold]Config:[/bold] {escape(config_path)}")
        self._console.print(f"[bold]Repository:[/bold] {escape(repository)}")
        self._console.print(f"[bold]Tracked files:[/bold] {files_count}")


_PLAN_STYLES: dict[str, str] = {
    "pulled": "[blue]← pull[/blue]",
    "created": "[green]+ create[/green]",
    "updated": "[green]→ push[/green]",
    "unchanged": "[dim]= unchanged[/dim]",
    "skipped_missing": "[yellow]missing locally[/yellow]",
}


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
