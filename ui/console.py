"""
ConsoleUI - Rich-based console interface.

All user-facing output goes through here: environment report, per-file
progress lines, extension results, warnings and errors.
"""

from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..discovery.system import SystemInfo
from ..runner.state import State
from ..snapshot.models import (
    CollectResult,
    CopyOutcome,
    CopyStatus,
    RestoreResult,
    SnapshotInfo,
    SNIPPETS_DIR,
)


class ConsoleUI:
    """
    Rich console interface for vscode_sync.
    """

    def __init__(self, quiet: bool = False, console: Optional[Console] = None):
        self.quiet = quiet
        self.console = console or Console()

    def print(self, *args, **kwargs):
        """Print to console."""
        if self.quiet:
            return
        self.console.print(*args, **kwargs)

    def print_banner(self):
        """Print application banner."""
        if self.quiet:
            return

        banner = f"""
[bold cyan]VSCode Config Sync[/] [dim]v{__version__}[/]
[dim]Snapshot and restore settings, keybindings, snippets and extensions[/]
        """
        self.console.print(Panel(banner.strip(), border_style="cyan"))

    def print_system_info(self, info: SystemInfo):
        """Display the environment report."""
        if self.quiet:
            return

        table = Table(show_header=False, box=None)
        table.add_column("Key", style="dim")
        table.add_column("Value")

        table.add_row("Platform", info.platform_name)
        table.add_row("CPU Architecture", info.cpu_architecture)
        table.add_row("Logical Processors", str(info.logical_processors))
        if info.editor_version:
            table.add_row("VS Code Version", info.editor_version)
        else:
            table.add_row("VS Code", "[yellow]Not installed or not found in PATH[/]")
        user_dir = str(info.user_dir)
        if not info.user_dir_exists:
            user_dir += " [yellow](missing)[/]"
        table.add_row("User Directory", user_dir)

        self.console.print(table)

    def print_state_change(self, from_state: State, to_state: State, metadata: Dict = None):
        """Display state transition."""
        if self.quiet:
            return

        status_colors = {
            State.START: "dim",
            State.CHECK_PREREQUISITES: "blue",
            State.COLLECT: "cyan",
            State.SYNC: "cyan",
            State.INVALID_CHOICE: "yellow",
            State.END: "bold green",
        }
        color = status_colors.get(to_state, "white")
        self.console.print(f"[dim]{from_state.name}[/] -> [{color}]{to_state.name}[/]")

    def print_copy_outcomes(self, outcomes: List[CopyOutcome], base_dir: Optional[Path], verb: str):
        """
        Display per-file progress.

        Top-level files get one line each; the snippets tree is summarized in
        a single line. Missing sources are not mentioned.
        """
        snippet_outcomes = []
        for outcome in outcomes:
            relative = _relative_name(outcome.source, base_dir)
            if relative.startswith(SNIPPETS_DIR + "/"):
                snippet_outcomes.append((relative, outcome))
                continue
            self._print_outcome(relative, outcome, verb)

        if snippet_outcomes:
            written = sum(1 for _, o in snippet_outcomes if o.written)
            self.print(f"{verb}: {SNIPPETS_DIR}/ [dim]({written} files)[/]")
            for relative, outcome in snippet_outcomes:
                if outcome.status == CopyStatus.SKIPPED:
                    self.print_warning(f"Failed to copy {relative}: {outcome.reason}")
                elif outcome.reason:
                    self.print(f"  [dim]{relative}: kept original encoding ({outcome.reason})[/]")

    def _print_outcome(self, name: str, outcome: CopyOutcome, verb: str):
        if outcome.missing_source:
            return
        if outcome.status == CopyStatus.SKIPPED:
            self.print_warning(f"Failed to copy {name}: {outcome.reason}")
        elif outcome.status == CopyStatus.COPIED_RAW:
            self.print(f"{verb}: {name} [dim](kept original encoding: {outcome.reason})[/]")
        else:
            self.print(f"{verb}: {name}")

    def print_collect_result(self, result: CollectResult):
        """Display the outcome of a collect."""
        if not result.success:
            self.print_error(result.error or "Collect failed")
            return

        self.print_copy_outcomes(result.copies, result.source_dir, "Copied")

        export = result.export
        if export is not None:
            if export.stderr:
                # Raw CLI output may contain brackets
                self.print(export.stderr, style="dim", markup=False)
            if export.success:
                self.print(f"Exported extensions: {export.path.name} [dim]({export.count} extensions)[/]")
            else:
                self.print_warning(
                    f"Failed to export extensions. Ensure VSCode CLI is available. {export.error}"
                )

        self.print_success(f"Done. Saved to: {result.snapshot_dir}")

    def print_restore_result(self, result: RestoreResult):
        """Display the outcome of a sync."""
        if not result.success:
            self.print_error(result.error or "Sync failed")
            return

        self.print(f"Syncing: {result.source_dir} → {result.user_dir}")
        self.print_copy_outcomes(result.copies, result.source_dir, "Synced")

        for outcome in result.failed_installs:
            self.print_warning(f"Failed to install extension {outcome.identifier}: {outcome.message}")

        if result.extensions_requested:
            installed = len(result.installs) - len(result.failed_installs)
            self.print(f"Extensions installed (forced): {installed}/{len(result.installs)}")

        self.print_success("Sync complete.")

    def print_snapshots(self, snapshots: List[SnapshotInfo], configs_dir: Path):
        """Display the snapshot archive as a table."""
        if not snapshots:
            self.print(f"[yellow]No snapshots found in {configs_dir}[/]")
            return

        table = Table(title=f"Snapshots in {configs_dir}")
        table.add_column("Name", style="bold")
        table.add_column("Created")
        table.add_column("Contents")
        table.add_column("Extensions", justify="right")

        for i, snapshot in enumerate(snapshots):
            name = snapshot.name + (" [green](latest)[/]" if i == 0 else "")
            created = snapshot.created_at.strftime("%Y-%m-%d %H:%M:%S") if snapshot.created_at else "-"
            table.add_row(
                name,
                created,
                ", ".join(snapshot.contents) or "[dim]empty[/]",
                str(snapshot.extension_count) if snapshot.has_extensions else "-",
            )

        # The listing is the command's output, so it ignores quiet
        self.console.print(table)

    def print_success(self, message: str):
        if self.quiet:
            return
        self.console.print(f"[bold green]{message}[/]")

    def print_warning(self, message: str):
        """Display a non-fatal problem."""
        if self.quiet:
            return
        self.console.print(f"[yellow]Warning:[/] {message}")

    def print_error(self, message: str):
        """Display error message."""
        self.console.print(f"[bold red]Error:[/] {message}")


def _relative_name(path: Path, base_dir: Optional[Path]) -> str:
    """Path relative to base_dir with forward slashes, or just the file name."""
    if base_dir is not None:
        try:
            return path.relative_to(base_dir).as_posix()
        except ValueError:
            pass
    return path.name
