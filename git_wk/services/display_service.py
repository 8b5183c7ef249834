"""Display service for worktree and branch tables"""
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_wk.constants import BRANCH_COLUMNS, STATUS_COLORS, WORKTREE_COLUMNS
from git_wk.formatters import format_branch_status, format_worktree_branch
from git_wk.models.branch import BranchRecord
from git_wk.models.worktree import MoveResult, WorktreeRecord


class DisplayService:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_worktree_table(self, worktrees: List[WorktreeRecord]) -> None:
        """Display a table of worktrees, main worktree first."""
        table = Table()
        for col in WORKTREE_COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        for index, wt in enumerate(worktrees):
            table.add_row(
                escape(format_worktree_branch(wt, is_main=index == 0)),
                escape(wt.path),
                wt.short_commit,
                style="dim" if wt.is_detached else None,
            )

        self.console.print(table)

    def display_non_standard_warning(self, worktrees: List[WorktreeRecord]) -> None:
        """Warn about worktrees outside the standard location."""
        if not worktrees:
            return

        self.console.print()
        self.console.print(
            f"[yellow]Warning: {len(worktrees)} worktree(s) not in standard location:[/yellow]"
        )
        for wt in worktrees:
            self.console.print(f"  - {escape(wt.branch)} ({escape(wt.path)})")
        self.console.print()
        self.console.print("Run [bold]wk organize[/bold] to move them to the standard location.")

    def display_branch_table(self, branches: List[BranchRecord]) -> None:
        """Display a table of branches with their local/remote status."""
        table = Table()
        for col in BRANCH_COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        for branch in branches:
            status = format_branch_status(branch)
            table.add_row(
                escape(branch.name),
                status,
                branch.commit_short,
                branch.commit_date,
                style=STATUS_COLORS.get(status),
            )

        self.console.print(table)

    def display_organize_plan(self, worktrees: List[WorktreeRecord], worktrees_dir: str) -> None:
        """Show which worktrees will move where."""
        self.console.print(
            f"The following {len(worktrees)} worktree(s) will be moved to {escape(worktrees_dir)}:\n"
        )
        for wt in worktrees:
            self.console.print(f"  [bold]{escape(wt.branch)}[/bold]")
            self.console.print(f"    from: {escape(wt.path)}")
            self.console.print(f"    to:   {escape(worktrees_dir)}/{escape(wt.branch)}\n")

    def display_move_results(self, results: List[MoveResult]) -> None:
        """Report the outcome of each move in a batch."""
        for result in results:
            label = escape(result.record.branch)
            if result.ok:
                self.console.print(f"Moving {label}... [green]done[/green] ({escape(result.new_path)})")
            else:
                self.console.print(f"Moving {label}... [red]failed:[/red] {escape(result.error)}")
