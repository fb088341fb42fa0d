"""Display service for worktree and branch listings"""
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from git_worktree_picker.constants import BRANCH_COLUMNS, WORKTREE_COLUMNS
from git_worktree_picker.formatters import (
    format_branch_marker,
    format_path,
    format_worktree_branch,
)
from git_worktree_picker.models.branch import BranchEntry
from git_worktree_picker.models.worktree import WorktreeEntry
from git_worktree_picker.utils.logging import get_logger
from git_worktree_picker.utils.paths import same_path

console = Console()
logger = get_logger(__name__)


class DisplayService:
    def __init__(self, verbose: bool = False, output: Optional[Console] = None):
        self.verbose = verbose
        self.console = output or console

    def worktree_table(self, worktrees: List[WorktreeEntry], current_path: Optional[str] = None) -> Table:
        """Build a table of worktrees, highlighting the active one."""
        table = Table()
        for col in WORKTREE_COLUMNS:
            table.add_column(col.label)

        for worktree in worktrees:
            style = "green" if same_path(worktree.path, current_path) else None
            if worktree.is_prunable:
                style = "yellow"
            table.add_row(
                Text(format_worktree_branch(worktree)),
                Text(format_path(worktree.path)),
                worktree.short_sha,
                style=style,
            )
        return table

    def branch_table(self, branches: List[BranchEntry]) -> Table:
        """Build a table of branches with their worktree markers."""
        table = Table()
        for col in BRANCH_COLUMNS:
            table.add_column(col.label)

        for branch in branches:
            style = "green" if branch.is_current else ("cyan" if branch.is_worktree else None)
            table.add_row(
                format_branch_marker(branch),
                Text(branch.branch),
                branch.commit,
                Text(format_path(branch.path)),
                Text(branch.message),
                style=style,
            )
        return table

    def display_worktrees(self, worktrees: List[WorktreeEntry], current_path: Optional[str] = None) -> None:
        """Print the worktree table."""
        if not worktrees:
            self.console.print("[yellow]No worktrees found[/yellow]")
            return
        self.console.print(self.worktree_table(worktrees, current_path))
        if self.verbose:
            self.console.print(f"[dim]{len(worktrees)} worktree(s)[/dim]")

    def display_branches(self, branches: List[BranchEntry]) -> None:
        """Print the branch table."""
        if not branches:
            self.console.print("[yellow]No branches found[/yellow]")
            return
        self.console.print(self.branch_table(branches))
        if self.verbose:
            self.console.print("[dim]* = current worktree   + = checked out in another worktree[/dim]")
