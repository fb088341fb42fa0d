"""Branch listing model"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class BranchEntry:
    """A local branch and, when checked out, the worktree holding it."""
    branch: str
    commit: str
    message: str = ""
    path: Optional[str] = None  # Worktree directory, only when checked out somewhere
    is_worktree: bool = False  # Checked out in some worktree
    is_current: bool = False  # Checked out in the active worktree
