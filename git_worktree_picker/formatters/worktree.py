"""Worktree and branch formatting utilities."""

import os
from typing import Optional

from git_worktree_picker.constants import (
    SYMBOL_CURRENT,
    SYMBOL_DETACHED,
    SYMBOL_PLAIN,
    SYMBOL_WORKTREE,
)
from git_worktree_picker.models.branch import BranchEntry
from git_worktree_picker.models.worktree import WorktreeEntry


def format_path(path: Optional[str], home: Optional[str] = None) -> str:
    """
    Shorten a path for display by replacing the home directory with ``~``.

    Args:
        path: Path to format
        home: Home directory (defaults to the user's)

    Returns:
        Display path, or an empty string for no path
    """
    if not path:
        return ""
    home = home or os.path.expanduser("~")
    if path == home:
        return "~"
    if path.startswith(home.rstrip(os.sep) + os.sep):
        return "~" + path[len(home.rstrip(os.sep)):]
    return path


def format_worktree_branch(worktree: WorktreeEntry) -> str:
    """Branch label of a worktree row."""
    return worktree.branch or SYMBOL_DETACHED


def format_branch_marker(branch: BranchEntry) -> str:
    """Marker column of a branch row: current, other worktree, or plain."""
    if branch.is_current:
        return SYMBOL_CURRENT
    if branch.is_worktree:
        return SYMBOL_WORKTREE
    return SYMBOL_PLAIN


def format_force_state(force_next_deletion: bool) -> str:
    return "force delete: on" if force_next_deletion else "force delete: off"


def describe_worktree(worktree: WorktreeEntry) -> str:
    """One-line description used by selection prompts."""
    return f"{format_worktree_branch(worktree)}  {format_path(worktree.path)}  {worktree.short_sha}"


def describe_branch(branch: BranchEntry) -> str:
    """One-line description used by selection prompts."""
    return f"{format_branch_marker(branch)} {branch.branch}  {branch.commit}  {branch.message}".rstrip()
