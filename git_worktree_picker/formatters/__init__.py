"""Formatting utilities for git-worktree-picker.

Shared by the rich console output and the Textual picker.
"""

from .worktree import (
    format_path,
    format_worktree_branch,
    format_branch_marker,
    format_force_state,
    describe_worktree,
    describe_branch,
)

__all__ = [
    "format_path",
    "format_worktree_branch",
    "format_branch_marker",
    "format_force_state",
    "describe_worktree",
    "describe_branch",
]
