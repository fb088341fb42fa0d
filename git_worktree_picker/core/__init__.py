"""Core functionality for git-worktree-picker"""

from .lifecycle import LifecycleState, WorktreeManager

__all__ = ["LifecycleState", "WorktreeManager"]
