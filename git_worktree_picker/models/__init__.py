"""Data models for git-worktree-picker."""

from .branch import BranchEntry
from .operation import Callbacks, OperationResult
from .worktree import WorktreeEntry

__all__ = ["BranchEntry", "Callbacks", "OperationResult", "WorktreeEntry"]
