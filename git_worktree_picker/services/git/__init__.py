"""Git-related services for git-worktree-picker."""

from .runner import CommandRunner
from .registry import WorktreeRegistry
from . import parsers

__all__ = [
    "CommandRunner",
    "WorktreeRegistry",
    "parsers",
]
