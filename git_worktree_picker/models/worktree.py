"""Worktree data models."""

from dataclasses import dataclass

from git_worktree_picker.constants import BARE_SENTINEL, SHORT_SHA_LENGTH


@dataclass
class WorktreeEntry:
    """One row of the worktree listing."""

    path: str
    commit_sha: str  # BARE_SENTINEL for the bare repository row
    branch: str = ""  # Empty for a detached HEAD
    is_main: bool = False  # First row of the listing
    is_locked: bool = False
    is_prunable: bool = False

    @property
    def is_bare(self) -> bool:
        return self.commit_sha == BARE_SENTINEL

    @property
    def is_detached(self) -> bool:
        return not self.is_bare and not self.branch

    @property
    def short_sha(self) -> str:
        if self.is_bare:
            return self.commit_sha
        return self.commit_sha[:SHORT_SHA_LENGTH]

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch or "(detached)"
        main_marker = " (main)" if self.is_main else ""
        return f"{branch} @ {self.path}{main_marker} [{self.short_sha}]"
