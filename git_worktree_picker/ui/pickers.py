"""Picker flows that work with any FrontEnd.

Each flow lists candidates, lets the front end choose, and hands the
choice to WorktreeManager.
"""

from typing import Optional, TYPE_CHECKING

from git_worktree_picker.constants import PROMPT_NEW_BRANCH, PROMPT_WORKTREE_PATH
from git_worktree_picker.formatters import describe_branch, describe_worktree
from git_worktree_picker.models.operation import Callbacks, OperationResult
from git_worktree_picker.ui.adapter import FrontEnd
from git_worktree_picker.utils.paths import same_path

if TYPE_CHECKING:
    from git_worktree_picker.core import WorktreeManager


def _notify_failure(frontend: FrontEnd):
    return lambda error: frontend.notify(str(error), "error")


def switch_worktree_picker(manager: "WorktreeManager", frontend: FrontEnd) -> Optional[OperationResult]:
    """Pick a worktree and switch to it. Picking the active one does nothing."""
    worktree = frontend.select("Switch to", manager.list(), describe_worktree)
    if worktree is None or same_path(worktree.path, manager.current_worktree_path):
        return None

    return manager.switch(
        worktree.path,
        Callbacks(
            on_success=lambda: frontend.notify(f"Switched to {worktree.path}"),
            on_failure=_notify_failure(frontend),
        ),
    )


def delete_worktree_picker(
    manager: "WorktreeManager", frontend: FrontEnd, forced: bool = False
) -> Optional[OperationResult]:
    """Pick a worktree and delete it (the manager redirects away from the active one)."""
    worktree = frontend.select("Delete", manager.list(), describe_worktree)
    if worktree is None:
        return None

    return manager.delete(
        worktree.path,
        forced=forced,
        callbacks=Callbacks(
            on_success=lambda: frontend.notify(f"Removed worktree {worktree.path}"),
            on_failure=_notify_failure(frontend),
        ),
    )


def create_worktree_picker(manager: "WorktreeManager", frontend: FrontEnd) -> Optional[OperationResult]:
    """Choose a branch (or type a new one), ask for a path, create the worktree.

    An empty path answer falls back to the branch name.
    """
    branches = manager.list_branches(only_branches=True, only_worktrees=False)
    choice = frontend.select("Choose or create branch", branches, describe_branch)
    if choice is not None:
        branch = choice.branch
    else:
        branch = frontend.prompt(PROMPT_NEW_BRANCH)
        if not branch:
            return None

    path = frontend.prompt(PROMPT_WORKTREE_PATH.format(branch=branch), default=branch)
    if path is None:
        return None
    if not path.strip():
        path = branch

    return manager.create(
        path,
        branch,
        Callbacks(
            on_success=lambda: frontend.notify(f"Created worktree {path} for {branch}"),
            on_failure=_notify_failure(frontend),
        ),
    )
