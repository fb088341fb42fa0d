"""Worktree lifecycle: create, switch and delete with deletion safety rules."""

import os
from dataclasses import dataclass
from typing import List, Optional, Union

from git_worktree_picker.config import Config
from git_worktree_picker.constants import (
    MSG_DELETE_FAILED,
    MSG_FORCE_OFF,
    MSG_FORCE_ON,
    MSG_NOT_DELETED,
    PROMPT_DELETE,
    PROMPT_FORCE_DELETE,
)
from git_worktree_picker.exceptions import (
    CommandError,
    CreateError,
    GitWorktreePickerError,
    NotFoundError,
    ValidationError,
)
from git_worktree_picker.models.branch import BranchEntry
from git_worktree_picker.models.operation import Callbacks, OperationResult
from git_worktree_picker.models.worktree import WorktreeEntry
from git_worktree_picker.services.git.registry import WorktreeRegistry
from git_worktree_picker.services.git.runner import CommandRunner
from git_worktree_picker.ui.adapter import FrontEnd, HeadlessFrontEnd, is_affirmative
from git_worktree_picker.utils.logging import get_logger
from git_worktree_picker.utils.paths import same_path

logger = get_logger(__name__)


@dataclass
class LifecycleState:
    """State that outlives a single operation."""

    # Sticky: armed by a failed deletion or a toggle, cleared by a successful deletion
    force_next_deletion: bool = False


class WorktreeManager:
    """Coordinates worktree create/switch/delete for any front end.

    Each mutating call returns an OperationResult and fires exactly one of
    the success/failure callbacks, except when the user declines a
    deletion, which fires neither.
    """

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict, None] = None,
        frontend: Optional[FrontEnd] = None,
        runner: Optional[CommandRunner] = None,
    ):
        """Initialize the manager.

        Args:
            repo_path: Any directory inside the repository; becomes the active worktree
            config: Configuration dict or Config object
            frontend: Adapter used for confirmations and notifications
            runner: Command runner (built from repo_path when omitted)
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config
        self.frontend = frontend or HeadlessFrontEnd()
        self.runner = runner or CommandRunner(repo_path, executable=config.git_executable)
        self.registry = WorktreeRegistry(self.runner, config)
        self.state = LifecycleState()

    # Queries

    @property
    def current_worktree_path(self) -> Optional[str]:
        return self.registry.current_path()

    @property
    def root_path(self) -> str:
        return self.registry.root_path()

    @property
    def force_next_deletion(self) -> bool:
        return self.state.force_next_deletion

    def list(self) -> List[WorktreeEntry]:
        """Worktrees as git reports them right now."""
        return self.registry.list_worktrees()

    def list_branches(self, only_branches: bool = True, only_worktrees: bool = True) -> List[BranchEntry]:
        """Local branches of the requested categories."""
        return self.registry.list_branches(only_branches=only_branches, only_worktrees=only_worktrees)

    # Helpers

    @staticmethod
    def _succeed(callbacks: Optional[Callbacks], value: Optional[str] = None) -> OperationResult:
        if callbacks and callbacks.on_success:
            callbacks.on_success()
        return OperationResult.ok(value)

    @staticmethod
    def _fail(callbacks: Optional[Callbacks], error: GitWorktreePickerError) -> OperationResult:
        if callbacks and callbacks.on_failure:
            callbacks.on_failure(error)
        return OperationResult.failed(error)

    def _resolve(self, name: str) -> str:
        # Relative paths are taken from the active worktree, not the process cwd
        if os.path.isabs(os.path.expanduser(name)):
            return os.path.normpath(os.path.expanduser(name))
        return os.path.normpath(os.path.join(self.runner.working_dir, name))

    # Operations

    def create(self, name: str, source_ref: str, callbacks: Optional[Callbacks] = None) -> OperationResult:
        """Add a worktree at ``name`` checked out to ``source_ref``.

        When ``source_ref`` does not resolve, a new branch of that name is
        created from HEAD. The new worktree is not made active.
        """
        if not name or not name.strip():
            return self._fail(callbacks, ValidationError("worktree path", "path cannot be empty"))
        if not source_ref or not source_ref.strip():
            return self._fail(callbacks, ValidationError("branch", "branch or ref cannot be empty"))
        name = name.strip()
        source_ref = source_ref.strip()

        try:
            if self.registry.ref_exists(source_ref):
                args = ["worktree", "add", name, source_ref]
            else:
                logger.info(f"Ref {source_ref} does not exist, creating it as a new branch")
                args = ["worktree", "add", "-b", source_ref, name]
            self.runner.run(args)
        except CommandError as e:
            error = CreateError(name, source_ref, e.stderr or str(e))
            logger.error(str(error))
            return self._fail(callbacks, error)

        path = self._resolve(name)
        logger.info(f"Created worktree at {path} for {source_ref}")
        return self._succeed(callbacks, path)

    def switch(self, path: str, callbacks: Optional[Callbacks] = None) -> OperationResult:
        """Make ``path`` the active worktree.

        Allowed targets are listed worktrees and the root path (which may be
        a bare repository).
        """
        resolved = self._resolve(path)
        try:
            entry = self.registry.find_worktree(resolved)
            if entry is not None:
                target = entry.path
            else:
                root = self.registry.root_path()
                if not same_path(root, resolved):
                    return self._fail(callbacks, NotFoundError(path))
                target = root
        except GitWorktreePickerError as e:
            logger.error(f"Could not list worktrees: {e}")
            return self._fail(callbacks, e)

        self.runner.chdir(target)
        if self.config.change_directory:
            os.chdir(target)
        logger.info(f"Switched to worktree {target}")
        return self._succeed(callbacks, target)

    def deletion_prompt(self, forced: bool = False) -> str:
        """Confirmation question for the next deletion."""
        if forced or self.state.force_next_deletion:
            return PROMPT_FORCE_DELETE
        return PROMPT_DELETE

    def confirm_deletion(self, forced: bool = False) -> bool:
        """Ask the front end whether to go ahead, if the policy requires asking."""
        if not self.config.confirm_deletions:
            return True

        answer = self.frontend.confirm(self.deletion_prompt(forced))
        if is_affirmative(answer):
            return True

        self.frontend.notify(MSG_NOT_DELETED)
        return False

    def delete(
        self,
        path: str,
        forced: bool = False,
        callbacks: Optional[Callbacks] = None,
        confirmed: bool = False,
    ) -> OperationResult:
        """Remove the worktree at ``path``.

        Args:
            path: Worktree to remove
            forced: Force removal (dirty or locked worktrees)
            callbacks: Success/failure slots
            confirmed: The front end already asked the user
        """
        try:
            entry = self.registry.find_worktree(self._resolve(path))
        except GitWorktreePickerError as e:
            logger.error(f"Could not list worktrees: {e}")
            return self._fail(callbacks, e)
        if entry is None:
            return self._fail(callbacks, NotFoundError(path))

        if not confirmed and not self.confirm_deletion(forced):
            logger.info(f"Deletion of {entry.path} declined")
            return OperationResult.aborted()

        # A worktree cannot be removed while active
        if same_path(self.registry.current_path(), entry.path):
            try:
                root = self.registry.root_path()
            except GitWorktreePickerError as e:
                logger.error(f"Could not find the root worktree: {e}")
                return self._fail(callbacks, e)
            redirect = self.switch(root)
            if not redirect.success:
                return self._fail(callbacks, redirect.error)

        force = forced or self.state.force_next_deletion
        args = ["worktree", "remove", entry.path]
        if force:
            args.append("--force")

        try:
            self.runner.run(args)
        except CommandError as e:
            logger.error(f"Failed to remove worktree at {entry.path}: {e}")
            self.state.force_next_deletion = True
            self.frontend.notify(MSG_DELETE_FAILED, "error")
            return self._fail(callbacks, e)

        self.state.force_next_deletion = False
        logger.info(f"Removed worktree at {entry.path}" + (" (forced)" if force else ""))
        return self._succeed(callbacks, entry.path)

    def toggle_force_next_deletion(self) -> bool:
        """Flip the sticky force flag and report the new state."""
        self.state.force_next_deletion = not self.state.force_next_deletion
        self.frontend.notify(MSG_FORCE_ON if self.state.force_next_deletion else MSG_FORCE_OFF)
        return self.state.force_next_deletion
