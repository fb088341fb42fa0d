"""Read-through view of the repository's worktrees and branches."""

from typing import List, Optional, TYPE_CHECKING, Union

from git_worktree_picker.constants import BRANCH_REF_FORMAT
from git_worktree_picker.exceptions import CommandError, ParseError
from git_worktree_picker.models.branch import BranchEntry
from git_worktree_picker.models.worktree import WorktreeEntry
from git_worktree_picker.services.git.parsers import (
    parse_branch_output,
    parse_branch_refs,
    parse_worktree_list,
    parse_worktree_porcelain,
)
from git_worktree_picker.services.git.runner import CommandRunner
from git_worktree_picker.utils.logging import get_logger
from git_worktree_picker.utils.paths import same_path

if TYPE_CHECKING:
    from git_worktree_picker.config import Config

logger = get_logger(__name__)


class WorktreeRegistry:
    """Answers listing questions by asking git every time.

    Nothing is cached: worktrees and branches can change behind our back
    (manual git commands), so every call re-runs the listing. There is no
    write path here; mutations go through WorktreeManager.
    """

    def __init__(self, runner: CommandRunner, config: Union["Config", dict, None] = None):
        """Initialize the registry.

        Args:
            runner: Command runner bound to the active worktree
            config: Configuration dictionary or Config object
        """
        self.runner = runner
        config = config if config is not None else {}
        self.use_porcelain = config.get("use_porcelain", True)

    def _worktree_rows(self, include_bare: bool) -> List[WorktreeEntry]:
        if self.use_porcelain:
            lines = self.runner.run(["worktree", "list", "--porcelain"])
            return parse_worktree_porcelain(lines, include_bare=include_bare)
        lines = self.runner.run(["worktree", "list"])
        return parse_worktree_list(lines, include_bare=include_bare)

    def list_worktrees(self) -> List[WorktreeEntry]:
        """List all non-bare worktrees in git's order.

        Raises:
            CommandError: If git fails
            ParseError: If the listing is malformed
        """
        worktrees = self._worktree_rows(include_bare=False)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def list_branches(self, only_branches: bool = False, only_worktrees: bool = False) -> List[BranchEntry]:
        """List local branches of the requested categories.

        Args:
            only_branches: Include branches not checked out anywhere
            only_worktrees: Include branches checked out in a worktree
        """
        if self.use_porcelain:
            lines = self.runner.run(["for-each-ref", f"--format={BRANCH_REF_FORMAT}", "refs/heads"])
            branches = parse_branch_refs(lines, only_branches, only_worktrees)
        else:
            text = self.runner.output(["branch", "-vvl"])
            branches = parse_branch_output(text, only_branches, only_worktrees)

        logger.debug(f"Found {len(branches)} branches")
        return branches

    def current_path(self) -> Optional[str]:
        """Top-level directory of the worktree commands currently run in.

        Returns:
            The path, or None when the runner is not inside a working tree
            (for example the root of a bare repository).
        """
        try:
            lines = self.runner.run(["rev-parse", "--show-toplevel"])
        except CommandError as e:
            logger.debug(f"Not inside a working tree: {e}")
            return None
        return lines[0].strip() if lines else None

    def root_path(self) -> str:
        """Path of the primary worktree (the bare repository for bare setups)."""
        rows = self._worktree_rows(include_bare=True)
        if not rows:
            raise ParseError("Worktree listing is empty")
        return rows[0].path

    def find_worktree(self, path: str) -> Optional[WorktreeEntry]:
        """Find the listed worktree at ``path``."""
        for worktree in self.list_worktrees():
            if same_path(worktree.path, path):
                return worktree
        return None

    def ref_exists(self, ref: str) -> bool:
        """Check whether ``ref`` resolves to a commit."""
        try:
            self.runner.run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
            return True
        except CommandError:
            return False
