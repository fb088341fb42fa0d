"""Command runner for git invocations."""

import re
from typing import List, Optional, Sequence

import git

from git_worktree_picker.constants import ECHO_SEPARATOR
from git_worktree_picker.exceptions import CommandError
from git_worktree_picker.utils.logging import get_logger

logger = get_logger(__name__)

# GitPython decorates stderr as "\n  stderr: '<text>'"
_STDERR_DECORATION = re.compile(r"^\s*stderr:\s*'(.*)'\s*$", re.DOTALL)


def clean_stderr(stderr: Optional[str]) -> str:
    """Strip GitPython's ``stderr: '...'`` decoration from an error message."""
    if not stderr:
        return ""
    match = _STDERR_DECORATION.match(stderr)
    if match:
        stderr = match.group(1)
    return stderr.strip()


def trim_shell_framing(text: str) -> str:
    """Drop a command echo preceding the real output, if there is one."""
    index = text.find(ECHO_SEPARATOR)
    if index == -1:
        return text
    return text[index + len(ECHO_SEPARATOR):]


class CommandRunner:
    """Runs git commands synchronously in a working directory.

    No retries happen here; a failing command raises CommandError and the
    caller decides what to do.
    """

    def __init__(self, working_dir: str, executable: str = "git"):
        """Initialize the runner.

        Args:
            working_dir: Directory commands run in
            executable: Name or path of the git binary
        """
        self.working_dir = working_dir
        self.executable = executable

    def _get_git(self) -> git.Git:
        """Get a git command wrapper bound to the current working directory."""
        return git.Git(self.working_dir)

    def chdir(self, path: str) -> None:
        """Run subsequent commands in ``path``."""
        logger.debug(f"Runner working directory: {self.working_dir} -> {path}")
        self.working_dir = path

    def output(self, args: Sequence[str]) -> str:
        """Run ``git <args>`` and return its standard output as text.

        Raises:
            CommandError: If git exits non-zero or cannot be started
        """
        command = [self.executable, *args]
        logger.debug(f"Running {' '.join(command)} in {self.working_dir}")
        try:
            text = self._get_git().execute(command)
        except git.exc.GitCommandNotFound as e:
            logger.error(f"Could not start {self.executable}: {e}")
            raise CommandError(command, None, str(e)) from e
        except git.exc.GitCommandError as e:
            stderr = clean_stderr(e.stderr if hasattr(e, "stderr") else str(e))
            status = e.status if isinstance(e.status, int) else None
            logger.debug(f"Command failed (exit {status}): {stderr}")
            raise CommandError(command, status, stderr) from e

        return trim_shell_framing(text)

    def run(self, args: Sequence[str]) -> List[str]:
        """Run ``git <args>`` and return its standard output split into lines.

        Blank lines are kept; the porcelain grammar uses them as separators.
        """
        return self.output(args).splitlines()
