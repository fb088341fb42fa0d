"""Custom exceptions for git-worktree-picker"""

from typing import Optional, Sequence


class GitWorktreePickerError(Exception):
    """Base exception for all git-worktree-picker errors."""
    pass


class CommandError(GitWorktreePickerError):
    """Exception raised when an external git command fails or cannot be spawned."""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = (stderr or "").strip()

        error_msg = f"Command '{' '.join(self.command)}' failed"
        if exit_code is None:
            error_msg += " to start"
        else:
            error_msg += f" (exit {exit_code})"
        if self.stderr:
            error_msg += f": {self.stderr}"

        super().__init__(error_msg)


class ParseError(GitWorktreePickerError):
    """Exception raised when command output does not match the expected grammar."""

    def __init__(self, message: str, line: Optional[str] = None):
        self.line = line
        error_msg = message
        if line is not None:
            error_msg += f": {line!r}"
        super().__init__(error_msg)


class ValidationError(GitWorktreePickerError):
    """Exception raised for invalid user input, before any command runs."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid {field}: {message}")


class NotFoundError(GitWorktreePickerError):
    """Exception raised when a path is not present in the current worktree listing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No worktree found at '{path}'")


class CreateError(GitWorktreePickerError):
    """Exception raised when adding a worktree fails."""

    def __init__(self, path: str, ref: str, stderr: Optional[str] = None):
        self.path = path
        self.ref = ref
        self.stderr = (stderr or "").strip()

        error_msg = f"Could not create worktree '{path}' from '{ref}'"
        if self.stderr:
            error_msg += f": {self.stderr}"

        super().__init__(error_msg)
