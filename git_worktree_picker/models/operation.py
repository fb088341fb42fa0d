"""Results and callbacks of lifecycle operations."""

from dataclasses import dataclass
from typing import Callable, Optional

from git_worktree_picker.exceptions import GitWorktreePickerError


@dataclass
class Callbacks:
    """Success/failure slots a front end passes to a mutating operation."""

    on_success: Optional[Callable[[], None]] = None
    on_failure: Optional[Callable[[GitWorktreePickerError], None]] = None


@dataclass
class OperationResult:
    """Outcome of create/switch/delete.

    ``value`` holds the affected worktree path on success. A cancelled
    operation (declined confirmation) is neither a success nor a failure
    and fires no callback.
    """

    success: bool
    value: Optional[str] = None
    error: Optional[GitWorktreePickerError] = None
    cancelled: bool = False

    @classmethod
    def ok(cls, value: Optional[str] = None) -> "OperationResult":
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error: GitWorktreePickerError) -> "OperationResult":
        return cls(success=False, error=error)

    @classmethod
    def aborted(cls) -> "OperationResult":
        return cls(success=False, cancelled=True)
