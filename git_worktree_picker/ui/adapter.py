"""Contract between the lifecycle manager and whatever drives it."""

from typing import Callable, Optional, Protocol, Sequence, TypeVar

from git_worktree_picker.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def is_affirmative(answer: Optional[str]) -> bool:
    """Interpret a yes/no answer: first letter, case-insensitive, must be 'y'."""
    return bool(answer) and answer.strip()[:1].lower() == "y"


class FrontEnd(Protocol):
    """What a picker, CLI or script must provide to drive WorktreeManager."""

    def select(
        self, title: str, items: Sequence[T], describe: Callable[[T], str] = str
    ) -> Optional[T]:
        """Let the user pick one of ``items``; None when nothing was picked."""
        ...

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        """Ask for free text (a branch name or a worktree path)."""
        ...

    def confirm(self, message: str) -> str:
        """Ask a yes/no question and return the raw answer."""
        ...

    def notify(self, message: str, level: str = "info") -> None:
        """Show a status message (force toggle, failures, declines)."""
        ...


class HeadlessFrontEnd:
    """Front end for scripted use: no selection, canned answers, log output."""

    def __init__(self, assume_yes: bool = False):
        self.assume_yes = assume_yes
        self.messages = []

    def select(self, title, items, describe=str):
        return None

    def prompt(self, message, default=""):
        return default

    def confirm(self, message):
        return "y" if self.assume_yes else "n"

    def notify(self, message, level="info"):
        self.messages.append((level, message))
        if level == "error":
            logger.error(message)
        elif level == "warning":
            logger.warning(message)
        else:
            logger.info(message)
