"""Front ends for git-worktree-picker.

The core only talks to a FrontEnd (see adapter.py); the console and the
Textual picker are two implementations of it.
"""

from .adapter import FrontEnd, HeadlessFrontEnd, is_affirmative

__all__ = ["FrontEnd", "HeadlessFrontEnd", "is_affirmative"]
