"""Path helpers shared by the registry and the lifecycle manager."""

import os
from typing import Optional


def normalize_path(path: str) -> str:
    """Return an absolute, symlink-free form of ``path`` for comparisons."""
    return os.path.realpath(os.path.expanduser(path))


def same_path(first: Optional[str], second: Optional[str]) -> bool:
    """Check whether two paths point at the same location."""
    if not first or not second:
        return False
    return normalize_path(first) == normalize_path(second)
