"""Utility functions for git-worktree-picker.

This package provides utility modules:
- logging: Logging configuration and logger creation
- paths: Path normalisation and comparison
"""

from .logging import setup_logging, get_logger, ColoredFormatter
from .paths import normalize_path, same_path

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "ColoredFormatter",
    # Paths
    "normalize_path",
    "same_path",
]
