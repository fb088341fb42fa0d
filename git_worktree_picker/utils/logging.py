"""Logging setup for the CLI and the picker.

Command-line runs log to stderr at WARNING (INFO with -v, DEBUG with
--debug). The picker owns the terminal, so a picker session logs to
``~/.git-worktree-picker/git-worktree-picker.log`` instead, which keeps a
record of the worktrees created, switched to and removed in that session.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from git_worktree_picker.constants import CONFIG_DIR_NAME, LOG_FILE

PACKAGE_PREFIXES = ("git_worktree_picker.", "services.")

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SHORT_FORMAT = "[%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt=None, datefmt=None, stream=None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.stream = stream

    def _use_color(self) -> bool:
        stream = self.stream or sys.stderr
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not color or not self._use_color():
            return super().format(record)

        # Records are shared between handlers; the file log must stay plain
        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def log_file_path(home: Optional[Path] = None) -> Path:
    """Where picker sessions and --debug runs write their log."""
    return (home or Path.home()) / CONFIG_DIR_NAME / LOG_FILE


def _console_level(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose: bool = False, debug: bool = False, tui_mode: bool = False, home: Optional[Path] = None
) -> Optional[Path]:
    """
    Configure logging for a CLI run or a picker session.

    Args:
        verbose: Show INFO messages on stderr
        debug: Show DEBUG messages and also write the log file
        tui_mode: Picker session; log to the file only
        home: Directory holding the config dir (defaults to the user's home)

    Returns:
        Path of the log file, or None when only stderr is used
    """
    level = _console_level(verbose, debug)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    log_path = None
    if tui_mode or debug:
        log_path = log_file_path(home)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="w")
        # Picker sessions keep lifecycle events even without --debug
        file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        file_handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    if not tui_mode:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        if debug:
            formatter = ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT, stream=sys.stderr)
        else:
            formatter = ColoredFormatter(fmt=SHORT_FORMAT, stream=sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    root_logger.setLevel(min(handler.level for handler in root_logger.handlers))
    return log_path


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix."""
    for prefix in PACKAGE_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
