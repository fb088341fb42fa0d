"""Shared constants for git-worktree-picker."""

from dataclasses import dataclass
from typing import List


# Output grammar sentinels
BARE_SENTINEL = "(bare)"
ECHO_SEPARATOR = "\r\n\n"
MARKER_CURRENT = "*"
MARKER_WORKTREE = "+"
DETACHED_TOKENS = ("(detached", "HEAD)")
SHORT_SHA_LENGTH = 7

# Field separator for the structured branch listing (git for-each-ref %00)
REF_FIELD_SEPARATOR = "\0"
BRANCH_REF_FORMAT = "%00".join(
    [
        "%(HEAD)",
        "%(refname:short)",
        "%(objectname:short)",
        "%(worktreepath)",
        "%(contents:subject)",
    ]
)


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


WORKTREE_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("path", "Path", 50),
    ColumnDefinition("sha", "Commit", 10),
]

BRANCH_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("marker", "", 2),
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("commit", "Commit", 10),
    ColumnDefinition("path", "Worktree", 40),
    ColumnDefinition("message", "Message", 0),
]


# Symbol constants
SYMBOL_CURRENT = "*"
SYMBOL_WORKTREE = "+"
SYMBOL_PLAIN = " "
SYMBOL_DETACHED = "(detached)"


# Prompts and notifications
PROMPT_DELETE = "Delete worktree? [y/n]: "
PROMPT_FORCE_DELETE = "Force deletion of worktree? [y/n]: "
PROMPT_WORKTREE_PATH = 'Path for branch "{branch}": '
PROMPT_NEW_BRANCH = "Branch name: "
MSG_NOT_DELETED = "Didn't delete worktree"
MSG_FORCE_ON = "The next deletion will be forced"
MSG_FORCE_OFF = "The next deletion will not be forced"
MSG_DELETE_FAILED = "Deletion failed, the next deletion will be forced (toggle to disarm)"


# Config locations
CONFIG_DIR_NAME = ".git-worktree-picker"
USER_CONFIG_FILE = "config.json"
REPO_CONFIG_FILE = ".git-worktree-picker.json"
LOG_FILE = "git-worktree-picker.log"
