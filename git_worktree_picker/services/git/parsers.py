"""Parsers for git worktree and branch listings.

Two grammars are supported for each listing: the human-readable text
(``git worktree list``, ``git branch -vv``) and the machine-readable form
(``git worktree list --porcelain``, ``git for-each-ref``). The readable
grammars are whitespace tolerant and split rows on runs of spaces.

Output captured from an interactive shell starts with an echo of the
command. ``strip_command_echo`` and ``parse_branch_output(echoed=True)``
read such transcripts and reject text with no echo. Output taken from
CommandRunner carries no echo and is parsed with ``echoed=False``.
"""

import re
from typing import Dict, Iterable, List, Optional, Any

from git_worktree_picker.constants import (
    BARE_SENTINEL,
    DETACHED_TOKENS,
    ECHO_SEPARATOR,
    MARKER_CURRENT,
    MARKER_WORKTREE,
    REF_FIELD_SEPARATOR,
    SHORT_SHA_LENGTH,
)
from git_worktree_picker.exceptions import ParseError
from git_worktree_picker.models.branch import BranchEntry
from git_worktree_picker.models.worktree import WorktreeEntry
from git_worktree_picker.utils.logging import get_logger

logger = get_logger(__name__)

# "(/abs/path)", "(~/path)" or "(C:\path)" inside a commit summary
_PARENTHESIZED_PATH = re.compile(r"\(((?:/|~|[A-Za-z]:[\\/])[^()]*)\)")

_HEADS_PREFIX = "refs/heads/"


def collapse_whitespace(text: str) -> str:
    """Trim both ends and reduce inner whitespace runs to one space."""
    return " ".join(text.split())


def strip_command_echo(text: str) -> str:
    """Return the output following the command echo of a shell transcript.

    Raises:
        ParseError: If non-empty input has no echo separator
    """
    index = text.find(ECHO_SEPARATOR)
    if index == -1:
        if text.strip():
            raise ParseError("Missing command echo separator in output")
        return ""
    return text[index + len(ECHO_SEPARATOR):]


def split_lines(text: str, echoed: bool = False) -> List[str]:
    """Split command output into stripped, non-empty lines."""
    if echoed:
        text = strip_command_echo(text)
    lines = (collapse_whitespace(line) for line in text.splitlines())
    return [line for line in lines if line]


def extract_path(message: str) -> Optional[str]:
    """Extract the parenthesized worktree path from a branch summary, if any."""
    match = _PARENTHESIZED_PATH.search(message)
    if not match:
        return None
    return match.group(1)


# Worktree listing


def parse_worktree_line(line: str, is_main: bool = False) -> Optional[WorktreeEntry]:
    """Parse one ``git worktree list`` row.

    Returns:
        The entry, or None for blank rows. Bare rows come back with
        ``commit_sha == BARE_SENTINEL``.

    Raises:
        ParseError: If the row has fewer than a path and a commit token
    """
    tokens = line.split()
    if not tokens:
        return None

    if BARE_SENTINEL in tokens:
        return WorktreeEntry(path=tokens[0], commit_sha=BARE_SENTINEL, is_main=is_main)

    if len(tokens) < 2:
        raise ParseError("Unexpected worktree listing row", line)

    path, sha, rest = tokens[0], tokens[1], tokens[2:]
    branch = ""
    if tuple(rest[:2]) == DETACHED_TOKENS:
        flags = rest[2:]
    elif rest:
        branch = rest[0]
        if branch.startswith("[") and branch.endswith("]"):
            branch = branch[1:-1]
        flags = rest[1:]
    else:
        flags = []

    return WorktreeEntry(
        path=path,
        commit_sha=sha,
        branch=branch,
        is_main=is_main,
        is_locked="locked" in flags,
        is_prunable="prunable" in flags,
    )


def parse_worktree_list(lines: Iterable[str], include_bare: bool = False) -> List[WorktreeEntry]:
    """Parse ``git worktree list`` output into entries, in input order.

    Bare repository rows are dropped unless ``include_bare`` is set.
    Duplicate paths are kept as they appear.
    """
    entries = []
    first = True
    for line in lines:
        entry = parse_worktree_line(line, is_main=first)
        if entry is None:
            continue
        first = False
        if entry.is_bare and not include_bare:
            logger.debug(f"Skipping bare repository row {entry.path}")
            continue
        entries.append(entry)
    return entries


def _porcelain_entry(record: Dict[str, Any], is_main: bool) -> WorktreeEntry:
    if record.get("bare"):
        sha = BARE_SENTINEL
    else:
        sha = record.get("HEAD", "")[:SHORT_SHA_LENGTH]
    return WorktreeEntry(
        path=record["path"],
        commit_sha=sha,
        branch=record.get("branch", ""),
        is_main=is_main,
        is_locked=record.get("locked", False),
        is_prunable=record.get("prunable", False),
    )


def parse_worktree_porcelain(lines: Iterable[str], include_bare: bool = False) -> List[WorktreeEntry]:
    """Parse ``git worktree list --porcelain`` output.

    Format (blank line between worktrees):
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached" / "bare")
        locked [reason]
        prunable [reason]
    """
    records: List[Dict[str, Any]] = []
    current: Dict[str, Any] = {}

    for raw in lines:
        line = raw.strip()
        if not line:
            if current:
                records.append(current)
                current = {}
            continue

        key, _, value = line.partition(" ")
        if key == "worktree":
            if current:
                records.append(current)
            current = {"path": value}
        elif not current:
            raise ParseError("Porcelain attribute before any worktree line", line)
        elif key == "HEAD":
            current["HEAD"] = value
        elif key == "branch":
            current["branch"] = value[len(_HEADS_PREFIX):] if value.startswith(_HEADS_PREFIX) else ""
        elif key == "detached":
            current["branch"] = ""
        elif key in ("bare", "locked", "prunable"):
            current[key] = True

    # Handle last entry if no trailing blank line
    if current:
        records.append(current)

    entries = []
    for index, record in enumerate(records):
        entry = _porcelain_entry(record, is_main=index == 0)
        if entry.is_bare and not include_bare:
            logger.debug(f"Skipping bare repository row {entry.path}")
            continue
        entries.append(entry)
    return entries


# Branch listing


def parse_branch_line(line: str) -> Optional[BranchEntry]:
    """Parse one ``git branch -vv`` row.

    Returns:
        The entry, or None for blank rows and detached HEAD rows.

    Raises:
        ParseError: If the row lacks a branch and a commit token
    """
    tokens = line.split()
    if not tokens:
        return None

    is_current = False
    is_worktree = False
    if tokens[0] == MARKER_CURRENT:
        is_current = is_worktree = True
        tokens = tokens[1:]
    elif tokens[0] == MARKER_WORKTREE:
        is_worktree = True
        tokens = tokens[1:]

    if tokens and tokens[0].startswith("("):
        logger.debug(f"Skipping detached HEAD row: {line}")
        return None

    if len(tokens) < 2:
        raise ParseError("Unexpected branch listing row", line)

    message = " ".join(tokens[2:])
    return BranchEntry(
        branch=tokens[0],
        commit=tokens[1],
        message=message,
        path=extract_path(message) if is_worktree else None,
        is_worktree=is_worktree,
        is_current=is_current,
    )


def _wanted(entry: BranchEntry, only_branches: bool, only_worktrees: bool) -> bool:
    if entry.is_worktree:
        return only_worktrees
    return only_branches


def _check_filter(only_branches: bool, only_worktrees: bool) -> None:
    if not (only_branches or only_worktrees):
        raise ValueError("Request plain branches, worktree branches, or both")


def parse_branch_list(
    lines: Iterable[str], only_branches: bool = False, only_worktrees: bool = False
) -> List[BranchEntry]:
    """Parse ``git branch -vv`` rows, keeping the requested categories.

    Args:
        lines: Rows of the listing
        only_branches: Keep branches not checked out anywhere
        only_worktrees: Keep branches checked out in a worktree (including the current one)
    """
    _check_filter(only_branches, only_worktrees)

    entries = []
    for line in lines:
        entry = parse_branch_line(line)
        if entry is not None and _wanted(entry, only_branches, only_worktrees):
            entries.append(entry)
    return entries


def parse_branch_output(
    text: str, only_branches: bool = False, only_worktrees: bool = False, echoed: bool = False
) -> List[BranchEntry]:
    """Parse raw ``git branch -vv`` text, optionally preceded by a command echo."""
    return parse_branch_list(split_lines(text, echoed=echoed), only_branches, only_worktrees)


def parse_branch_refs(
    lines: Iterable[str], only_branches: bool = False, only_worktrees: bool = False
) -> List[BranchEntry]:
    """Parse ``git for-each-ref`` output produced with BRANCH_REF_FORMAT."""
    _check_filter(only_branches, only_worktrees)

    entries = []
    for line in lines:
        if not line.strip():
            continue
        fields = line.split(REF_FIELD_SEPARATOR, 4)
        if len(fields) != 5:
            raise ParseError("Unexpected branch ref row", line)

        head, branch, commit, worktree_path, subject = fields
        is_current = head.strip() == MARKER_CURRENT
        entry = BranchEntry(
            branch=branch,
            commit=commit,
            message=subject,
            path=worktree_path or None,
            is_worktree=bool(worktree_path) or is_current,
            is_current=is_current,
        )
        if _wanted(entry, only_branches, only_worktrees):
            entries.append(entry)
    return entries
