"""Command-line argument parsing for git-worktree-picker."""

import argparse
from git_worktree_picker.__version__ import __version__


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="git-worktree-picker",
        description="Create, switch and delete Git worktrees",
        epilog="'switch' prints the target path; wrap it in a shell function to cd there, "
        'e.g. wt() { cd "$(git-worktree-picker switch "$@")"; }',
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-worktree-picker {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "-C",
        dest="repo",
        metavar="PATH",
        help="Run as if started in PATH (default: current directory)",
    )
    parser.add_argument(
        "-y", "--yes", action="store_true", help="Do not ask before deleting worktrees"
    )
    parser.add_argument(
        "--no-porcelain",
        action="store_true",
        help="Parse the human-readable git listings instead of the machine-readable ones",
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Never prompt (for scripts/automation)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser("list", help="List worktrees")

    branches = subparsers.add_parser("branches", help="List local branches")
    category = branches.add_mutually_exclusive_group()
    category.add_argument(
        "--worktrees", action="store_true", help="Only branches checked out in a worktree"
    )
    category.add_argument(
        "--plain", action="store_true", help="Only branches not checked out anywhere"
    )

    create = subparsers.add_parser("create", help="Create a worktree (picker when no branch given)")
    create.add_argument("branch", nargs="?", help="Branch or ref to check out; created if missing")
    create.add_argument("path", nargs="?", help="Worktree directory (default: branch name)")

    switch = subparsers.add_parser("switch", help="Validate a worktree and print its path")
    switch.add_argument("path", nargs="?", help="Worktree path (picker when omitted)")

    delete = subparsers.add_parser("delete", help="Delete a worktree")
    delete.add_argument("path", nargs="?", help="Worktree path (picker when omitted)")
    delete.add_argument(
        "-f", "--force", action="store_true", help="Remove even with local changes or a lock"
    )

    subparsers.add_parser("pick", help="Open the interactive picker (default on a terminal)")

    return parser.parse_args(argv)
