"""Command-line interface for git-worktree-picker"""

import os
import sys

from rich.console import Console
from rich.text import Text

from git_worktree_picker.cli.args import parse_args
from git_worktree_picker.config import load_config
from git_worktree_picker.core import WorktreeManager
from git_worktree_picker.models.operation import Callbacks
from git_worktree_picker.services.display_service import DisplayService
from git_worktree_picker.ui.adapter import HeadlessFrontEnd
from git_worktree_picker.ui.console import ConsoleFrontEnd
from git_worktree_picker.ui.pickers import (
    create_worktree_picker,
    delete_worktree_picker,
    switch_worktree_picker,
)
from git_worktree_picker.utils.logging import setup_logging

console = Console()
err_console = Console(stderr=True)


def _callbacks(frontend, success_message: str, hint: str = "") -> Callbacks:
    def on_failure(error):
        frontend.notify(str(error), "error")
        if hint:
            frontend.notify(hint, "warning")

    return Callbacks(on_success=lambda: frontend.notify(success_message), on_failure=on_failure)


def _exit_code(result) -> int:
    if result is None or result.cancelled:
        return 0
    return 0 if result.success else 1


def cmd_list(manager, args, frontend) -> int:
    display = DisplayService(verbose=manager.config.verbose, output=console)
    display.display_worktrees(manager.list(), manager.current_worktree_path)
    return 0


def cmd_branches(manager, args, frontend) -> int:
    display = DisplayService(verbose=manager.config.verbose, output=console)
    only_branches = not args.worktrees
    only_worktrees = not args.plain
    display.display_branches(manager.list_branches(only_branches, only_worktrees))
    return 0


def cmd_create(manager, args, frontend) -> int:
    if args.branch is None:
        if not manager.config.interactive:
            frontend.notify("A branch is required in non-interactive mode", "error")
            return 2
        return _exit_code(create_worktree_picker(manager, frontend))

    path = args.path or args.branch
    result = manager.create(path, args.branch, _callbacks(frontend, f"Created worktree {path}"))
    return _exit_code(result)


def cmd_switch(manager, args, frontend) -> int:
    if args.path is None:
        if not manager.config.interactive:
            frontend.notify("A path is required in non-interactive mode", "error")
            return 2
        result = switch_worktree_picker(manager, frontend)
    else:
        result = manager.switch(args.path, Callbacks(on_failure=lambda e: frontend.notify(str(e), "error")))

    if result is not None and result.success:
        console.out(result.value, highlight=False)
    return _exit_code(result)


def cmd_delete(manager, args, frontend) -> int:
    if args.path is None:
        if not manager.config.interactive:
            frontend.notify("A path is required in non-interactive mode", "error")
            return 2
        return _exit_code(delete_worktree_picker(manager, frontend, forced=args.force))

    if not manager.config.interactive and manager.config.confirm_deletions:
        frontend.notify("Deletion needs confirmation: pass --yes to delete non-interactively", "error")
        return 2

    result = manager.delete(
        args.path,
        forced=args.force,
        callbacks=_callbacks(
            frontend,
            f"Removed worktree {args.path}",
            hint="" if args.force else "Re-run with --force to force the deletion",
        ),
    )
    return _exit_code(result)


def cmd_pick(manager, args, frontend) -> int:
    # Textual is only loaded for the picker
    from git_worktree_picker.tui import WorktreePickerApp

    path = WorktreePickerApp(manager).run()
    if path:
        console.out(path, highlight=False)
    return 0


COMMANDS = {
    "list": cmd_list,
    "branches": cmd_branches,
    "create": cmd_create,
    "switch": cmd_switch,
    "delete": cmd_delete,
    "pick": cmd_pick,
}


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        # Default to the picker on a terminal, to a listing otherwise
        interactive = not parsed_args.no_interactive and sys.stdin.isatty()
        command = parsed_args.command or ("pick" if interactive else "list")
        if command == "pick" and not interactive:
            err_console.print("[red]Error: the picker needs an interactive terminal[/red]")
            return 2

        log_path = setup_logging(
            verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=command == "pick"
        )

        repo_path = os.path.abspath(parsed_args.repo or os.getcwd())
        config = load_config(
            repo_path,
            overrides={
                "interactive": interactive,
                "verbose": parsed_args.verbose or None,
                "debug": parsed_args.debug or None,
                "confirm_deletions": False if parsed_args.yes else None,
                "use_porcelain": False if parsed_args.no_porcelain else None,
                "change_directory": False,
            },
        )

        if config.debug:
            err_console.print("[yellow]Debug mode enabled[/yellow]")
            if log_path:
                err_console.print(Text(f"Log file: {log_path}", style="yellow"))
            err_console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                err_console.print(f"  {key}: {value}")

        if config.interactive:
            frontend = ConsoleFrontEnd(err_console)
        else:
            frontend = HeadlessFrontEnd(assume_yes=parsed_args.yes)

        manager = WorktreeManager(repo_path, config, frontend)
        return COMMANDS[command](manager, parsed_args, frontend)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        err_console.print(Text(f"Error: {e}", style="red"))
        if parsed_args is not None and parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
