"""Interactive worktree picker using Textual."""

from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header
from rich.text import Text

from .__version__ import __version__
from .constants import PROMPT_NEW_BRANCH, PROMPT_WORKTREE_PATH, WORKTREE_COLUMNS
from .core import WorktreeManager
from .exceptions import GitWorktreePickerError
from .formatters import format_force_state, format_path, format_worktree_branch
from .models.operation import Callbacks
from .ui.screens import ConfirmScreen, InputScreen
from .utils.logging import get_logger
from .utils.paths import same_path

logger = get_logger(__name__)


class PickerFrontEnd:
    """Routes manager notifications to the Textual app.

    Confirmation and input are handled by the app's modal screens before
    the manager is called, so those methods are never used to block.
    """

    def __init__(self, app: "WorktreePickerApp"):
        self.app = app

    def select(self, title, items, describe=str):
        return None

    def prompt(self, message, default=""):
        return None

    def confirm(self, message):
        return "n"

    def notify(self, message: str, level: str = "info") -> None:
        severity = {"error": "error", "warning": "warning"}.get(level, "information")
        self.app.notify(message, severity=severity)


class WorktreePickerApp(App[Optional[str]]):
    """Worktree list with switch, delete, force-toggle and create actions.

    The app exits with the path switched to, or None.
    """

    TITLE = f"git-worktree-picker v{__version__}"

    BINDINGS = [
        Binding("q", "quit_picker", "Quit"),
        Binding("ctrl+d", "delete", "Delete"),
        Binding("ctrl+f", "toggle_force", "Force Delete"),
        Binding("ctrl+n", "create", "Create"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(self, manager: WorktreeManager):
        super().__init__()
        self.manager = manager
        self.manager.frontend = PickerFrontEnd(self)

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        for col in WORKTREE_COLUMNS:
            table.add_column(col.label, key=col.key, width=col.width or None)
        self._populate_table()

    def _populate_table(self) -> None:
        """Reload worktrees from git into the table."""
        table = self.query_one(DataTable)
        table.clear()
        try:
            worktrees = self.manager.list()
            current = self.manager.current_worktree_path
        except GitWorktreePickerError as e:
            logger.error(f"Could not list worktrees: {e}")
            self.notify(str(e), severity="error")
            return

        for worktree in worktrees:
            style = "bold green" if same_path(worktree.path, current) else ""
            table.add_row(
                Text(format_worktree_branch(worktree), style=style),
                Text(format_path(worktree.path), style=style),
                Text(worktree.short_sha, style=style),
                key=worktree.path,
            )
        self._update_status()

    def _update_status(self) -> None:
        self.sub_title = format_force_state(self.manager.force_next_deletion)

    def _selected_path(self) -> Optional[str]:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter switches to the highlighted worktree and closes the picker."""
        path = event.row_key.value
        if path is None:
            return
        result = self.manager.switch(
            path, Callbacks(on_failure=lambda error: self.notify(str(error), severity="error"))
        )
        if result.success:
            self.exit(result.value)

    def action_delete(self) -> None:
        path = self._selected_path()
        if path is None:
            return

        if not self.manager.config.confirm_deletions:
            self._delete(path)
            return

        def handle_confirmation(confirmed: Optional[bool]) -> None:
            if confirmed:
                self._delete(path)
            else:
                self.notify("Didn't delete worktree")

        self.push_screen(
            ConfirmScreen(f"{self.manager.deletion_prompt()}\n{path}"), handle_confirmation
        )

    def _delete(self, path: str) -> None:
        self.manager.delete(
            path,
            confirmed=True,
            callbacks=Callbacks(
                on_success=lambda: self.notify(f"Removed worktree {path}"),
                on_failure=lambda error: self.notify(str(error), severity="error"),
            ),
        )
        self._populate_table()

    def action_toggle_force(self) -> None:
        self.manager.toggle_force_next_deletion()
        self._update_status()

    def action_create(self) -> None:
        def handle_branch(branch: Optional[str]) -> None:
            if not branch:
                return

            def handle_path(path: Optional[str]) -> None:
                if path is None:
                    return
                self.manager.create(
                    path.strip() or branch,
                    branch,
                    Callbacks(
                        on_success=lambda: self.notify(f"Created worktree for {branch}"),
                        on_failure=lambda error: self.notify(str(error), severity="error"),
                    ),
                )
                self._populate_table()

            self.push_screen(
                InputScreen(PROMPT_WORKTREE_PATH.format(branch=branch), default=branch), handle_path
            )

        self.push_screen(InputScreen(PROMPT_NEW_BRANCH), handle_branch)

    def action_refresh(self) -> None:
        self._populate_table()

    def action_quit_picker(self) -> None:
        self.exit(None)
