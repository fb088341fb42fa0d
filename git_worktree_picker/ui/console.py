"""Rich console front end."""

from typing import Callable, Optional, Sequence, TypeVar

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

T = TypeVar("T")

LEVEL_STYLES = {
    "info": "green",
    "warning": "yellow",
    "error": "red",
}


class ConsoleFrontEnd:
    """Numbered-list selection and prompts on the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def select(
        self, title: str, items: Sequence[T], describe: Callable[[T], str] = str
    ) -> Optional[T]:
        """Show a numbered list; return the picked item, None for an empty answer.

        Any answer that is not a valid number is treated as "nothing picked".
        """
        if not items:
            self.console.print(f"[yellow]{title}: nothing to choose from[/yellow]")
            return None

        table = Table(title=title, show_header=False)
        table.add_column("#", justify="right")
        table.add_column("Item")
        for index, item in enumerate(items, start=1):
            table.add_row(str(index), Text(describe(item)))
        self.console.print(table)

        answer = Prompt.ask("Select", console=self.console, default="", show_default=False)
        if not answer.strip().isdigit():
            return None
        index = int(answer.strip())
        if 1 <= index <= len(items):
            return items[index - 1]
        self.console.print(f"[yellow]No item {index}[/yellow]")
        return None

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        return Prompt.ask(Text(message.rstrip(": ")), console=self.console, default=default)

    def confirm(self, message: str) -> str:
        return self.console.input(Text(message))

    def notify(self, message: str, level: str = "info") -> None:
        self.console.print(Text(message, style=LEVEL_STYLES.get(level, "")))
