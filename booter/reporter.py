"""Leveled console lines for run progress and child output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

_BADGES = {
    "info": "[blue]i info[/blue]",
    "success": "[green]✔ success[/green]",
    "error": "[red]✖ error[/red]",
    "await": "[cyan]… awaiting[/cyan]",
}


class Reporter:
    """Prints badge-prefixed lines. Message text is never parsed as markup."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _line(self, level: str, message: str) -> None:
        self.console.print(
            f"{_BADGES[level]}  {escape(message)}",
            soft_wrap=True,
            highlight=False,
        )

    def info(self, message: str) -> None:
        self._line("info", message)

    def success(self, message: str) -> None:
        self._line("success", message)

    def error(self, message: str) -> None:
        self._line("error", message)

    def pending(self, message: str) -> None:
        self._line("await", message)
