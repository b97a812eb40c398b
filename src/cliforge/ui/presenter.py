"""Console presenter: status lines with fixed emoji prefixes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from cliforge.console import console as default_console
from cliforge.ui.themes import DEFAULT_THEME, Theme

if TYPE_CHECKING:
    from cliforge.prompts.base import Choice

SUCCESS_PREFIX = "✅ "
ERROR_PREFIX = "❌ "
WARNING_PREFIX = "⚠️  "
INFO_PREFIX = "ℹ️ "

PROGRESS_WIDTH = 20


def _rich_colour(hex_colour: str) -> str:
    """Expand #rgb to #rrggbb; rich only parses the long form."""
    digits = hex_colour.lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits.lower()}"


class Presenter:
    """Render status, error, warning and info lines using a theme."""

    def __init__(
        self, theme: Theme | None = None, console: Console | None = None
    ) -> None:
        self.theme = theme or DEFAULT_THEME
        self.console = console or default_console

    def _style(self, colour: str, bold: bool = True) -> str:
        style = _rich_colour(colour)
        return f"bold {style}" if bold else style

    def _emit(self, text: str, colour: str, bold: bool = True) -> None:
        self.console.print(Text(text, style=self._style(colour, bold)))

    def show_welcome(self, app_name: str, message: str | None = None) -> None:
        """Show the welcome banner."""
        body = message or (
            f"{app_name.upper()}\n\n"
            "Create amazing projects with\nmodern tools and best practices"
        )
        self.console.print(
            Panel(
                Text(body, justify="center"),
                style=self._style(self.theme.primary),
                expand=False,
                padding=(1, 4),
            )
        )

    def show_success(self, message: str) -> None:
        self._emit(f"{SUCCESS_PREFIX}{message}", self.theme.success)

    def show_error(self, message: str) -> None:
        self._emit(f"{ERROR_PREFIX}{message}", self.theme.error)

    def show_warning(self, message: str) -> None:
        self._emit(f"{WARNING_PREFIX}{message}", self.theme.warning)

    def show_info(self, message: str) -> None:
        self._emit(f"{INFO_PREFIX}{message}", self.theme.info)

    def show_progress(self, message: str, current: int, total: int) -> None:
        """Show a 20-cell progress bar."""
        percentage = round(current / total * 100) if total else 100
        filled = min(percentage // 5, PROGRESS_WIDTH)
        bar = "█" * filled + "░" * (PROGRESS_WIDTH - filled)
        self._emit(f"{message} [{bar}] {percentage}%", self.theme.info, bold=False)

    def show_choices(self, choices: Iterable[Choice]) -> None:
        """Render choices as a 1-based numbered list."""
        for index, choice in enumerate(choices, 1):
            description = f" - {choice.description}" if choice.description else ""
            self.console.print(Text(f"{index}. {choice.label}{description}"))

    def line(self, text: str = "", muted: bool = False) -> None:
        """Print a plain line."""
        if muted:
            self._emit(text, self.theme.muted, bold=False)
        else:
            self.console.print(Text(text))
