"""Themed console output and tracebacks for the command-line interface"""

from typing import Any, Optional

import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

from ..models.options import DEFAULT_OPTIONS, RenderOptions

INVARIANT_TEXT_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "setting": "cyan",
        "value": "yellow",
        "changed": "bright_green",
    }
)


class InvariantTextConsole:
    """Singleton console with the invariant-text theme"""

    _instance: Optional["InvariantTextConsole"] = None

    def __new__(cls) -> "InvariantTextConsole":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, "initialized"):
            self.console = Console(theme=INVARIANT_TEXT_THEME)
            self.error_console = Console(theme=INVARIANT_TEXT_THEME, stderr=True)
            self.initialized = True

    def print_result(self, text: str):
        """Print rendered or parsed text verbatim (no markup, no highlighting)"""
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def print_options(self, options: RenderOptions, title: str = "Render Options"):
        """
        Print render options as a table. Values that differ from the
        defaults are highlighted.
        """
        table = Table(title=title, border_style="cyan")
        table.add_column("Option", style="setting", no_wrap=True)
        table.add_column("Value", style="value")

        defaults = DEFAULT_OPTIONS.model_dump()
        for key, value in options.model_dump().items():
            shown = escape(_display(value))
            if value != defaults[key]:
                shown = f"[changed]{shown}[/changed]"
            table.add_row(key, shown)

        self.console.print(table)

    def print_success(self, message: str):
        """Print success message"""
        self.console.print(f"[success]✓[/success] {message}")

    def print_error(self, message: str):
        """Print error message"""
        self.error_console.print(f"[error]✗[/error] {message}")

    def print_warning(self, message: str):
        """Print warning message"""
        self.error_console.print(f"[warning]⚠[/warning] {message}")

    def print_info(self, message: str):
        """Print info message"""
        self.console.print(f"[info]ℹ[/info] {message}")


def _display(value: Any) -> str:
    if value is None:
        return "—"
    # repr keeps separators like ", " visible
    return repr(value) if isinstance(value, str) else str(value)


# Global console instance
console = InvariantTextConsole()


def setup_rich_logging() -> None:
    """
    Install Rich's traceback handler globally.

    Called once by the CLI at startup. structlog configuration is handled
    separately in utils/logging.py.
    """
    install_rich_traceback(
        show_locals=False,
        width=120,
        extra_lines=3,
        theme="monokai",
        word_wrap=False,
        suppress=[structlog],
    )
