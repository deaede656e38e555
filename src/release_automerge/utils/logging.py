"""Console logging helpers built on rich.

Log messages go to stderr. Emoji codes are not expanded so that text taken
from PRs is printed as-is.
"""

from rich.console import Console
from rich.markup import escape

_console: Console | None = None


def get_console() -> Console:
    """Return the shared stderr console used for log messages."""
    global _console  # noqa: PLW0603
    if _console is None:
        _console = Console(stderr=True, emoji=False)
    return _console


def log_info(message: str) -> None:
    """Log an informational message."""
    get_console().print(f"[blue]ℹ[/blue] {message}")


def log_success(message: str) -> None:
    """Log a success message."""
    get_console().print(f"[green]✓[/green] {message}")


def log_warning(message: str) -> None:
    """Log a warning message."""
    get_console().print(f"[yellow]⚠[/yellow] {message}")


def log_error(message: str) -> None:
    """Log an error message."""
    get_console().print(f"[red]✗[/red] {escape(message)}", soft_wrap=True)


__all__ = [
    "get_console",
    "log_error",
    "log_info",
    "log_success",
    "log_warning",
]
