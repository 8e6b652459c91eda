"""Rich Console factory and theme for cashrun output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CASHRUN_THEME = Theme(
    {
        "cr.ok": "bold green",
        "cr.error": "bold red",
        "cr.warning": "bold yellow",
        "cr.op": "bold cyan",
        "cr.key": "dim",
        "cr.status.active": "cyan",
        "cr.status.completed": "green",
        "cr.status.cancelled": "red",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "Completed": "cr.status.completed",
    "Cancelled": "cr.status.cancelled",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CASHRUN_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    return _STATUS_STYLES.get(status, "cr.status.active")
