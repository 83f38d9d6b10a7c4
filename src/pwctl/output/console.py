"""Rich Console factory and theme for pwctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PW_THEME = Theme(
    {
        "pw.ok": "bold green",
        "pw.error": "bold red",
        "pw.warning": "bold yellow",
        "pw.op": "bold cyan",
        "pw.key": "dim",
        "pw.name": "bold blue",
        "pw.path": "dim",
        "pw.secret": "bold magenta",
        "pw.mode.create": "green",
        "pw.mode.replace": "yellow",
        "pw.mode.field": "cyan",
    }
)

_MODE_STYLES: dict[str, str] = {
    "create": "pw.mode.create",
    "replace": "pw.mode.replace",
    "field": "pw.mode.field",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PW_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_mode(mode: str) -> str:
    """Return the Rich style name for a store mutation mode."""
    return _MODE_STYLES.get(mode, "")
