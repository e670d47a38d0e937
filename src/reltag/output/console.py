"""Rich Console factory and theme for reltag output.

Consoles render to a StringIO buffer so renderers keep a plain
``-> str`` contract.  In non-TTY environments (tests, pipes) Rich
automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

RELTAG_THEME = Theme(
    {
        "rel.ok": "bold green",
        "rel.error": "bold red",
        "rel.warning": "bold yellow",
        "rel.op": "bold cyan",
        "rel.key": "dim",
        "rel.tag": "bold magenta",
        "rel.sha": "dim",
        "rel.valid": "green",
        "rel.invalid": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=RELTAG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
