"""Rich console and theme for dthread output.

Every renderer prints into a console backed by a StringIO buffer and hands
the text back, so ``format_result()`` stays a plain ``-> str`` function.
Colors drop out automatically when the buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from dthread.domain.types import RelationshipType

DTHREAD_THEME = Theme(
    {
        "dt.ok": "bold green",
        "dt.error": "bold red",
        "dt.warning": "bold yellow",
        "dt.op": "bold cyan",
        "dt.key": "dim",
        "dt.id": "bold blue",
        "dt.title": "bold",
        "dt.domain": "magenta",
        "dt.rel": "cyan",
        "dt.rel.drives": "bold cyan",
        "dt.rel.requires": "yellow",
        "dt.rel.defines": "green",
        "dt.rel.input_to": "blue",
    }
)


def style_for_relationship(rel_type: str) -> str:
    """Theme style for an edge label; unmapped types use ``dt.rel``."""
    try:
        key = f"dt.rel.{RelationshipType(rel_type).value.lower()}"
    except ValueError:
        return "dt.rel"
    return key if key in DTHREAD_THEME.styles else "dt.rel"


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console writing into a fresh StringIO buffer.

    Args:
        no_color: Suppress ANSI codes even on a terminal.
        width: Fixed width; defaults to 120 so tables lay out the same everywhere.
    """
    return Console(
        file=StringIO(),
        theme=DTHREAD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Text rendered so far into a :func:`create_console` console."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()
