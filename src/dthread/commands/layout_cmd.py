"""Command: compute the diagram layout."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dthread.commands._base import DtCommand
from dthread.domain.types import DisplayMode

if TYPE_CHECKING:
    from dthread.commands._context import AppContext


@click.command(
    cls=DtCommand,
    examples="""\
  dthread layout
  dthread -v layout --mode full
  dthread --json layout --mode id_and_title > layout.json""",
)
@click.option(
    "--mode",
    "display_mode",
    type=click.Choice([m.value for m in DisplayMode]),
    default=None,
    help="Item label mode (default: [layout] display_mode).",
)
@click.pass_obj
def layout(app: AppContext, display_mode: str | None) -> None:
    """Lay out every domain as a column with its items and links."""
    from dthread.services.layout import LayoutService

    app.emit(LayoutService(app.store).compute(display_mode))
