"""Subcommand modules for dthread.

Provides register_commands() which uses deferred imports to keep
``dthread --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from dthread.commands.config_cmd import config
    from dthread.commands.item import item

    cli.add_command(config)
    cli.add_command(item)

    # --- Standalone commands ---
    from dthread.commands.layout_cmd import layout
    from dthread.commands.link import link
    from dthread.commands.serve import serve

    cli.add_command(link)
    cli.add_command(layout)
    cli.add_command(serve)
