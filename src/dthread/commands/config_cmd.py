"""Command group: view and change the domain order and adjacency policy."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dthread.commands._base import DtGroup
from dthread.services.config import ConfigService

if TYPE_CHECKING:
    from dthread.commands._context import AppContext

_CONFIG_EXAMPLES = """\
  dthread config show
  dthread config set-order Mission Scenario Requirements Parameter Functions ...
  dthread config move Requirements --up
  dthread config adjacency off"""


@click.group(cls=DtGroup, examples=_CONFIG_EXAMPLES)
@click.pass_obj
def config(app: AppContext) -> None:
    """Show or change the domain order and link policy."""


@config.command(
    examples="""\
  dthread config show
  dthread --json config show"""
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the persisted domain order and adjacency flag."""
    app.emit(ConfigService(app.store).get())


@config.command(
    "set-order",
    examples="""\
  dthread config set-order Scenario Mission Requirements Parameter Functions \\
      Logical EBOM "Simulation Models" Simulations "Test Cases\"""",
)
@click.argument("domains", nargs=-1, required=True)
@click.pass_obj
def set_order(app: AppContext, domains: tuple[str, ...]) -> None:
    """Replace the domain order (must be a permutation of the current one)."""
    app.emit(ConfigService(app.store).update(domain_order=list(domains)))


@config.command(
    examples="""\
  dthread config move Requirements --up
  dthread config move "Test Cases" --down"""
)
@click.argument("domain")
@click.option("--up", "direction", flag_value=-1, help="Swap with the previous domain.")
@click.option("--down", "direction", flag_value=1, help="Swap with the next domain.")
@click.pass_obj
def move(app: AppContext, domain: str, direction: int | None) -> None:
    """Move DOMAIN one step up or down in the order."""
    if direction is None:
        raise click.UsageError("Pass --up or --down.")
    app.emit(ConfigService(app.store).move_domain(domain, direction))


@config.command(
    examples="""\
  dthread config adjacency on
  dthread config adjacency off"""
)
@click.argument("state", type=click.Choice(["on", "off"]))
@click.pass_obj
def adjacency(app: AppContext, state: str) -> None:
    """Turn the adjacent-domains-only link rule on or off."""
    app.emit(ConfigService(app.store).update(allow_only_adjacent_connections=state == "on"))
