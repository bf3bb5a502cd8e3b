"""Command group: create, nest, generate, and list domain items."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dthread.commands._base import DtGroup
from dthread.domain.generation import FUNCTION_TYPES, VALUE_TYPES
from dthread.services.items import ItemService

if TYPE_CHECKING:
    from dthread.commands._context import AppContext

_ITEM_EXAMPLES = """\
  dthread item add Mission "Reach low Earth orbit"
  dthread item add Mission "Ascent phase" --parent MIS-001
  dthread item add Parameter "Burn time" --unit s --value-type number
  dthread item list Mission
  dthread item generate Requirements --count 5 --seed 42
  dthread item nest Mission MIS-001 MIS-002"""


@click.group(cls=DtGroup, examples=_ITEM_EXAMPLES)
@click.pass_obj
def item(app: AppContext) -> None:
    """Create and list items in a domain."""


@item.command(
    examples="""\
  dthread item add Mission "Reach low Earth orbit"
  dthread item add Scenario "Nominal ascent" --description "Clear weather launch"
  dthread item add Functions "Throttle control" --function-type Control
  dthread --json item add Mission "Ascent phase" --parent MIS-001"""
)
@click.argument("domain")
@click.argument("title")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--parent", "parent_id", default=None, help="Nest under this item (same domain).")
@click.option("--unit", default=None, help="Unit of measure (Parameter only).")
@click.option(
    "--value-type",
    type=click.Choice(VALUE_TYPES),
    default=None,
    help="Value type (Parameter only).",
)
@click.option(
    "--function-type",
    type=click.Choice(FUNCTION_TYPES),
    default=None,
    help="Function type (Functions only).",
)
@click.pass_obj
def add(
    app: AppContext,
    domain: str,
    title: str,
    description: str | None,
    parent_id: str | None,
    unit: str | None,
    value_type: str | None,
    function_type: str | None,
) -> None:
    """Create an item in DOMAIN with the next sequential id."""
    app.emit(
        ItemService(app.store).create_item(
            domain,
            title,
            description=description,
            parent_id=parent_id,
            unit=unit,
            value_type=value_type,
            function_type=function_type,
        )
    )


@item.command(
    "list",
    examples="""\
  dthread item list Mission
  dthread -q item list Requirements
  dthread --json item list "Test Cases\"""",
)
@click.argument("domain")
@click.pass_obj
def list_cmd(app: AppContext, domain: str) -> None:
    """List the items of DOMAIN ordered by id."""
    app.emit(ItemService(app.store).list_items(domain))


@item.command(
    examples="""\
  dthread item generate Mission
  dthread item generate Parameter --count 3 --min-subs 1 --max-subs 2 --seed 7"""
)
@click.argument("domain")
@click.option("--count", type=int, default=None, help="Top-level items to create.")
@click.option("--min-subs", type=int, default=None, help="Minimum children per item.")
@click.option("--max-subs", type=int, default=None, help="Maximum children per item.")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible output.")
@click.pass_obj
def generate(
    app: AppContext,
    domain: str,
    count: int | None,
    min_subs: int | None,
    max_subs: int | None,
    seed: int | None,
) -> None:
    """Bulk-generate placeholder items (with children) in DOMAIN."""
    defaults = app.settings.generate
    app.emit(
        ItemService(app.store).bulk_generate(
            domain,
            count=defaults.default_count if count is None else count,
            min_subs=defaults.min_subs if min_subs is None else min_subs,
            max_subs=defaults.max_subs if max_subs is None else max_subs,
            seed=seed,
        )
    )


@item.command(
    examples="""\
  dthread item nest Mission MIS-001 MIS-002"""
)
@click.argument("domain")
@click.argument("parent_id")
@click.argument("child_id")
@click.pass_obj
def nest(app: AppContext, domain: str, parent_id: str, child_id: str) -> None:
    """Make CHILD_ID the last child of PARENT_ID."""
    app.emit(ItemService(app.store).nest(domain, parent_id, child_id))
