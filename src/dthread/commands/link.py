"""Command: create a cross-domain relationship."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dthread.commands._base import DtCommand
from dthread.domain.relationships import relationship_type_for

if TYPE_CHECKING:
    from dthread.commands._context import AppContext


@click.command(
    cls=DtCommand,
    examples="""\
  dthread link Mission MIS-001 Scenario SCN-001
  dthread link Scenario SCN-001 Requirements REQ-002 --type REQUIRES
  dthread --json link Requirements REQ-001 Parameter PAR-001""",
)
@click.argument("from_domain")
@click.argument("from_id")
@click.argument("to_domain")
@click.argument("to_id")
@click.option(
    "--type",
    "relationship_type",
    default=None,
    help="Relationship type (default: the type assigned to the domain pair).",
)
@click.pass_obj
def link(
    app: AppContext,
    from_domain: str,
    from_id: str,
    to_domain: str,
    to_id: str,
    relationship_type: str | None,
) -> None:
    """Link FROM_ID in FROM_DOMAIN to TO_ID in TO_DOMAIN."""
    from dthread.services.relationships import RelationshipGatekeeper

    rel = relationship_type or relationship_type_for(from_domain, to_domain).value
    app.emit(
        RelationshipGatekeeper(app.store).create_relationship(
            from_id, to_id, from_domain, to_domain, rel
        )
    )
