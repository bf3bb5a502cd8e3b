"""Entity: one artifact in a domain forest."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Entity:
    """An item as listed by the entity store.

    ``child_ids`` are same-domain children in display order.
    ``cross_domain_target_ids`` maps a target domain to the ids this item
    links to in that domain.
    """

    id: str
    title: str
    domain: str
    description: str | None = None
    child_ids: tuple[str, ...] = ()
    cross_domain_target_ids: Mapping[str, frozenset[str]] = field(default_factory=dict)
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def targets_in(self, domain: str) -> frozenset[str]:
        """Ids this item links to in *domain* (empty if none)."""
        return self.cross_domain_target_ids.get(domain, frozenset())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "domain": self.domain,
            "description": self.description,
            "child_ids": list(self.child_ids),
            "cross_domain_target_ids": {
                d: sorted(ids) for d, ids in sorted(self.cross_domain_target_ids.items())
            },
            "attributes": dict(self.attributes),
        }


def top_level_ids(entities: Mapping[str, Entity]) -> list[str]:
    """Ids that appear in no other entity's ``child_ids``, ascending."""
    children: set[str] = set()
    for entity in entities.values():
        children.update(entity.child_ids)
    return sorted(eid for eid in entities if eid not in children)
