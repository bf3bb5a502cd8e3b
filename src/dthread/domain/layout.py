"""LayoutEngine: deterministic diagram layout for the digital thread.

Turns per-domain item forests plus cross-domain links into positioned
nodes and typed edges:

1. Each domain becomes a fixed-width container, placed left to right in
   domain order.
2. A container stacks its top-level items (ascending id) with zero gap;
   children follow their parent depth-first, indented per level.
3. Subtree heights are additive: an item is ``item_height`` tall plus the
   heights of its children.
4. Edges connect an item to its targets in the *next* domain only.

The engine is a pure function of its inputs. Item positions are relative
to their container; container positions are absolute.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from dthread.domain.entities import Entity, top_level_ids
from dthread.domain.errors import CycleDetectedError
from dthread.domain.relationships import relationship_type_for
from dthread.domain.types import DisplayMode, NodeKind, RelationshipType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutDimensions:
    """Pixel constants for container and item geometry."""

    item_height: int = 60
    padding: int = 20
    title_band_height: int = 30
    container_width: int = 300
    column_gap: int = 100
    indent: int = 20
    min_item_width: int = 120

    @property
    def interior_width(self) -> int:
        return self.container_width - 2 * self.padding


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    w: int
    h: int


@dataclass(frozen=True)
class LayoutNode:
    """A positioned diagram element (container, title band, or item)."""

    id: str
    kind: NodeKind
    position: Point
    size: Size
    parent_container_id: str | None = None
    payload: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "kind": self.kind.value,
            "position": {"x": self.position.x, "y": self.position.y},
            "size": {"w": self.size.w, "h": self.size.h},
            "parent_container_id": self.parent_container_id,
        }
        if self.payload is not None:
            payload = dict(self.payload)
            entity = payload.get("entity")
            if isinstance(entity, Entity):
                payload["entity"] = entity.to_dict()
            data["payload"] = payload
        return data


@dataclass(frozen=True)
class LayoutEdge:
    """A typed edge between two item nodes."""

    id: str
    source_id: str
    target_id: str
    relationship_type: RelationshipType

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source_id": self.source_id,
            "target_id": self.target_id,
            "relationship_type": self.relationship_type.value,
        }


@dataclass(frozen=True)
class Layout:
    """Result of :func:`compute_layout`."""

    nodes: tuple[LayoutNode, ...] = ()
    edges: tuple[LayoutEdge, ...] = ()
    display_mode: DisplayMode = DisplayMode.TITLE_ONLY

    def containers(self) -> list[LayoutNode]:
        return [n for n in self.nodes if n.kind is NodeKind.CONTAINER]

    def items_in(self, container_id: str) -> list[LayoutNode]:
        return [
            n
            for n in self.nodes
            if n.kind is NodeKind.ITEM and n.parent_container_id == container_id
        ]

    def node(self, node_id: str) -> LayoutNode:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "display_mode": self.display_mode.value,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# ---------------------------------------------------------------------------
# Node ids
# ---------------------------------------------------------------------------


def container_node_id(domain: str) -> str:
    return f"group::{domain}"


def title_node_id(domain: str) -> str:
    return f"title::{domain}"


def item_node_id(domain: str, entity_id: str) -> str:
    return f"{domain}::{entity_id}"


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def item_label(entity: Entity, display_mode: DisplayMode) -> list[str]:
    """Lines of text an item node shows in *display_mode*.

    ``title_only`` shows the title, ``id_and_title`` prefixes the id, and
    ``full`` adds type-specific details and the description.
    """
    if display_mode is DisplayMode.TITLE_ONLY:
        return [entity.title]

    lines = [f"{entity.id}: {entity.title}"]
    if display_mode is DisplayMode.ID_AND_TITLE:
        return lines

    attrs = entity.attributes
    details: list[str] = []
    if attrs.get("value_type"):
        details.append(f"Type: {attrs['value_type']}")
    if attrs.get("unit"):
        details.append(f"Unit: {attrs['unit']}")
    if attrs.get("function_type"):
        details.append(f"Type: {attrs['function_type']}")
    if details:
        lines.append(", ".join(details))
    if entity.description:
        lines.append(entity.description)
    return lines


# ---------------------------------------------------------------------------
# Height function
# ---------------------------------------------------------------------------


def _known_children(entity: Entity, entities: Mapping[str, Entity]) -> list[str]:
    known = [c for c in entity.child_ids if c in entities]
    if len(known) != len(entity.child_ids):
        missing = [c for c in entity.child_ids if c not in entities]
        logger.debug("Skipping unknown children of %s: %s", entity.id, missing)
    return known


def subtree_heights(
    entities: Mapping[str, Entity],
    item_height: int,
    *,
    domain: str | None = None,
) -> dict[str, int]:
    """Compute ``height(e) = item_height + sum(height(child))`` for every entity.

    Iterative post-order walk with an explicit stack; an entity met again
    while still on the current path raises :class:`CycleDetectedError`.
    """
    heights: dict[str, int] = {}
    visiting: set[str] = set()

    for root in sorted(entities):
        if root in heights:
            continue
        stack: list[tuple[str, bool]] = [(root, False)]
        while stack:
            entity_id, expanded = stack.pop()
            children = _known_children(entities[entity_id], entities)
            if expanded:
                visiting.discard(entity_id)
                heights[entity_id] = item_height + sum(heights[c] for c in children)
                continue
            if entity_id in heights:
                continue
            if entity_id in visiting:
                raise CycleDetectedError(entity_id, domain=domain)
            visiting.add(entity_id)
            stack.append((entity_id, True))
            for child in reversed(children):
                if child in visiting:
                    raise CycleDetectedError(child, domain=domain)
                if child not in heights:
                    stack.append((child, False))
    return heights


# ---------------------------------------------------------------------------
# compute_layout
# ---------------------------------------------------------------------------


def compute_layout(
    domain_order: Sequence[str],
    items_by_domain: Mapping[str, Sequence[Entity]],
    display_mode: DisplayMode | str = DisplayMode.TITLE_ONLY,
    *,
    dimensions: LayoutDimensions | None = None,
) -> Layout:
    """Lay out every domain in *domain_order* and the edges between them.

    Domains missing from *items_by_domain* get an empty container. Any
    cycle in a domain's child references aborts the whole computation.

    Raises:
        CycleDetectedError: If a domain's child graph is not a forest.
    """
    dims = dimensions or LayoutDimensions()
    mode = DisplayMode(display_mode)

    by_domain: dict[str, dict[str, Entity]] = {
        domain: {e.id: e for e in items_by_domain.get(domain, ())} for domain in domain_order
    }
    heights = {
        domain: subtree_heights(entities, dims.item_height, domain=domain)
        for domain, entities in by_domain.items()
    }

    nodes: list[LayoutNode] = []
    placement_order: dict[str, list[str]] = {}
    running_offset = 0

    for domain in domain_order:
        entities = by_domain[domain]
        tops = top_level_ids(entities)
        content_height = sum(heights[domain][t] for t in tops)
        container_id = container_node_id(domain)

        nodes.append(
            LayoutNode(
                id=container_id,
                kind=NodeKind.CONTAINER,
                position=Point(running_offset, 0),
                size=Size(
                    dims.container_width,
                    dims.title_band_height + content_height + 2 * dims.padding,
                ),
                payload={"domain": domain, "item_count": len(entities)},
            )
        )
        nodes.append(
            LayoutNode(
                id=title_node_id(domain),
                kind=NodeKind.TITLE,
                position=Point(0, 0),
                size=Size(dims.container_width, dims.title_band_height),
                parent_container_id=container_id,
                payload={"domain": domain, "label": domain},
            )
        )
        item_nodes = _place_items(domain, entities, tops, heights[domain], mode, dims)
        nodes.extend(item_nodes)
        placement_order[domain] = [n.payload["entity"].id for n in item_nodes if n.payload]
        running_offset += dims.container_width + dims.column_gap

    edges = _build_edges(domain_order, by_domain, placement_order)
    return Layout(nodes=tuple(nodes), edges=tuple(edges), display_mode=mode)


def _place_items(
    domain: str,
    entities: Mapping[str, Entity],
    tops: Sequence[str],
    heights: Mapping[str, int],
    mode: DisplayMode,
    dims: LayoutDimensions,
) -> list[LayoutNode]:
    """Depth-first pre-order placement of one container's items."""
    container_id = container_node_id(domain)
    max_offset = max(0, dims.interior_width - dims.min_item_width)
    cursor = dims.title_band_height + dims.padding
    placed: list[LayoutNode] = []

    for top in tops:
        stack: list[tuple[str, int, str | None]] = [(top, 0, None)]
        while stack:
            entity_id, depth, parent_id = stack.pop()
            entity = entities[entity_id]
            x_offset = min(depth * dims.indent, max_offset)
            placed.append(
                LayoutNode(
                    id=item_node_id(domain, entity_id),
                    kind=NodeKind.ITEM,
                    position=Point(dims.padding + x_offset, cursor),
                    size=Size(dims.interior_width - x_offset, heights[entity_id]),
                    parent_container_id=container_id,
                    payload={
                        "entity": entity,
                        "domain": domain,
                        "display_mode": mode.value,
                        "depth": depth,
                        "parent_item_id": parent_id,
                        "label": item_label(entity, mode),
                    },
                )
            )
            cursor += dims.item_height
            for child in reversed(_known_children(entity, entities)):
                stack.append((child, depth + 1, entity_id))
    return placed


def _build_edges(
    domain_order: Sequence[str],
    by_domain: Mapping[str, Mapping[str, Entity]],
    placement_order: Mapping[str, Sequence[str]],
) -> list[LayoutEdge]:
    """One edge per (item, target in the next domain) pair."""
    edges: list[LayoutEdge] = []
    for index, domain in enumerate(domain_order[:-1]):
        next_domain = domain_order[index + 1]
        rel_type = relationship_type_for(domain, next_domain)
        targets_present = by_domain[next_domain]
        for entity_id in placement_order[domain]:
            entity = by_domain[domain][entity_id]
            for target_id in sorted(entity.targets_in(next_domain)):
                if target_id not in targets_present:
                    logger.debug(
                        "Dropping edge %s -> %s: target not in %s",
                        entity_id,
                        target_id,
                        next_domain,
                    )
                    continue
                source = item_node_id(domain, entity_id)
                target = item_node_id(next_domain, target_id)
                edges.append(
                    LayoutEdge(
                        id=f"{source}->{target}",
                        source_id=source,
                        target_id=target,
                        relationship_type=rel_type,
                    )
                )
    return edges
