"""Bulk item generation plans.

Pure functions: a plan lists the top-level items and their children with
ids and attributes already assigned. The item service persists the plan
in one transaction.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any

from dthread.domain.errors import ValidationError
from dthread.domain.ids import child_id, format_id
from dthread.domain.types import Domain

UNITS = ("m", "kg", "s", "A", "K", "mol", "cd", "%")
VALUE_TYPES = ("number", "string", "boolean", "range")
FUNCTION_TYPES = ("Control", "DataProcessing", "Calculation", "Interface")

# "Requirements" -> "Requirement", "Functions" -> "Function"
_SINGULAR: dict[str, str] = {
    Domain.REQUIREMENTS.value: "Requirement",
    Domain.FUNCTIONS.value: "Function",
    Domain.SIMULATION_MODELS.value: "Simulation Model",
    Domain.SIMULATIONS.value: "Simulation",
    Domain.TEST_CASES.value: "Test Case",
}


def singular(domain: str) -> str:
    """Human label for one item of *domain*."""
    return _SINGULAR.get(domain, domain)


@dataclass(frozen=True)
class PlannedItem:
    """One item to insert, with its generated children."""

    id: str
    title: str
    description: str
    attributes: dict[str, Any] = field(default_factory=dict)
    children: tuple[PlannedItem, ...] = ()


def validate_bounds(count: int, min_subs: int, max_subs: int) -> None:
    """Reject non-positive counts and inverted child bounds.

    Raises:
        ValidationError: With the offending values in ``detail``.
    """
    if count <= 0 or min_subs < 0 or max_subs < min_subs:
        msg = (
            "Invalid input parameters for bulk generation: "
            "count must be > 0 and 0 <= min_subs <= max_subs"
        )
        raise ValidationError(msg, count=count, min_subs=min_subs, max_subs=max_subs)


def _attributes_for(domain: str, rng: random.Random) -> dict[str, Any]:
    if domain == Domain.PARAMETER.value:
        return {"unit": rng.choice(UNITS), "value_type": rng.choice(VALUE_TYPES)}
    if domain == Domain.FUNCTIONS.value:
        return {"function_type": rng.choice(FUNCTION_TYPES)}
    return {}


def plan_bulk(
    domain: str,
    prefix: str,
    start_number: int,
    *,
    count: int,
    min_subs: int,
    max_subs: int,
    rng: random.Random | None = None,
) -> list[PlannedItem]:
    """Plan *count* top-level items, each with ``min_subs..max_subs`` children.

    Children inherit their parent's type-specific attributes.
    """
    validate_bounds(count, min_subs, max_subs)
    rng = rng or random.Random()
    label = singular(domain)
    label_lower = label.lower()

    plan: list[PlannedItem] = []
    for number in range(start_number, start_number + count):
        parent_id = format_id(prefix, number)
        attributes = _attributes_for(domain, rng)
        n_children = rng.randint(min_subs, max_subs)
        children = tuple(
            PlannedItem(
                id=child_id(parent_id, j),
                title=f"Generated Sub-{label} {j} for {parent_id}",
                description=f"Bulk generated sub-{label_lower}.",
                attributes=dict(attributes),
            )
            for j in range(1, n_children + 1)
        )
        plan.append(
            PlannedItem(
                id=parent_id,
                title=f"Generated {label} {parent_id}",
                description=f"Bulk generated top-level {label_lower}.",
                attributes=attributes,
                children=children,
            )
        )
    return plan
