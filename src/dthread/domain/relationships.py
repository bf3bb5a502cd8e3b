"""Relationship type lookup keyed by (source domain, target domain).

Pure functions, no infrastructure dependencies. The gatekeeper and the
layout engine both resolve edge types here, so a relationship type never
comes from a caller-supplied string.
"""

from __future__ import annotations

from dthread.domain.errors import ValidationError
from dthread.domain.types import Domain, RelationshipType

RELATIONSHIP_TYPES: dict[tuple[str, str], RelationshipType] = {
    (Domain.MISSION.value, Domain.SCENARIO.value): RelationshipType.DRIVES,
    (Domain.SCENARIO.value, Domain.REQUIREMENTS.value): RelationshipType.REQUIRES,
    (Domain.REQUIREMENTS.value, Domain.PARAMETER.value): RelationshipType.DEFINES,
    (Domain.PARAMETER.value, Domain.FUNCTIONS.value): RelationshipType.INPUT_TO,
}


def relationship_type_for(source_domain: str, target_domain: str) -> RelationshipType:
    """Return the relationship type for a domain pair.

    Unmapped pairs fall back to :attr:`RelationshipType.RELATED_TO`.

    Examples:
        >>> relationship_type_for("Mission", "Scenario")
        <RelationshipType.DRIVES: 'DRIVES'>
        >>> relationship_type_for("EBOM", "Mission")
        <RelationshipType.RELATED_TO: 'RELATED_TO'>
    """
    return RELATIONSHIP_TYPES.get((source_domain, target_domain), RelationshipType.RELATED_TO)


def parse_relationship_type(raw: str) -> RelationshipType:
    """Parse *raw* into the closed :class:`RelationshipType` set.

    Matching is case-insensitive. Anything outside the enum is rejected.
    """
    try:
        return RelationshipType(raw.strip().upper())
    except ValueError:
        allowed = ", ".join(t.value for t in RelationshipType)
        msg = f"Unknown relationship type {raw!r}. Expected one of: {allowed}"
        raise ValidationError(msg, relationship_type=raw) from None


def resolve_relationship_type(
    requested: str, source_domain: str, target_domain: str
) -> RelationshipType:
    """Check that *requested* is the type the lookup table assigns to the pair."""
    parsed = parse_relationship_type(requested)
    expected = relationship_type_for(source_domain, target_domain)
    if parsed is not expected:
        msg = (
            f"Relationship type {parsed.value} is not valid for "
            f"{source_domain} -> {target_domain} (expected {expected.value})"
        )
        raise ValidationError(
            msg,
            relationship_type=parsed.value,
            expected=expected.value,
            from_domain=source_domain,
            to_domain=target_domain,
        )
    return parsed
