"""Per-domain ID prefixes and sequential ID formatting.

Top-level items get ``{PREFIX}-{NNN}`` (minimum 3 digits, grows past 999).
Generated children get ``{parent}-SUB-{NNN}``.

INVARIANT: IDs are unique within a domain, not across domains.
"""

from __future__ import annotations

import re

from dthread.domain.types import Domain

DOMAIN_PREFIXES: dict[str, str] = {
    Domain.MISSION.value: "MIS-",
    Domain.SCENARIO.value: "SCN-",
    Domain.REQUIREMENTS.value: "REQ-",
    Domain.PARAMETER.value: "PAR-",
    Domain.FUNCTIONS.value: "FUN-",
    Domain.LOGICAL.value: "LGC-",
    Domain.EBOM.value: "EBM-",
    Domain.SIMULATION_MODELS.value: "SMD-",
    Domain.SIMULATIONS.value: "SIM-",
    Domain.TEST_CASES.value: "TST-",
}

_TOP_LEVEL_PATTERN = re.compile(r"^([A-Z]{3}-)(\d{3,})$")


def prefix_for(domain: str) -> str:
    """Return the ID prefix for *domain*.

    Raises:
        KeyError: If *domain* has no registered prefix.
    """
    return DOMAIN_PREFIXES[domain]


def format_id(prefix: str, number: int) -> str:
    """``format_id("MIS-", 7)`` -> ``"MIS-007"``."""
    return f"{prefix}{number:03d}"


def child_id(parent_id: str, index: int) -> str:
    """``child_id("MIS-001", 1)`` -> ``"MIS-001-SUB-001"``."""
    return f"{parent_id}-SUB-{index:03d}"


def sequence_number(item_id: str, prefix: str) -> int | None:
    """Extract the sequence number of a top-level id with *prefix*.

    Returns None for child ids and ids with another prefix.
    """
    match = _TOP_LEVEL_PATTERN.match(item_id)
    if match is None or match.group(1) != prefix:
        return None
    return int(match.group(2))
