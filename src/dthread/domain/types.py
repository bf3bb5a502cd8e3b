"""Domain names, relationship types, and display modes.

The ten domains of the digital thread and the closed set of relationship
types that may connect them. Display modes control how much detail an
item node carries into the diagram.
"""

from __future__ import annotations

from enum import StrEnum


class Domain(StrEnum):
    """Known artifact domains, in their default thread order."""

    MISSION = "Mission"
    SCENARIO = "Scenario"
    REQUIREMENTS = "Requirements"
    PARAMETER = "Parameter"
    FUNCTIONS = "Functions"
    LOGICAL = "Logical"
    EBOM = "EBOM"
    SIMULATION_MODELS = "Simulation Models"
    SIMULATIONS = "Simulations"
    TEST_CASES = "Test Cases"


DEFAULT_DOMAIN_ORDER: tuple[str, ...] = tuple(d.value for d in Domain)


class RelationshipType(StrEnum):
    """Cross-domain relationship types. Never extended from user input."""

    DRIVES = "DRIVES"
    REQUIRES = "REQUIRES"
    DEFINES = "DEFINES"
    INPUT_TO = "INPUT_TO"
    RELATED_TO = "RELATED_TO"


class DisplayMode(StrEnum):
    """How much of an item the diagram shows."""

    TITLE_ONLY = "title_only"
    ID_AND_TITLE = "id_and_title"
    FULL = "full"


class NodeKind(StrEnum):
    """Kinds of layout nodes."""

    CONTAINER = "container"
    TITLE = "title"
    ITEM = "item"
