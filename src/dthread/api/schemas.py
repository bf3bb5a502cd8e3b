"""Request and response bodies for the HTTP API.

Fields are camelCase on the wire; snake_case names are accepted too.
Every request field is optional at this layer so that a missing value reaches
the service and is reported as a ``VALIDATION_ERROR`` (HTTP 400).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConfigUpdate(_CamelModel):
    domain_order: list[str] | None = None
    allow_only_adjacent_connections: bool | None = None


class ItemCreate(_CamelModel):
    title: str | None = None
    description: str | None = None
    parent_id: str | None = None
    unit: str | None = None
    value_type: str | None = None
    function_type: str | None = None


class BulkGenerate(_CamelModel):
    count: int | None = None
    min_subs: int | None = None
    max_subs: int | None = None
    seed: int | None = None


class NestRequest(_CamelModel):
    child_id: str | None = None


class RelationshipCreate(_CamelModel):
    from_id: str | None = None
    to_id: str | None = None
    from_domain: str | None = None
    to_domain: str | None = None
    relationship_type: str | None = None


class ConfigView(_CamelModel):
    """Response body of ``GET``/``PUT /api/config``."""

    domain_order: list[str]
    allow_only_adjacent_connections: bool
