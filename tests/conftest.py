"""Shared pytest fixtures and test helpers for dthread tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from dthread.config.settings import DThreadSettings
from dthread.domain.entities import Entity
from dthread.infrastructure.database.engine import init_database
from dthread.infrastructure.store import EntityStore


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's DTHREAD_CONFIG from leaking into tests."""
    monkeypatch.delenv("DTHREAD_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _telemetry_off() -> Iterator[None]:
    """`-v` turns telemetry on for the thread; switch it back off after each test."""
    yield
    from dthread.services.telemetry import disable_telemetry

    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings(tmp_path: Path) -> DThreadSettings:
    return DThreadSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def store(settings: DThreadSettings) -> Iterator[EntityStore]:
    """Entity store over a fresh database in ``tmp_path``."""
    s = EntityStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to ``tmp_path`` so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def entity(
    entity_id: str,
    domain: str = "Mission",
    *,
    title: str | None = None,
    children: Sequence[str] = (),
    targets: dict[str, Sequence[str]] | None = None,
    **attributes: Any,
) -> Entity:
    """Build an in-memory Entity for pure domain tests."""
    return Entity(
        id=entity_id,
        title=title or f"Title {entity_id}",
        domain=domain,
        child_ids=tuple(children),
        cross_domain_target_ids={d: frozenset(ids) for d, ids in (targets or {}).items()},
        attributes=attributes,
    )


def add_item(store: EntityStore, domain: str, title: str, **kwargs: Any) -> dict[str, Any]:
    """Create an item via ItemService, asserting success."""
    from dthread.services.items import ItemService

    result = ItemService(store).create_item(domain, title, **kwargs)
    assert result.ok, result.error
    return result.data


def link(
    store: EntityStore,
    from_domain: str,
    from_id: str,
    to_domain: str,
    to_id: str,
    relationship_type: str | None = None,
) -> dict[str, Any]:
    """Create a relationship via the gatekeeper, asserting success."""
    from dthread.domain.relationships import relationship_type_for
    from dthread.services.relationships import RelationshipGatekeeper

    rel = relationship_type or relationship_type_for(from_domain, to_domain).value
    result = RelationshipGatekeeper(store).create_relationship(
        from_id, to_id, from_domain, to_domain, rel
    )
    assert result.ok, result.error
    return result.data
