"""Tests for EntityStore and StoreTransaction."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from dthread.infrastructure.database.schema import app_config
from dthread.infrastructure.store import EntityStore

NOW = "2026-01-01T00:00:00+00:00"


def _seed(store: EntityStore) -> None:
    with store.transaction() as txn:
        txn.insert_item("Mission", "MIS-002", "Second", NOW)
        txn.insert_item("Mission", "MIS-001", "First", NOW, description="d")
        txn.insert_item("Mission", "MIS-001-SUB-002", "Child two", NOW)
        txn.insert_item("Mission", "MIS-001-SUB-001", "Child one", NOW)
        txn.insert_item("Scenario", "SCN-001", "Scenario", NOW)
        txn.insert_item(
            "Parameter", "PAR-001", "Mass", NOW, attributes={"unit": "kg", "value_type": "number"}
        )
        # insertion order differs from id order on purpose
        txn.add_child("Mission", "MIS-001", "MIS-001-SUB-002")
        txn.add_child("Mission", "MIS-001", "MIS-001-SUB-001")


class TestItems:
    def test_item_exists_is_domain_scoped(self, store: EntityStore) -> None:
        _seed(store)
        with store.transaction() as txn:
            assert txn.item_exists("Mission", "MIS-001")
            assert not txn.item_exists("Scenario", "MIS-001")

    def test_list_items_ordered_by_id(self, store: EntityStore) -> None:
        _seed(store)
        ids = [e.id for e in store.list_items("Mission")]
        assert ids == ["MIS-001", "MIS-001-SUB-001", "MIS-001-SUB-002", "MIS-002"]

    def test_children_keep_insertion_order(self, store: EntityStore) -> None:
        _seed(store)
        first = store.list_items("Mission")[0]
        assert first.child_ids == ("MIS-001-SUB-002", "MIS-001-SUB-001")
        assert first.description == "d"

    def test_attributes_round_trip(self, store: EntityStore) -> None:
        _seed(store)
        (param,) = store.list_items("Parameter")
        assert dict(param.attributes) == {"unit": "kg", "value_type": "number"}

    def test_highest_number_ignores_children(self, store: EntityStore) -> None:
        _seed(store)
        with store.transaction() as txn:
            assert txn.highest_number("Mission", "MIS-") == 2
            assert txn.highest_number("Requirements", "REQ-") == 0

    def test_parent_of(self, store: EntityStore) -> None:
        _seed(store)
        with store.transaction() as txn:
            assert txn.parent_of("Mission", "MIS-001-SUB-001") == "MIS-001"
            assert txn.parent_of("Mission", "MIS-001") is None

    def test_rollback_on_error(self, store: EntityStore) -> None:
        with pytest.raises(RuntimeError), store.transaction() as txn:
            txn.insert_item("Mission", "MIS-001", "Gone", NOW)
            raise RuntimeError("abort")
        assert store.list_items("Mission") == []


class TestRelationships:
    def test_upsert_is_idempotent(self, store: EntityStore) -> None:
        _seed(store)
        with store.transaction() as txn:
            first = txn.upsert_relationship("Mission", "MIS-001", "Scenario", "SCN-001", "DRIVES", NOW)
            second = txn.upsert_relationship(
                "Mission", "MIS-001", "Scenario", "SCN-001", "DRIVES", NOW
            )
            count = txn.count_relationships("Mission", "MIS-001")
        assert (first, second, count) == (True, False, 1)

    def test_targets_grouped_by_domain(self, store: EntityStore) -> None:
        _seed(store)
        with store.transaction() as txn:
            txn.upsert_relationship("Mission", "MIS-001", "Scenario", "SCN-001", "DRIVES", NOW)
        mission = store.list_items("Mission")[0]
        assert mission.targets_in("Scenario") == frozenset({"SCN-001"})
        assert mission.targets_in("Requirements") == frozenset()


class TestConfig:
    def test_read_missing(self, store: EntityStore) -> None:
        with store.transaction() as txn:
            assert txn.read_config() is None

    def test_write_then_update(self, store: EntityStore) -> None:
        with store.transaction() as txn:
            txn.write_config(["Mission", "Scenario"], True, NOW)
            txn.write_config(["Scenario", "Mission"], False, "2026-02-01T00:00:00+00:00")
            stored = txn.read_config()
        assert stored is not None
        assert stored.domain_order == ["Scenario", "Mission"]
        assert stored.allow_only_adjacent_connections is False
        assert stored.updated.startswith("2026-02-01")

    def test_write_config_over_existing_row(self, store: EntityStore) -> None:
        with store.transaction() as txn:
            txn.write_config(["Mission", "Scenario"], True, NOW)
        # The singleton row is upserted, never inserted twice.
        with store.transaction() as txn:
            txn.write_config(["Scenario", "Mission"], False, NOW)
        with store.transaction() as txn:
            stored = txn.read_config()
            rows = txn.conn.execute(select(func.count()).select_from(app_config)).scalar_one()
        assert rows == 1
        assert stored is not None
        assert stored.domain_order == ["Scenario", "Mission"]
