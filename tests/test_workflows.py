"""Integration workflow tests: multi-step scenarios spanning several services."""

from __future__ import annotations

from tests.conftest import add_item, link
from dthread.infrastructure.store import EntityStore
from dthread.services.config import ConfigService
from dthread.services.items import ItemService
from dthread.services.layout import LayoutService
from dthread.services.relationships import RelationshipGatekeeper


class TestThreadToDiagram:
    """Build a small thread across three domains and lay it out."""

    def test_links_become_edges(self, store: EntityStore) -> None:
        mission = add_item(store, "Mission", "Reach orbit")["id"]
        scenario = add_item(store, "Scenario", "Nominal ascent")["id"]
        req = add_item(store, "Requirements", "Thrust >= 1.2 MN")["id"]
        link(store, "Mission", mission, "Scenario", scenario)
        link(store, "Scenario", scenario, "Requirements", req)

        layout = LayoutService(store).compute()
        assert layout.ok
        edges = {(e["source_id"], e["target_id"], e["relationship_type"]) for e in layout.data["edges"]}
        assert edges == {
            ("Mission::MIS-001", "Scenario::SCN-001", "DRIVES"),
            ("Scenario::SCN-001", "Requirements::REQ-001", "REQUIRES"),
        }

    def test_reorder_hides_edges_to_non_next_domain(self, store: EntityStore) -> None:
        mission = add_item(store, "Mission", "M")["id"]
        scenario = add_item(store, "Scenario", "S")["id"]
        link(store, "Mission", mission, "Scenario", scenario)

        assert ConfigService(store).move_domain("Scenario", -1).ok
        layout = LayoutService(store).compute()
        assert layout.data["edges"] == []

        # Scenario now precedes Mission, so Mission -> Scenario goes backward.
        again = RelationshipGatekeeper(store).create_relationship(
            mission, scenario, "Mission", "Scenario", "DRIVES"
        )
        assert not again.ok
        assert again.error is not None
        assert again.error.code == "POLICY_VIOLATION"

    def test_generated_tree_is_laid_out_in_preorder(self, store: EntityStore) -> None:
        result = ItemService(store).bulk_generate(
            "Functions", count=2, min_subs=2, max_subs=2, seed=1
        )
        assert result.ok

        layout = LayoutService(store).compute().data
        items = [n for n in layout["nodes"] if n["id"].startswith("Functions::")]
        assert [n["id"] for n in items] == [
            "Functions::FUN-001",
            "Functions::FUN-001-SUB-001",
            "Functions::FUN-001-SUB-002",
            "Functions::FUN-002",
            "Functions::FUN-002-SUB-001",
            "Functions::FUN-002-SUB-002",
        ]
        ys = [n["position"]["y"] for n in items]
        assert ys == sorted(ys)
        container = next(
            row for row in layout["summary"] if row["domain"] == "Functions"
        )
        assert container["height"] == 30 + 6 * 60 + 2 * 20
