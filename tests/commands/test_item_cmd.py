"""Tests for the item command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from dthread.cli import cli


def _json(cli_runner: CliRunner, *args: str) -> dict:  # type: ignore[type-arg]
    result = cli_runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["data"]


@pytest.mark.usefixtures("_isolated_project")
class TestItemAdd:
    def test_add(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "item", "add", "Mission", "Reach orbit")
        assert data["id"] == "MIS-001"
        assert data["title"] == "Reach orbit"

    def test_add_with_parent(self, cli_runner: CliRunner) -> None:
        _json(cli_runner, "item", "add", "Mission", "Parent")
        data = _json(cli_runner, "item", "add", "Mission", "Child", "--parent", "MIS-001")
        assert data["parent_id"] == "MIS-001"

    def test_add_parameter_attributes(self, cli_runner: CliRunner) -> None:
        data = _json(
            cli_runner, "item", "add", "Parameter", "Mass", "--unit", "kg", "--value-type", "number"
        )
        assert data["attributes"] == {"unit": "kg", "value_type": "number"}

    def test_invalid_value_type_choice(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["item", "add", "Parameter", "Mass", "--value-type", "complex"]
        )
        assert result.exit_code == 2

    def test_unknown_domain(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["item", "add", "Widgets", "X"])
        assert result.exit_code == 1
        assert "UNKNOWN_DOMAIN" in result.output

    def test_quiet_prints_id(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "item", "add", "Scenario", "Nominal"])
        assert result.output.strip() == "SCN-001"


@pytest.mark.usefixtures("_isolated_project")
class TestItemList:
    def test_list(self, cli_runner: CliRunner) -> None:
        _json(cli_runner, "item", "add", "Mission", "B")
        _json(cli_runner, "item", "add", "Mission", "A")
        data = _json(cli_runner, "item", "list", "Mission")
        assert [i["id"] for i in data["items"]] == ["MIS-001", "MIS-002"]

    def test_list_human(self, cli_runner: CliRunner) -> None:
        _json(cli_runner, "item", "add", "Mission", "Reach orbit")
        result = cli_runner.invoke(cli, ["item", "list", "Mission"])
        assert result.exit_code == 0
        assert "Reach orbit" in result.output
        assert "1 items" in result.output


@pytest.mark.usefixtures("_isolated_project")
class TestItemGenerate:
    def test_generate(self, cli_runner: CliRunner) -> None:
        data = _json(
            cli_runner,
            "item",
            "generate",
            "Functions",
            "--count",
            "2",
            "--min-subs",
            "1",
            "--max-subs",
            "1",
            "--seed",
            "5",
        )
        assert data["ids"] == ["FUN-001", "FUN-002"]
        assert data["children_count"] == 2

    def test_generate_defaults_from_settings(self, cli_runner: CliRunner, tmp_path) -> None:  # type: ignore[no-untyped-def]
        (tmp_path / "dthread.toml").write_text(
            "[generate]\ndefault_count = 3\nmin_subs = 0\nmax_subs = 0\n"
        )
        data = _json(cli_runner, "item", "generate", "Mission")
        assert data["generated_count"] == 3
        assert data["children_count"] == 0

    def test_generate_invalid_bounds(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["item", "generate", "Mission", "--min-subs", "5", "--max-subs", "2"]
        )
        assert result.exit_code == 1
        assert "VALIDATION_ERROR" in result.output


@pytest.mark.usefixtures("_isolated_project")
class TestItemNest:
    def test_nest(self, cli_runner: CliRunner) -> None:
        _json(cli_runner, "item", "add", "Mission", "A")
        _json(cli_runner, "item", "add", "Mission", "B")
        data = _json(cli_runner, "item", "nest", "Mission", "MIS-001", "MIS-002")
        assert data == {"domain": "Mission", "parent_id": "MIS-001", "child_id": "MIS-002"}

    def test_nest_cycle(self, cli_runner: CliRunner) -> None:
        _json(cli_runner, "item", "add", "Mission", "A")
        _json(cli_runner, "item", "add", "Mission", "B", "--parent", "MIS-001")
        result = cli_runner.invoke(cli, ["item", "nest", "Mission", "MIS-002", "MIS-001"])
        assert result.exit_code == 1
