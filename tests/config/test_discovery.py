"""Tests for config file discovery and loading."""

from pathlib import Path

import click
import pytest

from dthread.config.discovery import CONFIG_ENV_VAR, find_config, load_config, read_config_file
from dthread.config.models import DThreadConfig


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        cfg = tmp_path / "dthread.toml"
        cfg.write_text("")
        nested = tmp_path / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config(nested) == cfg.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "dthread.toml").write_text("")
        other = tmp_path / "elsewhere.toml"
        other.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        assert load_config(cwd=tmp_path) == DThreadConfig()

    def test_sparse_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "dthread.toml"
        cfg.write_text('[thread]\ndomain_order = ["Mission", "EBOM"]\n')
        config = load_config(cfg)
        assert config.thread.domain_order == ["Mission", "EBOM"]
        assert config.layout.container_width == 300

    def test_unknown_section_rejected(self, tmp_path: Path) -> None:
        cfg = tmp_path / "dthread.toml"
        cfg.write_text("[layuot]\npadding = 4\n")
        with pytest.raises(click.ClickException, match="layuot"):
            load_config(cfg)

    def test_bad_value_rejected(self, tmp_path: Path) -> None:
        cfg = tmp_path / "dthread.toml"
        cfg.write_text('[layout]\ndisplay_mode = "sparkly"\n')
        with pytest.raises(click.ClickException, match="display_mode"):
            load_config(cfg)


class TestReadConfigFile:
    def test_reads_tables(self, tmp_path: Path) -> None:
        cfg = tmp_path / "dthread.toml"
        cfg.write_text("[api]\nport = 8080\n")
        assert read_config_file(cfg) == {"api": {"port": 8080}}

    def test_syntax_error(self, tmp_path: Path) -> None:
        cfg = tmp_path / "dthread.toml"
        cfg.write_text("[api\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            read_config_file(cfg)
