"""Tests for the serve command."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from click.testing import CliRunner
from fastapi import FastAPI

from dthread.cli import cli


class TestServeCommand:
    def test_serve_help_shows_host_port(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["serve", "--help"])
        assert "--host" in result.output
        assert "--port" in result.output

    @pytest.mark.usefixtures("_isolated_project")
    def test_serve_defaults_from_settings(self, cli_runner: CliRunner) -> None:
        with patch("uvicorn.run") as run:
            result = cli_runner.invoke(cli, ["serve"])
        assert result.exit_code == 0, result.output
        app, = run.call_args.args
        assert isinstance(app, FastAPI)
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 3001

    @pytest.mark.usefixtures("_isolated_project")
    def test_serve_overrides(self, cli_runner: CliRunner) -> None:
        with patch("uvicorn.run") as run:
            result = cli_runner.invoke(cli, ["serve", "--host", "0.0.0.0", "--port", "9000"])
        assert result.exit_code == 0
        assert run.call_args.kwargs["host"] == "0.0.0.0"
        assert run.call_args.kwargs["port"] == 9000
