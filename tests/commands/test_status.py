"""Tests for the status and route commands (no store needed)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cashrun.cli import cli


@pytest.mark.usefixtures("_isolated_store")
class TestStatusGraph:
    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["status", "graph"])
        assert result.exit_code == 0
        assert "transition_graph" in result.output
        assert "Runner Accepted" in result.output

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "status", "graph"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["data"]["edges"]) == 10


@pytest.mark.usefixtures("_isolated_store")
class TestStatusProject:
    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "status", "project", "pending_handoff", "--style", "COUNTED"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["step"] == "ARRIVED"
        assert data["progress"] == 5
        assert data["delivery_style"] == "COUNTED"

    def test_lowercase_style_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["status", "project", "Pending", "--style", "counted"])
        assert result.exit_code == 2
        assert "Invalid value for '--style'" in result.output

    def test_unknown_status_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["status", "project", "Lost"])
        assert result.exit_code == 0
        assert "CANCELED" in result.output
        assert "WARNING" in result.output

    def test_does_not_create_store(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cli_runner.invoke(cli, ["status", "project", "Pending"])
        assert not (tmp_path / ".cashrun").exists()


@pytest.mark.usefixtures("_isolated_store")
class TestRoute:
    def test_runner_root(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "route", "--role", "runner"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["redirect"] == "/runner/work"

    def test_anonymous(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "route", "--anonymous", "--path", "/x"])
        assert json.loads(result.output)["data"]["redirect"] == "/login"

    def test_incomplete_customer(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "route", "--role", "customer", "--path", "/customer/home", "--incomplete"],
        )
        assert json.loads(result.output)["data"]["redirect"] == "/onboarding/profile"

    def test_bad_path(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["route", "--path", "nowhere"])
        assert result.exit_code == 1
        assert "INVALID_INPUT" in result.output
