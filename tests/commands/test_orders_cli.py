"""Tests for init, atm, and order commands against an isolated store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cashrun.cli import cli
from tests.conftest import HOME_LAT, HOME_LNG, make_atm

LOCATION = ["--lat", str(HOME_LAT), "--lng", str(HOME_LNG)]


def _invoke_json(cli_runner: CliRunner, *args: str) -> dict:
    result = cli_runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


@pytest.fixture
def atms_file(tmp_path: Path) -> Path:
    path = tmp_path / "atms.json"
    path.write_text(
        json.dumps(
            [
                make_atm("far", 900).model_dump(mode="json"),
                make_atm("near", 60).model_dump(mode="json"),
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.mark.usefixtures("_isolated_store")
class TestInit:
    def test_init(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        data = _invoke_json(cli_runner, "init")
        assert data["op"] == "init"
        assert (tmp_path / ".cashrun" / "cashrun.db").is_file()

    def test_config_db_name(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "cashrun.toml").write_text('[store]\ndb_name = "ops.db"\n')
        _invoke_json(cli_runner, "init")
        assert (tmp_path / ".cashrun" / "ops.db").is_file()


@pytest.mark.usefixtures("_isolated_store")
class TestAtmCommands:
    def test_import_and_assign(self, cli_runner: CliRunner, atms_file: Path) -> None:
        imported = _invoke_json(cli_runner, "atm", "import", str(atms_file))
        assert imported["data"] == {"imported": 2, "skipped": 0}

        first = _invoke_json(cli_runner, "atm", "assign", "addr-1", *LOCATION)
        assert first["data"]["atmId"] == "near"
        assert first["data"]["distanceMeters"] == 60
        assert first["data"]["fromCache"] is False

        second = _invoke_json(cli_runner, "atm", "assign", "addr-1", *LOCATION)
        assert second["data"]["fromCache"] is True

    def test_assign_without_atms(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["atm", "assign", "addr-1", *LOCATION])
        assert result.exit_code == 1
        assert "NO_AVAILABLE_ATM" in result.output

    def test_assign_rejects_bad_latitude(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["atm", "assign", "addr-1", "--lat", "91", "--lng", "0"])
        assert result.exit_code == 2


@pytest.mark.usefixtures("_isolated_store")
class TestOrderCommands:
    def _create(self, cli_runner: CliRunner, atms_file: Path) -> str:
        _invoke_json(cli_runner, "atm", "import", str(atms_file))
        data = _invoke_json(
            cli_runner,
            "order",
            "create",
            "--customer",
            "cust-1",
            "--address",
            "addr-1",
            *LOCATION,
            "--amount",
            "200",
        )
        assert data["data"]["order"]["atm_id"] == "near"
        return str(data["data"]["order"]["id"])

    def test_full_lifecycle(self, cli_runner: CliRunner, atms_file: Path) -> None:
        order_id = self._create(cli_runner, atms_file)
        for step in ("runner_accepted", "runner_at_atm", "cash_withdrawn", "pending_handoff"):
            _invoke_json(cli_runner, "order", "advance", order_id, step, "--actor", "runner-1")
        done = _invoke_json(
            cli_runner, "order", "advance", order_id, "Completed", "--actor", "runner-1"
        )
        assert done["data"]["order"]["status"] == "Completed"

        shown = _invoke_json(cli_runner, "order", "show", order_id)
        assert shown["data"]["view"]["terminal"] is True
        assert shown["data"]["view"]["customer"]["step"] == "COMPLETED"

        history = _invoke_json(cli_runner, "order", "history", order_id)
        assert len(history["data"]["events"]) == 5

    def test_illegal_transition_exit_code(self, cli_runner: CliRunner, atms_file: Path) -> None:
        order_id = self._create(cli_runner, atms_file)
        result = cli_runner.invoke(
            cli, ["order", "advance", order_id, "Completed", "--actor", "runner-1"]
        )
        assert result.exit_code == 1
        assert "INVALID_TRANSITION" in result.output

    def test_cancel_with_reason(self, cli_runner: CliRunner, atms_file: Path) -> None:
        order_id = self._create(cli_runner, atms_file)
        data = _invoke_json(
            cli_runner,
            "order",
            "advance",
            order_id,
            "canceled",
            "--actor",
            "cust-1",
            "--reason",
            "Found cash",
        )
        assert data["data"]["order"]["cancellation_reason"] == "Found cash"

    def test_list(self, cli_runner: CliRunner, atms_file: Path) -> None:
        order_id = self._create(cli_runner, atms_file)
        data = _invoke_json(cli_runner, "order", "list", "--status", "pending")
        assert data["data"]["count"] == 1
        assert data["data"]["items"][0]["id"] == order_id

    def test_list_human_table(self, cli_runner: CliRunner, atms_file: Path) -> None:
        self._create(cli_runner, atms_file)
        result = cli_runner.invoke(cli, ["order", "list"])
        assert result.exit_code == 0
        assert "list_orders" in result.output
        assert "Pending" in result.output

    def test_show_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["order", "show", "ghost"])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.output


class TestDataRoot:
    def test_explicit_data_root(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("CASHRUN_CONFIG", raising=False)
        root = tmp_path / "ops"
        result = cli_runner.invoke(cli, ["--data-root", str(root), "init"])
        assert result.exit_code == 0
        assert (root / ".cashrun" / "cashrun.db").is_file()
