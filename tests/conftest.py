"""Shared pytest fixtures and test helpers for cashrun tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from cashrun.config.settings import CashrunSettings
from cashrun.domain.models import (
    AddressAtmPreference,
    AtmLocation,
    Order,
    TransitionRequest,
    TransitionResponse,
)
from cashrun.domain.types import AtmStatus
from cashrun.infrastructure.database.engine import init_database
from cashrun.infrastructure.store import Store

# Downtown Miami; used as the delivery address in most ATM tests.
HOME_LAT = 25.7617
HOME_LNG = -80.1918


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / ".cashrun" / "cashrun.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CashrunSettings:
    monkeypatch.delenv("CASHRUN_CONFIG", raising=False)
    return CashrunSettings.from_cli(data_root=tmp_path)


@pytest.fixture
def store(settings: CashrunSettings) -> Generator[Store]:
    """Store on a temp directory, closed after the test."""
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_store")`` on command test classes.
    """
    monkeypatch.delenv("CASHRUN_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def offset_north(meters: float) -> tuple[float, float]:
    """A point *meters* due north of the home address."""
    return HOME_LAT + meters / 111_195.0, HOME_LNG


def make_atm(atm_id: str, meters_north: float = 0.0, **kwargs: Any) -> AtmLocation:
    lat, lng = offset_north(meters_north)
    values: dict[str, Any] = {
        "id": atm_id,
        "name": f"ATM {atm_id}",
        "address": f"{atm_id} Main St, Miami, FL",
        "lat": lat,
        "lng": lng,
    }
    values.update(kwargs)
    return AtmLocation(**values)


def make_order(status: str = "Pending", **kwargs: Any) -> Order:
    values: dict[str, Any] = {
        "id": "order-1",
        "status": status,
        "customer_id": "cust-1",
        "created_at": "2026-01-01T00:00:00+00:00",
    }
    values.update(kwargs)
    return Order(**values)


class FakeEndpoint:
    """Records transition requests and answers with a scripted response."""

    def __init__(
        self,
        *,
        ok: bool = True,
        message: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self.requests: list[TransitionRequest] = []
        self._ok = ok
        self._message = message
        self._error = error

    def request_transition(self, request: TransitionRequest) -> TransitionResponse:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if not self._ok:
            return TransitionResponse(ok=False, message=self._message)
        order = make_order(request.next_status, id=request.order_id)
        return TransitionResponse(ok=True, order=order)


class FakeAtmStore:
    """In-memory ATM store implementing the AtmStore port."""

    def __init__(
        self,
        atms: list[AtmLocation] | None = None,
        preferences: list[AddressAtmPreference] | None = None,
        *,
        fail_writes: bool = False,
    ) -> None:
        self.atms = {atm.id: atm for atm in atms or []}
        self.preferences = list(preferences or [])
        self.fail_writes = fail_writes
        self.list_calls: list[int] = []

    def preferences_for_address(self, customer_address_id: str) -> list[AddressAtmPreference]:
        rows = [p for p in self.preferences if p.customer_address_id == customer_address_id]
        rows.sort(key=lambda p: p.last_used_at, reverse=True)
        rows.sort(key=lambda p: p.times_used, reverse=True)
        return rows

    def get_active_atm(self, atm_id: str) -> AtmLocation | None:
        atm = self.atms.get(atm_id)
        if atm is None or atm.status != AtmStatus.ACTIVE:
            return None
        return atm

    def list_active_atms(self, limit: int) -> list[AtmLocation]:
        self.list_calls.append(limit)
        return [a for a in self.atms.values() if a.status == AtmStatus.ACTIVE][:limit]

    def _replace(self, pref: AddressAtmPreference) -> None:
        self.preferences = [
            p
            for p in self.preferences
            if (p.customer_address_id, p.atm_id) != (pref.customer_address_id, pref.atm_id)
        ]
        self.preferences.append(pref)

    def touch_preference(
        self,
        customer_address_id: str,
        atm_id: str,
        *,
        times_used: int,
        last_used_at: str,
    ) -> None:
        if self.fail_writes:
            raise RuntimeError("write failed")
        self._replace(
            AddressAtmPreference(
                customer_address_id=customer_address_id,
                atm_id=atm_id,
                times_used=times_used,
                last_used_at=last_used_at,
            )
        )

    def upsert_preference(
        self,
        customer_address_id: str,
        atm_id: str,
        *,
        last_used_at: str,
        times_used: int = 1,
    ) -> None:
        if self.fail_writes:
            raise RuntimeError("write failed")
        self._replace(
            AddressAtmPreference(
                customer_address_id=customer_address_id,
                atm_id=atm_id,
                times_used=times_used,
                last_used_at=last_used_at,
            )
        )

    def preference(self, customer_address_id: str, atm_id: str) -> AddressAtmPreference | None:
        for p in self.preferences:
            if (p.customer_address_id, p.atm_id) == (customer_address_id, atm_id):
                return p
        return None
