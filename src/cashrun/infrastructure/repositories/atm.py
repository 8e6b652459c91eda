"""ATM locations and per-address ATM preferences."""

from __future__ import annotations

from typing import Any

from sqlalchemy import literal_column, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine

from cashrun.domain.models import AddressAtmPreference, AtmLocation
from cashrun.domain.types import AtmStatus
from cashrun.infrastructure.database.schema import address_atm_preferences, atm_locations


def _to_atm(row: Any) -> AtmLocation:
    return AtmLocation.model_validate(dict(row))


class AtmRepository:
    """Reads and writes ATM rows and the address preference cache."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- ATM locations ---

    def get_atm(self, atm_id: str) -> AtmLocation | None:
        stmt = select(atm_locations).where(atm_locations.c.id == atm_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return _to_atm(row) if row is not None else None

    def get_active_atm(self, atm_id: str) -> AtmLocation | None:
        """Fetch one ATM by id, only if it is currently active."""
        stmt = select(atm_locations).where(
            atm_locations.c.id == atm_id,
            atm_locations.c.status == str(AtmStatus.ACTIVE),
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return _to_atm(row) if row is not None else None

    def list_active_atms(self, limit: int) -> list[AtmLocation]:
        """Up to *limit* active ATMs in insertion order."""
        stmt = (
            select(atm_locations)
            .where(atm_locations.c.status == str(AtmStatus.ACTIVE))
            .order_by(literal_column("rowid"))
            .limit(limit)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_to_atm(row) for row in rows]

    def upsert_atms(self, atms: list[AtmLocation]) -> int:
        """Insert or replace ATM rows. Returns the count written."""
        if not atms:
            return 0
        with self._engine.begin() as conn:
            for atm in atms:
                values = atm.model_dump(mode="json")
                stmt = sqlite_insert(atm_locations).values(**values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[atm_locations.c.id],
                    set_={k: v for k, v in values.items() if k != "id"},
                )
                conn.execute(stmt)
        return len(atms)

    def set_atm_status(self, atm_id: str, status: AtmStatus) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(
                update(atm_locations)
                .where(atm_locations.c.id == atm_id)
                .values(status=str(status))
            )
        return result.rowcount > 0

    # --- Address preferences ---

    def preferences_for_address(self, customer_address_id: str) -> list[AddressAtmPreference]:
        """Cached ATMs for an address, most used first, then most recent."""
        stmt = (
            select(address_atm_preferences)
            .where(address_atm_preferences.c.customer_address_id == customer_address_id)
            .order_by(
                address_atm_preferences.c.times_used.desc(),
                address_atm_preferences.c.last_used_at.desc(),
            )
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [AddressAtmPreference.model_validate(dict(row)) for row in rows]

    def touch_preference(
        self,
        customer_address_id: str,
        atm_id: str,
        *,
        times_used: int,
        last_used_at: str,
    ) -> None:
        """Write back a reused preference's counter and timestamp."""
        with self._engine.begin() as conn:
            conn.execute(
                update(address_atm_preferences)
                .where(
                    address_atm_preferences.c.customer_address_id == customer_address_id,
                    address_atm_preferences.c.atm_id == atm_id,
                )
                .values(times_used=times_used, last_used_at=last_used_at)
            )

    def upsert_preference(
        self,
        customer_address_id: str,
        atm_id: str,
        *,
        last_used_at: str,
        times_used: int = 1,
    ) -> None:
        """Insert or overwrite the preference row keyed by (address, atm)."""
        stmt = sqlite_insert(address_atm_preferences).values(
            customer_address_id=customer_address_id,
            atm_id=atm_id,
            times_used=times_used,
            last_used_at=last_used_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                address_atm_preferences.c.customer_address_id,
                address_atm_preferences.c.atm_id,
            ],
            set_={"times_used": times_used, "last_used_at": last_used_at},
        )
        with self._engine.begin() as conn:
            conn.execute(stmt)
