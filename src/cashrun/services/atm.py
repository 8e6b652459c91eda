"""ATM assignment: cached per-address preference with nearest-ATM fallback.

Algorithm:

1. Read the address's cached preferences (most used, then most recent).
2. Take the first whose ATM is still active; bump its counter and
   timestamp, and return it.
3. Otherwise scan a bounded sample of active ATMs and take the nearest
   by Haversine distance. Ties keep the sample order.
4. Record the choice as a new preference. This write is best-effort.

The read-increment-write on ``times_used`` is not atomic: two concurrent
assignments for the same address can both write the same count. The
counter is a ranking hint, so the undercount is accepted.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from cashrun.domain.errors import CashrunError, NoAvailableAtmError
from cashrun.domain.geo import EARTH_RADIUS_M, haversine_distance
from cashrun.domain.models import AtmAssignmentResult, AtmLocation
from cashrun.services._helpers import now_iso
from cashrun.services.base import BaseService
from cashrun.services.result import ServiceError, ServiceResult, error_result

if TYPE_CHECKING:
    from cashrun.services.ports import AtmStore

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_LIMIT = 100


class AtmAssignmentService:
    """Picks one active ATM for a delivery address."""

    def __init__(
        self,
        store: AtmStore,
        *,
        sample_limit: int = DEFAULT_SAMPLE_LIMIT,
        earth_radius_m: float = EARTH_RADIUS_M,
        clock: Callable[[], str] = now_iso,
    ) -> None:
        self._store = store
        self._sample_limit = sample_limit
        self._radius = earth_radius_m
        self._clock = clock

    def _distance(self, lat: float, lng: float, atm: AtmLocation) -> float:
        return haversine_distance(lat, lng, atm.lat, atm.lng, radius=self._radius)

    def assign(self, customer_address_id: str, lat: float, lng: float) -> AtmAssignmentResult:
        """Select an ATM for the address at (*lat*, *lng*).

        Raises:
            NoAvailableAtmError: No cached ATM is active and the store has
                no active ATMs at all.
        """
        cached = self._from_preferences(customer_address_id, lat, lng)
        if cached is not None:
            return cached

        candidates = self._store.list_active_atms(self._sample_limit)
        if not candidates:
            raise NoAvailableAtmError(
                "No active ATMs available",
                customer_address_id=customer_address_id,
            )

        # sorted() is stable, so equal distances keep the store's order.
        ranked = sorted(
            ((self._distance(lat, lng, atm), atm) for atm in candidates),
            key=lambda pair: pair[0],
        )
        distance, chosen = ranked[0]

        try:
            self._store.upsert_preference(
                customer_address_id,
                chosen.id,
                times_used=1,
                last_used_at=self._clock(),
            )
        except Exception:
            logger.warning(
                "Failed to cache ATM preference %s for address %s",
                chosen.id,
                customer_address_id,
                exc_info=True,
            )

        logger.debug("Assigned nearest ATM %s (%.0f m)", chosen.id, distance)
        return _result(chosen, distance, from_cache=False)

    def _from_preferences(
        self, customer_address_id: str, lat: float, lng: float
    ) -> AtmAssignmentResult | None:
        try:
            preferences = self._store.preferences_for_address(customer_address_id)
        except Exception:
            logger.warning(
                "Could not read ATM preferences for address %s; using nearest ATM",
                customer_address_id,
                exc_info=True,
            )
            return None

        for pref in preferences:
            try:
                atm = self._store.get_active_atm(pref.atm_id)
            except Exception:
                logger.warning(
                    "Could not look up cached ATM %s for address %s; skipping",
                    pref.atm_id,
                    customer_address_id,
                    exc_info=True,
                )
                continue
            if atm is None:
                continue
            distance = self._distance(lat, lng, atm)
            try:
                self._store.touch_preference(
                    customer_address_id,
                    atm.id,
                    times_used=pref.times_used + 1,
                    last_used_at=self._clock(),
                )
            except Exception:
                logger.warning(
                    "Failed to update ATM preference %s for address %s",
                    atm.id,
                    customer_address_id,
                    exc_info=True,
                )
            logger.debug("Reused cached ATM %s for address %s", atm.id, customer_address_id)
            return _result(atm, distance, from_cache=True)
        return None


def _result(atm: AtmLocation, distance: float, *, from_cache: bool) -> AtmAssignmentResult:
    return AtmAssignmentResult(
        atm_id=atm.id,
        atm_name=atm.name,
        atm_address=atm.address,
        atm_lat=atm.lat,
        atm_lng=atm.lng,
        distance_meters=math.floor(distance + 0.5),
        from_cache=from_cache,
    )


class AtmService(BaseService):
    """Store-backed ATM operations for the CLI."""

    def _assigner(self) -> AtmAssignmentService:
        cfg = self._store.settings.atm
        return AtmAssignmentService(
            self._store.atms,
            sample_limit=cfg.sample_limit,
            earth_radius_m=cfg.earth_radius_m,
        )

    def assign(self, customer_address_id: str, lat: float, lng: float) -> ServiceResult:
        op = "assign_atm"
        try:
            result = self._assigner().assign(customer_address_id, lat, lng)
        except CashrunError as exc:
            return error_result(op, exc)
        return ServiceResult(ok=True, op=op, data=result.model_dump(by_alias=True))

    def import_atms(self, path: Path) -> ServiceResult:
        """Load ATM rows from a JSON array of ``{id, name, address, lat, lng, status}``."""
        op = "import_atms"
        try:
            raw: Any = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="INVALID_INPUT", message=f"Cannot read {path}: {exc}"),
            )
        if not isinstance(raw, list):
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="INVALID_INPUT", message="Expected a JSON array of ATMs"),
            )

        atms: list[AtmLocation] = []
        warnings: list[str] = []
        for index, item in enumerate(raw):
            try:
                atms.append(AtmLocation.model_validate(item))
            except ValidationError as exc:
                warnings.append(f"Skipped entry {index}: {exc.error_count()} invalid field(s)")

        count = self._store.atms.upsert_atms(atms)
        return ServiceResult(
            ok=True,
            op=op,
            data={"imported": count, "skipped": len(warnings)},
            warnings=warnings,
        )
