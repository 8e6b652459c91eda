"""Ports the services depend on.

Concrete adapters live in :mod:`cashrun.infrastructure`; tests substitute
in-memory fakes.
"""

from __future__ import annotations

from typing import Any, Protocol

from cashrun.domain.models import (
    AddressAtmPreference,
    AtmLocation,
    TransitionRequest,
    TransitionResponse,
)


class TransitionEndpoint(Protocol):
    """The authoritative remote mutation for order status.

    Returns a response for anything the store answered (success or
    rejection). Raises ``NetworkError`` or an ``OSError`` on transport failure.
    """

    def request_transition(self, request: TransitionRequest) -> TransitionResponse: ...


class AtmStore(Protocol):
    def preferences_for_address(self, customer_address_id: str) -> list[AddressAtmPreference]: ...

    def get_active_atm(self, atm_id: str) -> AtmLocation | None: ...

    def list_active_atms(self, limit: int) -> list[AtmLocation]: ...

    def touch_preference(
        self,
        customer_address_id: str,
        atm_id: str,
        *,
        times_used: int,
        last_used_at: str,
    ) -> None: ...

    def upsert_preference(
        self,
        customer_address_id: str,
        atm_id: str,
        *,
        last_used_at: str,
        times_used: int = 1,
    ) -> None: ...


class CachePort(Protocol):
    """Explicit key/value cache injected where local state is kept."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def invalidate(self, key: str) -> None: ...
