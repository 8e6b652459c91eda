"""OrderTracker: the local view of orders, refreshed only by the store.

The tracker never guesses: a snapshot from the authoritative store (a
realtime push, a refresh, or the reply to ``advance``) replaces the
cached order outright. A rejected transition evicts the entry so the
next read forces a refresh.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cashrun.domain.errors import RemoteRejectionError
from cashrun.domain.models import Order, TransitionMetadata
from cashrun.domain.views import OrderView, project_order

if TYPE_CHECKING:
    from cashrun.services.ports import CachePort
    from cashrun.services.transitions import TransitionValidator

logger = logging.getLogger(__name__)


def _key(order_id: str) -> str:
    return f"order:{order_id}"


class OrderTracker:
    def __init__(self, validator: TransitionValidator, cache: CachePort) -> None:
        self._validator = validator
        self._cache = cache

    def current(self, order_id: str) -> Order | None:
        """The last authoritative snapshot, or None if unknown or evicted."""
        cached = self._cache.get(_key(order_id))
        return cached if isinstance(cached, Order) else None

    def view(self, order_id: str) -> OrderView | None:
        order = self.current(order_id)
        return project_order(order) if order is not None else None

    def apply_snapshot(self, order: Order) -> Order:
        """Replace the local view with an authoritative snapshot."""
        self._cache.set(_key(order.id), order)
        return order

    def forget(self, order_id: str) -> None:
        self._cache.invalidate(_key(order_id))

    def advance(
        self,
        order: Order,
        next_status: str,
        metadata: TransitionMetadata | dict[str, Any],
        *,
        client_action_id: str | None = None,
    ) -> Order:
        """Advance through the validator and cache only the confirmed result."""
        try:
            confirmed = self._validator.advance(
                order, next_status, metadata, client_action_id=client_action_id
            )
        except RemoteRejectionError:
            logger.debug("Evicting %s after rejected transition", order.id)
            self.forget(order.id)
            raise
        return self.apply_snapshot(confirmed)
