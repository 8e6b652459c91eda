"""BaseService: foundation for adapter-facing cashrun services.

Every service receives a :class:`Store` at construction time and returns
:class:`~cashrun.services.result.ServiceResult` from its public methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cashrun.infrastructure.store import Store


class BaseService:
    """Base for service-layer classes backed by the store.

    Usage::

        class OrderService(BaseService):
            def get_order(self, order_id: str) -> ServiceResult:
                order = self._store.orders.get_order(order_id)
                ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store
