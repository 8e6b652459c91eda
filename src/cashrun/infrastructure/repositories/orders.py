"""Order rows and their audit trail."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from cashrun.domain.models import Order
from cashrun.infrastructure.database.schema import order_events, orders


def row_to_order(row: Any) -> Order:
    data = {k: v for k, v in dict(row).items() if k in Order.model_fields}
    return Order.model_validate(data)


class OrderRepository:
    """Plain reads and inserts. Status changes go through the transition endpoint."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def insert_order(self, order: Order) -> None:
        with self._engine.begin() as conn:
            conn.execute(insert(orders).values(**order.model_dump()))

    def get_order(self, order_id: str) -> Order | None:
        stmt = select(orders).where(orders.c.id == order_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return row_to_order(row) if row is not None else None

    def list_orders(self, *, status: str | None = None, limit: int = 20) -> list[Order]:
        stmt = select(orders)
        if status:
            stmt = stmt.where(orders.c.status == status)
        stmt = stmt.order_by(orders.c.created_at.desc()).limit(limit)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_order(row) for row in rows]

    def list_events(self, order_id: str) -> list[dict[str, Any]]:
        """Audit trail for an order, oldest first."""
        stmt = (
            select(order_events)
            .where(order_events.c.order_id == order_id)
            .order_by(order_events.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        events: list[dict[str, Any]] = []
        for row in rows:
            event = dict(row)
            event["metadata"] = json.loads(event["metadata"]) if event["metadata"] else {}
            events.append(event)
        return events
