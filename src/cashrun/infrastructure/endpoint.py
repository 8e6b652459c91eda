"""SQL-backed authoritative endpoint for order status transitions.

This is the store-side counterpart of the client validator: it re-checks
the edge against the ``order_status_transitions`` allowlist inside one
transaction, stamps the entry timestamp, and appends an audit event.
A repeated ``client_action_id`` for the same order returns the current
order without applying anything a second time.

Rejections come back as ``TransitionResponse(ok=False)``; database
connectivity failures are raised as :class:`NetworkError`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from cashrun.domain.errors import NetworkError
from cashrun.domain.lifecycle import STATUS_TIMESTAMPS, OrderStatus, parse_status
from cashrun.domain.models import TransitionRequest, TransitionResponse
from cashrun.infrastructure.database.schema import order_events, order_status_transitions, orders
from cashrun.infrastructure.repositories.orders import row_to_order

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


class SqlTransitionEndpoint:
    """Applies transition requests against the relational store."""

    def __init__(self, engine: Engine, *, clock: Callable[[], str] = _utc_now) -> None:
        self._engine = engine
        self._clock = clock

    def request_transition(self, request: TransitionRequest) -> TransitionResponse:
        try:
            return self._apply(request)
        except OperationalError as exc:
            raise NetworkError(
                f"Store unavailable while advancing {request.order_id}",
                order_id=request.order_id,
            ) from exc

    def _apply(self, request: TransitionRequest) -> TransitionResponse:
        now = self._clock()
        with self._engine.begin() as conn:
            row = (
                conn.execute(select(orders).where(orders.c.id == request.order_id))
                .mappings()
                .first()
            )
            if row is None:
                return TransitionResponse(ok=False, message=f"Order not found: {request.order_id}")

            if request.client_action_id is not None:
                seen = conn.execute(
                    select(order_events.c.id).where(
                        order_events.c.order_id == request.order_id,
                        order_events.c.client_action_id == request.client_action_id,
                    )
                ).first()
                if seen is not None:
                    logger.debug(
                        "Duplicate action %s for order %s",
                        request.client_action_id,
                        request.order_id,
                    )
                    return TransitionResponse(ok=True, order=row_to_order(row))

            current = row["status"]
            allowed = conn.execute(
                select(order_status_transitions.c.to_status).where(
                    order_status_transitions.c.from_status == current,
                    order_status_transitions.c.to_status == request.next_status,
                )
            ).first()
            if allowed is None:
                return TransitionResponse(
                    ok=False,
                    message=f"Illegal transition: {current} -> {request.next_status}",
                )

            target = parse_status(request.next_status)
            values: dict[str, object] = {"status": request.next_status}
            if target is not None and target in STATUS_TIMESTAMPS:
                values[STATUS_TIMESTAMPS[target]] = now
            if target is OrderStatus.RUNNER_ACCEPTED and row["runner_id"] is None:
                values["runner_id"] = request.metadata.actor_id
            if target is OrderStatus.CANCELLED:
                values["cancelled_by"] = request.metadata.actor_id
                values["cancellation_reason"] = (
                    request.metadata.reason or f"Cancelled by {request.metadata.actor_id}"
                )

            # Compare-and-set on the status read above; a concurrent writer wins.
            result = conn.execute(
                update(orders)
                .where(orders.c.id == request.order_id, orders.c.status == current)
                .values(**values)
            )
            if result.rowcount == 0:
                return TransitionResponse(
                    ok=False,
                    message=f"Order {request.order_id} changed concurrently",
                )

            extra = request.metadata.model_dump(mode="json", exclude={"actor_id"})
            conn.execute(
                insert(order_events).values(
                    order_id=request.order_id,
                    from_status=current,
                    to_status=request.next_status,
                    actor_id=request.metadata.actor_id,
                    client_action_id=request.client_action_id,
                    metadata=json.dumps(extra),
                    created_at=now,
                )
            )
            updated = (
                conn.execute(select(orders).where(orders.c.id == request.order_id))
                .mappings()
                .one()
            )

        logger.info("Order %s: %s -> %s", request.order_id, current, request.next_status)
        return TransitionResponse(ok=True, order=row_to_order(updated))
