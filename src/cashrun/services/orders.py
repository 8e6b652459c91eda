"""OrderService: order creation, transitions, and read views for the CLI."""

from __future__ import annotations

import logging
from typing import Any

from cashrun.config.logging import order_context
from cashrun.domain.errors import CashrunError, OrderNotFoundError
from cashrun.domain.lifecycle import OrderStatus, parse_status
from cashrun.domain.models import Order, TransitionMetadata
from cashrun.domain.types import DeliveryStyle
from cashrun.domain.views import project_order
from cashrun.services._helpers import new_id, now_iso
from cashrun.services.atm import AtmAssignmentService
from cashrun.services.base import BaseService
from cashrun.services.result import ServiceResult, error_result
from cashrun.services.transitions import TransitionValidator

logger = logging.getLogger(__name__)


class OrderService(BaseService):
    """Store-backed order operations returning ServiceResult."""

    def validator(self) -> TransitionValidator:
        return TransitionValidator(
            self._store.endpoint,
            generate_action_ids=self._store.settings.transitions.generate_action_ids,
        )

    def create_order(
        self,
        customer_id: str,
        customer_address_id: str,
        lat: float,
        lng: float,
        requested_amount: float,
        *,
        delivery_style: DeliveryStyle = DeliveryStyle.SPEED,
    ) -> ServiceResult:
        """Assign an ATM and persist a new ``Pending`` order."""
        op = "create_order"
        cfg = self._store.settings.atm
        assigner = AtmAssignmentService(
            self._store.atms,
            sample_limit=cfg.sample_limit,
            earth_radius_m=cfg.earth_radius_m,
        )
        try:
            assignment = assigner.assign(customer_address_id, lat, lng)
        except CashrunError as exc:
            return error_result(op, exc)

        order = Order(
            id=new_id(),
            status=str(OrderStatus.PENDING),
            customer_id=customer_id,
            customer_address_id=customer_address_id,
            requested_amount=requested_amount,
            delivery_style=str(delivery_style),
            atm_id=assignment.atm_id,
            created_at=now_iso(),
        )
        self._store.orders.insert_order(order)
        logger.info("Created order %s at ATM %s", order.id, assignment.atm_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "order": order.model_dump(),
                "atm": assignment.model_dump(by_alias=True),
            },
        )

    def advance_order(
        self,
        order_id: str,
        next_status: str,
        *,
        actor_id: str,
        reason: str | None = None,
        client_action_id: str | None = None,
    ) -> ServiceResult:
        op = "advance_order"
        target = parse_status(next_status)
        with order_context(order_id, actor_id=actor_id):
            try:
                order = self._require(order_id)
                confirmed = self.validator().advance(
                    order,
                    str(target) if target is not None else next_status,
                    TransitionMetadata(actor_id=actor_id, reason=reason),
                    client_action_id=client_action_id,
                )
            except CashrunError as exc:
                return error_result(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"from": order.status, "order": confirmed.model_dump()},
        )

    def get_order(self, order_id: str) -> ServiceResult:
        op = "get_order"
        try:
            order = self._require(order_id)
        except CashrunError as exc:
            return error_result(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"order": order.model_dump(), "view": project_order(order).model_dump()},
        )

    def order_history(self, order_id: str) -> ServiceResult:
        op = "order_history"
        try:
            self._require(order_id)
        except CashrunError as exc:
            return error_result(op, exc)
        events = self._store.orders.list_events(order_id)
        return ServiceResult(ok=True, op=op, data={"order_id": order_id, "events": events})

    def list_orders(self, *, status: str | None = None, limit: int = 20) -> ServiceResult:
        parsed = parse_status(status) if status else None
        orders = self._store.orders.list_orders(
            status=str(parsed) if parsed is not None else status,
            limit=limit,
        )
        items: list[dict[str, Any]] = [
            {"id": o.id, "status": o.status, "created_at": o.created_at} for o in orders
        ]
        return ServiceResult(ok=True, op="list_orders", data={"items": items, "count": len(items)})

    def _require(self, order_id: str) -> Order:
        order = self._store.orders.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order not found: {order_id}", order_id=order_id)
        return order
