"""TransitionValidator: guard order status changes before asking the store.

``advance`` never applies a transition locally. It checks the edge
against the graph, sends exactly one request to the authoritative
endpoint, and hands back whatever order the endpoint returns. Callers
that keep a local view must replace it with that result (see
:class:`~cashrun.services.tracking.OrderTracker`).
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from cashrun.domain.errors import (
    CashrunError,
    InvalidTransitionError,
    NetworkError,
    RemoteRejectionError,
)
from cashrun.domain.lifecycle import can_transition
from cashrun.domain.models import Order, TransitionMetadata, TransitionRequest

if TYPE_CHECKING:
    from cashrun.services.ports import TransitionEndpoint

logger = logging.getLogger(__name__)


class TransitionValidator:
    """Validates transitions locally and forwards legal ones to the store."""

    def __init__(
        self,
        endpoint: TransitionEndpoint,
        *,
        generate_action_ids: bool = True,
    ) -> None:
        self._endpoint = endpoint
        self._generate_action_ids = generate_action_ids

    @staticmethod
    def can_transition(current: object, target: object) -> bool:
        return can_transition(current, target)

    def advance(
        self,
        order: Order,
        next_status: str,
        metadata: TransitionMetadata | dict[str, Any],
        *,
        client_action_id: str | None = None,
    ) -> Order:
        """Request *order* move to *next_status*.

        Raises:
            InvalidTransitionError: The edge is not in the graph. No request is sent.
            RemoteRejectionError: The store answered with anything but success.
            NetworkError: The request could not be delivered.
        """
        if not can_transition(order.status, next_status):
            raise InvalidTransitionError(str(order.status), str(next_status))

        if isinstance(metadata, dict):
            metadata = TransitionMetadata.model_validate(metadata)
        if client_action_id is None and self._generate_action_ids:
            client_action_id = str(uuid.uuid4())

        request = TransitionRequest(
            order_id=order.id,
            next_status=str(next_status),
            metadata=metadata,
            client_action_id=client_action_id,
        )
        try:
            response = self._endpoint.request_transition(request)
        except CashrunError:
            raise
        except OSError as exc:
            raise NetworkError(
                f"Transport failure advancing {order.id}: {exc}",
                order_id=order.id,
            ) from exc

        if not response.ok or response.order is None:
            message = response.message or "Transition rejected by store"
            logger.warning(
                "Order %s: %s -> %s rejected: %s", order.id, order.status, next_status, message
            )
            raise RemoteRejectionError(
                message,
                order_id=order.id,
                current=str(order.status),
                target=str(next_status),
            )
        return response.order
