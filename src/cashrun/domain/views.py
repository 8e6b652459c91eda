"""OrderView: every derived signal for one order snapshot."""

from __future__ import annotations

from pydantic import BaseModel

from cashrun.domain.delivery import delivery_style_instruction
from cashrun.domain.lifecycle import is_terminal, next_statuses
from cashrun.domain.models import Order
from cashrun.domain.projections import (
    CustomerFacingStatus,
    chat_gate,
    customer_facing_status,
    identity_reveal_gate,
    progress_fill,
)
from cashrun.domain.reveal import (
    blur_runner_avatar,
    can_customer_cancel,
    cash_amount_visible_to_runner,
    live_location_gate,
    reveal_message,
    runner_visible,
)


class OrderView(BaseModel):
    model_config = {"frozen": True}

    order_id: str
    status: str
    customer: CustomerFacingStatus
    progress: int
    chat_open: bool
    identity_revealed: bool
    runner_visible: bool
    avatar_blurred: bool
    live_location: bool
    cash_amount_visible: bool
    customer_can_cancel: bool
    terminal: bool
    next_statuses: list[str]
    delivery_style: str
    handoff_instruction: str
    reveal_message: str


def project_order(order: Order) -> OrderView:
    """Derive the full view for *order*. Pure; never raises on odd status values."""
    status = order.status
    customer = customer_facing_status(status)
    return OrderView(
        order_id=order.id,
        status=status,
        customer=customer,
        progress=progress_fill(customer.step),
        chat_open=chat_gate(status),
        identity_revealed=identity_reveal_gate(status),
        runner_visible=runner_visible(status),
        avatar_blurred=blur_runner_avatar(status),
        live_location=live_location_gate(status),
        cash_amount_visible=cash_amount_visible_to_runner(status),
        customer_can_cancel=can_customer_cancel(status),
        terminal=is_terminal(status),
        next_statuses=[str(s) for s in next_statuses(status)],
        delivery_style=str(order.effective_style),
        handoff_instruction=delivery_style_instruction(order.delivery_style, order.delivery_mode),
        reveal_message=reveal_message(status),
    )
