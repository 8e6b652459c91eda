"""Customer-facing projections of the order status.

Every function here is pure and total: the same input always yields the
same output, and unrecognized input degrades to the safest value (zero
progress, closed gates, the ``CANCELED`` step) instead of raising, so
display layers stay renderable on malformed rows.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from cashrun.domain.lifecycle import OrderStatus, parse_status


class CustomerFacingStep(StrEnum):
    """Public step vocabulary shown to customers."""

    REQUESTED = "REQUESTED"
    ASSIGNED = "ASSIGNED"
    PREPARING = "PREPARING"
    ON_THE_WAY = "ON_THE_WAY"
    ARRIVED = "ARRIVED"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class CustomerFacingStatus(BaseModel):
    """Label, step and description rendered on the tracking screen."""

    model_config = {"frozen": True}

    label: str
    step: CustomerFacingStep
    description: str


_STEPS: dict[OrderStatus, CustomerFacingStep] = {
    OrderStatus.PENDING: CustomerFacingStep.REQUESTED,
    OrderStatus.RUNNER_ACCEPTED: CustomerFacingStep.ASSIGNED,
    OrderStatus.RUNNER_AT_ATM: CustomerFacingStep.PREPARING,
    OrderStatus.CASH_WITHDRAWN: CustomerFacingStep.ON_THE_WAY,
    OrderStatus.PENDING_HANDOFF: CustomerFacingStep.ARRIVED,
    OrderStatus.COMPLETED: CustomerFacingStep.COMPLETED,
    OrderStatus.CANCELLED: CustomerFacingStep.CANCELED,
}

_PROGRESS: dict[CustomerFacingStep, int] = {
    CustomerFacingStep.REQUESTED: 1,
    CustomerFacingStep.ASSIGNED: 2,
    CustomerFacingStep.PREPARING: 3,
    CustomerFacingStep.ON_THE_WAY: 4,
    CustomerFacingStep.ARRIVED: 5,
    CustomerFacingStep.COMPLETED: 5,
    CustomerFacingStep.CANCELED: 0,
}

PROGRESS_MAX = 5

_CHAT_OPEN: frozenset[OrderStatus] = frozenset(
    {OrderStatus.CASH_WITHDRAWN, OrderStatus.PENDING_HANDOFF}
)

_IDENTITY_REVEALED: frozenset[OrderStatus] = frozenset(
    {OrderStatus.CASH_WITHDRAWN, OrderStatus.PENDING_HANDOFF, OrderStatus.COMPLETED}
)

_COPY: dict[CustomerFacingStep, tuple[str, str]] = {
    CustomerFacingStep.REQUESTED: ("Request received", "Request received. We're on it."),
    CustomerFacingStep.ASSIGNED: (
        "Runner assigned",
        "Your request has been assigned to a vetted runner.",
    ),
    CustomerFacingStep.PREPARING: ("Preparing your cash", "Your runner is preparing your cash."),
    CustomerFacingStep.ON_THE_WAY: (
        "On the way",
        "Your runner has your cash and is on the way.",
    ),
    CustomerFacingStep.ARRIVED: (
        "Arrived",
        "Your runner has arrived. Please meet to receive your cash.",
    ),
    CustomerFacingStep.COMPLETED: ("Completed", "All set. Thanks for trusting us."),
    CustomerFacingStep.CANCELED: ("Canceled", "This request has been canceled."),
}

CUSTOMER_TIMELINE: list[dict[str, str]] = [
    {"step": "REQUESTED", "label": "Request received", "description": "We're on it"},
    {"step": "ASSIGNED", "label": "Runner assigned", "description": "Vetted runner confirmed"},
    {"step": "PREPARING", "label": "Preparing cash", "description": "Securing your funds"},
    {"step": "ON_THE_WAY", "label": "On the way", "description": "En route to you"},
    {"step": "ARRIVED", "label": "Arrived", "description": "Ready for handoff"},
    {"step": "COMPLETED", "label": "Completed", "description": "Delivered safely"},
]

CHAT_CLOSED_MESSAGE = "This chat is closed for this delivery. For help, contact support."


def customer_step(status: object) -> CustomerFacingStep:
    """Collapse an internal status into the public step vocabulary."""
    parsed = parse_status(status)
    if parsed is None:
        return CustomerFacingStep.CANCELED
    return _STEPS[parsed]


def progress_fill(step: object) -> int:
    """Progress bar fill (0-5) for a customer-facing step."""
    if not isinstance(step, str):
        return 0
    try:
        return _PROGRESS[CustomerFacingStep(step)]
    except ValueError:
        return 0


def status_progress(status: object) -> int:
    return progress_fill(customer_step(status))


def chat_gate(status: object) -> bool:
    """Messaging is open from cash withdrawal until completion or cancellation."""
    return parse_status(status) in _CHAT_OPEN


def identity_reveal_gate(status: object) -> bool:
    """Whether the runner's photo and full name may be shown unblurred.

    Only once cash has been withdrawn; before that the customer sees a
    blurred avatar and the runner's initial.
    """
    return parse_status(status) in _IDENTITY_REVEALED


def customer_facing_status(status: object) -> CustomerFacingStatus:
    step = customer_step(status)
    label, description = _COPY[step]
    return CustomerFacingStatus(label=label, step=step, description=description)


def timeline_position(status: object) -> int | None:
    """Index of the status in :data:`CUSTOMER_TIMELINE`, or None if cancelled/unknown."""
    step = customer_step(status)
    for index, entry in enumerate(CUSTOMER_TIMELINE):
        if entry["step"] == step:
            return index
    return None


def chat_closed_message() -> str:
    return CHAT_CLOSED_MESSAGE


def project_status(status: object) -> dict[str, Any]:
    """All status-derived signals as a flat mapping."""
    step = customer_step(status)
    return {
        "status": str(status),
        "step": str(step),
        "progress": progress_fill(step),
        "chat_open": chat_gate(status),
        "identity_revealed": identity_reveal_gate(status),
    }
