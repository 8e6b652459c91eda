"""Progressive disclosure between customers and runners.

Runner safety: the customer sees no runner at all while the order is
pending, a first name and blurred avatar while the runner is on the way
to the ATM, and the full identity plus live location only once the cash
has been withdrawn.

Customer privacy: the runner sees the cash amount only once at the ATM,
and the precise address only once the cash is in hand.
"""

from __future__ import annotations

from cashrun.domain.lifecycle import OrderStatus, parse_status
from cashrun.domain.projections import identity_reveal_gate

_RUNNER_VISIBLE = frozenset(
    {
        OrderStatus.RUNNER_ACCEPTED,
        OrderStatus.RUNNER_AT_ATM,
        OrderStatus.CASH_WITHDRAWN,
        OrderStatus.PENDING_HANDOFF,
        OrderStatus.COMPLETED,
    }
)
_AVATAR_BLURRED = frozenset({OrderStatus.RUNNER_ACCEPTED, OrderStatus.RUNNER_AT_ATM})
_LIVE_LOCATION = frozenset({OrderStatus.CASH_WITHDRAWN, OrderStatus.PENDING_HANDOFF})
_CUSTOMER_CANCELLABLE = frozenset({OrderStatus.PENDING, OrderStatus.RUNNER_ACCEPTED})
_CASH_AMOUNT_VISIBLE = frozenset(
    {
        OrderStatus.RUNNER_AT_ATM,
        OrderStatus.CASH_WITHDRAWN,
        OrderStatus.PENDING_HANDOFF,
        OrderStatus.COMPLETED,
    }
)

SAFETY_MICROCOPY: dict[str, str] = {
    "before_cash_pickup": (
        "For everyone's safety, runner details and live tracking appear only "
        "once your cash is secured."
    ),
    "during_delivery": "Your runner's location is being tracked for your safety and theirs.",
    "after_delivery": "Delivery complete. Location tracking has ended.",
    "unassigned": "Runner information will appear once assigned.",
}


def runner_visible(status: object) -> bool:
    """Whether any runner information is shown (a runner has accepted)."""
    return parse_status(status) in _RUNNER_VISIBLE


def blur_runner_avatar(status: object) -> bool:
    return parse_status(status) in _AVATAR_BLURRED


def live_location_gate(status: object) -> bool:
    """Live runner tracking runs between cash withdrawal and handoff."""
    return parse_status(status) in _LIVE_LOCATION


def runner_display_name(first_name: str | None, last_name: str | None, status: object) -> str:
    """Initial-only before the reveal, full name after."""
    if not first_name:
        return "Runner"
    if identity_reveal_gate(status):
        return f"{first_name} {last_name}" if last_name else first_name
    return f"{first_name[0].upper()}."


def reveal_message(status: object) -> str:
    parsed = parse_status(status)
    if parsed is OrderStatus.COMPLETED:
        return SAFETY_MICROCOPY["after_delivery"]
    if live_location_gate(parsed):
        return SAFETY_MICROCOPY["during_delivery"]
    if runner_visible(parsed):
        return SAFETY_MICROCOPY["before_cash_pickup"]
    return SAFETY_MICROCOPY["unassigned"]


def can_customer_cancel(status: object) -> bool:
    """Customers may cancel until the runner reaches the ATM."""
    return parse_status(status) in _CUSTOMER_CANCELLABLE


def cash_amount_visible_to_runner(status: object) -> bool:
    return parse_status(status) in _CASH_AMOUNT_VISIBLE


def customer_address_display(status: object, full_address: str | None) -> str:
    """Broad area (``Near Miami, FL 33139``) until the cash is withdrawn."""
    if not full_address:
        return "Address not available"
    if identity_reveal_gate(status):
        return full_address
    parts = [part.strip() for part in full_address.split(",")]
    if len(parts) >= 2:
        return "Near " + ", ".join(parts[-2:])
    return "Address will be revealed after you withdraw the cash"
