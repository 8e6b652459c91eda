"""Order status registry and transition graph.

Seven literal statuses. The happy path is strictly linear::

    Pending -> Runner Accepted -> Runner at ATM -> Cash Withdrawn
            -> Pending Handoff -> Completed

Any non-terminal status may move to ``Cancelled``. ``Completed`` and
``Cancelled`` are terminal: no outgoing edges, not even a self-loop.

The database stores the display literals (``"Runner at ATM"``); code
that prefers identifiers can use the snake-case aliases
(``"runner_at_atm"``) through :func:`parse_status`.
"""

from __future__ import annotations

from enum import StrEnum


class OrderStatus(StrEnum):
    """Lifecycle status of an order, valued by its stored literal."""

    PENDING = "Pending"
    RUNNER_ACCEPTED = "Runner Accepted"
    RUNNER_AT_ATM = "Runner at ATM"
    CASH_WITHDRAWN = "Cash Withdrawn"
    PENDING_HANDOFF = "Pending Handoff"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def alias(self) -> str:
        """Snake-case identifier for this status."""
        return _ALIASES[self]


_ALIASES: dict[OrderStatus, str] = {
    OrderStatus.PENDING: "pending",
    OrderStatus.RUNNER_ACCEPTED: "runner_accepted",
    OrderStatus.RUNNER_AT_ATM: "runner_at_atm",
    OrderStatus.CASH_WITHDRAWN: "cash_withdrawn",
    OrderStatus.PENDING_HANDOFF: "pending_handoff",
    OrderStatus.COMPLETED: "completed",
    OrderStatus.CANCELLED: "canceled",
}

_BY_ALIAS: dict[str, OrderStatus] = {alias: status for status, alias in _ALIASES.items()}

# --- Transition graph ---

HAPPY_PATH: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.RUNNER_ACCEPTED,
    OrderStatus.RUNNER_AT_ATM,
    OrderStatus.CASH_WITHDRAWN,
    OrderStatus.PENDING_HANDOFF,
    OrderStatus.COMPLETED,
)

TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.COMPLETED, OrderStatus.CANCELLED}
)

ORDER_TRANSITIONS: dict[str, list[str]] = {
    "Pending": ["Runner Accepted", "Cancelled"],
    "Runner Accepted": ["Runner at ATM", "Cancelled"],
    "Runner at ATM": ["Cash Withdrawn", "Cancelled"],
    "Cash Withdrawn": ["Pending Handoff", "Cancelled"],
    "Pending Handoff": ["Completed", "Cancelled"],
    "Completed": [],
    "Cancelled": [],
}

TRANSITION_DESCRIPTIONS: dict[tuple[str, str], str] = {
    ("Pending", "Runner Accepted"): "Runner accepts the delivery job",
    ("Runner Accepted", "Runner at ATM"): "Runner arrives at the ATM",
    ("Runner at ATM", "Cash Withdrawn"): "Runner withdraws the cash",
    ("Cash Withdrawn", "Pending Handoff"): "Handoff code generated",
    ("Pending Handoff", "Completed"): "Handoff code verified, delivery completed",
}

# Timestamp column stamped when an order enters a status. Pending is
# covered by created_at; Pending Handoff has no dedicated stamp.
STATUS_TIMESTAMPS: dict[OrderStatus, str] = {
    OrderStatus.RUNNER_ACCEPTED: "runner_accepted_at",
    OrderStatus.RUNNER_AT_ATM: "runner_at_atm_at",
    OrderStatus.CASH_WITHDRAWN: "cash_withdrawn_at",
    OrderStatus.COMPLETED: "handoff_completed_at",
    OrderStatus.CANCELLED: "cancelled_at",
}


def parse_status(value: object) -> OrderStatus | None:
    """Resolve a stored literal or snake-case alias to an :class:`OrderStatus`.

    Returns None for anything unrecognized; never raises.
    """
    if isinstance(value, OrderStatus):
        return value
    if not isinstance(value, str):
        return None
    try:
        return OrderStatus(value)
    except ValueError:
        return _BY_ALIAS.get(value)


def can_transition(current: object, target: object) -> bool:
    """Check if moving from *current* to *target* is an edge of the graph.

    Both sides accept a stored literal or its snake-case alias. Total over
    arbitrary input: unknown values simply yield False.
    """
    src, dst = parse_status(current), parse_status(target)
    if src is None or dst is None:
        return False
    return dst in ORDER_TRANSITIONS.get(src, [])


def next_statuses(current: object) -> list[OrderStatus]:
    """Statuses reachable from *current* (literal or alias) in one step."""
    src = parse_status(current)
    if src is None:
        return []
    return [OrderStatus(s) for s in ORDER_TRANSITIONS.get(src, [])]


def is_terminal(status: object) -> bool:
    return parse_status(status) in TERMINAL_STATUSES


def is_active(status: object) -> bool:
    """True for known, non-terminal statuses."""
    parsed = parse_status(status)
    return parsed is not None and parsed not in TERMINAL_STATUSES


def all_edges() -> list[tuple[OrderStatus, OrderStatus]]:
    """Every (from, to) edge, happy path first within each source status."""
    return [
        (OrderStatus(src), OrderStatus(dst))
        for src, targets in ORDER_TRANSITIONS.items()
        for dst in targets
    ]


def describe_transition(current: str, target: str) -> str:
    if target == OrderStatus.CANCELLED:
        return f"Order cancelled while {current}"
    return TRANSITION_DESCRIPTIONS.get((current, target), "")
