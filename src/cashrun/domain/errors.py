"""Error taxonomy for order transitions and ATM assignment.

Each error carries a stable ``code`` so the CLI and any other adapter can
turn it into a :class:`~cashrun.services.result.ServiceError` payload.
"""

from __future__ import annotations

from typing import Any


class CashrunError(Exception):
    """Base class for all cashrun errors."""

    code = "CASHRUN_ERROR"
    retryable = False

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidTransitionError(CashrunError):
    """The requested edge is not in the transition graph. Caller bug; do not retry."""

    code = "INVALID_TRANSITION"

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Illegal transition: {current} -> {target}",
            current=current,
            target=target,
        )


class RemoteRejectionError(CashrunError):
    """The authoritative store refused the transition (stale or concurrent state).

    Refresh the order and decide whether to retry.
    """

    code = "REMOTE_REJECTED"


class NetworkError(CashrunError):
    """Transport failure talking to the authoritative store."""

    code = "NETWORK_ERROR"
    retryable = True


class NoAvailableAtmError(CashrunError):
    """No active ATM could be found for an assignment."""

    code = "NO_AVAILABLE_ATM"


class OrderNotFoundError(CashrunError):
    code = "NOT_FOUND"
