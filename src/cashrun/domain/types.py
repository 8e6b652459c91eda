"""Classification enums shared across the order domain."""

from __future__ import annotations

from enum import StrEnum


class DeliveryStyle(StrEnum):
    """How the runner hands the cash over."""

    COUNTED = "COUNTED"
    SPEED = "SPEED"


class DeliveryMode(StrEnum):
    """Legacy handoff vocabulary, superseded by :class:`DeliveryStyle`.

    Kept only to read orders written before ``delivery_style`` existed.
    Remove once the order backfill is confirmed complete.
    """

    COUNT_CONFIRM = "count_confirm"
    QUICK_HANDOFF = "quick_handoff"


class AtmStatus(StrEnum):
    """Availability of an ATM location."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class UserRole(StrEnum):
    """Account roles."""

    CUSTOMER = "customer"
    RUNNER = "runner"
    ADMIN = "admin"
