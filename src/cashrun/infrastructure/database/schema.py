"""SQLAlchemy Core table definitions for the cashrun store.

Timestamps are ISO 8601 text. Order statuses are stored as their display
literals (``"Runner at ATM"``).
"""

from __future__ import annotations

from sqlalchemy import (
    REAL,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

atm_locations = Table(
    "atm_locations",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("address", Text, default="", server_default=""),
    Column("lat", REAL, nullable=False),
    Column("lng", REAL, nullable=False),
    Column("status", Text, nullable=False, default="active", server_default="active"),
)

address_atm_preferences = Table(
    "address_atm_preferences",
    metadata,
    Column("customer_address_id", Text, nullable=False),
    Column("atm_id", Text, ForeignKey("atm_locations.id"), nullable=False),
    Column("times_used", Integer, nullable=False, default=1, server_default="1"),
    Column("last_used_at", Text, nullable=False),
    UniqueConstraint("customer_address_id", "atm_id"),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Text, primary_key=True),
    Column("status", Text, nullable=False),
    Column("customer_id", Text, nullable=False),
    Column("runner_id", Text),
    Column("customer_address_id", Text),
    Column("requested_amount", REAL, nullable=False, default=0.0, server_default="0.0"),
    Column("delivery_style", Text),
    Column("delivery_mode", Text),  # legacy, read-only fallback for delivery_style
    Column("atm_id", Text, ForeignKey("atm_locations.id")),
    Column("created_at", Text, nullable=False),
    Column("runner_accepted_at", Text),
    Column("runner_at_atm_at", Text),
    Column("cash_withdrawn_at", Text),
    Column("handoff_completed_at", Text),
    Column("cancelled_at", Text),
    Column("cancellation_reason", Text),
    Column("cancelled_by", Text),
)

# Allowlist mirrored from the domain transition graph at init time.
order_status_transitions = Table(
    "order_status_transitions",
    metadata,
    Column("from_status", Text, primary_key=True),
    Column("to_status", Text, primary_key=True),
    Column("description", Text),
)

order_events = Table(
    "order_events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Text, ForeignKey("orders.id"), nullable=False),
    Column("from_status", Text),
    Column("to_status", Text, nullable=False),
    Column("actor_id", Text),
    Column("client_action_id", Text),  # idempotency key
    Column("metadata", Text),  # JSON object
    Column("created_at", Text, nullable=False),
    UniqueConstraint("order_id", "client_action_id"),
)

Index("ix_atm_locations_status", atm_locations.c.status)
Index("ix_preferences_address", address_atm_preferences.c.customer_address_id)
Index("ix_orders_status", orders.c.status)
Index("ix_order_events_order", order_events.c.order_id, order_events.c.created_at)
