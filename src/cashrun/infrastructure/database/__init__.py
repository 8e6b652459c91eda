"""SQLite store engine and schema via SQLAlchemy Core."""

from cashrun.infrastructure.database.engine import create_db_engine, init_database
from cashrun.infrastructure.database.schema import (
    address_atm_preferences,
    atm_locations,
    metadata,
    order_events,
    order_status_transitions,
    orders,
)

__all__ = [
    "address_atm_preferences",
    "atm_locations",
    "create_db_engine",
    "init_database",
    "metadata",
    "order_events",
    "order_status_transitions",
    "orders",
]
