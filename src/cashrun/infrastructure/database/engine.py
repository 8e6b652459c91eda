"""Database engine setup for the SQLite-backed store.

The DB is stored at ``{data_root}/.cashrun/<db_name>``. SQLAlchemy Core
(not ORM) is used: every operation is a short request/response exchange
with no benefit from identity maps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine

from cashrun.domain.lifecycle import all_edges, describe_transition
from cashrun.infrastructure.database.schema import metadata, order_status_transitions


def create_db_engine(db_path: Path, *, echo: bool = False) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=echo)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path, *, echo: bool = False) -> Engine:
    """Create the database file, all tables, and the transition allowlist.

    Idempotent: safe to call on an existing store.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, echo=echo)
    metadata.create_all(engine)
    _seed_transitions(engine)
    return engine


def _seed_transitions(engine: Engine) -> None:
    """Insert any graph edge missing from ``order_status_transitions``."""
    with engine.begin() as conn:
        table = order_status_transitions
        existing = {
            (row.from_status, row.to_status)
            for row in conn.execute(select(table.c.from_status, table.c.to_status))
        }
        for src, dst in all_edges():
            if (str(src), str(dst)) in existing:
                continue
            conn.execute(
                insert(order_status_transitions).values(
                    from_status=str(src),
                    to_status=str(dst),
                    description=describe_transition(src, dst),
                )
            )
