"""Store: the single infrastructure dependency injected into services.

Owns the database engine and hands out repositories and the transition
endpoint bound to it. The engine is created on first use so commands
that never touch the database stay cheap.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cashrun.infrastructure.database.engine import init_database
from cashrun.infrastructure.endpoint import SqlTransitionEndpoint
from cashrun.infrastructure.repositories.atm import AtmRepository
from cashrun.infrastructure.repositories.orders import OrderRepository

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from cashrun.config.settings import CashrunSettings

logger = logging.getLogger(__name__)


class Store:
    """Lazily-initialized access to the relational store."""

    def __init__(self, settings: CashrunSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None

    @property
    def db_path(self) -> Path:
        return self.settings.db_path

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            logger.debug("Opening store at %s", self.db_path)
            self._engine = init_database(self.db_path, echo=self.settings.store.echo)
        return self._engine

    @property
    def atms(self) -> AtmRepository:
        return AtmRepository(self.engine)

    @property
    def orders(self) -> OrderRepository:
        return OrderRepository(self.engine)

    @property
    def endpoint(self) -> SqlTransitionEndpoint:
        return SqlTransitionEndpoint(self.engine)

    def initialize(self) -> Path:
        """Create the database if needed and return its path."""
        _ = self.engine
        return self.db_path

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
