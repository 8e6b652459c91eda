"""Standalone command: create the cashrun store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cashrun.commands._base import CashrunCommand
from cashrun.services.result import ServiceResult

if TYPE_CHECKING:
    from cashrun.commands._context import AppContext


@click.command(
    "init",
    cls=CashrunCommand,
    examples=["init", "--json init", "--config ops/cashrun.toml init"],
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the store and seed the transition allowlist."""
    db_path = app.store.initialize()
    app.emit(ServiceResult(ok=True, op="init", data={"db_path": str(db_path)}))
