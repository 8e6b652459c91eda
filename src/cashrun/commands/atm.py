"""Command group: ATM locations and assignment."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cashrun.commands._base import CashrunGroup

if TYPE_CHECKING:
    from cashrun.commands._context import AppContext

_ASSIGN_EXAMPLES = [
    "atm assign addr-1 --lat 25.7617 --lng -80.1918",
    "--json atm assign addr-1 --lat 25.7617 --lng -80.1918",
]


@click.group(cls=CashrunGroup, examples=["atm import atms.json", *_ASSIGN_EXAMPLES])
def atm() -> None:
    """Manage ATM locations and assignments."""


@atm.command("import", examples=["atm import atms.json", "-v atm import exports/miami.json"])
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_cmd(app: AppContext, path: Path) -> None:
    """Load ATM locations from a JSON array."""
    from cashrun.services.atm import AtmService

    app.emit(AtmService(app.store).import_atms(path))


@atm.command(examples=_ASSIGN_EXAMPLES)
@click.argument("address_id")
@click.option("--lat", type=click.FloatRange(-90, 90), required=True)
@click.option("--lng", type=click.FloatRange(-180, 180), required=True)
@click.pass_obj
def assign(app: AppContext, address_id: str, lat: float, lng: float) -> None:
    """Pick the ATM for ADDRESS_ID at the given coordinates."""
    from cashrun.services.atm import AtmService

    app.emit(AtmService(app.store).assign(address_id, lat, lng))
