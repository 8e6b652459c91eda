"""Command group: order status graph and projections."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cashrun.commands._base import CashrunGroup
from cashrun.domain.types import DeliveryStyle

if TYPE_CHECKING:
    from cashrun.commands._context import AppContext

_PROJECT_EXAMPLES = [
    'status project "Cash Withdrawn"',
    "--json status project runner_at_atm --style COUNTED",
]


@click.group(cls=CashrunGroup, examples=["status graph", *_PROJECT_EXAMPLES])
def status() -> None:
    """Inspect the order status graph and derived views."""


@status.command(examples=["status graph", "--json status graph"])
@click.pass_obj
def graph(app: AppContext) -> None:
    """List every legal status transition."""
    from cashrun.services.projection import ProjectionService

    app.emit(ProjectionService().transition_graph())


@status.command(examples=_PROJECT_EXAMPLES)
@click.argument("order_status")
@click.option(
    "--style",
    type=click.Choice([s.value for s in DeliveryStyle]),
    default=None,
    help="Delivery style for handoff copy.",
)
@click.pass_obj
def project(app: AppContext, order_status: str, style: str | None) -> None:
    """Show progress, gates, and copy for ORDER_STATUS."""
    from cashrun.services.projection import ProjectionService

    app.emit(ProjectionService().project(order_status, delivery_style=style))
