"""Command group: order creation, transitions, and views."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cashrun.commands._base import CashrunGroup
from cashrun.domain.types import DeliveryStyle

if TYPE_CHECKING:
    from cashrun.commands._context import AppContext

_CREATE_EXAMPLES = [
    "order create --customer cust-1 --address addr-1 --lat 25.76 --lng -80.19 --amount 200",
    "order create --customer cust-2 --address addr-9 --lat 40.71 --lng -74 --amount 500 "
    "--style COUNTED",
]
_ADVANCE_EXAMPLES = [
    'order advance <order-id> "Runner Accepted" --actor runner-7',
    "order advance <order-id> cash_withdrawn --actor runner-7 --action-id tap-0193",
    'order advance <order-id> canceled --actor cust-1 --reason "Changed my mind"',
]


@click.group(
    cls=CashrunGroup,
    examples=[
        *_CREATE_EXAMPLES[:1],
        *_ADVANCE_EXAMPLES[:1],
        "order show <order-id>",
        "--json order history <order-id>",
    ],
)
def order() -> None:
    """Create, advance, and inspect orders."""


@order.command(examples=_CREATE_EXAMPLES)
@click.option("--customer", "customer_id", required=True, help="Customer id.")
@click.option("--address", "address_id", required=True, help="Delivery address id.")
@click.option("--lat", type=click.FloatRange(-90, 90), required=True)
@click.option("--lng", type=click.FloatRange(-180, 180), required=True)
@click.option("--amount", type=click.FloatRange(min=0, min_open=True), required=True)
@click.option(
    "--style",
    type=click.Choice([s.value for s in DeliveryStyle]),
    default=DeliveryStyle.SPEED.value,
    show_default=True,
)
@click.pass_obj
def create(
    app: AppContext,
    customer_id: str,
    address_id: str,
    lat: float,
    lng: float,
    amount: float,
    style: str,
) -> None:
    """Create a Pending order and assign its ATM."""
    from cashrun.services.orders import OrderService

    app.emit(
        OrderService(app.store).create_order(
            customer_id,
            address_id,
            lat,
            lng,
            amount,
            delivery_style=DeliveryStyle(style),
        )
    )


@order.command(examples=_ADVANCE_EXAMPLES)
@click.argument("order_id")
@click.argument("next_status")
@click.option("--actor", "actor_id", required=True, help="Id of the user making the change.")
@click.option("--reason", default=None, help="Cancellation reason.")
@click.option("--action-id", default=None, help="Idempotency key for retries.")
@click.pass_obj
def advance(
    app: AppContext,
    order_id: str,
    next_status: str,
    actor_id: str,
    reason: str | None,
    action_id: str | None,
) -> None:
    """Move ORDER_ID to NEXT_STATUS (literal or snake_case name)."""
    from cashrun.services.orders import OrderService

    app.emit(
        OrderService(app.store).advance_order(
            order_id,
            next_status,
            actor_id=actor_id,
            reason=reason,
            client_action_id=action_id,
        )
    )


@order.command(examples=["order show <order-id>", "--json order show <order-id>"])
@click.argument("order_id")
@click.pass_obj
def show(app: AppContext, order_id: str) -> None:
    """Show an order with every derived view."""
    from cashrun.services.orders import OrderService

    app.emit(OrderService(app.store).get_order(order_id))


@order.command(examples=["order history <order-id>", "--json order history <order-id>"])
@click.argument("order_id")
@click.pass_obj
def history(app: AppContext, order_id: str) -> None:
    """Show the transition audit trail of an order."""
    from cashrun.services.orders import OrderService

    app.emit(OrderService(app.store).order_history(order_id))


@order.command("list", examples=["order list --status pending", "--json order list --limit 5"])
@click.option("--status", "status_filter", default=None, help="Filter by status.")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True)
@click.pass_obj
def list_cmd(app: AppContext, status_filter: str | None, limit: int) -> None:
    """List recent orders."""
    from cashrun.services.orders import OrderService

    app.emit(OrderService(app.store).list_orders(status=status_filter, limit=limit))
