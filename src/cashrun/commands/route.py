"""Standalone command: resolve the landing route for a user."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cashrun.commands._base import CashrunCommand
from cashrun.domain.types import UserRole

if TYPE_CHECKING:
    from cashrun.commands._context import AppContext


@click.command(
    cls=CashrunCommand,
    examples=[
        "route --role runner --path /",
        "route --role customer --path /customer/home --incomplete",
        "--json route --anonymous --path /runner/work",
    ],
)
@click.option("--role", type=click.Choice([r.value for r in UserRole]), default=None)
@click.option("--path", "current_path", default="/", show_default=True, help="Current path.")
@click.option("--incomplete", is_flag=True, help="Profile is missing required fields.")
@click.option("--anonymous", is_flag=True, help="User is not signed in.")
@click.pass_obj
def route(
    app: AppContext,
    role: str | None,
    current_path: str,
    incomplete: bool,
    anonymous: bool,
) -> None:
    """Show where a user on PATH would be redirected."""
    from cashrun.services.projection import ProjectionService

    app.emit(
        ProjectionService().route(
            role,
            current_path,
            profile_complete=not incomplete,
            authenticated=not anonymous,
        )
    )
