"""Subcommand modules for cashrun.

Provides register_commands() which uses deferred imports to keep
``cashrun --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from cashrun.commands.atm import atm
    from cashrun.commands.order import order
    from cashrun.commands.status import status

    cli.add_command(status)
    cli.add_command(atm)
    cli.add_command(order)

    # --- Standalone commands ---
    from cashrun.commands.init_cmd import init_cmd
    from cashrun.commands.route import route

    cli.add_command(init_cmd)
    cli.add_command(route)
