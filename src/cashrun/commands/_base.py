"""Click base classes adding an eager ``--examples`` flag.

Examples are given as argument lines without the program name; they are
printed as ``cashrun <line>`` so every command lists them the same way.
``--examples`` is eager, so it works even when required arguments are
missing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

PROG = "cashrun"


def format_examples(lines: Sequence[str]) -> str:
    return "\n".join(f"  {PROG} {line}" for line in lines)


def _examples_option(lines: Sequence[str]) -> click.Option:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(lines))
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples and exit.",
    )


class CashrunCommand(click.Command):
    """Command accepting ``examples=[...]``."""

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(_examples_option(self.examples))


class CashrunGroup(click.Group):
    """Group accepting ``examples=[...]``; its subcommands default to CashrunCommand."""

    command_class = CashrunCommand

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(_examples_option(self.examples))
