"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich key/value output and
tables) or machines (--json).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from cashrun.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from cashrun.services.result import ServiceResult


def _render_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _render_rows(console: Console, rows: list[dict[str, Any]]) -> None:
    columns = list(rows[0].keys())
    table = Table(*columns, show_edge=False, header_style="cr.key")
    for row in rows:
        cells = []
        for col in columns:
            text = escape(_render_value(row.get(col, "")))
            if col in ("status", "to_status", "from_status"):
                text = f"[{style_for_status(text)}]{text}[/]"
            cells.append(text)
        table.add_row(*cells)
    console.print(table)


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: Return JSON instead of human-readable text.
        quiet: Human mode only; print just the status line.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        code = f" [{result.error.code}]" if result.error else ""
        console.print(
            f"[cr.error]ERROR[/]: [cr.op]{result.op}[/]{escape(code)} - {escape(message)}"
        )
        return get_output(console).rstrip("\n")

    console.print(f"[cr.ok]OK[/]: [cr.op]{result.op}[/]")
    if not quiet:
        for key, value in result.data.items():
            if isinstance(value, list) and value and all(isinstance(v, dict) for v in value):
                console.print(f"  [cr.key]{key}[/]:")
                _render_rows(console, value)
            else:
                console.print(f"  [cr.key]{key}[/]: {escape(_render_value(value))}")
    return get_output(console).rstrip("\n")
