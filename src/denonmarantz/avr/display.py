"""Human-friendly state display using rich tables.

Requires the optional ``cli`` dependency group: ``pip install denonmarantz-avr[cli]``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from . import INPUTS_BY_ID, Zone

if TYPE_CHECKING:
    from .state import State

NONE = "-"


def _fmt(value: object) -> str:
    """Format a single value for display."""
    if value is None:
        return NONE
    if isinstance(value, bool):
        return "On" if value else "Off"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _source(value: str | None) -> str | None:
    if value is None:
        return None
    item = INPUTS_BY_ID.get(value)
    return f"{item.text} ({value})" if item else value


def build_table(state: State, zones: list[Zone] | None = None) -> Table:
    """Build a table with one column per zone."""
    if zones is None:
        zones = [zone for zone in Zone if zone is not Zone.ZONE4]

    table = Table(
        title=f"[bold]Receiver[/bold]  max volume {_fmt(state.max_volume)}",
        padding=(0, 2),
        expand=False,
    )
    table.add_column("Property", style="white", min_width=12)
    for zone in zones:
        table.add_column(zone.value.title(), style="bright_white")

    rows = [
        ("Power", state.get_power),
        ("Volume", state.get_volume),
        ("Mute", state.get_mute),
        ("Source", lambda zone: _source(state.get_source(zone))),
    ]
    for label, getter in rows:
        table.add_row(label, *(_fmt(getter(zone)) for zone in zones))
    return table


def print_state(state: State, zones: list[Zone] | None = None) -> None:
    """Print *state* as a rich table."""
    console = Console()
    console.print()
    console.print(build_table(state, zones))
    console.print()
