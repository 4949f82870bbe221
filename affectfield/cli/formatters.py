"""CLI formatters: consoles, tables, meters."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text


def get_console(no_color: bool = False) -> Console:
    """Get a Rich Console, optionally with color disabled."""
    return Console(no_color=no_color)


def build_table(title: str, columns: list[str], rows: list[list[Any]]) -> Table:
    """Build a Rich table with standard styling."""
    table = Table(title=title, show_header=True, header_style="bold")
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*(v if isinstance(v, Text) else str(v) for v in row))
    return table


def swatch(color: str) -> Text:
    """A small colored block for a hex display color."""
    return Text("██ ", style=color) + Text(color, style="dim")


def meter(value: float, maximum: float = 10.0, width: int = 20) -> str:
    """Render ``value`` as a fixed-width bar."""
    if maximum <= 0:
        return "-" * width
    filled = int(round(max(0.0, min(1.0, value / maximum)) * width))
    return "#" * filled + "-" * (width - filled)


def format_number(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)
