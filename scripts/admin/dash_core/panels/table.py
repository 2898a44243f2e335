"""Dynamic table renderer."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dash_core.panels import border_for
from dash_core.panels.pagination import render as render_pagination
from dash_core.table import DynamicTable


def build_table(table: DynamicTable) -> Table:
    grid = Table(box=None, expand=True, show_edge=False)
    if table.selectable:
        marker = "[x]" if table.is_all_selected else "[-]" if table.is_partially_selected else "[ ]"
        grid.add_column(marker, no_wrap=True, width=3)
    for column in table.columns:
        grid.add_column(column.label, justify=column.align, width=column.width, overflow="fold")

    if table.loading:
        grid.add_row(*_placeholder(table, Text("Loading...", style="dim")))
        return grid

    if not table.data:
        grid.add_row(*_placeholder(table, Text(table.empty_message, style="dim")))
        return grid

    for row, cells in zip(table.data, table.rows()):
        rendered = [Text(cell.text, style=cell.style) for cell in cells]
        if table.selectable:
            rendered.insert(0, Text("[x]" if table.is_selected(row) else "[ ]"))
        grid.add_row(*rendered)
    return grid


def _placeholder(table: DynamicTable, message: Text) -> list[Text]:
    width = len(table.columns) + (1 if table.selectable else 0)
    return [message] + [Text("") for _ in range(width - 1)]


def render(table: DynamicTable) -> Panel:
    grid = build_table(table)
    footer = render_pagination(table.pagination())
    body = Group(grid, footer) if footer is not None else grid

    status = "loading" if table.loading else "warn" if table.is_empty else "ok"
    title = table.title or "Results"
    if table.total_items is not None:
        title = f"{title} ({table.total_items})"
    return Panel(body, title=f"[bold]{title}[/bold]", border_style=border_for(status))
