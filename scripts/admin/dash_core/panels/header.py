"""Header renderer."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from dash_core.filters import FilterStateManager
from dash_core.formatting import truncate


def _filter_summary(filters: FilterStateManager) -> str:
    if not filters.has_active_filters:
        return "none"
    parts = []
    for key, value in filters.active_filters.items():
        shown = ",".join(str(v) for v in value) if isinstance(value, list) else str(value)
        parts.append(f"{key}={truncate(shown, 24)}")
    return f"{filters.active_count} ({' '.join(parts)})"


def render(nav_items: list[str], active: str, filters: FilterStateManager, layout_mode: str) -> Panel:
    nav = Text()
    for item in nav_items:
        nav.append(f" {item.title()} ", style="bold reverse" if item == active else "dim")
        nav.append(" ")
    nav.append("\n")
    nav.append("Filters: ")
    nav.append(_filter_summary(filters), style="bold")
    nav.append("   Layout: ")
    nav.append(layout_mode, style="bold")
    return Panel(nav, title="[bold]Admin Dashboard[/bold]", border_style="cyan")
