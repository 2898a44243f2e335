"""Details drawer renderer."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from dash_core.drawer import DetailsDrawer
from dash_core.layout import drawer_width
from dash_core.panels import kv_table

ACTION_STYLE = {
    "primary": "bold white on blue",
    "secondary": "bold white on grey37",
    "danger": "bold white on red",
}


def _tab_bar(drawer: DetailsDrawer) -> Text:
    bar = Text()
    for tab in drawer.tabs:
        style = "bold reverse" if tab.key == drawer.active_tab else "dim"
        bar.append(f" {tab.label} ", style=style)
        bar.append(" ")
    return bar


def render(drawer: DetailsDrawer, console_width: int = 120) -> Panel | None:
    if not drawer.is_open:
        return None

    parts: list = []
    if drawer.subtitle:
        parts.append(Text(drawer.subtitle, style="dim"))
    parts.append(_tab_bar(drawer))

    if drawer.loading:
        parts.append(Text("Loading...", style="dim"))
    else:
        for section in drawer.current_tab.sections:
            parts.append(Text(section.title, style="bold underline"))
            parts.append(kv_table([(f.label, f.display()) for f in section.fields]))

    if drawer.actions:
        bar = Text()
        for action in drawer.actions:
            style = "dim" if action.disabled else ACTION_STYLE[action.variant]
            bar.append(f" {action.label} ", style=style)
            bar.append(" ")
        parts.append(bar)

    return Panel(
        Group(*parts),
        title=f"[bold]{drawer.title}[/bold]",
        border_style="cyan",
        width=drawer_width(console_width),
    )
