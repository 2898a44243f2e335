"""Pagination bar renderer."""

from __future__ import annotations

from rich.text import Text

from dash_core.pagination import ELLIPSIS, Pagination


def _nav(text: Text, label: str, enabled: bool) -> None:
    text.append(f"‹{label}›" if enabled else f" {label} ", style="bold cyan" if enabled else "dim")
    text.append(" ")


def render(pagination: Pagination) -> Text | None:
    if not pagination.is_visible:
        return None

    text = Text(justify="center")
    arrows = pagination.display_type in ("arrows", "both")
    numbers = pagination.display_type in ("numbers", "both")

    if arrows and pagination.show_first_last:
        _nav(text, pagination.first_text, not pagination.disabled and pagination.current_page != 1)
    if arrows and pagination.show_prev_next:
        _nav(text, pagination.prev_text, pagination.can_go_prev)

    if numbers:
        for item in pagination.pages():
            if item == ELLIPSIS:
                text.append("… ", style="dim")
            elif item == pagination.current_page:
                text.append(f"[{item}]", style="bold reverse")
                text.append(" ")
            else:
                text.append(str(item), style="dim" if pagination.disabled else "cyan")
                text.append(" ")

    if arrows and pagination.show_prev_next:
        _nav(text, pagination.next_text, pagination.can_go_next)
    if arrows and pagination.show_first_last:
        _nav(text, pagination.last_text, not pagination.disabled and pagination.current_page != pagination.page_count)

    if pagination.show_page_info:
        text.append(f"  {pagination.page_info_text}", style="dim")
    if pagination.show_items_info and pagination.items_info_text:
        text.append(f"  {pagination.items_info_text}", style="dim")

    text.rstrip()
    return text
