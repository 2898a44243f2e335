"""Responsive layout mode selection by terminal width."""

from __future__ import annotations


def select_layout_mode(width: int) -> str:
    if width < 100:
        return "narrow"
    if width < 160:
        return "medium"
    return "wide"


def drawer_width(console_width: int) -> int | None:
    mode = select_layout_mode(console_width)
    if mode == "narrow":
        return None
    if mode == "medium":
        return max(60, console_width * 2 // 3)
    return max(80, console_width // 2)


def form_columns(console_width: int, requested: int) -> int:
    if select_layout_mode(console_width) == "narrow":
        return 1
    return max(1, requested)
