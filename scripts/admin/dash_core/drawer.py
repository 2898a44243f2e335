"""Tabbed detail drawer opened from a table row."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from dash_core.errors import ConfigurationError
from dash_core.formatting import humanize_label
from dash_core.table import read_path

logger = logging.getLogger(__name__)

ACTION_VARIANTS = ("primary", "secondary", "danger")


@dataclass
class DrawerField:
    label: str
    value: Any
    render: Callable[[Any], str] | None = None

    def display(self) -> str:
        if self.render is not None:
            return self.render(self.value)
        if self.value is None or self.value == "":
            return "-"
        if isinstance(self.value, (list, tuple)):
            return ", ".join(str(item) for item in self.value) or "-"
        return str(self.value)


@dataclass
class DrawerSection:
    title: str
    fields: list[DrawerField] = field(default_factory=list)


@dataclass
class DrawerTab:
    key: str
    label: str
    sections: list[DrawerSection] = field(default_factory=list)


@dataclass
class DrawerAction:
    label: str
    handler: Callable[[], None]
    variant: str = "secondary"
    disabled: bool = False

    def __post_init__(self) -> None:
        if self.variant not in ACTION_VARIANTS:
            raise ConfigurationError(f"unknown action variant: {self.variant}")


class DetailsDrawer:
    def __init__(
        self,
        title: str,
        tabs: Sequence[DrawerTab],
        subtitle: str | None = None,
        actions: Sequence[DrawerAction] = (),
        loading: bool = False,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        if not tabs:
            raise ConfigurationError("drawer requires at least one tab")
        keys = [tab.key for tab in tabs]
        if len(set(keys)) != len(keys):
            raise ConfigurationError(f"duplicate drawer tab keys: {keys}")
        self.title = title
        self.subtitle = subtitle
        self.tabs = list(tabs)
        self.actions = list(actions)
        self.loading = loading
        self._on_close = on_close
        self.is_open = False
        self.active_tab = self.tabs[0].key

    def open(self, tab: str | None = None) -> None:
        self.is_open = True
        if tab is not None:
            self.select_tab(tab)

    def close(self) -> None:
        if not self.is_open:
            return
        self.is_open = False
        if self._on_close is not None:
            self._on_close()

    def select_tab(self, key: str) -> DrawerTab:
        for tab in self.tabs:
            if tab.key == key:
                self.active_tab = key
                return tab
        raise KeyError(f"unknown drawer tab: {key}")

    @property
    def current_tab(self) -> DrawerTab:
        return next(tab for tab in self.tabs if tab.key == self.active_tab)

    def run_action(self, label: str) -> bool:
        for action in self.actions:
            if action.label != label:
                continue
            if action.disabled or self.loading:
                logger.debug("drawer action %s ignored while disabled", label)
                return False
            action.handler()
            return True
        raise KeyError(f"unknown drawer action: {label}")


def drawer_from_record(
    record: Mapping[str, Any],
    layout: Mapping[str, Mapping[str, Sequence[str]]],
    title_key: str = "id",
    subtitle: str | None = None,
    renderers: Mapping[str, Callable[[Any], str]] | None = None,
    actions: Sequence[DrawerAction] = (),
    on_close: Callable[[], None] | None = None,
) -> DetailsDrawer:
    renderers = renderers or {}
    tabs: list[DrawerTab] = []
    for tab_label, sections in layout.items():
        tab = DrawerTab(key=tab_label.lower().replace(" ", "_"), label=tab_label)
        for section_title, keys in sections.items():
            tab.sections.append(
                DrawerSection(
                    title=section_title,
                    fields=[
                        DrawerField(humanize_label(key.split(".")[0]), read_path(record, key), renderers.get(key))
                        for key in keys
                    ],
                )
            )
        tabs.append(tab)

    title_value = read_path(record, title_key)
    title = str(title_value) if title_value not in (None, "") else f"#{record.get('id', '?')}"
    return DetailsDrawer(title=title, tabs=tabs, subtitle=subtitle, actions=actions, on_close=on_close)
