"""Generic filter state for list views.

A ``FilterStateManager`` owns one mapping of filter values whose key set is
fixed by the initial values. Every mutation recomputes the whole mapping and
notifies ``on_change`` synchronously with a copy of the new state; there is no
debouncing, callers that talk to a server wrap ``on_change`` themselves.

Activeness is relative to the initial value for scalars, while lists are
active whenever they are non-empty, regardless of their initial value.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from dash_core.models import FilterState, FilterValue

logger = logging.getLogger(__name__)


def is_empty_value(value: FilterValue) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return value is None or value == ""


def is_active_value(value: FilterValue, initial: FilterValue) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if is_empty_value(value):
        return False
    return not _same_value(value, initial)


def _same_value(value: FilterValue, initial: FilterValue) -> bool:
    # True == 1 in Python; a flag and a number are never the same filter value.
    if isinstance(value, bool) or isinstance(initial, bool):
        return type(value) is type(initial) and value == initial
    return value == initial


def _copy_state(state: Mapping[str, FilterValue]) -> FilterState:
    return {key: list(value) if isinstance(value, (list, tuple)) else value for key, value in state.items()}


class FilterStateManager:
    def __init__(
        self,
        initial_values: Mapping[str, FilterValue],
        on_change: Callable[[FilterState], None] | None = None,
    ) -> None:
        self._initial = _copy_state(initial_values)
        self._filters = _copy_state(initial_values)
        self._on_change = on_change
        self.show_advanced = False

    @property
    def initial_values(self) -> FilterState:
        return _copy_state(self._initial)

    @property
    def filters(self) -> FilterState:
        return _copy_state(self._filters)

    def get_filter(self, key: str) -> FilterValue:
        self._check_key(key)
        return self._filters[key]

    def update_filter(self, key: str, value: FilterValue) -> None:
        self.update_filters({key: value})

    def update_filters(self, updates: Mapping[str, FilterValue]) -> None:
        for key in updates:
            self._check_key(key)
        merged = dict(self._filters)
        merged.update(updates)
        self._filters = _copy_state(merged)
        self._notify()

    def reset_filters(self) -> None:
        self._filters = _copy_state(self._initial)
        self._notify()

    def clear_filter(self, key: str) -> None:
        self._check_key(key)
        self.update_filter(key, self._initial[key])

    def toggle_advanced(self) -> bool:
        self.show_advanced = not self.show_advanced
        return self.show_advanced

    def active_keys(self) -> list[str]:
        return [key for key, value in self._filters.items() if is_active_value(value, self._initial.get(key))]

    @property
    def has_active_filters(self) -> bool:
        return bool(self.active_keys())

    @property
    def active_count(self) -> int:
        return len(self.active_keys())

    @property
    def active_filters(self) -> FilterState:
        return {key: value for key, value in self.filters.items() if not is_empty_value(value)}

    def to_query_params(self) -> list[tuple[str, str]]:
        return query_params(self.active_filters)

    def _check_key(self, key: str) -> None:
        if key not in self._initial:
            raise KeyError(f"unknown filter key: {key}")

    def _notify(self) -> None:
        logger.debug("filters changed: %s", self._filters)
        if self._on_change is not None:
            self._on_change(self.filters)


def query_params(values: Mapping[str, Any]) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    for key, value in values.items():
        if isinstance(value, (list, tuple)):
            params.extend((key, _param_text(item)) for item in value)
        elif not is_empty_value(value):
            params.append((key, _param_text(value)))
    return params


def _param_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_filter_args(pairs: Iterable[str]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"invalid filter, expected key=value: {pair}")
        parsed[key.strip()] = value.strip()
    return parsed
