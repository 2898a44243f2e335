"""Column-configured table model with per-type cell rendering.

Rows are plain mappings (or objects); each column reads its cell through an
``accessor`` when one is given, otherwise by key. Selection is controlled by
the parent: the table only reports the next selection via ``on_bulk_select``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar

from dash_core.config import DashboardConfig
from dash_core.errors import ConfigurationError
from dash_core.formatting import format_currency, format_date, humanize_label
from dash_core.models import BadgeStyle
from dash_core.pagination import Pagination

RowT = TypeVar("RowT")

COLUMN_TYPES = ("text", "currency", "badge", "date", "custom")
MISSING_TEXT = "N/A"


@dataclass
class ColumnDescriptor(Generic[RowT]):
    key: str
    label: str | None = None
    type: str = "text"
    width: int | None = None
    badge_config: Mapping[str, BadgeStyle] | None = None
    render: Callable[[Any, RowT], Any] | None = None
    accessor: Callable[[RowT], Any] | None = None
    align: str | None = None

    def __post_init__(self) -> None:
        if self.type not in COLUMN_TYPES:
            raise ConfigurationError(f"unknown column type for {self.key!r}: {self.type}")
        if self.type == "custom" and self.render is None:
            raise ConfigurationError(f"custom column {self.key!r} requires a render function")
        if not self.key and self.accessor is None and self.render is None:
            raise ConfigurationError("column requires a key, an accessor or a render function")
        if self.label is None:
            self.label = humanize_label(self.key)
        if self.badge_config is not None:
            self.badge_config = {str(k): _coerce_badge(v) for k, v in self.badge_config.items()}
        if self.align is None:
            self.align = "right" if self.type == "currency" else "left"


@dataclass
class CellContent:
    text: str
    style: str = ""


def _coerce_badge(value: Any) -> BadgeStyle:
    if isinstance(value, BadgeStyle):
        return value
    if isinstance(value, Mapping):
        return BadgeStyle(style=str(value.get("style", "")), label=str(value.get("label", "")))
    style, label = value
    return BadgeStyle(style=str(style), label=str(label))


def columns_from_config(items: Iterable[ColumnDescriptor | Mapping[str, Any]]) -> list[ColumnDescriptor]:
    columns: list[ColumnDescriptor] = []
    seen: set[str] = set()
    for item in items:
        column = item if isinstance(item, ColumnDescriptor) else ColumnDescriptor(**dict(item))
        if column.key and column.key in seen:
            raise ConfigurationError(f"duplicate column key: {column.key}")
        seen.add(column.key)
        columns.append(column)
    if not columns:
        raise ConfigurationError("table requires at least one column")
    return columns


def read_path(row: Any, key: str) -> Any:
    value = row
    for part in key.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def cell_value(column: ColumnDescriptor, row: Any) -> Any:
    if column.accessor is not None:
        return column.accessor(row)
    if not column.key:
        return None
    return read_path(row, column.key)


def badge_for(value: Any, badge_config: Mapping[str, BadgeStyle] | None) -> BadgeStyle:
    key = "" if value is None else str(value)
    if badge_config and key in badge_config:
        return badge_config[key]
    return BadgeStyle(style="default", label=key.upper() if key else MISSING_TEXT)


def render_cell(column: ColumnDescriptor, row: Any, config: DashboardConfig | None = None) -> CellContent:
    config = config or DashboardConfig()
    value = cell_value(column, row)

    if column.render is not None:
        rendered = column.render(value, row)
        if isinstance(rendered, CellContent):
            return rendered
        return CellContent("" if rendered is None else str(rendered))

    if column.type == "currency":
        return CellContent(
            format_currency(value, config.currency_symbol, config.currency_decimals),
            style="bold green",
        )

    if column.type == "badge":
        badge = badge_for(value, column.badge_config or config.badges.get(column.key))
        return CellContent(badge.label, style=badge.style)

    if column.type == "date":
        return CellContent(format_date(value, config.date_format) if value else MISSING_TEXT)

    if value is None:
        return CellContent(MISSING_TEXT, style="dim")
    return CellContent(str(value))


def default_row_id(row: Any) -> str:
    value = read_path(row, "id")
    return "" if value is None else str(value)


@dataclass
class DynamicTable(Generic[RowT]):
    columns: Sequence[ColumnDescriptor | Mapping[str, Any]]
    data: Sequence[RowT] = field(default_factory=list)
    loading: bool = False
    current_page: int = 1
    total_pages: int | None = None
    total_items: int | None = None
    items_per_page: int | None = None
    selected_items: Sequence[str] = ()
    selectable: bool = False
    title: str | None = None
    empty_message: str = "No data available"
    row_id: Callable[[RowT], str] = default_row_id
    on_page_change: Callable[[int], None] | None = None
    on_row_click: Callable[[RowT], None] | None = None
    on_bulk_select: Callable[[list[str]], None] | None = None
    config: DashboardConfig = field(default_factory=DashboardConfig)

    def __post_init__(self) -> None:
        self.columns = columns_from_config(self.columns)

    @property
    def is_empty(self) -> bool:
        return not self.loading and not self.data

    @property
    def row_ids(self) -> list[str]:
        return [self.row_id(row) for row in self.data]

    @property
    def is_all_selected(self) -> bool:
        return bool(self.data) and len(self.selected_items) == len(self.data)

    @property
    def is_partially_selected(self) -> bool:
        return 0 < len(self.selected_items) < len(self.data)

    def is_selected(self, row: RowT) -> bool:
        return self.row_id(row) in self.selected_items

    def toggle_row(self, row_id: str) -> list[str] | None:
        if self.on_bulk_select is None:
            return None
        if row_id in self.selected_items:
            selection = [item for item in self.selected_items if item != row_id]
        else:
            selection = [*self.selected_items, row_id]
        self.on_bulk_select(selection)
        return selection

    def toggle_all(self) -> list[str] | None:
        if self.on_bulk_select is None:
            return None
        selection = [] if self.is_all_selected else self.row_ids
        self.on_bulk_select(selection)
        return selection

    def click_row(self, row: RowT) -> None:
        if self.on_row_click is not None:
            self.on_row_click(row)

    def rows(self) -> list[list[CellContent]]:
        return [[render_cell(column, row, self.config) for column in self.columns] for row in self.data]

    def pagination(self) -> Pagination:
        return Pagination(
            current_page=self.current_page,
            on_page_change=self.on_page_change or (lambda _page: None),
            total_pages=self.total_pages,
            total_items=self.total_items,
            items_per_page=self.items_per_page,
            disabled=self.loading or self.on_page_change is None,
            show_items_info=True,
        )

    def change_page(self, page: int) -> bool:
        return self.pagination().go_to(page)
