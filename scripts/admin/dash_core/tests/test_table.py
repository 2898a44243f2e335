from __future__ import annotations

import unittest
from dataclasses import dataclass
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from dash_core.config import DashboardConfig  # noqa: E402
from dash_core.errors import ConfigurationError  # noqa: E402
from dash_core.models import BadgeStyle  # noqa: E402
from dash_core.table import CellContent, ColumnDescriptor, DynamicTable, render_cell  # noqa: E402

ROWS = [
    {"id": 1, "title": "Rent", "amount": "1200.5", "status": "paid", "paidOn": "2024-03-01T10:00:00Z"},
    {"id": 2, "title": "Laptops", "amount": 4300, "status": "on_hold", "paidOn": None},
]


class CellRenderingTests(unittest.TestCase):
    def test_text(self):
        self.assertEqual(render_cell(ColumnDescriptor("title"), ROWS[0]).text, "Rent")
        self.assertEqual(render_cell(ColumnDescriptor("missing"), ROWS[0]).text, "N/A")

    def test_currency(self):
        config = DashboardConfig(currency_symbol="€")
        cell = render_cell(ColumnDescriptor("amount", type="currency"), ROWS[0], config)
        self.assertEqual(cell.text, "€1,200.50")

    def test_badge_uses_injected_config(self):
        cell = render_cell(ColumnDescriptor("status", type="badge"), ROWS[0])
        self.assertEqual((cell.text, cell.style), ("Paid", "green"))

    def test_badge_column_config_wins(self):
        column = ColumnDescriptor("status", type="badge", badge_config={"paid": {"style": "blue", "label": "Settled"}})
        self.assertEqual(render_cell(column, ROWS[0]).text, "Settled")

    def test_badge_falls_back_to_uppercase(self):
        self.assertEqual(render_cell(ColumnDescriptor("status", type="badge"), ROWS[1]).text, "ON_HOLD")
        self.assertEqual(render_cell(ColumnDescriptor("status", type="badge"), {"status": None}).text, "N/A")

    def test_badge_config_is_not_hard_coded(self):
        config = DashboardConfig(badges={"status": {"on_hold": BadgeStyle("magenta", "On Hold")}})
        cell = render_cell(ColumnDescriptor("status", type="badge"), ROWS[1], config)
        self.assertEqual((cell.text, cell.style), ("On Hold", "magenta"))

    def test_date(self):
        column = ColumnDescriptor("paidOn", type="date")
        self.assertEqual(render_cell(column, ROWS[0]).text, "2024-03-01")
        self.assertEqual(render_cell(column, ROWS[1]).text, "N/A")

    def test_custom_gets_value_and_row(self):
        column = ColumnDescriptor("amount", type="custom", render=lambda value, row: f"{row['title']}:{value}")
        self.assertEqual(render_cell(column, ROWS[1]).text, "Laptops:4300")

    def test_accessor_on_typed_rows(self):
        @dataclass
        class Employee:
            first: str
            last: str

        column = ColumnDescriptor("name", accessor=lambda row: f"{row.first} {row.last}")
        self.assertEqual(render_cell(column, Employee("Ada", "Lovelace")).text, "Ada Lovelace")

    def test_nested_key(self):
        column = ColumnDescriptor("department.name")
        self.assertEqual(render_cell(column, {"department": {"name": "Sales"}}).text, "Sales")
        self.assertEqual(column.label, "Department Name")

    def test_custom_render_may_return_cell(self):
        column = ColumnDescriptor("x", type="custom", render=lambda value, row: CellContent("!", "red"))
        self.assertEqual(render_cell(column, {}).style, "red")


class ColumnConfigurationTests(unittest.TestCase):
    def test_custom_requires_render(self):
        with self.assertRaises(ConfigurationError):
            ColumnDescriptor("amount", type="custom")

    def test_unknown_type(self):
        with self.assertRaises(ConfigurationError):
            ColumnDescriptor("amount", type="sparkline")

    def test_empty_key_needs_accessor(self):
        with self.assertRaises(ConfigurationError):
            ColumnDescriptor("")

    def test_duplicate_keys(self):
        with self.assertRaises(ConfigurationError):
            DynamicTable(columns=[{"key": "id"}, {"key": "id"}])

    def test_currency_aligns_right(self):
        self.assertEqual(ColumnDescriptor("amount", type="currency").align, "right")


class SelectionTests(unittest.TestCase):
    def make(self, selected):
        self.reported = []
        return DynamicTable(
            columns=[{"key": "title"}],
            data=ROWS,
            selected_items=selected,
            selectable=True,
            on_bulk_select=self.reported.append,
        )

    def test_toggle_row_reports_without_mutating(self):
        selected = ["1"]
        table = self.make(selected)
        table.toggle_row("2")
        table.toggle_row("1")
        self.assertEqual(self.reported, [["1", "2"], []])
        self.assertEqual(selected, ["1"])

    def test_toggle_all(self):
        self.make([]).toggle_all()
        self.make(["1", "2"]).toggle_all()
        self.assertEqual(self.reported, [[]])

    def test_toggle_all_selects_every_row(self):
        table = self.make(["1"])
        self.assertTrue(table.is_partially_selected)
        table.toggle_all()
        self.assertEqual(self.reported, [["1", "2"]])

    def test_no_callback_is_noop(self):
        table = DynamicTable(columns=[{"key": "title"}], data=ROWS)
        self.assertIsNone(table.toggle_row("1"))


class DispatchTests(unittest.TestCase):
    def test_row_click(self):
        clicked = []
        table = DynamicTable(columns=[{"key": "title"}], data=ROWS, on_row_click=clicked.append)
        table.click_row(ROWS[1])
        self.assertEqual(clicked, [ROWS[1]])

    def test_page_change_follows_pagination_rules(self):
        pages = []
        table = DynamicTable(
            columns=[{"key": "title"}],
            data=ROWS,
            current_page=1,
            total_pages=3,
            on_page_change=pages.append,
        )
        self.assertTrue(table.change_page(2))
        self.assertFalse(table.change_page(9))
        self.assertEqual(pages, [2])

    def test_loading_disables_paging(self):
        pages = []
        table = DynamicTable(
            columns=[{"key": "title"}],
            loading=True,
            current_page=1,
            total_pages=3,
            on_page_change=pages.append,
        )
        self.assertFalse(table.change_page(2))
        self.assertFalse(table.is_empty)


if __name__ == "__main__":
    unittest.main()
