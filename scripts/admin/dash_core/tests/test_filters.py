from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from dash_core.filters import FilterStateManager, parse_filter_args, query_params  # noqa: E402


class FilterStateTests(unittest.TestCase):
    def setUp(self):
        self.calls = []
        self.initial = {"search": "", "status": "", "fromDate": ""}
        self.filters = FilterStateManager(self.initial, on_change=self.calls.append)

    def test_panel_scenario_counts_and_resets(self):
        self.filters.update_filter("status", "pending")
        self.filters.update_filter("search", "a")
        self.assertEqual(self.filters.active_count, 2)
        self.assertEqual(self.filters.active_filters, {"status": "pending", "search": "a"})

        self.filters.reset_filters()
        self.assertEqual(self.filters.active_count, 0)
        self.assertFalse(self.filters.has_active_filters)
        self.assertEqual(self.calls[-1], {"search": "", "status": "", "fromDate": ""})

    def test_each_update_notifies_with_full_state(self):
        self.filters.update_filter("status", "paid")
        self.assertEqual(len(self.calls), 1)
        self.assertEqual(self.calls[0], {"search": "", "status": "paid", "fromDate": ""})

    def test_batch_update_notifies_once(self):
        self.filters.update_filters({"status": "paid", "fromDate": "2024-01-01"})
        self.assertEqual(len(self.calls), 1)
        self.assertEqual(self.filters.active_count, 2)

    def test_reset_restores_every_key(self):
        self.filters.update_filters({"status": "paid", "search": "rent", "fromDate": "2024-01-01"})
        self.filters.reset_filters()
        for key, value in self.initial.items():
            self.assertEqual(self.filters.get_filter(key), value)

    def test_clear_filter_restores_initial_value(self):
        self.filters.update_filter("search", "rent")
        self.filters.clear_filter("search")
        self.assertEqual(self.filters.get_filter("search"), "")
        self.assertEqual(len(self.calls), 2)

    def test_unknown_key_is_rejected(self):
        with self.assertRaises(KeyError):
            self.filters.update_filter("owner", "me")
        with self.assertRaises(KeyError):
            self.filters.update_filters({"status": "paid", "owner": "me"})
        self.assertEqual(self.calls, [])

    def test_returned_state_is_a_copy(self):
        state = self.filters.filters
        state["status"] = "paid"
        self.assertEqual(self.filters.get_filter("status"), "")


class ActivenessTests(unittest.TestCase):
    def test_non_empty_initial_scalar_is_not_active(self):
        filters = FilterStateManager({"sortBy": "createdAt", "search": ""})
        self.assertFalse(filters.has_active_filters)
        self.assertEqual(filters.active_filters, {"sortBy": "createdAt"})

    def test_scalar_round_trip_returns_to_inactive(self):
        filters = FilterStateManager({"sortBy": "createdAt", "status": ""})
        before = filters.active_count
        filters.update_filter("sortBy", "amount")
        self.assertEqual(filters.active_count, before + 1)
        filters.update_filter("sortBy", "createdAt")
        self.assertEqual(filters.active_count, before)
        self.assertFalse(filters.has_active_filters)

    def test_array_activeness_ignores_initial_value(self):
        filters = FilterStateManager({"roles": ["admin"], "tags": []})
        self.assertEqual(filters.active_count, 1)
        filters.update_filter("tags", ["urgent"])
        self.assertEqual(filters.active_count, 2)
        filters.update_filter("roles", [])
        self.assertEqual(filters.active_count, 1)

    def test_empty_values_are_never_active(self):
        filters = FilterStateManager({"status": "paid", "owner": "me"})
        filters.update_filters({"status": "", "owner": None})
        self.assertEqual(filters.active_count, 0)
        self.assertEqual(filters.active_filters, {})

    def test_false_differs_from_zero(self):
        filters = FilterStateManager({"isPaid": 0, "archived": False})
        filters.update_filter("isPaid", False)
        self.assertEqual(filters.active_count, 1)

    def test_toggle_advanced(self):
        filters = FilterStateManager({"search": ""})
        self.assertTrue(filters.toggle_advanced())
        self.assertFalse(filters.toggle_advanced())


class QueryParamTests(unittest.TestCase):
    def test_lists_expand_and_bools_lowercase(self):
        params = query_params({"roles": ["hr", "sales"], "isPaid": True, "search": "", "page": 2})
        self.assertEqual(params, [("roles", "hr"), ("roles", "sales"), ("isPaid", "true"), ("page", "2")])

    def test_to_query_params_uses_active_filters(self):
        filters = FilterStateManager({"search": "", "status": ""})
        filters.update_filter("status", "pending")
        self.assertEqual(filters.to_query_params(), [("status", "pending")])

    def test_parse_filter_args(self):
        self.assertEqual(parse_filter_args(["status=pending", " search = rent "]), {"status": "pending", "search": "rent"})
        with self.assertRaises(ValueError):
            parse_filter_args(["status"])


if __name__ == "__main__":
    unittest.main()
