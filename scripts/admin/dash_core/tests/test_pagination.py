from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from dash_core.errors import ConfigurationError  # noqa: E402
from dash_core.pagination import (  # noqa: E402
    ELLIPSIS,
    Pagination,
    clamp_page,
    page_range,
    resolve_total_pages,
    synthesize_meta,
)


class PageRangeTests(unittest.TestCase):
    def test_middle_page_has_both_ellipses(self):
        self.assertEqual(page_range(5, 10, 1, 1), [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10])

    def test_first_page(self):
        self.assertEqual(page_range(1, 10, 1, 1), [1, 2, ELLIPSIS, 10])

    def test_last_page(self):
        self.assertEqual(page_range(10, 10, 1, 1), [1, ELLIPSIS, 9, 10])

    def test_overlap_is_contiguous(self):
        self.assertEqual(page_range(3, 5, 1, 1), [1, 2, 3, 4, 5])
        self.assertEqual(page_range(2, 3, 2, 2), [1, 2, 3])

    def test_wider_boundaries(self):
        self.assertEqual(page_range(10, 20, 1, 2), [1, 2, ELLIPSIS, 9, 10, 11, ELLIPSIS, 19, 20])

    def test_no_pages(self):
        self.assertEqual(page_range(1, 0), [])


class TotalPagesTests(unittest.TestCase):
    def test_explicit_total_wins(self):
        self.assertEqual(resolve_total_pages(4, 100, 10), 4)

    def test_derived_from_items(self):
        self.assertEqual(resolve_total_pages(None, 101, 10), 11)

    def test_unknown(self):
        self.assertEqual(resolve_total_pages(), 0)
        self.assertEqual(resolve_total_pages(None, 50, None), 0)

    def test_clamp(self):
        self.assertEqual(clamp_page(99, 10), 10)
        self.assertEqual(clamp_page(0, 10), 1)
        self.assertEqual(clamp_page(3, 0), 1)


class PaginationControlTests(unittest.TestCase):
    def make(self, **kwargs):
        self.calls = []
        kwargs.setdefault("current_page", 5)
        kwargs.setdefault("total_pages", 10)
        return Pagination(on_page_change=self.calls.append, **kwargs)

    def test_out_of_range_is_noop(self):
        pagination = self.make()
        self.assertFalse(pagination.go_to(99))
        self.assertFalse(pagination.go_to(0))
        self.assertFalse(pagination.go_to(5))
        self.assertEqual(pagination.current_page, 5)
        self.assertEqual(self.calls, [])

    def test_navigation(self):
        pagination = self.make()
        self.assertTrue(pagination.next())
        self.assertTrue(pagination.prev())
        self.assertTrue(pagination.first())
        self.assertTrue(pagination.last())
        self.assertEqual(self.calls, [6, 4, 1, 10])

    def test_boundaries_block_navigation(self):
        pagination = self.make(current_page=1)
        self.assertFalse(pagination.prev())
        self.assertFalse(pagination.first())
        pagination = self.make(current_page=10)
        self.assertFalse(pagination.next())
        self.assertFalse(pagination.last())
        self.assertEqual(self.calls, [])

    def test_disabled(self):
        pagination = self.make(disabled=True)
        self.assertFalse(pagination.go_to(6))
        self.assertFalse(pagination.next())
        self.assertEqual(self.calls, [])

    def test_custom_next_handler(self):
        hits = []
        pagination = self.make(on_next_page=lambda: hits.append("next"))
        self.assertTrue(pagination.next())
        self.assertEqual(hits, ["next"])
        self.assertEqual(self.calls, [])

    def test_visibility(self):
        self.assertFalse(self.make(current_page=1, total_pages=1).is_visible)
        self.assertFalse(self.make(current_page=1, total_pages=0).is_visible)
        self.assertTrue(self.make(current_page=1, total_pages=1, hide_on_single_page=False).is_visible)
        self.assertFalse(
            self.make(current_page=1, total_pages=0, hide_on_single_page=False).is_visible
        )
        self.assertTrue(
            self.make(current_page=1, total_pages=0, hide_on_single_page=False, hide_on_empty=False).is_visible
        )

    def test_items_info(self):
        pagination = self.make(current_page=3, total_pages=None, total_items=45, items_per_page=20)
        self.assertEqual(pagination.page_count, 3)
        self.assertEqual(pagination.items_info(), (41, 45, 45))
        self.assertEqual(pagination.items_info_text, "Showing 41-45 of 45 items")
        self.assertEqual(pagination.page_info_text, "Page 3 of 3")

    def test_items_info_needs_both_numbers(self):
        self.assertIsNone(self.make(total_items=45).items_info())

    def test_unknown_display_type(self):
        with self.assertRaises(ConfigurationError):
            self.make(display_type="number")


class SynthesizedMetaTests(unittest.TestCase):
    def test_known_total(self):
        meta = synthesize_meta(2, 20, 20, total=45)
        self.assertEqual((meta.total_pages, meta.has_next, meta.has_prev), (3, True, True))

    def test_full_page_guesses_next(self):
        meta = synthesize_meta(1, 20, 20)
        self.assertTrue(meta.has_next)
        self.assertEqual(meta.total_pages, 2)

    def test_short_page_is_last(self):
        meta = synthesize_meta(3, 20, 5)
        self.assertFalse(meta.has_next)
        self.assertEqual(meta.total, 45)
        self.assertEqual(meta.total_pages, 3)


if __name__ == "__main__":
    unittest.main()
