from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from dash_core.config import BUILTIN_RESOURCES, DEFAULT_NAV_ITEMS, resolve_config, resolve_resource  # noqa: E402
from dash_core.models import BadgeStyle  # noqa: E402


def write_config(tmp: str, payload) -> str:
    cfg_path = Path(tmp) / "cfg.json"
    cfg_path.write_text(json.dumps(payload))
    return str(cfg_path)


class ResourceTests(unittest.TestCase):
    def test_builtin_default(self):
        resource = resolve_resource("expenses")
        self.assertEqual(resource["name"], "expenses")
        self.assertEqual(resource["path"], "accountant/expense")
        self.assertEqual(
            [col["key"] for col in resource["columns"]],
            [col["key"] for col in BUILTIN_RESOURCES["expenses"]["columns"]],
        )

    def test_disable_column_map(self):
        resource = resolve_resource("expenses", {"columns": {"expenses": {"paymentMethod": False}}})
        keys = [col["key"] for col in resource["columns"]]
        self.assertNotIn("paymentMethod", keys)
        self.assertIn("amount", keys)

    def test_explicit_column_order(self):
        resource = resolve_resource("leads", {"columns": {"leads": ["status", "name", "bogus"]}})
        self.assertEqual([col["key"] for col in resource["columns"]], ["status", "name"])

    def test_resolved_copy_does_not_leak(self):
        resource = resolve_resource("employees")
        resource["filters"]["status"] = "active"
        self.assertEqual(BUILTIN_RESOURCES["employees"]["filters"]["status"], "")

    def test_unknown_resource(self):
        with self.assertRaises(ValueError):
            resolve_resource("invoices")


class DashboardConfigTests(unittest.TestCase):
    def test_defaults(self):
        config, user_config = resolve_config(env={})
        self.assertEqual(user_config, {})
        self.assertEqual(config.nav_items, DEFAULT_NAV_ITEMS)
        self.assertEqual(config.page_size, 20)
        self.assertIsNone(config.token)

    def test_user_overrides(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_config(
                tmp,
                {
                    "page_size": 50,
                    "currency_symbol": "€",
                    "nav_items": ["leads", "payroll", "expenses"],
                    "badges": {"status": {"paid": {"style": "blue", "label": "Settled"}}},
                },
            )
            config, _ = resolve_config(path, env={})
        self.assertEqual(config.page_size, 50)
        self.assertEqual(config.currency_symbol, "€")
        self.assertEqual(config.nav_items, ["leads", "expenses"])
        self.assertEqual(config.badges["status"]["paid"], BadgeStyle("blue", "Settled"))
        self.assertEqual(config.badges["status"]["pending"], BadgeStyle("yellow", "Pending"))

    def test_env_wins_over_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_config(tmp, {"api_url": "http://file.test", "token": "from-file"})
            config, _ = resolve_config(path, env={"DASH_API_URL": "http://env.test"})
        self.assertEqual(config.api_url, "http://env.test")
        self.assertEqual(config.token, "from-file")

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg_path = Path(tmp) / "cfg.json"
            cfg_path.write_text("{not json")
            with self.assertRaises(ValueError):
                resolve_config(str(cfg_path), env={})

    def test_missing_file(self):
        with self.assertRaises(ValueError):
            resolve_config("/nonexistent/dash.json", env={})


if __name__ == "__main__":
    unittest.main()
