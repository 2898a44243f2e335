"""Dashboard configuration, resource profiles and user config merging."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from dash_core.models import BadgeStyle

DEFAULT_NAV_ITEMS = ["employees", "leads", "expenses", "salaries"]

DEFAULT_BADGES: dict[str, dict[str, BadgeStyle]] = {
    "status": {
        "pending": BadgeStyle("yellow", "Pending"),
        "approved": BadgeStyle("green", "Approved"),
        "rejected": BadgeStyle("red", "Rejected"),
        "paid": BadgeStyle("green", "Paid"),
        "unpaid": BadgeStyle("yellow", "Unpaid"),
        "active": BadgeStyle("green", "Active"),
        "inactive": BadgeStyle("dim", "Inactive"),
        "new": BadgeStyle("cyan", "New"),
        "in_progress": BadgeStyle("blue", "In Progress"),
        "completed": BadgeStyle("green", "Completed"),
        "failed": BadgeStyle("red", "Failed"),
    },
    "paymentMethod": {
        "cash": BadgeStyle("green", "Cash"),
        "bank": BadgeStyle("blue", "Bank"),
        "credit_card": BadgeStyle("magenta", "Credit Card"),
    },
}


@dataclass
class DashboardConfig:
    nav_items: list[str] = field(default_factory=lambda: list(DEFAULT_NAV_ITEMS))
    badges: dict[str, dict[str, BadgeStyle]] = field(default_factory=lambda: {k: dict(v) for k, v in DEFAULT_BADGES.items()})
    currency_symbol: str = "$"
    currency_decimals: int = 2
    date_format: str = "%Y-%m-%d"
    page_size: int = 20
    refresh_seconds: int = 5
    api_url: str = "http://localhost:3000"
    token: str | None = None


BUILTIN_RESOURCES: dict[str, dict] = {
    "expenses": {
        "path": "accountant/expense",
        "singular": "expense",
        "title": "Expenses",
        "title_key": "title",
        "columns": [
            {"key": "id", "label": "ID", "width": 6},
            {"key": "title"},
            {"key": "category", "type": "badge"},
            {"key": "amount", "type": "currency"},
            {"key": "paymentMethod", "label": "Method", "type": "badge"},
            {"key": "paidOn", "label": "Paid On", "type": "date"},
        ],
        "filters": {
            "search": "",
            "category": "",
            "paymentMethod": "",
            "fromDate": "",
            "toDate": "",
            "minAmount": "",
            "maxAmount": "",
        },
        "drawer": {
            "Details": {
                "Expense": ["title", "category", "amount", "paymentMethod", "paidOn"],
                "Notes": ["notes"],
            },
            "Audit": {"Record": ["id", "createdBy", "createdAt", "updatedAt"]},
        },
        "form": [
            {"name": "title", "required": True, "max_length": 120},
            {"name": "category", "required": True},
            {"name": "amount", "type": "number", "required": True, "min_value": 0},
            {
                "name": "paymentMethod",
                "label": "Payment Method",
                "type": "select",
                "options": ["cash", "bank", "credit_card"],
            },
            {"name": "paidOn", "label": "Paid On", "type": "date"},
            {"name": "notes", "type": "textarea"},
        ],
    },
    "salaries": {
        "path": "finance/salary",
        "singular": "salary",
        "title": "Salaries",
        "title_key": "name",
        "columns": [
            {"key": "employeeId", "label": "Employee", "width": 8},
            {"key": "name"},
            {"key": "department"},
            {"key": "baseSalary", "label": "Base", "type": "currency"},
            {"key": "netSalary", "label": "Net", "type": "currency"},
            {"key": "status", "type": "badge"},
        ],
        "filters": {
            "search": "",
            "departments": "",
            "status": "",
            "minSalary": "",
            "maxSalary": "",
            "sortBy": "",
            "sortOrder": "",
        },
        "drawer": {
            "Overview": {"Employee": ["employeeId", "name", "department", "status"]},
            "Breakdown": {"Salary": ["baseSalary", "commission", "bonus", "deductions", "netSalary"]},
        },
        "form": [
            {"name": "baseSalary", "label": "Base Salary", "type": "number", "required": True, "min_value": 0},
            {"name": "bonus", "type": "number", "min_value": 0},
            {"name": "deductions", "type": "number", "min_value": 0},
        ],
    },
    "leads": {
        "path": "leads",
        "singular": "lead",
        "title": "Leads",
        "title_key": "name",
        "columns": [
            {"key": "id", "label": "ID", "width": 6},
            {"key": "name"},
            {"key": "email"},
            {"key": "source"},
            {"key": "status", "type": "badge"},
            {"key": "amount", "label": "Deal", "type": "currency"},
            {"key": "createdAt", "label": "Created", "type": "date"},
        ],
        "filters": {"search": "", "status": "", "source": "", "fromDate": "", "toDate": ""},
        "drawer": {
            "Lead": {"Contact": ["name", "email", "phone"], "Pipeline": ["status", "source", "amount"]},
            "History": {"Record": ["id", "createdAt", "updatedAt"]},
        },
        "form": [
            {"name": "name", "required": True},
            {"name": "email", "type": "email", "required": True},
            {"name": "phone", "type": "tel"},
            {"name": "website", "type": "url"},
            {"name": "amount", "label": "Deal Amount", "type": "number", "min_value": 0},
        ],
    },
    "employees": {
        "path": "hr/employees",
        "singular": "employee",
        "title": "Employees",
        "title_key": "firstName",
        "columns": [
            {"key": "id", "label": "ID", "width": 6},
            {"key": "firstName"},
            {"key": "lastName"},
            {"key": "email"},
            {"key": "department.name", "label": "Department"},
            {"key": "status", "type": "badge"},
            {"key": "startDate", "type": "date"},
        ],
        "filters": {"search": "", "departmentId": "", "status": "", "roles": []},
        "drawer": {
            "Profile": {"Identity": ["firstName", "lastName", "email", "phone"]},
            "Employment": {"Position": ["department.name", "role", "status", "startDate"]},
        },
        "form": [
            {"name": "firstName", "required": True},
            {"name": "lastName", "required": True},
            {"name": "email", "type": "email", "required": True},
            {"name": "phone", "type": "tel"},
            {"name": "startDate", "type": "date"},
        ],
    },
}


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        return json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc


def _merge_badges(base: dict[str, dict[str, BadgeStyle]], overrides: Any) -> dict[str, dict[str, BadgeStyle]]:
    merged = {key: dict(value) for key, value in base.items()}
    if not isinstance(overrides, dict):
        return merged
    for column, mapping in overrides.items():
        if not isinstance(mapping, dict):
            continue
        target = merged.setdefault(str(column), {})
        for raw, style in mapping.items():
            if isinstance(style, dict):
                target[str(raw)] = BadgeStyle(str(style.get("style", "default")), str(style.get("label", raw)))
    return merged


def _select_columns(columns: list[dict], selection: Any) -> list[dict]:
    if isinstance(selection, dict):
        # disable map: {"notes": false}
        return [col for col in columns if selection.get(col["key"], True)]
    if isinstance(selection, list) and selection:
        # explicit order
        by_key = {col["key"]: col for col in columns}
        filtered = [by_key[key] for key in selection if key in by_key]
        if filtered:
            return filtered
    return columns


def resolve_resource(name: str, user_config: Mapping[str, Any] | None = None) -> dict:
    if name not in BUILTIN_RESOURCES:
        raise ValueError(f"unknown resource: {name}")

    resolved = dict(BUILTIN_RESOURCES[name])
    resolved["columns"] = [dict(col) for col in resolved["columns"]]
    resolved["filters"] = dict(resolved["filters"])

    column_config = (user_config or {}).get("columns", {})
    if isinstance(column_config, dict) and name in column_config:
        resolved["columns"] = _select_columns(resolved["columns"], column_config[name])

    resolved["name"] = name
    return resolved


def resolve_config(config_path: str | None = None, env: Mapping[str, str] | None = None) -> tuple[DashboardConfig, dict]:
    env = os.environ if env is None else env
    user_config = load_user_config(config_path)
    config = DashboardConfig()

    if "page_size" in user_config:
        config.page_size = max(1, int(user_config["page_size"]))
    if "refresh_seconds" in user_config:
        config.refresh_seconds = max(1, int(user_config["refresh_seconds"]))
    if "currency_symbol" in user_config:
        config.currency_symbol = str(user_config["currency_symbol"])
    if "currency_decimals" in user_config:
        config.currency_decimals = max(0, int(user_config["currency_decimals"]))
    if "date_format" in user_config:
        config.date_format = str(user_config["date_format"])

    nav_items = user_config.get("nav_items")
    if isinstance(nav_items, list) and nav_items:
        allowed = set(BUILTIN_RESOURCES)
        filtered = [item for item in nav_items if item in allowed]
        if filtered:
            config.nav_items = filtered

    config.badges = _merge_badges(config.badges, user_config.get("badges"))
    config.api_url = env.get("DASH_API_URL") or user_config.get("api_url") or config.api_url
    config.token = env.get("DASH_API_TOKEN") or user_config.get("token") or None
    return config, user_config
