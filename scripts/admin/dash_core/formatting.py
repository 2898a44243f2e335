"""Shared text, money and date formatting helpers for human-facing cells."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

TOKEN_LABELS = {
    "api": "API",
    "hr": "HR",
    "id": "ID",
    "url": "URL",
    "vat": "VAT",
}

DELIMITER_RE = re.compile(r"[._/\-\s]+")
CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def humanize_label(name: str | None) -> str:
    if not name:
        return ""

    raw = str(name).strip()
    tokens = [t for part in DELIMITER_RE.split(raw) for t in CAMEL_RE.split(part) if t]
    if not tokens:
        return raw

    parts: list[str] = []
    for token in tokens:
        lower = token.lower()
        if lower in TOKEN_LABELS:
            parts.append(TOKEN_LABELS[lower])
        elif token.isupper() and len(token) > 1:
            parts.append(token)
        else:
            parts.append(lower.capitalize())
    return " ".join(parts)


def to_decimal(value: Any) -> Decimal | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def format_currency(value: Any, symbol: str = "$", decimals: int = 2) -> str:
    amount = to_decimal(value)
    if amount is None:
        amount = Decimal(0)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"


def parse_iso_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value: Any, fmt: str = "%Y-%m-%d") -> str:
    if isinstance(value, datetime):
        return value.strftime(fmt)
    if isinstance(value, date):
        return value.strftime(fmt)
    parsed = parse_iso_timestamp(str(value)) if value else None
    if parsed is None:
        return "N/A"
    return parsed.strftime(fmt)


def truncate(text: str, limit: int) -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    if limit == 1:
        return text[:1]
    return text[: limit - 1] + "…"
