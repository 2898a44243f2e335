"""Response envelope parsing for list, detail and mutation endpoints."""

from __future__ import annotations

from typing import Any, Mapping

from dash_core.errors import ApiError
from dash_core.models import PaginationMeta
from dash_core.pagination import synthesize_meta

PAGINATION_KEYS = ("pagination", "meta", "paginationMeta")


def payload_error(payload: Any) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    if payload.get("status") == "error" or payload.get("success") is False:
        message = payload.get("message") or payload.get("error")
        return str(message) if message else ""
    return None


def raise_for_payload(payload: Any, default_message: str, status_code: int | None = None) -> None:
    message = payload_error(payload)
    if message is not None:
        raise ApiError(message or default_message, status_code)


def _first_int(block: Mapping[str, Any], *keys: str) -> int | None:
    for key in keys:
        value = block.get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            continue
    return None


def extract_items(payload: Any, resource_key: str | None = None) -> list[dict[str, Any]]:
    data = payload.get("data") if isinstance(payload, Mapping) else payload
    if isinstance(data, Mapping):
        for key in (resource_key, "items", "results", "rows"):
            if key and isinstance(data.get(key), list):
                data = data[key]
                break
    if not isinstance(data, list):
        return []
    return [row for row in data if isinstance(row, Mapping)]


def extract_pagination(payload: Any, page: int, limit: int, returned: int) -> PaginationMeta:
    block: Mapping[str, Any] = {}
    total: int | None = None
    if isinstance(payload, Mapping):
        for key in PAGINATION_KEYS:
            if isinstance(payload.get(key), Mapping):
                block = payload[key]
                break
        total = _first_int(payload, "total")

    if not block:
        return synthesize_meta(page, limit, returned, total)

    block_page = _first_int(block, "page") or page
    block_limit = _first_int(block, "limit", "take") or limit
    block_total = _first_int(block, "total", "totalItems", "totalRecords")
    if block_total is None:
        block_total = total
    meta = synthesize_meta(block_page, block_limit, returned, block_total)

    total_pages = _first_int(block, "totalPages")
    if total_pages is not None:
        meta.total_pages = total_pages
    if isinstance(block.get("hasNext"), bool):
        meta.has_next = block["hasNext"]
    if isinstance(block.get("hasPrev"), bool):
        meta.has_prev = block["hasPrev"]
    return meta
