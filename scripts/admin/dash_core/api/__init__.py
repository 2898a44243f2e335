"""REST resource client and package exports."""

from __future__ import annotations

from dash_core.api.client import ResourceClient
from dash_core.api.envelope import extract_items, extract_pagination, payload_error, raise_for_payload

__all__ = [
    "ResourceClient",
    "extract_items",
    "extract_pagination",
    "payload_error",
    "raise_for_payload",
]
