"""Field-level validation rules for the form engine."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping
from urllib.parse import urlparse

from dash_core.models import FieldDescriptor, FieldType

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

EMAIL_MESSAGE = "Please enter a valid email address"
URL_MESSAGE = "Please enter a valid URL"
NUMBER_MESSAGE = "Please enter a valid number"


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_RE.fullmatch(value) is not None


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    if not parsed.scheme:
        return False
    return bool(parsed.netloc) or parsed.scheme in {"mailto", "tel", "data"}


def parse_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    text = str(value).strip()
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_field(field: FieldDescriptor, value: Any, all_values: Mapping[str, Any]) -> str | None:
    """Return the first error message for ``value`` or ``None`` when it is valid.

    Checks run in a fixed order: required, optional-empty short circuit,
    type format (email/url/number), length/range/pattern rules, and finally the
    field's own ``validate`` callable, which sees every current form value.
    """

    label = field.display_name

    if field.required and is_empty(value):
        return f"{label} is required"

    if is_empty(value):
        return None

    if field.type is FieldType.EMAIL and not is_valid_email(value):
        return EMAIL_MESSAGE

    if field.type is FieldType.URL and not is_valid_url(value):
        return URL_MESSAGE

    number = None
    if field.type is FieldType.NUMBER:
        number = parse_number(value)
        if number is None:
            return NUMBER_MESSAGE

    if isinstance(value, str):
        if field.min_length is not None and len(value) < field.min_length:
            return f"{label} must be at least {field.min_length} characters"
        if field.max_length is not None and len(value) > field.max_length:
            return f"{label} must be no more than {field.max_length} characters"

    if number is not None:
        if field.min_value is not None and number < field.min_value:
            return f"{label} must be at least {_format_bound(field.min_value)}"
        if field.max_value is not None and number > field.max_value:
            return f"{label} must be no more than {_format_bound(field.max_value)}"

    if field.pattern and isinstance(value, str) and re.search(field.pattern, value) is None:
        return f"{label} format is invalid"

    if field.validate is not None:
        return field.validate(value, all_values) or None

    return None


def _format_bound(bound: float) -> str:
    if float(bound).is_integer():
        return str(int(bound))
    return str(bound)
