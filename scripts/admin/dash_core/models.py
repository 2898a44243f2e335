"""Shared model contracts for filters, forms, tables and list results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Union

from dash_core.errors import ConfigurationError
from dash_core.formatting import humanize_label

FilterValue = Union[str, int, float, bool, None, list]
FilterState = dict[str, FilterValue]

FieldValidator = Callable[[Any, Mapping[str, Any]], Union[str, None]]


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    TEL = "tel"
    URL = "url"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    FILE = "file"
    HIDDEN = "hidden"


OPTION_FIELD_TYPES = {FieldType.SELECT, FieldType.RADIO}


@dataclass(frozen=True)
class FieldOption:
    value: Any
    label: str


@dataclass
class FieldDescriptor:
    name: str
    type: FieldType = FieldType.TEXT
    label: str | None = None
    placeholder: str | None = None
    required: bool = False
    default_value: Any = None
    options: list[FieldOption] = field(default_factory=list)
    validate: FieldValidator | None = None
    min_length: int | None = None
    max_length: int | None = None
    min_value: float | None = None
    max_value: float | None = None
    pattern: str | None = None
    transform: Callable[[Any], Any] | None = None
    conditional: Callable[[Mapping[str, Any]], bool] | None = None
    disabled: bool = False
    help_text: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("form field requires a name")
        try:
            self.type = FieldType(self.type)
        except ValueError as exc:
            raise ConfigurationError(f"unknown field type for {self.name!r}: {self.type}") from exc
        if not self.label:
            self.label = humanize_label(self.name)
        self.options = [_coerce_option(option) for option in self.options]
        if self.type in OPTION_FIELD_TYPES and not self.options:
            raise ConfigurationError(f"{self.type.value} field {self.name!r} requires options")

    @property
    def display_name(self) -> str:
        return self.label or self.name


def _coerce_option(option: Any) -> FieldOption:
    if isinstance(option, FieldOption):
        return option
    if isinstance(option, Mapping):
        value = option.get("value")
        return FieldOption(value=value, label=str(option.get("label", value)))
    return FieldOption(value=option, label=str(option))


@dataclass
class ValidationResult:
    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)


@dataclass
class FormError:
    message: str
    reason: str = "submit_failed"
    exception: BaseException | None = None


@dataclass
class SubmitResult:
    ok: bool
    values: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    error: FormError | None = None


@dataclass(frozen=True)
class BadgeStyle:
    style: str
    label: str


@dataclass
class PaginationMeta:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


@dataclass
class ListResult:
    resource: str
    items: list[dict[str, Any]] = field(default_factory=list)
    pagination: PaginationMeta | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource": self.resource,
            "items": self.items,
            "pagination": self.pagination.to_dict() if self.pagination else None,
            "message": self.message,
        }
