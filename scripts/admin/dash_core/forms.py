"""Declarative form engine: values, per-field validation and submission."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Mapping, Union

from dash_core.errors import ConfigurationError
from dash_core.models import FieldDescriptor, FieldType, FormError, SubmitResult, ValidationResult
from dash_core.validation import validate_field

logger = logging.getLogger(__name__)

FORM_LAYOUTS = ("vertical", "horizontal", "grid")

SubmitHandler = Callable[[dict[str, Any]], Union[None, Awaitable[None]]]


@dataclass
class FormConfig:
    layout: str = "vertical"
    columns: int = 2
    gap: int = 1
    validate_on_change: bool = False
    validate_on_blur: bool = True
    validate_on_submit: bool = True
    reset_on_submit: bool = False
    clear_on_submit: bool = False
    submit_text: str = "Submit"
    title: str | None = None

    def __post_init__(self) -> None:
        if self.layout not in FORM_LAYOUTS:
            raise ConfigurationError(f"unknown form layout: {self.layout}")
        self.columns = max(1, int(self.columns))
        self.gap = max(0, int(self.gap))


def coerce_fields(fields: Iterable[FieldDescriptor | Mapping[str, Any]]) -> list[FieldDescriptor]:
    result: list[FieldDescriptor] = []
    seen: set[str] = set()
    for item in fields:
        field = item if isinstance(item, FieldDescriptor) else FieldDescriptor(**dict(item))
        if field.name in seen:
            raise ConfigurationError(f"duplicate form field name: {field.name}")
        seen.add(field.name)
        result.append(field)
    return result


def extract_event_value(field: FieldDescriptor, event: Mapping[str, Any]) -> Any:
    if field.type is FieldType.CHECKBOX:
        return bool(event.get("checked", False))
    if field.type is FieldType.FILE:
        return list(event.get("files") or [])
    return event.get("value")


class Form:
    def __init__(
        self,
        fields: Iterable[FieldDescriptor | Mapping[str, Any]],
        on_submit: SubmitHandler,
        initial_values: Mapping[str, Any] | None = None,
        config: FormConfig | None = None,
        on_validation_error: Callable[[dict[str, str]], None] | None = None,
        on_change: Callable[[dict[str, Any], str, Any], None] | None = None,
        on_blur: Callable[[dict[str, Any], str], None] | None = None,
    ) -> None:
        self.config = config or FormConfig()
        self._on_submit = on_submit
        self._on_validation_error = on_validation_error
        self._on_change = on_change
        self._on_blur = on_blur
        self._fields = coerce_fields(fields)
        self._initial_values = dict(initial_values or {})
        self.is_submitting = False
        self._initialize()

    def _initialize(self) -> None:
        values = dict(self._initial_values)
        for field in self._fields:
            if field.default_value is not None and field.name not in values:
                values[field.name] = field.default_value
        self.values: dict[str, Any] = values
        self._errors: dict[str, str] = {}
        self.touched: dict[str, bool] = {}

    @property
    def fields(self) -> list[FieldDescriptor]:
        return list(self._fields)

    def set_fields(self, fields: Iterable[FieldDescriptor | Mapping[str, Any]]) -> None:
        self._fields = coerce_fields(fields)
        self._initialize()

    def set_initial_values(self, initial_values: Mapping[str, Any]) -> None:
        self._initial_values = dict(initial_values)
        self._initialize()

    def field(self, name: str) -> FieldDescriptor:
        for field in self._fields:
            if field.name == name:
                return field
        raise KeyError(f"unknown form field: {name}")

    @property
    def visible_fields(self) -> list[FieldDescriptor]:
        return [f for f in self._fields if f.conditional is None or f.conditional(self.values)]

    @property
    def errors(self) -> dict[str, str]:
        return {name: message for name, message in self._errors.items() if message}

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def visible_error(self, name: str) -> str | None:
        if not self.touched.get(name):
            return None
        return self._errors.get(name) or None

    def handle_field_change(self, name: str, value: Any) -> None:
        field = self.field(name)
        if field.transform is not None:
            value = field.transform(value)

        self.values = {**self.values, name: value}
        self.touched[name] = True

        if self.config.validate_on_change:
            self._store_error(name, validate_field(field, value, self.values))

        if self._on_change is not None:
            self._on_change(dict(self.values), name, value)

    def handle_field_blur(self, name: str) -> None:
        field = self.field(name)
        self.touched[name] = True

        if self.config.validate_on_blur:
            self._store_error(name, validate_field(field, self.values.get(name), self.values))

        if self._on_blur is not None:
            self._on_blur(dict(self.values), name)

    def handle_input_event(self, name: str, event: Mapping[str, Any]) -> None:
        self.handle_field_change(name, extract_event_value(self.field(name), event))

    def set_value(self, name: str, value: Any) -> None:
        self.handle_field_change(name, value)

    def set_error(self, name: str, message: str) -> None:
        self.field(name)
        self._store_error(name, message)

    def set_touched(self, name: str, touched: bool = True) -> None:
        self.field(name)
        self.touched[name] = touched

    def validate(self) -> ValidationResult:
        errors: dict[str, str] = {}
        for field in self.visible_fields:
            message = validate_field(field, self.values.get(field.name), self.values)
            if message:
                errors[field.name] = message
        self._errors = dict(errors)
        return ValidationResult(is_valid=not errors, errors=errors)

    def reset(self) -> None:
        self._initialize()

    def clear(self) -> None:
        self.values = {}
        self._errors = {}
        self.touched = {}

    async def submit(self) -> SubmitResult:
        if self.is_submitting:
            return SubmitResult(
                ok=False,
                values=dict(self.values),
                error=FormError("submission already in progress", reason="in_flight"),
            )

        self.is_submitting = True
        try:
            if self.config.validate_on_submit:
                result = self.validate()
                for field in self.visible_fields:
                    self.touched[field.name] = True
                if not result.is_valid:
                    if self._on_validation_error is not None:
                        self._on_validation_error(dict(result.errors))
                    return SubmitResult(ok=False, values=dict(self.values), errors=result.errors)

            submitted = dict(self.values)
            outcome = self._on_submit(submitted)
            if inspect.isawaitable(outcome):
                await outcome

            if self.config.reset_on_submit:
                self.reset()
            elif self.config.clear_on_submit:
                self.clear()
            return SubmitResult(ok=True, values=submitted)
        except Exception as exc:
            logger.exception("form submission failed")
            return SubmitResult(
                ok=False,
                values=dict(self.values),
                errors=self.errors,
                error=FormError(str(exc) or exc.__class__.__name__, exception=exc),
            )
        finally:
            self.is_submitting = False

    def submit_sync(self) -> SubmitResult:
        return asyncio.run(self.submit())

    def _store_error(self, name: str, message: str | None) -> None:
        if message:
            self._errors[name] = message
        else:
            self._errors.pop(name, None)
