"""Form renderer: labels, current values and touched-field errors."""

from __future__ import annotations

from typing import Any

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dash_core.forms import Form
from dash_core.models import FieldDescriptor, FieldType


def _display_value(field: FieldDescriptor, value: Any) -> Text:
    if field.type is FieldType.CHECKBOX:
        return Text("[x]" if value else "[ ]")
    if field.type is FieldType.PASSWORD and value:
        return Text("•" * len(str(value)))
    if field.type is FieldType.FILE:
        files = value or []
        return Text(", ".join(str(f) for f in files) if files else "no file", style="" if files else "dim")
    if field.type in (FieldType.SELECT, FieldType.RADIO):
        for option in field.options:
            if option.value == value:
                return Text(option.label)
    if value is None or value == "":
        return Text(field.placeholder or "", style="dim italic")
    return Text(str(value))


def _field_cell(form: Form, field: FieldDescriptor) -> Group:
    label = Text(field.display_name, style="bold")
    if field.required:
        label.append(" *", style="red")
    parts: list[Text] = [label, _display_value(field, form.values.get(field.name))]
    error = form.visible_error(field.name)
    if error:
        parts.append(Text(error, style="red"))
    elif field.help_text:
        parts.append(Text(field.help_text, style="dim"))
    return Group(*parts)


def build_fields(form: Form) -> Table:
    fields = [f for f in form.visible_fields if f.type is not FieldType.HIDDEN]
    config = form.config

    if config.layout == "grid":
        grid = Table.grid(expand=True, padding=(0, config.gap))
        for _ in range(config.columns):
            grid.add_column(ratio=1)
        for start in range(0, len(fields), config.columns):
            chunk = [_field_cell(form, f) for f in fields[start : start + config.columns]]
            chunk.extend(Text("") for _ in range(config.columns - len(chunk)))
            grid.add_row(*chunk)
        return grid

    if config.layout == "horizontal":
        grid = Table.grid(expand=True, padding=(0, config.gap))
        grid.add_column(style="bold", no_wrap=True)
        grid.add_column(ratio=1)
        for f in fields:
            label = f.display_name + (" *" if f.required else "")
            value = _display_value(f, form.values.get(f.name))
            error = form.visible_error(f.name)
            grid.add_row(label, Group(value, Text(error, style="red")) if error else value)
        return grid

    grid = Table.grid(expand=True, padding=(config.gap // 2, 0))
    grid.add_column(ratio=1)
    for f in fields:
        grid.add_row(_field_cell(form, f))
    return grid


def render(form: Form) -> Panel:
    button = Text(f" {form.config.submit_text} ", style="dim" if form.is_submitting else "bold reverse")
    if form.is_submitting:
        button.append(" submitting...", style="dim")
    body = Group(build_fields(form), Text(""), button)
    border = "red" if form.errors else "cyan"
    title = form.config.title or "Form"
    return Panel(body, title=f"[bold]{title}[/bold]", border_style=border)
