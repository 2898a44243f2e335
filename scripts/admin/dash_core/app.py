"""Admin dashboard CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import os
import time
from typing import Any

from rich.console import Console, Group
from rich.live import Live
from rich.logging import RichHandler

from dash_core.api import ResourceClient
from dash_core.config import BUILTIN_RESOURCES, DashboardConfig, resolve_config, resolve_resource
from dash_core.drawer import drawer_from_record
from dash_core.errors import ApiError
from dash_core.filters import FilterStateManager, parse_filter_args
from dash_core.forms import Form, FormConfig
from dash_core.layout import form_columns, select_layout_mode
from dash_core.models import FilterValue
from dash_core.panels import error_panel
from dash_core.panels.drawer import render as render_drawer
from dash_core.panels.form import render as render_form
from dash_core.panels.header import render as render_header
from dash_core.panels.table import render as render_table
from dash_core.table import DynamicTable

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _client(config: DashboardConfig, resource: dict) -> ResourceClient:
    return ResourceClient(config.api_url, resource["path"], singular=resource["singular"], token=config.token)


def _coerce_filters(resource: dict, raw: dict[str, str]) -> dict[str, FilterValue]:
    initial = resource["filters"]
    coerced: dict[str, FilterValue] = {}
    for key, value in raw.items():
        if isinstance(initial.get(key), list):
            coerced[key] = [part.strip() for part in value.split(",") if part.strip()]
        else:
            coerced[key] = value
    return coerced


def build_filters(resource: dict, raw: dict[str, str]) -> FilterStateManager:
    filters = FilterStateManager(resource["filters"])
    if raw:
        filters.update_filters(_coerce_filters(resource, raw))
    return filters


def _render_list(
    config: DashboardConfig,
    resource: dict,
    filters: FilterStateManager,
    page: int,
    limit: int,
    width: int,
):
    header = render_header(config.nav_items, resource["name"], filters, select_layout_mode(width))
    try:
        with _client(config, resource) as client:
            result = client.list(page=page, limit=limit, filters=filters.active_filters)
    except ApiError as exc:
        return Group(header, error_panel(resource["title"], exc.message))

    meta = result.pagination
    table = DynamicTable(
        columns=resource["columns"],
        data=result.items,
        current_page=meta.page if meta else page,
        total_pages=meta.total_pages if meta else None,
        total_items=meta.total if meta else None,
        items_per_page=meta.limit if meta else limit,
        title=resource["title"],
        config=config,
    )
    return Group(header, render_table(table))


def _render_detail(config: DashboardConfig, resource: dict, item_id: str, tab: str | None, width: int):
    try:
        with _client(config, resource) as client:
            record = client.get(item_id)
    except ApiError as exc:
        return error_panel(f"{resource['title']} #{item_id}", exc.message)

    drawer = drawer_from_record(record, resource["drawer"], title_key=resource["title_key"], subtitle=resource["title"])
    try:
        drawer.open(tab)
    except KeyError:
        return error_panel(drawer.title, f"unknown tab: {tab}")
    return render_drawer(drawer, width)


def _run_create(config: DashboardConfig, resource: dict, raw: dict[str, str], width: int):
    created: dict[str, Any] = {}

    def submit(values: dict[str, Any]) -> None:
        with _client(config, resource) as client:
            created.update(client.create(values))

    form = Form(
        resource["form"],
        on_submit=submit,
        config=FormConfig(layout="grid", columns=form_columns(width, 2), title=f"New {resource['singular']}"),
    )
    for name, value in raw.items():
        form.handle_field_change(name, value)
    result = form.submit_sync()
    if result.ok:
        drawer = drawer_from_record(created or result.values, resource["drawer"], title_key=resource["title_key"])
        drawer.open()
        return render_drawer(drawer, width)
    if result.error is not None:
        return Group(render_form(form), error_panel("Submit failed", result.error.message))
    return render_form(form)


def _json_output(config: DashboardConfig, resource: dict, filters: FilterStateManager, page: int, limit: int) -> str:
    with _client(config, resource) as client:
        result = client.list(page=page, limit=limit, filters=filters.active_filters)
    payload = result.to_dict()
    payload["filters"] = filters.active_filters
    return json.dumps(payload, indent=2, default=str)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Admin dashboard for HR, sales and finance resources")
    parser.add_argument(
        "--resource",
        default=os.environ.get("DASH_RESOURCE", "expenses"),
        choices=sorted(BUILTIN_RESOURCES),
        help="Resource to list",
    )
    parser.add_argument("--page", type=int, default=1, help="Page number (1-based)")
    parser.add_argument("--limit", type=int, help="Items per page override")
    parser.add_argument("-f", "--filter", action="append", default=[], metavar="KEY=VALUE", help="Filter value")
    parser.add_argument("--show", metavar="ID", help="Open the detail drawer for one record")
    parser.add_argument("--tab", help="Drawer tab to open with --show")
    parser.add_argument("--create", action="append", metavar="FIELD=VALUE", help="Create a record from field values")
    parser.add_argument("-l", "--live", action="store_true", help="Run live dashboard loop")
    parser.add_argument("--json", action="store_true", help="Emit JSON payload")
    parser.add_argument("--config", help="Optional JSON config file for dashboard overrides")
    parser.add_argument("--refresh", type=int, help="Refresh interval seconds override")
    parser.add_argument("--api-url", help="Override DASH_API_URL")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=os.environ.get("DASH_LOG_LEVEL", "WARNING"),
        choices=LOG_LEVELS,
        help="Logging level",
    )
    args = parser.parse_args(argv)

    console = Console()
    configure_logging(args.log_level, console)

    try:
        config, user_config = resolve_config(args.config)
        resource = resolve_resource(args.resource, user_config)
        raw_filters = parse_filter_args(args.filter)
        filters = build_filters(resource, raw_filters)
    except KeyError as exc:
        parser.error(f"{args.resource}: {exc.args[0]}")
    except ValueError as exc:
        parser.error(str(exc))

    if args.api_url:
        config.api_url = args.api_url
    limit = max(1, int(args.limit or config.page_size))
    page = max(1, args.page)
    refresh_seconds = max(1, int(args.refresh or config.refresh_seconds))

    if args.json:
        try:
            print(_json_output(config, resource, filters, page, limit))
        except ApiError as exc:
            logger.error("%s", exc.message)
            return 1
        return 0

    if args.create:
        try:
            raw_values = parse_filter_args(args.create)
            renderable = _run_create(config, resource, raw_values, console.size.width)
        except KeyError as exc:
            parser.error(f"{args.resource}: {exc.args[0]}")
        except ValueError as exc:
            parser.error(str(exc))
        console.print(renderable)
        return 0

    def build_renderable():
        width = console.size.width
        if args.show:
            return _render_detail(config, resource, args.show, args.tab, width)
        return _render_list(config, resource, filters, page, limit, width)

    if args.live:
        with Live(build_renderable(), console=console, refresh_per_second=2, screen=True) as live:
            try:
                while True:
                    time.sleep(refresh_seconds)
                    live.update(build_renderable())
            except KeyboardInterrupt:
                return 0

    console.print(build_renderable())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
