"""HTTP client for one REST resource (list, detail, create, update, delete)."""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

import httpx

from dash_core.api.envelope import extract_items, extract_pagination, raise_for_payload
from dash_core.errors import ApiError, RequestCancelled
from dash_core.filters import query_params
from dash_core.models import ListResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(connect=5.0, read=15.0, write=10.0, pool=15.0)


def singularize(name: str) -> str:
    if name.endswith("ies") and len(name) > 3:
        return name[:-3] + "y"
    if name.endswith(("sses", "xes")):
        return name[:-2]
    if name.endswith("s") and not name.endswith(("ss", "us")):
        return name[:-1]
    return name


class ResourceClient:
    def __init__(
        self,
        base_url: str,
        resource: str,
        *,
        singular: str | None = None,
        token: str | None = None,
        client: httpx.Client | None = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.resource = resource.strip("/")
        self.singular = singular or singularize(self.resource.rsplit("/", 1)[-1])
        self.token = token
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    @property
    def label(self) -> str:
        return self.resource.rsplit("/", 1)[-1].replace("_", " ")

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ResourceClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _url(self, *parts: Any) -> str:
        suffix = "/".join(str(part).strip("/") for part in parts if part not in (None, ""))
        return f"{self.base_url}/{self.resource}" + (f"/{suffix}" if suffix else "")

    def _request(
        self,
        method: str,
        url: str,
        default_message: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json_body: Mapping[str, Any] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> Any:
        try:
            response = self._http().request(method, url, params=params, json=json_body, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(default_message) from exc

        if cancel_event is not None and cancel_event.is_set():
            raise RequestCancelled(f"{method} {url} cancelled")

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            message = None
            if isinstance(payload, Mapping):
                message = payload.get("message") or payload.get("error")
            logger.warning("%s %s returned %s", method, url, response.status_code)
            raise ApiError(str(message) if message else default_message, response.status_code)

        if payload is None:
            raise ApiError(default_message, response.status_code)

        raise_for_payload(payload, default_message, response.status_code)
        return payload

    def list(
        self,
        page: int = 1,
        limit: int = 20,
        filters: Mapping[str, Any] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ListResult:
        params = [("page", str(page)), ("limit", str(limit))]
        params.extend(query_params(filters or {}))
        payload = self._request(
            "GET",
            self._url(),
            f"Failed to fetch {self.label}",
            params=params,
            cancel_event=cancel_event,
        )
        items = extract_items(payload, self.resource.rsplit("/", 1)[-1])
        return ListResult(
            resource=self.resource,
            items=items,
            pagination=extract_pagination(payload, page, limit, len(items)),
            message=payload.get("message") if isinstance(payload, Mapping) else None,
        )

    def get(self, item_id: Any, cancel_event: threading.Event | None = None) -> dict[str, Any]:
        payload = self._request(
            "GET",
            self._url(item_id),
            f"Failed to fetch {self.singular}",
            cancel_event=cancel_event,
        )
        data = payload.get("data") if isinstance(payload, Mapping) else None
        if not isinstance(data, Mapping):
            raise ApiError(f"Failed to fetch {self.singular}")
        return dict(data)

    def _unwrap_record(self, payload: Any) -> dict[str, Any]:
        data = payload.get("data") if isinstance(payload, Mapping) else None
        if isinstance(data, Mapping) and isinstance(data.get(self.singular), Mapping):
            return dict(data[self.singular])
        return dict(data) if isinstance(data, Mapping) else {}

    def create(self, fields: Mapping[str, Any], cancel_event: threading.Event | None = None) -> dict[str, Any]:
        payload = self._request(
            "POST",
            self._url(),
            f"Failed to create {self.singular}",
            json_body=dict(fields),
            cancel_event=cancel_event,
        )
        return self._unwrap_record(payload)

    def update(
        self,
        item_id: Any,
        fields: Mapping[str, Any],
        cancel_event: threading.Event | None = None,
    ) -> dict[str, Any]:
        body = {f"{self.singular}_id": item_id, **dict(fields)}
        payload = self._request(
            "PATCH",
            self._url(),
            f"Failed to update {self.singular}",
            json_body=body,
            cancel_event=cancel_event,
        )
        return self._unwrap_record(payload)

    def delete(self, item_id: Any, cancel_event: threading.Event | None = None) -> dict[str, Any]:
        payload = self._request(
            "DELETE",
            self._url(item_id),
            f"Failed to delete {self.singular}",
            cancel_event=cancel_event,
        )
        if not isinstance(payload, Mapping):
            return {"success": True, "data": None, "message": None}
        return {
            "success": bool(payload.get("success", True)),
            "data": payload.get("data"),
            "message": payload.get("message"),
        }
