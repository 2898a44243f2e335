"""Error types shared by the dashboard core."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for dashboard core errors."""


class ConfigurationError(DashboardError, ValueError):
    """Raised when a table, form or drawer is configured inconsistently."""


class ApiError(DashboardError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RequestCancelled(DashboardError):
    """Raised when a caller cancelled a request before its result was applied."""
