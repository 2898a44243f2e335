"""Reusable filter, form, table and pagination primitives for admin dashboards."""

__version__ = "0.1.0"
