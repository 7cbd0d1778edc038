"""Workforce - multi-tenant employee records module."""

__version__ = "0.1.0"
