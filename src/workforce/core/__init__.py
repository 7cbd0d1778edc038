"""Core services and cross-cutting concerns."""

from workforce.core.database import Base, get_db
from workforce.core.errors import AppException, ConfigurationError


__all__ = [
    # Errors
    "AppException",
    # Database
    "Base",
    "ConfigurationError",
    "get_db",
]
