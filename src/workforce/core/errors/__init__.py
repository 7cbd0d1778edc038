"""Error types shared across modules."""

from workforce.core.errors.exceptions import AppException, ConfigurationError


__all__ = [
    "AppException",
    "ConfigurationError",
]
