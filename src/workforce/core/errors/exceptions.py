"""Domain exceptions for the application."""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(AppException):
    """Raised when required configuration is missing or empty.

    Configuration errors are fatal: they are raised at startup and
    never converted into log events.

    Example:
        raise ConfigurationError(
            "Master connection string is not configured",
            details={"setting": "database_url"},
        )
    """

    message = "Invalid configuration"
    error_code = "configuration_error"
    status_code = 500
