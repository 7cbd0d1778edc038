"""API layer."""

from workforce.api.router import api_router


__all__ = [
    "api_router",
]
