"""Database layer - session management and declarative base."""

from workforce.core.database.base import Base
from workforce.core.database.session import (
    async_engine,
    async_session_factory,
    create_session_factory,
    get_db,
)


__all__ = [
    "Base",
    "async_engine",
    "async_session_factory",
    "create_session_factory",
    "get_db",
]
