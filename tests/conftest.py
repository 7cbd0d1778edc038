"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path

import pytest
import structlog
from sqlalchemy import create_engine, insert
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from workforce.core.database import Base, create_session_factory
from workforce.modules.tenants.models import Tenant


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo logging configuration done by the CLI or the app factory."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sqlite_url(tmp_path: Path) -> Callable[[str], str]:
    """Build SQLite file URLs inside the test's temporary directory.

    Returns:
        Function mapping a database name to its URL
    """

    def build(name: str) -> str:
        return f"sqlite:///{tmp_path / f'{name}.db'}"

    return build


@pytest.fixture
def make_master(sqlite_url: Callable[[str], str]) -> Callable[[list[str | None]], str]:
    """Create a master database whose Tenants table lists the given URLs.

    Returns:
        Function taking tenant connection strings and returning the master URL
    """

    def build(connection_strings: list[str | None]) -> str:
        url = sqlite_url("master")
        engine = create_engine(url)
        try:
            with engine.begin() as conn:
                Tenant.__table__.create(conn)
                for index, value in enumerate(connection_strings):
                    conn.execute(
                        insert(Tenant.__table__).values(
                            {"Name": f"tenant-{index}", "ConnectionString": value}
                        )
                    )
        finally:
            engine.dispose()
        return url

    return build


@pytest.fixture
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session backed by an in-memory SQLite database."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = create_session_factory(engine)
    async with factory() as session:
        yield session

    await engine.dispose()
