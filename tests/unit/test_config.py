"""Tests for application settings."""

from workforce.config import (
    InitializerSettings,
    Settings,
    to_async_driver,
    to_sync_driver,
)


class TestDatabaseUrls:
    """Driver selection for the master database URL."""

    def test_async_url_uses_asyncpg(self):
        settings = Settings(_env_file=None, database_url="postgresql://u:p@db:5432/app")

        assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5432/app"

    def test_sync_url_uses_psycopg(self):
        settings = Settings(_env_file=None, database_url="postgresql://u:p@db:5432/app")

        assert settings.sync_database_url == "postgresql+psycopg://u:p@db:5432/app"

    def test_explicit_driver_is_kept(self):
        """URLs that already name a driver pass through unchanged."""
        settings = Settings(_env_file=None, database_url="sqlite:///master.db")

        assert settings.sync_database_url == "sqlite:///master.db"
        assert settings.async_database_url == "sqlite:///master.db"


class TestDatabaseInitializers:
    """The ``DATABASE_INITIALIZERS`` section."""

    def test_defaults_to_no_initializers(self, monkeypatch):
        monkeypatch.delenv("DATABASE_INITIALIZERS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_initializers == []
        assert settings.get_initializer("Employees") is None

    def test_lookup_is_case_insensitive(self):
        settings = Settings(
            _env_file=None,
            database_initializers=[InitializerSettings(name="Employees", for_master=True)],
        )

        section = settings.get_initializer("employees")

        assert section is not None
        assert section.for_master is True
        assert section.enable_seeding is False

    def test_parsed_from_environment(self, monkeypatch):
        """The section is read as JSON from the environment."""
        monkeypatch.setenv(
            "DATABASE_INITIALIZERS",
            '[{"name": "Employees", "for_master": true, "enable_seeding": true}]',
        )

        settings = Settings(_env_file=None)

        section = settings.get_initializer("Employees")
        assert section is not None
        assert section.for_master is True
        assert section.enable_seeding is True

    def test_repository_mode_from_environment(self, monkeypatch):
        monkeypatch.setenv("EMPLOYEE_REPOSITORY_MODE", "sql")

        assert Settings(_env_file=None).employee_repository_mode == "sql"


class TestDriverHelpers:
    """URL helpers shared by settings and the tenant registry."""

    def test_plain_postgresql_gets_psycopg(self):
        assert to_sync_driver("postgresql://u:p@db/app") == "postgresql+psycopg://u:p@db/app"

    def test_plain_postgresql_gets_asyncpg(self):
        assert to_async_driver("postgresql://u:p@db/app") == "postgresql+asyncpg://u:p@db/app"

    def test_only_the_scheme_is_rewritten(self):
        """A password containing the scheme text is left alone."""
        url = "postgresql://u:postgresql://@db/app"

        assert to_sync_driver(url) == "postgresql+psycopg://u:postgresql://@db/app"

    def test_other_urls_unchanged(self):
        assert to_sync_driver("sqlite:///tenant.db") == "sqlite:///tenant.db"
