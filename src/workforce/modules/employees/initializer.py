"""Employees table initializer.

Creates the ``Employees`` table on the master database or on every tenant
database listed in the master's ``Tenants`` table, adds any columns an
older table is missing, and optionally inserts baseline rows into an empty
table.

Reconciliation is additive only: columns are never dropped, retyped or
reordered, and "what is missing" is re-derived from the database catalog
on every run, so running the initializer repeatedly is safe.

Failures are isolated per target database. A broken tenant is logged and
reported in its :class:`TargetResult`; the remaining tenants are still
processed and nothing is raised to the caller. The only exception that
escapes is :class:`~workforce.core.errors.ConfigurationError` for a missing
master connection string.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog
from alembic.migration import MigrationContext
from alembic.operations import Operations
from pydantic import BaseModel
from sqlalchemy import (
    Column,
    Connection,
    DefaultClause,
    Engine,
    MetaData,
    Table,
    create_engine,
    func,
    insert,
    inspect,
    pool,
    select,
)
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from workforce.config import Settings, to_sync_driver
from workforce.core.constants import EMPLOYEES_INITIALIZER_NAME, SEED_CREATED_BY
from workforce.core.errors import ConfigurationError
from workforce.modules.employees.models import employees_table
from workforce.modules.tenants.models import Tenant


logger = structlog.get_logger()

EngineFactory = Callable[[str], Engine]

# Baseline rows keyed by column name; timestamps come from the server.
SEED_EMPLOYEES: list[dict[str, Any]] = [
    {
        "Active": True,
        "CreatedBy": SEED_CREATED_BY,
        "Name": "Initial Employee 1",
        "FirstName": "Initial",
        "LastName": "Employee1",
        "Email": "initial1@example.com",
    },
    {
        "Active": True,
        "CreatedBy": SEED_CREATED_BY,
        "Name": "Initial Employee 2",
        "FirstName": "Initial",
        "LastName": "Employee2",
        "Email": "initial2@example.com",
    },
]


# ============================================================
# Options and results
# ============================================================


class EmployeesInitializerOptions(BaseModel):
    """Options for one initializer run.

    Attributes:
        master_connection_string: SQLAlchemy URL of the master database
        for_master: Process only the master instead of every tenant
        enable_seeding: Insert baseline rows into empty tables
    """

    master_connection_string: str
    for_master: bool = False
    enable_seeding: bool = False


class TargetStatus(str, Enum):
    """Outcome of processing one target database."""

    SUCCEEDED = "succeeded"
    CONNECTIVITY_ERROR = "connectivity_error"
    STATEMENT_ERROR = "statement_error"


class SchemaAction(str, Enum):
    """What reconciliation did to the table."""

    CREATED = "created"
    COLUMNS_RECONCILED = "columns_reconciled"


class SeedAction(str, Enum):
    """What the seeding step did."""

    SEEDED = "seeded"
    ALREADY_POPULATED = "already_populated"
    SEEDING_DISABLED = "seeding_disabled"


@dataclass(frozen=True)
class TargetResult:
    """Result of reconciling and seeding one target database.

    ``target`` is the connection URL with its password masked.
    """

    target: str
    status: TargetStatus
    schema_action: SchemaAction | None = None
    columns_added: tuple[str, ...] = ()
    seed_action: SeedAction | None = None
    rows_inserted: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is TargetStatus.SUCCEEDED


# ============================================================
# Helpers
# ============================================================


def create_sync_engine(connection_string: str) -> Engine:
    """Create a non-pooled engine for a one-shot initializer run."""
    return create_engine(connection_string, poolclass=pool.NullPool)


def mask_url(connection_string: str) -> str:
    """Render a connection string with its password hidden."""
    try:
        return make_url(connection_string).render_as_string(hide_password=True)
    except ArgumentError:
        return "<invalid connection string>"


def _detached_column(column: Column[Any]) -> Column[Any]:
    """Copy a table column so it can be attached to an ALTER statement."""
    server_default = None
    if isinstance(column.server_default, DefaultClause):
        server_default = column.server_default.arg
    return Column(
        column.name,
        column.type,
        nullable=column.nullable,
        server_default=server_default,
    )


# ============================================================
# Reconciliation and seeding
# ============================================================


def find_employees_table(connection: Connection) -> Table | None:
    """Look up the ``Employees`` table, matching its name case-insensitively.

    Returns:
        The table as it is named in the catalog, or None if it does not exist
    """
    wanted = employees_table.name.lower()
    for table_name in inspect(connection).get_table_names():
        if table_name.lower() != wanted:
            continue
        if table_name == employees_table.name:
            return employees_table
        return employees_table.to_metadata(MetaData(), name=table_name)
    return None


def reconcile_schema(connection: Connection) -> tuple[SchemaAction, tuple[str, ...]]:
    """Bring the ``Employees`` table at ``connection`` in line with the model.

    Creates the table with every column when it does not exist. Otherwise
    adds each missing non-key column, matching names case-insensitively.

    Args:
        connection: Open connection to the target database

    Returns:
        The action taken and the names of the columns that were added
    """
    table = find_employees_table(connection)

    if table is None:
        employees_table.create(connection)
        logger.info("employees_table_created", table=employees_table.name)
        return SchemaAction.CREATED, ()

    existing = {
        column["name"].lower() for column in inspect(connection).get_columns(table.name)
    }
    operations = Operations(MigrationContext.configure(connection))
    added: list[str] = []

    for column in employees_table.columns:
        # A key column cannot be bolted onto an existing table
        if column.primary_key or column.name.lower() in existing:
            continue

        operations.add_column(table.name, _detached_column(column))
        added.append(column.name)
        logger.info(
            "employees_column_added",
            column=column.name,
            type=column.type.compile(dialect=connection.dialect),
        )

    return SchemaAction.COLUMNS_RECONCILED, tuple(added)


def count_employees(connection: Connection, table: Table = employees_table) -> int:
    """Count rows in the ``Employees`` table."""
    return connection.execute(select(func.count()).select_from(table)).scalar_one()


def insert_seed_employees(connection: Connection, table: Table = employees_table) -> int:
    """Insert the baseline employees and return the number of rows inserted."""
    rows = [
        {**row, "CreatedAt": func.now(), "Created": func.now()}
        for row in SEED_EMPLOYEES
    ]
    result = connection.execute(insert(table).values(rows))
    return result.rowcount


# ============================================================
# Orchestration
# ============================================================


class EmployeesTableBuilder:
    """Runs reconciliation and seeding across master or tenant databases.

    Targets are processed one after another on the calling thread, each
    over its own engine and connection.

    Usage:
        builder = EmployeesTableBuilder(
            EmployeesInitializerOptions(master_connection_string=url)
        )
        results = builder.build()
    """

    def __init__(
        self,
        options: EmployeesInitializerOptions,
        engine_factory: EngineFactory = create_sync_engine,
    ) -> None:
        """Initialize the builder.

        Args:
            options: Master connection string and run flags
            engine_factory: Creates an engine from a connection string

        Raises:
            ConfigurationError: If the master connection string is empty
        """
        if not options.master_connection_string.strip():
            raise ConfigurationError(
                "Master connection string is not configured",
                details={"initializer": EMPLOYEES_INITIALIZER_NAME},
            )
        self.options = options
        self._engine_factory = engine_factory

    def build(self) -> list[TargetResult]:
        """Process the master or all tenants, depending on ``for_master``."""
        if self.options.for_master:
            return [self.build_master_database()]
        return self.build_tenant_databases()

    def build_master_database(self) -> TargetResult:
        """Reconcile and seed the master database."""
        return self._process_target(self.options.master_connection_string, role="master")

    def build_tenant_databases(self) -> list[TargetResult]:
        """Reconcile and seed every tenant database in the registry."""
        try:
            connection_strings = self.get_tenant_connection_strings()
        except Exception as exc:
            target = mask_url(self.options.master_connection_string)
            return [
                self._failed(
                    target, "registry", TargetStatus.CONNECTIVITY_ERROR, exc
                )
            ]

        results = [
            self._process_target(connection_string, role="tenant")
            for connection_string in connection_strings
        ]
        logger.info(
            "employees_tenants_processed",
            total=len(results),
            failed=sum(1 for result in results if not result.ok),
        )
        return results

    def get_tenant_connection_strings(self) -> list[str]:
        """Read tenant connection strings from the master's ``Tenants`` table.

        Rows with a NULL or blank connection string are skipped. Plain
        ``postgresql://`` URLs are pointed at the psycopg driver. Reachability
        is not checked here.
        """
        engine = self._engine_factory(self.options.master_connection_string)
        try:
            with engine.connect() as connection:
                values = connection.execute(
                    select(Tenant.connection_string)
                ).scalars().all()
        finally:
            engine.dispose()

        return [to_sync_driver(value) for value in values if value and value.strip()]

    def _process_target(self, connection_string: str, role: str) -> TargetResult:
        target = mask_url(connection_string)
        engine: Engine | None = None

        try:
            try:
                engine = self._engine_factory(connection_string)
                connection = engine.connect()
            except Exception as exc:
                return self._failed(target, role, TargetStatus.CONNECTIVITY_ERROR, exc)

            with connection:
                try:
                    with connection.begin():
                        schema_action, columns_added = reconcile_schema(connection)
                    seed_action, rows_inserted = self.seed(connection)
                except Exception as exc:
                    return self._failed(target, role, TargetStatus.STATEMENT_ERROR, exc)
        finally:
            if engine is not None:
                engine.dispose()

        logger.info(
            "employees_target_processed",
            target=target,
            role=role,
            schema_action=schema_action.value,
            columns_added=list(columns_added),
            seed_action=seed_action.value,
        )
        return TargetResult(
            target=target,
            status=TargetStatus.SUCCEEDED,
            schema_action=schema_action,
            columns_added=columns_added,
            seed_action=seed_action,
            rows_inserted=rows_inserted,
        )

    def seed(self, connection: Connection) -> tuple[SeedAction, int]:
        """Insert the baseline employees if seeding is on and the table is empty."""
        if not self.options.enable_seeding:
            return SeedAction.SEEDING_DISABLED, 0

        with connection.begin():
            table = find_employees_table(connection)
            if table is None:
                table = employees_table
            if count_employees(connection, table) > 0:
                return SeedAction.ALREADY_POPULATED, 0
            inserted = insert_seed_employees(connection, table)

        logger.info("employees_seed_inserted", count=inserted)
        return SeedAction.SEEDED, inserted

    @staticmethod
    def _failed(
        target: str, role: str, status: TargetStatus, exc: Exception
    ) -> TargetResult:
        logger.error(
            "employees_target_failed",
            target=target,
            role=role,
            status=status.value,
            error=str(exc),
            exc_info=True,
        )
        return TargetResult(target=target, status=status, error=str(exc))


def run_employees_initializer(
    settings: Settings,
    engine_factory: EngineFactory = create_sync_engine,
) -> list[TargetResult]:
    """Run the ``Employees`` initializer described by ``settings``.

    Looks up the initializer section named ``Employees`` in
    ``settings.database_initializers``. Without one, nothing is done.

    Args:
        settings: Application settings
        engine_factory: Creates an engine from a connection string

    Returns:
        One result per processed target

    Raises:
        ConfigurationError: If the master connection string is empty
    """
    section = settings.get_initializer(EMPLOYEES_INITIALIZER_NAME)
    if section is None:
        logger.info(
            "employees_initializer_skipped",
            reason="not configured in database_initializers",
        )
        return []

    options = EmployeesInitializerOptions(
        master_connection_string=settings.sync_database_url,
        for_master=section.for_master,
        enable_seeding=section.enable_seeding,
    )
    results = EmployeesTableBuilder(options, engine_factory=engine_factory).build()

    logger.info(
        "employees_initializer_finished",
        target="master" if options.for_master else "tenants",
        seeding=options.enable_seeding,
        succeeded=sum(1 for result in results if result.ok),
        failed=sum(1 for result in results if not result.ok),
    )
    return results
