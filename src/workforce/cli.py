"""Workforce command line: run initializers and inspect employee tables."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import create_async_engine

from workforce import __version__
from workforce.config import settings
from workforce.core.constants import DEFAULT_PAGE_SIZE
from workforce.core.database import create_session_factory
from workforce.core.errors import ConfigurationError
from workforce.core.logging import configure_logging
from workforce.modules.employees.initializer import (
    EmployeesInitializerOptions,
    EmployeesTableBuilder,
    TargetResult,
)
from workforce.modules.employees.repos import RepositoryMode, get_employee_repository
from workforce.modules.employees.schemas import EmployeePage


console = Console()

app = typer.Typer(
    name="workforce",
    help="Initialize and inspect employee tables across tenant databases.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """Workforce CLI - employee table tooling."""
    if version:
        console.print(f"[bold cyan]workforce[/bold cyan] version {__version__}")
        raise typer.Exit()


def _render_results(results: list[TargetResult]) -> Table:
    table = Table(title="Employees table initializer", show_header=True)
    table.add_column("Target", style="cyan")
    table.add_column("Status", no_wrap=True)
    table.add_column("Schema", no_wrap=True)
    table.add_column("Columns added")
    table.add_column("Seed", no_wrap=True)
    table.add_column("Error", style="red")

    for result in results:
        status = (
            f"[green]{result.status.value}[/green]"
            if result.ok
            else f"[red]{result.status.value}[/red]"
        )
        table.add_row(
            result.target,
            status,
            result.schema_action.value if result.schema_action else "",
            ", ".join(result.columns_added),
            result.seed_action.value if result.seed_action else "",
            result.error or "",
        )
    return table


@app.command(name="init-employees")
def init_employees(
    database_url: str = typer.Option(
        None,
        "--database-url",
        "-d",
        help="Master database URL. Defaults to DATABASE_URL.",
    ),
    for_master: bool = typer.Option(
        False, "--for-master", help="Process the master database only."
    ),
    seed: bool = typer.Option(
        False, "--seed", help="Insert baseline employees into empty tables."
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level."),
) -> None:
    """Create or patch the Employees table on the master or every tenant.

    Exits with code 1 when any target database failed.
    """
    configure_logging(log_level)

    source = settings.model_copy(update={"database_url": database_url or settings.database_url})
    options = EmployeesInitializerOptions(
        master_connection_string=source.sync_database_url,
        for_master=for_master,
        enable_seeding=seed,
    )

    try:
        builder = EmployeesTableBuilder(options)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e

    results = builder.build()

    if not results:
        console.print("[yellow]No tenant databases registered.[/yellow]")
        return

    console.print()
    console.print(_render_results(results))
    console.print()

    if not all(result.ok for result in results):
        raise typer.Exit(1)


async def _fetch_page(
    database_url: str,
    mode: RepositoryMode,
    page_index: int,
    page_size: int,
    search_query: str | None,
    sort_order: str | None,
) -> EmployeePage:
    engine = create_async_engine(database_url)
    try:
        async with create_session_factory(engine)() as session:
            repo = get_employee_repository(session, mode)
            return await repo.list_paginated(
                page_index=page_index,
                page_size=page_size,
                search_query=search_query,
                sort_order=sort_order,
            )
    finally:
        await engine.dispose()


@app.command(name="list-employees")
def list_employees(
    database_url: str = typer.Option(
        None,
        "--database-url",
        "-d",
        help="Database URL. Defaults to DATABASE_URL.",
    ),
    search: str = typer.Option(None, "--search", "-s", help="Match name fields."),
    sort: str = typer.Option("IdDesc", "--sort", help="Sort key, e.g. Name or NameDesc."),
    page: int = typer.Option(0, "--page", help="Zero-based page index."),
    page_size: int = typer.Option(DEFAULT_PAGE_SIZE, "--page-size", help="Rows per page."),
    mode: RepositoryMode = typer.Option(
        RepositoryMode.ORM, "--mode", help="Data-access strategy."
    ),
) -> None:
    """List one page of employees from a database."""
    source = settings.model_copy(update={"database_url": database_url or settings.database_url})

    try:
        result = asyncio.run(
            _fetch_page(source.async_database_url, mode, page, page_size, search, sort)
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    table = Table(title=f"Employees ({result.total} total)", show_header=True)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("First name")
    table.add_column("Last name")
    table.add_column("Email")
    table.add_column("Active", no_wrap=True)

    for employee in result.items:
        table.add_row(
            str(employee.id),
            employee.name or "",
            employee.first_name or "",
            employee.last_name or "",
            employee.email or "",
            "yes" if employee.active else "no",
        )

    console.print()
    console.print(table)
    console.print()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
