"""Employee repositories.

Two interchangeable data-access strategies share one contract:

- :class:`EmployeeRepository` uses the SQLAlchemy ORM.
- :class:`EmployeeSqlRepository` uses hand-written SQL via ``text()``.

Both run on an ``AsyncSession`` and leave committing to the caller
(``get_db`` commits at the end of a request). Sort keys are resolved
through the whitelist in :mod:`workforce.modules.employees.paging`.
"""

from enum import Enum
from typing import Protocol

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    String,
    Text,
    func,
    or_,
    select,
    text,
)
from sqlalchemy.ext.asyncio import AsyncSession

from workforce.config import settings
from workforce.core.constants import DEFAULT_PAGE_SIZE
from workforce.modules.employees.models import Employee
from workforce.modules.employees.paging import order_by_clauses, order_by_sql, page_bounds
from workforce.modules.employees.schemas import (
    EmployeeCreate,
    EmployeePage,
    EmployeeRead,
    EmployeeUpdate,
)


class RepositoryMode(str, Enum):
    """Available data-access strategies."""

    ORM = "orm"
    SQL = "sql"


class EmployeeRepositoryProtocol(Protocol):
    """Contract shared by every employee repository."""

    async def create(self, data: EmployeeCreate) -> EmployeeRead: ...

    async def list_all(self) -> list[EmployeeRead]: ...

    async def get_by_id(self, employee_id: int) -> EmployeeRead | None: ...

    async def update(self, employee_id: int, data: EmployeeUpdate) -> bool: ...

    async def delete(self, employee_id: int) -> bool: ...

    async def list_paginated(
        self,
        page_index: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        search_query: str | None = None,
        sort_order: str | None = None,
    ) -> EmployeePage: ...


# ============================================================
# ORM strategy
# ============================================================


class EmployeeRepository:
    """Repository for Employee database operations using the ORM."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, data: EmployeeCreate) -> EmployeeRead:
        """Create a new employee.

        Args:
            data: Employee fields; timestamps come from server defaults

        Returns:
            The created employee with ID and timestamps populated
        """
        employee = Employee(**data.model_dump())
        self.session.add(employee)
        await self.session.flush()
        await self.session.refresh(employee)
        return EmployeeRead.model_validate(employee)

    async def list_all(self) -> list[EmployeeRead]:
        """List every employee, newest first."""
        result = await self.session.execute(select(Employee).order_by(Employee.id.desc()))
        return [EmployeeRead.model_validate(e) for e in result.scalars().all()]

    async def get_by_id(self, employee_id: int) -> EmployeeRead | None:
        """Get an employee by ID.

        Args:
            employee_id: The employee's ID

        Returns:
            Employee if found, None otherwise
        """
        employee = await self.session.get(Employee, employee_id)
        if employee is None:
            return None
        return EmployeeRead.model_validate(employee)

    async def update(self, employee_id: int, data: EmployeeUpdate) -> bool:
        """Update an employee's writable fields.

        Args:
            employee_id: The employee's ID
            data: New field values

        Returns:
            True if the employee exists and was updated
        """
        employee = await self.session.get(Employee, employee_id)
        if employee is None:
            return False

        for field, value in data.model_dump().items():
            setattr(employee, field, value)

        await self.session.flush()
        return True

    async def delete(self, employee_id: int) -> bool:
        """Delete an employee.

        Args:
            employee_id: The employee's ID

        Returns:
            True if the employee existed and was deleted
        """
        employee = await self.session.get(Employee, employee_id)
        if employee is None:
            return False

        await self.session.delete(employee)
        await self.session.flush()
        return True

    async def list_paginated(
        self,
        page_index: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        search_query: str | None = None,
        sort_order: str | None = None,
    ) -> EmployeePage:
        """List employees with search, sorting and pagination.

        Args:
            page_index: Zero-based page number
            page_size: Number of items per page
            search_query: Substring matched against name fields
            sort_order: Key from the sort whitelist

        Returns:
            The requested page and the total number of matches
        """
        offset, limit = page_bounds(page_index, page_size)

        stmt = select(Employee)
        if search_query and search_query.strip():
            pattern = f"%{search_query.strip()}%"
            stmt = stmt.where(
                or_(
                    Employee.name.ilike(pattern),
                    Employee.first_name.ilike(pattern),
                    Employee.last_name.ilike(pattern),
                )
            )

        # Count total
        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.session.execute(count_stmt)).scalar_one()

        # Get paginated results
        result = await self.session.execute(
            stmt.order_by(*order_by_clauses(sort_order)).offset(offset).limit(limit)
        )
        items = [EmployeeRead.model_validate(e) for e in result.scalars().all()]
        return EmployeePage(items=items, total=total)


# ============================================================
# Hand-written SQL strategy
# ============================================================

_SELECT_COLUMNS = """
    "Id" AS id, "Active" AS active, "CreatedAt" AS created_at,
    "CreatedBy" AS created_by, "Name" AS name, "FirstName" AS first_name,
    "LastName" AS last_name, "Created" AS created, "Email" AS email
"""

_RESULT_TYPES = {
    "id": BigInteger,
    "active": Boolean,
    "created_at": DateTime(timezone=True),
    "created_by": String,
    "name": Text,
    "first_name": String,
    "last_name": String,
    "created": DateTime(timezone=True),
    "email": String,
}

_SEARCH_FILTER = """
    (LOWER("Name") LIKE LOWER(:q)
     OR LOWER("FirstName") LIKE LOWER(:q)
     OR LOWER("LastName") LIKE LOWER(:q))
"""


class EmployeeSqlRepository:
    """Repository for Employee database operations using hand-written SQL.

    Values are always passed as bound parameters. The only dynamic SQL
    fragment is the ``ORDER BY`` clause, which comes from the whitelist.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, data: EmployeeCreate) -> EmployeeRead:
        """Create a new employee with ``CreatedAt`` from the server clock."""
        result = await self.session.execute(
            text(
                """
                INSERT INTO "Employees"
                    ("Active", "CreatedAt", "CreatedBy", "Name", "FirstName",
                     "LastName", "Email")
                VALUES
                    (:active, CURRENT_TIMESTAMP, :created_by, :name, :first_name,
                     :last_name, :email)
                RETURNING "Id"
                """
            ),
            data.model_dump(),
        )
        employee_id = result.scalar_one()

        employee = await self.get_by_id(employee_id)
        if employee is None:
            raise RuntimeError(f"Employee {employee_id} vanished after insert")
        return employee

    async def list_all(self) -> list[EmployeeRead]:
        """List every employee, newest first."""
        stmt = text(
            f'SELECT {_SELECT_COLUMNS} FROM "Employees" ORDER BY "Id" DESC'
        ).columns(**_RESULT_TYPES)
        result = await self.session.execute(stmt)
        return [EmployeeRead.model_validate(dict(row)) for row in result.mappings()]

    async def get_by_id(self, employee_id: int) -> EmployeeRead | None:
        """Get an employee by ID, or None."""
        stmt = text(
            f'SELECT {_SELECT_COLUMNS} FROM "Employees" WHERE "Id" = :id'
        ).columns(**_RESULT_TYPES)
        row = (await self.session.execute(stmt, {"id": employee_id})).mappings().first()
        if row is None:
            return None
        return EmployeeRead.model_validate(dict(row))

    async def update(self, employee_id: int, data: EmployeeUpdate) -> bool:
        """Update an employee's writable fields. Returns True if a row changed."""
        result = await self.session.execute(
            text(
                """
                UPDATE "Employees"
                SET "Active" = :active,
                    "Name" = :name,
                    "FirstName" = :first_name,
                    "LastName" = :last_name,
                    "CreatedBy" = :created_by,
                    "Email" = :email
                WHERE "Id" = :id
                """
            ),
            {**data.model_dump(), "id": employee_id},
        )
        return result.rowcount > 0

    async def delete(self, employee_id: int) -> bool:
        """Delete an employee. Returns True if a row was removed."""
        result = await self.session.execute(
            text('DELETE FROM "Employees" WHERE "Id" = :id'),
            {"id": employee_id},
        )
        return result.rowcount > 0

    async def list_paginated(
        self,
        page_index: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        search_query: str | None = None,
        sort_order: str | None = None,
    ) -> EmployeePage:
        """List employees with search, sorting and pagination."""
        offset, limit = page_bounds(page_index, page_size)

        where = "1=1"
        params: dict[str, object] = {"offset": offset, "limit": limit}
        if search_query and search_query.strip():
            where = _SEARCH_FILTER
            params["q"] = f"%{search_query.strip()}%"

        total = (
            await self.session.execute(
                text(f'SELECT COUNT(*) FROM "Employees" WHERE {where}'), params
            )
        ).scalar_one()

        stmt = text(
            f'SELECT {_SELECT_COLUMNS} FROM "Employees" WHERE {where} '
            f"{order_by_sql(sort_order)} LIMIT :limit OFFSET :offset"
        ).columns(**_RESULT_TYPES)
        result = await self.session.execute(stmt, params)
        items = [EmployeeRead.model_validate(dict(row)) for row in result.mappings()]
        return EmployeePage(items=items, total=total)


def get_employee_repository(
    session: AsyncSession,
    mode: RepositoryMode | str | None = None,
) -> EmployeeRepositoryProtocol:
    """Build the employee repository for the configured strategy.

    Args:
        session: Database session the repository works in
        mode: Strategy to use; defaults to ``settings.employee_repository_mode``

    Returns:
        A repository implementing :class:`EmployeeRepositoryProtocol`

    Raises:
        ValueError: If the mode is not a known strategy
    """
    resolved = RepositoryMode(mode or settings.employee_repository_mode)

    if resolved is RepositoryMode.SQL:
        return EmployeeSqlRepository(session)
    return EmployeeRepository(session)
