"""Employee database model.

The mapped table is also the canonical schema that
:mod:`workforce.modules.employees.initializer` enforces on every
master and tenant database.
"""

from datetime import datetime
from typing import cast

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Integer,
    String,
    Table,
    Text,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from workforce.core.constants import (
    MAX_CREATED_BY_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
)
from workforce.core.database.base import Base


class Employee(Base):
    """Employee record.

    Attributes:
        id: Identifier assigned by the database, never by the application
        active: Whether the employee is active (server default true)
        created_at: Record creation time (server default now)
        created_by: Name of the record creator
        name: Full name
        first_name: Given name
        last_name: Family name
        created: Creation date (server default now)
        email: Email address
    """

    __tablename__ = "Employees"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns
    id: Mapped[int] = mapped_column(
        "Id",
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    active: Mapped[bool | None] = mapped_column(
        "Active",
        Boolean,
        nullable=True,
        server_default=text("true"),
    )
    created_at: Mapped[datetime | None] = mapped_column(
        "CreatedAt",
        DateTime(timezone=True),
        nullable=True,
        server_default=func.now(),
    )
    created_by: Mapped[str | None] = mapped_column(
        "CreatedBy",
        String(MAX_CREATED_BY_LENGTH),
        nullable=True,
    )
    name: Mapped[str | None] = mapped_column(
        "Name",
        Text,
        nullable=True,
    )
    first_name: Mapped[str | None] = mapped_column(
        "FirstName",
        String(MAX_NAME_LENGTH),
        nullable=True,
    )
    last_name: Mapped[str | None] = mapped_column(
        "LastName",
        String(MAX_NAME_LENGTH),
        nullable=True,
    )
    created: Mapped[datetime | None] = mapped_column(
        "Created",
        DateTime(timezone=True),
        nullable=True,
        server_default=func.now(),
    )
    email: Mapped[str | None] = mapped_column(
        "Email",
        String(MAX_EMAIL_LENGTH),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name={self.name})>"


employees_table = cast(Table, Employee.__table__)
