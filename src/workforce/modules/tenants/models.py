"""Tenant registry model.

The ``Tenants`` table lives in the master database and maps each tenant
to the connection string of its own database.
"""

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workforce.core.constants import MAX_TENANT_NAME_LENGTH
from workforce.core.database.base import Base


class Tenant(Base):
    """A tenant and the database that holds its data.

    Attributes:
        name: Display name of the tenant
        connection_string: SQLAlchemy URL of the tenant database
    """

    __tablename__ = "Tenants"

    id: Mapped[int] = mapped_column(
        "Id",
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str | None] = mapped_column(
        "Name",
        String(MAX_TENANT_NAME_LENGTH),
        nullable=True,
    )
    connection_string: Mapped[str | None] = mapped_column(
        "ConnectionString",
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name={self.name})>"
