"""Pydantic schemas for employee operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from workforce.core.constants import (
    MAX_CREATED_BY_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
)


class EmployeeBase(BaseModel):
    """Fields an application may write."""

    active: bool | None = True
    name: str | None = None
    first_name: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    last_name: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    created_by: str | None = Field(None, max_length=MAX_CREATED_BY_LENGTH)
    email: EmailStr | None = Field(None, max_length=MAX_EMAIL_LENGTH)


class EmployeeCreate(EmployeeBase):
    """Schema for creating an employee. Timestamps are set by the database."""

    pass


class EmployeeUpdate(EmployeeBase):
    """Schema for updating an employee. Timestamps are never changed."""

    pass


class EmployeeRead(EmployeeBase):
    """Schema for reading an employee."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str | None = None
    created_at: datetime | None = None
    created: datetime | None = None


class EmployeePage(BaseModel):
    """One page of employees plus the total number of matches."""

    items: list[EmployeeRead]
    total: int
