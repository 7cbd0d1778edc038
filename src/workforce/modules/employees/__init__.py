"""Employees module - employee records, repositories and table initializer."""

from workforce.modules.employees.initializer import (
    EmployeesInitializerOptions,
    EmployeesTableBuilder,
    TargetResult,
    TargetStatus,
    run_employees_initializer,
)
from workforce.modules.employees.models import Employee
from workforce.modules.employees.repos import (
    EmployeeRepository,
    EmployeeRepositoryProtocol,
    EmployeeSqlRepository,
    RepositoryMode,
    get_employee_repository,
)


# Module metadata
__module_info__ = {
    "name": "employees",
    "version": "1.0.0",
    "description": "Employee records with master/tenant table initializer",
    "dependencies": ["tenants"],
}

__all__ = [
    "Employee",
    "EmployeeRepository",
    "EmployeeRepositoryProtocol",
    "EmployeeSqlRepository",
    "EmployeesInitializerOptions",
    "EmployeesTableBuilder",
    "RepositoryMode",
    "TargetResult",
    "TargetStatus",
    "get_employee_repository",
    "run_employees_initializer",
]
