"""Sort whitelist and paging bounds for employee listings.

Sort keys come straight from clients, so they are only ever looked up in
:data:`SORT_ORDERS` and never interpolated into SQL. Unknown keys fall
back to newest-first.
"""

from typing import Any

from sqlalchemy import ColumnElement, false, func, literal

from workforce.core.constants import MAX_PAGE_SIZE
from workforce.modules.employees.models import employees_table


# (column name, descending, value that stands in for NULL)
SortTerm = tuple[str, bool, Any]

DEFAULT_SORT_ORDER = "IdDesc"

SORT_ORDERS: dict[str, tuple[SortTerm, ...]] = {
    "Id": (("Id", False, None),),
    "IdDesc": (("Id", True, None),),
    "Name": (("Name", False, ""), ("Id", True, None)),
    "NameDesc": (("Name", True, ""), ("Id", True, None)),
    "FirstName": (("FirstName", False, ""), ("LastName", False, ""), ("Id", True, None)),
    "FirstNameDesc": (("FirstName", True, ""), ("LastName", True, ""), ("Id", True, None)),
    "LastName": (("LastName", False, ""), ("FirstName", False, ""), ("Id", True, None)),
    "LastNameDesc": (("LastName", True, ""), ("FirstName", True, ""), ("Id", True, None)),
    "CreatedAt": (("CreatedAt", False, None), ("Id", True, None)),
    "CreatedAtDesc": (("CreatedAt", True, None), ("Id", True, None)),
    "Active": (("Active", False, False), ("Id", True, None)),
    "ActiveDesc": (("Active", True, False), ("Id", True, None)),
}


def resolve_sort_order(sort_order: str | None) -> tuple[SortTerm, ...]:
    """Map a client sort key to sort terms, defaulting to ``IdDesc``."""
    key = (sort_order or "").strip()
    return SORT_ORDERS.get(key, SORT_ORDERS[DEFAULT_SORT_ORDER])


def _sort_expression(name: str, null_value: Any) -> ColumnElement[Any]:
    column = employees_table.c[name]
    if null_value is None:
        return column
    if null_value is False:
        return func.coalesce(column, false())
    return func.coalesce(column, literal(null_value))


def order_by_clauses(sort_order: str | None) -> list[ColumnElement[Any]]:
    """Build ``ORDER BY`` expressions for SQLAlchemy selects."""
    clauses = []
    for name, descending, null_value in resolve_sort_order(sort_order):
        expression = _sort_expression(name, null_value)
        clauses.append(expression.desc() if descending else expression.asc())
    return clauses


def order_by_sql(sort_order: str | None) -> str:
    """Render an ``ORDER BY`` clause for hand-written SQL."""
    terms = []
    for name, descending, null_value in resolve_sort_order(sort_order):
        column = f'"{employees_table.c[name].name}"'
        if null_value is False:
            column = f"COALESCE({column}, false)"
        elif null_value is not None:
            column = f"COALESCE({column}, '')"
        terms.append(f"{column} {'DESC' if descending else 'ASC'}")
    return "ORDER BY " + ", ".join(terms)


def page_bounds(page_index: int, page_size: int) -> tuple[int, int]:
    """Convert a zero-based page index and size to ``(offset, limit)``.

    Args:
        page_index: Zero-based page number
        page_size: Rows per page, capped at ``MAX_PAGE_SIZE``

    Returns:
        Tuple of (offset, limit)

    Raises:
        ValueError: If page_index is negative or page_size is below 1
    """
    if page_index < 0:
        raise ValueError("page_index must be zero or greater")
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    limit = min(page_size, MAX_PAGE_SIZE)
    return page_index * limit, limit
