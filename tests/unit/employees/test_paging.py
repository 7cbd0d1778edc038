"""Tests for the sort whitelist and page bounds."""

import pytest

from workforce.core.constants import MAX_PAGE_SIZE
from workforce.modules.employees.models import employees_table
from workforce.modules.employees.paging import (
    DEFAULT_SORT_ORDER,
    SORT_ORDERS,
    order_by_clauses,
    order_by_sql,
    page_bounds,
    resolve_sort_order,
)


class TestSortOrders:
    """Tests for resolving client sort keys."""

    def test_known_key(self):
        """A whitelisted key maps to its terms."""
        assert resolve_sort_order("Name") == (("Name", False, ""), ("Id", True, None))

    @pytest.mark.parametrize(
        "value",
        [None, "", "  ", "name", "Bogus", '"Name"; DROP TABLE "Employees"--'],
    )
    def test_unknown_key_falls_back_to_default(self, value):
        """Anything outside the whitelist sorts newest first."""
        assert resolve_sort_order(value) == SORT_ORDERS[DEFAULT_SORT_ORDER]

    def test_every_term_names_a_table_column(self):
        """Sort terms are keyed by the column names of the Employees table."""
        for terms in SORT_ORDERS.values():
            for name, _, _ in terms:
                assert name in employees_table.c

    def test_every_key_ends_with_a_deterministic_term(self):
        """Each order includes the primary key so pages never overlap."""
        for terms in SORT_ORDERS.values():
            assert "Id" in [name for name, _, _ in terms]

    def test_order_by_clauses(self):
        """Clauses cover every term, with NULL names coalesced."""
        rendered = [
            str(clause.compile(compile_kwargs={"literal_binds": True}))
            for clause in order_by_clauses("LastNameDesc")
        ]

        assert rendered == [
            "coalesce(\"Employees\".\"LastName\", '') DESC",
            "coalesce(\"Employees\".\"FirstName\", '') DESC",
            '"Employees"."Id" DESC',
        ]

    def test_order_by_clauses_default(self):
        rendered = [str(clause) for clause in order_by_clauses(None)]

        assert rendered == ['"Employees"."Id" DESC']

    def test_order_by_sql(self):
        """Hand-written SQL gets quoted column names."""
        assert order_by_sql("Name") == 'ORDER BY COALESCE("Name", \'\') ASC, "Id" DESC'

    def test_order_by_sql_coalesces_active(self):
        assert order_by_sql("ActiveDesc") == (
            'ORDER BY COALESCE("Active", false) DESC, "Id" DESC'
        )

    def test_order_by_sql_ignores_injection(self):
        """Untrusted input never reaches the rendered clause."""
        assert order_by_sql("Id; DELETE FROM x") == 'ORDER BY "Id" DESC'


class TestPageBounds:
    """Tests for converting page index and size to offset and limit."""

    def test_first_page(self):
        assert page_bounds(0, 10) == (0, 10)

    def test_later_page(self):
        assert page_bounds(3, 25) == (75, 25)

    def test_size_is_capped(self):
        """Oversized pages are clamped to the maximum."""
        assert page_bounds(2, MAX_PAGE_SIZE * 5) == (2 * MAX_PAGE_SIZE, MAX_PAGE_SIZE)

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError, match="page_index"):
            page_bounds(-1, 10)

    @pytest.mark.parametrize("size", [0, -5])
    def test_non_positive_size_rejected(self, size):
        with pytest.raises(ValueError, match="page_size"):
            page_bounds(0, size)
