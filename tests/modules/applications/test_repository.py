"""
Unit tests for applications repository queries.

Statements are captured from the session mock and compiled for PostgreSQL,
so the JSON path filters can be checked without a database.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from app.modules.applications import repository


def _capturing_db(found=None) -> MagicMock:
    db = MagicMock()
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=found)
    db.execute = AsyncMock(return_value=result)
    return db


def _compile(stmt):
    compiled = stmt.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


class TestFindDuplicate:
    """Tests for the (email, program, intake year) duplicate lookup."""

    @pytest.mark.asyncio
    async def test_filters_on_all_three_fields(self):
        db = _capturing_db()

        await repository.find_duplicate(db, "Aline@Example.com", "Computer Science", 2026)

        stmt = db.execute.await_args.args[0]
        sql, params = _compile(stmt)
        where = sql.split("WHERE", 1)[1]

        assert "applications.personal_info ->>" in where
        assert "applications.course_selection ->>" in where
        assert "AS INTEGER" in where
        assert where.count(" AND ") == 2
        assert "LIMIT" in sql

        values = set(params.values())
        assert {"email", "program", "intake_year"} <= values
        assert {"aline@example.com", "Computer Science", 2026} <= values

    @pytest.mark.asyncio
    async def test_email_is_lowercased(self):
        db = _capturing_db()

        await repository.find_duplicate(db, "ALINE@EXAMPLE.COM", "Nursing", 2025)

        _, params = _compile(db.execute.await_args.args[0])
        assert "aline@example.com" in params.values()
        assert "ALINE@EXAMPLE.COM" not in params.values()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,program,intake_year",
        [
            ("aline@example.com", "Computer Science", 2026),
            ("other@example.com", "Computer Science", 2026),
            ("aline@example.com", "Nursing", 2026),
            ("aline@example.com", "Computer Science", 2027),
        ],
    )
    async def test_each_field_reaches_the_query(self, email, program, intake_year):
        """Changing any one field changes the bound parameters."""
        db = _capturing_db()

        await repository.find_duplicate(db, email, program, intake_year)

        _, params = _compile(db.execute.await_args.args[0])
        values = set(params.values())
        assert email in values
        assert program in values
        assert intake_year in values

    @pytest.mark.asyncio
    async def test_returns_match(self, make_application):
        existing = make_application()
        db = _capturing_db(found=existing)

        found = await repository.find_duplicate(db, "aline@example.com", "Computer Science", 2026)

        assert found is existing
