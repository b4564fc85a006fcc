"""
Applications Repository

Database operations for applications. Section fields live in JSONB columns,
so filters on nested values use JSON path expressions.

Design Principles:
- All queries are parameterized
- Only data access here; lifecycle rules live in lifecycle.py
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .lifecycle import APPLICATION_NUMBER_PREFIX, parse_application_sequence
from .models import Application, ApplicationStatus, ProgramLevel

SORTABLE_COLUMNS = {"created_at", "updated_at", "submitted_at", "application_number", "status"}


def _email_column():
    return Application.personal_info["email"].astext


def _program_column():
    return Application.course_selection["program"].astext


async def create(db: AsyncSession, application: Application) -> Application:
    """Persist a new application."""
    db.add(application)
    await db.commit()
    await db.refresh(application)
    return application


async def save(db: AsyncSession, application: Application) -> Application:
    """Commit pending changes on a loaded application."""
    await db.commit()
    await db.refresh(application)
    return application


async def delete(db: AsyncSession, application: Application) -> None:
    await db.delete(application)
    await db.commit()


async def get_by_id(db: AsyncSession, id: UUID) -> Application | None:
    """Get application by ID."""
    return await db.get(Application, id)


async def get_by_application_number(db: AsyncSession, number: str) -> Application | None:
    result = await db.execute(
        select(Application).where(Application.application_number == number)
    )
    return result.scalar_one_or_none()


async def find_duplicate(
    db: AsyncSession,
    email: str,
    program: str,
    intake_year: int,
) -> Application | None:
    """Find an application with the same (email, program, intake year)."""
    result = await db.execute(
        select(Application)
        .where(
            _email_column() == email.lower(),
            _program_column() == program,
            Application.course_selection["intake_year"].as_integer() == intake_year,
        )
        .limit(1)
    )
    return result.scalar_one_or_none()


async def list_by_email(db: AsyncSession, email: str) -> list[Application]:
    result = await db.execute(
        select(Application)
        .where(_email_column() == email.lower())
        .order_by(desc(Application.created_at))
    )
    return list(result.scalars().all())


async def list_by_status(db: AsyncSession, status: ApplicationStatus) -> list[Application]:
    result = await db.execute(
        select(Application)
        .where(Application.status == status)
        .order_by(desc(Application.created_at))
    )
    return list(result.scalars().all())


async def list_by_program(db: AsyncSession, program: str) -> list[Application]:
    result = await db.execute(
        select(Application)
        .where(_program_column() == program)
        .order_by(desc(Application.created_at))
    )
    return list(result.scalars().all())


async def list_applications(
    db: AsyncSession,
    *,
    status: ApplicationStatus | None = None,
    program: str | None = None,
    level: ProgramLevel | None = None,
    intake_year: int | None = None,
    search: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Application], int]:
    """
    Get applications with filters, search, sorting and pagination.

    Args:
        db: Database session
        status: Filter by status
        program: Filter by program name (exact)
        level: Filter by program level
        intake_year: Filter by intake year
        search: Case-insensitive substring across first name, last name,
                email, phone and application number
        sort_by: One of SORTABLE_COLUMNS. Default: created_at
        sort_order: asc or desc. Default: desc (newest first)
        skip: Records to skip
        limit: Maximum records to return

    Returns:
        Tuple of (applications, total count matching filters)
    """
    query = select(Application)

    if status:
        query = query.where(Application.status == status)
    if program:
        query = query.where(_program_column() == program)
    if level:
        query = query.where(Application.course_selection["level"].astext == level.value)
    if intake_year:
        query = query.where(Application.course_selection["intake_year"].as_integer() == intake_year)

    if search:
        search_pattern = f"%{search}%"
        query = query.where(
            or_(
                Application.personal_info["first_name"].astext.ilike(search_pattern),
                Application.personal_info["last_name"].astext.ilike(search_pattern),
                _email_column().ilike(search_pattern),
                Application.personal_info["phone"].astext.ilike(search_pattern),
                Application.application_number.ilike(search_pattern),
            )
        )

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar() or 0

    if sort_by not in SORTABLE_COLUMNS:
        sort_by = "created_at"
    sort_column = getattr(Application, sort_by)
    query = query.order_by(asc(sort_column) if sort_order.lower() == "asc" else desc(sort_column))

    result = await db.execute(query.offset(skip).limit(limit))
    return list(result.scalars().all()), total


async def count_created_since(db: AsyncSession, since: datetime) -> int:
    """Count applications created at or after ``since``."""
    result = await db.execute(
        select(func.count()).select_from(Application).where(Application.created_at >= since)
    )
    return result.scalar() or 0


async def get_last_sequence_for_year(db: AsyncSession, year: int) -> int:
    """
    Highest sequence already assigned for ``year``.

    Numbers are zero padded, so the lexical maximum is the numeric maximum.
    """
    result = await db.execute(
        select(func.max(Application.application_number)).where(
            Application.application_number.like(f"{APPLICATION_NUMBER_PREFIX}-{year}-%")
        )
    )
    return parse_application_sequence(result.scalar())


async def get_status_counts(db: AsyncSession) -> dict[str, int]:
    """Application counts grouped by status value."""
    result = await db.execute(
        select(Application.status, func.count(Application.id)).group_by(Application.status)
    )
    counts: dict[str, int] = {}
    for status, count in result.all():
        key = status.value if isinstance(status, ApplicationStatus) else str(status)
        counts[key] = count
    return counts
