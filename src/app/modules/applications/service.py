"""
Applications Service Layer

Business logic for program applications. Orchestrates the attachment
manager, the lifecycle rules and the repository.

This module implements:
1. Intake (draft creation):
   - Validate every uploaded file before anything is stored
   - Reject duplicates on (email, program, intake year)
   - Store files, then persist the draft; stored files are removed again
     if the insert fails

2. Editing:
   - Field-by-field merge of partial sections
   - Document slot replacement
   - Status and review fields accepted from admins only

3. Submission:
   - Terms and mandatory documents checked, missing items reported
   - Application number assigned once, APP-<year>-<sequence>

4. Review:
   - Admin status changes with history, reviewer stamping on under-review
   - Deletion with best-effort removal of every attached file

5. Queries and statistics
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser
from app.core.exceptions import AuthorizationError, InternalError
from app.core.storage import LocalFileStorage
from app.modules.applications import attachments, lifecycle, repository
from app.modules.applications.attachments import StoredUpload, Upload
from app.modules.applications.exceptions import (
    ApplicationNotFoundError,
    DuplicateApplicationError,
    DuplicateApplicationNumberError,
    InvalidApplicationStateError,
)
from app.modules.applications.models import Application, ApplicationStatus, ProgramLevel
from app.modules.applications.schemas import (
    ApplicationCreate,
    ApplicationStatistics,
    ApplicationUpdate,
)

logger = logging.getLogger(__name__)

PRIVILEGED_UPDATE_FIELDS = {"status", "status_notes", "review_notes", "reviewer_comments"}


async def _persist_with_uploads(
    db: AsyncSession,
    storage: LocalFileStorage,
    application: Application,
    stored: list[StoredUpload],
    *,
    is_new: bool,
) -> Application:
    """Write the record; on failure remove the files stored for this request."""
    try:
        if is_new:
            return await repository.create(db, application)
        return await repository.save(db, application)
    except SQLAlchemyError as e:
        logger.exception(f"Failed to persist application {application.id}")
        await db.rollback()
        await attachments.discard_files([item.metadata.path for item in stored], storage)
        raise InternalError("Failed to save the application.") from e


# ============================================
# Intake
# ============================================


async def create_application(
    db: AsyncSession,
    storage: LocalFileStorage,
    data: ApplicationCreate,
    files: dict[str, list[Upload]] | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> Application:
    """
    Create a draft application.

    Args:
        db: Database session
        storage: File storage for uploaded documents
        data: Validated sections
        files: Uploads keyed by document slot
        ip_address: Client address, for audit
        user_agent: Client user agent, for audit

    Returns:
        The persisted draft

    Raises:
        UnsupportedFileTypeError / FileTooLargeError / TooManyFilesError:
            If an upload is rejected (nothing is stored)
        DuplicateApplicationError: If the applicant already applied to the
            same program and intake year (nothing is stored)
        InternalError: If storage or the database fails
    """
    pending = await attachments.prepare_uploads(files or {})

    email = data.personal_info.email
    program = data.course_selection.program
    intake_year = data.course_selection.intake_year

    existing = await repository.find_duplicate(db, email, program, intake_year)
    if existing:
        logger.warning(
            f"Duplicate application attempt: email={email}, program={program}, "
            f"intake_year={intake_year}"
        )
        raise DuplicateApplicationError(email, program, intake_year)

    stored = await attachments.store_uploads(pending, storage)

    application = Application(
        personal_info=data.personal_info.model_dump(mode="json"),
        location_info=data.location_info.model_dump(mode="json"),
        course_selection=data.course_selection.model_dump(mode="json"),
        documents=attachments.apply_uploads({}, stored),
        education=[entry.model_dump(mode="json") for entry in data.education],
        work_experience=[entry.model_dump(mode="json") for entry in data.work_experience],
        additional_info=(
            data.additional_info.model_dump(mode="json") if data.additional_info else None
        ),
        payment=data.payment.model_dump(mode="json") if data.payment else None,
        terms_agreed=data.terms_agreed,
        status=ApplicationStatus.DRAFT,
        status_history=[],
        ip_address=ip_address,
        user_agent=user_agent[:500] if user_agent else None,
    )

    application = await _persist_with_uploads(db, storage, application, stored, is_new=True)
    logger.info(f"Created draft application {application.id} for program: {program}")
    return application


# ============================================
# Editing
# ============================================


async def update_application(
    db: AsyncSession,
    storage: LocalFileStorage,
    application_id: UUID,
    data: ApplicationUpdate,
    files: dict[str, list[Upload]] | None = None,
    actor: AdminUser | None = None,
) -> Application:
    """
    Apply a partial update.

    Each provided section is merged field by field into the stored one;
    fields absent from the payload keep their values. A document slot that
    receives a new file is overwritten (the previous file stays on disk).

    Raises:
        ApplicationNotFoundError: If the id does not resolve
        AuthorizationError: If status or review fields are sent without an admin
        InvalidApplicationStateError: If a non-admin edits a non-draft, or a
            draft is moved to submitted without the submit operation
        ValidationError: If a merged section is invalid
    """
    application = await get_application(db, application_id)

    fields_set = data.model_fields_set
    privileged_fields = fields_set & PRIVILEGED_UPDATE_FIELDS
    if privileged_fields and actor is None:
        logger.warning(
            f"Rejected privileged fields {sorted(privileged_fields)} "
            f"on application {application_id} from non-admin caller"
        )
        raise AuthorizationError("Only admins can change status or review fields.")

    lifecycle.ensure_editable(application, privileged=actor is not None)

    # Validate everything before touching storage or the record
    pending = await attachments.prepare_uploads(files or {})

    personal_info = (
        lifecycle.merge_personal_info(application.personal_info, data.personal_info)
        if data.personal_info is not None
        else None
    )
    location_info = (
        lifecycle.merge_location_info(application.location_info, data.location_info)
        if data.location_info is not None
        else None
    )
    course_selection = (
        lifecycle.merge_course_selection(application.course_selection, data.course_selection)
        if data.course_selection is not None
        else None
    )
    if data.status is not None:
        lifecycle.validate_status_change(application, data.status)

    stored = await attachments.store_uploads(pending, storage)

    if personal_info is not None:
        application.personal_info = personal_info
    if location_info is not None:
        application.location_info = location_info
    if course_selection is not None:
        application.course_selection = course_selection
    if data.terms_agreed is not None:
        application.terms_agreed = data.terms_agreed
    if data.education is not None:
        application.education = [entry.model_dump(mode="json") for entry in data.education]
    if data.work_experience is not None:
        application.work_experience = [
            entry.model_dump(mode="json") for entry in data.work_experience
        ]
    if "additional_info" in fields_set:
        application.additional_info = (
            data.additional_info.model_dump(mode="json") if data.additional_info else None
        )
    if "payment" in fields_set:
        application.payment = data.payment.model_dump(mode="json") if data.payment else None
    if stored:
        application.documents = attachments.apply_uploads(application.documents, stored)

    if actor is not None:
        if data.status is not None:
            lifecycle.record_status_change(
                application, data.status, changed_by=actor.id, notes=data.status_notes
            )
        if "review_notes" in fields_set:
            application.review_notes = data.review_notes
        if "reviewer_comments" in fields_set:
            application.reviewer_comments = data.reviewer_comments

    application = await _persist_with_uploads(db, storage, application, stored, is_new=False)
    logger.info(f"Updated application {application.id}")
    return application


# ============================================
# Submission
# ============================================


async def _next_application_number(db: AsyncSession, now: datetime) -> str:
    year_start = datetime(now.year, 1, 1, tzinfo=UTC)
    created_this_year = await repository.count_created_since(db, year_start)
    last_assigned = await repository.get_last_sequence_for_year(db, now.year)
    sequence = lifecycle.next_application_sequence(created_this_year, last_assigned)
    return lifecycle.format_application_number(now.year, sequence)


async def submit_application(db: AsyncSession, application_id: UUID) -> Application:
    """
    Submit a draft.

    Raises:
        ApplicationNotFoundError: If the id does not resolve
        InvalidApplicationStateError: If the application is not a draft
        PreconditionFailedError: If terms are not agreed or mandatory
            documents are missing (the error lists them)
        DuplicateApplicationNumberError: If a concurrent submission took the
            same number; the caller should retry
    """
    application = await get_application(db, application_id)

    if application.status != ApplicationStatus.DRAFT:
        raise InvalidApplicationStateError(
            "Only draft applications can be submitted.",
            expected_state=ApplicationStatus.DRAFT.value,
        )

    lifecycle.check_submission_requirements(application)

    now = datetime.now(UTC)
    # A draft that was submitted before and reopened keeps its number
    number = application.application_number or await _next_application_number(db, now)
    lifecycle.mark_submitted(application, number, now)

    try:
        application = await repository.save(db, application)
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Application number collision on {number} for {application_id}")
        raise DuplicateApplicationNumberError(number) from e

    logger.info(f"Application {application.id} submitted as {number}")
    return application


# ============================================
# Review
# ============================================


async def change_status(
    db: AsyncSession,
    application_id: UUID,
    new_status: ApplicationStatus,
    actor: AdminUser,
    notes: str | None = None,
) -> Application:
    """
    Move an application to any status (admin only).

    A history entry is appended only when the status actually changes.

    Raises:
        ApplicationNotFoundError: If the id does not resolve
        InvalidApplicationStateError: If a never-submitted application is
            moved to submitted
    """
    application = await get_application(db, application_id)
    lifecycle.validate_status_change(application, new_status)

    previous = application.status
    if lifecycle.record_status_change(application, new_status, changed_by=actor.id, notes=notes):
        application = await repository.save(db, application)
        logger.info(
            f"Admin {actor.email} moved application {application_id} "
            f"from {previous.value} to {new_status.value}"
        )
    return application


async def delete_application(
    db: AsyncSession,
    storage: LocalFileStorage,
    application_id: UUID,
) -> None:
    """
    Delete an application and, best effort, its files.

    The record is removed first; each file deletion failure is logged and
    does not stop the others.
    """
    application = await get_application(db, application_id)
    paths = attachments.attached_file_paths(application.documents)

    await repository.delete(db, application)
    failed = await attachments.discard_files(paths, storage)

    if failed:
        logger.warning(
            f"Deleted application {application_id}; {len(failed)} of {len(paths)} files remain"
        )
    else:
        logger.info(f"Deleted application {application_id} and {len(paths)} files")


# ============================================
# Queries
# ============================================


async def get_application(db: AsyncSession, application_id: UUID) -> Application:
    """
    Get an application by ID.

    Raises:
        ApplicationNotFoundError: If the application doesn't exist
    """
    application = await repository.get_by_id(db, application_id)
    if not application:
        raise ApplicationNotFoundError(application_id)
    return application


async def get_by_application_number(db: AsyncSession, number: str) -> Application:
    application = await repository.get_by_application_number(db, number)
    if not application:
        raise ApplicationNotFoundError(number)
    return application


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
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Application], int]:
    """Filtered, paginated list. Returns (applications, total)."""
    return await repository.list_applications(
        db,
        status=status,
        program=program,
        level=level,
        intake_year=intake_year,
        search=search.strip() if search else None,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=(page - 1) * limit,
        limit=limit,
    )


async def list_by_email(db: AsyncSession, email: str) -> list[Application]:
    return await repository.list_by_email(db, email.strip().lower())


async def list_by_status(db: AsyncSession, status: ApplicationStatus) -> list[Application]:
    return await repository.list_by_status(db, status)


async def list_by_program(db: AsyncSession, program: str) -> list[Application]:
    return await repository.list_by_program(db, program)


async def get_statistics(db: AsyncSession) -> ApplicationStatistics:
    """Totals plus a per-status breakdown (every status present, zero if unused)."""
    counts = await repository.get_status_counts(db)
    by_status = {status.value: counts.get(status.value, 0) for status in ApplicationStatus}
    return ApplicationStatistics(
        total=sum(by_status.values()),
        submitted=by_status[ApplicationStatus.SUBMITTED.value],
        accepted=by_status[ApplicationStatus.ACCEPTED.value],
        by_status=by_status,
    )
