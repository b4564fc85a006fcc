"""
Application Lifecycle

Pure rules applied to a single application record. Nothing here touches the
database; the service layer loads the record, applies these rules and saves.

Rules:
- Submission requires agreed terms and the three mandatory documents
- Application numbers have the form APP-<year>-<5 digit sequence>
- Every status change appends exactly one history entry
- Only admins may change status, and drafts reach "submitted" only via submit
- Partial section updates are merged field by field and re-validated
"""

import re
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from app.modules.applications.exceptions import (
    InvalidApplicationStateError,
    PreconditionFailedError,
)
from app.modules.applications.helpers import validate_payload
from app.modules.applications.models import Application, ApplicationStatus
from app.modules.applications.schemas import (
    CourseSelection,
    CourseSelectionUpdate,
    LocationInfo,
    LocationInfoUpdate,
    PersonalInfo,
    PersonalInfoUpdate,
)

MANDATORY_DOCUMENT_SLOTS = ("resume", "transcripts", "id_proof")

APPLICATION_NUMBER_PREFIX = "APP"
APPLICATION_NUMBER_PATTERN = re.compile(r"^APP-(\d{4})-(\d{5})$")


# ============================================
# Submission
# ============================================


def missing_documents(application: Application) -> list[str]:
    """Mandatory slots that hold no stored file, in slot order."""
    documents = application.documents or {}
    return [
        slot for slot in MANDATORY_DOCUMENT_SLOTS if not (documents.get(slot) or {}).get("url")
    ]


def check_submission_requirements(application: Application) -> None:
    """
    Verify an application may be submitted.

    Terms are checked first, then documents.

    Raises:
        PreconditionFailedError: With the list of unmet requirements
    """
    if not application.terms_agreed:
        raise PreconditionFailedError(
            "You must agree to the terms and conditions before submitting.",
            missing=["terms_agreed"],
        )

    missing = missing_documents(application)
    if missing:
        raise PreconditionFailedError(
            f"Missing required documents: {', '.join(missing)}",
            missing=missing,
        )


def next_application_sequence(created_this_year: int, last_assigned: int) -> int:
    """
    Sequence for the next application number of the year.

    ``created_this_year + 1`` follows the yearly intake count; never going
    below ``last_assigned + 1`` keeps consecutive submissions increasing.
    """
    return max(created_this_year + 1, last_assigned + 1)


def format_application_number(year: int, sequence: int) -> str:
    return f"{APPLICATION_NUMBER_PREFIX}-{year}-{sequence:05d}"


def parse_application_sequence(application_number: str | None) -> int:
    """Sequence part of an application number, 0 if absent or malformed."""
    if not application_number:
        return 0
    match = APPLICATION_NUMBER_PATTERN.match(application_number)
    return int(match.group(2)) if match else 0


def mark_submitted(
    application: Application,
    application_number: str,
    now: datetime | None = None,
) -> None:
    """Move a checked draft to submitted and stamp its number."""
    now = now or datetime.now(UTC)
    if application.application_number and application.application_number != application_number:
        raise InvalidApplicationStateError(
            f"Application already has number {application.application_number}."
        )
    application.application_number = application_number
    application.submitted_at = now
    record_status_change(
        application,
        ApplicationStatus.SUBMITTED,
        notes="Application submitted",
        now=now,
    )


# ============================================
# Status changes
# ============================================


def record_status_change(
    application: Application,
    new_status: ApplicationStatus,
    changed_by: UUID | None = None,
    notes: str | None = None,
    now: datetime | None = None,
) -> bool:
    """
    Set a new status and append a history entry.

    Nothing is recorded when the status does not actually change. Moving to
    under-review records the reviewer and review time.

    Returns:
        True if the status changed
    """
    if application.status == new_status:
        return False

    now = now or datetime.now(UTC)
    entry = {
        "status": new_status.value,
        "changed_by": str(changed_by) if changed_by else None,
        "changed_at": now.isoformat(),
        "notes": notes,
    }
    # New list so SQLAlchemy detects the JSONB change
    application.status_history = [*(application.status_history or []), entry]
    application.status = new_status

    if new_status == ApplicationStatus.UNDER_REVIEW:
        application.reviewed_by = changed_by
        application.reviewed_at = now

    return True


def validate_status_change(application: Application, new_status: ApplicationStatus) -> None:
    """
    Admin status changes may target any status, except that an application
    that was never submitted cannot be moved to "submitted" directly.

    Raises:
        InvalidApplicationStateError: If the change must go through submit
    """
    if new_status == ApplicationStatus.SUBMITTED and not application.application_number:
        raise InvalidApplicationStateError(
            "Applications that were never submitted must use the submit operation.",
        )


def ensure_editable(application: Application, privileged: bool) -> None:
    """
    Applicants may only edit drafts; admins may edit any application.

    Raises:
        InvalidApplicationStateError: If a non-admin edits a non-draft
    """
    if not privileged and application.status != ApplicationStatus.DRAFT:
        raise InvalidApplicationStateError(
            "Only draft applications can be edited.",
            expected_state=ApplicationStatus.DRAFT.value,
        )


# ============================================
# Partial section merges
# ============================================


def _merge_section(
    section: str,
    section_cls: type[BaseModel],
    stored: dict[str, Any] | None,
    patch: BaseModel,
) -> dict[str, Any]:
    merged = dict(stored or {})
    patch_data = patch.model_dump(mode="json")
    for field in patch.model_fields_set:
        merged[field] = patch_data[field]
    validated = validate_payload(section_cls, merged, prefix=section)
    return validated.model_dump(mode="json")


def merge_personal_info(stored: dict[str, Any] | None, patch: PersonalInfoUpdate) -> dict[str, Any]:
    """Apply the fields present in ``patch``; the rest keep their stored values."""
    return _merge_section("personal_info", PersonalInfo, stored, patch)


def merge_location_info(stored: dict[str, Any] | None, patch: LocationInfoUpdate) -> dict[str, Any]:
    return _merge_section("location_info", LocationInfo, stored, patch)


def merge_course_selection(
    stored: dict[str, Any] | None, patch: CourseSelectionUpdate
) -> dict[str, Any]:
    return _merge_section("course_selection", CourseSelection, stored, patch)
