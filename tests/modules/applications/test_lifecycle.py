"""
Unit tests for the application lifecycle rules.

These tests cover:
- Submission requirements (terms first, then mandatory documents)
- Application number sequencing and formatting
- Status changes and their history entries
- Editability and the submit-only path to "submitted"
- Field-by-field section merges
"""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from app.core.exceptions import ValidationError
from app.modules.applications.exceptions import (
    InvalidApplicationStateError,
    PreconditionFailedError,
)
from app.modules.applications.lifecycle import (
    check_submission_requirements,
    ensure_editable,
    format_application_number,
    mark_submitted,
    merge_course_selection,
    merge_personal_info,
    missing_documents,
    next_application_sequence,
    parse_application_sequence,
    record_status_change,
    validate_status_change,
)
from app.modules.applications.models import ApplicationStatus
from app.modules.applications.schemas import CourseSelectionUpdate, PersonalInfoUpdate

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class TestSubmissionRequirements:
    """Tests for check_submission_requirements."""

    def test_passes_with_terms_and_documents(self, make_application, complete_documents):
        app = make_application(documents=complete_documents)
        check_submission_requirements(app)

    def test_terms_are_checked_before_documents(self, make_application):
        """With nothing in place, only the terms are reported."""
        app = make_application(terms_agreed=False, documents={})

        with pytest.raises(PreconditionFailedError) as exc_info:
            check_submission_requirements(app)

        assert exc_info.value.missing == ["terms_agreed"]
        assert exc_info.value.details == {"missing": ["terms_agreed"]}

    def test_lists_every_missing_document(self, make_application, make_file_entry):
        app = make_application(documents={"transcripts": make_file_entry("transcripts")})

        with pytest.raises(PreconditionFailedError) as exc_info:
            check_submission_requirements(app)

        assert exc_info.value.missing == ["resume", "id_proof"]
        assert exc_info.value.status_code == 400

    def test_slot_without_url_counts_as_missing(self, make_application, complete_documents):
        documents = dict(complete_documents)
        documents["resume"] = {**documents["resume"], "url": ""}
        app = make_application(documents=documents)

        assert missing_documents(app) == ["resume"]

    def test_optional_documents_not_required(self, make_application, complete_documents):
        """passport_photo and recommendation letters are optional."""
        app = make_application(documents=complete_documents)
        assert missing_documents(app) == []


class TestApplicationNumbers:
    """Tests for sequence calculation and number formatting."""

    def test_first_number_of_year(self):
        assert next_application_sequence(0, 0) == 1

    def test_follows_yearly_count(self):
        assert next_application_sequence(41, 12) == 42

    def test_never_reuses_last_assigned(self):
        """Deleted drafts lower the count; the sequence keeps increasing."""
        assert next_application_sequence(3, 17) == 18

    def test_format_pads_to_five_digits(self):
        assert format_application_number(2025, 42) == "APP-2025-00042"

    def test_parse_round_trip(self):
        assert parse_application_sequence("APP-2025-00042") == 42

    @pytest.mark.parametrize("value", [None, "", "APP-25-1", "XYZ-2025-00001", "APP-2025-00042x"])
    def test_parse_malformed_returns_zero(self, value):
        assert parse_application_sequence(value) == 0


class TestMarkSubmitted:
    """Tests for mark_submitted."""

    def test_sets_number_timestamp_and_status(self, make_application):
        app = make_application()

        mark_submitted(app, "APP-2025-00001", NOW)

        assert app.application_number == "APP-2025-00001"
        assert app.submitted_at == NOW
        assert app.status == ApplicationStatus.SUBMITTED
        assert app.status_history[-1]["status"] == "submitted"
        assert app.status_history[-1]["changed_by"] is None

    def test_keeps_existing_number(self, make_application):
        app = make_application(application_number="APP-2025-00007")

        mark_submitted(app, "APP-2025-00007", NOW)

        assert app.application_number == "APP-2025-00007"

    def test_refuses_to_replace_number(self, make_application):
        app = make_application(application_number="APP-2025-00007")

        with pytest.raises(InvalidApplicationStateError):
            mark_submitted(app, "APP-2025-00008", NOW)


class TestRecordStatusChange:
    """Tests for record_status_change."""

    def test_appends_one_history_entry(self, make_application):
        app = make_application(status=ApplicationStatus.SUBMITTED)
        admin_id = uuid4()

        changed = record_status_change(
            app, ApplicationStatus.SHORTLISTED, changed_by=admin_id, notes="Strong profile", now=NOW
        )

        assert changed is True
        assert app.status == ApplicationStatus.SHORTLISTED
        assert app.status_history == [
            {
                "status": "shortlisted",
                "changed_by": str(admin_id),
                "changed_at": NOW.isoformat(),
                "notes": "Strong profile",
            }
        ]

    def test_same_status_records_nothing(self, make_application):
        app = make_application(status=ApplicationStatus.SUBMITTED)

        changed = record_status_change(app, ApplicationStatus.SUBMITTED, now=NOW)

        assert changed is False
        assert app.status_history == []

    def test_history_list_is_replaced_not_mutated(self, make_application):
        original = [{"status": "submitted", "changed_by": None, "changed_at": "x", "notes": None}]
        app = make_application(status=ApplicationStatus.SUBMITTED, status_history=original)

        record_status_change(app, ApplicationStatus.REJECTED, now=NOW)

        assert len(original) == 1
        assert len(app.status_history) == 2

    def test_under_review_stamps_reviewer(self, make_application):
        app = make_application(status=ApplicationStatus.SUBMITTED)
        admin_id = uuid4()

        record_status_change(app, ApplicationStatus.UNDER_REVIEW, changed_by=admin_id, now=NOW)

        assert app.reviewed_by == admin_id
        assert app.reviewed_at == NOW

    def test_other_statuses_leave_reviewer_alone(self, make_application):
        app = make_application(status=ApplicationStatus.UNDER_REVIEW, reviewed_by=None)

        record_status_change(app, ApplicationStatus.ACCEPTED, changed_by=uuid4(), now=NOW)

        assert app.reviewed_by is None


class TestStatusGuards:
    """Tests for validate_status_change and ensure_editable."""

    def test_draft_cannot_jump_to_submitted(self, make_application):
        app = make_application()

        with pytest.raises(InvalidApplicationStateError):
            validate_status_change(app, ApplicationStatus.SUBMITTED)

    def test_numbered_application_can_return_to_submitted(self, make_application):
        app = make_application(
            application_number="APP-2025-00003", status=ApplicationStatus.UNDER_REVIEW
        )
        validate_status_change(app, ApplicationStatus.SUBMITTED)

    @pytest.mark.parametrize(
        "target",
        [
            ApplicationStatus.DRAFT,
            ApplicationStatus.ACCEPTED,
            ApplicationStatus.WAITLISTED,
            ApplicationStatus.CANCELLED,
        ],
    )
    def test_any_other_target_allowed(self, make_application, target):
        validate_status_change(make_application(status=ApplicationStatus.REJECTED), target)

    def test_applicant_can_edit_draft(self, make_application):
        ensure_editable(make_application(), privileged=False)

    def test_applicant_cannot_edit_submitted(self, make_application):
        app = make_application(status=ApplicationStatus.SUBMITTED)

        with pytest.raises(InvalidApplicationStateError) as exc_info:
            ensure_editable(app, privileged=False)

        assert exc_info.value.status_code == 409

    def test_admin_can_edit_any_status(self, make_application):
        ensure_editable(make_application(status=ApplicationStatus.ACCEPTED), privileged=True)


class TestSectionMerges:
    """Tests for field-by-field section merges."""

    def test_unsent_fields_keep_stored_values(self, personal_info):
        merged = merge_personal_info(
            personal_info, PersonalInfoUpdate(phone="+250788000111")
        )

        assert merged["phone"] == "+250788000111"
        assert merged["first_name"] == "Aline"
        assert merged["email"] == "aline@example.com"

    def test_merged_values_are_normalized(self, personal_info):
        merged = merge_personal_info(
            personal_info, PersonalInfoUpdate(email="New.Address@Example.COM")
        )
        assert merged["email"] == "new.address@example.com"

    def test_defaults_filled_on_merge(self, personal_info):
        merged = merge_personal_info(personal_info, PersonalInfoUpdate(first_name="Grace"))
        assert merged["nationality"] == "Rwandan"

    def test_course_selection_merge(self, course_selection):
        merged = merge_course_selection(course_selection, CourseSelectionUpdate(intake_year=2027))

        assert merged["intake_year"] == 2027
        assert merged["program"] == "Computer Science"
        assert merged["mode_of_study"] == "full-time"

    def test_invalid_stored_section_reports_prefixed_fields(self, personal_info):
        """A stored section missing a required field fails re-validation."""
        stored = {k: v for k, v in personal_info.items() if k != "phone"}

        with pytest.raises(ValidationError) as exc_info:
            merge_personal_info(stored, PersonalInfoUpdate(first_name="Grace"))

        assert exc_info.value.fields == ["personal_info.phone"]
