"""create portal tables

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-19 12:00:00.000000

This migration:
1. Creates the enum types used by applications, contacts, notifications
   and the document library
2. Creates the admins and applications tables
3. Creates the site content tables (contacts, notifications, library
   documents, gallery items, leaders, events)
4. Adds expression indexes on the JSONB fields used for duplicate
   detection and filtering (applicant e-mail, program, intake year)
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0a1b2c3d4e5f"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


ENUMS = {
    "application_status": (
        "draft",
        "submitted",
        "under-review",
        "shortlisted",
        "accepted",
        "rejected",
        "waitlisted",
        "cancelled",
    ),
    "contact_status": ("new", "read", "replied", "archived"),
    "notification_type": ("success", "warning", "error", "info"),
    "document_category": ("administrative", "academic", "financial", "announcement", "other"),
    "document_file_type": ("PDF", "DOC", "DOCX", "XLS", "XLSX", "PPT", "PPTX", "TXT", "ZIP"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _base_columns() -> list[sa.Column]:
    """Primary key and timestamps (from BaseModel)."""
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create every portal table."""
    bind = op.get_bind()
    for name in ENUMS:
        _enum(name).create(bind, checkfirst=True)

    op.create_table(
        "admins",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("reset_token_hash", sa.String(length=64), nullable=True),
        sa.Column("reset_token_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)
    op.create_index("ix_admins_reset_token_hash", "admins", ["reset_token_hash"], unique=True)

    op.create_table(
        "applications",
        *_base_columns(),
        sa.Column("application_number", sa.String(length=20), nullable=True),
        # Sections
        sa.Column("personal_info", postgresql.JSONB(), nullable=False),
        sa.Column("location_info", postgresql.JSONB(), nullable=False),
        sa.Column("course_selection", postgresql.JSONB(), nullable=False),
        sa.Column("documents", postgresql.JSONB(), nullable=False),
        sa.Column("education", postgresql.JSONB(), nullable=False),
        sa.Column("work_experience", postgresql.JSONB(), nullable=False),
        sa.Column("additional_info", postgresql.JSONB(), nullable=True),
        sa.Column("payment", postgresql.JSONB(), nullable=True),
        sa.Column("terms_agreed", sa.Boolean(), nullable=False),
        # Lifecycle
        sa.Column("status", _enum("application_status"), nullable=False),
        sa.Column("status_history", postgresql.JSONB(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("review_notes", sa.Text(), nullable=True),
        sa.Column("reviewer_comments", sa.Text(), nullable=True),
        # Request metadata
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("application_number"),
    )
    op.create_index("ix_applications_status", "applications", ["status"])
    op.create_index("ix_applications_created_at", "applications", ["created_at"])
    op.execute(
        "CREATE INDEX ix_applications_email ON applications ((personal_info->>'email'))"
    )
    op.execute(
        "CREATE INDEX ix_applications_program_intake ON applications "
        "((course_selection->>'program'), ((course_selection->>'intake_year')::integer))"
    )

    op.create_table(
        "contacts",
        *_base_columns(),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", _enum("contact_status"), nullable=False),
        sa.Column("admin_notes", sa.String(length=500), nullable=True),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contacts_status", "contacts", ["status"])
    op.create_index("ix_contacts_email", "contacts", ["email"])
    op.create_index("ix_contacts_created_at", "contacts", ["created_at"])

    op.create_table(
        "notifications",
        *_base_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.String(length=500), nullable=False),
        sa.Column("type", _enum("notification_type"), nullable=False),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_timestamp", "notifications", ["timestamp"])
    op.create_index("ix_notifications_type_timestamp", "notifications", ["type", "timestamp"])

    op.create_table(
        "library_documents",
        *_base_columns(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", _enum("document_category"), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("file_size", sa.String(length=50), nullable=False),
        sa.Column("file_type", _enum("document_file_type"), nullable=False),
        sa.Column(
            "upload_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("url", sa.String(length=1000), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_library_documents_category", "library_documents", ["category"])
    op.create_index("ix_library_documents_upload_date", "library_documents", ["upload_date"])

    op.create_table(
        "gallery_items",
        *_base_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("image_url", sa.String(length=1000), nullable=False),
        sa.Column("alt_text", sa.String(length=300), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_gallery_items_category_created_at", "gallery_items", ["category", "created_at"]
    )

    op.create_table(
        "leaders",
        *_base_columns(),
        sa.Column("leader_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("role", sa.String(length=200), nullable=False),
        sa.Column("image", sa.String(length=1000), nullable=False),
        sa.Column("linkedin", sa.String(length=500), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("profession", sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_leaders_leader_id", "leaders", ["leader_id"], unique=True)

    op.create_table(
        "events",
        *_base_columns(),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image", sa.String(length=1000), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("time", sa.String(length=50), nullable=False),
        sa.Column("location", sa.String(length=300), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("attendees", sa.Integer(), nullable=False),
        sa.Column("max_attendees", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.CheckConstraint("attendees >= 0", name="ck_events_attendees_non_negative"),
        sa.CheckConstraint("max_attendees >= 1", name="ck_events_max_attendees_positive"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_events_event_id", "events", ["event_id"], unique=True)
    op.create_index("ix_events_date_category", "events", ["date", "category"])


def downgrade() -> None:
    """Drop every portal table and enum type."""
    for table in (
        "events",
        "leaders",
        "gallery_items",
        "library_documents",
        "notifications",
        "contacts",
        "applications",
        "admins",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        _enum(name).drop(bind, checkfirst=True)
