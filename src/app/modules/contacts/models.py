"""
Contact Models

Messages submitted through the public contact form.
"""

import enum

from sqlalchemy import Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class ContactStatus(str, enum.Enum):
    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class Contact(BaseModel):
    """A contact-form message and its handling state."""

    __tablename__ = "contacts"

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[ContactStatus] = mapped_column(
        Enum(ContactStatus, name="contact_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ContactStatus.NEW,
    )
    admin_notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        Index("ix_contacts_status", "status"),
        Index("ix_contacts_email", "email"),
        Index("ix_contacts_created_at", "created_at"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
