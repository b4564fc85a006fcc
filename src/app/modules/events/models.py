"""
Event Models
"""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class Event(BaseModel):
    """
    Calendar event. ``event_id`` is the public numeric identifier.

    Inactive events are hidden from the public listing but kept.
    """

    __tablename__ = "events"

    event_id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(String(1000), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    time: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str] = mapped_column(String(300), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    attendees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_attendees: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("attendees >= 0", name="ck_events_attendees_non_negative"),
        CheckConstraint("max_attendees >= 1", name="ck_events_max_attendees_positive"),
        Index("ix_events_date_category", "date", "category"),
    )
