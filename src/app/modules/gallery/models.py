"""
Gallery Models
"""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel

DEFAULT_CATEGORY = "General"


class GalleryItem(BaseModel):
    """An image shown in the public gallery. ``image_url`` may be relative."""

    __tablename__ = "gallery_items"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(100), nullable=False, default=DEFAULT_CATEGORY)
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    alt_text: Mapped[str] = mapped_column(String(300), nullable=False, default="")

    __table_args__ = (Index("ix_gallery_items_category_created_at", "category", "created_at"),)
