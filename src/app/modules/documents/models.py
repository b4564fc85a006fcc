"""
Document Library Models

Downloadable files listed on the public site. Only metadata and the file
URL are stored; the files themselves are hosted elsewhere.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class DocumentCategory(str, enum.Enum):
    ADMINISTRATIVE = "administrative"
    ACADEMIC = "academic"
    FINANCIAL = "financial"
    ANNOUNCEMENT = "announcement"
    OTHER = "other"


class DocumentFileType(str, enum.Enum):
    PDF = "PDF"
    DOC = "DOC"
    DOCX = "DOCX"
    XLS = "XLS"
    XLSX = "XLSX"
    PPT = "PPT"
    PPTX = "PPTX"
    TXT = "TXT"
    ZIP = "ZIP"


class LibraryDocument(BaseModel):
    __tablename__ = "library_documents"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category: Mapped[DocumentCategory] = mapped_column(
        Enum(
            DocumentCategory,
            name="document_category",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=DocumentCategory.ADMINISTRATIVE,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    file_size: Mapped[str] = mapped_column(String(50), nullable=False, default="0 MB")
    file_type: Mapped[DocumentFileType] = mapped_column(
        Enum(
            DocumentFileType,
            name="document_file_type",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    url: Mapped[str] = mapped_column(String(1000), nullable=False)

    __table_args__ = (
        Index("ix_library_documents_category", "category"),
        Index("ix_library_documents_upload_date", "upload_date"),
    )
