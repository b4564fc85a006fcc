"""
Document Library Service Layer

Document names are unique across the library; upload dates are set once.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError
from app.modules.documents.models import DocumentCategory, LibraryDocument
from app.modules.documents.repository import DocumentRepository
from app.modules.documents.schemas import (
    CategorySummary,
    DocumentCreate,
    DocumentStats,
    DocumentSummary,
    DocumentUpdate,
)

logger = logging.getLogger(__name__)

RECENT_UPLOADS_IN_STATS = 5


class DocumentNotFoundError(NotFoundError):
    def __init__(self, document_id: UUID | None = None):
        super().__init__(resource="Document", identifier=document_id, error_code="DOCUMENT_NOT_FOUND")


class DuplicateDocumentNameError(ConflictError):
    def __init__(self, name: str):
        super().__init__(
            message=f"Document with name '{name}' already exists",
            error_code="DUPLICATE_DOCUMENT_NAME",
        )


async def add_document(db: AsyncSession, data: DocumentCreate) -> LibraryDocument:
    if await DocumentRepository.get_by_name(db, data.name):
        raise DuplicateDocumentNameError(data.name)

    document = LibraryDocument(
        name=data.name,
        category=data.category,
        description=data.description,
        file_size=data.file_size,
        file_type=data.file_type,
        url=data.url,
    )
    if data.upload_date:
        document.upload_date = data.upload_date

    document = await DocumentRepository.create(db, document)
    logger.info(f"Added document {document.id} ({document.name})")
    return document


async def list_documents(db: AsyncSession) -> list[LibraryDocument]:
    return await DocumentRepository.search(db)


async def list_by_category(db: AsyncSession, category: DocumentCategory) -> list[LibraryDocument]:
    return await DocumentRepository.search(db, category=category)


async def get_document(db: AsyncSession, document_id: UUID) -> LibraryDocument:
    document = await DocumentRepository.get_by_id(db, document_id)
    if not document:
        raise DocumentNotFoundError(document_id)
    return document


async def search_documents(
    db: AsyncSession,
    *,
    name: str | None = None,
    description: str | None = None,
    category: DocumentCategory | None = None,
) -> list[LibraryDocument]:
    return await DocumentRepository.search(
        db, name=name, description=description, category=category
    )


async def update_document(
    db: AsyncSession, document_id: UUID, data: DocumentUpdate
) -> LibraryDocument:
    document = await get_document(db, document_id)

    if data.name and data.name != document.name:
        if await DocumentRepository.get_by_name(db, data.name, exclude_id=document_id):
            raise DuplicateDocumentNameError(data.name)

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(document, field, value)
    return await DocumentRepository.save(db, document)


async def delete_document(db: AsyncSession, document_id: UUID) -> LibraryDocument:
    document = await get_document(db, document_id)
    await DocumentRepository.delete(db, document)
    logger.info(f"Deleted document {document_id}")
    return document


async def recent_documents(db: AsyncSession, limit: int = 10) -> list[LibraryDocument]:
    return await DocumentRepository.search(db, limit=limit)


async def list_categories(db: AsyncSession) -> list[CategorySummary]:
    rows = await DocumentRepository.category_summary(db)
    return [
        CategorySummary(category=category, count=count, latest=latest)
        for category, count, latest in rows
    ]


async def get_stats(db: AsyncSession) -> DocumentStats:
    total = await DocumentRepository.count(db)
    by_category = await DocumentRepository.count_by(db, LibraryDocument.category)
    by_type = await DocumentRepository.count_by(db, LibraryDocument.file_type)
    recent = await DocumentRepository.search(db, limit=RECENT_UPLOADS_IN_STATS)
    return DocumentStats(
        total_documents=total,
        by_category=by_category,
        by_type=by_type,
        recent_uploads=[DocumentSummary.model_validate(d) for d in recent],
    )
