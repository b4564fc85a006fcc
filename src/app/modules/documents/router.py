"""
Documents Router

Endpoints:
- POST /documents/add - Add document (admin)
- GET /documents/select/all - All documents, newest first
- GET /documents/select/category/{category} - Documents in a category
- GET /documents/select/id/{id} - Get document
- GET /documents/search - Search by name, description and category
- PUT /documents/update/{id} - Update document (admin)
- DELETE /documents/delete/{id} - Delete document (admin)
- GET /documents/recent - Most recent uploads
- GET /documents/categories - Categories with counts and latest upload
- GET /documents/stats - Library statistics (admin)
- GET /documents/download/{id} - Download descriptor
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_current_admin_user
from app.core.database import get_db
from app.modules.documents import service
from app.modules.documents.models import DocumentCategory
from app.modules.documents.schemas import (
    CategorySummary,
    DocumentCreate,
    DocumentResponse,
    DocumentStats,
    DocumentUpdate,
    DownloadDescriptor,
)
from app.modules.shared import ApiResponse

router = APIRouter()


def _many(documents, message: str) -> ApiResponse[list[DocumentResponse]]:
    return ApiResponse[list[DocumentResponse]](
        message=message,
        data=[DocumentResponse.model_validate(d) for d in documents],
    )


@router.post(
    "/add",
    response_model=ApiResponse[DocumentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_document(
    body: DocumentCreate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DocumentResponse]:
    document = await service.add_document(db, body)
    return ApiResponse[DocumentResponse](
        message="Document added successfully", data=DocumentResponse.model_validate(document)
    )


@router.get("/select/all", response_model=ApiResponse[list[DocumentResponse]])
async def list_documents(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[DocumentResponse]]:
    return _many(await service.list_documents(db), "Documents retrieved successfully")


@router.get(
    "/select/category/{category}", response_model=ApiResponse[list[DocumentResponse]]
)
async def list_by_category(
    category: DocumentCategory,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[DocumentResponse]]:
    documents = await service.list_by_category(db, category)
    return _many(documents, f"Documents in category '{category.value}' retrieved successfully")


@router.get("/select/id/{document_id}", response_model=ApiResponse[DocumentResponse])
async def get_document(
    document_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DocumentResponse]:
    document = await service.get_document(db, document_id)
    return ApiResponse[DocumentResponse](
        message="Document retrieved successfully", data=DocumentResponse.model_validate(document)
    )


@router.get("/search", response_model=ApiResponse[list[DocumentResponse]])
async def search_documents(
    name: str | None = Query(None, max_length=100),
    description: str | None = Query(None, max_length=100),
    category: DocumentCategory | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[DocumentResponse]]:
    documents = await service.search_documents(
        db, name=name, description=description, category=category
    )
    return _many(documents, "Documents retrieved successfully")


@router.put("/update/{document_id}", response_model=ApiResponse[DocumentResponse])
async def update_document(
    document_id: UUID,
    body: DocumentUpdate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DocumentResponse]:
    document = await service.update_document(db, document_id, body)
    return ApiResponse[DocumentResponse](
        message="Document updated successfully", data=DocumentResponse.model_validate(document)
    )


@router.delete("/delete/{document_id}", response_model=ApiResponse[dict])
async def delete_document(
    document_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict]:
    document = await service.delete_document(db, document_id)
    return ApiResponse[dict](
        message="Document deleted successfully",
        data={"id": str(document_id), "name": document.name},
    )


@router.get("/recent", response_model=ApiResponse[list[DocumentResponse]])
async def recent_documents(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[DocumentResponse]]:
    return _many(await service.recent_documents(db, limit), "Recent documents retrieved successfully")


@router.get("/categories", response_model=ApiResponse[list[CategorySummary]])
async def list_categories(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[CategorySummary]]:
    return ApiResponse[list[CategorySummary]](
        message="Categories retrieved successfully", data=await service.list_categories(db)
    )


@router.get("/stats", response_model=ApiResponse[DocumentStats])
async def get_stats(
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DocumentStats]:
    return ApiResponse[DocumentStats](
        message="Statistics retrieved successfully", data=await service.get_stats(db)
    )


@router.get("/download/{document_id}", response_model=ApiResponse[DownloadDescriptor])
async def download_document(
    document_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DownloadDescriptor]:
    document = await service.get_document(db, document_id)
    return ApiResponse[DownloadDescriptor](
        message="Document URL retrieved successfully",
        data=DownloadDescriptor.model_validate(document),
    )
