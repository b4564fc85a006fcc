"""
Shared Response Schemas

Every endpoint answers with the same envelope:
``{"success": true, "message": "...", "data": ...}``. Paginated lists add a
``pagination`` block.
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginationMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        return cls(
            total=total,
            page=page,
            limit=limit,
            pages=math.ceil(total / limit) if limit else 0,
        )


class ApiResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    success: bool = True
    message: str = "OK"
    data: T | None = None


class PaginatedResponse(BaseModel, Generic[T]):
    """Success envelope for a page of results."""

    success: bool = True
    message: str = "OK"
    data: list[T] = Field(default_factory=list)
    pagination: PaginationMeta


class MessageResponse(BaseModel):
    """Envelope for operations that return no record."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Shape of every error answer produced by the exception handlers."""

    success: bool = False
    message: str
    error: str
    details: dict | None = None
    debug: str | None = None
