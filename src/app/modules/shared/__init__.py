"""
Shared building blocks: the ORM base model and response envelopes.
"""

from app.modules.shared.models import BaseModel
from app.modules.shared.schemas import (
    ApiResponse,
    ErrorResponse,
    MessageResponse,
    PaginatedResponse,
    PaginationMeta,
)

__all__ = [
    "BaseModel",
    "ApiResponse",
    "ErrorResponse",
    "MessageResponse",
    "PaginatedResponse",
    "PaginationMeta",
]
