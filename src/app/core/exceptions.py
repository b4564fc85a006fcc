"""
Service Exceptions

Base error hierarchy shared by every module's service layer. Each error
carries a human-readable message, a machine-readable error code and the HTTP
status code the request boundary should answer with.
"""

from typing import Any


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str, fields: list[str] | None = None):
        self.fields = fields or []
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details={"fields": self.fields} if self.fields else None,
        )


class NotFoundError(ServiceError):
    """Raised when an identifier does not resolve to a record."""

    def __init__(
        self,
        resource: str = "Resource",
        identifier: Any = None,
        error_code: str = "NOT_FOUND",
    ):
        message = f"{resource} {identifier} not found" if identifier else f"{resource} not found"
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=404,
        )


class ConflictError(ServiceError):
    """Raised when a write would violate a uniqueness rule."""

    def __init__(self, message: str, error_code: str = "CONFLICT"):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=409,
        )


class AuthorizationError(ServiceError):
    """Raised when the caller lacks the privilege an operation requires."""

    def __init__(self, message: str = "You are not allowed to perform this action."):
        super().__init__(
            message=message,
            error_code="FORBIDDEN",
            status_code=403,
        )


class InternalError(ServiceError):
    """Opaque error for failures in storage or other collaborators."""

    def __init__(self, message: str = "An unexpected error occurred."):
        super().__init__(
            message=message,
            error_code="INTERNAL_ERROR",
            status_code=500,
        )
