"""
Application Errors

Errors raised by the application lifecycle, the attachment manager and the
service layer. All derive from the shared ServiceError so the request
boundary can translate them uniformly.
"""

from uuid import UUID

from app.core.exceptions import NotFoundError, ServiceError


class ApplicationNotFoundError(NotFoundError):
    """Raised when an application id or number does not resolve."""

    def __init__(self, identifier: UUID | str | None = None):
        super().__init__(
            resource="Application",
            identifier=identifier,
            error_code="APPLICATION_NOT_FOUND",
        )


class DuplicateApplicationError(ServiceError):
    """Raised when the applicant already applied to the same program and intake."""

    def __init__(self, email: str, program: str, intake_year: int):
        super().__init__(
            message=(
                f"An application for {program} ({intake_year}) already exists for {email}."
            ),
            error_code="DUPLICATE_APPLICATION",
            status_code=409,
        )


class DuplicateApplicationNumberError(ServiceError):
    """Raised when two submissions race for the same application number."""

    def __init__(self, application_number: str):
        self.application_number = application_number
        super().__init__(
            message=(
                f"Application number {application_number} was assigned concurrently. "
                "Please retry the submission."
            ),
            error_code="DUPLICATE_APPLICATION_NUMBER",
            status_code=409,
        )


class PreconditionFailedError(ServiceError):
    """Raised when submission requirements are not met."""

    def __init__(self, message: str, missing: list[str]):
        self.missing = missing
        super().__init__(
            message=message,
            error_code="PRECONDITION_FAILED",
            status_code=400,
            details={"missing": missing},
        )


class InvalidApplicationStateError(ServiceError):
    """Raised when an application is not in the expected state for an operation."""

    def __init__(self, message: str, expected_state: str | None = None):
        detail = message
        if expected_state:
            detail = f"{message} Expected state: {expected_state}"
        super().__init__(
            message=detail,
            error_code="INVALID_APPLICATION_STATE",
            status_code=409,
        )


class UnsupportedFileTypeError(ServiceError):
    """Raised when an upload's extension or MIME type is not allowed."""

    def __init__(self, field: str, filename: str):
        super().__init__(
            message=(
                f"File '{filename}' for {field} is not allowed. "
                "Only PDF, DOC, DOCX, JPG, JPEG and PNG files are accepted."
            ),
            error_code="UNSUPPORTED_FILE_TYPE",
            status_code=415,
            details={"field": field},
        )


class FileTooLargeError(ServiceError):
    """Raised when an upload exceeds the size ceiling."""

    def __init__(self, field: str, filename: str, max_bytes: int):
        super().__init__(
            message=(
                f"File '{filename}' for {field} exceeds the "
                f"{max_bytes // (1024 * 1024)} MB limit."
            ),
            error_code="FILE_TOO_LARGE",
            status_code=413,
            details={"field": field, "max_bytes": max_bytes},
        )


class TooManyFilesError(ServiceError):
    """Raised when a document field receives more files than it holds."""

    def __init__(self, field: str, limit: int):
        super().__init__(
            message=f"At most {limit} file(s) can be uploaded for {field}.",
            error_code="TOO_MANY_FILES",
            status_code=400,
            details={"field": field},
        )
