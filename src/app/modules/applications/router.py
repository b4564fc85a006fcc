"""
Applications Router

Public endpoints for applicants. Sections are sent as JSON-encoded
multipart form fields alongside the document uploads.

Endpoints:
- POST /applications - Create a draft application (with documents)
- GET /applications/number/{application_number} - Get by application number
- GET /applications/user/{email} - Applications for an e-mail address
- GET /applications/{id} - Get application
- PUT /applications/{id} - Partial update (status/review fields need an admin token)
- PUT /applications/{id}/submit - Submit a draft

Security:
- Intake is rate limited per client IP
- Status and review fields are rejected unless an admin token is supplied
- Uploads are checked for extension, MIME type and size before storage
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_optional_admin_user
from app.core.database import get_db
from app.core.rate_limit import client_ip, enforce_rate_limit
from app.core.storage import LocalFileStorage, get_storage
from app.modules.applications import service
from app.modules.applications.helpers import collect_json_fields, validate_payload
from app.modules.applications.schemas import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationUpdate,
)
from app.modules.shared import ApiResponse

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_CREATE = (10, 3600)  # 10 applications per hour per IP


def _collect_files(**slots: UploadFile | list[UploadFile] | None) -> dict[str, list[UploadFile]]:
    """Group uploads by slot, dropping empty parts sent by browsers."""
    files: dict[str, list[UploadFile]] = {}
    for slot, value in slots.items():
        uploads = value if isinstance(value, list) else [value]
        present = [upload for upload in uploads if upload is not None and upload.filename]
        if present:
            files[slot] = present
    return files


def _to_response(application, message: str) -> ApiResponse[ApplicationResponse]:
    return ApiResponse[ApplicationResponse](
        message=message,
        data=ApplicationResponse.model_validate(application),
    )


@router.post(
    "",
    response_model=ApiResponse[ApplicationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Application",
    description="""
Create a draft application.

`personal_info`, `location_info` and `course_selection` are required JSON
objects; `education`, `work_experience` and `additional_info` are optional.
Documents: `resume`, `transcripts`, `id_proof`, `passport_photo` (one file
each) and up to three `recommendation_letters`. Accepted types are PDF, DOC,
DOCX, JPG, JPEG and PNG, 10 MB per file.

Only one application per e-mail, program and intake year is accepted.
""",
)
async def create_application(
    request: Request,
    personal_info: str | None = Form(None),
    location_info: str | None = Form(None),
    course_selection: str | None = Form(None),
    terms_agreed: bool = Form(False),
    education: str | None = Form(None),
    work_experience: str | None = Form(None),
    additional_info: str | None = Form(None),
    resume: UploadFile | None = File(None),
    transcripts: UploadFile | None = File(None),
    id_proof: UploadFile | None = File(None),
    passport_photo: UploadFile | None = File(None),
    recommendation_letters: list[UploadFile] | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage),
) -> ApiResponse[ApplicationResponse]:
    await enforce_rate_limit(request, "applications:create", *RATE_LIMIT_CREATE)

    raw = collect_json_fields(
        {
            "personal_info": personal_info,
            "location_info": location_info,
            "course_selection": course_selection,
            "education": education,
            "work_experience": work_experience,
            "additional_info": additional_info,
        }
    )
    raw["terms_agreed"] = terms_agreed
    data = validate_payload(ApplicationCreate, raw)

    files = _collect_files(
        resume=resume,
        transcripts=transcripts,
        id_proof=id_proof,
        passport_photo=passport_photo,
        recommendation_letters=recommendation_letters,
    )

    application = await service.create_application(
        db,
        storage,
        data,
        files,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    return _to_response(application, "Application created successfully")


@router.get(
    "/number/{application_number}",
    response_model=ApiResponse[ApplicationResponse],
    summary="Get Application by Number",
)
async def get_by_application_number(
    application_number: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ApplicationResponse]:
    application = await service.get_by_application_number(db, application_number)
    return _to_response(application, "Application retrieved successfully")


@router.get(
    "/user/{email}",
    response_model=ApiResponse[list[ApplicationResponse]],
    summary="List Applications for an E-mail",
)
async def list_by_email(
    email: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[ApplicationResponse]]:
    applications = await service.list_by_email(db, email)
    return ApiResponse[list[ApplicationResponse]](
        message="Applications retrieved successfully",
        data=[ApplicationResponse.model_validate(app) for app in applications],
    )


@router.get(
    "/{application_id}",
    response_model=ApiResponse[ApplicationResponse],
    summary="Get Application",
)
async def get_application(
    application_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ApplicationResponse]:
    application = await service.get_application(db, application_id)
    return _to_response(application, "Application retrieved successfully")


@router.put(
    "/{application_id}",
    response_model=ApiResponse[ApplicationResponse],
    summary="Update Application",
    description="""
Partially update an application. Sent sections are merged field by field;
omitted fields keep their values. Uploading a document replaces that slot.

`status`, `status_notes`, `review_notes` and `reviewer_comments` require an
admin bearer token; without one the request is rejected with 403.
Applicants can only edit drafts.
""",
)
async def update_application(
    application_id: UUID,
    personal_info: str | None = Form(None),
    location_info: str | None = Form(None),
    course_selection: str | None = Form(None),
    terms_agreed: bool | None = Form(None),
    education: str | None = Form(None),
    work_experience: str | None = Form(None),
    additional_info: str | None = Form(None),
    status_value: str | None = Form(None, alias="status"),
    status_notes: str | None = Form(None),
    review_notes: str | None = Form(None),
    reviewer_comments: str | None = Form(None),
    resume: UploadFile | None = File(None),
    transcripts: UploadFile | None = File(None),
    id_proof: UploadFile | None = File(None),
    passport_photo: UploadFile | None = File(None),
    recommendation_letters: list[UploadFile] | None = File(None),
    admin: AdminUser | None = Depends(get_optional_admin_user),
    db: AsyncSession = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage),
) -> ApiResponse[ApplicationResponse]:
    raw = collect_json_fields(
        {
            "personal_info": personal_info,
            "location_info": location_info,
            "course_selection": course_selection,
            "education": education,
            "work_experience": work_experience,
            "additional_info": additional_info,
        }
    )
    optional_fields = {
        "terms_agreed": terms_agreed,
        "status": status_value,
        "status_notes": status_notes,
        "review_notes": review_notes,
        "reviewer_comments": reviewer_comments,
    }
    raw.update({key: value for key, value in optional_fields.items() if value is not None})
    data = validate_payload(ApplicationUpdate, raw)

    files = _collect_files(
        resume=resume,
        transcripts=transcripts,
        id_proof=id_proof,
        passport_photo=passport_photo,
        recommendation_letters=recommendation_letters,
    )

    application = await service.update_application(
        db, storage, application_id, data, files, actor=admin
    )
    return _to_response(application, "Application updated successfully")


@router.put(
    "/{application_id}/submit",
    response_model=ApiResponse[ApplicationResponse],
    summary="Submit Application",
    description="""
Submit a draft. Requires `terms_agreed` and the `resume`, `transcripts` and
`id_proof` documents; otherwise a 400 response lists what is missing in
`details.missing`. On success an application number `APP-<year>-<nnnnn>` is
assigned. A 409 `DUPLICATE_APPLICATION_NUMBER` response means a concurrent
submission took the number; retry the request.
""",
)
async def submit_application(
    application_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ApplicationResponse]:
    application = await service.submit_application(db, application_id)
    return _to_response(application, "Application submitted successfully")
