"""
Application Attachments

Turns uploaded files into document slot metadata on an application.

Slots:
- resume, transcripts, id_proof, passport_photo: one file each
- recommendation_letters: up to three files

Every file is read and validated (extension, MIME type, size) before any of
them is written to storage, so a rejected upload never leaves a partial
write or a mutated record behind.
"""

import logging
import secrets
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

from app.core.config import settings
from app.core.exceptions import InternalError, ValidationError
from app.core.storage import LocalFileStorage
from app.modules.applications.exceptions import (
    FileTooLargeError,
    TooManyFilesError,
    UnsupportedFileTypeError,
)
from app.modules.applications.schemas import MAX_RECOMMENDATION_LETTERS, FileMetadata

logger = logging.getLogger(__name__)

SINGLE_FILE_SLOTS = ("resume", "transcripts", "id_proof", "passport_photo")
LETTERS_SLOT = "recommendation_letters"
DOCUMENT_SLOTS = (*SINGLE_FILE_SLOTS, LETTERS_SLOT)

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png"}
ALLOWED_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/jpg",
    "image/png",
}

UPLOAD_SUBDIR = "applications"


class Upload(Protocol):
    """The parts of an uploaded file this module relies on (e.g. UploadFile)."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


@dataclass
class PendingUpload:
    """A validated upload held in memory until it is stored."""

    slot: str
    filename: str
    content_type: str
    content: bytes


@dataclass
class StoredUpload:
    slot: str
    metadata: FileMetadata


def validate_file_type(slot: str, filename: str, content_type: str | None) -> None:
    """
    Check both the extension and the declared MIME type.

    Raises:
        UnsupportedFileTypeError: If either is not on the allow list
    """
    extension = Path(filename).suffix.lower()
    mime = (content_type or "").split(";")[0].strip().lower()
    if extension not in ALLOWED_EXTENSIONS or mime not in ALLOWED_MIME_TYPES:
        raise UnsupportedFileTypeError(slot, filename)


async def read_upload(slot: str, upload: Upload, max_bytes: int) -> PendingUpload:
    """
    Validate and read one upload.

    Reads at most ``max_bytes + 1`` bytes so oversized files are detected
    without loading them completely.

    Raises:
        UnsupportedFileTypeError: If the type is not allowed
        FileTooLargeError: If the file exceeds ``max_bytes``
    """
    filename = upload.filename or ""
    validate_file_type(slot, filename, upload.content_type)

    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise FileTooLargeError(slot, filename, max_bytes)

    return PendingUpload(
        slot=slot,
        filename=filename,
        content_type=(upload.content_type or "").split(";")[0].strip().lower(),
        content=content,
    )


async def prepare_uploads(
    files: dict[str, list[Upload]],
    max_bytes: int | None = None,
) -> list[PendingUpload]:
    """
    Validate every upload in a request before anything is stored.

    Args:
        files: Uploads keyed by document slot
        max_bytes: Per-file ceiling (defaults to the configured limit)

    Returns:
        Validated uploads ready for storage

    Raises:
        ValidationError: For an unknown document slot
        TooManyFilesError: If a slot receives more files than it holds
        UnsupportedFileTypeError: If a file type is not allowed
        FileTooLargeError: If a file is over the size ceiling
    """
    limit_bytes = max_bytes if max_bytes is not None else settings.max_upload_size_bytes
    pending: list[PendingUpload] = []

    for slot, uploads in files.items():
        if not uploads:
            continue
        if slot not in DOCUMENT_SLOTS:
            raise ValidationError(f"Unknown document field: {slot}", fields=[slot])

        max_files = MAX_RECOMMENDATION_LETTERS if slot == LETTERS_SLOT else 1
        if len(uploads) > max_files:
            raise TooManyFilesError(slot, max_files)

        for upload in uploads:
            pending.append(await read_upload(slot, upload, limit_bytes))

    return pending


def generate_storage_filename(slot: str, original_filename: str) -> str:
    """
    Collision-resistant name: ``<slot>-<epoch millis>-<random><ext>``.

    Only the extension of the original name is kept.
    """
    extension = Path(original_filename).suffix.lower()
    millis = int(time.time() * 1000)
    suffix = secrets.randbelow(10**9)
    return f"{slot}-{millis}-{suffix}{extension}"


async def store_uploads(
    pending: list[PendingUpload],
    storage: LocalFileStorage,
) -> list[StoredUpload]:
    """
    Write validated uploads to storage.

    If a write fails, files already written by this call are removed before
    the error is raised.

    Raises:
        InternalError: If the storage backend fails
    """
    stored: list[StoredUpload] = []
    for upload in pending:
        storage_name = generate_storage_filename(upload.slot, upload.filename)
        try:
            saved = await storage.save(UPLOAD_SUBDIR, storage_name, upload.content)
        except OSError as e:
            logger.error(f"Failed to store {upload.slot} upload '{upload.filename}': {e}")
            await discard_files([item.metadata.path for item in stored], storage)
            raise InternalError("Failed to store uploaded files.") from e

        stored.append(
            StoredUpload(
                slot=upload.slot,
                metadata=FileMetadata(
                    filename=upload.filename,
                    path=saved.path,
                    url=saved.url,
                    size=saved.size,
                    mimetype=upload.content_type,
                    uploaded_at=datetime.now(UTC),
                ),
            )
        )
    return stored


def apply_uploads(documents: dict[str, Any] | None, stored: list[StoredUpload]) -> dict[str, Any]:
    """
    Return a new documents dict with the stored uploads placed in their slots.

    A slot that receives a file is overwritten entirely. Uploaded
    recommendation letters replace the existing list.
    """
    updated = dict(documents or {})
    letters: list[dict[str, Any]] = []

    for item in stored:
        data = item.metadata.model_dump(mode="json")
        if item.slot == LETTERS_SLOT:
            letters.append(data)
        else:
            updated[item.slot] = data

    if letters:
        updated[LETTERS_SLOT] = letters
    return updated


def attached_file_paths(documents: dict[str, Any] | None) -> list[str]:
    """Storage paths of the files stored in the document slots."""
    documents = documents or {}
    paths: list[str] = []

    for slot in SINGLE_FILE_SLOTS:
        entry = documents.get(slot)
        if entry and entry.get("path"):
            paths.append(entry["path"])

    for letter in documents.get(LETTERS_SLOT) or []:
        if letter.get("path"):
            paths.append(letter["path"])

    return paths


async def discard_files(paths: list[str], storage: LocalFileStorage) -> list[str]:
    """
    Delete files one by one, logging each failure without stopping.

    Returns:
        Paths that could not be deleted
    """
    failed: list[str] = []
    for path in paths:
        try:
            await storage.delete(path)
        except OSError as e:
            logger.error(f"Failed to delete file {path}: {e}")
            failed.append(path)
    return failed
