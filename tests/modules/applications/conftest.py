"""
Fixtures for applications tests.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.core.auth import ADMIN_ROLE, AdminUser
from app.core.storage import StoredFile
from app.modules.applications.models import Application, ApplicationStatus
from app.modules.applications.schemas import (
    ApplicationCreate,
    CourseSelection,
    LocationInfo,
    PersonalInfo,
)


class FakeUpload:
    """Stands in for fastapi.UploadFile."""

    def __init__(self, filename: str, content_type: str, content: bytes = b"data"):
        self.filename = filename
        self.content_type = content_type
        self._content = content

    async def read(self, size: int = -1) -> bytes:
        return self._content if size < 0 else self._content[:size]


class FakeStorage:
    """In-memory storage recording saves and deletes."""

    def __init__(self, fail_on_save: int | None = None, fail_delete: set[str] | None = None):
        self.saved: list[str] = []
        self.deleted: list[str] = []
        self._fail_on_save = fail_on_save
        self._fail_delete = fail_delete or set()

    async def save(self, relative_dir: str, filename: str, content: bytes) -> StoredFile:
        if self._fail_on_save is not None and len(self.saved) == self._fail_on_save:
            raise OSError("disk full")
        path = f"/data/{relative_dir}/{filename}"
        self.saved.append(path)
        return StoredFile(path=path, url=f"/uploads/{relative_dir}/{filename}", size=len(content))

    async def delete(self, path: str) -> None:
        if path in self._fail_delete:
            raise OSError("permission denied")
        self.deleted.append(path)


def file_entry(slot: str) -> dict:
    return {
        "filename": f"{slot}.pdf",
        "path": f"/data/applications/{slot}.pdf",
        "url": f"/uploads/applications/{slot}.pdf",
        "size": 4,
        "mimetype": "application/pdf",
        "uploaded_at": "2025-01-10T09:00:00+00:00",
    }


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.rollback = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def admin_user():
    return AdminUser(id=uuid4(), email="admin@portal.test", role=ADMIN_ROLE)


@pytest.fixture
def personal_info():
    return {
        "first_name": "Aline",
        "last_name": "Uwase",
        "email": "aline@example.com",
        "phone": "+250788123456",
    }


@pytest.fixture
def location_info():
    return {
        "province": "Kigali",
        "district": "Gasabo",
        "sector": "Kimironko",
        "cell": "Bibare",
        "village": "Urugwiro",
    }


@pytest.fixture
def course_selection():
    return {"program": "Computer Science", "level": "bachelor", "intake_year": 2026}


@pytest.fixture
def sample_application_create(personal_info, location_info, course_selection):
    return ApplicationCreate(
        personal_info=PersonalInfo(**personal_info),
        location_info=LocationInfo(**location_info),
        course_selection=CourseSelection(**course_selection),
        terms_agreed=True,
    )


@pytest.fixture
def make_application(personal_info, location_info, course_selection):
    """Factory for a real (unsaved) Application record."""

    def _make(**overrides) -> Application:
        values = {
            "id": uuid4(),
            "application_number": None,
            "personal_info": dict(personal_info),
            "location_info": dict(location_info),
            "course_selection": {
                **course_selection,
                "specialization": None,
                "intake_month": "january",
                "mode_of_study": "full-time",
            },
            "documents": {},
            "education": [],
            "work_experience": [],
            "additional_info": None,
            "payment": None,
            "terms_agreed": True,
            "status": ApplicationStatus.DRAFT,
            "status_history": [],
            "created_at": datetime(2025, 1, 10, 9, 0, tzinfo=UTC),
            "updated_at": datetime(2025, 1, 10, 9, 0, tzinfo=UTC),
        }
        values.update(overrides)
        return Application(**values)

    return _make


@pytest.fixture
def complete_documents():
    return {slot: file_entry(slot) for slot in ("resume", "transcripts", "id_proof")}


@pytest.fixture
def make_upload():
    return FakeUpload


@pytest.fixture
def make_storage():
    return FakeStorage


@pytest.fixture
def make_file_entry():
    return file_entry
