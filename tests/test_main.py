"""
HTTP-level tests for routing and the error envelope.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import InternalError
from app.main import app


@pytest.fixture
def client():
    async def _fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_db] = _fake_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestErrorEnvelope:
    def test_service_error(self, client):
        with patch("app.modules.applications.service.repository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            response = client.get(f"/api/v1/applications/{uuid4()}")

        body = response.json()
        assert response.status_code == 404
        assert body["success"] is False
        assert body["error"] == "APPLICATION_NOT_FOUND"

    def test_request_validation_error_lists_fields(self, client):
        response = client.post("/api/v1/contacts/submit", json={"first_name": "Jean"})

        body = response.json()
        assert response.status_code == 422
        assert body["error"] == "VALIDATION_ERROR"
        assert "email" in body["details"]["fields"]

    def test_unknown_route_uses_envelope(self, client):
        response = client.get("/api/v1/nothing-here")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_unhandled_error_is_opaque(self, client):
        with patch("app.modules.leaders.service.LeaderRepository") as mock_repo:
            mock_repo.list_all = AsyncMock(side_effect=RuntimeError("boom"))

            response = client.get("/api/v1/leaders/select")

        body = response.json()
        assert response.status_code == 500
        assert body["error"] == "INTERNAL_ERROR"
        assert body["message"] == "An unexpected error occurred"


async def _failing_list_leaders(db):
    try:
        raise OSError("disk unavailable")
    except OSError as e:
        raise InternalError("Failed to load leaders.") from e


class TestInternalErrorDiagnostics:
    def test_cause_included_in_development(self, client):
        with (
            patch("app.modules.leaders.service.list_leaders", _failing_list_leaders),
            patch.object(settings, "python_env", "development"),
        ):
            response = client.get("/api/v1/leaders/select")

        body = response.json()
        assert response.status_code == 500
        assert body["message"] == "Failed to load leaders."
        assert body["debug"] == "disk unavailable"

    def test_cause_hidden_in_production(self, client):
        with (
            patch("app.modules.leaders.service.list_leaders", _failing_list_leaders),
            patch.object(settings, "python_env", "production"),
        ):
            response = client.get("/api/v1/leaders/select")

        assert response.status_code == 500
        assert "debug" not in response.json()

    def test_client_errors_carry_no_debug(self, client):
        with patch("app.modules.applications.service.repository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            response = client.get(f"/api/v1/applications/{uuid4()}")

        assert "debug" not in response.json()


class TestRouting:
    def test_statistics_not_shadowed_by_id_route(self, client):
        response = client.get("/api/v1/applications/statistics")

        # Reaches the admin-only route (auth failure), not the id route (422)
        assert response.status_code in (401, 403)
        assert response.json()["success"] is False

    def test_writes_require_admin(self, client):
        response = client.delete(f"/api/v1/gallery/delete/{uuid4()}")

        assert response.status_code in (401, 403)

    def test_statistics_with_admin_token(self, client):
        with patch("app.modules.applications.service.repository") as mock_repo:
            mock_repo.get_status_counts = AsyncMock(return_value={"submitted": 2})

            response = client.get(
                "/api/v1/applications/statistics",
                headers={"Authorization": "Bearer test-token"},
            )

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["data"]["submitted"] == 2
