"""
Tests for local file storage.
"""

import pytest

from app.core.storage import LocalFileStorage


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(tmp_path / "uploads", "/uploads/")


class TestSave:
    @pytest.mark.asyncio
    async def test_writes_under_root(self, storage, tmp_path):
        stored = await storage.save("applications", "resume-1.pdf", b"%PDF")

        assert stored.url == "/uploads/applications/resume-1.pdf"
        assert stored.size == 4
        assert (tmp_path / "uploads" / "applications" / "resume-1.pdf").read_bytes() == b"%PDF"


class TestDelete:
    @pytest.mark.asyncio
    async def test_removes_stored_file(self, storage):
        stored = await storage.save("applications", "resume-1.pdf", b"%PDF")

        await storage.delete(stored.path)

        assert not (storage.root / "applications" / "resume-1.pdf").exists()

    @pytest.mark.asyncio
    async def test_refuses_path_outside_root(self, storage, tmp_path):
        victim = tmp_path / "outside" / "secret.txt"
        victim.parent.mkdir()
        victim.write_text("keep")

        with pytest.raises(OSError):
            await storage.delete(str(victim))

        assert victim.exists()

    @pytest.mark.asyncio
    async def test_refuses_traversal_out_of_root(self, storage, tmp_path):
        victim = tmp_path / "secret.txt"
        victim.write_text("keep")
        (storage.root / "applications").mkdir(parents=True)

        with pytest.raises(OSError):
            await storage.delete(str(storage.root / "applications" / ".." / ".." / "secret.txt"))

        assert victim.exists()

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, storage):
        with pytest.raises(FileNotFoundError):
            await storage.delete(str(storage.root / "applications" / "gone.pdf"))
