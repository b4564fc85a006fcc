"""
File Storage

Local filesystem storage for uploaded files. Files are written under
``settings.upload_dir`` and served by the static mount at
``settings.uploads_url_prefix``. Blocking disk I/O runs in a worker thread.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from app.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    """Result of a successful save."""

    path: str
    url: str
    size: int


class LocalFileStorage:
    """Save and delete files on the local filesystem."""

    def __init__(self, root: str | Path, url_prefix: str):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _write(self, target: Path, content: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(content)

    def _unlink(self, target: Path) -> None:
        resolved = target.resolve()
        if not resolved.is_relative_to(self.root.resolve()):
            raise PermissionError(f"Refusing to delete {target}: outside the storage root")
        resolved.unlink()

    async def save(self, relative_dir: str, filename: str, content: bytes) -> StoredFile:
        """
        Write content to ``<root>/<relative_dir>/<filename>``.

        Returns:
            StoredFile with the storage path, public URL and size in bytes
        """
        target = self.root / relative_dir / filename
        await asyncio.to_thread(self._write, target, content)
        logger.debug(f"Stored file {target} ({len(content)} bytes)")
        return StoredFile(
            path=str(target),
            url=f"{self.url_prefix}/{relative_dir}/{filename}",
            size=len(content),
        )

    async def delete(self, path: str) -> None:
        """
        Delete a stored file by its storage path.

        Only files under the storage root are removed.

        Raises:
            OSError: If the file cannot be removed or lies outside the root
        """
        await asyncio.to_thread(self._unlink, Path(path))
        logger.debug(f"Deleted file {path}")


_storage: LocalFileStorage | None = None


def get_storage() -> LocalFileStorage:
    """FastAPI dependency returning the shared storage instance."""
    global _storage
    if _storage is None:
        _storage = LocalFileStorage(settings.upload_dir, settings.uploads_url_prefix)
    return _storage
