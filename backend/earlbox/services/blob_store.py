"""Blob store on the local filesystem.

Blobs are written once under a flat directory and never modified. Callers get
no update or delete operation; ``discard`` exists only so the ingest path can
clean up after a failed catalog insert.
"""
import logging
import os
from pathlib import Path

import aiofiles
import aiofiles.os

from earlbox.config import settings
from earlbox.exceptions import StorageWriteError

logger = logging.getLogger(__name__)


class BlobStore:
    """Handles blob read/write under a single storage root."""

    def __init__(self, root: str | Path):
        self.base_path = Path(root)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> str:
        """Storage path for a server-generated filename."""
        return str(self.base_path / filename)

    async def write(self, storage_path: str, data: bytes) -> None:
        """Write bytes to ``storage_path``.

        The bytes go to a hidden ``.part`` file first and are renamed into
        place, so an interrupted write never leaves a blob at the final path.
        """
        path = Path(storage_path)
        tmp_path = path.with_name(f".{path.name}.part")
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            logger.exception("Failed to write blob: %s", storage_path)
            raise StorageWriteError(f"Could not write blob: {e}") from e
        finally:
            try:
                if await aiofiles.os.path.exists(tmp_path):
                    await aiofiles.os.remove(tmp_path)
            except OSError:
                logger.exception("Failed to remove partial blob: %s", tmp_path)

    async def read(self, storage_path: str) -> bytes | None:
        """Read blob bytes. Returns None if the blob is gone."""
        try:
            async with aiofiles.open(storage_path, "rb") as f:
                return await f.read()
        except FileNotFoundError:
            return None

    async def stat(self, storage_path: str) -> os.stat_result | None:
        """Stat a blob. Returns None if the blob is gone."""
        try:
            return await aiofiles.os.stat(storage_path)
        except FileNotFoundError:
            return None

    async def discard(self, storage_path: str) -> None:
        """Best-effort removal of a blob that never got a catalog row."""
        try:
            logger.warning("Rolling back upload, deleting blob: %s", storage_path)
            await aiofiles.os.remove(storage_path)
        except FileNotFoundError:
            pass
        except OSError:
            # The blob stays behind without a row and is never discoverable.
            logger.exception("Failed to roll back upload, orphaned blob: %s", storage_path)


blob_store = BlobStore(settings.FILE_STORAGE_PATH)


def get_blob_store() -> BlobStore:
    """FastAPI dependency returning the configured blob store."""
    return blob_store
