"""Read paths: full content fetch and metadata-only fetch.

Both return None for ids the catalog does not know. ``get_content`` also
returns None when the row exists but its blob is gone, since a row alone does
not prove the content is available.
"""
import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from earlbox.exceptions import ValidationError
from earlbox.models.file_record import FileRecord
from earlbox.services import catalog
from earlbox.services.blob_store import BlobStore

logger = logging.getLogger(__name__)


@dataclass
class FileContent:
    id: uuid.UUID
    original_name: str
    content: bytes
    mime_type: str
    size_bytes: int


def parse_file_id(raw: str | uuid.UUID) -> uuid.UUID:
    """Parse a canonical hyphenated UUID, or raise ValidationError."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        file_id = uuid.UUID(raw)
    except (TypeError, ValueError, AttributeError):
        raise ValidationError("Invalid file ID format") from None
    if str(file_id) != raw.lower():
        raise ValidationError("Invalid file ID format")
    return file_id


async def get_metadata(db: AsyncSession, raw_id: str | uuid.UUID) -> FileRecord | None:
    """Catalog row for ``raw_id``; the blob is not touched."""
    file_id = parse_file_id(raw_id)
    return await catalog.get_record(db, file_id)


async def get_content(
    db: AsyncSession, store: BlobStore, raw_id: str | uuid.UUID
) -> FileContent | None:
    """Catalog row plus blob bytes for ``raw_id``."""
    record = await get_metadata(db, raw_id)
    if record is None:
        return None

    content = await store.read(record.storage_path)
    if content is None:
        logger.warning("Blob missing for file %s at %s", record.id, record.storage_path)
        return None

    return FileContent(
        id=record.id,
        original_name=record.original_name,
        content=content,
        mime_type=record.mime_type,
        size_bytes=record.size_bytes,
    )
