"""Upload path: validate, decode, write the blob, then record it.

The blob write always completes before the catalog insert is attempted. If
the insert fails, the freshly written blob is discarded on a best-effort
basis; a blob without a row is never reachable, so a failed discard is only
logged.
"""
import base64
import binascii
import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from earlbox.config import settings
from earlbox.exceptions import SizeMismatchError, StorageWriteError, ValidationError
from earlbox.models.file_record import FileRecord
from earlbox.services import catalog
from earlbox.services.blob_store import BlobStore

logger = logging.getLogger(__name__)

# Fallback when the original name carries no usable extension
MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "text/plain": ".txt",
    "application/pdf": ".pdf",
    "application/json": ".json",
    "text/html": ".html",
    "text/css": ".css",
    "application/javascript": ".js",
    "text/javascript": ".js",
}

# A name suffix is only trusted if it is a plain token (no separators).
_EXTENSION_TOKEN = re.compile(r"^[A-Za-z0-9_-]{1,32}$")


@dataclass
class UploadResult:
    id: uuid.UUID
    public_link: str
    original_name: str
    size_bytes: int
    uploaded_at: datetime
    storage_path: str


def infer_extension(original_name: str, mime_type: str) -> str:
    """Pick a storage extension: name suffix first, then mime type, else none."""
    _, dot, suffix = original_name.rpartition(".")
    if dot and _EXTENSION_TOKEN.match(suffix):
        return f".{suffix}"
    base_mime = mime_type.split(";", 1)[0].strip().lower()
    return MIME_EXTENSIONS.get(base_mime, "")


def public_link_for(file_id: uuid.UUID) -> str:
    """Path under which the file is served; the client prefixes scheme and host."""
    return f"{settings.PUBLIC_LINK_PREFIX.rstrip('/')}/{file_id}"


def validate_upload(original_name: str, declared_size: int) -> None:
    """Reject bad input before any decoding or storage I/O."""
    if not original_name:
        raise ValidationError("File name cannot be empty")
    if isinstance(declared_size, bool) or not isinstance(declared_size, int):
        raise ValidationError("File size must be an integer")
    if declared_size <= 0:
        raise ValidationError("File size must be positive")
    if declared_size > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(
            f"File size cannot exceed {settings.MAX_UPLOAD_BYTES} bytes"
        )


def decode_payload(file_data: str, declared_size: int) -> bytes:
    """Decode base64 content and check it against the declared size."""
    try:
        content = base64.b64decode(file_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"File data is not valid base64: {e}") from e
    if len(content) != declared_size:
        raise SizeMismatchError(declared_size, len(content))
    return content


async def upload_file(
    db: AsyncSession,
    store: BlobStore,
    original_name: str,
    file_data: str,
    mime_type: str,
    file_size: int,
) -> UploadResult:
    """Store an uploaded file and create its catalog row.

    Raises:
        ValidationError: empty name, size out of range, or undecodable data.
        SizeMismatchError: decoded length differs from ``file_size``.
        StorageWriteError: the blob write or the catalog insert failed.
    """
    validate_upload(original_name, file_size)
    content = decode_payload(file_data, file_size)

    file_id = uuid.uuid4()
    storage_path = store.path_for(f"{file_id}{infer_extension(original_name, mime_type)}")

    # Step 1: blob
    logger.info("Storing upload %s (%d bytes) as %s", file_id, len(content), storage_path)
    await store.write(storage_path, content)

    # Step 2: catalog row, only after the blob is in place
    record = FileRecord(
        id=file_id,
        original_name=original_name,
        storage_path=storage_path,
        size_bytes=len(content),
        mime_type=mime_type,
    )
    try:
        await catalog.insert_record(db, record)
    except SQLAlchemyError as e:
        logger.exception("Catalog insert failed for upload %s", file_id)
        await db.rollback()
        await store.discard(storage_path)
        raise StorageWriteError(f"Could not record file: {e}") from e

    # The row is committed from here on, so the blob must stay even if this fails.
    await db.refresh(record)

    logger.info("Upload %s committed: %r", record.id, record.original_name)
    return UploadResult(
        id=record.id,
        public_link=public_link_for(record.id),
        original_name=record.original_name,
        size_bytes=record.size_bytes,
        uploaded_at=record.uploaded_at,
        storage_path=record.storage_path,
    )
