"""Metadata catalog access: insert, lookup by id, count."""
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from earlbox.models.file_record import FileRecord


async def insert_record(db: AsyncSession, record: FileRecord) -> None:
    """Insert and commit a new row.

    Server-assigned columns (upload_date) are not loaded here; callers refresh
    the record once they know the commit went through.
    """
    db.add(record)
    await db.commit()


async def get_record(db: AsyncSession, file_id: uuid.UUID) -> FileRecord | None:
    result = await db.execute(
        select(FileRecord).where(FileRecord.id == file_id)
    )
    return result.scalar_one_or_none()


async def count_records(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(FileRecord.id)))
    return result.scalar_one()
