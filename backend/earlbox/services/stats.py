"""Aggregate file statistics, always counted from the catalog."""
from sqlalchemy.ext.asyncio import AsyncSession

from earlbox.schemas.file import FileStats
from earlbox.services import catalog


async def get_stats(db: AsyncSession) -> FileStats:
    return FileStats(total_files=await catalog.count_records(db))
