"""Public link target: stream a stored file by id."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from earlbox.config import settings
from earlbox.database import get_db
from earlbox.services import retrieval
from earlbox.services.blob_store import BlobStore, get_blob_store

router = APIRouter(prefix=settings.PUBLIC_LINK_PREFIX.rstrip("/"), tags=["downloads"])


@router.get("/{file_id}")
async def download_file(
    file_id: str,
    db: AsyncSession = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    """Download a file by ID."""
    record = await retrieval.get_metadata(db, file_id)
    stat_result = await store.stat(record.storage_path) if record else None
    if stat_result is None:
        raise HTTPException(status_code=404, detail="File not found")

    # Starlette reuses this stat; a blob removed between here and the send
    # still fails the response mid-flight.
    return FileResponse(
        path=record.storage_path,
        stat_result=stat_result,
        filename=record.original_name,
        media_type=record.mime_type or "application/octet-stream",
    )
