"""File procedures: upload, stats, content fetch, metadata fetch.

Procedure names match what the web client calls (uploadFile, getFileStats,
getFileById, serveFile). Lookups answer ``null`` rather than 404 for unknown
ids; service errors are mapped to HTTP statuses in ``earlbox.main``.
"""
import base64
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from earlbox.database import get_db
from earlbox.schemas.file import (
    FileDownloadResponse,
    FileRecordResponse,
    FileStats,
    UploadFileRequest,
    UploadFileResponse,
)
from earlbox.services import ingest, retrieval, stats
from earlbox.services.blob_store import BlobStore, get_blob_store

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/uploadFile", response_model=UploadFileResponse, status_code=201)
async def upload_file(
    body: UploadFileRequest,
    db: AsyncSession = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    """Upload a base64-encoded file and get its public link."""
    result = await ingest.upload_file(
        db,
        store,
        original_name=body.original_name,
        file_data=body.file_data,
        mime_type=body.mime_type,
        file_size=body.file_size,
    )
    return {
        "id": str(result.id),
        "public_link": result.public_link,
        "original_name": result.original_name,
        "file_size": result.size_bytes,
        "upload_date": result.uploaded_at,
    }


@router.get("/getFileStats", response_model=FileStats)
async def get_file_stats(db: AsyncSession = Depends(get_db)):
    """Total number of stored files."""
    return await stats.get_stats(db)


@router.get("/getFileById", response_model=Optional[FileDownloadResponse])
async def get_file_by_id(
    file_id: str = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    """File content (base64) and metadata, or null."""
    content = await retrieval.get_content(db, store, file_id)
    if content is None:
        return None
    return {
        "id": str(content.id),
        "original_name": content.original_name,
        "file_data": base64.b64encode(content.content).decode("ascii"),
        "mime_type": content.mime_type,
        "file_size": content.size_bytes,
    }


@router.get("/serveFile", response_model=Optional[FileRecordResponse])
async def serve_file(
    file_id: str = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
):
    """File metadata only, or null."""
    record = await retrieval.get_metadata(db, file_id)
    if record is None:
        return None
    return _to_response(record)


def _to_response(record) -> dict:
    return {
        "id": str(record.id),
        "original_name": record.original_name,
        "file_path": record.storage_path,
        "file_size": record.size_bytes,
        "mime_type": record.mime_type,
        "upload_date": record.uploaded_at,
    }
