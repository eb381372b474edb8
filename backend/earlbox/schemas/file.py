"""File request/response schemas."""
from datetime import datetime
from pydantic import BaseModel


class UploadFileRequest(BaseModel):
    original_name: str
    file_data: str  # base64
    mime_type: str
    file_size: int


class UploadFileResponse(BaseModel):
    id: str
    public_link: str
    original_name: str
    file_size: int
    upload_date: datetime


class FileDownloadResponse(BaseModel):
    id: str
    original_name: str
    file_data: str  # base64
    mime_type: str
    file_size: int


class FileRecordResponse(BaseModel):
    id: str
    original_name: str
    file_path: str
    file_size: int
    mime_type: str
    upload_date: datetime


class FileStats(BaseModel):
    total_files: int
