"""FileRecord model - file metadata (actual bytes live in the blob store).

Attribute names follow the service vocabulary; column names follow the
published table layout (file_path, file_size, upload_date).
"""
import uuid
from datetime import datetime
from sqlalchemy import BigInteger, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column
from earlbox.models.base import Base


class FileRecord(Base):
    __tablename__ = "files"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    original_name: Mapped[str] = mapped_column(String(500), nullable=False)
    storage_path: Mapped[str] = mapped_column("file_path", String(1000), nullable=False)
    size_bytes: Mapped[int] = mapped_column("file_size", BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        "upload_date", DateTime(timezone=True), server_default=func.now(), nullable=False
    )
