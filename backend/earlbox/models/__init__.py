"""Import all models so SQLAlchemy metadata knows about them."""
from earlbox.models.base import Base
from earlbox.models.file_record import FileRecord

__all__ = ["Base", "FileRecord"]
