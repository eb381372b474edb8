"""Shared Pydantic schemas."""
from datetime import datetime
from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    database: str = "connected"


class ErrorResponse(BaseModel):
    error: str
    detail: str
