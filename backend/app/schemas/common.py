"""
NoteShare Backend — Shared Response Schemas
=============================================

What:  Response models used by both services: error body, health, and the
       storage part of /api/debug.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint.

    Example:
        {"code": "group_not_found", "message": "group with ID '7' was not found"}

    `code` is stable and machine-readable; it is not the HTTP status.
    The request ID is returned in the X-Request-ID header, not in the body.
    """
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")


class StorageInfo(BaseModel):
    """Where a service's database lives and whether its file is present."""
    database_url: str
    db_file_path: Optional[str] = None
    file_exists: bool = False
    file_size: Optional[int] = None


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    service: str = Field(description="board or summarizer")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
