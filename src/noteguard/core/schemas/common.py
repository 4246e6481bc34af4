"""
Shared response schemas - errors, health etc
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..timeutils import utc_now


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str = Field(description="Error kind")
    message: str = Field(description="Human-readable error message")
    timestamp: datetime = Field(default_factory=utc_now, description="Error timestamp")
    path: Optional[str] = Field(default=None, description="Request path")

    class Config:
        json_schema_extra = {
            "example": {
                "error": "not_found",
                "message": "Note not found",
                "timestamp": "2026-10-19T17:23:45Z",
                "path": "/api/notes/123e4567-e89b-12d3-a456-426614174000",
            }
        }


class SuccessResponse(BaseModel):
    """Standard success response schema."""

    success: bool = Field(default=True, description="Operation success status")
    message: str = Field(description="Success message")
    data: Optional[dict[str, Any]] = Field(default=None, description="Additional response data")


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=utc_now)
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "timestamp": "2026-10-19T10:30:00Z",
                "version": "1.0.0",
                "checks": {
                    "database": {"status": "healthy", "response_time_ms": 15},
                    "cleanup": {"status": "healthy", "running": True, "interval_seconds": 3600},
                },
            }
        }
