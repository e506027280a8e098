"""
QuickNotes Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between client and backend.
Why:   Input validation, serialization, and OpenAPI doc generation.
How:   FastAPI validates request bodies against these models and serializes
       responses by alias, so the wire format uses camelCase timestamps
       (`createdAt`, `updatedAt`) while Python code uses snake_case.

Schemas are separate from the SQLAlchemy model so the wire contract can stay
fixed while the table evolves.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/notes.

    Both fields are optional at the schema level. The "title or content"
    rule lives in NoteService so the store is never reached for an empty note.
    """
    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")


class SummarizeRequest(BaseModel):
    """Body of POST /api/notes/summarize. Free text, not tied to a stored note."""
    content: str = Field(description="Text to summarize")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a stored note.

    Returned by GET /api/notes (as array items) and POST /api/notes.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID = Field(description="Server-assigned note identifier")
    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last written (UTC ISO 8601)")

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite drops the offset on read; every stored timestamp is UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class MessageResponse(BaseModel):
    """Plain confirmation returned by DELETE /api/notes/{id}."""
    message: str = Field(description="Human-readable confirmation")


class SummaryResponse(BaseModel):
    """Returned by POST /api/notes/summarize."""
    summary: str = Field(description="One-to-two sentence summary of the given text")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Note not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    summarizer: str = Field(description="Summarizer status: available, unavailable, disabled")
    uptime_seconds: float = Field(description="Seconds since service started")
