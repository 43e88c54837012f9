"""
Quillnote Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate OpenAPI documentation.

Schemas are separate from SQLAlchemy models: the API never exposes
columns it does not list here.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Summarization
# ══════════════════════════════════════════════════════════════════════════


class Provider(str, Enum):
    """Summarization providers known to the registry."""

    OPENAI = "openai"
    GEMINI = "gemini"


DEFAULT_PROVIDER = Provider.OPENAI


class SummarizeRequest(BaseModel):
    """
    What:  Body of POST /api/summarize.

    Both fields are optional at the schema level: a missing noteId is a
    business-rule error (400 "Note ID is required") reported after the
    session check, and provider accepts any value because unknown
    providers fall back to the default instead of failing.
    """

    note_id: Optional[str] = Field(
        default=None,
        alias="noteId",
        description="Identifier of the note to summarize",
    )
    provider: Optional[str] = Field(
        default=None,
        description="Summarization provider: 'openai' (default) or 'gemini'",
    )

    model_config = {"populate_by_name": True}

    @field_validator("note_id", mode="before")
    @classmethod
    def coerce_note_id(cls, v: Any) -> Optional[str]:
        """
        Non-string IDs never match a note: falsy ones (0, false) count as
        missing, anything else is kept as text and resolves to 404.
        """
        if v is None or isinstance(v, str):
            return v
        if not v:
            return None
        return str(v)

    @field_validator("provider", mode="before")
    @classmethod
    def coerce_provider(cls, v: Any) -> Optional[str]:
        """Non-string selectors are kept as text so they hit the default fallback."""
        if v is None or isinstance(v, str):
            return v
        return str(v)


class SummarizeResponse(BaseModel):
    """Returned by POST /api/summarize on success."""

    summary: str = Field(description="Generated summary text")


# ══════════════════════════════════════════════════════════════════════════
# Notes
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/notes. Blank values are rejected by NoteService."""

    title: str = Field(description="Note title")
    content: str = Field(description="Note body")


class NoteUpdate(BaseModel):
    """Body of PUT /api/notes/{id}. Omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New body")


class NoteResponse(BaseModel):
    """Full representation of a single note."""

    id: str = Field(description="Note identifier")
    user_id: str = Field(description="Owner identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last edit timestamp (UTC)")

    model_config = {"from_attributes": True}


class NoteListResponse(BaseModel):
    """
    What:  Paginated response wrapper for the notes list endpoint.

    How cursor works:
        - next_cursor: "<created_at>|<id>" of the last item in the current page
        - Client sends cursor as query param to get the next page
        - Server resumes strictly after that (created_at, id) position, so
          notes sharing a timestamp are never skipped
    """

    notes: List[NoteResponse] = Field(description="Notes on this page, newest first")
    total_count: int = Field(description="Total number of notes owned by the caller")
    next_cursor: Optional[str] = Field(
        default=None,
        description="Cursor for next page (ISO created_at|id). Null if no more pages.",
    )
    has_more: bool = Field(description="Whether more pages are available")


# ══════════════════════════════════════════════════════════════════════════
# Errors & Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "Note not found"}

    The request correlation ID is returned in the X-Request-ID header.
    """

    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""

    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    providers: Dict[str, str] = Field(
        description="Per-provider key status: configured, not_configured"
    )
    uptime_seconds: float = Field(description="Seconds since service started")
