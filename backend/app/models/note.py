"""
Quillnote Backend - Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteService and AccessGate for owner-scoped CRUD.

Table Design:
    - id: opaque text identifier (a UUID4 string when created here). Kept as
      text so identifiers handed out by other clients round-trip unchanged.
    - user_id: subject claim of the identity provider's session token.
    - title / content: both required and non-blank (enforced in NoteService).
    - created_at / updated_at: UTC with timezone.

    Index on (user_id, created_at DESC):
        Every list query is "this owner's notes, newest first".
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Index, String, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_note_id() -> str:
    return str(uuid.uuid4())


class Note(Base):
    """
    A user's text note.

    Lifecycle:
        1. Created on explicit user action
        2. Title/content edited in place (id and owner never change)
        3. Hard-deleted on explicit delete (no soft delete, no versions)
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=_new_note_id,
        comment="Opaque note identifier",
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Owner: subject of the identity provider session",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Note title (non-blank)",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body (non-blank, unbounded length)",
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was last edited (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_user_id_created_at", user_id, created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, user_id='{self.user_id}', title='{self.title}')>"
