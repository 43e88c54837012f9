"""
Quillnote Backend - Note Service (Owner-Scoped CRUD)
======================================================

What:  Create, list, read, update and delete notes for the calling user.
How:   Every query is filtered by owner. Single-note operations resolve
       the note through the AccessGate, so "not yours" and "does not
       exist" are the same NotFoundError everywhere.
Who:   Called by the /api/notes route handlers.

Design Decision:
    NoteService is stateless: it receives the db session and owner ID
    for each call, so every call has its own transaction and any
    dependency can be mocked independently in tests.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy import and_, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, QuillnoteError, ValidationError
from app.models.note import Note
from app.schemas.note import NoteListResponse, NoteResponse
from app.services.access_gate import AccessGate, access_gate

logger = logging.getLogger(__name__)

BLANK_FIELDS_MESSAGE = "Title and content are required"
CURSOR_SEPARATOR = "|"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def encode_cursor(note) -> str:
    """Position just after `note` in (created_at DESC, id DESC) order."""
    return f"{note.created_at.isoformat()}{CURSOR_SEPARATOR}{note.id}"


def decode_cursor(cursor: str) -> Optional[Tuple[datetime, Optional[str]]]:
    """
    Parse "<ISO created_at>|<id>" into (created_at, id).

    A bare ISO timestamp yields (created_at, None). Returns None when the
    timestamp does not parse.
    """
    stamp, sep, note_id = cursor.partition(CURSOR_SEPARATOR)
    try:
        created_at = datetime.fromisoformat(stamp)
    except ValueError:
        return None
    return created_at, (note_id if sep else None)


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        Our own exceptions (ValidationError, NotFoundError) propagate
        unchanged. Anything else raised while talking to the database is
        logged and wrapped in DatabaseError, which renders as a generic 500.
    """

    def __init__(self, gate: Optional[AccessGate] = None):
        self.gate = gate or access_gate

    async def create_note(
        self,
        db: AsyncSession,
        owner_id: str,
        title: str,
        content: str,
    ) -> NoteResponse:
        """
        Persist a new note owned by `owner_id`.

        Raises:
            ValidationError: blank title or content (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        if _is_blank(title) or _is_blank(content):
            raise ValidationError(message=BLANK_FIELDS_MESSAGE)

        try:
            note = Note(user_id=owner_id, title=title, content=content)
            db.add(note)
            # Flush assigns defaults (id, timestamps) without committing
            await db.flush()
            await db.refresh(note)
        except Exception as e:
            logger.error("Database error creating note for %s: %s", owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note %s created for user %s", note.id, owner_id)
        return NoteResponse.model_validate(note)

    async def get_note(self, db: AsyncSession, owner_id: str, note_id: str) -> NoteResponse:
        """
        Retrieve a single note the caller owns.

        Raises:
            NotFoundError: note missing or owned by someone else (→ 404)
            DatabaseError: query failed (→ 500)
        """
        note = await self.gate.resolve_owned_note(db, owner_id=owner_id, note_id=note_id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        owner_id: str,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> NoteResponse:
        """
        Edit title and/or content in place. ID and owner never change.

        Omitted fields (None) are left untouched; provided fields must
        not be blank.

        Raises:
            ValidationError: a provided field is blank (→ 400)
            NotFoundError: note missing or owned by someone else (→ 404)
            DatabaseError: update failed (→ 500)
        """
        if (title is not None and _is_blank(title)) or (
            content is not None and _is_blank(content)
        ):
            raise ValidationError(message=BLANK_FIELDS_MESSAGE)

        note = await self.gate.resolve_owned_note(db, owner_id=owner_id, note_id=note_id)

        try:
            if title is not None:
                note.title = title
            if content is not None:
                note.content = content
            await db.flush()
            await db.refresh(note)
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        logger.info("Note %s updated", note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, owner_id: str, note_id: str) -> None:
        """
        Permanently delete a note the caller owns.

        Raises:
            NotFoundError: note missing or owned by someone else (→ 404)
            DatabaseError: delete failed (→ 500)
        """
        note = await self.gate.resolve_owned_note(db, owner_id=owner_id, note_id=note_id)

        try:
            await db.delete(note)
            await db.flush()
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        logger.info("Note %s deleted", note_id)

    async def list_notes(
        self,
        db: AsyncSession,
        owner_id: str,
        limit: int = 20,
        cursor: Optional[str] = None,
    ) -> NoteListResponse:
        """
        List the caller's notes, newest first, with keyset pagination.

        How:
            - Order: created_at DESC, id DESC (id breaks timestamp ties)
            - Cursor: "<ISO created_at>|<id>" of the last item returned
            - Fetch limit + 1 rows to know whether another page exists
            - Invalid cursors are ignored (first page is returned)

        Query plan:
            SELECT * FROM notes WHERE user_id = :owner
              AND (created_at < :ts OR (created_at = :ts AND id < :id))
            ORDER BY created_at DESC, id DESC LIMIT :limit + 1
            → idx_notes_user_id_created_at
        """
        try:
            query = select(Note).where(Note.user_id == owner_id)

            position = decode_cursor(cursor) if cursor else None
            if position:
                cursor_dt, cursor_id = position
                if cursor_id is None:
                    query = query.where(Note.created_at < cursor_dt)
                else:
                    query = query.where(
                        or_(
                            Note.created_at < cursor_dt,
                            and_(Note.created_at == cursor_dt, Note.id < cursor_id),
                        )
                    )

            query = query.order_by(desc(Note.created_at), desc(Note.id)).limit(limit + 1)

            result = await db.execute(query)
            notes = list(result.scalars().all())

            count_result = await db.execute(
                select(func.count(Note.id)).where(Note.user_id == owner_id)
            )
            total_count = count_result.scalar() or 0

            has_more = len(notes) > limit
            if has_more:
                notes = notes[:limit]

            next_cursor = None
            if has_more and notes:
                next_cursor = encode_cursor(notes[-1])

            return NoteListResponse(
                notes=[NoteResponse.model_validate(note) for note in notes],
                total_count=total_count,
                next_cursor=next_cursor,
                has_more=has_more,
            )

        except QuillnoteError:
            raise
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )


note_service = NoteService()
