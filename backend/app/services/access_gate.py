"""
Quillnote Backend - Note Access Gate
======================================

What:  Resolves a note for a given owner, or reports NotFound.
How:   One query filtered by note ID *and* owner ID. A note that exists
       but belongs to someone else is indistinguishable from a note that
       does not exist.
Who:   SummaryService (before any provider call) and NoteService (before
       every single-note read, update or delete).
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.note import Note

logger = logging.getLogger(__name__)


class AccessGate:
    """Owner-scoped note lookup."""

    @staticmethod
    def owned_note_query(note_id: str, owner_id: str):
        return select(Note).where(Note.id == note_id, Note.user_id == owner_id)

    async def resolve_owned_note(
        self,
        db: AsyncSession,
        owner_id: str,
        note_id: str,
    ) -> Note:
        """
        Fetch a note the caller owns.

        Args:
            db: Async database session
            owner_id: Identity resolved from the session
            note_id: Opaque note identifier from the request

        Returns:
            The matching Note.

        Raises:
            NotFoundError: no note with this ID is owned by `owner_id`
            DatabaseError: the lookup itself failed
        """
        try:
            result = await db.execute(self.owned_note_query(note_id, owner_id))
            note = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error resolving note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        if note is None:
            logger.info("Note %s not found for owner %s", note_id, owner_id)
            raise NotFoundError(resource="Note", resource_id=note_id)

        return note


access_gate = AccessGate()
