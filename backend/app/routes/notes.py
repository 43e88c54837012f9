"""
Quillnote Backend - Notes Route Handlers
==========================================

What:  Owner-scoped CRUD over /api/notes.
How:   Resolves the session, delegates to NoteService, returns JSON.
Who:   Called by the dashboard (list, delete) and the note editor
       (create, read, update).

Every handler depends on get_current_user, so a request without a valid
session is rejected with 401 before the database is touched.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import CurrentUser, get_current_user
from app.database import get_db_session
from app.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

_AUTH_AND_NOT_FOUND = {
    401: {"description": "No valid session", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses={
        401: {"description": "No valid session", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the caller's notes",
    description=(
        "Returns the caller's notes, newest first, with cursor-based pagination. "
        "The total count is also returned in the X-Total-Count header."
    ),
)
async def list_notes(
    response: Response,
    limit: int = Query(default=20, ge=1, le=100, description="Items per page (max 100)"),
    cursor: Optional[str] = Query(
        default=None,
        description="next_cursor from the previous page (created_at|id of its last item)",
    ),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteListResponse:
    result = await note_service.list_notes(db=db, owner_id=user.id, limit=limit, cursor=cursor)
    response.headers["X-Total-Count"] = str(result.total_count)
    return result


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Blank title or content", "model": ErrorResponse},
        401: {"description": "No valid session", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.create_note(
        db=db,
        owner_id=user.id,
        title=payload.title,
        content=payload.content,
    )


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses=_AUTH_AND_NOT_FOUND,
    summary="Get a single note",
)
async def get_note(
    note_id: str,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    result = await note_service.get_note(db=db, owner_id=user.id, note_id=note_id)
    # Notes are editable and private: browsers must revalidate, CDNs must not store
    response.headers["Cache-Control"] = "private, no-cache"
    return result


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Blank title or content", "model": ErrorResponse},
        **_AUTH_AND_NOT_FOUND,
    },
    summary="Update a note's title and/or content",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(
        db=db,
        owner_id=user.id,
        note_id=note_id,
        title=payload.title,
        content=payload.content,
    )


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    responses=_AUTH_AND_NOT_FOUND,
    summary="Delete a note permanently",
)
async def delete_note(
    note_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, owner_id=user.id, note_id=note_id)
    return Response(status_code=204)
