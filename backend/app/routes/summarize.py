"""
Quillnote Backend - Summarize Route Handler
=============================================

What:  Handles POST /api/summarize.
How:   Resolves the session, then hands the note ID and provider selector
       to SummaryService, which runs the access gate and the provider call.

Request:   {"noteId": "<id>", "provider": "openai" | "gemini"}
Response:  {"summary": "<text>"}

Error responses (handled by global exception handlers):
    401 {"error": "Unauthorized"}
    400 {"error": "Note ID is required"}
    404 {"error": "Note not found"}
    500 {"error": "Failed to generate summary. Please check your API key configuration."}
    500 {"error": "Internal server error"}
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import CurrentUser, get_current_user
from app.database import get_db_session
from app.schemas.note import ErrorResponse, SummarizeRequest, SummarizeResponse
from app.services.summary_service import summary_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Summarize"])


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    responses={
        400: {"description": "Missing note ID", "model": ErrorResponse},
        401: {"description": "No valid session", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Summarization or server failure", "model": ErrorResponse},
    },
    summary="Summarize a note with an AI provider",
    description=(
        "Generates a 2-3 sentence summary of one of the caller's notes. "
        "The provider defaults to 'openai'; unrecognized providers also use 'openai'. "
        "Summaries are not stored."
    ),
)
async def summarize_note(
    payload: SummarizeRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SummarizeResponse:
    summary = await summary_service.summarize_note(
        db=db,
        user=user,
        note_id=payload.note_id,
        provider=payload.provider,
    )
    return SummarizeResponse(summary=summary)
