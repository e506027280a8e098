"""
QuickNotes Backend — Notes Route Handlers
===========================================

What:  GET/POST /api/notes, DELETE /api/notes/{id}, POST /api/notes/summarize.
How:   Routes stay thin: parse the request, call NoteService or the
       summarizer, pick the status code. Errors are raised as application
       exceptions and formatted by the handlers registered in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from quicknotes.database import get_db_session
from quicknotes.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreate,
    NoteResponse,
    SummarizeRequest,
    SummaryResponse,
)
from quicknotes.services.gemini_service import summarizer
from quicknotes.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Store unavailable", "model": ErrorResponse}},
    summary="List all notes, newest first",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    logger.info("Fetching all notes")
    return await note_service.list_notes(db)


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses={
        400: {"description": "Both title and content are empty", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note from `{title?, content?}`.

    Returns the stored record, including the generated id and timestamps,
    so the client can append it without re-fetching the list.
    """
    logger.info("Creating new note")
    return await note_service.create_note(db, payload)


@router.post(
    "/notes/summarize",
    response_model=SummaryResponse,
    responses={500: {"description": "Key missing or provider failure", "model": ErrorResponse}},
    summary="Summarize free text with Gemini",
)
async def summarize_note(payload: SummarizeRequest) -> SummaryResponse:
    """
    Summarize the given text in one or two sentences.

    The text is whatever the client sends; no note is looked up and nothing
    is stored.
    """
    logger.info("Summarize requested (%d chars)", len(payload.content))
    summary = await summarizer.summarize(payload.content)
    return SummaryResponse(summary=summary)


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a note by id",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    logger.info("Deleting note %s", note_id)
    await note_service.delete_note(db, note_id)
    return MessageResponse(message="Note deleted successfully")
