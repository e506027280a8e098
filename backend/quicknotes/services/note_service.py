"""
QuickNotes Backend — Note Service (Business Logic)
====================================================

What:  List, create and delete operations against the note store.
Why:   Keeps the "title or content" rule and the error translation out of
       the route handlers.
How:   Each method receives the request's AsyncSession, runs one statement
       (plus a flush for inserts) and converts driver failures into
       DatabaseError. Commit/rollback is owned by get_db_session.

NoteService is stateless; a module-level instance is shared by all routes.
"""

import logging
import uuid
from typing import List

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from quicknotes.exceptions import DatabaseError, NotFoundError, ValidationError
from quicknotes.models.note import Note
from quicknotes.schemas.note import NoteCreate, NoteResponse

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        - Business rule violations → ValidationError / NotFoundError
        - Anything the driver raises → DatabaseError with a generic message
          (details logged, never returned)
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        Return every note, newest first.

        Query plan:
            SELECT * FROM notes ORDER BY created_at DESC
            → served by idx_notes_created_at

        Raises:
            DatabaseError: The query failed. Nothing partial is returned.
        """
        try:
            result = await db.execute(select(Note).order_by(desc(Note.created_at)))
            notes = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch notes",
                context={"error_type": type(e).__name__},
            )

        return [NoteResponse.model_validate(note) for note in notes]

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Validate and persist a new note.

        Workflow:
            1. Reject when both title and content are empty/absent (no DB access)
            2. Insert; the model assigns id, created_at and updated_at
            3. Flush so generated values are populated, then return the record

        Raises:
            ValidationError: Both fields empty.
            DatabaseError: The insert failed.
        """
        if not payload.title and not payload.content:
            raise ValidationError(message="Note cannot be empty", field="title")

        note = Note(title=payload.title, content=payload.content)
        try:
            db.add(note)
            await db.flush()
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create note",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note created: %s", note.id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        """
        Permanently remove the note with the given id.

        `note_id` is taken as the raw path string: a value that isn't a UUID
        can never have been issued, so it is reported as not found rather
        than as a malformed request.

        Raises:
            NotFoundError: No note has this id.
            DatabaseError: The delete failed.
        """
        try:
            parsed_id = uuid.UUID(note_id)
        except ValueError:
            raise NotFoundError(resource="note", resource_id=note_id)

        try:
            result = await db.execute(delete(Note).where(Note.id == parsed_id))
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to delete note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource="note", resource_id=note_id)

        logger.info("Note deleted: %s", note_id)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
