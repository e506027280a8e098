"""
QuickNotes Client — Note Board View State
===========================================

What:  Session-scoped state behind the notes UI.
Why:   Keeps the per-note summaries and loading marker out of the server;
       they live only as long as this object does.

State:
    notes               last fetched list, plus local create/delete edits
    draft_title/content the new-note form fields
    summaries           note id → summary text (in memory only)
    loading_summary_id  note whose summarize call is in flight, or None

Failure policy:
    list/create/delete failures are logged and otherwise ignored, leaving
    the board stale until the next load(). A summarize failure is shown as
    the SUMMARY_FALLBACK text under that note.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from quicknotes.client.api import NotesAPI

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Could not generate summary."
EMPTY_BOARD_TEXT = "No notes yet. Add one!"


class NoteBoard:
    """In-memory view state for one client session."""

    def __init__(self, api: NotesAPI):
        self.api = api
        self.notes: List[Dict[str, Any]] = []
        self.draft_title = ""
        self.draft_content = ""
        self.summaries: Dict[str, str] = {}
        self.loading_summary_id: Optional[str] = None

    async def load(self) -> None:
        """Replace the local list with the server's."""
        try:
            self.notes = await self.api.list_notes()
        except httpx.HTTPError as e:
            logger.error("Error fetching notes: %s", e)

    async def add_note(self) -> Optional[Dict[str, Any]]:
        """
        Create a note from the draft fields.

        Does nothing when both drafts are empty. On success the server's
        record is appended (no re-fetch) and the drafts are cleared.
        """
        if not self.draft_title and not self.draft_content:
            return None

        try:
            note = await self.api.create_note(
                title=self.draft_title, content=self.draft_content
            )
        except httpx.HTTPError as e:
            logger.error("Error adding note: %s", e)
            return None

        self.notes.append(note)
        self.draft_title = ""
        self.draft_content = ""
        return note

    async def delete_note(self, note_id: str) -> None:
        """
        Drop the note locally, then ask the server to delete it.

        A failed call is only logged; the note stays gone from the board
        until the next load() brings it back.
        """
        self.notes = [note for note in self.notes if note["id"] != note_id]
        try:
            await self.api.delete_note(note_id)
        except httpx.HTTPError as e:
            logger.error("Error deleting note %s: %s", note_id, e)

    async def summarize(self, note_id: str, content: Optional[str]) -> None:
        """
        Fetch a summary for one note and store it under that note's id.

        Empty content is skipped. Any failure (including a non-JSON or
        unexpected answer) stores SUMMARY_FALLBACK instead.
        """
        if not content:
            return

        self.loading_summary_id = note_id
        try:
            self.summaries[note_id] = await self.api.summarize(content)
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error("Error generating summary for %s: %s", note_id, e)
            self.summaries[note_id] = SUMMARY_FALLBACK
        finally:
            self.loading_summary_id = None

    def is_summarizing(self, note_id: str) -> bool:
        return self.loading_summary_id == note_id

    def render(self) -> str:
        """Plain-text rendering of the board."""
        if not self.notes:
            return EMPTY_BOARD_TEXT

        blocks = []
        for note in self.notes:
            lines = [f"# {note.get('title') or ''}", note.get("content") or ""]
            summary = self.summaries.get(note["id"])
            if summary:
                lines.append(f"Summary: {summary}")
            button = "Summarizing..." if self.is_summarizing(note["id"]) else "Summarize"
            lines.append(f"[{button}] [Delete]")
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)
