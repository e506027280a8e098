# Client package init
"""
QuickNotes Client
==================

What:  The client side of the notes API.
    - api.py:    NotesAPI, a thin async HTTP client for the four endpoints
    - board.py:  NoteBoard, the view state (note list, draft fields,
                 per-note summaries and the in-flight summarize marker)

The client never owns record identity or timestamps; it only keeps copies
of what the server returned.
"""

from quicknotes.client.api import NotesAPI
from quicknotes.client.board import SUMMARY_FALLBACK, NoteBoard

__all__ = ["NotesAPI", "NoteBoard", "SUMMARY_FALLBACK"]
