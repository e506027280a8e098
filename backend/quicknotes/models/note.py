"""
QuickNotes Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Why:   An explicit record type with required/optional columns instead of a
       schema-less document.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - id: UUID generated on insert, never changes, only lookup/delete key
    - title / content: both nullable; "at least one non-empty" is enforced in
      NoteService before an insert is attempted
    - created_at / updated_at: UTC, set by the model defaults on insert
      (updated_at also on update, though no update operation exists today)

    Index on created_at DESC serves the only list query (newest first).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from quicknotes.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A short text note.

    Lifecycle:
        1. Created by POST /api/notes (id and timestamps assigned here)
        2. Never edited in place
        3. Removed permanently by DELETE /api/notes/{id}
    """

    __tablename__ = "notes"

    # Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    content: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
