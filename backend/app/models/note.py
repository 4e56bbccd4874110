"""
NoteShare Backend — Sticky Note Models
========================================

What:  ORM models for `notes` and `note_shares`.

Table design:
    notes        A rectangle on a board: optional title/body, a normalized
                 color, position (x, y), size (width, height) and a stacking
                 index. `created_by` is nullable and set to NULL when the
                 author account is deleted.
    note_shares  Visibility of a note inside a group, with a per-share edit
                 flag. Deleting a note or a group cascades to its shares, so
                 a note leaves a group's listing as soon as either row goes.

Two independent mutation paths each bump `updated_at`:
    - geometry: x, y, width, height, z_index
    - content:  title, content, color
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, UTCDateTime
from app.models.account import utcnow

DEFAULT_NOTE_COLOR = "#FFFF88"
DEFAULT_NOTE_WIDTH = 200.0
DEFAULT_NOTE_HEIGHT = 150.0
DEFAULT_NOTE_Z_INDEX = 0


class Note(Base):
    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[str] = mapped_column(String(7), nullable=False, default=DEFAULT_NOTE_COLOR)

    x: Mapped[float] = mapped_column(Float, nullable=False)
    y: Mapped[float] = mapped_column(Float, nullable=False)
    width: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_NOTE_WIDTH)
    height: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_NOTE_HEIGHT)
    z_index: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_NOTE_Z_INDEX)

    created_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, x={self.x}, y={self.y}, z_index={self.z_index})>"


class NoteShare(Base):
    __tablename__ = "note_shares"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    note_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
    )
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )
    can_edit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    shared_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        UniqueConstraint("note_id", "group_id", name="uq_note_shares_note_group"),
        # Board listing and clear-group both filter by group
        Index("idx_note_shares_group_id", "group_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteShare(note_id={self.note_id}, group_id={self.group_id})>"
