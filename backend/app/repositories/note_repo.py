"""
Data access for sticky notes and their group shares.

Board ordering:
    ORDER BY z_index ASC, updated_at ASC, id ASC
    Notes on the same layer settle in edit-recency order; the most recently
    touched note is drawn last (on top).
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.note import Note, NoteShare

logger = logging.getLogger(__name__)


class NoteRepository:
    """Repository for the notes and note_shares tables."""

    async def create_shared(
        self,
        session: AsyncSession,
        *,
        title: Optional[str],
        content: Optional[str],
        color: str,
        x: float,
        y: float,
        width: float,
        height: float,
        z_index: int,
        created_by: Optional[int],
        group_id: int,
        can_edit: bool = False,
    ) -> int:
        """
        Insert a note and its initial share to `group_id` in one session.

        Returns:
            The new note id.
        """
        note = Note(
            title=title,
            content=content,
            color=color,
            x=x,
            y=y,
            width=width,
            height=height,
            z_index=z_index,
            created_by=created_by,
        )
        session.add(note)
        await session.flush()

        session.add(NoteShare(note_id=note.id, group_id=group_id, can_edit=can_edit))
        await session.flush()
        return note.id

    async def list_for_group(
        self, session: AsyncSession, group_id: int
    ) -> List[Tuple[Note, NoteShare]]:
        result = await session.execute(
            select(Note, NoteShare)
            .join(NoteShare, NoteShare.note_id == Note.id)
            .where(NoteShare.group_id == group_id)
            .order_by(Note.z_index.asc(), Note.updated_at.asc(), Note.id.asc())
        )
        return [(note, share) for note, share in result.all()]

    async def update_position(
        self,
        session: AsyncSession,
        note_id: int,
        x: float,
        y: float,
        width: float,
        height: float,
        z_index: int,
    ) -> bool:
        """Returns False when no note has this id (nothing is changed)."""
        result = await session.execute(
            update(Note)
            .where(Note.id == note_id)
            .values(
                x=x,
                y=y,
                width=width,
                height=height,
                z_index=z_index,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def update_content(
        self,
        session: AsyncSession,
        note_id: int,
        title: Optional[str],
        content: Optional[str],
        color: str,
    ) -> bool:
        """Returns False when no note has this id (nothing is changed)."""
        result = await session.execute(
            update(Note)
            .where(Note.id == note_id)
            .values(
                title=title,
                content=content,
                color=color,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def delete(self, session: AsyncSession, note_id: int) -> bool:
        """Delete a note; its shares go with it (ON DELETE CASCADE)."""
        result = await session.execute(
            delete(Note)
            .where(Note.id == note_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def clear_group(self, session: AsyncSession, group_id: int) -> int:
        """
        Delete every note shared to `group_id`.

        The notes themselves are deleted, not just the share rows, so a note
        also shared to another group disappears from that group too.

        Returns:
            Number of notes removed.
        """
        result = await session.execute(
            select(NoteShare.note_id).where(NoteShare.group_id == group_id)
        )
        note_ids = list(result.scalars().all())

        removed = 0
        for note_id in note_ids:
            deleted = await session.execute(
                delete(Note)
                .where(Note.id == note_id)
                .execution_options(synchronize_session=False)
            )
            removed += deleted.rowcount

        logger.info("Cleared %d notes from group %d", removed, group_id)
        return removed

    async def count(self, session: AsyncSession) -> int:
        result = await session.execute(select(func.count(Note.id)))
        return result.scalar() or 0


note_repository = NoteRepository()
