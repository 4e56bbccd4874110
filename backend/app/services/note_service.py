"""
NoteShare Backend — Note Service (Board Orchestrator)
======================================================

What:  Validation and orchestration for sticky notes on group boards.
How:   Checks ids and existence, normalizes color, fills geometry defaults,
       and calls NoteRepository inside one session per operation.
Who:   Called by the notes and groups route handlers.

Operation flow (POST /api/groups/{id}/notes):
    ┌──────────┐    ┌──────────────┐    ┌────────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate    │───▶│  Normalize     │───▶│  Note +  │
    │          │    │  group/user  │    │  color/defaults│    │  Share   │
    └──────────┘    └──────────────┘    └────────────────┘    └──────────┘

    The note and its share are written in the same transaction; a failure
    in either leaves no row behind.

Design Decision:
    NoteService is stateless. It receives the Database for each call, so
    tests can hand it a temporary database and no state is shared between
    requests.
"""

import logging
from typing import Any, Dict, List, Optional

from app.database import Database
from app.exceptions import NotFoundError, UnprocessableError
from app.models.note import (
    DEFAULT_NOTE_HEIGHT,
    DEFAULT_NOTE_WIDTH,
    DEFAULT_NOTE_Z_INDEX,
)
from app.repositories import group_repository, note_repository
from app.schemas.board import CreateNoteRequest, SharedNote
from app.services.colors import normalize_color
from app.services.guards import (
    ensure_account_exists,
    ensure_group_exists,
    require_positive_id,
)

logger = logging.getLogger(__name__)


def _note_not_found(note_id: int) -> NotFoundError:
    return NotFoundError(code="note_not_found", resource="note", resource_id=note_id)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_note():     note + share to one group, atomically
        - list_notes():      a group's board in drawing order
        - update_position(): geometry only
        - update_content():  title/content/color only
        - delete_note():     note and every share of it
        - clear_notes():     every note shared to a group
        - debug_info():      storage diagnostics for /api/debug
    """

    async def create_note(
        self,
        db: Database,
        group_id: int,
        payload: CreateNoteRequest,
    ) -> int:
        """
        Create a note on a group's board.

        When `created_by` is given it must name an existing account that is
        already a member of the group.

        Returns:
            The new note id.

        Raises:
            ValidationError:     invalid_group_id, invalid_user_id
            NotFoundError:       group_not_found, account_not_found
            UnprocessableError:  not_member
        """
        require_positive_id(group_id, "invalid_group_id", "group_id")
        if payload.created_by is not None:
            require_positive_id(payload.created_by, "invalid_user_id", "created_by")

        async with db.session() as session:
            await ensure_group_exists(session, group_id)

            if payload.created_by is not None:
                await ensure_account_exists(session, payload.created_by)
                if not await group_repository.is_member(session, group_id, payload.created_by):
                    raise UnprocessableError(
                        code="not_member",
                        message="The author is not a member of this group.",
                        field="created_by",
                        context={"group_id": group_id, "user_id": payload.created_by},
                    )

            note_id = await note_repository.create_shared(
                session,
                title=payload.title,
                content=payload.content,
                color=normalize_color(payload.color),
                x=payload.x,
                y=payload.y,
                width=payload.width if payload.width is not None else DEFAULT_NOTE_WIDTH,
                height=payload.height if payload.height is not None else DEFAULT_NOTE_HEIGHT,
                z_index=payload.z_index if payload.z_index is not None else DEFAULT_NOTE_Z_INDEX,
                created_by=payload.created_by,
                group_id=group_id,
                can_edit=bool(payload.can_edit),
            )

        logger.info("Note %d created in group %d", note_id, group_id)
        return note_id

    async def list_notes(self, db: Database, group_id: int) -> List[SharedNote]:
        require_positive_id(group_id, "invalid_group_id", "group_id")
        async with db.session() as session:
            await ensure_group_exists(session, group_id)
            rows = await note_repository.list_for_group(session, group_id)
            return [
                SharedNote(
                    id=note.id,
                    title=note.title,
                    content=note.content,
                    color=note.color,
                    x=note.x,
                    y=note.y,
                    width=note.width,
                    height=note.height,
                    z_index=note.z_index,
                    created_by=note.created_by,
                    created_at=note.created_at,
                    updated_at=note.updated_at,
                    group_id=share.group_id,
                    can_edit=share.can_edit,
                    shared_at=share.shared_at,
                )
                for note, share in rows
            ]

    async def update_position(
        self,
        db: Database,
        note_id: int,
        x: float,
        y: float,
        width: Optional[float] = None,
        height: Optional[float] = None,
        z_index: Optional[int] = None,
    ) -> None:
        """Move/resize a note. Omitted width/height/z_index reset to defaults."""
        require_positive_id(note_id, "invalid_note_id", "note_id")
        async with db.session() as session:
            updated = await note_repository.update_position(
                session,
                note_id,
                x=x,
                y=y,
                width=width if width is not None else DEFAULT_NOTE_WIDTH,
                height=height if height is not None else DEFAULT_NOTE_HEIGHT,
                z_index=z_index if z_index is not None else DEFAULT_NOTE_Z_INDEX,
            )
            if not updated:
                raise _note_not_found(note_id)

    async def update_content(
        self,
        db: Database,
        note_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
        color: Optional[str] = None,
    ) -> None:
        require_positive_id(note_id, "invalid_note_id", "note_id")
        async with db.session() as session:
            updated = await note_repository.update_content(
                session,
                note_id,
                title=title,
                content=content,
                color=normalize_color(color),
            )
            if not updated:
                raise _note_not_found(note_id)

    async def delete_note(self, db: Database, note_id: int) -> None:
        require_positive_id(note_id, "invalid_note_id", "note_id")
        async with db.session() as session:
            if not await note_repository.delete(session, note_id):
                raise _note_not_found(note_id)
        logger.info("Note %d deleted", note_id)

    async def clear_notes(self, db: Database, group_id: int) -> int:
        """
        Delete every note shared to a group.

        Returns:
            Number of notes removed.
        """
        require_positive_id(group_id, "invalid_group_id", "group_id")
        async with db.session() as session:
            await ensure_group_exists(session, group_id)
            return await note_repository.clear_group(session, group_id)

    async def debug_info(self, db: Database) -> Dict[str, Any]:
        info = db.storage_info()
        async with db.session() as session:
            info["total_notes"] = await note_repository.count(session)
        return info


note_service = NoteService()
