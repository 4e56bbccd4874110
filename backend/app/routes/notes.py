"""
NoteShare Backend — Note Route Handlers
=========================================

What:  Per-note mutations, addressed by note id regardless of group.

    PATCH  /api/notes/{id}/position   geometry (x, y, width, height, z_index)
    PATCH  /api/notes/{id}            content (title, content, color)
    DELETE /api/notes/{id}            note and all of its shares

All three answer 204 with no body. A missing note is 404 note_not_found
and nothing is changed.
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from app.database import Database, get_board_db
from app.schemas.board import UpdateNoteContentRequest, UpdateNotePositionRequest
from app.schemas.common import ErrorResponse
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api/notes", tags=["Notes"])

_ERRORS = {
    400: {"description": "Invalid note id or body", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
}


@router.patch(
    "/{note_id}/position",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Move or resize a note",
    description="Omitted width/height/z_index are reset to 200/150/0.",
)
async def update_position(
    note_id: int,
    payload: UpdateNotePositionRequest,
    db: Database = Depends(get_board_db),
) -> Response:
    await note_service.update_position(
        db=db,
        note_id=note_id,
        x=payload.x,
        y=payload.y,
        width=payload.width,
        height=payload.height,
        z_index=payload.z_index,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Edit a note's text or color",
    description="Replaces title, content and color; color is normalized as on creation.",
)
async def update_content(
    note_id: int,
    payload: UpdateNoteContentRequest,
    db: Database = Depends(get_board_db),
) -> Response:
    await note_service.update_content(
        db=db,
        note_id=note_id,
        title=payload.title,
        content=payload.content,
        color=payload.color,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a note",
    description="Removes the note from every group it was shared to.",
)
async def delete_note(note_id: int, db: Database = Depends(get_board_db)) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
