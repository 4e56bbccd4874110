"""
NoteShare Backend — Group Route Handlers
==========================================

What:  Groups, their memberships, and their boards.

    POST   /api/groups                 create (creator becomes owner)
    GET    /api/groups/{id}            detail
    POST   /api/groups/{id}/users      add member (no-op if already present)
    GET    /api/groups/{id}/users      members
    POST   /api/groups/{id}/notes      create a note on the board
    GET    /api/groups/{id}/notes      board contents in drawing order
    DELETE /api/groups/{id}/notes      clear the board
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from app.database import Database, get_board_db
from app.schemas.board import (
    ClearNotesResponse,
    CreateGroupRequest,
    CreateNoteRequest,
    CreateNoteResponse,
    GroupMembersResponse,
    GroupSummary,
    JoinGroupRequest,
    NotesResponse,
)
from app.schemas.common import ErrorResponse
from app.services.group_service import group_service
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/groups", tags=["Groups"])

_NOT_FOUND = {404: {"description": "Group or account not found", "model": ErrorResponse}}
_BAD_ID = {400: {"description": "Invalid id or input", "model": ErrorResponse}}


# ── Groups ───────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=GroupSummary,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Create a group",
    description="Creates the group and records the creator as its owner in one transaction.",
)
async def create_group(
    payload: CreateGroupRequest,
    db: Database = Depends(get_board_db),
) -> GroupSummary:
    return await group_service.create_group(
        db=db,
        group_name=payload.group_name,
        created_by=payload.created_by,
    )


@router.get(
    "/{group_id}",
    response_model=GroupSummary,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Get a group",
)
async def get_group(group_id: int, db: Database = Depends(get_board_db)) -> GroupSummary:
    return await group_service.get_group(db=db, group_id=group_id)


# ── Members ──────────────────────────────────────────────────────────────

@router.post(
    "/{group_id}/users",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        **_BAD_ID,
        **_NOT_FOUND,
        422: {"description": "Unknown role", "model": ErrorResponse},
    },
    summary="Add a member",
    description="Adds the account with role owner or member (default). Re-adding is a no-op.",
)
async def add_member(
    group_id: int,
    payload: JoinGroupRequest,
    db: Database = Depends(get_board_db),
) -> Response:
    await group_service.add_member(
        db=db,
        group_id=group_id,
        user_id=payload.user_id,
        role=payload.role,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{group_id}/users",
    response_model=GroupMembersResponse,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="List members",
)
async def list_members(group_id: int, db: Database = Depends(get_board_db)) -> GroupMembersResponse:
    return GroupMembersResponse(members=await group_service.list_members(db=db, group_id=group_id))


# ── Board ────────────────────────────────────────────────────────────────

@router.post(
    "/{group_id}/notes",
    response_model=CreateNoteResponse,
    responses={
        **_BAD_ID,
        **_NOT_FOUND,
        422: {"description": "Author is not a member of the group", "model": ErrorResponse},
    },
    summary="Create a note on the board",
    description=(
        "Creates a note and shares it to this group. Color accepts #RRGGBB or a "
        "palette name; width/height/z_index default to 200/150/0."
    ),
)
async def create_note(
    group_id: int,
    payload: CreateNoteRequest,
    db: Database = Depends(get_board_db),
) -> CreateNoteResponse:
    note_id = await note_service.create_note(db=db, group_id=group_id, payload=payload)
    return CreateNoteResponse(id=note_id)


@router.get(
    "/{group_id}/notes",
    response_model=NotesResponse,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="List the board",
    description="Notes shared to the group, ordered by z_index then last update.",
)
async def list_notes(group_id: int, db: Database = Depends(get_board_db)) -> NotesResponse:
    return NotesResponse(notes=await note_service.list_notes(db=db, group_id=group_id))


@router.delete(
    "/{group_id}/notes",
    response_model=ClearNotesResponse,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Clear the board",
    description=(
        "Deletes every note shared to the group. The notes themselves are "
        "removed, including from any other group they were shared to."
    ),
)
async def clear_notes(group_id: int, db: Database = Depends(get_board_db)) -> ClearNotesResponse:
    removed = await note_service.clear_notes(db=db, group_id=group_id)
    return ClearNotesResponse(removed=removed)
