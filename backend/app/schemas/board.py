"""
NoteShare Backend — Board API Schemas
=======================================

What:  Pydantic request/response contracts for accounts, groups and notes.
How:   Request models keep string fields optional-with-default so that a
       missing value reaches the service and is reported with its own error
       code (e.g. "name_empty") instead of a generic framework error.
       Response models are built from ORM objects (`from_attributes`).

The password digest never appears in any response model.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.common import StorageInfo

# Coordinates must be finite and z_index must fit a SQLite INTEGER.
MIN_Z_INDEX = -(2**63)
MAX_Z_INDEX = 2**63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateAccountRequest(BaseModel):
    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Unique email address")
    password: str = Field(default="", description="At least 6 characters")


class CreateGroupRequest(BaseModel):
    group_name: str = Field(default="", description="Group name")
    created_by: int = Field(default=0, description="Founding account id")


class JoinGroupRequest(BaseModel):
    user_id: int = Field(default=0, description="Account to add")
    role: Optional[str] = Field(default=None, description="owner or member (default member)")


class CreateNoteRequest(BaseModel):
    """
    New sticky note for a group board.

    x and y are required; width/height/z_index default to 200/150/0 when
    omitted. `color` accepts "#RRGGBB" or a palette name (yellow, pink,
    green, blue, orange, purple) and is normalized server-side.
    """
    title: Optional[str] = None
    content: Optional[str] = None
    color: Optional[str] = None
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    width: Optional[float] = Field(default=None, allow_inf_nan=False)
    height: Optional[float] = Field(default=None, allow_inf_nan=False)
    z_index: Optional[int] = Field(default=None, ge=MIN_Z_INDEX, le=MAX_Z_INDEX)
    created_by: Optional[int] = None
    can_edit: Optional[bool] = None


class UpdateNotePositionRequest(BaseModel):
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    width: Optional[float] = Field(default=None, allow_inf_nan=False)
    height: Optional[float] = Field(default=None, allow_inf_nan=False)
    z_index: Optional[int] = Field(default=None, ge=MIN_Z_INDEX, le=MAX_Z_INDEX)


class UpdateNoteContentRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    color: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AccountSummary(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AccountsResponse(BaseModel):
    accounts: List[AccountSummary]


class GroupSummary(BaseModel):
    id: int
    group_name: str
    created_by: int
    created_at: datetime

    model_config = {"from_attributes": True}


class GroupMembership(GroupSummary):
    """A group as seen by one member, with that member's role."""
    role: str


class GroupsResponse(BaseModel):
    groups: List[GroupMembership]


class GroupMember(BaseModel):
    id: int
    group_id: int
    user_id: int
    role: str
    joined_at: datetime

    model_config = {"from_attributes": True}


class GroupMembersResponse(BaseModel):
    members: List[GroupMember]


class SharedNote(BaseModel):
    """A note as it appears on one group's board (note fields + share fields)."""
    id: int
    title: Optional[str] = None
    content: Optional[str] = None
    color: str
    x: float
    y: float
    width: float
    height: float
    z_index: int
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    group_id: int
    can_edit: bool
    shared_at: datetime


class NotesResponse(BaseModel):
    notes: List[SharedNote]


class CreateNoteResponse(BaseModel):
    id: int


class ClearNotesResponse(BaseModel):
    removed: int


class BoardDebugInfo(StorageInfo):
    total_notes: int
