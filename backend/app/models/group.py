"""
NoteShare Backend — Group and Membership Models
=================================================

What:  ORM models for `groups` and `group_users`.

Invariants:
    - Every group is created together with an "owner" membership row for
      its creator (GroupRepository.create runs both inserts in one session).
    - (group_id, user_id) is unique; re-adding a member is a no-op.
    - Deleting a group cascades to its memberships; a creator account
      cannot be deleted while it still founds a group (RESTRICT).
"""

import enum
from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, UTCDateTime
from app.models.account import utcnow


class Role(str, enum.Enum):
    """Closed set of membership roles. Recorded, never enforced."""

    OWNER = "owner"
    MEMBER = "member"


class Group(Base):
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_by: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, group_name='{self.group_name}')>"


class GroupUser(Base):
    __tablename__ = "group_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Stored as the enum's string value ("owner" / "member")
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=Role.MEMBER.value,
    )
    joined_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_group_users_group_user"),
    )

    def __repr__(self) -> str:
        return f"<GroupUser(group_id={self.group_id}, user_id={self.user_id}, role='{self.role}')>"
