"""
Data access for groups and group membership.

Query patterns:
    - groups for a user:  groups JOIN group_users ON user_id, oldest group first
    - members of a group: group_users WHERE group_id, earliest join first
    - add member:         INSERT ... ON CONFLICT (group_id, user_id) DO NOTHING
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.group import Group, GroupUser, Role

logger = logging.getLogger(__name__)


class GroupRepository:
    """Repository for the groups and group_users tables."""

    async def create(self, session: AsyncSession, group_name: str, created_by: int) -> Group:
        """
        Insert a group and its creator's "owner" membership.

        Both rows are written in the caller's session, so either both are
        committed or neither is.
        """
        group = Group(group_name=group_name, created_by=created_by)
        session.add(group)
        await session.flush()

        session.add(GroupUser(group_id=group.id, user_id=created_by, role=Role.OWNER.value))
        await session.flush()

        logger.info("Group %d created by account %d", group.id, created_by)
        return group

    async def get(self, session: AsyncSession, group_id: int) -> Optional[Group]:
        result = await session.execute(select(Group).where(Group.id == group_id))
        return result.scalar_one_or_none()

    async def exists(self, session: AsyncSession, group_id: int) -> bool:
        result = await session.execute(select(Group.id).where(Group.id == group_id))
        return result.scalar_one_or_none() is not None

    async def list_for_user(self, session: AsyncSession, user_id: int) -> List[Tuple[Group, str]]:
        """Groups the user belongs to, each paired with the user's role."""
        result = await session.execute(
            select(Group, GroupUser.role)
            .join(GroupUser, GroupUser.group_id == Group.id)
            .where(GroupUser.user_id == user_id)
            .order_by(Group.created_at.asc(), Group.id.asc())
        )
        return [(group, role) for group, role in result.all()]

    async def add_member(
        self,
        session: AsyncSession,
        group_id: int,
        user_id: int,
        role: Role = Role.MEMBER,
    ) -> bool:
        """
        Add a membership row unless the (group, user) pair already exists.

        Returns:
            True if a row was inserted, False if the pair was already present.
        """
        stmt = (
            sqlite_insert(GroupUser)
            .values(group_id=group_id, user_id=user_id, role=Role(role).value)
            .on_conflict_do_nothing(index_elements=["group_id", "user_id"])
        )
        result = await session.execute(stmt)
        inserted = result.rowcount > 0
        if not inserted:
            logger.debug("Account %d already in group %d; membership unchanged", user_id, group_id)
        return inserted

    async def list_members(self, session: AsyncSession, group_id: int) -> List[GroupUser]:
        result = await session.execute(
            select(GroupUser)
            .where(GroupUser.group_id == group_id)
            .order_by(GroupUser.joined_at.asc(), GroupUser.id.asc())
        )
        return list(result.scalars().all())

    async def is_member(self, session: AsyncSession, group_id: int, user_id: int) -> bool:
        result = await session.execute(
            select(GroupUser.id).where(
                GroupUser.group_id == group_id,
                GroupUser.user_id == user_id,
            )
        )
        return result.scalar_one_or_none() is not None


group_repository = GroupRepository()
