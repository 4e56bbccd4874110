"""
NoteShare Backend — Group Service
===================================

What:  Group creation/lookup and membership management.

Rules:
    - A group is created together with its creator as "owner" (one
      transaction, see GroupRepository.create).
    - Roles are validated once here, at ingress, into the `Role` enum;
      an omitted role means "member".
    - Adding an existing member is a silent no-op.
    - Roles are recorded but not checked before any action: any account
      may add members or clear a board.
"""

import logging
from typing import List, Optional

from app.database import Database
from app.exceptions import NotFoundError, UnprocessableError, ValidationError
from app.models.group import Role
from app.repositories import group_repository
from app.schemas.board import GroupMember, GroupSummary
from app.services.guards import (
    ensure_account_exists,
    ensure_group_exists,
    require_positive_id,
)

logger = logging.getLogger(__name__)


def parse_role(value: Optional[str]) -> Role:
    """
    Convert the wire value into a Role.

    None → Role.MEMBER. Anything other than exactly "owner"/"member" raises
    UnprocessableError(invalid_role).
    """
    if value is None:
        return Role.MEMBER
    try:
        return Role(value)
    except ValueError:
        raise UnprocessableError(
            code="invalid_role",
            message="role must be either 'owner' or 'member'.",
            field="role",
            context={"role": value},
        )


class GroupService:
    """Business logic for groups and memberships."""

    async def create_group(self, db: Database, group_name: str, created_by: int) -> GroupSummary:
        group_name = (group_name or "").strip()
        if not group_name:
            raise ValidationError(
                code="group_name_empty",
                message="Please enter a group name.",
                field="group_name",
            )
        require_positive_id(created_by, "created_by_invalid", "created_by")

        async with db.session() as session:
            await ensure_account_exists(session, created_by)
            group = await group_repository.create(session, group_name, created_by)
            return GroupSummary.model_validate(group)

    async def get_group(self, db: Database, group_id: int) -> GroupSummary:
        require_positive_id(group_id, "invalid_id", "group_id")
        async with db.session() as session:
            group = await group_repository.get(session, group_id)
            if group is None:
                raise NotFoundError(code="group_not_found", resource="group", resource_id=group_id)
            return GroupSummary.model_validate(group)

    async def add_member(
        self,
        db: Database,
        group_id: int,
        user_id: int,
        role: Optional[str] = None,
    ) -> bool:
        """
        Add `user_id` to `group_id`.

        Returns:
            True if a membership row was created, False if it already existed.
        """
        require_positive_id(group_id, "invalid_group_id", "group_id")
        require_positive_id(user_id, "invalid_user_id", "user_id")

        async with db.session() as session:
            await ensure_account_exists(session, user_id)
            await ensure_group_exists(session, group_id)
            parsed_role = parse_role(role)
            inserted = await group_repository.add_member(session, group_id, user_id, parsed_role)

        if inserted:
            logger.info("Account %d joined group %d as %s", user_id, group_id, parsed_role.value)
        return inserted

    async def list_members(self, db: Database, group_id: int) -> List[GroupMember]:
        require_positive_id(group_id, "invalid_group_id", "group_id")
        async with db.session() as session:
            await ensure_group_exists(session, group_id)
            members = await group_repository.list_members(session, group_id)
            return [GroupMember.model_validate(m) for m in members]


group_service = GroupService()
