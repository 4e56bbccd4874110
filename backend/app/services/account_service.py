"""
NoteShare Backend — Account Service
=====================================

What:  Signup, account listing, and "groups for a user".
How:   Validates trimmed input, hashes the password in a worker thread,
       and calls the account and group repositories inside one session per
       operation.

Validation (each failure has its own code):
    name empty          → 400 name_empty
    email empty         → 400 email_empty
    email without "@"   → 422 email_invalid
    password < 6 chars  → 422 password_short
    email already used  → 409 email_taken
"""

import asyncio
import logging
from typing import List

from app.database import Database
from app.exceptions import UnprocessableError, ValidationError
from app.repositories import account_repository, group_repository
from app.schemas.board import AccountSummary, GroupMembership
from app.security import hash_password
from app.services.guards import ensure_account_exists, require_positive_id

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AccountService:
    """Business logic for accounts. Stateless; the database is passed per call."""

    async def create_account(
        self,
        db: Database,
        name: str,
        email: str,
        password: str,
    ) -> AccountSummary:
        name = (name or "").strip()
        email = (email or "").strip()
        password = (password or "").strip()

        if not name:
            raise ValidationError(code="name_empty", message="Please enter a name.", field="name")
        if not email:
            raise ValidationError(
                code="email_empty", message="Please enter an email address.", field="email"
            )
        if "@" not in email:
            raise UnprocessableError(
                code="email_invalid",
                message="The email address is not in a valid format.",
                field="email",
            )
        if len(password) < MIN_PASSWORD_LENGTH:
            raise UnprocessableError(
                code="password_short",
                message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
                field="password",
            )

        password_hash = await asyncio.to_thread(hash_password, password)
        async with db.session() as session:
            account = await account_repository.create(session, name, email, password_hash)
            result = AccountSummary.model_validate(account)

        logger.info("Account %d created", result.id)
        return result

    async def list_accounts(self, db: Database) -> List[AccountSummary]:
        async with db.session() as session:
            accounts = await account_repository.list_all(session)
            return [AccountSummary.model_validate(a) for a in accounts]

    async def list_groups_for_user(self, db: Database, user_id: int) -> List[GroupMembership]:
        require_positive_id(user_id, "invalid_user_id", "user_id")
        async with db.session() as session:
            await ensure_account_exists(session, user_id)
            rows = await group_repository.list_for_user(session, user_id)
            return [
                GroupMembership(
                    id=group.id,
                    group_name=group.group_name,
                    created_by=group.created_by,
                    created_at=group.created_at,
                    role=role,
                )
                for group, role in rows
            ]


account_service = AccountService()
