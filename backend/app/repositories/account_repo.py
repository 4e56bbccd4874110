"""Data access for the accounts table."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError
from app.models.account import Account

logger = logging.getLogger(__name__)


class AccountRepository:
    """Repository for the accounts table."""

    async def create(
        self,
        session: AsyncSession,
        name: str,
        email: str,
        password_hash: str,
    ) -> Account:
        """
        Insert an account and return it with its generated id.

        Raises:
            ConflictError: the email is already registered.
        """
        account = Account(name=name, email=email, password_hash=password_hash)
        session.add(account)
        try:
            await session.flush()
        except IntegrityError as e:
            logger.info("Account insert rejected (duplicate email): %s", email)
            raise ConflictError(
                code="email_taken",
                message="An account with this email already exists.",
                context={"email": email},
            ) from e
        return account

    async def list_all(self, session: AsyncSession) -> List[Account]:
        result = await session.execute(
            select(Account).order_by(Account.created_at.asc(), Account.id.asc())
        )
        return list(result.scalars().all())

    async def get(self, session: AsyncSession, account_id: int) -> Optional[Account]:
        result = await session.execute(select(Account).where(Account.id == account_id))
        return result.scalar_one_or_none()

    async def exists(self, session: AsyncSession, account_id: int) -> bool:
        result = await session.execute(select(Account.id).where(Account.id == account_id))
        return result.scalar_one_or_none() is not None


account_repository = AccountRepository()
