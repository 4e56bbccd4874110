"""
Shared input checks for board services.

Existence is re-checked explicitly before every dependent write so that a
missing account or group is reported as a 404 with its own code rather
than surfacing as a foreign-key failure.

Ids are SQLite INTEGER keys, so anything past the signed 64-bit range is
rejected up front with the same code as a zero or negative id.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, ValidationError
from app.repositories import account_repository, group_repository

MAX_ID = 2**63 - 1


def require_positive_id(value: int, code: str, label: str) -> int:
    """Raise ValidationError(code) unless `value` is a positive id that fits in SQLite."""
    if value is None or value <= 0 or value > MAX_ID:
        raise ValidationError(
            code=code,
            message=f"{label} must be a positive integer no larger than {MAX_ID}.",
            field=label,
            context={"value": value},
        )
    return value


async def ensure_account_exists(session: AsyncSession, account_id: int) -> None:
    if not await account_repository.exists(session, account_id):
        raise NotFoundError(code="account_not_found", resource="account", resource_id=account_id)


async def ensure_group_exists(session: AsyncSession, group_id: int) -> None:
    if not await group_repository.exists(session, group_id):
        raise NotFoundError(code="group_not_found", resource="group", resource_id=group_id)
