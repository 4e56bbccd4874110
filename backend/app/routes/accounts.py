"""
NoteShare Backend — Account Route Handlers
============================================

What:  POST/GET /api/accounts and GET /api/accounts/{id}/groups.
"""

import logging

from fastapi import APIRouter, Depends

from app.database import Database, get_board_db
from app.schemas.board import (
    AccountSummary,
    AccountsResponse,
    CreateAccountRequest,
    GroupsResponse,
)
from app.schemas.common import ErrorResponse
from app.services.account_service import account_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/accounts", tags=["Accounts"])


@router.post(
    "",
    response_model=AccountSummary,
    responses={
        400: {"description": "Missing name or email", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        422: {"description": "Malformed email or short password", "model": ErrorResponse},
    },
    summary="Create an account",
    description="Registers an account. The password is stored as a salted digest and never returned.",
)
async def create_account(
    payload: CreateAccountRequest,
    db: Database = Depends(get_board_db),
) -> AccountSummary:
    return await account_service.create_account(
        db=db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )


@router.get(
    "",
    response_model=AccountsResponse,
    summary="List accounts",
    description="All accounts, oldest first.",
)
async def list_accounts(db: Database = Depends(get_board_db)) -> AccountsResponse:
    return AccountsResponse(accounts=await account_service.list_accounts(db=db))


@router.get(
    "/{user_id}/groups",
    response_model=GroupsResponse,
    responses={
        400: {"description": "Invalid account id", "model": ErrorResponse},
        404: {"description": "Account not found", "model": ErrorResponse},
    },
    summary="List an account's groups",
    description="Groups the account belongs to, each with the account's role in it.",
)
async def list_groups_for_account(
    user_id: int,
    db: Database = Depends(get_board_db),
) -> GroupsResponse:
    return GroupsResponse(groups=await account_service.list_groups_for_user(db=db, user_id=user_id))
