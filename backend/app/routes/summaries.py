"""
NoteShare Backend — Summarizer Route Handlers
===============================================

What:  POST /api/summarize, GET /api/summaries, GET /api/summaries/{id}.
How:   /api/summarize reads the raw body itself (no request model) so the
       declared size can be rejected before the body is read at all.
"""

import logging

from fastapi import APIRouter, Depends, Request

from app.database import Database, get_summary_db
from app.schemas.common import ErrorResponse
from app.schemas.summary import (
    SummarizeResponse,
    SummaryDetailResponse,
    SummaryListResponse,
)
from app.services.summary_service import summary_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Summaries"])


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    responses={
        400: {"description": "Empty text, bad JSON or bad encoding", "model": ErrorResponse},
        413: {"description": "Body over the byte limit", "model": ErrorResponse},
        422: {"description": "Text too short or too long", "model": ErrorResponse},
        500: {"description": "Summarizer not configured or upstream failed", "model": ErrorResponse},
    },
    summary="Summarize text",
    description=(
        'Accepts {"text": "..."} as JSON or the text itself as the body, asks the '
        "language model for a 3-5 line summary, stores both and returns the summary."
    ),
)
async def summarize(
    request: Request,
    db: Database = Depends(get_summary_db),
) -> SummarizeResponse:
    summary_service.check_content_length(request.headers.get("content-length"))
    body = await request.body()
    return await summary_service.summarize(
        db=db,
        body=body,
        content_type=request.headers.get("content-type"),
    )


@router.get(
    "/summaries",
    response_model=SummaryListResponse,
    summary="Recent summaries",
    description="Up to 100 summaries, newest first, each with an 80-character preview.",
)
async def list_summaries(db: Database = Depends(get_summary_db)) -> SummaryListResponse:
    return SummaryListResponse(items=await summary_service.list_recent(db=db))


@router.get(
    "/summaries/{summary_id}",
    response_model=SummaryDetailResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Summary not found", "model": ErrorResponse},
    },
    summary="Get a stored summary",
)
async def get_summary(
    summary_id: int,
    db: Database = Depends(get_summary_db),
) -> SummaryDetailResponse:
    return SummaryDetailResponse(item=await summary_service.get_summary(db=db, summary_id=summary_id))
