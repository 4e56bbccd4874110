"""
NoteShare Backend — Summarizer API Schemas
============================================

POST /api/summarize has no request model: the body is read raw so its size
can be checked before parsing, and it may be JSON ({"text": "..."}) or
plain text.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from app.schemas.common import StorageInfo


class SummarizeResponse(BaseModel):
    id: int = Field(description="Stored summary id")
    summary: str = Field(description="Generated summary text")


class SummaryListItem(BaseModel):
    """
    Compact entry for the recent-summaries list.

    `summary_preview` holds the first 80 characters of the summary.
    """
    id: int
    summary_preview: str
    created_at: datetime


class SummaryListResponse(BaseModel):
    items: List[SummaryListItem]


class SummaryDetail(BaseModel):
    id: int
    input_text: str
    summary: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SummaryDetailResponse(BaseModel):
    item: SummaryDetail


class SummaryDebugInfo(StorageInfo):
    total_summaries: int
    model: str
    api_key_configured: bool
