"""
NoteShare Backend — Summary Service (Summarizer Orchestrator)
==============================================================

What:  Turns a raw request body into a stored summary.
How:   size check → text extraction → length checks → LLM call → persist.
Who:   Called by the summaries route handlers.

Orchestration Flow (POST /api/summarize):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Body    │───▶│  Size/Text  │───▶│  Groq API    │───▶│  Store   │
    │  (Route) │    │  checks     │    │  (no session)│    │  (DB)    │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    No database connection is held while waiting on the upstream call; the
    (text, summary) pair is stored afterwards in one short transaction.
    A failed upstream call stores nothing.

Body handling:
    - Content-Length and then the actual byte count must not exceed
      SUMMARY_MAX_BODY_BYTES (413 payload_too_large).
    - JSON content type: body must be a JSON object; its "text" field is
      used, and a missing or non-string field counts as empty text.
    - Any other content type: the body is UTF-8 text.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from app.config import settings
from app.database import Database
from app.exceptions import (
    NotFoundError,
    PayloadTooLargeError,
    UnprocessableError,
    ValidationError,
)
from app.repositories import summary_repository
from app.schemas.summary import SummarizeResponse, SummaryDetail, SummaryListItem
from app.services.groq_service import groq_service
from app.services.guards import require_positive_id
from app.services.llm_base import LLMService

logger = logging.getLogger(__name__)


def is_json_content_type(content_type: Optional[str]) -> bool:
    """True for application/json and any "+json" media type, parameters ignored."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


class SummaryService:
    """
    Business logic for the summarizer.

    `llm` defaults to the Groq singleton; tests may pass their own
    LLMService or patch `groq_service`.
    """

    def __init__(self, llm: Optional[LLMService] = None):
        self._llm = llm

    @property
    def llm(self) -> LLMService:
        return self._llm or groq_service

    # ── Body checks ──────────────────────────────────────────────────────

    def check_content_length(self, content_length: Optional[str]) -> None:
        """
        Reject a body whose declared size is over the ceiling, before reading it.

        An absent or non-numeric header is ignored here; the actual byte
        count is checked again in extract_text().
        """
        if content_length is None:
            return
        try:
            declared = int(content_length)
        except ValueError:
            return
        if declared > settings.summary_max_body_bytes:
            raise PayloadTooLargeError(
                max_bytes=settings.summary_max_body_bytes,
                actual_bytes=declared,
            )

    def extract_text(self, body: bytes, content_type: Optional[str]) -> str:
        """
        Pull the text to summarize out of the request body.

        Returns:
            The untrimmed text ("" when a JSON body has no usable "text").

        Raises:
            PayloadTooLargeError: body larger than the byte ceiling
            ValidationError:      invalid_json, invalid_encoding
        """
        if len(body) > settings.summary_max_body_bytes:
            raise PayloadTooLargeError(
                max_bytes=settings.summary_max_body_bytes,
                actual_bytes=len(body),
            )

        if is_json_content_type(content_type):
            try:
                data = json.loads(body) if body else None
            except (ValueError, RecursionError) as e:
                raise ValidationError(
                    code="invalid_json",
                    message="Request body is not valid JSON.",
                    context={"error": str(e)},
                )
            if not isinstance(data, dict):
                raise ValidationError(
                    code="invalid_json",
                    message='Request body must be a JSON object like {"text": "..."}.',
                )
            text = data.get("text")
            return text if isinstance(text, str) else ""

        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            raise ValidationError(
                code="invalid_encoding",
                message="Request body must be UTF-8 text.",
            )

    def validate_text(self, text: str) -> str:
        """Trim and length-check; returns the trimmed text."""
        trimmed = text.strip()
        length = len(trimmed)
        if length == 0:
            raise ValidationError(code="text_empty", message="Please enter some text.", field="text")
        if length < settings.summary_min_chars:
            raise UnprocessableError(
                code="text_too_short",
                message=f"Text must be at least {settings.summary_min_chars} characters.",
                field="text",
                context={"length": length},
            )
        if length > settings.summary_max_chars:
            raise UnprocessableError(
                code="text_too_long",
                message=f"Text must be at most {settings.summary_max_chars} characters.",
                field="text",
                context={"length": length},
            )
        return trimmed

    # ── Operations ───────────────────────────────────────────────────────

    async def summarize(
        self,
        db: Database,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> SummarizeResponse:
        """
        Complete workflow: extract → validate → summarize → store.

        Raises:
            PayloadTooLargeError, ValidationError, UnprocessableError:
                bad input, nothing is sent upstream
            LLMServiceError: upstream failed or is not configured, nothing stored
            DatabaseError:   the summary could not be stored
        """
        text = self.validate_text(self.extract_text(body, content_type))

        summary = await self.llm.summarize(text)

        async with db.session() as session:
            record = await summary_repository.create(session, text, summary)
            result = SummarizeResponse(id=record.id, summary=record.summary)

        logger.info("Summary %d stored (%d chars in)", result.id, len(text))
        return result

    async def list_recent(self, db: Database) -> List[SummaryListItem]:
        async with db.session() as session:
            records = await summary_repository.list_recent(session, settings.summary_list_limit)
            return [
                SummaryListItem(
                    id=r.id,
                    summary_preview=r.summary[: settings.summary_preview_chars],
                    created_at=r.created_at,
                )
                for r in records
            ]

    async def get_summary(self, db: Database, summary_id: int) -> SummaryDetail:
        require_positive_id(summary_id, "invalid_id", "id")
        async with db.session() as session:
            record = await summary_repository.get(session, summary_id)
            if record is None:
                raise NotFoundError(
                    code="summary_not_found",
                    resource="summary",
                    resource_id=summary_id,
                )
            return SummaryDetail.model_validate(record)

    async def debug_info(self, db: Database) -> Dict[str, Any]:
        info = db.storage_info()
        async with db.session() as session:
            info["total_summaries"] = await summary_repository.count(session)
        info["model"] = settings.groq_model
        info["api_key_configured"] = bool(settings.groq_api_key.strip())
        return info


summary_service = SummaryService()
