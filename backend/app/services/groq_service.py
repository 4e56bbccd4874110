"""
NoteShare Backend — Groq Chat-Completion Service
==================================================

What:  Concrete LLM service that summarizes text through Groq's
       OpenAI-compatible chat-completions endpoint.
How:   One POST per call with httpx.AsyncClient and a bearer token. The
       reply's first choice is the summary.
Who:   Module singleton `groq_service`, used by SummaryService.

Request body:
    {"model": <GROQ_MODEL>,
     "messages": [{"role": "user", "content": <prompt + text>}],
     "stream": false}

Failure handling:
    - missing API key                 → LLMServiceError(llm_not_configured)
    - transport error (DNS, timeout)  → LLMServiceError(upstream_error)
    - non-2xx status                  → LLMServiceError with status and body
    - no choices[0].message.content   → LLMServiceError
    There is no retry; the caller sees the first failure.
"""

import logging
import time
from typing import Any, Optional

import httpx

from app.config import settings
from app.exceptions import LLMServiceError
from app.services.llm_base import LLMService

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 60.0
ERROR_BODY_LOG_CHARS = 500


class GroqService(LLMService):
    """
    Summarizer backed by Groq.

    Every constructor argument falls back to the matching setting when left
    as None, and is read at call time, so configuration changes (or test
    overrides of `settings`) take effect without rebuilding the singleton.
    `transport` lets tests plug in an `httpx.MockTransport`.
    """

    SUMMARY_PROMPT = (
        "Summarize the important points of the following text in 3 to 5 short "
        "bullet lines. Reply with the bullet lines only.\n\n"
    )

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._api_url = api_url
        self._transport = transport

    @property
    def api_key(self) -> str:
        return self._api_key if self._api_key is not None else settings.groq_api_key

    @property
    def model(self) -> str:
        return self._model or settings.groq_model

    @property
    def api_url(self) -> str:
        return self._api_url or settings.summary_api_url

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip())

    def build_prompt(self, text: str) -> str:
        return f"{self.SUMMARY_PROMPT}{text}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS, transport=self._transport)

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key.strip()}",
            "Content-Type": "application/json",
        }

    async def summarize(self, text: str) -> str:
        """
        Send `text` to the chat-completions endpoint and return the summary.

        Raises:
            LLMServiceError: see module docstring.
        """
        if not self.is_configured:
            raise LLMServiceError(
                message="The summarization service is not configured.",
                code="llm_not_configured",
            )

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": self.build_prompt(text)}],
            "stream": False,
        }

        start_time = time.time()
        try:
            async with self._client() as client:
                response = await client.post(self.api_url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error("Groq request failed: %s", str(e))
            raise LLMServiceError(
                message="The summarization service could not be reached.",
                context={"error_type": type(e).__name__},
            ) from e

        duration_ms = (time.time() - start_time) * 1000

        if not response.is_success:
            body = response.text
            logger.error(
                "Groq API error after %.0fms: %d - %s",
                duration_ms,
                response.status_code,
                body[:ERROR_BODY_LOG_CHARS],
            )
            raise LLMServiceError(
                message=f"Groq API error: {response.status_code} - {body}",
                context={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LLMServiceError(
                message="The summarization service returned a malformed response.",
            ) from e

        summary = _first_choice_content(data)
        if summary is None:
            logger.error("Groq response had no usable content: %s", str(data)[:ERROR_BODY_LOG_CHARS])
            raise LLMServiceError(message="The summarization service returned no summary.")

        logger.info(
            "Groq summary completed in %.0fms, %d chars in, %d chars out",
            duration_ms,
            len(text),
            len(summary),
        )
        return summary

    async def health_check(self) -> bool:
        """
        List models on the provider (no tokens consumed).

        Returns False when no key is configured or the call fails.
        """
        if not self.is_configured:
            return False
        models_url = self.api_url.rsplit("/chat/completions", 1)[0] + "/models"
        try:
            async with self._client() as client:
                response = await client.get(models_url, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning("Groq health check failed: %s", str(e))
            return False
        return response.is_success


def _first_choice_content(data: Any) -> Optional[str]:
    """Trimmed `choices[0].message.content`, or None if absent/empty."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str):
        return None
    content = content.strip()
    return content or None


groq_service = GroqService()
