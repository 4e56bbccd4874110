"""
NoteShare Backend — Abstract LLM Service Interface
====================================================

What:  Abstract base class for text-summarization providers.
How:   Concrete implementations inherit from LLMService and implement
       summarize() and health_check().
Who:   Called by SummaryService for POST /api/summarize.

Design Decision:
    The summarizer only depends on this interface, so the Groq client can be
    replaced by another OpenAI-compatible provider or by a fake in tests
    without touching SummaryService.
"""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """
    Abstract interface for summarizing a block of text.

    Contract:
        - summarize() makes exactly one upstream request per call
        - All provider-specific errors are wrapped in LLMServiceError
        - A successful call never returns an empty string
    """

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """
        Summarize `text` into a few short bullet lines.

        Args:
            text: Already trimmed and length-checked input.

        Returns:
            str: The summary, trimmed and non-empty.

        Raises:
            LLMServiceError: Not configured (code llm_not_configured), the
                upstream was unreachable, answered with a non-2xx status, or
                returned no usable content.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable and accepts our credentials.

        Returns: True if reachable and authenticated, False otherwise.
        """
        ...
