"""
Snippet Summarizer Backend — Abstract Summarization Client Interface
=====================================================================

What:  Abstract base class defining the contract for AI summarization providers.
Why:   The orchestrator depends on this contract, not on a vendor SDK.
How:   Concrete implementations inherit from LLMService and implement summarize().
Who:   Called by SnippetService during snippet creation.
"""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """
    Abstract interface for AI-powered text summarization.

    Contract:
        - summarize() accepts non-empty text and returns a short summary
        - Implementations do NOT retry and do NOT translate upstream errors;
          the caller classifies them
        - Connection setup is lazy and happens at most once

    Implementations:
        - GeminiService: Google Gemini API (default)
    """

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """
        Summarize text in a few words.

        Args:
            text: Input text. The caller guarantees it is non-empty after
                  trimming and passes it untrimmed; it is not re-validated.

        Returns:
            str: The summary, stripped of surrounding whitespace.
                 Empty string when the upstream returns no usable content.

        Raises:
            ConfigurationError: Credentials are missing on first use.
            Exception: Any transport, auth, or quota error from the upstream,
                unmodified.
        """
        ...

