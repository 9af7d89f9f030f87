"""
Snippet Summarizer Backend — Google Gemini Summarization Client
================================================================

What:  Concrete LLMService that summarizes text with the Google Gemini API.
Why:   One short completion per snippet; Gemini's flash models are cheap and fast.
How:   Builds a single prompt ("summarize in at most N words"), sends it with a
       bounded output budget and moderate temperature, returns the first
       candidate's text.
Who:   Module-level singleton, called by SnippetService.create_snippet().
When:  Once per POST /snippets that passes validation.

Lazy Initialization:
    The SDK is configured and the model handle built on the FIRST summarize()
    call, not at import or startup. The server can boot and serve reads
    without GEMINI_API_KEY; only summarization fails, with ConfigurationError.

    Construction is guarded by a lock with a double-checked test, so
    concurrent first calls never see a half-built handle and the handle is
    built once. The lock is never held across an await.

Failure Policy:
    No retry, no circuit breaker, no error translation. Whatever the SDK
    raises (google.api_core exceptions, transport errors) propagates to
    SnippetService, which classifies it. A retry would bill the upstream twice
    for one snippet.
"""

import logging
import threading
import time
import uuid
from typing import Any, Optional

import google.generativeai as genai

from app.config import settings
from app.exceptions import ConfigurationError
from app.services.llm_base import LLMService

logger = logging.getLogger(__name__)


def _first_candidate_text(response: Any) -> str:
    """
    Text of the first candidate, or "" when there is none.

    response.text raises ValueError when the candidate list is empty or the
    answer was blocked, so the parts are read directly.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    text = "".join(getattr(part, "text", "") or "" for part in parts)
    return text.strip()


class GeminiService(LLMService):
    """
    Google Gemini implementation of the summarization client.

    Architecture:
        - Singleton instance created at import (cheap: no SDK calls)
        - Model handle created lazily under a lock, then reused
        - One generate_content_async call per summarize()
    """

    PROMPT_TEMPLATE = "Summarize in at most {max_words} words:\n\n{text}"

    def __init__(self):
        self._model: Optional[Any] = None
        self._lock = threading.Lock()

    def _get_model(self):
        """
        Return the shared model handle, building it on first use.

        Raises:
            ConfigurationError: GEMINI_API_KEY is not set.
        """
        model = self._model
        if model is not None:
            return model

        with self._lock:
            if self._model is None:
                if not settings.has_gemini_api_key:
                    raise ConfigurationError(
                        "GEMINI_API_KEY is not set. "
                        "Get a key at https://aistudio.google.com/app/apikey"
                    )
                genai.configure(api_key=settings.gemini_api_key)
                # Assigned only once fully constructed
                self._model = genai.GenerativeModel(settings.gemini_model)
                logger.info("Gemini client initialized with model=%s", settings.gemini_model)
            return self._model

    async def summarize(self, text: str) -> str:
        """
        Summarize text with Gemini.

        Args:
            text: Non-empty input, passed through exactly as received.

        Returns:
            Summary stripped of surrounding whitespace, or "" if the response
            carries no usable content.

        Raises:
            ConfigurationError: Missing API key on first use.
            Exception: Any SDK/transport error, unmodified.
        """
        request_id = str(uuid.uuid4())[:8]
        model = self._get_model()
        prompt = self.PROMPT_TEMPLATE.format(max_words=settings.summary_max_words, text=text)
        start_time = time.time()

        try:
            response = await model.generate_content_async(
                prompt,
                generation_config=genai.GenerationConfig(
                    max_output_tokens=settings.summary_max_tokens,
                    temperature=settings.summary_temperature,
                ),
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "[%s] Gemini call failed after %.0fms: %s: %s",
                request_id,
                duration_ms,
                type(e).__name__,
                str(e),
            )
            raise

        summary = _first_candidate_text(response)
        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "[%s] Gemini summary completed in %.0fms: %d chars in, %d chars out",
            request_id,
            duration_ms,
            len(text),
            len(summary),
        )
        if not summary:
            logger.warning("[%s] Gemini returned no usable content", request_id)
        return summary


# ── Singleton Instance ────────────────────────────────────────────────────
# Holds the lazily built model handle shared by all requests
gemini_service = GeminiService()
