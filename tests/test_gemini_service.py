"""
Snippet Summarizer Backend — Gemini Client Unit Tests (Mocked)
===============================================================

What:  Tests for GeminiService with the google.generativeai module patched.
Why:   Tests should not make real API calls (costs money, requires network).

What we test:
    ✅ Summary is the first candidate's text, stripped
    ✅ Empty / missing content yields "" instead of raising
    ✅ Prompt carries the untrimmed text and the word limit
    ✅ Lazy, single initialization (also under concurrent first use)
    ✅ Missing API key fails on first use with ConfigurationError
    ✅ Upstream errors propagate unmodified, with exactly one call
"""

import threading
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.config import settings
from app.exceptions import ConfigurationError
from app.services.gemini_service import GeminiService, _first_candidate_text


def make_response(*texts):
    """Gemini-shaped response with one candidate made of the given parts."""
    parts = [SimpleNamespace(text=t) for t in texts]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


class TestFirstCandidateText:

    def test_joins_and_strips_parts(self):
        assert _first_candidate_text(make_response("  A short ", "summary.\n")) == "A short summary."

    def test_no_candidates(self):
        assert _first_candidate_text(SimpleNamespace(candidates=[])) == ""

    def test_candidate_without_content(self):
        response = SimpleNamespace(candidates=[SimpleNamespace(content=None)])
        assert _first_candidate_text(response) == ""

    def test_part_with_none_text(self):
        assert _first_candidate_text(make_response(None)) == ""


class TestGeminiServiceMocked:
    """Tests for GeminiService with mocked Gemini API."""

    @pytest.mark.asyncio
    async def test_summarize_success(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(
                return_value=make_response("  Concise summary.  ")
            )
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            result = await service.summarize("Some long text\n\nwith paragraphs.")

            assert result == "Concise summary."
            mock_model.generate_content_async.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_prompt_and_generation_config(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(return_value=make_response("ok"))
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            await service.summarize("  padded text  ")

            prompt = mock_model.generate_content_async.await_args.args[0]
            assert prompt.endswith("  padded text  ")
            assert f"at most {settings.summary_max_words} words" in prompt
            mock_genai.GenerationConfig.assert_called_once_with(
                max_output_tokens=settings.summary_max_tokens,
                temperature=settings.summary_temperature,
            )
            assert 0.2 <= settings.summary_temperature <= 0.9

    @pytest.mark.asyncio
    async def test_empty_response_returns_empty_string(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(
                return_value=SimpleNamespace(candidates=[])
            )
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            assert await service.summarize("text") == ""

    @pytest.mark.asyncio
    async def test_initialization_is_lazy_and_happens_once(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(return_value=make_response("s"))
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            mock_genai.configure.assert_not_called()
            mock_genai.GenerativeModel.assert_not_called()

            await service.summarize("one")
            await service.summarize("two")

            mock_genai.configure.assert_called_once_with(api_key=settings.gemini_api_key)
            mock_genai.GenerativeModel.assert_called_once_with(settings.gemini_model)
            assert mock_model.generate_content_async.await_count == 2

    def test_concurrent_first_use_builds_one_handle(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            service = GeminiService()
            barrier = threading.Barrier(8)
            handles = []

            def worker():
                barrier.wait()
                handles.append(service._get_model())

            threads = [threading.Thread(target=worker) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            assert mock_genai.GenerativeModel.call_count == 1
            assert len(handles) == 8
            assert all(h is handles[0] for h in handles)

    @pytest.mark.asyncio
    async def test_missing_api_key_raises_configuration_error(self):
        with patch("app.services.gemini_service.genai") as mock_genai, \
             patch.object(settings, "gemini_api_key", ""):
            service = GeminiService()

            with pytest.raises(ConfigurationError):
                await service.summarize("text")
            mock_genai.GenerativeModel.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_error_propagates_unmodified(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            failure = RuntimeError("upstream exploded")
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(side_effect=failure)
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            with pytest.raises(RuntimeError) as exc_info:
                await service.summarize("text")

            assert exc_info.value is failure
            # No retry
            mock_model.generate_content_async.assert_awaited_once()
