"""
QuickNotes Backend — Google Gemini Summarizer
===============================================

What:  Concrete Summarizer using the Google Gemini generateContent API.
Why:   One-shot text summarization for the "Summarize" button.
How:   Sends a single prompt to the configured Gemini model and returns the
       first candidate's first text part, trimmed.
Who:   Instantiated once at import; called by POST /api/notes/summarize.

Failure policy:
    - No API key → ConfigurationError, raised before any network call
    - Any SDK/network error, non-2xx status, or a response without
      candidates[0].content.parts[0].text → SummarizationError
    - No retry, no backoff, no explicit timeout: one call per request,
      bounded only by the SDK's defaults
"""

import asyncio
import logging
import time
import uuid
from typing import Any, Optional

import google.generativeai as genai

from quicknotes.config import PLACEHOLDER_API_KEY, settings
from quicknotes.exceptions import ConfigurationError, SummarizationError
from quicknotes.services.summarizer_base import Summarizer

logger = logging.getLogger(__name__)


def build_prompt(content: str) -> str:
    """One-shot summarization prompt for the given note text."""
    return f'Summarize the following note content in one or two sentences: "{content}"'


def extract_summary(response: Any) -> str:
    """
    Pull `candidates[0].content.parts[0].text` out of a Gemini response.

    Raises:
        SummarizationError: The response doesn't have that shape.
    """
    try:
        text = response.candidates[0].content.parts[0].text
    except (AttributeError, IndexError, KeyError, TypeError) as e:
        raise SummarizationError(
            context={"reason": "malformed_response", "error_type": type(e).__name__},
        ) from e

    if not isinstance(text, str):
        raise SummarizationError(
            context={"reason": "malformed_response", "text_type": type(text).__name__},
        )
    return text.strip()


class GeminiSummarizer(Summarizer):
    """
    Google Gemini implementation of the Summarizer interface.

    The SDK keeps the API key in module-level state, so it is configured once
    here rather than per request.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = (settings.gemini_api_key if api_key is None else api_key).strip()
        self.model_name = model_name or settings.gemini_model

        if self.is_configured:
            genai.configure(api_key=self.api_key)

        self.model = genai.GenerativeModel(self.model_name)

        logger.info(
            "GeminiSummarizer initialized with model=%s (configured=%s)",
            self.model_name,
            self.is_configured,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and self.api_key != PLACEHOLDER_API_KEY

    async def summarize(self, text: str) -> str:
        """
        Summarize free text with a single Gemini call.

        Args:
            text: Note content sent by the client. Not looked up or
                  validated against any stored note.

        Returns:
            The trimmed text of the first candidate.

        Raises:
            ConfigurationError: No API key configured (no call is made).
            SummarizationError: The call failed or the response was malformed.
        """
        if not self.is_configured:
            logger.error("Summarize requested but GEMINI_API_KEY is missing")
            raise ConfigurationError()

        # Short per-call ID for correlating the start/finish log lines
        call_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        logger.info("[%s] Sending summarize request to Gemini (%d chars)", call_id, len(text))

        try:
            response = await self.model.generate_content_async(build_prompt(text))
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                "[%s] Gemini call failed after %.0fms: %s",
                call_id,
                duration_ms,
                str(e),
            )
            raise SummarizationError(
                context={"call_id": call_id, "error_type": type(e).__name__},
            ) from e

        try:
            summary = extract_summary(response)
        except SummarizationError as e:
            e.context["call_id"] = call_id
            logger.error("[%s] Gemini returned an unexpected response shape", call_id)
            raise

        logger.info(
            "[%s] Gemini summary completed in %.0fms, %d chars",
            call_id,
            (time.time() - start_time) * 1000,
            len(summary),
        )
        return summary

    async def health_check(self) -> bool:
        """
        Check if Gemini is reachable with the configured key.

        How: Lists available models (no token cost). An unconfigured
             summarizer is reported as unavailable without a network call.
        """
        if not self.is_configured:
            return False
        try:
            models = await asyncio.to_thread(lambda: list(genai.list_models()))
            model_names = [m.name for m in models]
            target = f"models/{self.model_name}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


# ── Singleton Instance ────────────────────────────────────────────────────
summarizer = GeminiSummarizer()
