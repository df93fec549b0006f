"""
Gemini LLM provider for DSA coaching replies.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from google import genai
from google.genai import types

from relay.config import Settings, get_settings, logger


class GeminiProvider:
    """
    Gemini provider returning plain-text coaching replies.

    One generate call per request. No retries.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client: genai.Client | None = None
        self._model = self.settings.GEMINI_MODEL
        self._initialize()

    def _initialize(self) -> None:
        """Initialize Gemini client."""
        if not self.settings.GEMINI_API_KEY:
            logger.warning("Gemini API key not configured")
            return

        try:
            self._client = genai.Client(api_key=self.settings.GEMINI_API_KEY)
            logger.info(f"Gemini client initialized with model: {self._model}")
        except Exception as e:
            logger.error(f"Failed to initialize Gemini client: {e}")

    def is_available(self) -> bool:
        """Check if provider is available."""
        return self._client is not None

    def get_model_name(self) -> str:
        """Get model name."""
        return self._model

    async def generate_text(self, prompt: str) -> str:
        """
        Send a single prompt and return the reply text.

        Raises:
            RuntimeError: If the client is not initialized
            asyncio.TimeoutError: If Gemini does not answer in time
            google.genai.errors.APIError: On upstream failures
        """
        if not self._client:
            raise RuntimeError("Gemini client not initialized: API key missing")

        response = await asyncio.wait_for(
            self._client.aio.models.generate_content(
                model=self._model,
                contents=[
                    types.Content(
                        role="user",
                        parts=[types.Part(text=prompt)]
                    )
                ],
                config=types.GenerateContentConfig(
                    temperature=self.settings.TEMPERATURE,
                    top_k=self.settings.TOP_K,
                    top_p=self.settings.TOP_P,
                    max_output_tokens=self.settings.MAX_TOKENS,
                ),
            ),
            timeout=self.settings.GEMINI_TIMEOUT_SECONDS,
        )

        response_text = response.text or ""
        logger.debug(f"Raw Gemini response: {response_text[:500]}...")
        return response_text
