"""
Classification of upstream model failures into HTTP responses.
"""
from __future__ import annotations

from .config import settings
from .models import ErrorResponse


INVALID_KEY_MESSAGE = "Please check your GEMINI_API_KEY in the .env file"
RATE_LIMIT_FALLBACK = (
    "I'm temporarily unavailable due to rate limits. "
    "Can you describe your approach step by step while we wait?"
)
GENERIC_FALLBACK = (
    "I'm having technical difficulties. Try describing your approach in more detail - "
    "what data structure are you considering?"
)


def classify_upstream_error(error: Exception) -> tuple[int, ErrorResponse]:
    """
    Map an upstream failure to a status code and error body.

    Credential problems give 401, quota exhaustion 429, anything else 500
    with the raw upstream text.
    """
    text = str(error) or type(error).__name__

    if "API key" in text:
        return 401, ErrorResponse(error="Invalid API key", message=INVALID_KEY_MESSAGE)

    if "quota" in text:
        return 429, ErrorResponse(
            error="Rate limit exceeded",
            message=f"Free tier: {settings.REQUESTS_PER_MINUTE} requests/minute. Please wait a moment.",
            fallback=RATE_LIMIT_FALLBACK,
        )

    return 500, ErrorResponse(error="AI service error", message=text, fallback=GENERIC_FALLBACK)
