"""Text helpers shared across the coach pipeline."""
from __future__ import annotations

import html
from typing import Optional


def sanitize_text(text: Optional[str]) -> str:
    """HTML-escape text before it is stored or rendered."""
    if not text or not isinstance(text, str):
        return ""
    return html.escape(text, quote=True).strip()


def truncate(text: str, limit: int, marker: str = "...") -> str:
    """Cap text at limit characters, appending marker when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + marker
