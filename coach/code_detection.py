"""
Editor code detection.

Decides which element on the page holds the user's current code. Editors
virtualize their DOM, so no single strategy is reliable; strategies are
tried in priority order and the first non-empty result wins.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from .models import PageSnapshot

logger = logging.getLogger(__name__)


EDITOR_SELECTORS = (
    ".monaco-editor textarea",
    ".monaco-editor .view-lines",
    ".CodeMirror-code",
    ".CodeMirror textarea",
    ".ace_text-input",
    ".ace_content",
    '[data-key="code-input"]',
    'textarea[autocomplete="off"]',
    ".editor textarea",
)

CODE_PATTERNS = (
    re.compile(r"def\s+\w+"),
    re.compile(r"function\s+\w+"),
    re.compile(r"class\s+\w+"),
    re.compile(r"public\s+\w+"),
    re.compile(r"(var|let|const)\s+\w+"),
    re.compile(r"return\s+"),
    re.compile(r"if\s*\("),
    re.compile(r"for\s*\("),
    re.compile(r"while\s*\("),
)

MIN_CODE_LENGTH = 20
NO_CODE_DETECTED = "// No code detected. Please ensure your code is in the problem editor."
DETECTION_ERROR = "// Error detecting code."

Strategy = Callable[[PageSnapshot], Optional[str]]


def looks_like_code(text: str) -> bool:
    return any(p.search(text) for p in CODE_PATTERNS) and len(text) > MIN_CODE_LENGTH


def _element_content(element) -> str:
    return element.get("value") or element.get_text()


def from_editor_api(page: PageSnapshot) -> Optional[str]:
    """Read the first open document of a structured editor API."""
    if not page.editor_documents:
        return None
    code = page.editor_documents[0]
    return code if code and code.strip() else None


def from_rendered_lines(page: PageSnapshot) -> Optional[str]:
    """Join the rendered visual lines of each rich editor container."""
    for editor in page.soup.select(".monaco-editor"):
        view_lines = editor.select_one(".view-lines")
        if view_lines is None:
            continue
        code = "".join(line.get_text() + "\n" for line in view_lines.select(".view-line"))
        if code.strip():
            return code.strip()
    return None


def from_editor_selectors(page: PageSnapshot) -> Optional[str]:
    """Value or text of the first known editor element that has content."""
    for selector in EDITOR_SELECTORS:
        element = page.soup.select_one(selector)
        if element is None:
            continue
        content = _element_content(element)
        if content and content.strip():
            return content.strip()
    return None


def from_code_like_textarea(page: PageSnapshot) -> Optional[str]:
    """Any textarea whose content looks like source code."""
    for textarea in page.soup.find_all("textarea"):
        content = _element_content(textarea)
        if content and looks_like_code(content):
            return content
    return None


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    from_editor_api,
    from_rendered_lines,
    from_editor_selectors,
    from_code_like_textarea,
)


class CodeDetector:
    """
    Detects the user's code and remembers the last value found.

    Args:
        strategies: Ordered detection strategies, first success wins
    """

    def __init__(self, strategies: tuple[Strategy, ...] = DEFAULT_STRATEGIES):
        self.strategies = strategies
        self.cached_code: Optional[str] = None

    def _detect(self, page: PageSnapshot) -> Optional[str]:
        for strategy in self.strategies:
            code = strategy(page)
            if code:
                logger.debug(f"Code detected by {strategy.__name__} ({len(code)} chars)")
                return code
        return None

    def get_user_code(self, page: PageSnapshot) -> str:
        """Current code, falling back to the cached value or a sentinel."""
        try:
            code = self._detect(page)
        except Exception as e:
            logger.error(f"Error getting user code: {e}")
            return DETECTION_ERROR
        return code or self.cached_code or NO_CODE_DETECTED

    def observe(self, page: PageSnapshot) -> bool:
        """
        React to a DOM mutation. Returns True when the cached code changed.
        """
        try:
            code = self._detect(page)
        except Exception as e:
            logger.warning(f"Code observation failed: {e}")
            return False
        if code and code != self.cached_code:
            self.cached_code = code
            return True
        return False
