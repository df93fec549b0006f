"""
Problem page scraper.

Reads title, description, examples and constraints out of an uncontrolled
problem page. Each field is resolved by an ordered list of probes; the first
probe that yields non-empty text wins.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Optional

from bs4 import BeautifulSoup

from .models import PageSnapshot, ProblemContext
from .utils import sanitize_text

logger = logging.getLogger(__name__)


TITLE_SELECTORS = (
    '[data-cy="question-title"]',
    'h1[data-cy="question-title"]',
    ".css-v3d350",
    "h1",
    ".question-title",
)

DESCRIPTION_SELECTORS = (
    '[data-key="description-content"]',
    ".content__u3I1",
    ".question-content",
    '[data-track-load="description_content"]',
)

EXAMPLE_SELECTOR = "pre, .example"
CONSTRAINT_SELECTOR = "ul li, .content__u3I1 p, .constraint"

EXAMPLE_MARKERS = ("Input:", "Example", "Output:")
CONSTRAINT_MARKERS = ("≤", "<=", "constraints", "length")
DIGIT_SPAN = re.compile(r"\d+.*\d+", re.DOTALL)

UNKNOWN_TITLE = "Unknown Problem"
DESCRIPTION_LIMIT = 500
MAX_EXAMPLES = 3
EXAMPLE_MIN_LENGTH = 10
EXAMPLE_MAX_LENGTH = 500
MAX_CONSTRAINTS = 5
CONSTRAINT_LIMIT = 200

Probe = Callable[[BeautifulSoup], Optional[str]]


def selector_probe(selector: str) -> Probe:
    """Probe returning the stripped text of the first element matching selector."""

    def probe(soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(selector)
        if element is None:
            return None
        return element.get_text().strip() or None

    probe.__name__ = f"select({selector})"
    return probe


def first_match(probes: Iterable[Probe], soup: BeautifulSoup) -> Optional[str]:
    """Evaluate probes in order and return the first non-empty result."""
    for probe in probes:
        result = probe(soup)
        if result:
            return result
    return None


def is_example(text: str) -> bool:
    return (
        any(marker in text for marker in EXAMPLE_MARKERS)
        and EXAMPLE_MIN_LENGTH <= len(text) < EXAMPLE_MAX_LENGTH
    )


def is_constraint(text: str) -> bool:
    if len(text) >= CONSTRAINT_LIMIT or "Example" in text:
        return False
    return any(marker in text for marker in CONSTRAINT_MARKERS) or bool(DIGIT_SPAN.search(text))


class PageScraper:
    """Builds a ProblemContext from a page snapshot."""

    def __init__(
        self,
        title_selectors: Iterable[str] = TITLE_SELECTORS,
        description_selectors: Iterable[str] = DESCRIPTION_SELECTORS,
    ):
        self.title_probes = [selector_probe(s) for s in title_selectors]
        self.description_probes = [selector_probe(s) for s in description_selectors]

    def extract(self, page: PageSnapshot) -> ProblemContext:
        """
        Scrape the problem context.

        Never raises: any failure yields a placeholder context.
        """
        try:
            soup = page.soup
            title = first_match(self.title_probes, soup)
            description = first_match(self.description_probes, soup)

            context = ProblemContext(
                title=sanitize_text(title) if title else UNKNOWN_TITLE,
                description=sanitize_text(description[:DESCRIPTION_LIMIT]) if description else "",
                examples=self._harvest(soup, EXAMPLE_SELECTOR, is_example)[:MAX_EXAMPLES],
                constraints=self._harvest(soup, CONSTRAINT_SELECTOR, is_constraint)[:MAX_CONSTRAINTS],
                source_url=page.url,
            )
            logger.debug(f"Problem data extracted: {context.title}")
            return context

        except Exception as e:
            logger.error(f"Error extracting problem data: {e}")
            return ProblemContext(
                title="Error extracting problem",
                description="Could not extract problem details",
                source_url=page.url,
            )

    @staticmethod
    def _harvest(soup: BeautifulSoup, selector: str, accept: Callable[[str], bool]) -> list[str]:
        found = []
        for element in soup.select(selector):
            text = element.get_text().strip()
            if accept(text):
                found.append(sanitize_text(text))
        return found
