"""Core module for the DSA coach: scraping, prompting and post-processing."""

from .models import (
    ApproachAnalysis,
    AssistantReply,
    ChatFollowUp,
    CodeAnalysis,
    ComplexityEstimate,
    ConversationEntry,
    InteractionRequest,
    PageSnapshot,
    ProblemContext,
)
from .complexity import extract_complexity
from .prompts import build_prompt, NO_SOLUTION_INSTRUCTION
from .scraper import PageScraper
from .code_detection import CodeDetector
from .controller import CoachController
from .messaging import MessageHandler

__all__ = [
    "ApproachAnalysis",
    "AssistantReply",
    "ChatFollowUp",
    "CodeAnalysis",
    "ComplexityEstimate",
    "ConversationEntry",
    "InteractionRequest",
    "PageSnapshot",
    "ProblemContext",
    "extract_complexity",
    "build_prompt",
    "NO_SOLUTION_INSTRUCTION",
    "PageScraper",
    "CodeDetector",
    "CoachController",
    "MessageHandler",
]
