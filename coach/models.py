"""
Data models for the DSA coach pipeline.

Pydantic models shared by the extension-side controller and the relay.
Wire names follow the extension payload (``url``, ``timestamp``, ``type``).
"""
from __future__ import annotations

from datetime import datetime, timezone
from functools import cached_property
from typing import Annotated, Literal, Optional, Union

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field, field_validator


UNKNOWN_COMPLEXITY = "O(?)"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProblemContext(BaseModel):
    """Snapshot of a coding problem scraped from its hosting page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(default="Unknown Problem")
    description: str = Field(default="")
    examples: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    source_url: str = Field(default="", alias="url")
    captured_at: datetime = Field(default_factory=utc_now, alias="timestamp")

    @field_validator("captured_at", mode="before")
    @classmethod
    def parse_epoch_millis(cls, v):
        # The browser side stamps Date.now() milliseconds
        if isinstance(v, (int, float)):
            return datetime.fromtimestamp(v / 1000, tz=timezone.utc)
        return v


class ComplexityEstimate(BaseModel):
    """Best-effort Big-O pair parsed from free text."""

    time: str = Field(default=UNKNOWN_COMPLEXITY, description="Time complexity, O(...) or O(?)")
    space: str = Field(default=UNKNOWN_COMPLEXITY, description="Space complexity, O(...) or O(?)")

    @property
    def is_known(self) -> bool:
        return self.time != UNKNOWN_COMPLEXITY or self.space != UNKNOWN_COMPLEXITY


class ConversationEntry(BaseModel):
    """One message in the coaching conversation."""

    message: str
    sender: Literal["user", "assistant"]
    complexity: Optional[ComplexityEstimate] = None
    timestamp: datetime = Field(default_factory=utc_now)

    @field_validator("sender", mode="before")
    @classmethod
    def normalize_sender(cls, v):
        if v == "ai":
            return "assistant"
        return v

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_epoch_millis(cls, v):
        if isinstance(v, (int, float)):
            return datetime.fromtimestamp(v / 1000, tz=timezone.utc)
        return v


class _InteractionBase(BaseModel):
    problem: ProblemContext = Field(default_factory=ProblemContext)
    history: list[ConversationEntry] = Field(default_factory=list)

    @staticmethod
    def _require_text(v: str, what: str) -> str:
        if not v.strip():
            raise ValueError(f"{what} cannot be empty or whitespace only")
        return v


class ApproachAnalysis(_InteractionBase):
    """Review of a free-text approach description."""

    type: Literal["approach_analysis"] = "approach_analysis"
    approach: str = Field(..., min_length=1)

    @field_validator("approach")
    @classmethod
    def validate_approach(cls, v: str) -> str:
        return cls._require_text(v, "Approach")


class CodeAnalysis(_InteractionBase):
    """Review of the user's current editor code."""

    type: Literal["code_analysis"] = "code_analysis"
    code: str = Field(..., min_length=1)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        return cls._require_text(v, "Code")


class ChatFollowUp(_InteractionBase):
    """Follow-up chat message continuing the conversation."""

    type: Literal["chat_followup"] = "chat_followup"
    message: str = Field(..., min_length=1)

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        return cls._require_text(v, "Message")


InteractionRequest = Annotated[
    Union[ApproachAnalysis, CodeAnalysis, ChatFollowUp],
    Field(discriminator="type"),
]


class AssistantReply(BaseModel):
    """Reply shown to the user, tagged with where it came from."""

    response: str
    complexity: Optional[ComplexityEstimate] = None
    source: Literal["model", "relay_fallback", "canned"] = "model"


class PageSnapshot:
    """
    The hosting page as seen by the scraper.

    Args:
        html: Serialized DOM of the page
        url: Page location
        editor_documents: Texts of the documents open in a structured
            editor API (Monaco models), or None when the page exposes none
    """

    def __init__(
        self,
        html: str,
        url: str = "",
        editor_documents: Optional[list[str]] = None,
    ):
        self.html = html
        self.url = url
        self.editor_documents = editor_documents

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")
