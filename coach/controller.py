"""
Panel/chat controller.

Owns the problem context, the conversation log and the relay connection for
one page. Rendering goes through a Panel so the controller runs without a
browser.
"""
from __future__ import annotations

import logging
import random
from datetime import timedelta
from enum import Enum
from typing import Literal, Optional, Protocol

from .client import RelayClient, RelayError
from .code_detection import DETECTION_ERROR, NO_CODE_DETECTED, CodeDetector
from .config import CoachSettings, get_coach_settings
from .fallback import canned_reply
from .history import HistoryStore, bound_history
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
from .scraper import PageScraper
from .utils import sanitize_text

logger = logging.getLogger(__name__)

Mode = Literal["discussion", "code"]
NoticeLevel = Literal["info", "success", "warning", "error"]


class CoachState(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting-response"
    RESPONDED = "responded"


class Panel(Protocol):
    """Rendering surface for the coach panel."""

    def set_mode(self, mode: Mode) -> None: ...

    def set_loading(self, action: str, loading: bool) -> None: ...

    def set_code_input(self, code: str) -> None: ...

    def append_message(self, entry: ConversationEntry) -> None: ...

    def show_complexity(self, complexity: ComplexityEstimate) -> None: ...

    def show_notice(self, message: str, level: NoticeLevel = "info") -> None: ...

    def reset(self) -> None: ...

    def destroy(self) -> None: ...


class LoggingPanel:
    """Panel that only logs what it would render."""

    def set_mode(self, mode: Mode) -> None:
        logger.info(f"Panel mode: {mode}")

    def set_loading(self, action: str, loading: bool) -> None:
        logger.debug(f"Panel {action} loading={loading}")

    def set_code_input(self, code: str) -> None:
        logger.debug(f"Panel code input set ({len(code)} chars)")

    def append_message(self, entry: ConversationEntry) -> None:
        logger.info(f"[{entry.sender}] {entry.message[:80]}")

    def show_complexity(self, complexity: ComplexityEstimate) -> None:
        logger.info(f"Complexity: time {complexity.time}, space {complexity.space}")

    def show_notice(self, message: str, level: NoticeLevel = "info") -> None:
        log = logger.warning if level in ("warning", "error") else logger.info
        log(f"Notice: {message}")

    def reset(self) -> None:
        logger.debug("Panel reset")

    def destroy(self) -> None:
        logger.debug("Panel destroyed")


class CoachController:
    """
    State machine over idle, awaiting-response and responded.

    Args:
        page: Snapshot of the hosting page
        relay: Relay client, or None to run on canned replies only
        panel: Rendering surface
        history_store: Persisted conversation record
        rng: Random source for canned chat replies
    """

    def __init__(
        self,
        page: PageSnapshot,
        relay: Optional[RelayClient] = None,
        panel: Optional[Panel] = None,
        history_store: Optional[HistoryStore] = None,
        scraper: Optional[PageScraper] = None,
        detector: Optional[CodeDetector] = None,
        settings: Optional[CoachSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_coach_settings()
        self.page = page
        self.relay = relay
        self.panel = panel or LoggingPanel()
        self.history_store = history_store or HistoryStore(self.settings.HISTORY_PATH)
        self.scraper = scraper or PageScraper()
        self.detector = detector or CodeDetector()
        self.rng = rng or random.Random()

        self.state = CoachState.IDLE
        self.mode: Mode = "discussion"
        self.relay_offline = relay is None
        self.history: list[ConversationEntry] = []
        self.problem: ProblemContext = self.scraper.extract(page)
        self.detector.observe(page)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Probe the relay and restore any saved conversation."""
        self.history_store.prune_expired(timedelta(days=self.settings.HISTORY_MAX_AGE_DAYS))
        self.restore()

        if self.relay is None:
            return
        try:
            info = await self.relay.check_health()
            logger.info(f"Backend connected: {info}")
        except RelayError as e:
            logger.warning(f"Backend not available, using canned replies: {e}")
            self.relay_offline = True

    async def destroy(self) -> None:
        if self.relay is not None:
            await self.relay.close()
        self.panel.destroy()
        self.state = CoachState.IDLE

    def navigate(self, page: PageSnapshot) -> None:
        """Replace the page; the problem context and in-memory log start over."""
        self.page = page
        self.problem = self.scraper.extract(page)
        self.detector.observe(page)
        self.history = []
        self.state = CoachState.IDLE
        self.panel.reset()
        self.restore()

    def restore(self) -> None:
        """Replay the saved conversation for the current problem."""
        self.history = bound_history(self.history_store.load(self.problem.source_url))
        for entry in self.history:
            self.panel.append_message(entry)

        latest = next((e.complexity for e in reversed(self.history) if e.complexity), None)
        if latest and latest.is_known:
            self.panel.show_complexity(latest)
        if self.history:
            self.state = CoachState.RESPONDED

    # ------------------------------------------------------------------
    # Page observation
    # ------------------------------------------------------------------

    def on_mutation(self, page: PageSnapshot) -> None:
        self.page = page
        if self.detector.observe(page):
            logger.debug("Editor code changed")

    def get_user_code(self) -> str:
        return self.detector.get_user_code(self.page)

    def switch_mode(self, mode: Mode) -> None:
        if mode not in ("discussion", "code"):
            raise ValueError(f"Unknown mode: {mode}")
        self.mode = mode
        self.panel.set_mode(mode)

    def auto_detect_code(self) -> Optional[str]:
        """Prefill the code input with the detected editor code."""
        code = self.get_user_code()
        if code in (NO_CODE_DETECTED, DETECTION_ERROR):
            self.panel.show_notice("No code detected. Please paste manually.", "warning")
            return None
        self.panel.set_code_input(code)
        self.panel.show_notice("Code auto-detected!", "success")
        return code

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    async def analyze_approach(self, approach: str) -> Optional[AssistantReply]:
        approach = approach.strip()
        if not approach:
            self.panel.show_notice("Please describe your approach first", "warning")
            return None
        request = ApproachAnalysis(problem=self.problem, approach=approach, history=list(self.history))
        return await self._submit("analyzeApproach", request, approach)

    async def analyze_code(self, code: Optional[str] = None) -> Optional[AssistantReply]:
        code = (code if code is not None else self.get_user_code()).strip()
        if not code or code in (NO_CODE_DETECTED, DETECTION_ERROR):
            self.panel.show_notice("Please provide code to analyze", "warning")
            return None
        request = CodeAnalysis(problem=self.problem, code=code, history=list(self.history))
        return await self._submit("analyzeCode", request, "Code analysis requested")

    async def send_chat(self, message: str) -> Optional[AssistantReply]:
        message = message.strip()
        if not message:
            self.panel.show_notice("Please type a message first", "warning")
            return None
        request = ChatFollowUp(problem=self.problem, message=message, history=list(self.history))
        return await self._submit("sendChatMessage", request, message)

    def clear(self) -> None:
        """Discard the conversation, in memory and on disk."""
        self.history = []
        self.history_store.clear(self.problem.source_url)
        self.state = CoachState.IDLE
        self.panel.reset()
        self.panel.show_notice("Conversation cleared", "success")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _submit(self, action: str, request: InteractionRequest, user_text: str) -> Optional[AssistantReply]:
        if self.state is CoachState.AWAITING_RESPONSE:
            self.panel.show_notice("Please wait for the current response", "info")
            return None

        previous = self.state
        self.state = CoachState.AWAITING_RESPONSE
        self.panel.set_loading(action, True)
        try:
            reply = await self._call_ai(request)
        except Exception:
            self.state = previous
            self.panel.show_notice("Something went wrong. Please try again.", "error")
            raise
        finally:
            self.panel.set_loading(action, False)

        self._append(ConversationEntry(message=user_text, sender="user"))
        self._append(ConversationEntry(message=reply.response, sender="assistant", complexity=reply.complexity))
        if reply.complexity and reply.complexity.is_known:
            self.panel.show_complexity(reply.complexity)

        self.state = CoachState.RESPONDED
        return reply

    async def _call_ai(self, request: InteractionRequest) -> AssistantReply:
        if self.relay is None or self.relay_offline:
            return canned_reply(request, self.rng)

        try:
            return await self.relay.analyze(request)
        except RelayError as e:
            if e.is_network_error:
                logger.warning(f"Backend request failed, using canned reply: {e.message}")
                self.relay_offline = True
                self.panel.show_notice("Coach is offline, showing a local hint", "warning")
                return canned_reply(request, self.rng)

            message = e.payload.get("message")
            fallback = e.payload.get("fallback")
            logger.warning(f"Backend returned {e.status_code}: {message or e.message}")
            if fallback:
                self.panel.show_notice(message or e.message, "warning")
                return AssistantReply(response=fallback, complexity=None, source="relay_fallback")
            if message:
                self.panel.show_notice(message, "warning")
            return canned_reply(request, self.rng)

    def _append(self, entry: ConversationEntry) -> None:
        entry = entry.model_copy(update={"message": sanitize_text(entry.message)})
        self.history = bound_history([*self.history, entry])
        self.panel.append_message(entry)
        self.history_store.save(self.problem.source_url, self.history)
