"""
Persisted conversation history.

One JSON record holds the conversation and the URL of the problem it
belongs to. Reads and writes never raise; failures are logged.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from .models import ConversationEntry, utc_now

logger = logging.getLogger(__name__)

MAX_ENTRIES = 50
KEEP_ENTRIES = 40

_entries = TypeAdapter(list[ConversationEntry])


def bound_history(entries: list[ConversationEntry]) -> list[ConversationEntry]:
    """Trim to the most recent entries once the log grows past its cap."""
    if len(entries) > MAX_ENTRIES:
        return entries[-KEEP_ENTRIES:]
    return entries


class HistoryStore:
    """
    Flat key-value record of the conversation for one problem URL.

    Args:
        path: JSON file backing the record
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading conversation history: {e}")
            return None

    def load(self, problem_url: str) -> list[ConversationEntry]:
        """Entries saved for problem_url, empty when the record is for another page."""
        record = self._read()
        if not record or record.get("problemUrl") != problem_url:
            return []
        try:
            return _entries.validate_python(record.get("conversationHistory") or [])
        except ValidationError as e:
            logger.error(f"Discarding malformed conversation history: {e}")
            return []

    def save(self, problem_url: str, entries: list[ConversationEntry]) -> None:
        record = {
            "conversationHistory": _entries.dump_python(entries, mode="json"),
            "problemUrl": problem_url,
            "savedAt": utc_now().isoformat(),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(record, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.error(f"Error saving conversation history: {e}")

    def clear(self, problem_url: str) -> None:
        self.save(problem_url, [])

    def prune_expired(self, max_age: timedelta = timedelta(days=7)) -> bool:
        """Remove the record when it is older than max_age. Returns True if removed."""
        record = self._read()
        if not record or not record.get("savedAt"):
            return False
        try:
            saved_at = datetime.fromisoformat(record["savedAt"])
        except ValueError:
            return False
        if saved_at.tzinfo is None:
            saved_at = saved_at.replace(tzinfo=timezone.utc)
        if utc_now() - saved_at <= max_age:
            return False
        try:
            self.path.unlink()
        except OSError as e:
            logger.error(f"Error removing expired history: {e}")
            return False
        logger.info(f"Removed expired conversation history for {record.get('problemUrl')}")
        return True
