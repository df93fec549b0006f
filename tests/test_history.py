"""Tests for the persisted conversation history"""
import json
from datetime import timedelta

from coach.history import KEEP_ENTRIES, MAX_ENTRIES, HistoryStore, bound_history
from coach.models import ComplexityEstimate, ConversationEntry, utc_now
from tests.helpers import PROBLEM_URL


def _entries(n):
    return [ConversationEntry(message=f"m{i}", sender="user") for i in range(n)]


class TestHistoryStore:
    """Single record keyed by problem URL"""

    def test_round_trip_for_same_url(self, history_store):
        entries = [
            ConversationEntry(message="I use a hash map", sender="user"),
            ConversationEntry(
                message="Nice.", sender="assistant", complexity=ComplexityEstimate(time="O(n)", space="O(n)")
            ),
        ]
        history_store.save(PROBLEM_URL, entries)

        loaded = history_store.load(PROBLEM_URL)
        assert [e.message for e in loaded] == ["I use a hash map", "Nice."]
        assert loaded[1].complexity.time == "O(n)"

    def test_other_url_loads_nothing(self, history_store):
        history_store.save(PROBLEM_URL, _entries(2))
        assert history_store.load("https://leetcode.com/problems/3sum/") == []

    def test_missing_file(self, history_store):
        assert history_store.load(PROBLEM_URL) == []

    def test_corrupt_file(self, history_store):
        history_store.path.write_text("{broken", encoding="utf-8")
        assert history_store.load(PROBLEM_URL) == []

    def test_legacy_sender_and_epoch_timestamp(self, history_store):
        history_store.path.write_text(json.dumps({
            "conversationHistory": [{"message": "hi", "sender": "ai", "timestamp": 1718000000000}],
            "problemUrl": PROBLEM_URL,
        }), encoding="utf-8")

        [entry] = history_store.load(PROBLEM_URL)
        assert entry.sender == "assistant"
        assert entry.timestamp.year == 2024

    def test_clear(self, history_store):
        history_store.save(PROBLEM_URL, _entries(3))
        history_store.clear(PROBLEM_URL)
        assert history_store.load(PROBLEM_URL) == []

    def test_save_failure_is_swallowed(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        store = HistoryStore(blocker / "history.json")

        store.save(PROBLEM_URL, _entries(1))
        assert store.load(PROBLEM_URL) == []

    def test_prune_expired(self, history_store):
        history_store.save(PROBLEM_URL, _entries(1))
        assert history_store.prune_expired(timedelta(days=7)) is False
        assert history_store.path.exists()

        record = json.loads(history_store.path.read_text(encoding="utf-8"))
        record["savedAt"] = (utc_now() - timedelta(days=8)).isoformat()
        history_store.path.write_text(json.dumps(record), encoding="utf-8")

        assert history_store.prune_expired(timedelta(days=7)) is True
        assert not history_store.path.exists()


class TestBoundHistory:
    """Memory bound on the conversation log"""

    def test_small_log_untouched(self):
        entries = _entries(MAX_ENTRIES)
        assert bound_history(entries) == entries

    def test_trims_to_most_recent(self):
        bounded = bound_history(_entries(MAX_ENTRIES + 1))
        assert len(bounded) == KEEP_ENTRIES
        assert bounded[-1].message == f"m{MAX_ENTRIES}"
