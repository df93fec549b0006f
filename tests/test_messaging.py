"""Tests for popup/page messaging"""
import pytest

from coach.controller import CoachController
from coach.messaging import GET_CURRENT_CODE, GET_PROBLEM_DATA, MessageHandler


@pytest.fixture
def handler(two_sum_page, panel, history_store, coach_settings):
    controller = CoachController(two_sum_page, panel=panel, history_store=history_store, settings=coach_settings)
    return MessageHandler(controller)


class TestMessageHandler:
    """getProblemData / getCurrentCode"""

    def test_problem_data(self, handler):
        response = handler.handle({"action": GET_PROBLEM_DATA})

        assert response["problemData"]["title"] == "1. Two Sum"
        assert response["problemData"]["url"] == "https://leetcode.com/problems/two-sum/"
        assert response["userCode"].startswith("class Solution:")

    def test_current_code(self, handler):
        response = handler.handle({"action": GET_CURRENT_CODE})
        assert set(response) == {"userCode"}

    def test_unknown_action(self, handler):
        assert handler.handle({"action": "openCoach"}) == {"error": "Unknown action"}

    def test_failure_is_reported(self, handler, monkeypatch):
        def broken():
            raise RuntimeError("detached")

        monkeypatch.setattr(handler.controller, "get_user_code", broken)
        assert handler.handle({"action": GET_CURRENT_CODE}) == {"error": "Failed to process request"}


def test_exported_from_package():
    import coach

    assert coach.MessageHandler is MessageHandler
    assert coach.CoachController is CoachController
