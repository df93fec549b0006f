"""Pytest configuration and common fixtures for DSA Coach tests"""
import httpx
import pytest

from coach.client import RelayClient
from coach.config import CoachSettings
from coach.history import HistoryStore
from coach.models import PageSnapshot, ProblemContext
from tests.helpers import PROBLEM_URL, TWO_SUM_HTML, RecordingPanel


@pytest.fixture
def two_sum_page():
    return PageSnapshot(TWO_SUM_HTML, url=PROBLEM_URL)


@pytest.fixture
def problem():
    return ProblemContext(
        title="Two Sum",
        description="Given an array of integers nums and an integer target, return indices of the two numbers.",
        constraints=["2 &lt;= nums.length &lt;= 10^4"],
        source_url=PROBLEM_URL,
    )


@pytest.fixture
def coach_settings(tmp_path):
    return CoachSettings(RELAY_URL="http://relay.test", HISTORY_PATH=tmp_path / "history.json")


@pytest.fixture
def history_store(tmp_path):
    return HistoryStore(tmp_path / "history.json")


@pytest.fixture
def panel():
    return RecordingPanel()


@pytest.fixture
def make_relay(coach_settings):
    def factory(stub):
        return RelayClient(settings=coach_settings, transport=httpx.MockTransport(stub))
    return factory
