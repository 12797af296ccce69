"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.difficulty.models import MS_PER_HOUR, ItemState, ResponseEvent  # noqa: E402

NOW_MS = 1_700_000_000_000.0


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now_ms():
    """Fixed 'current time' in epoch ms."""
    return NOW_MS


@pytest.fixture
def hours_ago():
    """Return an epoch-ms timestamp the given number of hours before NOW_MS."""

    def _hours_ago(hours: float) -> float:
        return NOW_MS - hours * MS_PER_HOUR

    return _hours_ago


@pytest.fixture
def make_event():
    """Factory for ResponseEvents with sensible defaults."""

    def _make(
        item_id: str = "word-1",
        is_correct: bool = True,
        response_time_ms: float = 3000,
        previous_score: float = 3.0,
        new_score: float | None = None,
        timestamp_ms: float = NOW_MS,
        consecutive_correct_global: int = 0,
        consecutive_correct_for_item: int = 0,
    ) -> ResponseEvent:
        if new_score is None:
            new_score = previous_score - 0.6 if is_correct else previous_score + 0.8
        return ResponseEvent(
            item_id=item_id,
            is_correct=is_correct,
            timestamp_ms=timestamp_ms,
            response_time_ms=response_time_ms,
            previous_score=previous_score,
            new_score=new_score,
            consecutive_correct_global=consecutive_correct_global,
            consecutive_correct_for_item=consecutive_correct_for_item,
        )

    return _make


@pytest.fixture
def sample_item():
    """Provide an unreviewed word at the default score."""
    return ItemState(item_id="word-1", score=3.0)
