"""
Unit tests for diagnostics logging setup.
"""

import importlib

import pytest
from loguru import logger

import src.difficulty
from src.difficulty.observability import configure_logging
from src.difficulty.score_updater import ScoreUpdater


@pytest.fixture
def restore_disabled():
    """Put the package back into its silent import-time state."""
    yield
    logger.disable("src.difficulty")


def _capture() -> tuple[list[str], int]:
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    return messages, sink_id


class TestLogging:
    def test_silent_until_configured(self, now_ms):
        importlib.reload(src.difficulty)
        messages, sink_id = _capture()

        try:
            ScoreUpdater().update(3.0, True, now_ms=now_ms)
        finally:
            logger.remove(sink_id)

        assert messages == []

    def test_configure_logging_enables_diagnostics(self, now_ms, restore_disabled):
        configure_logging(level="DEBUG")
        messages, sink_id = _capture()

        try:
            ScoreUpdater().update(3.0, True, now_ms=now_ms)
        finally:
            logger.remove(sink_id)

        assert len(messages) == 1
        assert "[medium] 3.00 -> 2.4" in messages[0]
