"""
Unit tests for AwayDetector.
"""

import pytest

from src.difficulty.away import AwayConfig, AwayDetector, is_away


class TestAwayDetection:
    def test_reference_example(self):
        assert is_away(45000, 5000, [4000, 4200]) is True

    def test_absolute_threshold_is_exclusive(self):
        assert is_away(30000, 50000, []) is False
        assert is_away(30001, 50000, []) is True

    @pytest.mark.parametrize(
        "response_ms,avg_ms,history,expected",
        [
            (16000, 5000, [4000, 4200], True),  # > 3x average and > 2x recent max
            (16000, 5000, [9000], False),  # not an outlier against recent history
            (14000, 5000, [1000], False),  # not far enough above the average
            (20000, 5000, [], False),  # no recent history to compare against
            (4000, 5000, [4000, 4200], False),
        ],
    )
    def test_relative_criteria(self, response_ms, avg_ms, history, expected):
        assert is_away(response_ms, avg_ms, history) is expected

    def test_non_numeric_history_entries_ignored(self):
        assert is_away(16000, 5000, [None, float("nan"), 4000]) is True

    def test_custom_threshold(self):
        detector = AwayDetector(AwayConfig(absolute_threshold_ms=10000))

        assert detector.is_away(12000, 5000, []) is True
        assert detector.is_away(9000, 5000, []) is False
