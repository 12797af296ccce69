"""
Away Detection.

Separates genuine thinking time from a user who left the page mid-question.
A response counts as "away" when it is very long in absolute terms, or when it
is both far above the running average and far above anything seen recently.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from src.difficulty.numeric import is_number


@dataclass
class AwayConfig:
    """Thresholds for away detection."""

    absolute_threshold_ms: float = 30000.0
    average_multiplier: float = 3.0
    recent_max_multiplier: float = 2.0


class AwayDetector:
    """Classifies a single response latency as away time vs. thinking time."""

    def __init__(self, config: AwayConfig | None = None):
        self.config = config or AwayConfig()

    def is_away(
        self,
        response_time_ms: float,
        avg_response_time_ms: float,
        recent_history: Iterable[float] = (),
    ) -> bool:
        """
        Decide whether the user was likely away.

        Args:
            response_time_ms: Latency of this response
            avg_response_time_ms: Current smoothed baseline
            recent_history: Recent latencies in the same timing context

        Returns:
            True if the response should not be judged as thinking time
        """
        if not is_number(response_time_ms):
            return False

        if response_time_ms > self.config.absolute_threshold_ms:
            return True

        recent = [t for t in recent_history if is_number(t)]
        if not recent or not is_number(avg_response_time_ms):
            return False

        much_longer_than_average = (
            response_time_ms > avg_response_time_ms * self.config.average_multiplier
        )
        outlier = response_time_ms > max(recent) * self.config.recent_max_multiplier
        return much_longer_than_average and outlier


def is_away(
    response_time_ms: float,
    avg_response_time_ms: float,
    recent_history: Iterable[float] = (),
) -> bool:
    """Module-level shortcut using default thresholds."""
    return AwayDetector().is_away(response_time_ms, avg_response_time_ms, recent_history)
