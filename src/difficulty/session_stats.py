"""
Session statistics over a batch of scoring events.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

from src.difficulty.models import ResponseEvent
from src.difficulty.numeric import is_number, round_half_up


@dataclass(frozen=True)
class SessionStats:
    """Summary of a study session."""

    total: int = 0
    correct: int = 0
    incorrect: int = 0
    accuracy_pct: float = 0.0
    avg_score_delta: float = 0.0
    longest_streak: int = 0
    current_streak: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


class SessionStatsAggregator:
    """Summarizes an ordered sequence of ResponseEvents in one pass."""

    def aggregate(self, events: Iterable[ResponseEvent]) -> SessionStats:
        """
        Calculate session statistics.

        Args:
            events: Ordered events (oldest first)

        Returns:
            SessionStats; all zeros for an empty session
        """
        total = 0
        correct = 0
        delta_sum = 0.0
        streak = 0
        longest = 0
        last_correct = False

        for event in events:
            total += 1
            delta = event.score_delta
            # a corrupt score counts as no change
            delta_sum += delta if is_number(delta) else 0.0
            last_correct = bool(event.is_correct)
            if last_correct:
                correct += 1
                streak += 1
                longest = max(longest, streak)
            else:
                streak = 0

        if total == 0:
            return SessionStats()

        return SessionStats(
            total=total,
            correct=correct,
            incorrect=total - correct,
            accuracy_pct=round_half_up(correct / total * 100, 1),
            avg_score_delta=round_half_up(delta_sum / total, 2),
            longest_streak=longest,
            current_streak=streak if last_correct else 0,
        )


def aggregate(events: Iterable[ResponseEvent]) -> SessionStats:
    return SessionStatsAggregator().aggregate(events)
