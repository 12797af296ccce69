"""
Response Time Estimator.

Maintains an outlier-resistant baseline latency for the score updater:
- Away responses (> 30 s) and extreme outliers (> 4x baseline) are dropped
- The median of what remains seeds a new baseline
- An existing baseline is blended with an adaptive-alpha EMA: the further the
  current response is from the baseline, the less it moves it
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from src.difficulty.numeric import positive_or_none


@dataclass
class EstimatorConfig:
    """Configuration for latency smoothing."""

    away_threshold_ms: float = 30000.0
    outlier_multiplier: float = 4.0
    # (relative difference above which it applies, alpha), checked in order
    alpha_steps: tuple[tuple[float, float], ...] = ((2.0, 0.1), (1.0, 0.2))
    default_alpha: float = 0.4


def median(values: Sequence[float]) -> float:
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


class ResponseTimeEstimator:
    """Smoothed average response time over a timing context."""

    def __init__(self, config: EstimatorConfig | None = None):
        self.config = config or EstimatorConfig()

    def filter_history(
        self,
        history: Iterable[float],
        previous_average: float | None = None,
    ) -> list[float]:
        """Drop away times, extreme outliers and unmeasured (<= 0) entries."""
        previous = positive_or_none(previous_average)
        kept = []
        for value in history:
            value = positive_or_none(value)
            if value is None or value > self.config.away_threshold_ms:
                continue
            if previous is not None and value > previous * self.config.outlier_multiplier:
                continue
            kept.append(value)
        return kept

    def alpha_for(self, current_response_time_ms: float, previous_average: float) -> float:
        difference = abs(current_response_time_ms - previous_average) / previous_average
        for threshold, alpha in self.config.alpha_steps:
            if difference > threshold:
                return alpha
        return self.config.default_alpha

    def estimate(
        self,
        history: Iterable[float],
        current_response_time_ms: float,
        previous_average: float | None = None,
    ) -> float:
        """
        Compute the new baseline latency.

        Args:
            history: Raw recent latencies (ms) in this timing context
            current_response_time_ms: Latency of the response just given
            previous_average: Existing baseline, if any

        Returns:
            New average response time in ms
        """
        previous = positive_or_none(previous_average)
        current = positive_or_none(current_response_time_ms)
        if current is None:
            # unusable latency leaves the baseline where it was
            if previous is not None:
                return previous
            valid = self.filter_history(history)
            return median(valid) if valid else current_response_time_ms

        if previous is None:
            valid = self.filter_history(history) or [current]
            return median(valid)

        alpha = self.alpha_for(current, previous)
        return previous * (1 - alpha) + current * alpha


def estimate(
    history: Iterable[float],
    current_response_time_ms: float,
    previous_average: float | None = None,
) -> float:
    """Module-level shortcut using default configuration."""
    return ResponseTimeEstimator().estimate(history, current_response_time_ms, previous_average)
