"""
Priority Ranker - what to review next.

Priority starts from the score (harder = more urgent), grows with recent
failures, and is damped for items reviewed within the last day.
"""

from __future__ import annotations

import random
import time
from collections.abc import Sequence
from dataclasses import dataclass

from src.difficulty.models import MAX_SCORE, MS_PER_HOUR, ItemState, ResponseEvent
from src.difficulty.numeric import clamp, is_number


@dataclass
class PriorityConfig:
    """Configuration for priority ranking."""

    failure_weight: float = 0.5
    recency_hours: float = 24.0
    min_recency_factor: float = 0.5
    shuffle_difficulty_weight: float = 0.3


@dataclass(frozen=True)
class RankedItem:
    item: ItemState
    priority: float


class PriorityRanker:
    """Scheduling priority per item. Higher value = review sooner."""

    def __init__(self, config: PriorityConfig | None = None):
        self.config = config or PriorityConfig()

    def priority(
        self,
        score: float,
        recent_events_for_item: Sequence[ResponseEvent] = (),
        last_reviewed_at_ms: float | None = None,
        now_ms: float | None = None,
    ) -> float:
        """
        Calculate review priority for one item.

        Args:
            score: Current CompetencyScore
            recent_events_for_item: The item's recent events
            last_reviewed_at_ms: Last review time (epoch ms)
            now_ms: Current time (epoch ms), wall clock if None

        Returns:
            Priority (higher = more urgent)
        """
        failures = sum(1 for event in recent_events_for_item if not event.is_correct)
        base = score + self.config.failure_weight * failures

        if not is_number(last_reviewed_at_ms) or not last_reviewed_at_ms:
            return base

        if now_ms is None:
            now_ms = time.time() * 1000
        hours = max(0.0, (now_ms - last_reviewed_at_ms) / MS_PER_HOUR)
        decay = min(hours / self.config.recency_hours, 1.0)
        floor = self.config.min_recency_factor
        return base * (floor + (1 - floor) * decay)

    def rank(
        self,
        items: Sequence[ItemState],
        now_ms: float | None = None,
        window: int | None = None,
    ) -> list[RankedItem]:
        """
        Order items by descending priority.

        Args:
            items: Candidate items with their own event history
            now_ms: Current time (epoch ms)
            window: Only the last N events of each item count as recent

        Returns:
            RankedItems, most urgent first (stable for equal priorities)
        """
        if now_ms is None:
            now_ms = time.time() * 1000
        ranked = []
        for item in items:
            events = item.events
            if window is not None:
                events = events[-window:] if window > 0 else ()
            ranked.append(
                RankedItem(item, self.priority(item.score, events, item.last_reviewed_at_ms, now_ms))
            )
        ranked.sort(key=lambda r: r.priority, reverse=True)
        return ranked

    def weighted_shuffle(
        self,
        items: Sequence[ItemState],
        rng: random.Random | None = None,
    ) -> list[ItemState]:
        """
        Shuffle a new session's items, nudging harder items towards the front.

        Each item draws a random key stretched by up to 30% for the hardest
        items; sorting by key keeps the order mostly random.
        """
        rng = rng or random.Random()
        keyed = []
        for item in items:
            weight = clamp(item.score / MAX_SCORE, 0.0, 1.0)
            keyed.append((rng.random() * (1 + weight * self.config.shuffle_difficulty_weight), item))
        keyed.sort(key=lambda pair: pair[0], reverse=True)
        return [item for _, item in keyed]


def priority(
    score: float,
    recent_events_for_item: Sequence[ResponseEvent] = (),
    last_reviewed_at_ms: float | None = None,
    now_ms: float | None = None,
) -> float:
    return PriorityRanker().priority(score, recent_events_for_item, last_reviewed_at_ms, now_ms)
