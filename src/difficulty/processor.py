"""
Response Processor.

Turns one answer to one item into everything the caller has to store:
the ResponseEvent, the item's next state (score, streak, baseline latency,
review time) and a before/after summary for feedback displays.

Pure: takes snapshots in, returns new snapshots out. Persistence and quiz flow
stay with the caller.
"""

from __future__ import annotations

import random
import string
import time
from collections.abc import Sequence
from dataclasses import dataclass, replace

from loguru import logger

from src.difficulty.history import recent_response_times, select_recent_events
from src.difficulty.levels import score_to_level
from src.difficulty.models import HistoryScope, ItemState, ResponseEvent, ScoreDiagnostics
from src.difficulty.numeric import positive_or_none
from src.difficulty.response_time import ResponseTimeEstimator
from src.difficulty.score_updater import ScoreUpdater


@dataclass(frozen=True)
class ScoreChange:
    """Before/after view of one update."""

    previous_score: float
    new_score: float
    previous_level: int
    new_level: int

    @property
    def score_difference(self) -> float:
        return round(self.new_score - self.previous_score, 10)

    @property
    def level_difference(self) -> int:
        return self.new_level - self.previous_level


@dataclass(frozen=True)
class ProcessedResponse:
    event: ResponseEvent
    item: ItemState
    diagnostics: ScoreDiagnostics
    change: ScoreChange


class ResponseProcessor:
    """
    Scores responses and advances item snapshots.

    The recent-event window is drawn from the item's own history (ITEM scope)
    or from the current session (SESSION scope).
    """

    def __init__(
        self,
        updater: ScoreUpdater | None = None,
        estimator: ResponseTimeEstimator | None = None,
        scope: HistoryScope | str = HistoryScope.ITEM,
        window: int | None = None,
        baseline_seed_ms: float | None = None,
    ):
        """
        Initialize processor.

        Args:
            updater: ScoreUpdater to use
            estimator: ResponseTimeEstimator to use
            scope: Where recent events come from
            window: How many recent events count (None = all)
            baseline_seed_ms: Baseline latency assumed for items without one;
                None leaves the timing factor neutral until a baseline exists
        """
        self.updater = updater or ScoreUpdater()
        self.estimator = estimator or ResponseTimeEstimator()
        self.scope = HistoryScope(scope)
        self.window = window
        self.baseline_seed_ms = baseline_seed_ms

    @classmethod
    def from_settings(cls, settings=None, **kwargs) -> ResponseProcessor:
        """Build a processor from application settings."""
        from config import get_settings

        from src.difficulty.away import AwayConfig, AwayDetector
        from src.difficulty.response_time import EstimatorConfig

        settings = settings or get_settings()
        kwargs.setdefault(
            "updater",
            ScoreUpdater(away_detector=AwayDetector(AwayConfig(absolute_threshold_ms=settings.away_threshold_ms))),
        )
        kwargs.setdefault(
            "estimator",
            ResponseTimeEstimator(EstimatorConfig(away_threshold_ms=settings.away_threshold_ms)),
        )
        return cls(
            scope=settings.history_scope,
            window=settings.recent_event_window,
            baseline_seed_ms=settings.baseline_seed_ms,
            **kwargs,
        )

    def recent_events(
        self,
        item: ItemState,
        session_events: Sequence[ResponseEvent] = (),
    ) -> tuple[ResponseEvent, ...]:
        pool = item.events if self.scope is HistoryScope.ITEM else session_events
        return select_recent_events(pool, self.scope, item.item_id, self.window)

    def process(
        self,
        item: ItemState,
        is_correct: bool,
        response_time_ms: float | None = None,
        session_events: Sequence[ResponseEvent] = (),
        session_streak: int = 0,
        now_ms: float | None = None,
    ) -> ProcessedResponse:
        """
        Score one response.

        Args:
            item: Snapshot of the item answered
            is_correct: Whether the user knew it
            response_time_ms: Measured latency (None/0 = not measured)
            session_events: Events of the current session so far (oldest first)
            session_streak: Session-wide consecutive correct count before this answer
            now_ms: Current time (epoch ms), wall clock if None

        Returns:
            ProcessedResponse with the new event, item snapshot and diagnostics
        """
        if now_ms is None:
            now_ms = time.time() * 1000

        global_streak = session_streak if is_correct else 0
        item_streak = item.consecutive_correct if is_correct else 0
        average = positive_or_none(item.average_response_time_ms) or self.baseline_seed_ms

        result = self.updater.update(
            item.score,
            is_correct,
            consecutive_correct_global=global_streak,
            last_reviewed_at_ms=item.last_reviewed_at_ms,
            recent_events=self.recent_events(item, session_events),
            response_time_ms=response_time_ms,
            avg_response_time_ms=average,
            consecutive_correct_for_item=item_streak,
            now_ms=now_ms,
        )
        diagnostics = result.diagnostics

        measured = positive_or_none(response_time_ms)
        event = ResponseEvent(
            item_id=item.item_id,
            is_correct=bool(is_correct),
            timestamp_ms=now_ms,
            response_time_ms=measured or 0,
            previous_score=item.score,
            new_score=result.new_score,
            consecutive_correct_global=diagnostics.consecutive_correct_global + 1 if is_correct else 0,
            consecutive_correct_for_item=diagnostics.consecutive_correct_for_item + 1 if is_correct else 0,
        )

        new_average = item.average_response_time_ms
        if measured is not None:
            history = recent_response_times(item.events) + [measured]
            new_average = self.estimator.estimate(history, measured, item.average_response_time_ms)

        updated = replace(
            item,
            score=result.new_score,
            consecutive_correct=event.consecutive_correct_for_item,
            last_reviewed_at_ms=now_ms,
            average_response_time_ms=new_average,
            events=item.events + (event,),
        )

        change = ScoreChange(
            previous_score=item.score,
            new_score=result.new_score,
            previous_level=score_to_level(item.score),
            new_level=score_to_level(result.new_score),
        )
        logger.debug(
            f"{item.item_id}: {'correct' if is_correct else 'wrong'} "
            f"{change.previous_score:.1f} -> {change.new_score:.1f} "
            f"(level {change.previous_level} -> {change.new_level}, streak {event.consecutive_correct_for_item})"
        )
        return ProcessedResponse(event=event, item=updated, diagnostics=diagnostics, change=change)

    @staticmethod
    def rollback(item: ItemState, event: ResponseEvent) -> ItemState:
        """
        Undo the item's most recent response.

        The baseline latency is left as is.

        Raises:
            ValueError: If event is not the item's last event
        """
        if not item.events or item.events[-1] != event:
            raise ValueError(f"Event is not the last response recorded for item {item.item_id}")

        remaining = item.events[:-1]
        previous = remaining[-1] if remaining else None
        return replace(
            item,
            score=event.previous_score,
            consecutive_correct=previous.consecutive_correct_for_item if previous else 0,
            last_reviewed_at_ms=previous.timestamp_ms if previous else None,
            events=remaining,
        )


_SESSION_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_session_id(now_ms: float | None = None, rng: random.Random | None = None) -> str:
    """Return an id like 'study_1718000000000_k3j9x0a2b'."""
    if now_ms is None:
        now_ms = time.time() * 1000
    rng = rng or random.Random()
    suffix = "".join(rng.choice(_SESSION_ID_ALPHABET) for _ in range(9))
    return f"study_{int(now_ms)}_{suffix}"
