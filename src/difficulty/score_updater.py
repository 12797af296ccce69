"""
Score Updater - Adaptive Difficulty Adjustment.

Evolves an item's CompetencyScore after each response:
1. Difficulty band (easy/medium/hard) sets base magnitude and learning rate
2. Recency factor amplifies changes for items not reviewed in a while
3. Timing factor rewards fast correct answers and penalises slow wrong ones,
   ignoring time the user spent away from the page
4. Global streak boosts the timing bonus, per-item streak multiplies the reward
5. Recent failures inflate the penalty for wrong answers

Lower scores mean better known. Results are clamped to [0.5, 5.5] and rounded
to 0.1 no matter how pathological the inputs are.
"""

from __future__ import annotations

import math
import time
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from src.difficulty.away import AwayConfig, AwayDetector
from src.difficulty.history import recent_response_times
from src.difficulty.models import (
    DEFAULT_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    MS_PER_HOUR,
    SCORE_PRECISION,
    DifficultyBand,
    ResponseEvent,
    ScoreDiagnostics,
    ScoreUpdate,
)
from src.difficulty.numeric import clamp, is_number, positive_or_none, round_half_up, sanitize_count
from src.difficulty.observability import DiagnosticsHook, log_diagnostics


@dataclass
class ScoringParams:
    """Algorithm constants."""

    min_score: float = MIN_SCORE
    max_score: float = MAX_SCORE
    score_precision: float = SCORE_PRECISION

    easy_threshold: float = 2.0
    hard_threshold: float = 4.0

    # Correct answer rewards
    easy_correct_decrement: float = 0.8
    medium_correct_decrement: float = 0.6
    hard_correct_decrement: float = 0.4

    # Incorrect answer penalties
    easy_incorrect_increment: float = 1.2
    medium_incorrect_increment: float = 0.8
    hard_incorrect_increment: float = 0.4

    # Difficulty-based learning rates
    learning_rate_easy: float = 1.2
    learning_rate_medium: float = 1.0
    learning_rate_hard: float = 0.8

    # Spacing
    time_decay_hours: float = 24.0
    time_decay_factor: float = 0.3

    # Mastery
    mastery_threshold: float = 1.0
    mastery_bonus: float = 0.2

    # Streaks
    global_streak_step: float = 0.05
    word_streak_base: float = 1.8
    word_streak_max: float = 5.0

    # Recent failures
    failure_step: float = 0.2
    failure_max: float = 1.0


class ScoreUpdater:
    """
    Computes the next CompetencyScore for an item and explains how.

    Stateless: every call depends only on its arguments, so one instance can
    score any number of items concurrently.
    """

    def __init__(
        self,
        params: ScoringParams | None = None,
        away_detector: AwayDetector | None = None,
        diagnostics_hook: DiagnosticsHook | None = None,
    ):
        """
        Initialize updater.

        Args:
            params: Algorithm constants, defaults if None
            away_detector: Detector used inside the timing factor
            diagnostics_hook: Called with every ScoreDiagnostics produced
        """
        self.params = params or ScoringParams()
        self.away_detector = away_detector or AwayDetector(AwayConfig())
        self.diagnostics_hook = diagnostics_hook

    # =========================================================================
    # Factors
    # =========================================================================

    def band_for(self, score: float) -> DifficultyBand:
        if score <= self.params.easy_threshold:
            return DifficultyBand.EASY
        if score >= self.params.hard_threshold:
            return DifficultyBand.HARD
        return DifficultyBand.MEDIUM

    def learning_rate(self, band: DifficultyBand) -> float:
        return {
            DifficultyBand.EASY: self.params.learning_rate_easy,
            DifficultyBand.MEDIUM: self.params.learning_rate_medium,
            DifficultyBand.HARD: self.params.learning_rate_hard,
        }[band]

    def hours_since(self, last_reviewed_at_ms: float | None, now_ms: float) -> float:
        """Hours since last review; 0 for missing or future timestamps."""
        if not is_number(last_reviewed_at_ms) or not last_reviewed_at_ms:
            return 0.0
        return max(0.0, (now_ms - last_reviewed_at_ms) / MS_PER_HOUR)

    def time_factor(self, last_reviewed_at_ms: float | None, now_ms: float) -> tuple[float, float]:
        """Return (time_factor, hours_since_review)."""
        if not is_number(last_reviewed_at_ms) or not last_reviewed_at_ms:
            return 1.0, 0.0
        hours = self.hours_since(last_reviewed_at_ms, now_ms)
        decay = min(hours / self.params.time_decay_hours, 1.0)
        return 1.0 + self.params.time_decay_factor * decay, hours

    @staticmethod
    def correct_timing_bonus(ratio: float, away: bool) -> tuple[float, float]:
        """Return (bonus, penalty) for a correct answer at this speed ratio."""
        if ratio < 0.5:
            return 0.5 + (0.5 - ratio) * 0.8, 0.0
        if ratio < 0.7:
            return 0.3 + (0.7 - ratio) * 0.5, 0.0
        if ratio < 0.9:
            return 0.15 + (0.9 - ratio) * 0.75, 0.0
        if ratio < 1.1:
            return 0.05, 0.0
        if ratio < 1.5 or away:
            return 0.0, 0.0
        return 0.0, min((ratio - 1.5) * 0.2, 0.3)

    @staticmethod
    def incorrect_timing_penalty(ratio: float, away: bool) -> float:
        """Penalty for a wrong answer at this speed ratio."""
        if ratio < 0.5:
            penalty = 0.1
        elif ratio < 0.8:
            penalty = 0.15
        elif ratio < 1.2:
            penalty = 0.2
        elif ratio < 2.0:
            penalty = 0.25 + (ratio - 1.2) * 0.1
        elif not away:
            penalty = 0.4
        else:
            penalty = 0.0
        if away:
            penalty *= 0.5
        return penalty

    def word_bonus(self, consecutive_correct_for_item: int) -> float:
        # base ** n passes the cap after a handful of steps, so n is bounded to avoid overflow
        exponent = min(consecutive_correct_for_item, 64)
        return min(self.params.word_streak_base**exponent, self.params.word_streak_max)

    def base_decrement(self, band: DifficultyBand) -> float:
        return {
            DifficultyBand.EASY: self.params.easy_correct_decrement,
            DifficultyBand.MEDIUM: self.params.medium_correct_decrement,
            DifficultyBand.HARD: self.params.hard_correct_decrement,
        }[band]

    def base_increment(self, band: DifficultyBand) -> float:
        return {
            DifficultyBand.EASY: self.params.easy_incorrect_increment,
            DifficultyBand.MEDIUM: self.params.medium_incorrect_increment,
            DifficultyBand.HARD: self.params.hard_incorrect_increment,
        }[band]

    def finalize(self, raw_score: float, fallback: float) -> float:
        """Clamp to the score range and round to the score precision."""
        if math.isnan(raw_score):
            logger.warning(f"Score update produced NaN, keeping {fallback}")
            raw_score = fallback
        clamped = clamp(raw_score, self.params.min_score, self.params.max_score)
        steps = round_half_up(clamped / self.params.score_precision)
        return round(steps * self.params.score_precision, 10)

    # =========================================================================
    # Update
    # =========================================================================

    def update(
        self,
        current_score: float,
        is_correct: bool,
        consecutive_correct_global: int = 0,
        last_reviewed_at_ms: float | None = None,
        recent_events: Sequence[ResponseEvent] = (),
        response_time_ms: float | None = None,
        avg_response_time_ms: float | None = None,
        consecutive_correct_for_item: int = 0,
        now_ms: float | None = None,
    ) -> ScoreUpdate:
        """
        Compute the next score for one response.

        Args:
            current_score: Score before this response (0.5-5.5)
            is_correct: Whether the user knew the item
            consecutive_correct_global: Session-wide streak before this response
            last_reviewed_at_ms: When the item was last reviewed (epoch ms)
            recent_events: Recent events in the caller's chosen scope
            response_time_ms: Latency of this response
            avg_response_time_ms: Baseline latency for the timing context
            consecutive_correct_for_item: Streak on this same item before this response
            now_ms: Current time (epoch ms), wall clock if None

        Returns:
            ScoreUpdate with the new score and a full diagnostics record
        """
        if now_ms is None:
            now_ms = time.time() * 1000

        if is_number(current_score):
            score = float(current_score)
        elif isinstance(current_score, float) and math.isinf(current_score):
            score = clamp(current_score, self.params.min_score, self.params.max_score)
        else:
            logger.warning(f"Non-numeric score {current_score!r}, using default {DEFAULT_SCORE}")
            score = DEFAULT_SCORE

        streak = sanitize_count(consecutive_correct_global)
        item_streak = sanitize_count(consecutive_correct_for_item)
        if streak != consecutive_correct_global or item_streak != consecutive_correct_for_item:
            logger.warning(
                f"Sanitized streak counts: global={consecutive_correct_global!r}->{streak}, "
                f"item={consecutive_correct_for_item!r}->{item_streak}"
            )

        band = self.band_for(score)
        learning_rate = self.learning_rate(band)
        time_factor, hours = self.time_factor(last_reviewed_at_ms, now_ms)

        # Timing
        ratio = None
        away = False
        bonus = 0.0
        penalty = 0.0
        streak_multiplier = 1.0
        response = positive_or_none(response_time_ms)
        average = positive_or_none(avg_response_time_ms)
        if response is not None and average is not None:
            ratio = response / average
            away = self.away_detector.is_away(response, average, recent_response_times(recent_events))

            if is_correct:
                bonus, penalty = self.correct_timing_bonus(ratio, away)
            else:
                penalty = self.incorrect_timing_penalty(ratio, away)

            if band is DifficultyBand.EASY and is_correct and ratio > 1.2:
                bonus *= 0.7
            elif band is DifficultyBand.HARD and is_correct and ratio < 0.8:
                bonus *= 1.2

            if is_correct and streak > 0:
                streak_multiplier = 1 + streak * self.params.global_streak_step
                bonus *= streak_multiplier

        timing_factor = 1.0 + bonus - penalty
        word_bonus = self.word_bonus(item_streak) if is_correct else 1.0

        branch: dict = {}
        if is_correct:
            base = self.base_decrement(band)
            mastery = self.params.mastery_bonus if score <= self.params.mastery_threshold else 0.0
            total = (base + mastery) * learning_rate * time_factor * timing_factor * word_bonus
            raw_score = score - total
            branch.update(base_decrement=base, mastery_bonus=mastery, total_decrement=total)
        else:
            base = self.base_increment(band)
            failures = sum(1 for event in recent_events if not event.is_correct)
            failure_penalty = min(failures * self.params.failure_step, self.params.failure_max)
            total = base * (1 + failure_penalty) * learning_rate * time_factor * timing_factor
            raw_score = score + total
            branch.update(
                base_increment=base,
                recent_failures=failures,
                failure_penalty=failure_penalty,
                total_increment=total,
            )

        new_score = self.finalize(raw_score, fallback=score)

        diagnostics = ScoreDiagnostics(
            band=band,
            is_correct=bool(is_correct),
            current_score=score,
            learning_rate=learning_rate,
            hours_since_review=hours,
            time_factor=time_factor,
            timing_ratio=ratio,
            is_away=away,
            timing_bonus=bonus,
            timing_penalty=penalty,
            streak_multiplier=streak_multiplier,
            timing_factor=timing_factor,
            consecutive_correct_global=streak,
            consecutive_correct_for_item=item_streak,
            word_bonus=word_bonus,
            raw_score=raw_score,
            new_score=new_score,
            **branch,
        )

        log_diagnostics(diagnostics)
        if self.diagnostics_hook is not None:
            self.diagnostics_hook(diagnostics)

        return ScoreUpdate(new_score=new_score, diagnostics=diagnostics)


def update(
    current_score: float,
    is_correct: bool,
    consecutive_correct_global: int = 0,
    last_reviewed_at_ms: float | None = None,
    recent_events: Sequence[ResponseEvent] = (),
    response_time_ms: float | None = None,
    avg_response_time_ms: float | None = None,
    consecutive_correct_for_item: int = 0,
    now_ms: float | None = None,
) -> ScoreUpdate:
    """Module-level shortcut using default parameters."""
    return ScoreUpdater().update(
        current_score,
        is_correct,
        consecutive_correct_global=consecutive_correct_global,
        last_reviewed_at_ms=last_reviewed_at_ms,
        recent_events=recent_events,
        response_time_ms=response_time_ms,
        avg_response_time_ms=avg_response_time_ms,
        consecutive_correct_for_item=consecutive_correct_for_item,
        now_ms=now_ms,
    )
