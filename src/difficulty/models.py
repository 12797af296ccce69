"""
Data model for the difficulty engine.

Scores run from 0.5 (very easy / well known) to 5.5 (very hard / unknown).
The engine only transforms values handed to it; the caller's word store owns
persistence of scores, review timestamps and timing history.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum

MIN_SCORE = 0.5
MAX_SCORE = 5.5
SCORE_PRECISION = 0.1
DEFAULT_SCORE = 3.0

MS_PER_HOUR = 1000 * 60 * 60


class DifficultyBand(str, Enum):
    """Easy/medium/hard classification of the current score."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class HistoryScope(str, Enum):
    """
    Where the "recent events" window is drawn from.

    SESSION: every response in the current study session.
    ITEM: only the responses to the item being scored.
    """

    SESSION = "session"
    ITEM = "item"


@dataclass(frozen=True)
class ResponseEvent:
    """One scored response. Immutable; a session is an ordered tuple of these."""

    item_id: str
    is_correct: bool
    timestamp_ms: float
    response_time_ms: float  # 0 = not measured
    previous_score: float
    new_score: float
    consecutive_correct_global: int = 0
    consecutive_correct_for_item: int = 0

    @property
    def score_delta(self) -> float:
        return self.new_score - self.previous_score


@dataclass(frozen=True)
class ScoreDiagnostics:
    """
    Every intermediate factor of a score update.

    Fields that only apply to one branch (correct/incorrect) are None on the
    other branch.
    """

    band: DifficultyBand
    is_correct: bool
    current_score: float
    learning_rate: float
    hours_since_review: float
    time_factor: float
    timing_ratio: float | None
    is_away: bool
    timing_bonus: float
    timing_penalty: float
    streak_multiplier: float
    timing_factor: float
    consecutive_correct_global: int
    consecutive_correct_for_item: int
    word_bonus: float
    base_decrement: float | None = None
    mastery_bonus: float | None = None
    total_decrement: float | None = None
    base_increment: float | None = None
    recent_failures: int | None = None
    failure_penalty: float | None = None
    total_increment: float | None = None
    raw_score: float = 0.0
    new_score: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = asdict(self)
        data["band"] = self.band.value
        return data


@dataclass(frozen=True)
class ScoreUpdate:
    """Result of ScoreUpdater.update."""

    new_score: float
    diagnostics: ScoreDiagnostics


@dataclass(frozen=True)
class ItemState:
    """Caller-owned snapshot of a single learning item."""

    item_id: str
    score: float = DEFAULT_SCORE
    consecutive_correct: int = 0
    last_reviewed_at_ms: float | None = None
    average_response_time_ms: float | None = None
    events: tuple[ResponseEvent, ...] = field(default_factory=tuple)
