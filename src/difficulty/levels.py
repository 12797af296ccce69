"""
Score <-> display level mapping.

The continuous score (0.5-5.5) is projected onto five display levels. The
projection is lossy: every level maps back to a score that maps to the same
level, but not every score survives the reverse trip.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.difficulty.models import MAX_SCORE, MIN_SCORE
from src.difficulty.numeric import clamp, is_number, round_half_up

MIN_LEVEL = 1
MAX_LEVEL = 5


@dataclass(frozen=True)
class LevelInfo:
    level: int
    label: str
    color: str


LEVELS: dict[int, LevelInfo] = {
    1: LevelInfo(1, "Very Easy", "emerald"),
    2: LevelInfo(2, "Easy", "blue"),
    3: LevelInfo(3, "Medium", "amber"),
    4: LevelInfo(4, "Hard", "orange"),
    5: LevelInfo(5, "Very Hard", "red"),
}

UNRATED = LevelInfo(0, "Not Rated", "gray")


class ScoreLevelMapper:
    """Bidirectional mapping between CompetencyScore and DisplayLevel."""

    def __init__(self, min_score: float = MIN_SCORE, max_score: float = MAX_SCORE):
        self.min_score = min_score
        self.max_score = max_score

    @property
    def span(self) -> float:
        return self.max_score - self.min_score

    def score_to_level(self, score: float) -> int:
        """Project a score onto 1-5. NaN and non-numeric scores land on the middle level."""
        if isinstance(score, float) and math.isinf(score):
            return MAX_LEVEL if score > 0 else MIN_LEVEL
        if not is_number(score):
            return 3
        normalized = (score - self.min_score) / self.span
        level = int(round_half_up(normalized * (MAX_LEVEL - MIN_LEVEL))) + MIN_LEVEL
        return int(clamp(level, MIN_LEVEL, MAX_LEVEL))

    def level_to_score(self, level: int) -> float:
        """Map a level back to the score at the centre of its bucket."""
        level = clamp(level, MIN_LEVEL, MAX_LEVEL) if is_number(level) else 3
        normalized = (level - MIN_LEVEL) / (MAX_LEVEL - MIN_LEVEL)
        return self.min_score + normalized * self.span

    @staticmethod
    def info(level: int) -> LevelInfo:
        return LEVELS.get(level, UNRATED)

    def label(self, level: int) -> str:
        return self.info(level).label

    def color(self, level: int) -> str:
        return self.info(level).color


_default_mapper = ScoreLevelMapper()


def score_to_level(score: float) -> int:
    return _default_mapper.score_to_level(score)


def level_to_score(level: int) -> float:
    return _default_mapper.level_to_score(level)


def level_label(level: int) -> str:
    return _default_mapper.label(level)


def level_color(level: int) -> str:
    return _default_mapper.color(level)
