"""
Difficulty Engine for vocabulary study.

Provides pure scoring and scheduling primitives for a quiz flow:
- Adaptive score updates (ScoreUpdater)
- Outlier-resistant latency baselines (ResponseTimeEstimator)
- Away-from-keyboard detection (AwayDetector)
- Score <-> 1-5 display level mapping (ScoreLevelMapper)
- Session statistics (SessionStatsAggregator)
- Review priority (PriorityRanker)
"""

from loguru import logger

from src.difficulty.away import AwayConfig, AwayDetector, is_away
from src.difficulty.history import recent_response_times, select_recent_events
from src.difficulty.levels import (
    LevelInfo,
    ScoreLevelMapper,
    level_color,
    level_label,
    level_to_score,
    score_to_level,
)
from src.difficulty.models import (
    DifficultyBand,
    HistoryScope,
    ItemState,
    ResponseEvent,
    ScoreDiagnostics,
    ScoreUpdate,
)
from src.difficulty.priority import PriorityConfig, PriorityRanker, RankedItem, priority
from src.difficulty.processor import (
    ProcessedResponse,
    ResponseProcessor,
    ScoreChange,
    generate_session_id,
)
from src.difficulty.response_time import EstimatorConfig, ResponseTimeEstimator, estimate
from src.difficulty.score_updater import ScoreUpdater, ScoringParams, update
from src.difficulty.session_stats import SessionStats, SessionStatsAggregator, aggregate

# Silent until the application calls configure_logging
logger.disable("src.difficulty")

__all__ = [
    # Models
    "DifficultyBand",
    "HistoryScope",
    "ItemState",
    "ResponseEvent",
    "ScoreDiagnostics",
    "ScoreUpdate",
    # Scoring
    "ScoreUpdater",
    "ScoringParams",
    "update",
    # Timing
    "AwayConfig",
    "AwayDetector",
    "is_away",
    "EstimatorConfig",
    "ResponseTimeEstimator",
    "estimate",
    # Levels
    "LevelInfo",
    "ScoreLevelMapper",
    "score_to_level",
    "level_to_score",
    "level_label",
    "level_color",
    # Stats & scheduling
    "SessionStats",
    "SessionStatsAggregator",
    "aggregate",
    "PriorityConfig",
    "PriorityRanker",
    "RankedItem",
    "priority",
    # History & processing
    "select_recent_events",
    "recent_response_times",
    "ProcessedResponse",
    "ResponseProcessor",
    "ScoreChange",
    "generate_session_id",
]
