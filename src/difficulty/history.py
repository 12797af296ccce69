"""
Recent-history window selection.

Whether "recent failures" and "recent response times" mean the whole study
session or only the item being scored is a caller decision, made explicit
through HistoryScope.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.difficulty.models import HistoryScope, ResponseEvent
from src.difficulty.numeric import positive_or_none


def select_recent_events(
    events: Sequence[ResponseEvent],
    scope: HistoryScope | str,
    item_id: str | None = None,
    window: int | None = None,
) -> tuple[ResponseEvent, ...]:
    """
    Pick the events that count as "recent" for a score update.

    Args:
        events: Ordered events (oldest first)
        scope: SESSION keeps every event, ITEM keeps only item_id's events
        item_id: Item being scored (required for ITEM scope)
        window: Keep only the last N selected events (None = all, <= 0 = none)

    Returns:
        Tuple of the selected events, oldest first
    """
    scope = HistoryScope(scope)
    if scope is HistoryScope.ITEM:
        selected = [event for event in events if event.item_id == item_id]
    else:
        selected = list(events)

    if window is not None:
        selected = selected[-window:] if window > 0 else []
    return tuple(selected)


def recent_response_times(events: Iterable[ResponseEvent]) -> list[float]:
    """Measured (positive) latencies of the given events."""
    times = []
    for event in events:
        value = positive_or_none(event.response_time_ms)
        if value is not None:
            times.append(value)
    return times
