"""
Logging and diagnostics hooks.

Score updates never write to stdout. Each update emits a DEBUG record through
loguru and, if the caller injected one, hands the diagnostics record to a hook.
The package disables its loguru records on import; configure_logging turns them on.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

from loguru import logger

from src.difficulty.models import ScoreDiagnostics

DiagnosticsHook = Callable[[ScoreDiagnostics], None]


def log_diagnostics(diagnostics: ScoreDiagnostics) -> None:
    """Emit a compact DEBUG line for one score update."""
    if diagnostics.is_correct:
        detail = (
            f"base={diagnostics.base_decrement:.2f} mastery={diagnostics.mastery_bonus:.2f} "
            f"word_bonus={diagnostics.word_bonus:.2f} total=-{diagnostics.total_decrement:.3f}"
        )
    else:
        detail = (
            f"base={diagnostics.base_increment:.2f} failures={diagnostics.recent_failures} "
            f"failure_penalty={diagnostics.failure_penalty:.2f} total=+{diagnostics.total_increment:.3f}"
        )
    logger.bind(**diagnostics.to_dict()).debug(
        f"[{diagnostics.band.value}] {diagnostics.current_score:.2f} -> {diagnostics.new_score:.1f} "
        f"lr={diagnostics.learning_rate:.2f} time={diagnostics.time_factor:.2f} "
        f"timing={diagnostics.timing_factor:.3f} {detail}"
    )


def configure_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Replace loguru's default handler with the configured sinks.

    Args:
        level: Log level; defaults to the settings value
        log_file: Optional file sink; defaults to the settings value
    """
    from config import get_settings

    settings = get_settings()
    level = level or settings.log_level
    log_file = log_file or settings.log_file

    logger.enable("src.difficulty")
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if log_file:
        logger.add(log_file, level=level, rotation="10 MB", retention=3)
