"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("HISTORY_SCOPE", "RECENT_EVENT_WINDOW", "AWAY_THRESHOLD_MS", "BASELINE_SEED_MS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.history_scope == "item"
        assert settings.recent_event_window is None
        assert settings.away_threshold_ms == 30000
        assert settings.baseline_seed_ms is None
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("HISTORY_SCOPE", "session")
        monkeypatch.setenv("RECENT_EVENT_WINDOW", "5")

        settings = Settings(_env_file=None)

        assert settings.history_scope == "session"
        assert settings.recent_event_window == 5

    @pytest.mark.parametrize(
        "field,value",
        [("history_scope", "forever"), ("recent_event_window", 0), ("away_threshold_ms", -1)],
    )
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
