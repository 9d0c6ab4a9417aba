import pytest
from pydantic import ValidationError

from splitstats.config import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.LOG_LEVEL == "INFO"
        assert settings.REDIS_URL.startswith("redis://")
        assert settings.SIGNIFICANCE_LEVEL == 0.05

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "redis://cache.internal:6379/3")
        monkeypatch.setenv("SIGNIFICANCE_LEVEL", "0.01")

        settings = Settings()

        assert settings.REDIS_URL == "redis://cache.internal:6379/3"
        assert settings.SIGNIFICANCE_LEVEL == 0.01

    @pytest.mark.parametrize("level", [0, 1, 1.5, -0.1])
    def test_significance_level_bounds(self, level):
        with pytest.raises(ValidationError):
            Settings(SIGNIFICANCE_LEVEL=level)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_log_level_is_normalized(self):
        assert Settings(LOG_LEVEL="warning").LOG_LEVEL == "WARNING"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")
