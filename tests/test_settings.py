"""
==============================================================================
Settings Tests
==============================================================================

Tests for configuration loading and validation.

==============================================================================
"""

import pytest
from pydantic import ValidationError

from product_catalog.config.settings import Settings, parse_duration


class TestParseDuration:
    """Tests for latency duration parsing."""

    @pytest.mark.parametrize("value, expected", [
        (0, 0.0),
        (1.5, 1.5),
        ("", 0.0),
        ("2", 2.0),
        ("0.25", 0.25),
        ("5.5s", 5.5),
        ("250ms", 0.25),
        ("100us", 0.0001),
        ("1m", 60.0),
        ("1m30s", 90.0),
        ("1h", 3600.0),
    ])
    def test_valid_durations(self, value, expected):
        assert parse_duration(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["fast", "5x", "s", "1.5.s", "-1", "-2s", "nan", "inf"])
    def test_invalid_durations(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self):
        settings = Settings()

        assert settings.extra_latency == 0.0
        assert settings.reload_catalog is False
        assert settings.feed_source == "file"

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("EXTRA_LATENCY", "5.5s")
        monkeypatch.setenv("RELOAD_CATALOG", "true")
        monkeypatch.setenv("FEED_SOURCE", "Content_API")

        settings = Settings()

        assert settings.extra_latency == pytest.approx(5.5)
        assert settings.reload_catalog is True
        assert settings.feed_source == "content_api"

    def test_invalid_latency_rejected(self):
        with pytest.raises(ValidationError):
            Settings(extra_latency="soon")

    def test_unknown_feed_source_rejected(self):
        with pytest.raises(ValidationError):
            Settings(feed_source="ftp")

    def test_unknown_environment_defaults_to_development(self):
        assert Settings(app_env="qa").app_env == "development"

    def test_cors_origins_list(self):
        assert Settings(cors_origins='["http://localhost:8080"]').cors_origins_list == [
            "http://localhost:8080"
        ]
        assert Settings(cors_origins="not json").cors_origins_list == ["*"]
