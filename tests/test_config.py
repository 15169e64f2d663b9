"""Tests for settings loading and validation."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from bundle_risk_scanner.config import (
    FetchSettings,
    ScoringSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from bundle_risk_scanner.detector.scorer import DEFAULT_WEIGHTS


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Run each test without a .env file and with a fresh settings cache."""
    monkeypatch.chdir(tmp_path)
    for name in ("HELIUS_API_KEY", "LOG_LEVEL", "SCORING_TIMING_WINDOWS_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestDefaults:
    def test_settings_defaults(self) -> None:
        settings = Settings()
        assert settings.helius.api_key is None
        assert settings.fetch.launch_signature_limit == 25
        assert settings.fetch.recent_signature_limit == 50
        assert settings.fetch.max_signatures == 20
        assert settings.scoring.timing_windows_seconds == (30, 60, 300)
        assert settings.log_level == "INFO"

    def test_scoring_config_matches_engine_defaults(self) -> None:
        config = Settings().scoring.to_config()
        assert dict(config.weights) == dict(DEFAULT_WEIGHTS)
        assert config.timing_windows_ms == (30_000, 60_000, 300_000)
        assert config.suspicious_gap_ms == 300_000


class TestEnvironment:
    def test_reads_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HELIUS_API_KEY", "secret-key")
        settings = Settings()
        assert settings.helius.api_key is not None
        assert settings.helius.api_key.get_secret_value() == "secret-key"

    def test_reads_env_file(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("HELIUS_API_KEY=from-file\nLOG_LEVEL=DEBUG\n")
        settings = Settings()
        assert settings.helius.api_key is not None
        assert settings.helius.api_key.get_secret_value() == "from-file"
        assert settings.get_logging_level() == logging.DEBUG

    def test_parses_timing_windows(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCORING_TIMING_WINDOWS_SECONDS", "10, 20")
        scoring = ScoringSettings()
        assert scoring.timing_windows_seconds == (10, 20)
        assert scoring.to_config().timing_windows_ms == (10_000, 20_000)

    def test_rejects_non_positive_window(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCORING_TIMING_WINDOWS_SECONDS", "30,0")
        with pytest.raises(ValidationError):
            ScoringSettings()

    def test_rejects_weights_not_summing_to_one(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCORING_TIMING_WEIGHT", "0.9")
        with pytest.raises(ValidationError, match="sum to 1.0"):
            ScoringSettings()

    def test_rejects_out_of_range_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FETCH_MAX_SIGNATURES", "0")
        with pytest.raises(ValidationError):
            FetchSettings()


class TestRequirements:
    def test_requires_api_key(self) -> None:
        with pytest.raises(ValueError, match="Helius API key is required"):
            Settings().validate_requirements()

    def test_blank_api_key_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HELIUS_API_KEY", "")
        with pytest.raises(ValueError):
            Settings().validate_requirements()

    def test_passes_with_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HELIUS_API_KEY", "k")
        Settings().validate_requirements()


class TestRedactedSummary:
    def test_masks_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HELIUS_API_KEY", "super-secret")
        summary = Settings().redacted_summary()
        assert summary["helius"]["api_key"] == "(set)"  # type: ignore[index]
        assert "super-secret" not in str(summary)

    def test_reports_missing_key(self) -> None:
        summary = Settings().redacted_summary()
        assert summary["helius"]["api_key"] == "(not set)"  # type: ignore[index]

    def test_reports_fetch_limits(self) -> None:
        summary = Settings().redacted_summary()
        assert summary["fetch"] == {  # type: ignore[comparison-overlap]
            "launch_signature_limit": "25",
            "recent_signature_limit": "50",
            "max_signatures": "20",
        }


class TestGetSettings:
    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_clear_cache_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        assert get_settings() is first
        clear_settings_cache()
        reloaded = get_settings()
        assert reloaded is not first
        assert reloaded.log_level == "WARNING"
