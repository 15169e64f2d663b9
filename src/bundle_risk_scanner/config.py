"""Configuration management service with Pydantic Settings.

This module provides centralized configuration management for the
bundle risk scanner, loading and validating environment variables at
startup. Settings are passed explicitly into the pipeline rather than
read from ambient state.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from bundle_risk_scanner.detector.scorer import DEFAULT_WEIGHTS, ScoringConfig

_ENV_FILE = ".env"
_ENV_FILE_ENCODING = "utf-8"


class HeliusSettings(BaseSettings):
    """Transfer data provider (Helius) settings."""

    model_config = SettingsConfigDict(env_prefix="HELIUS_", extra="ignore")

    api_key: SecretStr | None = Field(
        default=None,
        alias="HELIUS_API_KEY",
        description="Provider credential used by the transfer source",
    )


class FetchSettings(BaseSettings):
    """Transfer retrieval policy settings.

    These only shape how much history a transfer source requests; they
    never change how transfers are scored.
    """

    model_config = SettingsConfigDict(env_prefix="FETCH_", extra="ignore")

    launch_signature_limit: int = Field(
        default=25,
        alias="FETCH_LAUNCH_SIGNATURE_LIMIT",
        ge=1,
        le=1000,
        description="Signatures to request for the launch period",
    )
    recent_signature_limit: int = Field(
        default=50,
        alias="FETCH_RECENT_SIGNATURE_LIMIT",
        ge=1,
        le=1000,
        description="Signatures to request for the recent period",
    )
    max_signatures: int = Field(
        default=20,
        alias="FETCH_MAX_SIGNATURES",
        ge=1,
        le=1000,
        description="Maximum signatures expanded into enhanced transactions",
    )


class ScoringSettings(BaseSettings):
    """Scoring engine weights and windows."""

    model_config = SettingsConfigDict(env_prefix="SCORING_", extra="ignore")

    timing_weight: float = Field(
        default=DEFAULT_WEIGHTS["timing_cluster"],
        alias="SCORING_TIMING_WEIGHT",
        ge=0.0,
        le=1.0,
    )
    wallet_weight: float = Field(
        default=DEFAULT_WEIGHTS["wallet_similarity"],
        alias="SCORING_WALLET_WEIGHT",
        ge=0.0,
        le=1.0,
    )
    size_weight: float = Field(
        default=DEFAULT_WEIGHTS["size_patterns"],
        alias="SCORING_SIZE_WEIGHT",
        ge=0.0,
        le=1.0,
    )
    distribution_weight: float = Field(
        default=DEFAULT_WEIGHTS["distribution"],
        alias="SCORING_DISTRIBUTION_WEIGHT",
        ge=0.0,
        le=1.0,
    )
    timing_windows_seconds: Annotated[tuple[int, ...], NoDecode] = Field(
        default=(30, 60, 300),
        alias="SCORING_TIMING_WINDOWS_SECONDS",
        description="Comma-separated cluster gap windows, in seconds",
    )
    suspicious_gap_ms: int = Field(
        default=300_000,
        alias="SCORING_SUSPICIOUS_GAP_MS",
        ge=1,
        le=86_400_000,
        description="Repeat-receive gap below which a wallet counts as suspicious",
    )

    @field_validator("timing_windows_seconds", mode="before")
    @classmethod
    def _parse_windows(cls, v: object) -> tuple[int, ...]:
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            v = tuple(int(p) for p in parts)
        if isinstance(v, (list, tuple)):
            windows = tuple(int(w) for w in v)
            if not windows:
                raise ValueError("SCORING_TIMING_WINDOWS_SECONDS must not be empty")
            if any(w <= 0 for w in windows):
                raise ValueError("SCORING_TIMING_WINDOWS_SECONDS must be positive")
            return windows
        raise TypeError("Invalid SCORING_TIMING_WINDOWS_SECONDS type")

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> ScoringSettings:
        total = self.timing_weight + self.wallet_weight + self.size_weight + self.distribution_weight
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Scoring weights must sum to 1.0 (got {total:.4f})")
        return self

    def to_config(self) -> ScoringConfig:
        """Build the immutable engine configuration."""
        return ScoringConfig(
            weights={
                "timing_cluster": self.timing_weight,
                "wallet_similarity": self.wallet_weight,
                "size_patterns": self.size_weight,
                "distribution": self.distribution_weight,
            },
            timing_windows_ms=tuple(w * 1000 for w in self.timing_windows_seconds),
            suspicious_gap_ms=self.suspicious_gap_ms,
        )


class Settings(BaseSettings):
    """Main application settings.

    Loads configuration from environment variables with support for
    .env files via python-dotenv.

    Example:
        ```python
        from bundle_risk_scanner.config import get_settings

        settings = get_settings()
        print(settings.fetch.recent_signature_limit)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding=_ENV_FILE_ENCODING,
        extra="ignore",
    )

    # NOTE: Each nested BaseSettings must be given the same env_file, otherwise it
    # will only read from the process environment (and ignore `.env`).
    helius: HeliusSettings = Field(
        default_factory=lambda: HeliusSettings(
            _env_file=_ENV_FILE,
            _env_file_encoding=_ENV_FILE_ENCODING,
        )
    )
    fetch: FetchSettings = Field(
        default_factory=lambda: FetchSettings(
            _env_file=_ENV_FILE,
            _env_file_encoding=_ENV_FILE_ENCODING,
        )
    )
    scoring: ScoringSettings = Field(
        default_factory=lambda: ScoringSettings(
            _env_file=_ENV_FILE,
            _env_file_encoding=_ENV_FILE_ENCODING,
        )
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    def get_logging_level(self) -> int:
        """Get the numeric logging level."""
        level: int = getattr(logging, self.log_level)
        return level

    def redacted_summary(self) -> dict[str, str | dict[str, str]]:
        """Get a summary of settings with secrets redacted.

        Returns:
            Dictionary of settings with sensitive values masked.
        """
        return {
            "helius": {
                "api_key": "(set)" if self.helius.api_key else "(not set)",
            },
            "fetch": {
                "launch_signature_limit": str(self.fetch.launch_signature_limit),
                "recent_signature_limit": str(self.fetch.recent_signature_limit),
                "max_signatures": str(self.fetch.max_signatures),
            },
            "scoring": {
                "weights": ",".join(
                    str(w)
                    for w in (
                        self.scoring.timing_weight,
                        self.scoring.wallet_weight,
                        self.scoring.size_weight,
                        self.scoring.distribution_weight,
                    )
                ),
                "timing_windows_seconds": ",".join(str(w) for w in self.scoring.timing_windows_seconds),
            },
            "log_level": self.log_level,
        }

    def validate_requirements(self) -> None:
        """Refuse to run token analysis without a provider credential."""
        if self.helius.api_key is None or not self.helius.api_key.get_secret_value():
            raise ValueError("Helius API key is required. Please configure it in Settings.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Uses LRU cache to ensure settings are loaded only once and
    reused across the application.

    Returns:
        The Settings instance.

    Raises:
        ValidationError: If environment variables have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
