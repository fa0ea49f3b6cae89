"""Configuration management for the Botking domain layer.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides. Gameplay thresholds that the bot models
consult (operational minimums, fatigue threshold, slot history size) live
here so they can be tuned per deployment.

Example:
    >>> from botking.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.gameplay.fatigue_intensity_threshold
    1.5

Environment Variables:
    BOTKING_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    BOTKING_JSON_LOGS: Emit JSON logs instead of console output
    BOTKING_GAMEPLAY_FATIGUE_INTENSITY_THRESHOLD: Work intensity that causes fatigue
    BOTKING_GAMEPLAY_SLOT_HISTORY_LIMIT: Maximum stored slot history entries
    BOTKING_MONITORING_RETRY_ATTEMPTS: Delivery attempts per monitoring sink
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from botking.core.exceptions import ConfigurationError


class GameplaySettings(BaseSettings):
    """Tunable thresholds used by bot state and slot models.

    Attributes:
        non_worker_min_maintenance: Maintenance a non-worker needs to operate.
        maintenance_warning_level: Below this a bot reports it needs maintenance.
        fatigue_intensity_threshold: Work intensity above which fatigue applies.
        combat_ready_min_power: Minimum combat power for combat readiness.
        slot_history_limit: Maximum slot assignment history entries kept.
        king_min_bond: Bond level below which a King state is flagged.
        rogue_max_bond: Bond level above which a Rogue state is flagged.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOTKING_GAMEPLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    non_worker_min_maintenance: float = Field(
        default=20.0,
        ge=0,
        le=100,
        description="Maintenance level a non-worker must exceed to operate",
    )
    maintenance_warning_level: float = Field(
        default=30.0,
        ge=0,
        le=100,
        description="Maintenance level below which maintenance is needed",
    )
    fatigue_intensity_threshold: float = Field(
        default=1.5,
        gt=0,
        description="Work intensity above which fatigue is applied",
    )
    combat_ready_min_power: float = Field(
        default=10.0,
        ge=0,
        description="Minimum combat power for a bot to be combat ready",
    )
    slot_history_limit: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Maximum slot assignment history entries",
    )
    king_min_bond: float = Field(
        default=80.0,
        ge=0,
        le=100,
        description="Expected minimum bond level for King bots",
    )
    rogue_max_bond: float = Field(
        default=20.0,
        ge=0,
        le=100,
        description="Expected maximum bond level for Rogue bots",
    )

    @model_validator(mode="after")
    def validate_maintenance_thresholds(self) -> "GameplaySettings":
        """Ensure the maintenance warning fires before a bot stops operating.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the warning level is below the operational minimum.
        """
        if self.maintenance_warning_level < self.non_worker_min_maintenance:
            raise ConfigurationError(
                f"maintenance_warning_level ({self.maintenance_warning_level}) must not be "
                f"below non_worker_min_maintenance ({self.non_worker_min_maintenance})",
                config_key="maintenance_warning_level",
            )
        return self


class MonitoringSettings(BaseSettings):
    """Configuration for monitoring sink delivery.

    Attributes:
        enabled: Forward log events to monitoring sinks.
        retry_attempts: Delivery attempts per sink before giving up.
        min_level: Lowest log level mirrored into monitoring sinks.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOTKING_MONITORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Forward events to sinks")
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Delivery attempts per sink",
    )
    min_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="warning",
        description="Lowest log level mirrored into sinks",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        gameplay: Gameplay threshold settings.
        monitoring: Monitoring sink settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOTKING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Botking", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    gameplay: GameplaySettings = Field(default_factory=GameplaySettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "GameplaySettings",
    "MonitoringSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
