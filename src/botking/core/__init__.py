"""Core module providing configuration, logging, monitoring and exceptions.

Exports:
    Exceptions:
        BotkingError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.
        BotConstructionError: Bot-type rule violations at construction.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.

    Monitoring:
        MonitoringHub: Explicitly constructed fan-out to monitoring sinks.
        MonitoringSink: Protocol implemented by every sink.
"""

from __future__ import annotations

from botking.core.config import (
    GameplaySettings,
    MonitoringSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from botking.core.exceptions import (
    BotConstructionError,
    BotkingError,
    ConfigurationError,
    EquipmentError,
    PlayerAssignmentError,
    SoulChipNotAllowedError,
    UnknownBotTypeError,
    UnknownEquipmentTypeError,
    ValidationError,
)
from botking.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from botking.core.monitoring import (
    ConsoleSink,
    LogEntry,
    MemorySink,
    MonitoringEvent,
    MonitoringHub,
    MonitoringSink,
    PerformanceMetrics,
)


__all__ = [
    # Exceptions
    "BotkingError",
    "ConfigurationError",
    "ValidationError",
    "BotConstructionError",
    "SoulChipNotAllowedError",
    "PlayerAssignmentError",
    "UnknownBotTypeError",
    "EquipmentError",
    "UnknownEquipmentTypeError",
    # Configuration
    "Settings",
    "GameplaySettings",
    "MonitoringSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Monitoring
    "MonitoringHub",
    "MonitoringSink",
    "ConsoleSink",
    "MemorySink",
    "MonitoringEvent",
    "PerformanceMetrics",
    "LogEntry",
]
