"""Custom exception hierarchy for the Botking domain layer.

This module defines the exception hierarchy used across the bot, equipment
and artifact models. All exceptions inherit from BotkingError, enabling
unified error handling at the service boundary while preserving the
domain-specific context of each failure.

Only construction-time rule violations are raised. Operational failures
(slot assignment, part removal, denied player assignment) are returned as
result objects and never reach this hierarchy.

Example:
    >>> from botking.core.exceptions import SoulChipNotAllowedError
    >>> raise SoulChipNotAllowedError(bot_type="worker")
"""

from __future__ import annotations

from typing import Any


class BotkingError(Exception):
    """Base exception for all Botking errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(BotkingError):
    """Raised when settings are missing, malformed or inconsistent."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(BotkingError):
    """Raised when a value violates a domain constraint."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = str(invalid_value)
        super().__init__(message, details=combined_details)


# =============================================================================
# Bot Domain Exceptions
# =============================================================================


class BotConstructionError(BotkingError):
    """Base exception for rule violations while building a bot."""

    def __init__(
        self,
        message: str,
        *,
        bot_type: str | None = None,
        rule: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize bot construction error.

        Args:
            message: Human-readable error description.
            bot_type: The bot type being constructed.
            rule: Short identifier of the violated rule.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if bot_type:
            combined_details["bot_type"] = str(bot_type)
        if rule:
            combined_details["rule"] = rule
        super().__init__(message, details=combined_details)


class SoulChipNotAllowedError(BotConstructionError):
    """Raised when a soul chip is supplied for a bot type that forbids one."""

    def __init__(
        self,
        message: str = "Worker bots cannot have soul chips - they operate with basic AI",
        *,
        bot_type: str | None = "worker",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, bot_type=bot_type, rule="soul_chip_forbidden", details=details)


class PlayerAssignmentError(BotConstructionError):
    """Raised when a bot's player assignment violates its type rules."""

    def __init__(
        self,
        message: str,
        *,
        bot_type: str | None = None,
        player_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if player_id:
            combined_details["player_id"] = player_id
        super().__init__(
            message,
            bot_type=bot_type,
            rule="player_assignment",
            details=combined_details,
        )


class UnknownBotTypeError(BotkingError):
    """Raised when a state or bot is requested for an unrecognised bot type."""

    def __init__(
        self,
        bot_type: Any,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown bot type error.

        Args:
            bot_type: The offending bot type value.
            details: Optional dictionary containing additional error context.
        """
        self.bot_type = bot_type
        super().__init__(f"Unknown bot type: {bot_type}", details=details)


# =============================================================================
# Equipment Exceptions
# =============================================================================


class EquipmentError(BotkingError):
    """Base exception for equipment catalog errors."""

    def __init__(
        self,
        message: str,
        *,
        item_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if item_id:
            combined_details["item_id"] = item_id
        super().__init__(message, details=combined_details)


class UnknownEquipmentTypeError(EquipmentError):
    """Raised when a factory is asked for an equipment type it cannot build."""


__all__ = [
    "BotkingError",
    "ConfigurationError",
    "ValidationError",
    "BotConstructionError",
    "SoulChipNotAllowedError",
    "PlayerAssignmentError",
    "UnknownBotTypeError",
    "EquipmentError",
    "UnknownEquipmentTypeError",
]
