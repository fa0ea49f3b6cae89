"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestBotkingError:
    """Tests for the base BotkingError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = BotkingError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = BotkingError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(BotkingError("Test", details={"x": 1}))
        assert "BotkingError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestConfigurationAndValidation:
    """Tests for configuration and validation exceptions."""

    def test_configuration_error_with_key(self) -> None:
        """Test ConfigurationError records the offending key."""
        exc = ConfigurationError("Bad value", config_key="slot_history_limit")
        assert exc.details["config_key"] == "slot_history_limit"

    def test_validation_error_with_field(self) -> None:
        """Test ValidationError records field and value."""
        exc = ValidationError("Negative", field_name="quantity", invalid_value=-5)
        assert exc.details["field_name"] == "quantity"
        assert exc.details["invalid_value"] == "-5"


class TestBotConstructionExceptions:
    """Tests for bot construction exceptions."""

    def test_soul_chip_default_message(self) -> None:
        """Test the worker soul chip message and rule."""
        exc = SoulChipNotAllowedError()
        assert "cannot have soul chips" in exc.message
        assert exc.details["bot_type"] == "worker"
        assert exc.details["rule"] == "soul_chip_forbidden"

    def test_player_assignment_error(self) -> None:
        """Test PlayerAssignmentError carries bot type and player."""
        exc = PlayerAssignmentError("Not allowed", bot_type="rogue", player_id="player_1")
        assert exc.details["player_id"] == "player_1"
        assert exc.details["rule"] == "player_assignment"

    def test_inheritance(self) -> None:
        """Test exception inheritance chain."""
        exc = PlayerAssignmentError("Error")
        assert isinstance(exc, BotConstructionError)
        assert isinstance(exc, BotkingError)
        assert isinstance(SoulChipNotAllowedError(), BotConstructionError)

    def test_unknown_bot_type_names_value(self) -> None:
        """Test UnknownBotTypeError names the offending value."""
        exc = UnknownBotTypeError("dragon")
        assert exc.bot_type == "dragon"
        assert str(exc) == "Unknown bot type: dragon"


class TestEquipmentExceptions:
    """Tests for equipment exceptions."""

    def test_item_id_detail(self) -> None:
        """Test EquipmentError records the item id."""
        exc = EquipmentError("Broken", item_id="part_1")
        assert exc.details["item_id"] == "part_1"

    def test_catch_as_base(self) -> None:
        """Test catching with the base class."""
        with pytest.raises(BotkingError):
            raise UnknownEquipmentTypeError("Unknown part category: wing")
