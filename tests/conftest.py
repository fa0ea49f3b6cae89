"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Botking test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from botking.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "BOTKING_DEBUG": "true",
        "BOTKING_LOG_LEVEL": "DEBUG",
        "BOTKING_GAMEPLAY_SLOT_HISTORY_LIMIT": "5",
        "BOTKING_MONITORING_RETRY_ATTEMPTS": "2",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Equipment Fixtures
# =============================================================================


@pytest.fixture
def balanced_skeleton() -> Any:
    """Create a common balanced skeleton.

    Returns:
        Skeleton instance.
    """
    from botking.models.enums import SkeletonType
    from botking.models.equipment import create_skeleton

    return create_skeleton(SkeletonType.BALANCED, skeleton_id="skeleton_test")


@pytest.fixture
def soul_chip() -> Any:
    """Create a common soul chip.

    Returns:
        SoulChip instance.
    """
    from botking.models.equipment import SoulChip

    return SoulChip(id="soul_test", name="Test Core")


@pytest.fixture
def arm_part() -> Any:
    """Create a common arm part.

    Returns:
        Part instance.
    """
    from botking.models.enums import PartCategory
    from botking.models.equipment import CombatStats, create_part

    return create_part(
        PartCategory.ARM,
        name="Test Arm",
        stats=CombatStats(attack=10, defense=5, speed=5),
        part_id="arm_1",
    )


@pytest.fixture
def attack_chip() -> Any:
    """Create a common attack buff chip.

    Returns:
        AttackBuffChip instance.
    """
    from botking.models.enums import ExpansionChipEffect
    from botking.models.equipment import create_expansion_chip

    return create_expansion_chip(ExpansionChipEffect.ATTACK_BUFF, name="Striker", chip_id="chip_1")


# =============================================================================
# Bot Fixtures
# =============================================================================


@pytest.fixture
def worker_bot() -> Any:
    """Create a basic worker bot.

    Returns:
        Bot instance.
    """
    from botking.models.bot import create_basic_bot

    return create_basic_bot("Digger", owner_id="user_1")


@pytest.fixture
def playable_bot() -> Any:
    """Create a basic playable bot assigned to a player.

    Returns:
        Bot instance.
    """
    from botking.models.bot import create_basic_bot
    from botking.models.enums import BotType

    return create_basic_bot(
        "Rex",
        owner_id="user_1",
        bot_type=BotType.PLAYABLE,
        player_id="player_1",
    )
