"""Botking - domain and artifact layer for the Botking game backend.

Typed bot composition (state, equipment, slots) and row-shaped artifacts,
with structured logging and pluggable monitoring sinks around them.

RULES THE MODEL ENFORCES:
- Worker bots never carry a soul chip
- Playable and King bots always have a player; Rogue and GovBot never do
- Energy, maintenance and bond saturate in [0, 100] instead of failing

Example:
    >>> from botking import BotType, create_basic_bot
    >>>
    >>> worker = create_basic_bot("Digger", owner_id="user_1")
    >>> result = worker.state.perform_work(intensity=1.0, duration=1)
    >>> result.success
    True
    >>>
    >>> king = create_basic_bot("Rex", owner_id="user_1", bot_type=BotType.KING,
    ...                         player_id="player_1")
    >>> king.calculate_combat_power() > worker.calculate_combat_power()
    True

Modules:
    core: Configuration, logging, monitoring sinks and exceptions.
    models: Pydantic V2 bot, equipment, slot and artifact models.
"""

from __future__ import annotations

# Core
from botking.core.config import Settings, get_settings
from botking.core.exceptions import BotkingError
from botking.core.logging import configure_logging, get_logger
from botking.core.monitoring import MonitoringHub

# Bot model
from botking.models.bot import (
    Bot,
    BotConfiguration,
    assemble_bot,
    create_basic_bot,
    create_combat_bot,
    create_utility_bot,
)
from botking.models.enums import BotType, Rarity, SkeletonType


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "BotkingError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "MonitoringHub",
    # Bot model
    "Bot",
    "BotConfiguration",
    "BotType",
    "Rarity",
    "SkeletonType",
    "assemble_bot",
    "create_basic_bot",
    "create_combat_bot",
    "create_utility_bot",
]
