"""Pydantic V2 domain models for the Botking game backend.

This package holds the bot composition model and the persisted artifacts.
Nothing here performs I/O; persistence collaborators map the ``to_json()``
projections to and from their rows.

Submodules:
    enums: Enumeration types (Rarity, BotType, SlotIdentifier, etc.)
    state: Status effect ledger and the Worker / NonWorker state variants
    equipment: Skeletons, soul chips, parts and expansion chips
    slots: Slot layouts and category-checked assignment
    bot: The Bot aggregate and bot factories
    artifacts: Inventory stacks, templates, assets, robots and accounts

Example:
    >>> from botking.models import BotType, create_basic_bot
    >>> bot = create_basic_bot("Rex", owner_id="user_1", bot_type=BotType.PLAYABLE,
    ...                        player_id="player_1")
    >>> bot.state.get_state_type()
    'non-worker'
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from botking.models.enums import (
    AssetKind,
    BotLocation,
    BotType,
    ExpansionChipEffect,
    ItemClass,
    MobilityType,
    PartCategory,
    Rarity,
    SkeletonType,
    SlotCategory,
    SlotIdentifier,
    StatusEffectType,
)

# =============================================================================
# State
# =============================================================================
from botking.models.state import (
    BattleStats,
    BotState,
    CombatReadiness,
    NonWorkerBotState,
    SocialStatus,
    StatusEffect,
    WorkerBotState,
    WorkResult,
    bot_state_from_json,
    create_bot_state,
    validate_state_for_bot_type,
)

# =============================================================================
# Equipment
# =============================================================================
from botking.models.equipment import (
    Ability,
    AIUpgradeChip,
    AttackBuffChip,
    BaseStats,
    CombatStats,
    DefenseBuffChip,
    Equipment,
    ExpansionChip,
    Part,
    PersonalityTraits,
    Skeleton,
    SoulChip,
    SpeedBuffChip,
    create_expansion_chip,
    create_part,
    create_skeleton,
)

# =============================================================================
# Slots
# =============================================================================
from botking.models.slots import (
    SlotAssignmentResult,
    SlotConfiguration,
    SlotInfo,
    SlotValidationResult,
    SlotVisual,
    VisualPosition,
)

# =============================================================================
# Bot
# =============================================================================
from botking.models.bot import (
    AssemblyResult,
    AssemblyValidation,
    Bot,
    BotConfiguration,
    assemble_bot,
    create_basic_bot,
    create_combat_bot,
    create_utility_bot,
)

# =============================================================================
# Artifacts
# =============================================================================
from botking.models.artifacts import (
    Account,
    Asset,
    InventoryStack,
    PlayerAccount,
    Robot,
    Template,
)


__all__ = [
    # Enumerations
    "AssetKind",
    "BotLocation",
    "BotType",
    "ExpansionChipEffect",
    "ItemClass",
    "MobilityType",
    "PartCategory",
    "Rarity",
    "SkeletonType",
    "SlotCategory",
    "SlotIdentifier",
    "StatusEffectType",
    # State
    "BattleStats",
    "BotState",
    "CombatReadiness",
    "NonWorkerBotState",
    "SocialStatus",
    "StatusEffect",
    "WorkerBotState",
    "WorkResult",
    "bot_state_from_json",
    "create_bot_state",
    "validate_state_for_bot_type",
    # Equipment
    "Ability",
    "AIUpgradeChip",
    "AttackBuffChip",
    "BaseStats",
    "CombatStats",
    "DefenseBuffChip",
    "Equipment",
    "ExpansionChip",
    "Part",
    "PersonalityTraits",
    "Skeleton",
    "SoulChip",
    "SpeedBuffChip",
    "create_expansion_chip",
    "create_part",
    "create_skeleton",
    # Slots
    "SlotAssignmentResult",
    "SlotConfiguration",
    "SlotInfo",
    "SlotValidationResult",
    "SlotVisual",
    "VisualPosition",
    # Bot
    "AssemblyResult",
    "AssemblyValidation",
    "Bot",
    "BotConfiguration",
    "assemble_bot",
    "create_basic_bot",
    "create_combat_bot",
    "create_utility_bot",
    # Artifacts
    "Account",
    "Asset",
    "InventoryStack",
    "PlayerAccount",
    "Robot",
    "Template",
]
