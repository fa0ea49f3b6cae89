"""Enumeration types for the Botking domain layer.

This module defines all enumeration types used by the bot, equipment, slot
and artifact models. Rarity is ordered; use ``Rarity.index`` or the
comparison operators rather than comparing the string values.
"""

from __future__ import annotations

from enum import StrEnum


class Rarity(StrEnum):
    """Equipment rarity, ordered from most to least common."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    ULTRA_RARE = "ultra_rare"
    PROTOTYPE = "prototype"

    @property
    def index(self) -> int:
        """Position of this rarity in the Common..Prototype ordering."""
        return list(Rarity).index(self)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Rarity):
            return self.index < other.index
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, Rarity):
            return self.index <= other.index
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, Rarity):
            return self.index > other.index
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, Rarity):
            return self.index >= other.index
        return NotImplemented


class SkeletonType(StrEnum):
    """Skeleton frame archetypes."""

    LIGHT = "light"
    BALANCED = "balanced"
    HEAVY = "heavy"
    FLYING = "flying"
    MODULAR = "modular"


class MobilityType(StrEnum):
    """How a skeleton moves."""

    WHEELED = "wheeled"
    BIPEDAL = "bipedal"
    WINGED = "winged"
    TRACKED = "tracked"
    HYBRID = "hybrid"


class PartCategory(StrEnum):
    """Body part categories."""

    ARM = "arm"
    LEG = "leg"
    TORSO = "torso"
    HEAD = "head"
    ACCESSORY = "accessory"


class StatusEffectType(StrEnum):
    """Kinds of timed modifiers that can be attached to a bot state."""

    ENERGY_BOOST = "energy_boost"
    ENERGY_DRAIN = "energy_drain"
    FATIGUE = "fatigue"
    PRODUCTIVITY_BOOST = "productivity_boost"
    MAINTENANCE_BONUS = "maintenance_bonus"
    MAINTENANCE_PENALTY = "maintenance_penalty"
    MORALE_BOOST = "morale_boost"
    MORALE_PENALTY = "morale_penalty"
    SKILL_IMPROVEMENT = "skill_improvement"
    DAMAGE_BOOST = "damage_boost"
    DEFENSE_BOOST = "defense_boost"
    SPEED_BOOST = "speed_boost"
    SHIELD_ACTIVE = "shield_active"
    STEALTH_MODE = "stealth_mode"
    OVERCHARGE = "overcharge"


class BotLocation(StrEnum):
    """Where a bot currently is."""

    ARENA = "arena"
    FACTORY = "factory"
    IDLE = "idle"
    REPAIR_BAY = "repair_bay"
    TRAINING = "training"
    STORAGE = "storage"
    MISSION = "mission"
    MAINTENANCE = "maintenance"


class ExpansionChipEffect(StrEnum):
    """Effects an expansion chip can provide."""

    ATTACK_BUFF = "attack_buff"
    DEFENSE_BUFF = "defense_buff"
    SPEED_BUFF = "speed_buff"
    AI_UPGRADE = "ai_upgrade"
    ENERGY_EFFICIENCY = "energy_efficiency"
    SPECIAL_ABILITY = "special_ability"
    STAT_BOOST = "stat_boost"
    RESISTANCE = "resistance"


class BotType(StrEnum):
    """Bot classifications, each with its own ownership and soul chip rules."""

    WORKER = "worker"
    PLAYABLE = "playable"
    KING = "king"
    ROGUE = "rogue"
    GOVBOT = "govbot"

    @property
    def is_worker(self) -> bool:
        """Workers use the worker state variant and never carry a soul chip."""
        return self is BotType.WORKER

    @property
    def requires_player(self) -> bool:
        return self in (BotType.PLAYABLE, BotType.KING)

    @property
    def forbids_player(self) -> bool:
        return self in (BotType.ROGUE, BotType.GOVBOT)


class SlotCategory(StrEnum):
    """What kind of item a slot accepts."""

    HEAD = "head"
    TORSO = "torso"
    ARM = "arm"
    LEG = "leg"
    ACCESSORY = "accessory"
    EXPANSION = "expansion"
    SOUL_CHIP = "soul_chip"
    SKELETON = "skeleton"


class SlotIdentifier(StrEnum):
    """Addressable attachment points on a skeleton."""

    HEAD_1 = "head_1"
    HEAD_2 = "head_2"
    HEAD_3 = "head_3"
    TORSO_1 = "torso_1"
    ARM_LEFT = "arm_left"
    ARM_RIGHT = "arm_right"
    ARM_LEFT_2 = "arm_left_2"
    ARM_RIGHT_2 = "arm_right_2"
    ARM_LEFT_3 = "arm_left_3"
    ARM_RIGHT_3 = "arm_right_3"
    LEG_LEFT = "leg_left"
    LEG_RIGHT = "leg_right"
    LEG_LEFT_2 = "leg_left_2"
    LEG_RIGHT_2 = "leg_right_2"
    LEG_CENTER = "leg_center"
    ACCESSORY_1 = "accessory_1"
    ACCESSORY_2 = "accessory_2"
    ACCESSORY_3 = "accessory_3"
    ACCESSORY_4 = "accessory_4"
    EXPANSION_1 = "expansion_1"
    EXPANSION_2 = "expansion_2"
    EXPANSION_3 = "expansion_3"
    EXPANSION_4 = "expansion_4"
    SOUL_CHIP = "soul_chip"
    SKELETON = "skeleton"


class AssetKind(StrEnum):
    """Kinds of visual assets attached to templates."""

    ICON = "ICON"
    CARD = "CARD"
    SPRITE = "SPRITE"
    THREE_D = "THREE_D"


class ItemClass(StrEnum):
    """Classes of item templates."""

    SOUL_CHIP = "SOUL_CHIP"
    SKELETON = "SKELETON"
    PART = "PART"
    EXPANSION_CHIP = "EXPANSION_CHIP"
    MISC = "MISC"


__all__ = [
    "Rarity",
    "SkeletonType",
    "MobilityType",
    "PartCategory",
    "StatusEffectType",
    "BotLocation",
    "ExpansionChipEffect",
    "BotType",
    "SlotCategory",
    "SlotIdentifier",
    "AssetKind",
    "ItemClass",
]
