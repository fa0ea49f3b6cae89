"""Equipment catalog: skeletons, soul chips, parts and expansion chips.

Every equipment item carries a rarity, and its stat or effect contribution
is derived deterministically from that rarity (plus upgrade level for parts
and chips). Skeletons and soul chips are immutable value objects. Parts and
chips change only through ``upgrade()`` and, for parts, maintenance.

Factories (``create_skeleton``, ``create_part``, ``create_expansion_chip``)
build the concrete type from a category or effect enum; the matching
``*_from_json`` functions rebuild items from their ``to_json()`` shape.

Example:
    >>> chip = create_expansion_chip(
    ...     ExpansionChipEffect.ATTACK_BUFF, name="Striker", rarity=Rarity.RARE
    ... )
    >>> chip.get_effect_magnitude()
    0.12
    >>> chip.upgrade()
    True
"""

from __future__ import annotations

import math
from typing import Any, Literal
from uuid import uuid4

from pydantic import Field, computed_field, field_validator

from botking.core.constants import (
    CHIP_BASE_UPGRADE_COST,
    CHIP_UPGRADE_BONUS_PER_LEVEL,
    PART_BASE_UPGRADE_COST,
)
from botking.core.exceptions import UnknownEquipmentTypeError
from botking.core.logging import get_logger
from botking.models.base import DomainModel, ValueModel
from botking.models.enums import (
    ExpansionChipEffect,
    MobilityType,
    PartCategory,
    Rarity,
    SkeletonType,
    SlotCategory,
)


logger = get_logger(__name__)


# =============================================================================
# Rarity Tables
# =============================================================================

CHIP_EFFECT_MAGNITUDE: dict[Rarity, float] = {
    Rarity.COMMON: 0.05,
    Rarity.UNCOMMON: 0.08,
    Rarity.RARE: 0.12,
    Rarity.EPIC: 0.18,
    Rarity.LEGENDARY: 0.25,
    Rarity.ULTRA_RARE: 0.35,
    Rarity.PROTOTYPE: 0.50,
}

CHIP_MAX_UPGRADE_LEVEL: dict[Rarity, int] = {
    Rarity.COMMON: 5,
    Rarity.UNCOMMON: 7,
    Rarity.RARE: 10,
    Rarity.EPIC: 12,
    Rarity.LEGENDARY: 15,
    Rarity.ULTRA_RARE: 18,
    Rarity.PROTOTYPE: 20,
}

PART_RARITY_MULTIPLIER: dict[Rarity, float] = {
    Rarity.COMMON: 1.0,
    Rarity.UNCOMMON: 1.2,
    Rarity.RARE: 1.4,
    Rarity.EPIC: 1.7,
    Rarity.LEGENDARY: 2.0,
    Rarity.ULTRA_RARE: 2.5,
    Rarity.PROTOTYPE: 3.0,
}

PART_MAX_UPGRADE_LEVEL: dict[Rarity, int] = {
    Rarity.COMMON: 3,
    Rarity.UNCOMMON: 5,
    Rarity.RARE: 7,
    Rarity.EPIC: 10,
    Rarity.LEGENDARY: 15,
    Rarity.ULTRA_RARE: 20,
    Rarity.PROTOTYPE: 25,
}

SOUL_CHIP_RARITY_BONUS: dict[Rarity, float] = {
    Rarity.COMMON: 1.0,
    Rarity.UNCOMMON: 1.1,
    Rarity.RARE: 1.25,
    Rarity.EPIC: 1.5,
    Rarity.LEGENDARY: 2.0,
    Rarity.ULTRA_RARE: 2.5,
    Rarity.PROTOTYPE: 3.0,
}

SKELETON_DURABILITY_BONUS: dict[Rarity, float] = {
    Rarity.COMMON: 1.0,
    Rarity.UNCOMMON: 1.15,
    Rarity.RARE: 1.3,
    Rarity.EPIC: 1.5,
    Rarity.LEGENDARY: 1.8,
    Rarity.ULTRA_RARE: 2.2,
    Rarity.PROTOTYPE: 2.5,
}

SKELETON_SLOT_BONUS: dict[Rarity, int] = {
    Rarity.COMMON: 0,
    Rarity.UNCOMMON: 0,
    Rarity.RARE: 1,
    Rarity.EPIC: 1,
    Rarity.LEGENDARY: 2,
    Rarity.ULTRA_RARE: 2,
    Rarity.PROTOTYPE: 3,
}

_MOBILITY_ADVANTAGES: dict[MobilityType, list[str]] = {
    MobilityType.WHEELED: ["high_speed_travel", "efficient_energy_use", "smooth_surfaces"],
    MobilityType.BIPEDAL: ["versatile_movement", "climbing_ability", "tool_usage"],
    MobilityType.WINGED: ["flight", "aerial_maneuvers", "high_ground_advantage"],
    MobilityType.TRACKED: ["all_terrain", "stability", "heavy_load_capacity"],
    MobilityType.HYBRID: ["adaptive_movement", "multi_environment", "configuration_flexibility"],
}


# =============================================================================
# Stat Blocks
# =============================================================================


class CombatStats(ValueModel):
    """Combat-relevant stats contributed by equipment.

    Example:
        >>> CombatStats(attack=5) + CombatStats(attack=3, defense=2)
        CombatStats(attack=8.0, defense=2.0, speed=0.0, perception=0.0, energy_consumption=0.0)
    """

    attack: float = 0.0
    defense: float = 0.0
    speed: float = 0.0
    perception: float = 0.0
    energy_consumption: float = 0.0

    def __add__(self, other: CombatStats) -> CombatStats:
        if not isinstance(other, CombatStats):
            return NotImplemented
        return CombatStats(
            attack=self.attack + other.attack,
            defense=self.defense + other.defense,
            speed=self.speed + other.speed,
            perception=self.perception + other.perception,
            energy_consumption=self.energy_consumption + other.energy_consumption,
        )

    def rounded(self) -> CombatStats:
        return CombatStats(
            attack=round(self.attack),
            defense=round(self.defense),
            speed=round(self.speed),
            perception=round(self.perception),
            energy_consumption=round(self.energy_consumption),
        )


class BaseStats(ValueModel):
    """A soul chip's innate mental stats."""

    intelligence: int = Field(default=50, ge=0)
    resilience: int = Field(default=50, ge=0)
    adaptability: int = Field(default=50, ge=0)


class PersonalityTraits(ValueModel):
    """Personality values (0-100) and a dialogue style."""

    aggressiveness: int = Field(default=50, ge=0, le=100)
    curiosity: int = Field(default=50, ge=0, le=100)
    loyalty: int = Field(default=50, ge=0, le=100)
    independence: int = Field(default=50, ge=0, le=100)
    empathy: int = Field(default=50, ge=0, le=100)
    dialogue_style: Literal["formal", "casual", "quirky", "stoic"] = "casual"


class Ability(ValueModel):
    """An activatable ability granted by equipment."""

    id: str
    name: str
    description: str = ""
    cooldown: int = 0
    energy_cost: int = 0
    effect: str = ""


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


# =============================================================================
# Skeleton
# =============================================================================


class SkeletonCharacteristics(ValueModel):
    speed_modifier: float
    defense_modifier: float
    energy_efficiency: float
    special_abilities: list[str] = Field(default_factory=list)


_SKELETON_CHARACTERISTICS: dict[SkeletonType, SkeletonCharacteristics] = {
    SkeletonType.LIGHT: SkeletonCharacteristics(
        speed_modifier=1.3,
        defense_modifier=0.8,
        energy_efficiency=1.2,
        special_abilities=["quick_dash", "evasion"],
    ),
    SkeletonType.BALANCED: SkeletonCharacteristics(
        speed_modifier=1.0,
        defense_modifier=1.0,
        energy_efficiency=1.0,
        special_abilities=["adaptive_tactics"],
    ),
    SkeletonType.HEAVY: SkeletonCharacteristics(
        speed_modifier=0.7,
        defense_modifier=1.5,
        energy_efficiency=0.8,
        special_abilities=["heavy_armor", "siege_mode"],
    ),
    SkeletonType.FLYING: SkeletonCharacteristics(
        speed_modifier=1.4,
        defense_modifier=0.9,
        energy_efficiency=0.85,
        special_abilities=["flight", "aerial_strike"],
    ),
    SkeletonType.MODULAR: SkeletonCharacteristics(
        speed_modifier=1.0,
        defense_modifier=1.0,
        energy_efficiency=0.95,
        special_abilities=["reconfiguration", "module_swap"],
    ),
}


class Skeleton(ValueModel):
    """The frame a bot is built on. Decides slot layout and base stats.

    Attributes:
        id: Skeleton identifier.
        type: Frame archetype.
        rarity: Rarity, adding durability and extra slots.
        slots: Declared expansion slot count before rarity bonus.
        base_durability: Durability before rarity bonus.
        mobility_type: How the frame moves.
    """

    id: str = Field(default_factory=lambda: _new_id("skeleton"))
    type: SkeletonType
    rarity: Rarity = Rarity.COMMON
    slots: int = Field(default=2, ge=0)
    base_durability: int = Field(default=100, ge=1)
    mobility_type: MobilityType = MobilityType.BIPEDAL

    @property
    def slot_category(self) -> SlotCategory:
        return SlotCategory.SKELETON

    @property
    def characteristics(self) -> SkeletonCharacteristics:
        return _SKELETON_CHARACTERISTICS[self.type]

    @property
    def effective_durability(self) -> int:
        return math.floor(self.base_durability * SKELETON_DURABILITY_BONUS[self.rarity])

    @property
    def total_slots(self) -> int:
        return self.slots + SKELETON_SLOT_BONUS[self.rarity]

    @property
    def mobility_advantages(self) -> list[str]:
        return list(_MOBILITY_ADVANTAGES.get(self.mobility_type, []))

    @property
    def base_stats(self) -> CombatStats:
        """Frame contribution to a bot's aggregated stats."""
        traits = self.characteristics
        durability_factor = SKELETON_DURABILITY_BONUS[self.rarity]
        return CombatStats(
            attack=5,
            defense=round(10 * traits.defense_modifier * durability_factor),
            speed=round(10 * traits.speed_modifier),
            perception=5,
            energy_consumption=round(10 / traits.energy_efficiency),
        )

    def is_compatible_with_part(self, category: PartCategory | str) -> bool:
        """Every frame accepts every part category; the slot layout limits counts."""
        return True

    def get_energy_efficiency_modifier(self) -> float:
        return self.characteristics.energy_efficiency


def create_skeleton(
    skeleton_type: SkeletonType | str,
    *,
    rarity: Rarity = Rarity.COMMON,
    slots: int = 2,
    base_durability: int = 100,
    mobility_type: MobilityType | None = None,
    skeleton_id: str | None = None,
) -> Skeleton:
    """Build a skeleton of ``skeleton_type``.

    Raises:
        UnknownEquipmentTypeError: If the type is not a SkeletonType.
    """
    try:
        resolved = SkeletonType(skeleton_type)
    except ValueError:
        raise UnknownEquipmentTypeError(f"Unknown skeleton type: {skeleton_type}") from None

    if mobility_type is None:
        mobility_type = {
            SkeletonType.LIGHT: MobilityType.WHEELED,
            SkeletonType.BALANCED: MobilityType.BIPEDAL,
            SkeletonType.HEAVY: MobilityType.TRACKED,
            SkeletonType.FLYING: MobilityType.WINGED,
            SkeletonType.MODULAR: MobilityType.HYBRID,
        }[resolved]

    return Skeleton(
        id=skeleton_id or _new_id("skeleton"),
        type=resolved,
        rarity=rarity,
        slots=slots,
        base_durability=base_durability,
        mobility_type=mobility_type,
    )


def skeleton_from_json(data: dict[str, Any]) -> Skeleton:
    return Skeleton.model_validate(data)


# =============================================================================
# Soul Chip
# =============================================================================


class SoulChip(ValueModel):
    """The core of a non-worker bot: its personality and mental stats."""

    id: str = Field(default_factory=lambda: _new_id("soul"))
    name: str
    rarity: Rarity = Rarity.COMMON
    personality: PersonalityTraits = Field(default_factory=PersonalityTraits)
    base_stats: BaseStats = Field(default_factory=BaseStats)
    special_trait: str = ""

    @property
    def slot_category(self) -> SlotCategory:
        return SlotCategory.SOUL_CHIP

    @property
    def rarity_bonus(self) -> float:
        return SOUL_CHIP_RARITY_BONUS[self.rarity]

    @property
    def modified_stats(self) -> BaseStats:
        bonus = self.rarity_bonus
        return BaseStats(
            intelligence=math.floor(self.base_stats.intelligence * bonus),
            resilience=math.floor(self.base_stats.resilience * bonus),
            adaptability=math.floor(self.base_stats.adaptability * bonus),
        )

    @property
    def soul_power(self) -> float:
        """Average of the rarity-adjusted mental stats."""
        stats = self.modified_stats
        return (stats.intelligence + stats.resilience + stats.adaptability) / 3

    def has_special_trait(self, trait: str) -> bool:
        return trait.lower() in self.special_trait.lower()

    def generate_dialogue(self, context: str) -> str:
        """Prefix ``context`` with a line shaped by the chip's personality."""
        traits = self.personality
        openers = {
            "formal": "I acknowledge your request, ",
            "casual": "Hey there! ",
            "quirky": "Oh my circuits! ",
            "stoic": "...",
        }
        dialogue = openers.get(traits.dialogue_style, "Hello, ")
        if traits.curiosity > 70:
            dialogue += "I'm curious about this situation. "
        if traits.loyalty > 80:
            dialogue += "I'm here to help you! "
        if traits.empathy > 60:
            dialogue += "I understand how you feel. "
        if traits.aggressiveness > 70:
            dialogue += "Let's get this done quickly! "
        return dialogue + context


# =============================================================================
# Parts
# =============================================================================

_PART_SLOT_CATEGORY: dict[PartCategory, SlotCategory] = {
    PartCategory.ARM: SlotCategory.ARM,
    PartCategory.LEG: SlotCategory.LEG,
    PartCategory.TORSO: SlotCategory.TORSO,
    PartCategory.HEAD: SlotCategory.HEAD,
    PartCategory.ACCESSORY: SlotCategory.ACCESSORY,
}


def _ability_unlock_level(ability_id: str) -> int:
    if "legendary" in ability_id:
        return 15
    if "master" in ability_id:
        return 10
    if "advanced" in ability_id:
        return 5
    return 0


class Part(DomainModel):
    """A body part contributing combat stats.

    Effective stats scale with rarity, upgrade level (10% per level) and
    remaining durability.
    """

    id: str = Field(default_factory=lambda: _new_id("part"))
    category: PartCategory
    rarity: Rarity = Rarity.COMMON
    name: str
    stats: CombatStats = Field(default_factory=CombatStats)
    abilities: list[Ability] = Field(default_factory=list)
    upgrade_level: int = Field(default=0, ge=0)
    current_durability: float | None = None

    @field_validator("upgrade_level", mode="before")
    @classmethod
    def floor_upgrade_level(cls, value: Any) -> Any:
        if isinstance(value, int) and value < 0:
            return 0
        return value

    def model_post_init(self, __context: Any) -> None:
        if self.current_durability is None:
            self.current_durability = float(self.max_durability)

    @property
    def slot_category(self) -> SlotCategory:
        return _PART_SLOT_CATEGORY[self.category]

    @property
    def rarity_multiplier(self) -> float:
        return PART_RARITY_MULTIPLIER[self.rarity]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_durability(self) -> int:
        base = self.stats.defense + self.stats.attack + self.stats.speed
        return math.floor(100 + base * 2 + self.rarity_multiplier * 50)

    @property
    def durability_ratio(self) -> float:
        return (self.current_durability or 0.0) / self.max_durability

    @property
    def max_upgrade_level(self) -> int:
        return PART_MAX_UPGRADE_LEVEL[self.rarity]

    def effective_stats(self) -> CombatStats:
        multiplier = self.rarity_multiplier * (1 + self.upgrade_level * 0.1) * self.durability_ratio
        return CombatStats(
            attack=math.floor(self.stats.attack * multiplier),
            defense=math.floor(self.stats.defense * multiplier),
            speed=math.floor(self.stats.speed * multiplier),
            perception=math.floor(self.stats.perception * multiplier),
            energy_consumption=math.ceil(
                self.stats.energy_consumption * (1 + self.upgrade_level * 0.05)
            ),
        )

    @property
    def weight(self) -> float:
        stats = self.effective_stats()
        return (stats.attack + stats.defense) / 5

    def can_upgrade(self) -> bool:
        return self.upgrade_level < self.max_upgrade_level

    def upgrade(self) -> bool:
        """Raise the upgrade level by one, restoring 10% durability."""
        if not self.can_upgrade():
            return False
        self.upgrade_level += 1
        self.current_durability = min(
            float(self.max_durability),
            (self.current_durability or 0.0) + self.max_durability * 0.1,
        )
        return True

    def upgrade_cost(self) -> int:
        return math.floor(PART_BASE_UPGRADE_COST * self.rarity_multiplier * 1.5**self.upgrade_level)

    def available_abilities(self) -> list[Ability]:
        return [a for a in self.abilities if self.upgrade_level >= _ability_unlock_level(a.id)]

    def is_compatible_with(self, other: Part) -> bool:
        return not (
            {self.rarity, other.rarity} == {Rarity.ULTRA_RARE, Rarity.COMMON}
        )

    def get_synergy_bonus(self, other: Part) -> float:
        return 0.0

    def apply_wear(self, amount: float) -> float:
        """Reduce durability, never below zero. Returns the new durability."""
        self.current_durability = max(0.0, (self.current_durability or 0.0) - max(0.0, amount))
        return self.current_durability

    def get_maintenance_requirements(self) -> dict[str, Any]:
        ratio = self.durability_ratio
        if ratio < 0.3:
            urgency = "critical"
        elif ratio < 0.6:
            urgency = "moderate"
        else:
            urgency = "low"
        materials = ["basic_components"]
        if self.rarity >= Rarity.RARE:
            materials.append("advanced_alloys")
        if self.rarity >= Rarity.LEGENDARY:
            materials.append("quantum_circuits")
        return {
            "urgency": urgency,
            "estimated_cost": math.floor(self.upgrade_cost() * 0.3 * (1 - ratio)),
            "time_required": math.ceil(10 * (1 - ratio)),
            "materials_needed": materials,
            "frequency": 100 + self.rarity_multiplier * 20,
        }

    def perform_maintenance(self, quality: float = 1.0) -> dict[str, float]:
        """Restore durability by ``quality`` of what is missing."""
        missing = self.max_durability - (self.current_durability or 0.0)
        restored = missing * min(1.0, max(0.0, quality))
        self.current_durability = (self.current_durability or 0.0) + restored
        return {"restored": restored, "cost": math.floor(self.upgrade_cost() * 0.2 * quality)}


def create_part(
    category: PartCategory | str,
    *,
    name: str,
    rarity: Rarity = Rarity.COMMON,
    stats: CombatStats | None = None,
    abilities: list[Ability] | None = None,
    upgrade_level: int = 0,
    part_id: str | None = None,
) -> Part:
    """Build a part of ``category``.

    Raises:
        UnknownEquipmentTypeError: If the category is not a PartCategory.
    """
    try:
        resolved = PartCategory(category)
    except ValueError:
        raise UnknownEquipmentTypeError(f"Unknown part category: {category}") from None
    return Part(
        id=part_id or _new_id("part"),
        category=resolved,
        rarity=rarity,
        name=name,
        stats=stats or CombatStats(),
        abilities=abilities or [],
        upgrade_level=upgrade_level,
    )


def part_from_json(data: dict[str, Any]) -> Part:
    return Part.model_validate(data)


# =============================================================================
# Expansion Chips
# =============================================================================


class ExpansionChip(DomainModel):
    """An upgradeable chip adding a percentage effect.

    Effect magnitude is the rarity base (Common 0.05 .. Prototype 0.50) plus
    0.02 per upgrade level. Conflict and synergy checks default to "no
    conflict" and zero bonus; the concrete chip classes refine them.
    """

    id: str = Field(default_factory=lambda: _new_id("chip"))
    name: str
    effect: ExpansionChipEffect
    rarity: Rarity = Rarity.COMMON
    description: str = ""
    upgrade_level: int = Field(default=0, ge=0)

    @field_validator("upgrade_level", mode="before")
    @classmethod
    def floor_upgrade_level(cls, value: Any) -> Any:
        if isinstance(value, int) and value < 0:
            return 0
        return value

    @property
    def slot_category(self) -> SlotCategory:
        return SlotCategory.EXPANSION

    def get_base_effect_magnitude(self) -> float:
        return CHIP_EFFECT_MAGNITUDE[self.rarity]

    def get_upgrade_bonus(self) -> float:
        return round(self.upgrade_level * CHIP_UPGRADE_BONUS_PER_LEVEL, 4)

    def get_effect_magnitude(self) -> float:
        return round(self.get_base_effect_magnitude() + self.get_upgrade_bonus(), 4)

    def get_max_upgrade_level(self) -> int:
        return CHIP_MAX_UPGRADE_LEVEL[self.rarity]

    def can_upgrade(self) -> bool:
        return self.upgrade_level < self.get_max_upgrade_level()

    def upgrade(self) -> bool:
        if not self.can_upgrade():
            return False
        self.upgrade_level += 1
        logger.debug("Chip upgraded", chip_id=self.id, level=self.upgrade_level)
        return True

    def get_upgrade_cost(self) -> int:
        return math.floor(CHIP_BASE_UPGRADE_COST * 1.5**self.rarity.index * 1.3**self.upgrade_level)

    def get_energy_cost(self) -> int:
        magnitude = self.get_effect_magnitude()
        return math.ceil(1 + magnitude * 10 * (1 + self.upgrade_level * 0.1))

    def conflicts_with(self, other: ExpansionChip) -> bool:
        return False

    def get_synergy_bonus(self, other: ExpansionChip) -> float:
        return 0.0

    def get_compatible_skeleton_types(self) -> list[SkeletonType]:
        return list(SkeletonType)

    def get_effect_details(self) -> dict[str, Any]:
        magnitude = self.get_effect_magnitude()
        return {
            "type": "multiplicative",
            "magnitude": magnitude,
            "description": f"{self.effect.value} by {magnitude * 100:.1f}%",
            "applicable_stats": self._applicable_stats(),
        }

    def _applicable_stats(self) -> list[str]:
        return {
            ExpansionChipEffect.ATTACK_BUFF: ["attack"],
            ExpansionChipEffect.DEFENSE_BUFF: ["defense"],
            ExpansionChipEffect.SPEED_BUFF: ["speed"],
            ExpansionChipEffect.STAT_BOOST: ["attack", "defense", "speed", "perception"],
            ExpansionChipEffect.AI_UPGRADE: ["perception"],
            ExpansionChipEffect.ENERGY_EFFICIENCY: ["energy_consumption"],
        }.get(self.effect, [])


class AttackBuffChip(ExpansionChip):
    """Raises attack. Pairs well with speed and AI chips."""

    effect: ExpansionChipEffect = ExpansionChipEffect.ATTACK_BUFF

    def get_synergy_bonus(self, other: ExpansionChip) -> float:
        return {
            ExpansionChipEffect.SPEED_BUFF: 0.15,
            ExpansionChipEffect.AI_UPGRADE: 0.10,
            ExpansionChipEffect.STAT_BOOST: 0.08,
        }.get(other.effect, 0.0)

    def conflicts_with(self, other: ExpansionChip) -> bool:
        return other.effect == ExpansionChipEffect.ENERGY_EFFICIENCY and self.upgrade_level >= 8

    def get_compatible_skeleton_types(self) -> list[SkeletonType]:
        return [t for t in SkeletonType if t is not SkeletonType.FLYING]


class DefenseBuffChip(ExpansionChip):
    """Raises defense."""

    effect: ExpansionChipEffect = ExpansionChipEffect.DEFENSE_BUFF

    def get_synergy_bonus(self, other: ExpansionChip) -> float:
        return {
            ExpansionChipEffect.RESISTANCE: 0.12,
            ExpansionChipEffect.STAT_BOOST: 0.06,
        }.get(other.effect, 0.0)


class SpeedBuffChip(ExpansionChip):
    """Raises speed."""

    effect: ExpansionChipEffect = ExpansionChipEffect.SPEED_BUFF

    def get_synergy_bonus(self, other: ExpansionChip) -> float:
        return {
            ExpansionChipEffect.ATTACK_BUFF: 0.15,
            ExpansionChipEffect.AI_UPGRADE: 0.08,
        }.get(other.effect, 0.0)


class AIUpgradeChip(ExpansionChip):
    """Improves targeting and decision making."""

    effect: ExpansionChipEffect = ExpansionChipEffect.AI_UPGRADE

    def get_synergy_bonus(self, other: ExpansionChip) -> float:
        return {
            ExpansionChipEffect.ATTACK_BUFF: 0.10,
            ExpansionChipEffect.SPEED_BUFF: 0.08,
            ExpansionChipEffect.SPECIAL_ABILITY: 0.12,
        }.get(other.effect, 0.0)


_CHIP_CLASSES: dict[ExpansionChipEffect, type[ExpansionChip]] = {
    ExpansionChipEffect.ATTACK_BUFF: AttackBuffChip,
    ExpansionChipEffect.DEFENSE_BUFF: DefenseBuffChip,
    ExpansionChipEffect.SPEED_BUFF: SpeedBuffChip,
    ExpansionChipEffect.AI_UPGRADE: AIUpgradeChip,
}


def create_expansion_chip(
    effect: ExpansionChipEffect | str,
    *,
    name: str,
    rarity: Rarity = Rarity.COMMON,
    description: str = "",
    upgrade_level: int = 0,
    chip_id: str | None = None,
) -> ExpansionChip:
    """Build the chip class matching ``effect``.

    Effects without a dedicated class get the generic ExpansionChip.

    Raises:
        UnknownEquipmentTypeError: If the effect is not an ExpansionChipEffect.
    """
    try:
        resolved = ExpansionChipEffect(effect)
    except ValueError:
        raise UnknownEquipmentTypeError(f"Unknown expansion chip effect: {effect}") from None
    chip_cls = _CHIP_CLASSES.get(resolved, ExpansionChip)
    return chip_cls(
        id=chip_id or _new_id("chip"),
        name=name,
        effect=resolved,
        rarity=rarity,
        description=description,
        upgrade_level=upgrade_level,
    )


def expansion_chip_from_json(data: dict[str, Any]) -> ExpansionChip:
    """Rebuild a chip, choosing its class from the stored effect."""
    try:
        effect = ExpansionChipEffect(data["effect"])
    except (KeyError, ValueError):
        raise UnknownEquipmentTypeError(
            f"Unknown expansion chip effect: {data.get('effect')}",
            item_id=data.get("id"),
        ) from None
    return _CHIP_CLASSES.get(effect, ExpansionChip).model_validate(data)


Equipment = Skeleton | SoulChip | Part | ExpansionChip


__all__ = [
    "CHIP_EFFECT_MAGNITUDE",
    "CHIP_MAX_UPGRADE_LEVEL",
    "PART_MAX_UPGRADE_LEVEL",
    "CombatStats",
    "BaseStats",
    "PersonalityTraits",
    "Ability",
    "SkeletonCharacteristics",
    "Skeleton",
    "create_skeleton",
    "skeleton_from_json",
    "SoulChip",
    "Part",
    "create_part",
    "part_from_json",
    "ExpansionChip",
    "AttackBuffChip",
    "DefenseBuffChip",
    "SpeedBuffChip",
    "AIUpgradeChip",
    "create_expansion_chip",
    "expansion_chip_from_json",
    "Equipment",
]
