"""Bot aggregate root and bot factories.

A Bot owns one state variant, its equipment and the slot configuration the
equipment lives in. Construction enforces the bot-type rules:

- Workers never carry a soul chip.
- Playable and King bots need a player.
- Rogue and GovBot bots may not have one.

Violations raise a BotConstructionError. Everything after construction
(installs, removals, player changes) reports failure through result objects
instead of raising.

Derived values such as ``aggregated_stats`` and ``calculate_combat_power()``
are recomputed on every read.

Example:
    >>> bot = create_basic_bot("Sparky", owner_id="user_1")
    >>> bot.state.get_state_type()
    'worker'
    >>> bot.soul_chip is None
    True
"""

from __future__ import annotations

import json
import math
from datetime import datetime
from typing import Any, Literal
from uuid import uuid4

from pydantic import ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from botking.core.config import get_settings
from botking.core.constants import BASE_MAX_ENERGY, CLONE_NAME_SUFFIX, MAX_LEVEL
from botking.core.exceptions import (
    BotConstructionError,
    BotkingError,
    PlayerAssignmentError,
    SoulChipNotAllowedError,
    ValidationError,
)
from botking.core.logging import get_logger
from botking.models.base import DomainModel, ValueModel
from botking.models.enums import (
    BotLocation,
    BotType,
    ExpansionChipEffect,
    PartCategory,
    Rarity,
    SkeletonType,
    SlotIdentifier,
)
from botking.models.equipment import (
    Ability,
    CombatStats,
    ExpansionChip,
    Part,
    PersonalityTraits,
    Skeleton,
    SoulChip,
    create_expansion_chip,
    create_part,
    create_skeleton,
    expansion_chip_from_json,
    part_from_json,
    skeleton_from_json,
)
from botking.models.slots import SlotAssignmentResult, SlotConfiguration
from botking.models.state import (
    NonWorkerBotState,
    StatusEffect,
    WorkerBotState,
    bot_state_from_json,
    coerce_bot_type,
    create_bot_state,
    validate_state_for_bot_type,
)


logger = get_logger(__name__)


TYPE_POWER_FACTOR: dict[BotType, float] = {
    BotType.WORKER: 1.0,
    BotType.ROGUE: 1.2,
    BotType.GOVBOT: 1.2,
    BotType.PLAYABLE: 1.3,
    BotType.KING: 1.6,
}
"""Combat power multiplier per bot type. King > Playable > Worker."""

_URGENCY_ORDER = ("low", "moderate", "critical")


# =============================================================================
# Configuration & Results
# =============================================================================


class BotConfiguration(DomainModel):
    """Everything needed to build a bot.

    Attributes:
        name: Display name.
        bot_type: Bot classification.
        skeleton: Frame the bot is built on.
        owner_id: Owning user, if any.
        player_id: Assigned player, required for Playable and King.
        soul_chip: Soul chip, forbidden for workers.
        parts: Parts to auto-install, in order.
        expansion_chips: Chips to auto-install, in order.
        state_overrides: Field values replacing the type's default state.
        description: Free-form description.
        bot_id: Fixed identifier, generated when omitted.
    """

    name: str = Field(min_length=1)
    bot_type: BotType = BotType.WORKER
    skeleton: Skeleton
    owner_id: str | None = None
    player_id: str | None = None
    soul_chip: SoulChip | None = None
    parts: list[Part] = Field(default_factory=list)
    expansion_chips: list[ExpansionChip] = Field(default_factory=list)
    state_overrides: dict[str, Any] = Field(default_factory=dict)
    description: str = ""
    bot_id: str | None = None

    @field_validator("bot_type", mode="before")
    @classmethod
    def resolve_bot_type(cls, value: Any) -> BotType:
        return coerce_bot_type(value)


class AssemblyValidation(ValueModel):
    """Combined slot and bot-rule validation report."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class AssemblyResult(ValueModel):
    """Outcome of ``assemble_bot``. ``bot`` is None when construction failed."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool
    bot: Bot | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


# =============================================================================
# Bot
# =============================================================================


class Bot:
    """A bot: identity, state, equipment and slot assignment.

    Attributes:
        id: Bot identifier.
        name: Display name.
        bot_type: Bot classification. Never changes after construction.
        owner_id: Owning user.
        player_id: Assigned player.
        skeleton: The frame.
        soul_chip: Installed soul chip, None for workers.
        parts: Installed parts.
        expansion_chips: Installed expansion chips.
        state: WorkerBotState for workers, NonWorkerBotState otherwise.
        slots: Slot layout and occupancy.
        assembly_warnings: Auto-install failures recorded at construction.

    Raises:
        SoulChipNotAllowedError: If a worker is given a soul chip.
        PlayerAssignmentError: If the player assignment breaks the type rules.
    """

    def __init__(self, config: BotConfiguration) -> None:
        bot_type = config.bot_type
        self._check_construction_rules(bot_type, config.soul_chip, config.player_id)

        now = datetime.now()
        self.id = config.bot_id or f"bot_{uuid4().hex[:12]}"
        self.name = config.name
        self.description = config.description
        self.bot_type = bot_type
        self.owner_id = config.owner_id
        self.player_id = config.player_id
        self.skeleton = config.skeleton
        self.soul_chip: SoulChip | None = None
        self.parts: list[Part] = []
        self.expansion_chips: list[ExpansionChip] = []
        self.state: WorkerBotState | NonWorkerBotState = create_bot_state(
            bot_type, **config.state_overrides
        )
        self.slots = SlotConfiguration.build_from_skeleton(config.skeleton, bot_type)
        self.assembly_warnings: list[str] = []
        self.created_at = now
        self.updated_at = now

        self.slots.assign(self.skeleton, SlotIdentifier.SKELETON)
        if config.soul_chip is not None:
            result = self.slots.assign(config.soul_chip, SlotIdentifier.SOUL_CHIP)
            if result.success:
                self.soul_chip = config.soul_chip
            else:
                self.assembly_warnings.append(f"Soul chip {config.soul_chip.id}: {result.message}")
        for part in config.parts:
            result = self.install_part(part)
            if not result.success:
                self.assembly_warnings.append(f"Part {part.id}: {result.message}")
        for chip in config.expansion_chips:
            result = self.install_expansion_chip(chip)
            if not result.success:
                self.assembly_warnings.append(f"Expansion chip {chip.id}: {result.message}")

        logger.info(
            "Bot created",
            bot_id=self.id,
            bot_type=bot_type.value,
            parts=len(self.parts),
            chips=len(self.expansion_chips),
            warnings=len(self.assembly_warnings),
        )

    @staticmethod
    def _check_construction_rules(
        bot_type: BotType,
        soul_chip: SoulChip | None,
        player_id: str | None,
    ) -> None:
        if bot_type.is_worker and soul_chip is not None:
            raise SoulChipNotAllowedError(bot_type=bot_type.value)
        if bot_type.requires_player and not player_id:
            raise PlayerAssignmentError(
                f"{bot_type.value.capitalize()} bots must be assigned to a player",
                bot_type=bot_type.value,
            )
        if bot_type.forbids_player and player_id:
            raise PlayerAssignmentError(
                f"{bot_type.value.capitalize()} bots cannot be assigned to a player",
                bot_type=bot_type.value,
                player_id=player_id,
            )

    def __repr__(self) -> str:
        return f"Bot(id={self.id!r}, name={self.name!r}, bot_type={self.bot_type.value!r})"

    def _touch(self) -> None:
        self.updated_at = datetime.now()

    # =========================================================================
    # Equipment
    # =========================================================================

    def install_part(
        self,
        part: Part,
        preferred_slot: SlotIdentifier | str | None = None,
    ) -> SlotAssignmentResult:
        """Install ``part`` into ``preferred_slot`` or the first free slot of its category."""
        if not isinstance(part, Part):
            return SlotAssignmentResult(success=False, message="Only parts can be installed as parts")
        result = self.slots.assign(part, preferred_slot)
        if result.success:
            self.parts.append(part)
            self._touch()
            logger.debug("Part installed", bot_id=self.id, part_id=part.id, slot=result.assigned_slot)
        return result

    def install_expansion_chip(
        self,
        chip: ExpansionChip,
        preferred_slot: SlotIdentifier | str | None = None,
    ) -> SlotAssignmentResult:
        if not isinstance(chip, ExpansionChip):
            return SlotAssignmentResult(
                success=False, message="Only expansion chips can be installed as chips"
            )
        result = self.slots.assign(chip, preferred_slot)
        if result.success:
            self.expansion_chips.append(chip)
            self._touch()
            logger.debug("Chip installed", bot_id=self.id, chip_id=chip.id, slot=result.assigned_slot)
        return result

    def remove_part(self, part_id: str) -> SlotAssignmentResult:
        if not any(p.id == part_id for p in self.parts):
            return SlotAssignmentResult(success=False, message=f"Part {part_id} is not installed")
        result = self.slots.remove(part_id)
        if result.success:
            self.parts = [p for p in self.parts if p.id != part_id]
            self._touch()
        return result

    def remove_expansion_chip(self, chip_id: str) -> SlotAssignmentResult:
        if not any(c.id == chip_id for c in self.expansion_chips):
            return SlotAssignmentResult(
                success=False, message=f"Expansion chip {chip_id} is not installed"
            )
        result = self.slots.remove(chip_id)
        if result.success:
            self.expansion_chips = [c for c in self.expansion_chips if c.id != chip_id]
            self._touch()
        return result

    # =========================================================================
    # Derived Values
    # =========================================================================

    @property
    def aggregated_stats(self) -> CombatStats:
        """Skeleton base stats plus part stats, scaled by chip effects.

        Attack, defense, speed and AI chips multiply their stat by
        (1 + magnitude). Stat boost chips multiply every combat stat by
        (1 + magnitude / 2). Energy efficiency chips cut energy consumption
        by their magnitude.
        """
        total = self.skeleton.base_stats
        for part in self.parts:
            total = total + part.effective_stats()

        attack = defense = speed = perception = energy = 1.0
        for chip in self.expansion_chips:
            magnitude = chip.get_effect_magnitude()
            if chip.effect is ExpansionChipEffect.ATTACK_BUFF:
                attack *= 1 + magnitude
            elif chip.effect is ExpansionChipEffect.DEFENSE_BUFF:
                defense *= 1 + magnitude
            elif chip.effect is ExpansionChipEffect.SPEED_BUFF:
                speed *= 1 + magnitude
            elif chip.effect is ExpansionChipEffect.AI_UPGRADE:
                perception *= 1 + magnitude
            elif chip.effect is ExpansionChipEffect.STAT_BOOST:
                boost = 1 + magnitude / 2
                attack *= boost
                defense *= boost
                speed *= boost
                perception *= boost
            elif chip.effect is ExpansionChipEffect.ENERGY_EFFICIENCY:
                energy *= max(0.0, 1 - magnitude)

        return CombatStats(
            attack=total.attack * attack,
            defense=total.defense * defense,
            speed=total.speed * speed,
            perception=total.perception * perception,
            energy_consumption=total.energy_consumption * energy,
        ).rounded()

    def calculate_combat_power(self) -> float:
        """Single scalar of battle strength.

        Weighted stats (attack 0.3, defense 0.25, speed 0.2, perception
        0.15), soul power and chip magnitudes, scaled by the bot type factor
        and by experience and bond. Energy below 50 costs 20% and
        maintenance below 50 costs 30%.
        """
        stats = self.aggregated_stats
        power = (
            stats.attack * 0.3
            + stats.defense * 0.25
            + stats.speed * 0.2
            + stats.perception * 0.15
        )
        if self.soul_chip is not None:
            power += self.soul_chip.soul_power * 0.1
        power += sum(
            chip.get_effect_magnitude() * 10 * (1 + chip.rarity.index * 0.1)
            for chip in self.expansion_chips
        )

        state_factor = 1 + min(self.state.experience, 10_000) / 10_000 * 0.2
        if isinstance(self.state, NonWorkerBotState):
            state_factor += self.state.bond_level / MAX_LEVEL * 0.1
        power *= TYPE_POWER_FACTOR[self.bot_type] * state_factor

        if self.state.energy_level < 50:
            power *= 0.8
        if self.state.maintenance_level < 50:
            power *= 0.7
        return round(power, 2)

    def is_ready_for_combat(self) -> bool:
        minimum = get_settings().gameplay.combat_ready_min_power
        return self.state.is_operational() and self.calculate_combat_power() >= minimum

    @property
    def max_energy(self) -> float:
        """Energy ceiling from soul chip intelligence, frame and chips."""
        energy = BASE_MAX_ENERGY
        if self.soul_chip is not None:
            energy += self.soul_chip.modified_stats.intelligence * 0.5
        if self.skeleton.type is SkeletonType.LIGHT:
            energy *= 0.8
        elif self.skeleton.type is SkeletonType.HEAVY:
            energy *= 1.2
        if any(c.effect is ExpansionChipEffect.ENERGY_EFFICIENCY for c in self.expansion_chips):
            energy *= 1.1
        return round(energy, 2)

    @property
    def total_weight(self) -> float:
        return round(sum(p.weight for p in self.parts), 2)

    @property
    def available_abilities(self) -> list[str]:
        """Skeleton special abilities, the soul chip trait, then unlocked part abilities."""
        names = list(self.skeleton.characteristics.special_abilities)
        if self.soul_chip is not None and self.soul_chip.special_trait:
            names.append(self.soul_chip.special_trait)
        for part in self.parts:
            for ability in part.available_abilities():
                if ability.id not in names:
                    names.append(ability.id)
        return names

    # =========================================================================
    # Player Assignment
    # =========================================================================

    def requires_player(self) -> bool:
        return self.bot_type.requires_player

    def can_assign_player(self) -> bool:
        return not self.bot_type.forbids_player

    def can_be_unassigned(self) -> bool:
        return not self.bot_type.requires_player

    def assign_player(self, player_id: str) -> bool:
        """Assign a player. Returns False, leaving ``player_id`` alone, when the type forbids it."""
        if not self.can_assign_player() or not player_id:
            logger.warning(
                "Player assignment denied",
                bot_id=self.id,
                bot_type=self.bot_type.value,
                player_id=player_id,
            )
            return False
        self.player_id = player_id
        self._touch()
        return True

    def unassign_player(self) -> bool:
        if not self.can_be_unassigned() or self.player_id is None:
            return False
        self.player_id = None
        self._touch()
        return True

    # =========================================================================
    # State & Lifecycle
    # =========================================================================

    def update_state(self, **changes: Any) -> None:
        """Move state fields to the given values.

        Energy, maintenance, bond and experience go through the state's own
        updaters, so they clamp (and experience never decreases). Lists and
        dicts are replaced wholesale.

        Raises:
            ValidationError: If a field does not exist on this bot's state,
                or the value does not fit the field.
        """
        for name, value in changes.items():
            try:
                self._apply_state_change(name, value)
            except PydanticValidationError as exc:
                raise ValidationError(
                    f"Invalid value for {name}",
                    field_name=name,
                    invalid_value=value,
                ) from exc
        self._touch()

    def _apply_state_change(self, name: str, value: Any) -> None:
        state = self.state
        if name == "energy_level":
            state.update_energy(float(value) - state.energy_level)
        elif name == "maintenance_level":
            state.update_maintenance(float(value) - state.maintenance_level)
        elif name == "experience":
            state.add_experience(int(value) - state.experience)
        elif name == "bond_level" and isinstance(state, NonWorkerBotState):
            state.update_bond_level(float(value) - state.bond_level)
        elif name == "status_effects":
            state.status_effects = [
                e if isinstance(e, StatusEffect) else StatusEffect.model_validate(e)
                for e in value
            ]
        elif name in ("current_location", "customizations", "last_activity") or (
            isinstance(state, NonWorkerBotState)
            and name in ("battles_won", "battles_lost", "total_battles")
        ):
            setattr(state, name, value)
        else:
            raise ValidationError(
                f"Cannot update {name} on a {state.state_type} state",
                field_name=name,
                invalid_value=value,
            )

    def activate(self) -> bool:
        """Bring the bot out of storage. Fails when it is not operational."""
        if not self.state.is_operational():
            return False
        self.state.current_location = BotLocation.IDLE
        self.state.touch()
        self._touch()
        return True

    def deactivate(self) -> bool:
        self.state.current_location = BotLocation.STORAGE
        self._touch()
        return True

    def validate_assembly(self) -> AssemblyValidation:
        """Check slots, bot-type rules and equipment compatibility together."""
        slot_report = self.slots.validate()
        errors = list(slot_report.errors)
        warnings = list(slot_report.warnings) + list(self.assembly_warnings)

        if self.bot_type.is_worker and self.soul_chip is not None:
            errors.append("Worker bots cannot have soul chips")
        if self.requires_player() and not self.player_id:
            errors.append(f"{self.bot_type.value.capitalize()} bots require a player")
        if self.bot_type.forbids_player and self.player_id:
            errors.append(f"{self.bot_type.value.capitalize()} bots cannot have a player")

        warnings.extend(validate_state_for_bot_type(self.state, self.bot_type))

        if not self.parts:
            warnings.append("No parts installed")
        for i, part in enumerate(self.parts):
            for other in self.parts[i + 1 :]:
                if not part.is_compatible_with(other):
                    warnings.append(f"Parts {part.id} and {other.id} are incompatible")
        for i, chip in enumerate(self.expansion_chips):
            if self.skeleton.type not in chip.get_compatible_skeleton_types():
                warnings.append(f"Chip {chip.id} is not suited to {self.skeleton.type.value} skeletons")
            for other in self.expansion_chips[i + 1 :]:
                if chip.conflicts_with(other) or other.conflicts_with(chip):
                    errors.append(f"Chips {chip.id} and {other.id} conflict")

        return AssemblyValidation(valid=not errors, errors=errors, warnings=warnings)

    def clone(self) -> Bot:
        """Copy this bot under a new id with an independent state.

        Parts and chips are deep copies in the same slots. The skeleton and
        soul chip are immutable and shared. Assembly warnings carry over.
        """
        twin = Bot(
            BotConfiguration(
                name=f"{self.name}{CLONE_NAME_SUFFIX}",
                bot_type=self.bot_type,
                skeleton=self.skeleton,
                owner_id=self.owner_id,
                player_id=self.player_id,
                soul_chip=self.soul_chip,
                description=self.description,
            )
        )
        twin.state = self.state.model_copy(
            deep=True, update={"id": f"state_{uuid4().hex[:12]}"}
        )
        for part in self.parts:
            twin.install_part(part.model_copy(deep=True), self.slots.slot_of(part.id))
        for chip in self.expansion_chips:
            twin.install_expansion_chip(chip.model_copy(deep=True), self.slots.slot_of(chip.id))
        twin.assembly_warnings = list(self.assembly_warnings)
        logger.debug("Bot cloned", source_id=self.id, clone_id=twin.id)
        return twin

    def reset(self) -> None:
        """Restore energy and maintenance and send the bot to the factory.

        Experience, bond and battle history are kept. Status effects are
        cleared.
        """
        self.state.energy_level = min(MAX_LEVEL, self.max_energy)
        self.state.maintenance_level = MAX_LEVEL
        self.state.status_effects = []
        self.state.current_location = BotLocation.FACTORY
        self.state.touch()
        self._touch()
        logger.info("Bot reset", bot_id=self.id)

    # =========================================================================
    # Reporting
    # =========================================================================

    def get_maintenance(self) -> dict[str, Any]:
        """Combined maintenance urgency and cost for the state and every part."""
        urgency = "low"
        if self.state.maintenance_level < 10:
            urgency = "critical"
        elif self.state.needs_maintenance():
            urgency = "moderate"

        cost = 0
        time_required = 0
        per_part: dict[str, dict[str, Any]] = {}
        for part in self.parts:
            requirements = part.get_maintenance_requirements()
            per_part[part.id] = requirements
            cost += requirements["estimated_cost"]
            time_required += requirements["time_required"]
            if _URGENCY_ORDER.index(requirements["urgency"]) > _URGENCY_ORDER.index(urgency):
                urgency = requirements["urgency"]

        cost += math.floor((MAX_LEVEL - self.state.maintenance_level) * 2)
        return {
            "urgency": urgency,
            "estimated_cost": cost,
            "time_required": time_required,
            "maintenance_level": self.state.maintenance_level,
            "parts": per_part,
        }

    def get_performance_metrics(self) -> dict[str, Any]:
        state = self.state
        metrics: dict[str, Any] = {
            "combat_power": self.calculate_combat_power(),
            "energy_ratio": round(state.energy_level / self.max_energy, 4),
            "reliability": round(state.maintenance_level / MAX_LEVEL, 4),
            "experience": state.experience,
            "total_weight": self.total_weight,
            "ready_for_combat": self.is_ready_for_combat(),
        }
        if isinstance(state, WorkerBotState):
            metrics["efficiency"] = state.calculate_work_efficiency()
            metrics["work_status"] = state.get_work_status()
        else:
            metrics["efficiency"] = round(state.calculate_combat_readiness().score / MAX_LEVEL, 4)
            metrics["battle_stats"] = state.get_battle_stats().model_dump()
            metrics["morale"] = state.calculate_morale()
        return metrics

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "bot_type": self.bot_type.value,
            "owner_id": self.owner_id,
            "player_id": self.player_id,
            "skeleton": self.skeleton.to_json(),
            "soul_chip": self.soul_chip.to_json() if self.soul_chip else None,
            "parts": [p.to_json() for p in self.parts],
            "expansion_chips": [c.to_json() for c in self.expansion_chips],
            "state": self.state.to_json(),
            "slot_assignments": {s.value: i for s, i in self.slots.assignments.items()},
            "aggregated_stats": self.aggregated_stats.to_json(),
            "combat_power": self.calculate_combat_power(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    def serialize(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Bot:
        """Rebuild a bot from ``to_json()`` output, keeping slot positions."""
        slot_by_item = {item_id: slot for slot, item_id in data.get("slot_assignments", {}).items()}
        bot = cls(
            BotConfiguration(
                bot_id=data["id"],
                name=data["name"],
                description=data.get("description", ""),
                bot_type=data["bot_type"],
                owner_id=data.get("owner_id"),
                player_id=data.get("player_id"),
                skeleton=skeleton_from_json(data["skeleton"]),
                soul_chip=SoulChip.from_json(data["soul_chip"]) if data.get("soul_chip") else None,
            )
        )
        bot.state = bot_state_from_json(data["state"])
        for raw in data.get("parts", []):
            part = part_from_json(raw)
            bot.install_part(part, slot_by_item.get(part.id))
        for raw in data.get("expansion_chips", []):
            chip = expansion_chip_from_json(raw)
            bot.install_expansion_chip(chip, slot_by_item.get(chip.id))
        if "created_at" in data:
            bot.created_at = datetime.fromisoformat(data["created_at"])
        if "updated_at" in data:
            bot.updated_at = datetime.fromisoformat(data["updated_at"])
        return bot

    @classmethod
    def deserialize(cls, raw: str) -> Bot:
        return cls.from_json(json.loads(raw))


AssemblyResult.model_rebuild()


# =============================================================================
# Bot Factories
# =============================================================================


def _basic_soul_chip(name: str) -> SoulChip:
    return SoulChip(name=f"{name} Core", personality=PersonalityTraits(dialogue_style="casual"))


def create_basic_bot(
    name: str,
    owner_id: str | None = None,
    skeleton_type: SkeletonType | str = SkeletonType.BALANCED,
    bot_type: BotType | str = BotType.WORKER,
    player_id: str | None = None,
) -> Bot:
    """Build a bot with one basic arm and one basic leg.

    Workers get no soul chip; every other type gets a common one.

    Raises:
        BotConstructionError: If ``player_id`` breaks the type's player rule.
        UnknownBotTypeError: If ``bot_type`` is not a bot type.
    """
    resolved = coerce_bot_type(bot_type)
    parts = [
        create_part(
            PartCategory.ARM,
            name="Basic Arm",
            stats=CombatStats(attack=10, defense=5, speed=5, perception=2, energy_consumption=2),
        ),
        create_part(
            PartCategory.LEG,
            name="Basic Leg",
            stats=CombatStats(attack=2, defense=8, speed=10, perception=0, energy_consumption=2),
        ),
    ]
    return Bot(
        BotConfiguration(
            name=name,
            bot_type=resolved,
            owner_id=owner_id,
            player_id=player_id,
            skeleton=create_skeleton(skeleton_type),
            soul_chip=None if resolved.is_worker else _basic_soul_chip(name),
            parts=parts,
        )
    )


CombatRole = Literal["assault", "tank", "sniper", "scout"]

_COMBAT_ROLES: dict[str, dict[str, Any]] = {
    "assault": {
        "skeleton": SkeletonType.BALANCED,
        "parts": [
            (PartCategory.ARM, "Assault Cannon", CombatStats(attack=25, defense=5, speed=5, energy_consumption=5)),
            (PartCategory.ARM, "Combat Blade", CombatStats(attack=20, defense=5, speed=8, energy_consumption=3)),
            (PartCategory.TORSO, "Reinforced Chassis", CombatStats(defense=15, energy_consumption=2)),
            (PartCategory.LEG, "Strider Leg", CombatStats(defense=5, speed=12, energy_consumption=2)),
            (PartCategory.LEG, "Strider Leg", CombatStats(defense=5, speed=12, energy_consumption=2)),
        ],
        "chips": [ExpansionChipEffect.ATTACK_BUFF],
    },
    "tank": {
        "skeleton": SkeletonType.HEAVY,
        "parts": [
            (PartCategory.TORSO, "Bulwark Plating", CombatStats(defense=35, speed=-2, energy_consumption=4)),
            (PartCategory.ARM, "Shield Arm", CombatStats(attack=8, defense=20, energy_consumption=3)),
            (PartCategory.ARM, "Hammer Arm", CombatStats(attack=18, defense=8, energy_consumption=3)),
            (PartCategory.LEG, "Tread Leg", CombatStats(defense=12, speed=4, energy_consumption=3)),
            (PartCategory.LEG, "Tread Leg", CombatStats(defense=12, speed=4, energy_consumption=3)),
        ],
        "chips": [ExpansionChipEffect.DEFENSE_BUFF],
    },
    "sniper": {
        "skeleton": SkeletonType.LIGHT,
        "parts": [
            (PartCategory.HEAD, "Long-Range Optics", CombatStats(perception=30, energy_consumption=3)),
            (PartCategory.ARM, "Rail Rifle", CombatStats(attack=30, speed=2, energy_consumption=6)),
            (PartCategory.LEG, "Stabilizer Leg", CombatStats(defense=6, speed=8, energy_consumption=2)),
            (PartCategory.LEG, "Stabilizer Leg", CombatStats(defense=6, speed=8, energy_consumption=2)),
        ],
        "chips": [ExpansionChipEffect.AI_UPGRADE],
    },
    "scout": {
        "skeleton": SkeletonType.FLYING,
        "parts": [
            (PartCategory.HEAD, "Sensor Dome", CombatStats(perception=20, energy_consumption=2)),
            (PartCategory.HEAD, "Radar Array", CombatStats(perception=15, energy_consumption=2)),
            (PartCategory.LEG, "Thruster Leg", CombatStats(speed=20, energy_consumption=3)),
            (PartCategory.LEG, "Thruster Leg", CombatStats(speed=20, energy_consumption=3)),
        ],
        "chips": [ExpansionChipEffect.SPEED_BUFF],
    },
}


def create_combat_bot(
    name: str,
    owner_id: str | None = None,
    role: CombatRole | str = "assault",
    player_id: str | None = None,
    bot_type: BotType | str = BotType.PLAYABLE,
    rarity: Rarity = Rarity.UNCOMMON,
) -> Bot:
    """Build a battle-ready bot outfitted for ``role``.

    Raises:
        BotConstructionError: If the role is unknown or the player rule is broken.
    """
    loadout = _COMBAT_ROLES.get(role)
    if loadout is None:
        raise BotConstructionError(
            f"Unknown combat role: {role}",
            bot_type=str(bot_type),
            rule="combat_role",
        )
    resolved = coerce_bot_type(bot_type)
    return Bot(
        BotConfiguration(
            name=name,
            bot_type=resolved,
            owner_id=owner_id,
            player_id=player_id,
            skeleton=create_skeleton(loadout["skeleton"], rarity=rarity),
            soul_chip=None if resolved.is_worker else _basic_soul_chip(name),
            parts=[
                create_part(category, name=part_name, rarity=rarity, stats=stats)
                for category, part_name, stats in loadout["parts"]
            ],
            expansion_chips=[
                create_expansion_chip(effect, name=f"{role.title()} {effect.value}", rarity=rarity)
                for effect in loadout["chips"]
            ],
        )
    )


UtilitySpecialization = Literal["construction", "mining", "repair", "transport"]

_UTILITY_SPECIALIZATIONS: dict[str, dict[str, Any]] = {
    "construction": {
        "skeleton": SkeletonType.HEAVY,
        "parts": [
            (PartCategory.ARM, "Lifting Arm", CombatStats(attack=6, defense=10, energy_consumption=4), "heavy_lift"),
            (PartCategory.ARM, "Welding Arm", CombatStats(attack=8, defense=6, energy_consumption=4), "weld"),
            (PartCategory.LEG, "Stabilizer Leg", CombatStats(defense=10, speed=4, energy_consumption=2), None),
            (PartCategory.LEG, "Stabilizer Leg", CombatStats(defense=10, speed=4, energy_consumption=2), None),
        ],
        "chips": [ExpansionChipEffect.STAT_BOOST],
    },
    "mining": {
        "skeleton": SkeletonType.HEAVY,
        "parts": [
            (PartCategory.ARM, "Drill Arm", CombatStats(attack=12, defense=6, energy_consumption=5), "drill"),
            (PartCategory.HEAD, "Ore Scanner", CombatStats(perception=15, energy_consumption=2), "ore_scan"),
            (PartCategory.LEG, "Tread Leg", CombatStats(defense=10, speed=3, energy_consumption=3), None),
            (PartCategory.LEG, "Tread Leg", CombatStats(defense=10, speed=3, energy_consumption=3), None),
        ],
        "chips": [ExpansionChipEffect.RESISTANCE],
    },
    "repair": {
        "skeleton": SkeletonType.BALANCED,
        "parts": [
            (PartCategory.ARM, "Tool Arm", CombatStats(attack=3, defense=4, speed=5, energy_consumption=2), "repair"),
            (PartCategory.ACCESSORY, "Diagnostic Kit", CombatStats(perception=12, energy_consumption=1), "diagnose"),
            (PartCategory.LEG, "Utility Leg", CombatStats(defense=5, speed=8, energy_consumption=2), None),
            (PartCategory.LEG, "Utility Leg", CombatStats(defense=5, speed=8, energy_consumption=2), None),
        ],
        "chips": [ExpansionChipEffect.AI_UPGRADE],
    },
    "transport": {
        "skeleton": SkeletonType.LIGHT,
        "parts": [
            (PartCategory.TORSO, "Cargo Bay", CombatStats(defense=8, energy_consumption=2), "cargo"),
            (PartCategory.LEG, "Wheel Leg", CombatStats(speed=15, energy_consumption=1), None),
            (PartCategory.LEG, "Wheel Leg", CombatStats(speed=15, energy_consumption=1), None),
        ],
        "chips": [ExpansionChipEffect.ENERGY_EFFICIENCY],
    },
}


def create_utility_bot(
    name: str,
    owner_id: str | None = None,
    specialization: UtilitySpecialization | str = "construction",
) -> Bot:
    """Build a worker bot outfitted for ``specialization``.

    Raises:
        BotConstructionError: If the specialization is unknown.
    """
    loadout = _UTILITY_SPECIALIZATIONS.get(specialization)
    if loadout is None:
        raise BotConstructionError(
            f"Unknown utility specialization: {specialization}",
            bot_type=BotType.WORKER.value,
            rule="utility_specialization",
        )
    parts = []
    for category, part_name, stats, ability in loadout["parts"]:
        abilities = [Ability(id=ability, name=ability.replace("_", " ").title())] if ability else []
        parts.append(create_part(category, name=part_name, stats=stats, abilities=abilities))
    return Bot(
        BotConfiguration(
            name=name,
            bot_type=BotType.WORKER,
            owner_id=owner_id,
            skeleton=create_skeleton(loadout["skeleton"]),
            parts=parts,
            expansion_chips=[
                create_expansion_chip(effect, name=f"{specialization.title()} {effect.value}")
                for effect in loadout["chips"]
            ],
            description=f"{specialization} utility bot",
        )
    )


def assemble_bot(config: BotConfiguration) -> AssemblyResult:
    """Build a bot and validate it, reporting failures instead of raising."""
    try:
        bot = Bot(config)
    except BotkingError as exc:
        logger.warning("Bot assembly failed", name=config.name, error=exc.message)
        return AssemblyResult(success=False, errors=[exc.message])

    validation = bot.validate_assembly()
    return AssemblyResult(
        success=validation.valid,
        bot=bot,
        errors=validation.errors,
        warnings=validation.warnings,
    )


__all__ = [
    "TYPE_POWER_FACTOR",
    "BotConfiguration",
    "AssemblyValidation",
    "AssemblyResult",
    "Bot",
    "create_basic_bot",
    "create_combat_bot",
    "create_utility_bot",
    "assemble_bot",
]
