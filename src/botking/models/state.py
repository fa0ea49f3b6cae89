"""Bot runtime state: the status effect ledger and the two state variants.

A bot's mutable condition is either a WorkerBotState or a
NonWorkerBotState, discriminated by ``state_type``. Which one a bot gets is
decided by its BotType through ``create_bot_state``; consumers dispatch on
``state_type`` (or ``isinstance``) rather than downcasting.

All level updates saturate: energy, maintenance and bond are clamped to
[0, 100] on construction and after every update, and never raise.

Example:
    >>> state = create_bot_state(BotType.WORKER)
    >>> state.perform_work(intensity=1.0, duration=1).success
    True
    >>> state.energy_level < 100
    True
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal
from uuid import uuid4

from pydantic import Field, TypeAdapter, field_validator, model_validator

from botking.core.config import get_settings
from botking.core.constants import (
    BATTLE_ENERGY_COST,
    BATTLE_WEAR,
    FATIGUE_DURATION_SECONDS,
    LOSS_EXPERIENCE,
    MAX_LEVEL,
    MIN_LEVEL,
    PERMANENT_DURATION,
    REST_ENERGY_PER_UNIT,
    TRAIN_BOND_PER_UNIT,
    TRAIN_ENERGY_PER_UNIT,
    TRAIN_EXPERIENCE_PER_UNIT,
    WIN_EXPERIENCE,
    WORK_ENERGY_PER_UNIT,
    WORK_EXPERIENCE_PER_UNIT,
    WORK_WEAR_PER_UNIT,
)
from botking.core.exceptions import UnknownBotTypeError
from botking.core.logging import get_logger
from botking.models.base import DomainModel, ValueModel
from botking.models.enums import BotLocation, BotType, StatusEffectType


logger = get_logger(__name__)


def clamp_level(value: float) -> float:
    """Clamp a level to the inclusive [0, 100] range."""
    return max(MIN_LEVEL, min(MAX_LEVEL, float(value)))


# =============================================================================
# Status Effects
# =============================================================================


class StatusEffect(ValueModel):
    """A timed numeric modifier attached to a bot state.

    Attributes:
        id: Identifier, unique within one state's ledger.
        effect: The kind of modifier.
        magnitude: Strength of the modifier.
        duration: Seconds the effect lasts, or -1 for permanent.
        source: What applied the effect.
        applied_at: When the effect was applied.
    """

    id: str = Field(default_factory=lambda: f"effect_{uuid4().hex[:12]}")
    effect: StatusEffectType
    magnitude: float = 0.0
    duration: int = Field(default=PERMANENT_DURATION, ge=PERMANENT_DURATION)
    source: str = "unknown"
    applied_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_permanent(self) -> bool:
        return self.duration == PERMANENT_DURATION

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the effect's duration has elapsed."""
        if self.is_permanent:
            return False
        elapsed = ((now or datetime.now()) - self.applied_at).total_seconds()
        return elapsed >= self.duration


# =============================================================================
# Operation Results
# =============================================================================


class WorkResult(ValueModel):
    """Outcome of a work or training session."""

    success: bool
    message: str = ""
    output_quality: float = 0.0
    energy_consumed: float = 0.0
    experience_gained: int = 0
    bond_gained: int = 0


class BattleStats(ValueModel):
    """Battle record summary."""

    won: int
    lost: int
    total: int
    win_rate: float


class SocialStatus(ValueModel):
    """Qualitative summary of a non-worker's standing."""

    activity_level: str
    combat_rating: str
    bond_tier: str
    hours_since_activity: float


class CombatReadiness(ValueModel):
    """Weighted readiness score with a status label and advice."""

    score: float
    status: str
    recommendations: list[str] = Field(default_factory=list)


# =============================================================================
# Base State
# =============================================================================


class BaseBotState(DomainModel):
    """Fields and ledger operations shared by both state variants.

    Attributes:
        id: State identifier.
        energy_level: Current energy, 0-100.
        maintenance_level: Current condition, 0-100.
        experience: Accumulated experience. Only increases.
        current_location: Where the bot is.
        status_effects: Ordered ledger of active modifiers.
        customizations: Free-form key-value settings.
        last_activity: Timestamp of the last meaningful action.
    """

    id: str = Field(default_factory=lambda: f"state_{uuid4().hex[:12]}")
    energy_level: float = MAX_LEVEL
    maintenance_level: float = MAX_LEVEL
    experience: int = Field(default=0, ge=0)
    current_location: BotLocation = BotLocation.IDLE
    status_effects: list[StatusEffect] = Field(default_factory=list)
    customizations: dict[str, Any] = Field(default_factory=dict)
    last_activity: datetime = Field(default_factory=datetime.now)

    @field_validator("energy_level", "maintenance_level", mode="after")
    @classmethod
    def clamp_levels(cls, value: float) -> float:
        return clamp_level(value)

    def get_state_type(self) -> str:
        return self.state_type  # type: ignore[attr-defined]

    # -- level updates -----------------------------------------------------

    def update_energy(self, delta: float) -> float:
        """Apply an energy delta and return the new, clamped level."""
        self.energy_level = self.energy_level + delta
        return self.energy_level

    def update_maintenance(self, delta: float) -> float:
        """Apply a maintenance delta and return the new, clamped level."""
        self.maintenance_level = self.maintenance_level + delta
        return self.maintenance_level

    def add_experience(self, amount: int) -> int:
        """Add experience. Non-positive amounts are ignored."""
        if amount > 0:
            self.experience = self.experience + int(amount)
        return self.experience

    def touch(self) -> None:
        self.last_activity = datetime.now()

    # -- status effect ledger ----------------------------------------------

    def add_status_effect(self, effect: StatusEffect) -> None:
        """Add an effect, replacing any existing effect with the same id."""
        self.status_effects = [e for e in self.status_effects if e.id != effect.id]
        self.status_effects.append(effect)

    def remove_status_effect(self, effect_id: str) -> bool:
        """Remove the effect with ``effect_id``. Returns whether one was removed."""
        remaining = [e for e in self.status_effects if e.id != effect_id]
        removed = len(remaining) != len(self.status_effects)
        self.status_effects = remaining
        return removed

    def get_active_effects_by_type(self, effect: StatusEffectType) -> list[StatusEffect]:
        return [e for e in self.status_effects if e.effect == effect]

    def remove_effects_by_type(self, effect: StatusEffectType) -> int:
        """Remove every effect of a kind and return how many were removed."""
        remaining = [e for e in self.status_effects if e.effect != effect]
        removed = len(self.status_effects) - len(remaining)
        self.status_effects = remaining
        return removed

    def prune_expired_effects(self, now: datetime | None = None) -> int:
        """Drop effects whose duration has elapsed and return the count dropped."""
        remaining = [e for e in self.status_effects if not e.is_expired(now)]
        removed = len(self.status_effects) - len(remaining)
        self.status_effects = remaining
        return removed

    def _effect_total(self, effect: StatusEffectType) -> float:
        return sum(e.magnitude for e in self.get_active_effects_by_type(effect))

    def calculate_effective_energy(self) -> float:
        """Energy plus active boosts minus active drains, floored at zero."""
        boost = self._effect_total(StatusEffectType.ENERGY_BOOST)
        drain = self._effect_total(StatusEffectType.ENERGY_DRAIN)
        return max(MIN_LEVEL, self.energy_level + boost - drain)

    def needs_maintenance(self) -> bool:
        return self.maintenance_level < get_settings().gameplay.maintenance_warning_level

    # -- customizations ----------------------------------------------------

    def set_customization(self, key: str, value: Any) -> None:
        self.customizations = {**self.customizations, key: value}

    def get_customization(self, key: str, default: Any = None) -> Any:
        return self.customizations.get(key, default)

    def remove_customization(self, key: str) -> bool:
        if key not in self.customizations:
            return False
        self.customizations = {k: v for k, v in self.customizations.items() if k != key}
        return True


# =============================================================================
# Worker State
# =============================================================================


class WorkerBotState(BaseBotState):
    """State for worker bots, which work and rest instead of battling."""

    state_type: Literal["worker"] = "worker"

    def is_operational(self) -> bool:
        return self.energy_level > MIN_LEVEL and self.maintenance_level > MIN_LEVEL

    def calculate_work_efficiency(self) -> float:
        """Work efficiency in [0, 1].

        Energy scales efficiency linearly. Maintenance only starts to hurt
        below 50, scaling linearly to zero, so a fully charged bot at
        maintenance 25 works at half efficiency.
        """
        energy_factor = self.energy_level / MAX_LEVEL
        maintenance_factor = min(self.maintenance_level, 50.0) / 50.0
        efficiency = energy_factor * maintenance_factor

        efficiency += self._effect_total(StatusEffectType.PRODUCTIVITY_BOOST) / 100
        efficiency -= self._effect_total(StatusEffectType.FATIGUE) / 100
        efficiency += self._effect_total(StatusEffectType.MAINTENANCE_BONUS) / 200

        return max(0.0, min(1.0, efficiency))

    def perform_work(self, intensity: float = 1.0, duration: float = 1) -> WorkResult:
        """Work for ``duration`` units at ``intensity``.

        Returns:
            A failed WorkResult when the bot is not operational, otherwise
            the quality produced, energy consumed and experience gained.
        """
        if not self.is_operational():
            return WorkResult(success=False, message="Bot is not operational")

        load = max(0.0, intensity) * max(0.0, duration)
        efficiency = self.calculate_work_efficiency()
        output_quality = efficiency * (self.energy_level / MAX_LEVEL)

        energy_consumed = min(self.energy_level, load * WORK_ENERGY_PER_UNIT)
        self.update_energy(-energy_consumed)
        self.update_maintenance(-load * WORK_WEAR_PER_UNIT)

        experience = max(1, round(load * WORK_EXPERIENCE_PER_UNIT * max(efficiency, 0.2)))
        self.add_experience(experience)

        if intensity > get_settings().gameplay.fatigue_intensity_threshold:
            self.add_status_effect(
                StatusEffect(
                    id=f"fatigue_{uuid4().hex[:8]}",
                    effect=StatusEffectType.FATIGUE,
                    magnitude=intensity * 5,
                    duration=FATIGUE_DURATION_SECONDS,
                    source="intensive_work",
                )
            )
        self.touch()

        logger.debug(
            "Work performed",
            state_id=self.id,
            intensity=intensity,
            energy_consumed=energy_consumed,
            experience=experience,
        )
        return WorkResult(
            success=True,
            message="Work completed",
            output_quality=round(output_quality, 4),
            energy_consumed=energy_consumed,
            experience_gained=experience,
        )

    def rest(self, duration: float = 1) -> float:
        """Recover energy and return how much was restored.

        Resting for two or more units also clears fatigue.
        """
        restored = min(MAX_LEVEL - self.energy_level, max(0.0, duration) * REST_ENERGY_PER_UNIT)
        self.update_energy(restored)
        if duration >= 2:
            self.remove_effects_by_type(StatusEffectType.FATIGUE)
        self.touch()
        return restored

    def get_work_status(self) -> str:
        if self.energy_level < 20:
            return "Exhausted"
        if self.needs_maintenance():
            return "Needs Maintenance"
        if self.energy_level < 50:
            return "Low Energy"
        if (
            self.get_active_effects_by_type(StatusEffectType.PRODUCTIVITY_BOOST)
            and self.calculate_work_efficiency() >= 0.9
        ):
            return "High Performance"
        return "Normal"


# =============================================================================
# Non-Worker State
# =============================================================================


class NonWorkerBotState(BaseBotState):
    """State for playable, king, rogue and govbot bots.

    Attributes:
        bond_level: Attachment to the owning player, 0-100.
        battles_won: Number of won battles.
        battles_lost: Number of lost battles.
        total_battles: Total battles. Never below won + lost.
    """

    state_type: Literal["non-worker"] = "non-worker"
    bond_level: float = 0.0
    battles_won: int = Field(default=0, ge=0)
    battles_lost: int = Field(default=0, ge=0)
    total_battles: int = Field(default=0, ge=0)

    @field_validator("bond_level", mode="after")
    @classmethod
    def clamp_bond(cls, value: float) -> float:
        return clamp_level(value)

    @model_validator(mode="after")
    def raise_total_battles(self) -> "NonWorkerBotState":
        """Keep total_battles at least won + lost, on construction and assignment."""
        recorded = self.battles_won + self.battles_lost
        if self.total_battles < recorded:
            # Plain assignment would re-enter this validator.
            self.__dict__["total_battles"] = recorded
        return self

    def is_operational(self) -> bool:
        minimum = get_settings().gameplay.non_worker_min_maintenance
        return self.energy_level > MIN_LEVEL and self.maintenance_level > minimum

    def update_bond_level(self, delta: float) -> float:
        self.bond_level = self.bond_level + delta
        return self.bond_level

    def record_battle_result(self, won: bool) -> None:
        self.total_battles += 1
        if won:
            self.battles_won += 1
        else:
            self.battles_lost += 1

        self.add_experience(WIN_EXPERIENCE if won else LOSS_EXPERIENCE)
        self.update_bond_level(2 if won else -1)
        self.update_energy(-BATTLE_ENERGY_COST)
        self.update_maintenance(-BATTLE_WEAR)

        if won:
            effect = StatusEffect(
                id=f"morale_boost_{uuid4().hex[:8]}",
                effect=StatusEffectType.MORALE_BOOST,
                magnitude=10,
                duration=1800,
                source="battle_victory",
            )
        else:
            effect = StatusEffect(
                id=f"morale_penalty_{uuid4().hex[:8]}",
                effect=StatusEffectType.MORALE_PENALTY,
                magnitude=5,
                duration=3600,
                source="battle_defeat",
            )
        self.add_status_effect(effect)
        self.touch()

        logger.info(
            "Battle recorded",
            state_id=self.id,
            won=won,
            record=f"{self.battles_won}-{self.battles_lost}",
        )

    def get_battle_stats(self) -> BattleStats:
        total = self.total_battles
        win_rate = round(self.battles_won / total * 100, 2) if total > 0 else 0.0
        return BattleStats(
            won=self.battles_won,
            lost=self.battles_lost,
            total=total,
            win_rate=win_rate,
        )

    def calculate_social_status(self, now: datetime | None = None) -> SocialStatus:
        """Summarise activity, combat rating and bond.

        Activity bands by hours since last activity: under 1 is Very Active,
        under 6 Active, under 24 Moderate, under 72 Inactive, else Dormant.
        A bot with no battles is Untested.
        """
        hours = max(0.0, ((now or datetime.now()) - self.last_activity).total_seconds() / 3600)
        if hours < 1:
            activity = "Very Active"
        elif hours < 6:
            activity = "Active"
        elif hours < 24:
            activity = "Moderate"
        elif hours < 72:
            activity = "Inactive"
        else:
            activity = "Dormant"

        if self.total_battles == 0:
            rating = "Untested"
        else:
            win_rate = self.get_battle_stats().win_rate
            if win_rate >= 80:
                rating = "Elite"
            elif win_rate >= 65:
                rating = "Veteran"
            elif win_rate >= 50:
                rating = "Competent"
            elif win_rate >= 30:
                rating = "Developing"
            else:
                rating = "Struggling"

        if self.bond_level >= 80:
            bond_tier = "Devoted"
        elif self.bond_level >= 50:
            bond_tier = "Loyal"
        elif self.bond_level >= 20:
            bond_tier = "Friendly"
        else:
            bond_tier = "Distant"

        return SocialStatus(
            activity_level=activity,
            combat_rating=rating,
            bond_tier=bond_tier,
            hours_since_activity=round(hours, 2),
        )

    def calculate_morale(self) -> float:
        morale = self.bond_level
        if self.total_battles > 0:
            win_rate = self.get_battle_stats().win_rate
            if win_rate > 70:
                morale += 15
            elif win_rate < 30:
                morale -= 15
        morale += self._effect_total(StatusEffectType.MORALE_BOOST)
        morale -= self._effect_total(StatusEffectType.MORALE_PENALTY)
        return clamp_level(morale)

    def calculate_combat_readiness(self) -> CombatReadiness:
        experience_score = min(MAX_LEVEL, self.experience / 10)
        score = (
            self.energy_level * 0.3
            + self.maintenance_level * 0.25
            + self.bond_level * 0.2
            + experience_score * 0.15
            + self.calculate_morale() * 0.1
        )

        if score >= 85:
            status = "Battle Ready"
        elif score >= 70:
            status = "Combat Capable"
        elif score >= 50:
            status = "Needs Preparation"
        else:
            status = "Not Combat Ready"

        recommendations: list[str] = []
        if self.energy_level < 50:
            recommendations.append("Recharge energy before combat")
        if self.maintenance_level < 50:
            recommendations.append("Schedule maintenance")
        if self.bond_level < 30:
            recommendations.append("Spend time training to build bond")
        if self.experience < 100:
            recommendations.append("Gain experience through training")

        return CombatReadiness(score=round(score, 2), status=status, recommendations=recommendations)

    def train(self, intensity: float = 1.0, duration: float = 1) -> WorkResult:
        """Train, trading energy for experience and bond."""
        if not self.is_operational():
            return WorkResult(success=False, message="Bot is not operational")

        load = max(0.0, intensity) * max(0.0, duration)
        energy_consumed = min(self.energy_level, load * TRAIN_ENERGY_PER_UNIT)
        experience = round(load * TRAIN_EXPERIENCE_PER_UNIT)
        bond = round(load * TRAIN_BOND_PER_UNIT)

        self.update_energy(-energy_consumed)
        self.add_experience(experience)
        self.update_bond_level(bond)
        self.add_status_effect(
            StatusEffect(
                id=f"skill_improvement_{uuid4().hex[:8]}",
                effect=StatusEffectType.SKILL_IMPROVEMENT,
                magnitude=intensity * 5,
                duration=7200,
                source="training",
            )
        )
        self.touch()
        return WorkResult(
            success=True,
            message="Training completed",
            energy_consumed=energy_consumed,
            experience_gained=experience,
            bond_gained=bond,
        )


BotState = Annotated[WorkerBotState | NonWorkerBotState, Field(discriminator="state_type")]

_bot_state_adapter: TypeAdapter[WorkerBotState | NonWorkerBotState] = TypeAdapter(BotState)


def bot_state_from_json(data: dict[str, Any]) -> WorkerBotState | NonWorkerBotState:
    """Rebuild whichever state variant ``data`` describes."""
    return _bot_state_adapter.validate_python(data)


# =============================================================================
# State Factory
# =============================================================================

_DEFAULT_STATE_CONFIGS: dict[BotType, dict[str, Any]] = {
    BotType.WORKER: {"current_location": BotLocation.STORAGE},
    BotType.PLAYABLE: {"bond_level": 20, "current_location": BotLocation.TRAINING},
    BotType.KING: {
        "bond_level": 100,
        "battles_won": 10,
        "battles_lost": 1,
        "total_battles": 11,
        "experience": 5000,
        "current_location": BotLocation.TRAINING,
    },
    BotType.ROGUE: {
        "bond_level": 0,
        "battles_won": 15,
        "battles_lost": 5,
        "total_battles": 20,
        "experience": 3000,
    },
    BotType.GOVBOT: {
        "bond_level": 50,
        "battles_won": 5,
        "battles_lost": 1,
        "total_battles": 6,
        "experience": 2000,
    },
}


def coerce_bot_type(bot_type: BotType | str) -> BotType:
    """Convert a raw value to a BotType.

    Raises:
        UnknownBotTypeError: If the value names no bot type.
    """
    try:
        return BotType(bot_type)
    except ValueError:
        raise UnknownBotTypeError(bot_type) from None


def is_worker_type(bot_type: BotType | str) -> bool:
    return coerce_bot_type(bot_type) is BotType.WORKER


def default_state_config(bot_type: BotType | str) -> dict[str, Any]:
    """Type-specific starting values, before caller overrides."""
    return dict(_DEFAULT_STATE_CONFIGS[coerce_bot_type(bot_type)])


def create_bot_state(
    bot_type: BotType | str,
    **overrides: Any,
) -> WorkerBotState | NonWorkerBotState:
    """Create the state variant for ``bot_type`` with its defaults.

    Args:
        bot_type: Bot type deciding the variant.
        **overrides: Field values replacing the type defaults.

    Returns:
        A WorkerBotState for workers, a NonWorkerBotState otherwise.

    Raises:
        UnknownBotTypeError: If ``bot_type`` is not a known bot type.
    """
    resolved = coerce_bot_type(bot_type)
    config = {**default_state_config(resolved), **overrides}
    if resolved is BotType.WORKER:
        return WorkerBotState(**config)
    return NonWorkerBotState(**config)


def validate_state_for_bot_type(
    state: WorkerBotState | NonWorkerBotState,
    bot_type: BotType | str,
) -> list[str]:
    """Return warnings about a state that is unusual for its bot type."""
    resolved = coerce_bot_type(bot_type)
    gameplay = get_settings().gameplay
    warnings: list[str] = []

    expected = "worker" if resolved is BotType.WORKER else "non-worker"
    if state.state_type != expected:
        warnings.append(
            f"State variant {state.state_type} does not match bot type {resolved.value}"
        )
        return warnings

    if isinstance(state, NonWorkerBotState):
        if resolved is BotType.KING and state.bond_level < gameplay.king_min_bond:
            warnings.append(
                f"King bots usually keep a bond level of at least {gameplay.king_min_bond:g}"
            )
        if resolved is BotType.ROGUE and state.bond_level > gameplay.rogue_max_bond:
            warnings.append(
                f"Rogue bots usually keep a bond level of at most {gameplay.rogue_max_bond:g}"
            )
    return warnings


__all__ = [
    "clamp_level",
    "StatusEffect",
    "WorkResult",
    "BattleStats",
    "SocialStatus",
    "CombatReadiness",
    "BaseBotState",
    "WorkerBotState",
    "NonWorkerBotState",
    "BotState",
    "bot_state_from_json",
    "coerce_bot_type",
    "is_worker_type",
    "default_state_config",
    "create_bot_state",
    "validate_state_for_bot_type",
]
