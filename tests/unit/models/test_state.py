"""Tests for bot state variants and the status effect ledger."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from botking.core.exceptions import UnknownBotTypeError
from botking.models.enums import BotLocation, BotType, StatusEffectType
from botking.models.state import (
    BaseBotState,
    NonWorkerBotState,
    StatusEffect,
    WorkerBotState,
    bot_state_from_json,
    create_bot_state,
    validate_state_for_bot_type,
)


# =============================================================================
# Status Effects
# =============================================================================


class TestStatusEffect:
    """Tests for StatusEffect and the ledger operations."""

    def test_permanent_effect_never_expires(self) -> None:
        """Test duration -1 means permanent."""
        effect = StatusEffect(effect=StatusEffectType.SHIELD_ACTIVE)

        assert effect.is_permanent is True
        assert effect.is_expired(datetime.now() + timedelta(days=365)) is False

    def test_timed_effect_expires(self) -> None:
        """Test a timed effect expires after its duration."""
        effect = StatusEffect(effect=StatusEffectType.OVERCHARGE, duration=60)

        assert effect.is_expired(effect.applied_at + timedelta(seconds=30)) is False
        assert effect.is_expired(effect.applied_at + timedelta(seconds=60)) is True

    def test_add_and_remove(self) -> None:
        """Test adding then removing an effect by id."""
        state = WorkerBotState()
        state.add_status_effect(
            StatusEffect(id="boost", effect=StatusEffectType.ENERGY_BOOST, magnitude=10)
        )

        assert len(state.status_effects) == 1
        assert state.remove_status_effect("boost") is True
        assert state.status_effects == []
        assert state.remove_status_effect("boost") is False

    def test_duplicate_id_replaces(self) -> None:
        """Test adding an effect with an existing id replaces it."""
        state = WorkerBotState()
        state.add_status_effect(
            StatusEffect(id="boost", effect=StatusEffectType.ENERGY_BOOST, magnitude=10)
        )
        state.add_status_effect(
            StatusEffect(id="boost", effect=StatusEffectType.ENERGY_BOOST, magnitude=25)
        )

        assert len(state.status_effects) == 1
        assert state.status_effects[0].magnitude == 25

    def test_query_by_type(self) -> None:
        """Test effects can be filtered by kind."""
        state = WorkerBotState()
        state.add_status_effect(StatusEffect(effect=StatusEffectType.FATIGUE, magnitude=5))
        state.add_status_effect(StatusEffect(effect=StatusEffectType.ENERGY_BOOST, magnitude=5))

        assert len(state.get_active_effects_by_type(StatusEffectType.FATIGUE)) == 1
        assert state.get_active_effects_by_type(StatusEffectType.OVERCHARGE) == []

    def test_effective_energy(self) -> None:
        """Test boosts add to and drains subtract from energy."""
        state = WorkerBotState(energy_level=50)
        state.add_status_effect(StatusEffect(effect=StatusEffectType.ENERGY_BOOST, magnitude=20))
        state.add_status_effect(StatusEffect(effect=StatusEffectType.ENERGY_DRAIN, magnitude=5))

        assert state.calculate_effective_energy() == 65

    def test_prune_expired(self) -> None:
        """Test expired effects are pruned."""
        state = WorkerBotState()
        old = datetime.now() - timedelta(hours=2)
        state.add_status_effect(
            StatusEffect(effect=StatusEffectType.FATIGUE, duration=3600, applied_at=old)
        )
        state.add_status_effect(StatusEffect(effect=StatusEffectType.SHIELD_ACTIVE))

        assert state.prune_expired_effects() == 1
        assert state.status_effects[0].effect == StatusEffectType.SHIELD_ACTIVE


# =============================================================================
# Shared Level Rules
# =============================================================================


class TestLevels:
    """Tests for clamped level updates."""

    def test_construction_clamps(self) -> None:
        """Test out-of-range levels are clamped at construction."""
        state = WorkerBotState(energy_level=150, maintenance_level=-5)

        assert state.energy_level == 100
        assert state.maintenance_level == 0

    def test_updates_saturate(self) -> None:
        """Test energy and maintenance updates saturate."""
        state = WorkerBotState(energy_level=90, maintenance_level=10)

        assert state.update_energy(50) == 100
        assert state.update_maintenance(-50) == 0

    def test_experience_only_increases(self) -> None:
        """Test non-positive experience is ignored."""
        state = WorkerBotState(experience=10)

        state.add_experience(-5)
        state.add_experience(0)

        assert state.experience == 10

    def test_customizations(self) -> None:
        """Test customization storage."""
        state = WorkerBotState()
        state.set_customization("paint", "red")

        assert state.get_customization("paint") == "red"
        assert state.remove_customization("paint") is True
        assert state.get_customization("paint", "none") == "none"


# =============================================================================
# Worker State
# =============================================================================


class TestWorkerBotState:
    """Tests for WorkerBotState."""

    def test_state_type(self) -> None:
        """Test worker state type string."""
        assert WorkerBotState().get_state_type() == "worker"

    def test_full_efficiency(self) -> None:
        """Test efficiency is 1.0 at full energy and maintenance."""
        state = WorkerBotState(energy_level=100, maintenance_level=100)
        assert state.calculate_work_efficiency() == 1.0

    def test_half_efficiency_at_quarter_maintenance(self) -> None:
        """Test efficiency is 0.5 at maintenance 25 and full energy."""
        state = WorkerBotState(energy_level=100, maintenance_level=25)
        assert state.calculate_work_efficiency() == 0.5

    @pytest.mark.parametrize(
        ("energy", "maintenance"),
        [(0, 0), (100, 0), (0, 100), (33, 77), (100, 100)],
    )
    def test_efficiency_bounded(self, energy: float, maintenance: float) -> None:
        """Test efficiency stays within [0, 1]."""
        state = WorkerBotState(energy_level=energy, maintenance_level=maintenance)
        state.add_status_effect(
            StatusEffect(effect=StatusEffectType.PRODUCTIVITY_BOOST, magnitude=50)
        )
        assert 0.0 <= state.calculate_work_efficiency() <= 1.0

    def test_operational(self) -> None:
        """Test a worker needs some energy and maintenance."""
        assert WorkerBotState().is_operational() is True
        assert WorkerBotState(energy_level=0).is_operational() is False
        assert WorkerBotState(maintenance_level=0).is_operational() is False

    def test_perform_work(self) -> None:
        """Test work consumes energy and grants experience."""
        state = WorkerBotState()

        result = state.perform_work(intensity=1.0, duration=1)

        assert result.success is True
        assert result.energy_consumed == 10
        assert result.experience_gained == 5
        assert state.energy_level == 90
        assert state.maintenance_level == 98
        assert state.experience == 5
        assert state.get_active_effects_by_type(StatusEffectType.FATIGUE) == []

    def test_intensive_work_causes_fatigue(self) -> None:
        """Test work above the intensity threshold applies fatigue."""
        state = WorkerBotState()

        state.perform_work(intensity=2.0, duration=1)

        assert len(state.get_active_effects_by_type(StatusEffectType.FATIGUE)) == 1

    def test_work_fails_when_not_operational(self) -> None:
        """Test a drained worker cannot work."""
        state = WorkerBotState(energy_level=0)

        result = state.perform_work()

        assert result.success is False
        assert state.experience == 0

    def test_rest(self) -> None:
        """Test rest restores energy and clears fatigue after two units."""
        state = WorkerBotState(energy_level=50)
        state.add_status_effect(StatusEffect(effect=StatusEffectType.FATIGUE, magnitude=10))

        assert state.rest(1) == 20
        assert state.energy_level == 70
        assert len(state.get_active_effects_by_type(StatusEffectType.FATIGUE)) == 1

        assert state.rest(2) == 30
        assert state.energy_level == 100
        assert state.get_active_effects_by_type(StatusEffectType.FATIGUE) == []

    def test_work_status(self) -> None:
        """Test work status labels."""
        assert WorkerBotState(energy_level=10).get_work_status() == "Exhausted"
        assert WorkerBotState(maintenance_level=20).get_work_status() == "Needs Maintenance"
        assert WorkerBotState(energy_level=40).get_work_status() == "Low Energy"
        assert WorkerBotState().get_work_status() == "Normal"


# =============================================================================
# Non-Worker State
# =============================================================================


class TestBaseBotState:
    """Tests for the shared state base."""

    def test_operational_rule_lives_on_variants(self) -> None:
        """Test only the concrete variants decide operability."""
        assert not hasattr(BaseBotState(), "is_operational")
        assert WorkerBotState().is_operational() is True
        assert NonWorkerBotState().is_operational() is True


class TestNonWorkerBotState:
    """Tests for NonWorkerBotState."""

    def test_state_type(self) -> None:
        """Test non-worker state type string."""
        assert NonWorkerBotState().get_state_type() == "non-worker"

    def test_bond_clamps_down(self) -> None:
        """Test a large negative delta clamps bond at zero."""
        state = NonWorkerBotState(bond_level=50)
        assert state.update_bond_level(-50) == 0

    def test_bond_clamps_up(self) -> None:
        """Test a large positive delta clamps bond at 100."""
        state = NonWorkerBotState(bond_level=40)
        assert state.update_bond_level(150) == 100

    def test_total_battles_corrected(self) -> None:
        """Test total battles is raised to won + lost."""
        state = NonWorkerBotState(battles_won=3, battles_lost=2, total_battles=1)
        assert state.total_battles == 5

    def test_total_battles_follows_assignment(self) -> None:
        """Test assigning wins or losses raises the total to match."""
        state = NonWorkerBotState()

        state.battles_won = 4
        assert state.total_battles == 4

        state.battles_lost = 2
        assert state.total_battles == 6

        state.total_battles = 1
        assert state.total_battles == 6

    def test_total_battles_kept_when_higher(self) -> None:
        """Test a total above won + lost is left alone."""
        state = NonWorkerBotState(total_battles=10)

        state.battles_won = 3

        assert state.total_battles == 10

    def test_operational_threshold(self) -> None:
        """Test non-workers need maintenance above the configured minimum."""
        assert NonWorkerBotState(maintenance_level=20).is_operational() is False
        assert NonWorkerBotState(maintenance_level=21).is_operational() is True

    def test_battle_stats(self) -> None:
        """Test battle stats after a mix of wins and losses."""
        state = NonWorkerBotState()
        for won in (True, True, True, False):
            state.record_battle_result(won)

        stats = state.get_battle_stats()

        assert stats.won == 3
        assert stats.lost == 1
        assert stats.total == 4
        assert stats.win_rate == 75.0

    def test_battle_stats_without_battles(self) -> None:
        """Test win rate is zero with no battles."""
        assert NonWorkerBotState().get_battle_stats().win_rate == 0.0

    def test_win_grants_experience_and_bond(self) -> None:
        """Test a win grants experience and bond."""
        state = NonWorkerBotState(bond_level=20)

        state.record_battle_result(True)

        assert state.experience == 50
        assert state.bond_level == 22
        assert state.energy_level == 85
        assert len(state.get_active_effects_by_type(StatusEffectType.MORALE_BOOST)) == 1

    def test_social_status_new_bot(self) -> None:
        """Test a freshly created bot is very active and untested."""
        status = NonWorkerBotState().calculate_social_status()

        assert status.activity_level == "Very Active"
        assert status.combat_rating == "Untested"

    def test_social_status_dormant(self) -> None:
        """Test a long-idle bot is dormant."""
        state = NonWorkerBotState(last_activity=datetime.now() - timedelta(days=5))
        assert state.calculate_social_status().activity_level == "Dormant"

    def test_train(self) -> None:
        """Test training trades energy for experience and bond."""
        state = NonWorkerBotState(bond_level=20)

        result = state.train(intensity=1.0, duration=1)

        assert result.success is True
        assert state.energy_level == 92
        assert state.experience == 10
        assert state.bond_level == 22

    def test_combat_readiness(self) -> None:
        """Test readiness recommendations for a new bot."""
        readiness = NonWorkerBotState().calculate_combat_readiness()

        assert readiness.status in {
            "Battle Ready",
            "Combat Capable",
            "Needs Preparation",
            "Not Combat Ready",
        }
        assert "Gain experience through training" in readiness.recommendations


# =============================================================================
# Factory & Serialization
# =============================================================================


class TestCreateBotState:
    """Tests for the bot state factory."""

    def test_worker_variant(self) -> None:
        """Test workers get the worker variant in storage."""
        state = create_bot_state(BotType.WORKER)

        assert isinstance(state, WorkerBotState)
        assert state.current_location == BotLocation.STORAGE

    def test_playable_defaults(self) -> None:
        """Test playable defaults."""
        state = create_bot_state(BotType.PLAYABLE)

        assert isinstance(state, NonWorkerBotState)
        assert state.bond_level == 20

    def test_king_defaults(self) -> None:
        """Test king defaults."""
        state = create_bot_state("king")

        assert isinstance(state, NonWorkerBotState)
        assert state.bond_level == 100
        assert state.battles_won == 10
        assert state.experience == 5000

    def test_overrides(self) -> None:
        """Test overrides replace defaults."""
        state = create_bot_state(BotType.PLAYABLE, bond_level=60)
        assert state.bond_level == 60

    def test_unknown_type(self) -> None:
        """Test an unknown bot type names the value."""
        with pytest.raises(UnknownBotTypeError) as exc_info:
            create_bot_state("dragon")

        assert "dragon" in str(exc_info.value)

    def test_round_trip(self) -> None:
        """Test a state rebuilds from its JSON projection."""
        state = create_bot_state(BotType.KING)
        state.add_status_effect(StatusEffect(effect=StatusEffectType.MORALE_BOOST, magnitude=3))

        restored = bot_state_from_json(state.to_json())

        assert isinstance(restored, NonWorkerBotState)
        assert restored == state

    def test_validate_for_bot_type(self) -> None:
        """Test type-specific state warnings."""
        assert validate_state_for_bot_type(create_bot_state(BotType.KING), BotType.KING) == []
        assert validate_state_for_bot_type(
            create_bot_state(BotType.KING, bond_level=50), BotType.KING
        )
        assert validate_state_for_bot_type(WorkerBotState(), BotType.PLAYABLE)
