"""Tests for slot layouts and slot assignment."""

from __future__ import annotations

from typing import Any

import pytest

from botking.core.config import clear_settings_cache
from botking.models.enums import (
    BotType,
    PartCategory,
    Rarity,
    SkeletonType,
    SlotCategory,
    SlotIdentifier,
)
from botking.models.equipment import SoulChip, create_part, create_skeleton
from botking.models.slots import SLOT_REGISTRY, SlotConfiguration


def _config(
    skeleton_type: SkeletonType = SkeletonType.BALANCED,
    bot_type: BotType = BotType.WORKER,
    rarity: Rarity = Rarity.COMMON,
) -> SlotConfiguration:
    return SlotConfiguration.build_from_skeleton(
        create_skeleton(skeleton_type, rarity=rarity), bot_type
    )


class TestBuildFromSkeleton:
    """Tests for slot layouts."""

    def test_balanced_layout(self) -> None:
        """Test the balanced layout in descriptor order."""
        assert _config().slot_ids == [
            SlotIdentifier.SKELETON,
            SlotIdentifier.SOUL_CHIP,
            SlotIdentifier.HEAD_1,
            SlotIdentifier.TORSO_1,
            SlotIdentifier.ARM_LEFT,
            SlotIdentifier.ARM_RIGHT,
            SlotIdentifier.LEG_LEFT,
            SlotIdentifier.LEG_RIGHT,
            SlotIdentifier.ACCESSORY_1,
            SlotIdentifier.EXPANSION_1,
            SlotIdentifier.EXPANSION_2,
        ]

    @pytest.mark.parametrize("skeleton_type", list(SkeletonType))
    def test_every_layout_reserves_core_slots(self, skeleton_type: SkeletonType) -> None:
        """Test every skeleton type has skeleton and soul chip slots."""
        config = _config(skeleton_type)

        assert config.has_slot(SlotIdentifier.SKELETON)
        assert config.has_slot(SlotIdentifier.SOUL_CHIP)

    def test_heavy_has_extra_limbs(self) -> None:
        """Test heavy frames get second arm and leg pairs."""
        config = _config(SkeletonType.HEAVY)

        assert len(config.slots_for(SlotCategory.ARM)) == 4
        assert len(config.slots_for(SlotCategory.LEG)) == 4

    def test_flying_has_two_heads(self) -> None:
        """Test flying frames get a second head."""
        assert len(_config(SkeletonType.FLYING).slots_for(SlotCategory.HEAD)) == 2

    def test_expansion_slots_follow_skeleton_slots(self) -> None:
        """Test expansion slot count follows rarity-adjusted slots, capped at four."""
        assert len(_config(rarity=Rarity.RARE).slots_for(SlotCategory.EXPANSION)) == 3
        assert len(_config(rarity=Rarity.PROTOTYPE).slots_for(SlotCategory.EXPANSION)) == 4

    def test_registry_positions(self) -> None:
        """Test slot anchors."""
        head = SLOT_REGISTRY[SlotIdentifier.HEAD_1].visual_position
        arm = SLOT_REGISTRY[SlotIdentifier.ARM_LEFT].visual_position

        assert (head.x, head.y, head.z) == (0, 0, 1.8)
        assert (arm.x, arm.y, arm.z) == (-0.6, 0, 1.2)


class TestAssign:
    """Tests for assign and remove."""

    def test_first_free_slot(self) -> None:
        """Test items fill compatible slots in order, then fail."""
        config = _config()

        first = config.assign(create_part(PartCategory.ARM, name="A"))
        second = config.assign(create_part(PartCategory.ARM, name="B"))
        third = config.assign(create_part(PartCategory.ARM, name="C"))

        assert first.assigned_slot == SlotIdentifier.ARM_LEFT
        assert second.assigned_slot == SlotIdentifier.ARM_RIGHT
        assert third.success is False
        assert "No free arm slot" in third.message

    def test_preferred_slot(self) -> None:
        """Test a free compatible preferred slot is used."""
        config = _config()

        result = config.assign(create_part(PartCategory.ARM, name="A"), SlotIdentifier.ARM_RIGHT)

        assert result.success is True
        assert result.assigned_slot == SlotIdentifier.ARM_RIGHT

    def test_preferred_slot_wrong_category(self) -> None:
        """Test a preferred slot of another category is refused."""
        config = _config()

        result = config.assign(create_part(PartCategory.ARM, name="A"), SlotIdentifier.HEAD_1)

        assert result.success is False
        assert config.is_occupied(SlotIdentifier.HEAD_1) is False

    def test_preferred_slot_occupied(self) -> None:
        """Test an occupied preferred slot is refused."""
        config = _config()
        config.assign(create_part(PartCategory.HEAD, name="H1"))

        result = config.assign(create_part(PartCategory.HEAD, name="H2"), "head_1")

        assert result.success is False
        assert "occupied" in result.message

    def test_preferred_slot_missing_from_layout(self) -> None:
        """Test a slot the layout does not have is refused."""
        result = _config().assign(create_part(PartCategory.HEAD, name="H"), SlotIdentifier.HEAD_3)
        assert result.success is False

    def test_worker_refuses_soul_chip(self) -> None:
        """Test workers cannot slot a soul chip."""
        result = _config().assign(SoulChip(name="Core"))

        assert result.success is False
        assert "cannot have soul chips" in result.message

    def test_non_worker_accepts_soul_chip(self) -> None:
        """Test non-workers slot a soul chip."""
        result = _config(bot_type=BotType.PLAYABLE).assign(SoulChip(name="Core"))
        assert result.assigned_slot == SlotIdentifier.SOUL_CHIP

    def test_item_assigned_once(self) -> None:
        """Test the same item cannot take two slots."""
        config = _config()
        part = create_part(PartCategory.LEG, name="L")
        config.assign(part)

        result = config.assign(part)

        assert result.success is False
        assert config.slot_of(part.id) == SlotIdentifier.LEG_LEFT

    def test_assign_remove_reassign(self) -> None:
        """Test a freed slot accepts a different compatible item."""
        config = _config()
        first = create_part(PartCategory.TORSO, name="T1")
        second = create_part(PartCategory.TORSO, name="T2")

        config.assign(first)
        removed = config.remove(first.id)
        reassigned = config.assign(second, SlotIdentifier.TORSO_1)

        assert removed.success is True
        assert removed.assigned_slot == SlotIdentifier.TORSO_1
        assert reassigned.success is True
        assert config.get_item(SlotIdentifier.TORSO_1) is second

    def test_remove_unknown_item(self) -> None:
        """Test removing an unassigned item fails without raising."""
        result = _config().remove("missing")
        assert result.success is False


class TestSwapAndMove:
    """Tests for swap and move."""

    def test_swap(self) -> None:
        """Test swapping two arm slots."""
        config = _config()
        left = create_part(PartCategory.ARM, name="L")
        right = create_part(PartCategory.ARM, name="R")
        config.assign(left)
        config.assign(right)

        result = config.swap(SlotIdentifier.ARM_LEFT, SlotIdentifier.ARM_RIGHT)

        assert result.success is True
        assert config.slot_of(left.id) == SlotIdentifier.ARM_RIGHT
        assert config.slot_of(right.id) == SlotIdentifier.ARM_LEFT

    def test_swap_across_categories(self) -> None:
        """Test slots of different categories cannot be swapped."""
        config = _config()
        config.assign(create_part(PartCategory.ARM, name="A"))

        assert config.swap(SlotIdentifier.ARM_LEFT, SlotIdentifier.LEG_LEFT).success is False

    def test_move(self) -> None:
        """Test moving an item to a free slot of the same category."""
        config = _config()
        part = create_part(PartCategory.LEG, name="L")
        config.assign(part)

        result = config.move(part.id, SlotIdentifier.LEG_RIGHT)

        assert result.success is True
        assert config.is_occupied(SlotIdentifier.LEG_LEFT) is False
        assert config.slot_of(part.id) == SlotIdentifier.LEG_RIGHT

    def test_move_to_wrong_category(self) -> None:
        """Test moving into another category fails."""
        config = _config()
        part = create_part(PartCategory.LEG, name="L")
        config.assign(part)

        assert config.move(part.id, SlotIdentifier.HEAD_1).success is False


class TestValidateAndVisualize:
    """Tests for validation reports and visualization."""

    def test_worker_missing_body_parts_warns(self) -> None:
        """Test empty required body slots are warnings for a worker."""
        skeleton = create_skeleton(SkeletonType.BALANCED)
        config = SlotConfiguration.build_from_skeleton(skeleton, BotType.WORKER)
        config.assign(skeleton)

        report = config.validate()

        assert report.is_valid is True
        assert SlotIdentifier.HEAD_1 in report.unassigned_required_slots
        assert SlotIdentifier.SOUL_CHIP not in report.unassigned_required_slots
        assert report.warnings

    def test_non_worker_missing_soul_chip_is_error(self) -> None:
        """Test a non-worker without a soul chip fails validation."""
        skeleton = create_skeleton(SkeletonType.BALANCED)
        config = SlotConfiguration.build_from_skeleton(skeleton, BotType.KING)
        config.assign(skeleton)

        report = config.validate()

        assert report.is_valid is False
        assert SlotIdentifier.SOUL_CHIP in report.unassigned_required_slots
        assert report.conflicting_slots == []

    def test_visualize(self) -> None:
        """Test every slot is projected with occupancy and position."""
        config = _config()
        part = create_part(PartCategory.HEAD, name="H")
        config.assign(part)

        visuals = {v.slot_id: v for v in config.visualize()}

        assert len(visuals) == len(config.slot_ids)
        head = visuals[SlotIdentifier.HEAD_1]
        assert head.is_occupied is True
        assert head.part_data is not None
        assert head.part_data["id"] == part.id
        assert head.visual_position.z == 1.8
        assert visuals[SlotIdentifier.TORSO_1].part_data is None

    def test_history_is_bounded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the slot history keeps only the configured number of entries."""
        monkeypatch.setenv("BOTKING_GAMEPLAY_SLOT_HISTORY_LIMIT", "3")
        clear_settings_cache()
        config = _config()
        part: Any = create_part(PartCategory.ARM, name="A")

        for _ in range(3):
            config.assign(part)
            config.remove(part.id)

        assert len(config.history) == 3
        assert config.history[-1].action == "remove"
