"""Slot configuration and assignment for bot equipment.

A skeleton's type decides which body slots exist, its (rarity-adjusted)
slot count decides how many expansion slots it gets, and every layout has a
SKELETON slot and a reserved SOUL_CHIP slot. SlotConfiguration maps those
slots to installed items and enforces:

- a slot holds at most one item;
- an item occupies at most one slot;
- an item only goes into a slot of its own category.

Assignment operations never raise. They return a SlotAssignmentResult whose
``success`` flag callers must check, so batch installs can continue past
individual failures.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Literal

from pydantic import Field

from botking.core.config import get_settings
from botking.core.logging import get_logger
from botking.models.base import ValueModel
from botking.models.enums import BotType, SkeletonType, SlotCategory, SlotIdentifier


if TYPE_CHECKING:
    from botking.models.equipment import Equipment, Skeleton


logger = get_logger(__name__)


# =============================================================================
# Slot Registry
# =============================================================================


class VisualPosition(ValueModel):
    """Slot anchor in model space, used by presentation layers."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class SlotInfo(ValueModel):
    """Static description of one slot."""

    slot_id: SlotIdentifier
    category: SlotCategory
    position: str
    index: int = 0
    is_required: bool = False
    visual_position: VisualPosition = Field(default_factory=VisualPosition)


def _slot(
    slot_id: SlotIdentifier,
    category: SlotCategory,
    position: str,
    xyz: tuple[float, float, float],
    *,
    index: int = 0,
    required: bool = False,
) -> SlotInfo:
    x, y, z = xyz
    return SlotInfo(
        slot_id=slot_id,
        category=category,
        position=position,
        index=index,
        is_required=required,
        visual_position=VisualPosition(x=x, y=y, z=z),
    )


S = SlotIdentifier
C = SlotCategory

SLOT_REGISTRY: dict[SlotIdentifier, SlotInfo] = {
    info.slot_id: info
    for info in (
        _slot(S.HEAD_1, C.HEAD, "center", (0, 0, 1.8), index=0, required=True),
        _slot(S.HEAD_2, C.HEAD, "right", (0.3, 0, 1.8), index=1),
        _slot(S.HEAD_3, C.HEAD, "left", (-0.3, 0, 1.8), index=2),
        _slot(S.TORSO_1, C.TORSO, "center", (0, 0, 1.0), required=True),
        _slot(S.ARM_LEFT, C.ARM, "left", (-0.6, 0, 1.2), index=0),
        _slot(S.ARM_RIGHT, C.ARM, "right", (0.6, 0, 1.2), index=0),
        _slot(S.ARM_LEFT_2, C.ARM, "left", (-0.8, 0, 1.0), index=1),
        _slot(S.ARM_RIGHT_2, C.ARM, "right", (0.8, 0, 1.0), index=1),
        _slot(S.ARM_LEFT_3, C.ARM, "left", (-1.0, 0, 0.8), index=2),
        _slot(S.ARM_RIGHT_3, C.ARM, "right", (1.0, 0, 0.8), index=2),
        _slot(S.LEG_LEFT, C.LEG, "left", (-0.2, 0, 0), index=0, required=True),
        _slot(S.LEG_RIGHT, C.LEG, "right", (0.2, 0, 0), index=0, required=True),
        _slot(S.LEG_LEFT_2, C.LEG, "left", (-0.4, 0, 0), index=1),
        _slot(S.LEG_RIGHT_2, C.LEG, "right", (0.4, 0, 0), index=1),
        _slot(S.LEG_CENTER, C.LEG, "center", (0, 0, 0), index=2),
        _slot(S.ACCESSORY_1, C.ACCESSORY, "front", (0, 0.3, 1.0), index=0),
        _slot(S.ACCESSORY_2, C.ACCESSORY, "back", (0, -0.3, 1.0), index=1),
        _slot(S.ACCESSORY_3, C.ACCESSORY, "right", (0.3, 0, 1.0), index=2),
        _slot(S.ACCESSORY_4, C.ACCESSORY, "left", (-0.3, 0, 1.0), index=3),
        _slot(S.EXPANSION_1, C.EXPANSION, "internal", (0.2, 0.2, 1.0), index=0),
        _slot(S.EXPANSION_2, C.EXPANSION, "internal", (-0.2, 0.2, 1.0), index=1),
        _slot(S.EXPANSION_3, C.EXPANSION, "internal", (0.2, -0.2, 1.0), index=2),
        _slot(S.EXPANSION_4, C.EXPANSION, "internal", (-0.2, -0.2, 1.0), index=3),
        _slot(S.SOUL_CHIP, C.SOUL_CHIP, "core", (0, 0, 1.1), required=True),
        _slot(S.SKELETON, C.SKELETON, "frame", (0, 0, 0.9), required=True),
    )
}

_LIGHT_BODY = (S.HEAD_1, S.TORSO_1, S.ARM_LEFT, S.ARM_RIGHT, S.LEG_LEFT, S.LEG_RIGHT)

SKELETON_BODY_LAYOUTS: dict[SkeletonType, tuple[SlotIdentifier, ...]] = {
    SkeletonType.LIGHT: _LIGHT_BODY,
    SkeletonType.BALANCED: (*_LIGHT_BODY, S.ACCESSORY_1),
    SkeletonType.HEAVY: (
        *_LIGHT_BODY,
        S.ARM_LEFT_2,
        S.ARM_RIGHT_2,
        S.LEG_LEFT_2,
        S.LEG_RIGHT_2,
        S.ACCESSORY_1,
    ),
    SkeletonType.FLYING: (S.HEAD_1, S.HEAD_2, *_LIGHT_BODY[1:]),
    SkeletonType.MODULAR: (
        S.HEAD_1,
        S.HEAD_2,
        S.TORSO_1,
        S.ARM_LEFT,
        S.ARM_RIGHT,
        S.ARM_LEFT_2,
        S.ARM_RIGHT_2,
        S.LEG_LEFT,
        S.LEG_RIGHT,
        S.LEG_CENTER,
        S.ACCESSORY_1,
        S.ACCESSORY_2,
    ),
}

EXPANSION_SLOTS = (S.EXPANSION_1, S.EXPANSION_2, S.EXPANSION_3, S.EXPANSION_4)

del S, C


# =============================================================================
# Result Models
# =============================================================================


class SlotAssignmentResult(ValueModel):
    """Outcome of an assign, remove, swap or move."""

    success: bool
    assigned_slot: SlotIdentifier | None = None
    message: str = ""


class SlotValidationResult(ValueModel):
    """Structured report on the current occupancy."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    conflicting_slots: list[SlotIdentifier] = Field(default_factory=list)
    unassigned_required_slots: list[SlotIdentifier] = Field(default_factory=list)


class SlotVisual(ValueModel):
    """Presentation projection of one slot."""

    slot_id: SlotIdentifier
    category: SlotCategory
    is_occupied: bool
    part_data: dict[str, Any] | None = None
    visual_position: VisualPosition


class SlotHistoryEntry(ValueModel):
    action: Literal["assign", "remove", "swap", "move"]
    slot_id: SlotIdentifier
    item_id: str | None = None
    target_slot: SlotIdentifier | None = None
    timestamp: datetime = Field(default_factory=datetime.now)


# =============================================================================
# Slot Configuration
# =============================================================================


class SlotConfiguration:
    """Addressable slots for one skeleton plus what occupies them.

    Attributes:
        skeleton_type: Frame archetype the layout was built from.
        bot_type: Owning bot's type. Workers refuse soul chips.
        descriptors: Ordered slot descriptions.
        history: Most recent assignment operations, oldest first.
    """

    def __init__(
        self,
        descriptors: tuple[SlotInfo, ...],
        *,
        skeleton_type: SkeletonType,
        bot_type: BotType = BotType.WORKER,
    ) -> None:
        self.skeleton_type = skeleton_type
        self.bot_type = BotType(bot_type)
        self.descriptors = descriptors
        self.history: list[SlotHistoryEntry] = []
        self._slots: dict[SlotIdentifier, SlotInfo] = {d.slot_id: d for d in descriptors}
        self._assignments: dict[SlotIdentifier, str] = {}
        self._items: dict[str, Equipment] = {}

    @classmethod
    def build_from_skeleton(
        cls,
        skeleton: Skeleton,
        bot_type: BotType | str = BotType.WORKER,
    ) -> SlotConfiguration:
        """Create the slot layout for ``skeleton``.

        The layout is SKELETON, SOUL_CHIP, the body slots of the skeleton
        type, then one expansion slot per available skeleton slot (at most
        four).
        """
        expansion_count = min(skeleton.total_slots, len(EXPANSION_SLOTS))
        slot_ids = (
            SlotIdentifier.SKELETON,
            SlotIdentifier.SOUL_CHIP,
            *SKELETON_BODY_LAYOUTS[skeleton.type],
            *EXPANSION_SLOTS[:expansion_count],
        )
        return cls(
            tuple(SLOT_REGISTRY[slot_id] for slot_id in slot_ids),
            skeleton_type=skeleton.type,
            bot_type=BotType(bot_type),
        )

    # -- queries -------------------------------------------------------------

    @property
    def slot_ids(self) -> list[SlotIdentifier]:
        return [d.slot_id for d in self.descriptors]

    @property
    def assignments(self) -> dict[SlotIdentifier, str]:
        """Copy of the slot -> item id map."""
        return dict(self._assignments)

    def has_slot(self, slot_id: SlotIdentifier | str) -> bool:
        return slot_id in self._slots

    def is_occupied(self, slot_id: SlotIdentifier | str) -> bool:
        return slot_id in self._assignments

    def get_item(self, slot_id: SlotIdentifier | str) -> Equipment | None:
        item_id = self._assignments.get(slot_id)  # type: ignore[call-overload]
        return self._items.get(item_id) if item_id else None

    def slot_of(self, item_id: str) -> SlotIdentifier | None:
        for slot_id, assigned in self._assignments.items():
            if assigned == item_id:
                return slot_id
        return None

    def slots_for(self, category: SlotCategory) -> list[SlotIdentifier]:
        return [d.slot_id for d in self.descriptors if d.category == category]

    def free_slots(self, category: SlotCategory) -> list[SlotIdentifier]:
        return [s for s in self.slots_for(category) if s not in self._assignments]

    def required_slots(self) -> list[SlotIdentifier]:
        required = [d.slot_id for d in self.descriptors if d.is_required]
        if self.bot_type is BotType.WORKER:
            required = [s for s in required if s is not SlotIdentifier.SOUL_CHIP]
        return required

    # -- mutations -----------------------------------------------------------

    def assign(
        self,
        item: Equipment,
        preferred_slot: SlotIdentifier | str | None = None,
    ) -> SlotAssignmentResult:
        """Put ``item`` into ``preferred_slot`` or the first free compatible slot."""
        category = item.slot_category

        if category is SlotCategory.SOUL_CHIP and self.bot_type is BotType.WORKER:
            return self._fail("Worker bots cannot have soul chips - they operate with basic AI")

        current = self.slot_of(item.id)
        if current is not None:
            return self._fail(f"Item {item.id} is already assigned to slot {current.value}")

        candidates = self.slots_for(category)
        if not candidates:
            return self._fail(f"No slot on this skeleton accepts {category.value} items")

        if preferred_slot is not None:
            try:
                target = SlotIdentifier(preferred_slot)
            except ValueError:
                return self._fail(f"Unknown slot: {preferred_slot}")
            if target not in self._slots:
                return self._fail(f"Slot {target.value} does not exist on this skeleton")
            if target not in candidates:
                return self._fail(
                    f"Slot {target.value} accepts {self._slots[target].category.value} items, "
                    f"not {category.value}"
                )
            if target in self._assignments:
                return self._fail(f"Slot {target.value} is already occupied")
        else:
            free = self.free_slots(category)
            if not free:
                return self._fail(f"No free {category.value} slot available")
            target = free[0]

        self._assignments[target] = item.id
        self._items[item.id] = item
        self._record("assign", target, item.id)
        logger.debug("Slot assigned", slot=target.value, item_id=item.id)
        return SlotAssignmentResult(
            success=True,
            assigned_slot=target,
            message=f"Assigned {item.id} to {target.value}",
        )

    def remove(self, item_id: str) -> SlotAssignmentResult:
        """Free the slot holding ``item_id``."""
        slot_id = self.slot_of(item_id)
        if slot_id is None:
            return self._fail(f"Item {item_id} is not assigned to any slot")
        del self._assignments[slot_id]
        self._items.pop(item_id, None)
        self._record("remove", slot_id, item_id)
        logger.debug("Slot cleared", slot=slot_id.value, item_id=item_id)
        return SlotAssignmentResult(
            success=True,
            assigned_slot=slot_id,
            message=f"Removed {item_id} from {slot_id.value}",
        )

    def swap(
        self,
        slot_a: SlotIdentifier | str,
        slot_b: SlotIdentifier | str,
    ) -> SlotAssignmentResult:
        """Exchange the contents of two slots of the same category."""
        try:
            first, second = SlotIdentifier(slot_a), SlotIdentifier(slot_b)
        except ValueError:
            return self._fail(f"Unknown slot in swap: {slot_a}, {slot_b}")
        for slot_id in (first, second):
            if slot_id not in self._slots:
                return self._fail(f"Slot {slot_id.value} does not exist on this skeleton")
        if self._slots[first].category != self._slots[second].category:
            return self._fail("Cannot swap slots of different categories")
        if first not in self._assignments and second not in self._assignments:
            return self._fail("Both slots are empty")

        item_a = self._assignments.pop(first, None)
        item_b = self._assignments.pop(second, None)
        if item_a is not None:
            self._assignments[second] = item_a
        if item_b is not None:
            self._assignments[first] = item_b
        self._record("swap", first, item_a, target_slot=second)
        return SlotAssignmentResult(
            success=True,
            assigned_slot=second,
            message=f"Swapped {first.value} and {second.value}",
        )

    def move(self, item_id: str, target_slot: SlotIdentifier | str) -> SlotAssignmentResult:
        """Move an assigned item to a free slot of the same category."""
        source = self.slot_of(item_id)
        if source is None:
            return self._fail(f"Item {item_id} is not assigned to any slot")
        try:
            target = SlotIdentifier(target_slot)
        except ValueError:
            return self._fail(f"Unknown slot: {target_slot}")
        if target not in self._slots:
            return self._fail(f"Slot {target.value} does not exist on this skeleton")
        if self._slots[target].category != self._slots[source].category:
            return self._fail(f"Slot {target.value} does not accept this item")
        if target in self._assignments:
            return self._fail(f"Slot {target.value} is already occupied")

        del self._assignments[source]
        self._assignments[target] = item_id
        self._record("move", source, item_id, target_slot=target)
        return SlotAssignmentResult(
            success=True,
            assigned_slot=target,
            message=f"Moved {item_id} from {source.value} to {target.value}",
        )

    # -- reporting -----------------------------------------------------------

    def validate(self) -> SlotValidationResult:
        """Report conflicts, category mismatches and empty required slots.

        Missing SKELETON or (for non-workers) SOUL_CHIP are errors. Other
        empty required slots are warnings, so partially equipped bots can
        exist while they are being built.
        """
        errors: list[str] = []
        warnings: list[str] = []
        conflicting: list[SlotIdentifier] = []

        seen: dict[str, SlotIdentifier] = {}
        for slot_id, item_id in self._assignments.items():
            if slot_id not in self._slots:
                errors.append(f"Slot {slot_id.value} is not part of this layout")
                conflicting.append(slot_id)
                continue
            if item_id in seen:
                errors.append(
                    f"Item {item_id} occupies both {seen[item_id].value} and {slot_id.value}"
                )
                conflicting.extend([seen[item_id], slot_id])
                continue
            seen[item_id] = slot_id
            item = self._items.get(item_id)
            if item is not None and item.slot_category != self._slots[slot_id].category:
                errors.append(
                    f"Slot {slot_id.value} holds a {item.slot_category.value} item"
                )
                conflicting.append(slot_id)

        unassigned = [s for s in self.required_slots() if s not in self._assignments]
        for slot_id in unassigned:
            if slot_id in (SlotIdentifier.SKELETON, SlotIdentifier.SOUL_CHIP):
                errors.append(f"Required slot {slot_id.value} is empty")
            else:
                warnings.append(f"Required slot {slot_id.value} is empty")

        return SlotValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            conflicting_slots=conflicting,
            unassigned_required_slots=unassigned,
        )

    def visualize(self) -> list[SlotVisual]:
        visuals: list[SlotVisual] = []
        for descriptor in self.descriptors:
            item = self.get_item(descriptor.slot_id)
            visuals.append(
                SlotVisual(
                    slot_id=descriptor.slot_id,
                    category=descriptor.category,
                    is_occupied=item is not None,
                    part_data=item.to_json() if item is not None else None,
                    visual_position=descriptor.visual_position,
                )
            )
        return visuals

    def to_json(self) -> dict[str, Any]:
        return {
            "skeleton_type": self.skeleton_type.value,
            "bot_type": self.bot_type.value,
            "slots": [d.slot_id.value for d in self.descriptors],
            "assignments": {s.value: i for s, i in self._assignments.items()},
        }

    # -- internals -----------------------------------------------------------

    def _fail(self, message: str) -> SlotAssignmentResult:
        logger.debug("Slot operation rejected", reason=message)
        return SlotAssignmentResult(success=False, message=message)

    def _record(
        self,
        action: Literal["assign", "remove", "swap", "move"],
        slot_id: SlotIdentifier,
        item_id: str | None,
        *,
        target_slot: SlotIdentifier | None = None,
    ) -> None:
        self.history.append(
            SlotHistoryEntry(action=action, slot_id=slot_id, item_id=item_id, target_slot=target_slot)
        )
        limit = get_settings().gameplay.slot_history_limit
        if len(self.history) > limit:
            del self.history[: len(self.history) - limit]


__all__ = [
    "VisualPosition",
    "SlotInfo",
    "SLOT_REGISTRY",
    "SKELETON_BODY_LAYOUTS",
    "EXPANSION_SLOTS",
    "SlotAssignmentResult",
    "SlotValidationResult",
    "SlotVisual",
    "SlotHistoryEntry",
    "SlotConfiguration",
]
