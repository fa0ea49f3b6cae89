"""Fixed numeric constants for the Botking domain layer.

Tunable thresholds live in ``botking.core.config``; the values here are
game rules that do not change per deployment.
"""

from __future__ import annotations

# =============================================================================
# State Bounds
# =============================================================================

MIN_LEVEL = 0.0
"""Lower bound for energy, maintenance and bond levels."""

MAX_LEVEL = 100.0
"""Upper bound for energy, maintenance and bond levels."""

PERMANENT_DURATION = -1
"""Status effect duration meaning the effect never expires."""

# =============================================================================
# Worker Rules
# =============================================================================

WORK_ENERGY_PER_UNIT = 10.0
"""Energy consumed per unit of work intensity x duration."""

WORK_WEAR_PER_UNIT = 2.0
"""Maintenance lost per unit of work intensity x duration."""

WORK_EXPERIENCE_PER_UNIT = 5.0
"""Experience granted per unit of work intensity x duration at full efficiency."""

REST_ENERGY_PER_UNIT = 20.0
"""Energy restored per unit of rest duration."""

FATIGUE_DURATION_SECONDS = 3600
"""How long fatigue from intensive work lasts."""

# =============================================================================
# Non-Worker Rules
# =============================================================================

WIN_EXPERIENCE = 50
"""Experience granted for a won battle."""

LOSS_EXPERIENCE = 25
"""Experience granted for a lost battle."""

BATTLE_ENERGY_COST = 15.0
"""Energy spent per recorded battle."""

BATTLE_WEAR = 5.0
"""Maintenance lost per recorded battle."""

TRAIN_ENERGY_PER_UNIT = 8.0
"""Energy consumed per unit of training intensity x duration."""

TRAIN_EXPERIENCE_PER_UNIT = 10.0
"""Experience granted per unit of training intensity x duration."""

TRAIN_BOND_PER_UNIT = 1.5
"""Bond gained per unit of training intensity x duration."""

# =============================================================================
# Equipment Rules
# =============================================================================

CHIP_UPGRADE_BONUS_PER_LEVEL = 0.02
"""Additional effect magnitude per expansion chip upgrade level."""

CHIP_BASE_UPGRADE_COST = 50
"""Upgrade cost of a level 0 common expansion chip."""

PART_BASE_UPGRADE_COST = 100
"""Upgrade cost of a level 0 common part."""

BASE_MAX_ENERGY = 100.0
"""Maximum energy of a bot before soul chip and skeleton adjustments."""

CLONE_NAME_SUFFIX = " (Clone)"
"""Suffix appended to the name of a cloned bot."""

REDACTED = "[REDACTED]"
"""Placeholder written in place of secrets when serializing accounts."""
