"""Rule constants for the Wrath & Glory character engine.

This module defines the numeric rules used by the computation, dice and
assembly engines: stat floors, dice face thresholds, XP cost tables and
difficulty names.
"""

from __future__ import annotations

from types import MappingProxyType

# =============================================================================
# Stat Floors
# =============================================================================

MIN_ATTRIBUTE_VALUE = 1
"""Lowest value any computed attribute may take."""

MIN_SKILL_VALUE = 0
"""Lowest value any computed skill may take."""

DEFAULT_TIER = 1
"""Campaign tier used when none is given."""

DEFAULT_RANK = 1
"""Character rank used when none is given."""

# =============================================================================
# Dice Faces (Core Rulebook p.30)
# =============================================================================

ICON_THRESHOLD = 4
"""A die showing this value or higher is an Icon."""

EXALTED_ICON_FACE = 6
"""A die showing this value is an Exalted Icon."""

COMPLICATION_FACE = 1
"""A Wrath die showing this value causes a Complication."""

GLORY_FACE = 6
"""A Wrath die showing this value earns Glory."""

# =============================================================================
# Derived Stats
# =============================================================================

BASE_SPEED = 6
"""Minimum and base movement speed in metres."""

# =============================================================================
# XP Costs (Core Rulebook p.36)
# =============================================================================

# Cost of raising an attribute to the given rating from the one below it
ATTRIBUTE_COSTS = MappingProxyType(
    {
        2: 4,
        3: 10,
        4: 20,
        5: 35,
        6: 55,
        7: 80,
        8: 110,
    }
)

# Cost of raising a skill to the given rank from the one below it
SKILL_COSTS = MappingProxyType(
    {
        1: 2,
        2: 6,
        3: 12,
        4: 20,
        5: 30,
    }
)

# =============================================================================
# Difficulty Numbers
# =============================================================================

DIFFICULTY_NAMES = MappingProxyType(
    {
        3: "Easy",
        4: "Medium",
        5: "Hard",
        6: "Very Hard",
    }
)
"""Names of the middle difficulty bands; DN 2 or less is Simple, 7+ Extreme."""

SIMPLE_DIFFICULTY = "Simple"
EXTREME_DIFFICULTY = "Extreme"


__all__ = [
    "MIN_ATTRIBUTE_VALUE",
    "MIN_SKILL_VALUE",
    "DEFAULT_TIER",
    "DEFAULT_RANK",
    "ICON_THRESHOLD",
    "EXALTED_ICON_FACE",
    "COMPLICATION_FACE",
    "GLORY_FACE",
    "BASE_SPEED",
    "ATTRIBUTE_COSTS",
    "SKILL_COSTS",
    "DIFFICULTY_NAMES",
    "SIMPLE_DIFFICULTY",
    "EXTREME_DIFFICULTY",
]
