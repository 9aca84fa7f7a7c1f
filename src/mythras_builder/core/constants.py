"""Rules constants for the Mythras character builder.

These are the fixed numbers of the rules that are not worth exposing as
settings: dice expressions, default values and the derived statistics
that are identical for every character.
"""

from __future__ import annotations

# =============================================================================
# Characteristic Generation
# =============================================================================

DEFAULT_CHARACTERISTIC = 10
"""Value every characteristic holds before generation."""

MIN_CHARACTERISTIC = 3
"""Lowest value for STR, CON, DEX, POW and CHA."""

MIN_SIZE_INTELLECT = 8
"""Lowest value for SIZ and INT (their roll adds a flat 6)."""

STANDARD_ROLL = "3d6"
"""Dice rolled for STR, CON, DEX, POW and CHA."""

SIZE_INTELLECT_ROLL = "2d6+6"
"""Dice rolled for SIZ and INT."""

# =============================================================================
# Derived Statistics
# =============================================================================

ACTION_POINTS = 2
"""Action points every character receives."""

MOVEMENT_RATE = 6
"""Base movement rate in metres."""

HIT_LOCATIONS = ("head", "chest", "abdomen", "arm", "leg")
"""Body locations tracked for hit points, in table order."""

# =============================================================================
# Money & Social Class
# =============================================================================

PERCENTILE_ROLL = "1d100"
"""Roll used to pick a social class from a culture's table."""

PERCENTILE_MIN = 1
PERCENTILE_MAX = 100

DEFAULT_MONEY_MULTIPLIER = 10
"""Silver pieces per point of the culture's money roll."""
