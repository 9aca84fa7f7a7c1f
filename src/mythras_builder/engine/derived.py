"""Derived statistics for Mythras characters.

Every function here is pure and total over non-negative integers. Nothing
is cached: callers recompute from the current characteristics whenever
they need a value, so derived stats can never lag behind an edit.
"""

from __future__ import annotations

from mythras_builder.core.constants import ACTION_POINTS, HIT_LOCATIONS, MOVEMENT_RATE
from mythras_builder.models.characteristics import Characteristics
from mythras_builder.models.snapshot import DerivedStats, HitLocations


# =============================================================================
# Tables
# =============================================================================

DAMAGE_MODIFIER_TABLE: tuple[tuple[int, str], ...] = (
    (5, "-1d8"),
    (10, "-1d6"),
    (15, "-1d4"),
    (20, "-1d2"),
    (25, "0"),
    (30, "+1d2"),
    (35, "+1d4"),
    (40, "+1d6"),
    (45, "+1d8"),
    (50, "+1d10"),
    (60, "+1d12"),
    (70, "+2d6"),
    (80, "+1d8+1d6"),
    (90, "+2d8"),
    (100, "+1d10+1d8"),
    (110, "+2d10"),
    (120, "+2d10+1d2"),
)
"""(upper bound of STR+SIZ, modifier) in ascending order."""

HIT_POINT_ROWS: tuple[tuple[int, int, int, int, int], ...] = (
    (1, 3, 2, 1, 1),
    (2, 4, 3, 1, 2),
    (3, 5, 4, 2, 3),
    (4, 6, 5, 3, 4),
    (5, 7, 6, 4, 5),
    (6, 8, 7, 5, 6),
    (7, 9, 8, 6, 7),
    (8, 10, 9, 7, 8),
)
"""Head, chest, abdomen, arm, leg per CON+SIZ band of five."""

DEFAULT_OVERFLOW_OFFSET = 13


# =============================================================================
# Lookups
# =============================================================================


def damage_modifier(str_siz: int) -> str:
    """Look up the damage modifier for a STR+SIZ total.

    Above 120 one d2 is added per full 10 points over 120.

    Args:
        str_siz: Sum of STR and SIZ.

    Returns:
        The modifier as dice notation, or "0".
    """
    for upper, modifier in DAMAGE_MODIFIER_TABLE:
        if str_siz <= upper:
            return modifier
    extra = (str_siz - 120) // 10
    return f"+2d10+{extra}d2"


def _banded(value: int, bands: tuple[int, int, int], offset: int) -> int:
    # Three bands up to 18, then +1 per 6 points measured from the offset
    low, mid, high = bands
    if value <= 6:
        return low
    if value <= 12:
        return mid
    if value <= 18:
        return high
    return high + (value - offset) // 6


def experience_modifier(cha: int, *, offset: int = DEFAULT_OVERFLOW_OFFSET) -> int:
    """Experience modifier from CHA: -1, 0, +1, then +1 per 6 above 18."""
    return _banded(cha, (-1, 0, 1), offset)


def healing_rate(con: int, *, offset: int = DEFAULT_OVERFLOW_OFFSET) -> int:
    """Healing rate from CON: 1, 2, 3, then +1 per 6 above 18."""
    return _banded(con, (1, 2, 3), offset)


def luck_points(pow_: int, *, offset: int = DEFAULT_OVERFLOW_OFFSET) -> int:
    """Luck points from POW: 1, 2, 3, then +1 per 6 above 18."""
    return _banded(pow_, (1, 2, 3), offset)


def hit_points_per_location(con_siz: int) -> HitLocations:
    """Hit points for each body location from a CON+SIZ total.

    The row is ``(sum - 1) // 5`` clamped to the table; above 40 every
    location gains one point per further 5.

    Args:
        con_siz: Sum of CON and SIZ.

    Returns:
        Hit points per location.
    """
    row = min(max((con_siz - 1) // 5, 0), len(HIT_POINT_ROWS) - 1)
    extra = max(0, (con_siz - 40) // 5)
    values = (base + extra for base in HIT_POINT_ROWS[row])
    return HitLocations(**dict(zip(HIT_LOCATIONS, values)))


def initiative_bonus(dex: int, int_: int) -> int:
    return (dex + int_) // 2


def derive(
    characteristics: Characteristics,
    *,
    overflow_offset: int = DEFAULT_OVERFLOW_OFFSET,
) -> DerivedStats:
    """Compute every derived statistic for a characteristic set.

    Args:
        characteristics: Current characteristic values.
        overflow_offset: Offset for the above-18 band (13 or 18).

    Returns:
        Frozen DerivedStats.
    """
    c = characteristics
    return DerivedStats(
        action_points=ACTION_POINTS,
        damage_modifier=damage_modifier(c.strength + c.size),
        experience_modifier=experience_modifier(c.charisma, offset=overflow_offset),
        healing_rate=healing_rate(c.constitution, offset=overflow_offset),
        initiative_bonus=initiative_bonus(c.dexterity, c.intelligence),
        luck_points=luck_points(c.power, offset=overflow_offset),
        magic_points=c.power,
        movement_rate=MOVEMENT_RATE,
        hit_points=hit_points_per_location(c.constitution + c.size),
    )


__all__ = [
    "DAMAGE_MODIFIER_TABLE",
    "HIT_POINT_ROWS",
    "DEFAULT_OVERFLOW_OFFSET",
    "damage_modifier",
    "experience_modifier",
    "healing_rate",
    "luck_points",
    "hit_points_per_location",
    "initiative_bonus",
    "derive",
]
