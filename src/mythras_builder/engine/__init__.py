"""Rules engine for the Mythras character builder.

Submodules:
    dice: Dice rolling (d20 library)
    attributes: Characteristic generation (roll, point-buy, manual)
    derived: Derived statistics tables
    allocation: Culture, career and bonus skill point pools
    money: Social class, starting silver and equipment
    snapshot: BuildSnapshot assembly
    session: BuildSession, the command entry point

Example:
    >>> from mythras_builder.engine import BuildSession, DiceRoller
    >>>
    >>> session = BuildSession(roller=DiceRoller(seed=7))
    >>> session.set_career("Warrior")
    >>> session.allocate("Athletics", "career", 15)
    >>> print(session.snapshot().to_summary())
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from mythras_builder.engine.dice import DiceResult, DiceRoller

# =============================================================================
# Rules Components
# =============================================================================
from mythras_builder.engine.allocation import AllocationEngine, SkillAllocation
from mythras_builder.engine.attributes import AttributeGenerator, point_buy_cost
from mythras_builder.engine.derived import (
    damage_modifier,
    derive,
    experience_modifier,
    healing_rate,
    hit_points_per_location,
    initiative_bonus,
    luck_points,
)
from mythras_builder.engine.money import MoneyLedger

# =============================================================================
# Session
# =============================================================================
from mythras_builder.engine.session import BuildSession
from mythras_builder.engine.snapshot import Identity, build_snapshot


__all__ = [
    # Dice
    "DiceResult",
    "DiceRoller",
    # Components
    "AttributeGenerator",
    "point_buy_cost",
    "AllocationEngine",
    "SkillAllocation",
    "MoneyLedger",
    # Derived stats
    "derive",
    "damage_modifier",
    "experience_modifier",
    "healing_rate",
    "hit_points_per_location",
    "initiative_bonus",
    "luck_points",
    # Session
    "BuildSession",
    "Identity",
    "build_snapshot",
]
