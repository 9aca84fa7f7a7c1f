"""Assemble a BuildSnapshot from live engine state."""

from __future__ import annotations

from dataclasses import dataclass

from mythras_builder.engine.allocation import AllocationEngine
from mythras_builder.engine.attributes import AttributeGenerator
from mythras_builder.engine.derived import derive
from mythras_builder.engine.money import MoneyLedger
from mythras_builder.models.enums import PoolKind, Side
from mythras_builder.models.snapshot import BuildSnapshot, SkillLine


@dataclass
class Identity:
    """Free-text and rolled fields that sit outside the rules engines."""

    character_name: str = ""
    player_name: str = ""
    sex: str = ""
    age_years: int | None = None
    combat_style: str | None = None


def build_skill_lines(
    attributes: AttributeGenerator, allocation: AllocationEngine
) -> tuple[SkillLine, ...]:
    """Skill rows for every skill with a base value or any allocation."""
    characteristics = attributes.characteristics
    lines = []
    for name in allocation.skill_names():
        base = allocation.compute_base(name, characteristics)
        culture = allocation.allocation(name, PoolKind.CULTURE)
        career = allocation.allocation(name, PoolKind.CAREER)
        bonus = allocation.allocation(name, PoolKind.BONUS)
        if not (base or culture or career or bonus):
            continue
        lines.append(
            SkillLine(
                name=name,
                base=base,
                culture=culture,
                career=career,
                bonus=bonus,
                total=allocation.compute_total(name, characteristics),
                standard=allocation.is_floored(name),
            )
        )
    return tuple(lines)


def build_snapshot(
    *,
    identity: Identity,
    attributes: AttributeGenerator,
    allocation: AllocationEngine,
    money: MoneyLedger,
    overflow_offset: int,
) -> BuildSnapshot:
    """Copy the current session state into a frozen BuildSnapshot.

    Args:
        identity: Name, sex, age and combat style fields.
        attributes: Characteristic generator.
        allocation: Allocation engine.
        money: Money ledger.
        overflow_offset: Offset for the above-18 derived stat band.

    Returns:
        A snapshot sharing no mutable state with the engines.
    """
    social_class = money.social_class
    return BuildSnapshot(
        character_name=identity.character_name,
        player_name=identity.player_name,
        sex=identity.sex,
        age_years=identity.age_years,
        age_bracket=allocation.age.key,
        culture=allocation.culture.key,
        career=allocation.career.key,
        generation_method=attributes.method,
        point_budget=attributes.point_budget,
        characteristics=attributes.characteristics,
        derived=derive(attributes.characteristics, overflow_offset=overflow_offset),
        skills=build_skill_lines(attributes, allocation),
        pools=tuple(allocation.pool_state(pool) for pool in PoolKind),
        culture_professional=allocation.selected(Side.CULTURE),
        career_professional=allocation.selected(Side.CAREER),
        bonus_skill=allocation.bonus_skill,
        combat_style=identity.combat_style,
        social_class=social_class.name if social_class else None,
        starting_money=money.starting_money,
        remaining_money=money.remaining,
        equipment=money.purchases(),
    )


__all__ = [
    "Identity",
    "build_skill_lines",
    "build_snapshot",
]
