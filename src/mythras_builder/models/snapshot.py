"""Immutable build records handed to renderers and exporters.

A ``BuildSnapshot`` is the only view of a session that leaves the engine.
It is frozen and built from copies, so a collaborator holding one can
never reach back into session state.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from mythras_builder.models.characteristics import Characteristics
from mythras_builder.models.enums import GenerationMethod, PoolKind


_FROZEN = ConfigDict(frozen=True)


class HitLocations(BaseModel):
    """Hit points per body location."""

    model_config = _FROZEN

    head: int
    chest: int
    abdomen: int
    arm: int
    leg: int


class DerivedStats(BaseModel):
    """Secondary statistics computed from characteristics."""

    model_config = _FROZEN

    action_points: int
    damage_modifier: str
    experience_modifier: int
    healing_rate: int
    initiative_bonus: int
    luck_points: int
    magic_points: int
    movement_rate: int
    hit_points: HitLocations


class SkillLine(BaseModel):
    """One row of the skill table."""

    model_config = _FROZEN

    name: str
    base: int
    culture: int = 0
    career: int = 0
    bonus: int = 0
    total: int
    standard: bool = False


class PoolSummary(BaseModel):
    model_config = _FROZEN

    pool: PoolKind
    total: int
    spent: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining(self) -> int:
        return self.total - self.spent


class PurchasedItem(BaseModel):
    model_config = _FROZEN

    name: str
    cost: int


class BuildSnapshot(BaseModel):
    """Everything an exporter needs to render a finished character.

    Attributes:
        character_name: Character name.
        player_name: Player name.
        sex: Free-text sex field.
        age_years: Rolled age, if one was rolled.
        age_bracket: Active age category key.
        culture: Active culture key.
        career: Active career key.
        generation_method: How characteristics were produced.
        point_budget: Point-buy budget in force.
        characteristics: Characteristic values.
        derived: Derived statistics.
        skills: Skill rows with a base value or any allocation.
        pools: Culture, career and bonus pool usage.
        culture_professional: Selected culture professional skills.
        career_professional: Selected career professional skills.
        bonus_skill: The bonus (hobby) skill, if any.
        combat_style: Chosen combat style.
        social_class: Social class name, if decided.
        starting_money: Starting silver, if rolled.
        remaining_money: Silver left after purchases.
        equipment: Purchased items in purchase order.
    """

    model_config = _FROZEN

    character_name: str = ""
    player_name: str = ""
    sex: str = ""
    age_years: int | None = None
    age_bracket: str
    culture: str
    career: str
    generation_method: GenerationMethod
    point_budget: int
    characteristics: Characteristics
    derived: DerivedStats
    skills: tuple[SkillLine, ...] = ()
    pools: tuple[PoolSummary, ...] = ()
    culture_professional: tuple[str, ...] = ()
    career_professional: tuple[str, ...] = ()
    bonus_skill: str | None = None
    combat_style: str | None = None
    social_class: str | None = None
    starting_money: int | None = None
    remaining_money: int = 0
    equipment: tuple[PurchasedItem, ...] = Field(default=())

    def skill(self, name: str) -> SkillLine | None:
        return next((line for line in self.skills if line.name == name), None)

    def pool(self, kind: PoolKind) -> PoolSummary:
        return next(p for p in self.pools if p.pool == kind)

    def to_summary(self) -> str:
        """Render a plain-text character sheet.

        Returns:
            Multi-line summary suitable for a terminal or a text export.
        """
        chars = self.characteristics.as_abbreviations()
        hp = self.derived.hit_points
        lines = [
            f"{self.character_name or 'Unnamed'} ({self.player_name or 'no player'})",
            f"Culture: {self.culture}  Career: {self.career}  Age: {self.age_bracket}"
            + (f" ({self.age_years})" if self.age_years is not None else ""),
            f"Social class: {self.social_class or '-'}  Combat style: {self.combat_style or '-'}",
            "",
            "  ".join(f"{k} {v}" for k, v in chars.items()),
            (
                f"Damage {self.derived.damage_modifier}  "
                f"Experience {self.derived.experience_modifier:+d}  "
                f"Healing {self.derived.healing_rate}  "
                f"Initiative {self.derived.initiative_bonus}  "
                f"Luck {self.derived.luck_points}  "
                f"Magic {self.derived.magic_points}  "
                f"AP {self.derived.action_points}  "
                f"Move {self.derived.movement_rate}"
            ),
            (
                f"HP head {hp.head} chest {hp.chest} abdomen {hp.abdomen} "
                f"arm {hp.arm} leg {hp.leg}"
            ),
            "",
            "Skills:",
        ]
        for line in sorted(self.skills, key=lambda s: s.name):
            lines.append(
                f"  {line.name:<28}{line.total:>4}%  "
                f"(base {line.base}, culture {line.culture}, "
                f"career {line.career}, bonus {line.bonus})"
            )
        lines.append("")
        lines.append(
            f"Silver: {self.starting_money if self.starting_money is not None else '-'}"
            f"  remaining {self.remaining_money}"
        )
        for item in self.equipment:
            lines.append(f"  {item.name} ({item.cost} sp)")
        return "\n".join(lines)


__all__ = [
    "HitLocations",
    "DerivedStats",
    "SkillLine",
    "PoolSummary",
    "PurchasedItem",
    "BuildSnapshot",
]
