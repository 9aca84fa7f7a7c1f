"""Reference catalog schemas.

The catalog is the immutable rules data a build session reads: skill base
formulas, age brackets, cultures, careers and the equipment list. It is
supplied once when a session is created and never mutated afterwards.

Skill formulas are tagged data rather than code, so the whole catalog can
be round-tripped through JSON with ``model_dump_json`` and
``ReferenceCatalog.model_validate_json``.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mythras_builder.core.constants import (
    DEFAULT_MONEY_MULTIPLIER,
    PERCENTILE_MAX,
    PERCENTILE_MIN,
)
from mythras_builder.models.enums import Characteristic, EquipmentCategory, FormulaKind


_QUALIFIER_PATTERN = re.compile(r"\s*\(.*?\)\s*")


def normalize_skill_name(name: str) -> str:
    """Strip parenthetical qualifiers from a skill name.

    Args:
        name: Skill name as shown on a sheet.

    Returns:
        The bare skill name used for formula and list lookups.

    Example:
        >>> normalize_skill_name("Combat Style (Sword & Shield)")
        'Combat Style'
    """
    return _QUALIFIER_PATTERN.sub(" ", name).strip()


# =============================================================================
# Skill Formulas
# =============================================================================


class SkillFormula(BaseModel):
    """Base value formula for a standard skill.

    ``double`` evaluates ``2 * first + bonus``; ``sum`` evaluates
    ``first + second + bonus``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: FormulaKind
    first: Characteristic
    second: Characteristic | None = None
    bonus: int = 0

    @model_validator(mode="after")
    def check_operands(self) -> "SkillFormula":
        if self.kind == FormulaKind.SUM and self.second is None:
            raise ValueError("sum formula needs a second characteristic")
        if self.kind == FormulaKind.DOUBLE and self.second is not None:
            raise ValueError("double formula takes a single characteristic")
        return self

    @classmethod
    def sum_of(
        cls, first: Characteristic, second: Characteristic, bonus: int = 0
    ) -> "SkillFormula":
        return cls(kind=FormulaKind.SUM, first=first, second=second, bonus=bonus)

    @classmethod
    def double(cls, first: Characteristic, bonus: int = 0) -> "SkillFormula":
        return cls(kind=FormulaKind.DOUBLE, first=first, bonus=bonus)

    def evaluate(self, values: Mapping[Characteristic, int]) -> int:
        """Compute the base value for the given characteristics.

        Args:
            values: Characteristic values keyed by characteristic.

        Returns:
            The skill's base percentage.
        """
        if self.kind == FormulaKind.DOUBLE:
            return 2 * values[self.first] + self.bonus
        assert self.second is not None
        return values[self.first] + values[self.second] + self.bonus

    def describe(self) -> str:
        """Render the formula the way a rulebook prints it (e.g. 'INT x2+40')."""
        if self.kind == FormulaKind.DOUBLE:
            text = f"{self.first.abbreviation}x2"
        else:
            assert self.second is not None
            text = f"{self.first.abbreviation}+{self.second.abbreviation}"
        if self.bonus:
            text += f"{self.bonus:+d}"
        return text


# =============================================================================
# Age, Social Class & Money
# =============================================================================


class AgeBracket(BaseModel):
    """An age category.

    Attributes:
        key: Category name (Young, Adult, ...).
        bonus: Size of the bonus skill pool.
        max_increase: Per-skill cap on any single pool allocation.
        age_expression: Dice expression for a random age in years.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(min_length=1)
    bonus: int = Field(ge=0)
    max_increase: int = Field(ge=0)
    age_expression: str = Field(min_length=1)


class SocialClass(BaseModel):
    """A social class band on a culture's percentile table."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    low: int = Field(ge=PERCENTILE_MIN, le=PERCENTILE_MAX)
    high: int = Field(ge=PERCENTILE_MIN, le=PERCENTILE_MAX)
    multiplier: float = Field(gt=0)

    @model_validator(mode="after")
    def check_band(self) -> "SocialClass":
        if self.low > self.high:
            raise ValueError(f"social class {self.name!r} has low > high")
        return self

    def contains(self, roll: int) -> bool:
        return self.low <= roll <= self.high


class MoneyFormula(BaseModel):
    """Starting money roll: ``dice`` d ``sides`` times ``multiplier``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    dice: int = Field(ge=1)
    sides: int = Field(ge=2)
    multiplier: int = Field(default=DEFAULT_MONEY_MULTIPLIER, ge=1)

    @property
    def expression(self) -> str:
        return f"{self.dice}d{self.sides}"


# =============================================================================
# Archetypes
# =============================================================================


class Career(BaseModel):
    """A career archetype.

    Attributes:
        key: Career name.
        standard: Skills always eligible for the career pool.
        professional: Skills eligible once selected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(min_length=1)
    standard: tuple[str, ...] = ()
    professional: tuple[str, ...] = ()

    def offers_standard(self, skill: str) -> bool:
        return normalize_skill_name(skill) in self.standard

    def offers_professional(self, skill: str) -> bool:
        return normalize_skill_name(skill) in self.professional


class Culture(Career):
    """A culture archetype.

    Adds the combat styles a culture teaches, its money roll and its
    social class table. The table's percentile bands must cover 1-100
    exactly once.
    """

    combat_styles: tuple[str, ...] = ()
    money: MoneyFormula
    social_classes: tuple[SocialClass, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def check_social_table(self) -> "Culture":
        expected = PERCENTILE_MIN
        for social_class in sorted(self.social_classes, key=lambda s: s.low):
            if social_class.low != expected:
                raise ValueError(
                    f"culture {self.key!r}: social class table has a gap or overlap at {expected}"
                )
            expected = social_class.high + 1
        if expected != PERCENTILE_MAX + 1:
            raise ValueError(f"culture {self.key!r}: social class table stops before 100")
        return self

    def social_class(self, name: str) -> SocialClass | None:
        """Find a social class by name (case-insensitive)."""
        wanted = name.strip().lower()
        for social_class in self.social_classes:
            if social_class.name.lower() == wanted:
                return social_class
        return None

    def social_class_for_roll(self, roll: int) -> SocialClass:
        """Find the class whose band contains a percentile roll.

        Raises:
            ValueError: If the roll is outside 1-100.
        """
        for social_class in self.social_classes:
            if social_class.contains(roll):
                return social_class
        raise ValueError(f"percentile roll {roll} outside 1-100")


class EquipmentItem(BaseModel):
    """A purchasable item priced in silver pieces."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    cost: int = Field(ge=0)
    category: EquipmentCategory = EquipmentCategory.MISC


# =============================================================================
# Catalog
# =============================================================================


def _duplicates(keys: list[str]) -> list[str]:
    return sorted(k for k, count in Counter(keys).items() if count > 1)


class ReferenceCatalog(BaseModel):
    """All static rules data for a build session.

    Attributes:
        skill_formulas: Base formula per standard skill name. The keys are
            the global standard skill list.
        professional_skills: Every professional skill name.
        ages: Age brackets in increasing order.
        cultures: Culture archetypes.
        careers: Career archetypes.
        equipment: Purchasable items.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    skill_formulas: dict[str, SkillFormula]
    professional_skills: tuple[str, ...]
    ages: tuple[AgeBracket, ...] = Field(min_length=1)
    cultures: tuple[Culture, ...] = Field(min_length=1)
    careers: tuple[Career, ...] = Field(min_length=1)
    equipment: tuple[EquipmentItem, ...] = ()

    @model_validator(mode="after")
    def check_keys(self) -> "ReferenceCatalog":
        for label, keys in (
            ("age", [a.key for a in self.ages]),
            ("culture", [c.key for c in self.cultures]),
            ("career", [c.key for c in self.careers]),
            ("equipment", [i.name for i in self.equipment]),
        ):
            dupes = _duplicates(keys)
            if dupes:
                raise ValueError(f"duplicate {label} keys: {', '.join(dupes)}")
        known_professional = set(self.professional_skills)
        for archetype in (*self.cultures, *self.careers):
            unknown = [s for s in archetype.professional if s not in known_professional]
            if unknown:
                raise ValueError(
                    f"{archetype.key!r} lists unknown professional skills: {', '.join(unknown)}"
                )
        return self

    # Lookups return None for unknown keys; callers turn that into a rejection.

    def culture(self, key: str) -> Culture | None:
        return next((c for c in self.cultures if c.key == key), None)

    def career(self, key: str) -> Career | None:
        return next((c for c in self.careers if c.key == key), None)

    def age(self, key: str) -> AgeBracket | None:
        return next((a for a in self.ages if a.key == key), None)

    def item(self, name: str) -> EquipmentItem | None:
        return next((i for i in self.equipment if i.name == name), None)

    def formula(self, skill: str) -> SkillFormula | None:
        """Get the base formula for a skill, ignoring any qualifier."""
        return self.skill_formulas.get(normalize_skill_name(skill))

    def is_standard(self, skill: str) -> bool:
        """Check whether a skill is on the global standard skill list."""
        return normalize_skill_name(skill) in self.skill_formulas

    def is_professional(self, skill: str) -> bool:
        return normalize_skill_name(skill) in self.professional_skills

    def is_known(self, skill: str) -> bool:
        return self.is_standard(skill) or self.is_professional(skill)

    def hobby_skills(self, culture: Culture, career: Career) -> list[str]:
        """List professional skills that can be taken as the bonus skill.

        Standard skills and anything the culture or career already offers
        as a professional skill are excluded.
        """
        excluded = set(self.skill_formulas) | set(culture.professional) | set(career.professional)
        return [s for s in self.professional_skills if s not in excluded]


__all__ = [
    "normalize_skill_name",
    "SkillFormula",
    "AgeBracket",
    "SocialClass",
    "MoneyFormula",
    "Career",
    "Culture",
    "EquipmentItem",
    "ReferenceCatalog",
]
