"""Skill point allocation.

The allocation engine is the state machine at the heart of a build. It
owns the active culture, career and age bracket, the three point pools,
the professional skill selections, the bonus skill, and every skill's
per-pool allocation.

Rules enforced after every public call, including rejected ones:
- a pool never spends more than its total
- no single allocation exceeds the age bracket's per-skill cap
- culture and career points only sit on skills eligible for that pool:
  the archetype's standard skills plus its selected professional skills

Changing culture, career or age re-initializes the affected pool. Skills
that lose eligibility are zeroed, and the professional selection for that
side is re-seeded with the archetype's first professional skills in table
order.
"""

from __future__ import annotations

from collections.abc import Iterator
from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from mythras_builder.core.config import AllocationSettings
from mythras_builder.core.exceptions import CatalogError, InvalidBuildStateError
from mythras_builder.core.logging import get_logger
from mythras_builder.models.catalog import (
    AgeBracket,
    Career,
    Culture,
    ReferenceCatalog,
    normalize_skill_name,
)
from mythras_builder.models.characteristics import Characteristics
from mythras_builder.models.commands import CommandResult
from mythras_builder.models.enums import Characteristic, PoolKind, RejectionReason, Side
from mythras_builder.models.snapshot import PoolSummary


logger = get_logger(__name__)


@dataclass
class SkillAllocation:
    """Points one skill holds in each pool."""

    culture: int = 0
    career: int = 0
    bonus: int = 0

    def get(self, pool: PoolKind) -> int:
        return getattr(self, pool.value)

    def set(self, pool: PoolKind, value: int) -> None:
        setattr(self, pool.value, value)

    @property
    def total(self) -> int:
        return self.culture + self.career + self.bonus


class AllocationEngine:
    """Manages the culture, career and bonus pools.

    Example:
        >>> engine = AllocationEngine(
        ...     default_catalog(), AllocationSettings(),
        ...     culture="Barbarian", career="Agent", age="Adult",
        ... )
        >>> engine.allocate("Athletics", PoolKind.CULTURE, 15).success
        True
        >>> engine.pool_remaining(PoolKind.CULTURE)
        85
    """

    def __init__(
        self,
        catalog: ReferenceCatalog,
        settings: AllocationSettings,
        *,
        culture: str,
        career: str,
        age: str,
    ) -> None:
        """Initialize the engine with a starting culture, career and age.

        Args:
            catalog: Reference data.
            settings: Pool sizes, selection limit and rule variants.
            culture: Starting culture key.
            career: Starting career key.
            age: Starting age bracket key.

        Raises:
            CatalogError: If a starting key is not in the catalog.
        """
        self._catalog = catalog
        self._settings = settings
        self._culture = self._require(catalog.culture(culture), "culture", culture)
        self._career = self._require(catalog.career(career), "career", career)
        self._age = self._require(catalog.age(age), "age", age)
        self._allocations: dict[str, SkillAllocation] = {}
        self._totals: dict[PoolKind, int] = {
            PoolKind.CULTURE: settings.culture_pool,
            PoolKind.CAREER: settings.career_pool,
            PoolKind.BONUS: self._age.bonus,
        }
        self._selections: dict[Side, list[str]] = {Side.CULTURE: [], Side.CAREER: []}
        self._bonus_skill: str | None = None

        self._reseed_selection(Side.CULTURE)
        self._reseed_selection(Side.CAREER)
        if settings.enforce_culture_minimum:
            self._seed_culture_minimum()

    @staticmethod
    def _require(entry: Any, table: str, key: str) -> Any:
        if entry is None:
            raise CatalogError(f"Unknown {table} {key!r}", catalog_key=key)
        return entry

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def culture(self) -> Culture:
        return self._culture

    @property
    def career(self) -> Career:
        return self._career

    @property
    def age(self) -> AgeBracket:
        return self._age

    @property
    def cap(self) -> int:
        """Per-skill, per-pool allocation cap of the active age bracket."""
        return self._age.max_increase

    @property
    def bonus_skill(self) -> str | None:
        return self._bonus_skill

    def selected(self, side: Side) -> tuple[str, ...]:
        return tuple(self._selections[side])

    def allocation(self, skill: str, pool: PoolKind) -> int:
        entry = self._allocations.get(skill)
        return entry.get(pool) if entry else 0

    def allocations(self) -> dict[str, SkillAllocation]:
        """Copy of every non-empty allocation keyed by skill name."""
        return {name: deepcopy(a) for name, a in self._allocations.items() if a.total}

    def pool_total(self, pool: PoolKind) -> int:
        return self._totals[pool]

    def pool_spent(self, pool: PoolKind) -> int:
        return sum(a.get(pool) for a in self._allocations.values())

    def pool_remaining(self, pool: PoolKind) -> int:
        return self._totals[pool] - self.pool_spent(pool)

    def pool_state(self, pool: PoolKind) -> PoolSummary:
        return PoolSummary(pool=pool, total=self.pool_total(pool), spent=self.pool_spent(pool))

    def _archetype(self, side: Side) -> Career:
        return self._culture if side == Side.CULTURE else self._career

    def is_eligible(self, skill: str, pool: PoolKind) -> bool:
        """Check whether a skill may hold points from a pool.

        Culture and career points go to the archetype's standard skills and
        its selected professional skills. Bonus points may go to any skill
        the catalog knows.
        """
        if pool == PoolKind.BONUS:
            return self._catalog.is_known(skill)
        side = Side(pool.value)
        return self._archetype(side).offers_standard(skill) or skill in self._selections[side]

    def eligible_skills(self, pool: PoolKind) -> list[str]:
        """List skill names currently eligible for a pool."""
        if pool == PoolKind.BONUS:
            names = [*self._catalog.skill_formulas, *self._catalog.professional_skills]
        else:
            side = Side(pool.value)
            names = [*self._archetype(side).standard, *self._selections[side]]
        return list(dict.fromkeys(names))

    def eligible_bonus_skills(self) -> list[str]:
        """Professional skills that may be taken as the bonus (hobby) skill."""
        return self._catalog.hobby_skills(self._culture, self._career)

    def is_floored(self, skill: str) -> bool:
        """Check whether a skill's total is held at the standard floor."""
        if self._catalog.is_standard(skill):
            return True
        return self._settings.enforce_culture_minimum and self._culture.offers_standard(skill)

    def compute_base(self, skill: str, characteristics: Characteristics) -> int:
        """Formula base for a skill; 0 when the skill has no formula."""
        formula = self._catalog.formula(skill)
        if formula is None:
            return 0
        return formula.evaluate({c: characteristics.get(c) for c in Characteristic})

    def compute_total(self, skill: str, characteristics: Characteristics) -> int:
        """Base plus all three allocations, floored for standard skills."""
        total = self.compute_base(skill, characteristics)
        entry = self._allocations.get(skill)
        if entry:
            total += entry.total
        if self.is_floored(skill):
            total = max(total, self._settings.standard_skill_floor)
        return total

    def skill_names(self) -> Iterator[str]:
        """Standard skills in catalog order, then any other allocated skill."""
        seen = set()
        for name in self._catalog.skill_formulas:
            seen.add(name)
            yield name
        for name, entry in self._allocations.items():
            if name not in seen and entry.total:
                yield name

    def verify(self) -> None:
        """Check the pool and cap invariants.

        Raises:
            InvalidBuildStateError: If any invariant is broken.
        """
        for pool in PoolKind:
            if not 0 <= self.pool_spent(pool) <= self._totals[pool]:
                raise InvalidBuildStateError(
                    f"{pool} pool spent {self.pool_spent(pool)} of {self._totals[pool]}",
                    pool=pool.value,
                )
        for name, entry in self._allocations.items():
            for pool in PoolKind:
                if not 0 <= entry.get(pool) <= self.cap:
                    raise InvalidBuildStateError(
                        f"{name} holds {entry.get(pool)} {pool} points, cap is {self.cap}",
                        pool=pool.value,
                        skill=name,
                    )
                if entry.get(pool) and not self.is_eligible(name, pool):
                    raise InvalidBuildStateError(
                        f"{name} holds {pool} points but is not eligible",
                        pool=pool.value,
                        skill=name,
                    )

    # =========================================================================
    # Archetype & Age Changes
    # =========================================================================

    def set_culture(self, key: str) -> CommandResult:
        """Switch culture and re-initialize the culture pool.

        Args:
            key: Culture key.

        Returns:
            CommandResult; rejected with UNKNOWN_REFERENCE for a bad key.
        """
        culture = self._catalog.culture(key)
        old = self._culture.key
        if culture is None:
            return CommandResult.rejected(
                "set_culture",
                RejectionReason.UNKNOWN_REFERENCE,
                f"Unknown culture {key!r}",
                old_value=old,
            )
        self._culture = culture
        self._totals[PoolKind.CULTURE] = self._settings.culture_pool
        self._reseed_selection(Side.CULTURE)
        self._drop_ineligible(PoolKind.CULTURE)
        if self._settings.enforce_culture_minimum:
            self._seed_culture_minimum()
        self._revalidate_bonus_skill()
        logger.debug("Culture set", old=old, new=key)
        return CommandResult.accepted(
            "set_culture", f"Culture set to {key}", old_value=old, new_value=key
        )

    def set_career(self, key: str) -> CommandResult:
        """Switch career and re-initialize the career pool."""
        career = self._catalog.career(key)
        old = self._career.key
        if career is None:
            return CommandResult.rejected(
                "set_career",
                RejectionReason.UNKNOWN_REFERENCE,
                f"Unknown career {key!r}",
                old_value=old,
            )
        self._career = career
        self._totals[PoolKind.CAREER] = self._settings.career_pool
        self._reseed_selection(Side.CAREER)
        self._drop_ineligible(PoolKind.CAREER)
        self._revalidate_bonus_skill()
        logger.debug("Career set", old=old, new=key)
        return CommandResult.accepted(
            "set_career", f"Career set to {key}", old_value=old, new_value=key
        )

    def set_age(self, key: str) -> CommandResult:
        """Switch age bracket.

        The bonus pool is resized to the new bracket and every bonus
        allocation is cleared. Culture and career allocations above the new
        cap are cut back to it. The bonus skill, if any, is then granted its
        automatic allocation again.
        """
        age = self._catalog.age(key)
        old = self._age.key
        if age is None:
            return CommandResult.rejected(
                "set_age",
                RejectionReason.UNKNOWN_REFERENCE,
                f"Unknown age category {key!r}",
                old_value=old,
            )
        self._age = age
        self._totals[PoolKind.BONUS] = age.bonus
        for entry in self._allocations.values():
            entry.bonus = 0
            entry.culture = min(entry.culture, age.max_increase)
            entry.career = min(entry.career, age.max_increase)
        self._grant_bonus_skill()
        logger.debug("Age set", old=old, new=key, bonus_pool=age.bonus, cap=age.max_increase)
        return CommandResult.accepted(
            "set_age", f"Age category set to {key}", old_value=old, new_value=key
        )

    # =========================================================================
    # Professional Selection
    # =========================================================================

    def toggle_professional(self, side: Side, skill: str, selected: bool) -> CommandResult:
        """Select or deselect a professional skill on one side.

        Deselecting zeroes the skill's allocation in that side's pool unless
        the skill stays eligible as a standard skill, so a select followed by
        a deselect leaves allocations and pool totals exactly as they were.

        Args:
            side: Culture or career.
            skill: Professional skill name (qualifiers allowed).
            selected: True to select, False to deselect.

        Returns:
            CommandResult; rejected with SELECTION_LIMIT_EXCEEDED or
            INELIGIBLE_TARGET.
        """
        kind = "toggle_professional"
        selection = self._selections[side]
        old = tuple(selection)

        if selected:
            if skill in selection:
                return CommandResult.accepted(
                    kind, f"{skill} already selected", old_value=old, new_value=old
                )
            if not self._archetype(side).offers_professional(skill):
                return CommandResult.rejected(
                    kind,
                    RejectionReason.INELIGIBLE_TARGET,
                    f"{skill} is not a {side} professional skill for {self._archetype(side).key}",
                    old_value=old,
                )
            if len(selection) >= self._settings.professional_limit:
                return CommandResult.rejected(
                    kind,
                    RejectionReason.SELECTION_LIMIT_EXCEEDED,
                    f"Already {len(selection)} {side} professional skills selected",
                    old_value=old,
                )
            selection.append(skill)
        else:
            if skill not in selection:
                return CommandResult.accepted(
                    kind, f"{skill} was not selected", old_value=old, new_value=old
                )
            selection.remove(skill)
            if not self.is_eligible(skill, side.pool):
                self._set_allocation(skill, side.pool, 0)

        new = tuple(selection)
        return CommandResult.accepted(
            kind,
            f"{skill} {'selected' if selected else 'deselected'} for {side}",
            old_value=old,
            new_value=new,
        )

    # =========================================================================
    # Allocation
    # =========================================================================

    def allocate(self, skill: str, pool: PoolKind, amount: int) -> CommandResult:
        """Set a skill's allocation in one pool.

        ``amount`` is the new allocation, not an increment. Out-of-range
        amounts are clamped rather than refused: below zero to zero, above
        the age cap to the cap, and above what the pool can still fund to
        the current allocation plus the pool's remaining points.

        Args:
            skill: Skill name.
            pool: Pool to draw from.
            amount: Requested allocation.

        Returns:
            CommandResult with the applied allocation; rejected with
            INELIGIBLE_TARGET or UNKNOWN_REFERENCE for a skill the pool
            cannot fund.
        """
        kind = "allocate"
        current = self.allocation(skill, pool)

        if pool == PoolKind.BONUS and not self._catalog.is_known(skill):
            return CommandResult.rejected(
                kind,
                RejectionReason.UNKNOWN_REFERENCE,
                f"Unknown skill {skill!r}",
                old_value=current,
            )
        if not self.is_eligible(skill, pool):
            return CommandResult.rejected(
                kind,
                RejectionReason.INELIGIBLE_TARGET,
                f"{skill} cannot take {pool} points",
                old_value=current,
            )

        applied = max(amount, self._minimum(skill, pool))
        applied = min(applied, self.cap)
        remaining = self.pool_remaining(pool)
        if applied - current > remaining:
            applied = current + remaining
        clamped = applied != amount

        self._set_allocation(skill, pool, applied)
        message = f"{skill} has {applied} {pool} points"
        if clamped:
            message += f" (requested {amount})"
        logger.debug(
            "Points allocated",
            skill=skill,
            pool=pool.value,
            requested=amount,
            applied=applied,
            remaining=self.pool_remaining(pool),
        )
        return CommandResult.accepted(
            kind, message, old_value=current, new_value=applied, clamped=clamped
        )

    def set_bonus_skill(self, skill: str | None) -> CommandResult:
        """Choose the bonus (hobby) skill.

        The previous bonus skill's bonus points are returned to the pool,
        then the new skill receives the fixed bonus amount, limited by the
        pool's remaining points and the age cap.

        Args:
            skill: A professional skill not offered by the culture or
                career, or None to clear.

        Returns:
            CommandResult; ``clamped`` is True when less than the fixed
            amount could be granted.
        """
        kind = "set_bonus_skill"
        old = self._bonus_skill
        if skill is None:
            self._release_bonus_skill()
            return CommandResult.accepted(
                kind, "Bonus skill cleared", old_value=old, new_value=None
            )

        if not self._catalog.is_known(skill):
            return CommandResult.rejected(
                kind, RejectionReason.UNKNOWN_REFERENCE, f"Unknown skill {skill!r}", old_value=old
            )
        if normalize_skill_name(skill) not in self.eligible_bonus_skills():
            return CommandResult.rejected(
                kind,
                RejectionReason.INELIGIBLE_TARGET,
                f"{skill} cannot be the bonus skill with {self._culture.key}/{self._career.key}",
                old_value=old,
            )

        self._release_bonus_skill()
        self._bonus_skill = skill
        granted = self._grant_bonus_skill()
        return CommandResult.accepted(
            kind,
            f"{skill} is the bonus skill with {granted} points",
            old_value=old,
            new_value=skill,
            clamped=granted < self._settings.bonus_skill_amount,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _set_allocation(self, skill: str, pool: PoolKind, value: int) -> None:
        entry = self._allocations.get(skill)
        if entry is None:
            if value == 0:
                return
            entry = self._allocations[skill] = SkillAllocation()
        entry.set(pool, value)
        if entry.total == 0:
            del self._allocations[skill]

    def _minimum(self, skill: str, pool: PoolKind) -> int:
        if (
            pool == PoolKind.CULTURE
            and self._settings.enforce_culture_minimum
            and self._culture.offers_standard(skill)
        ):
            return min(self._settings.culture_minimum_points, self.cap)
        return 0

    def _reseed_selection(self, side: Side) -> None:
        professional = list(dict.fromkeys(self._archetype(side).professional))
        self._selections[side] = professional[: self._settings.professional_limit]

    def _drop_ineligible(self, pool: PoolKind) -> None:
        for name in list(self._allocations):
            if not self.is_eligible(name, pool):
                self._set_allocation(name, pool, 0)

    def _seed_culture_minimum(self) -> None:
        for skill in self._culture.standard:
            floor = self._minimum(skill, PoolKind.CULTURE)
            current = self.allocation(skill, PoolKind.CULTURE)
            if current < floor:
                grant = min(floor - current, self.pool_remaining(PoolKind.CULTURE))
                self._set_allocation(skill, PoolKind.CULTURE, current + grant)

    def _grant_bonus_skill(self) -> int:
        if self._bonus_skill is None:
            return 0
        current = self.allocation(self._bonus_skill, PoolKind.BONUS)
        target = min(
            self._settings.bonus_skill_amount,
            self.cap,
            current + self.pool_remaining(PoolKind.BONUS),
        )
        value = max(current, target)
        self._set_allocation(self._bonus_skill, PoolKind.BONUS, value)
        return value

    def _release_bonus_skill(self) -> None:
        if self._bonus_skill is not None:
            self._set_allocation(self._bonus_skill, PoolKind.BONUS, 0)
            self._bonus_skill = None

    def _revalidate_bonus_skill(self) -> None:
        if (
            self._bonus_skill is not None
            and normalize_skill_name(self._bonus_skill) not in self.eligible_bonus_skills()
        ):
            logger.info("Bonus skill no longer eligible", skill=self._bonus_skill)
            self._release_bonus_skill()

    # =========================================================================
    # Checkpointing
    # =========================================================================

    def checkpoint(self) -> dict[str, Any]:
        # Catalog entries are frozen, only the mutable containers need copying
        return {
            "culture": self._culture,
            "career": self._career,
            "age": self._age,
            "allocations": deepcopy(self._allocations),
            "totals": dict(self._totals),
            "selections": {side: list(names) for side, names in self._selections.items()},
            "bonus_skill": self._bonus_skill,
        }

    def restore(self, state: dict[str, Any]) -> None:
        self._culture = state["culture"]
        self._career = state["career"]
        self._age = state["age"]
        self._allocations = state["allocations"]
        self._totals = state["totals"]
        self._selections = state["selections"]
        self._bonus_skill = state["bonus_skill"]


__all__ = [
    "SkillAllocation",
    "AllocationEngine",
]
