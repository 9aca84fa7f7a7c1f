"""Characteristic generation.

Three generation methods are supported:
- roll: 3d6 for STR, CON, DEX, POW and CHA, 2d6+6 for SIZ and INT
- point_buy: hand-set values limited by a point budget, where the cost is
  the sum of all values above their minimums
- manual: hand-set values with the ceiling raised from 18 to 21
"""

from __future__ import annotations

from mythras_builder.core.config import GenerationSettings
from mythras_builder.core.constants import SIZE_INTELLECT_ROLL, STANDARD_ROLL
from mythras_builder.core.logging import get_logger
from mythras_builder.engine.dice import DiceRoller
from mythras_builder.models.characteristics import Characteristics
from mythras_builder.models.commands import CommandResult
from mythras_builder.models.enums import Characteristic, GenerationMethod, RejectionReason


logger = get_logger(__name__)

MINIMUM_TOTAL = sum(c.minimum for c in Characteristic)
"""Sum of every characteristic's minimum; the zero point of point-buy cost."""


def roll_expression(characteristic: Characteristic) -> str:
    """Dice rolled for a characteristic."""
    if characteristic in (Characteristic.SIZ, Characteristic.INT):
        return SIZE_INTELLECT_ROLL
    return STANDARD_ROLL


def point_buy_cost(characteristics: Characteristics) -> int:
    """Points spent by a characteristic set under point-buy."""
    return characteristics.total - MINIMUM_TOTAL


class AttributeGenerator:
    """Owns the characteristic set and its generation method.

    Example:
        >>> generator = AttributeGenerator(GenerationSettings(), DiceRoller(seed=1))
        >>> result = generator.set_manual(Characteristic.STR, 25)
        >>> result.clamped, generator.characteristics.strength
        (True, 18)
    """

    def __init__(self, settings: GenerationSettings, roller: DiceRoller) -> None:
        """Initialize the generator at the default values.

        Args:
            settings: Generation settings (budget range, ceilings).
            roller: Dice roller for the roll method.
        """
        self._settings = settings
        self._roller = roller
        self._values = Characteristics()
        self._method = GenerationMethod(settings.default_method)
        self._budget = settings.point_budget

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def characteristics(self) -> Characteristics:
        return self._values

    @property
    def method(self) -> GenerationMethod:
        return self._method

    @property
    def point_budget(self) -> int:
        return self._budget

    @property
    def maximum(self) -> int:
        """Ceiling for every characteristic under the current method."""
        if self._method == GenerationMethod.MANUAL:
            return self._settings.manual_max
        return self._settings.standard_max

    def point_buy_cost(self) -> int:
        return point_buy_cost(self._values)

    def point_buy_remaining(self) -> int:
        return self._budget - self.point_buy_cost()

    # =========================================================================
    # Operations
    # =========================================================================

    def roll(self) -> CommandResult:
        """Roll every characteristic, replacing any hand-set values."""
        old = self._values.as_abbreviations()
        self._values = Characteristics(
            **{c.value: self._roller.roll_total(roll_expression(c)) for c in Characteristic}
        )
        new = self._values.as_abbreviations()
        logger.info("Characteristics rolled", **new)
        return CommandResult.accepted(
            "roll_characteristics",
            "Characteristics rolled",
            old_value=old,
            new_value=new,
        )

    def set_manual(self, characteristic: Characteristic, value: int) -> CommandResult:
        """Set one characteristic by hand.

        The value is clamped into the characteristic's legal range. Under
        point-buy an edit that would push the cost over the budget is
        rejected; edits that lower the cost always go through.

        Args:
            characteristic: Which characteristic to set.
            value: Requested value.

        Returns:
            CommandResult with the applied value.
        """
        kind = "set_characteristic"
        old = self._values.get(characteristic)
        applied = min(max(value, characteristic.minimum), self.maximum)
        clamped = applied != value

        if self._method == GenerationMethod.POINT_BUY:
            candidate = self._values.with_value(characteristic, applied)
            new_cost = point_buy_cost(candidate)
            if new_cost > self._budget and new_cost > self.point_buy_cost():
                return CommandResult.rejected(
                    kind,
                    RejectionReason.OUT_OF_RANGE,
                    f"{characteristic.abbreviation} {applied} would cost {new_cost} "
                    f"of a {self._budget} point budget",
                    old_value=old,
                )

        self._values = self._values.with_value(characteristic, applied)
        message = f"{characteristic.abbreviation} set to {applied}"
        if clamped:
            message += f" (requested {value})"
        return CommandResult.accepted(
            kind, message, old_value=old, new_value=applied, clamped=clamped
        )

    def set_method(self, method: GenerationMethod) -> CommandResult:
        """Switch generation method.

        Switching to roll rolls immediately. Leaving manual entry pulls any
        value above the standard ceiling back down to it.
        """
        old = self._method
        self._method = method
        if method == GenerationMethod.ROLL:
            self.roll()
        elif old == GenerationMethod.MANUAL:
            ceiling = self._settings.standard_max
            for characteristic in Characteristic:
                if self._values.get(characteristic) > ceiling:
                    self._values = self._values.with_value(characteristic, ceiling)
        return CommandResult.accepted(
            "set_method",
            f"Generation method set to {method}",
            old_value=old,
            new_value=method,
        )

    def set_point_budget(self, budget: int) -> CommandResult:
        """Change the point-buy budget, clamped to the configured range."""
        old = self._budget
        applied = min(
            max(budget, self._settings.min_point_budget),
            self._settings.max_point_budget,
        )
        self._budget = applied
        return CommandResult.accepted(
            "set_point_budget",
            f"Point budget set to {applied}",
            old_value=old,
            new_value=applied,
            clamped=applied != budget,
        )

    # =========================================================================
    # Checkpointing
    # =========================================================================

    def checkpoint(self) -> tuple[Characteristics, GenerationMethod, int]:
        return (self._values, self._method, self._budget)

    def restore(self, state: tuple[Characteristics, GenerationMethod, int]) -> None:
        self._values, self._method, self._budget = state


__all__ = [
    "MINIMUM_TOTAL",
    "roll_expression",
    "point_buy_cost",
    "AttributeGenerator",
]
