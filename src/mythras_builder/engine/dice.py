"""Dice rolling for character generation.

All randomness in the builder (characteristics, age, social class and
starting money) goes through ``DiceRoller`` so that a seeded roller makes
an entire build reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

import d20

from mythras_builder.core.constants import PERCENTILE_ROLL
from mythras_builder.core.exceptions import DiceRollError
from mythras_builder.core.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DiceResult:
    """The outcome of one dice expression.

    Attributes:
        expression: The dice expression that was rolled.
        total: The total result of the roll.
        dice: Individual kept die faces.
        modifier: Static modifier included in the total.
    """

    expression: str
    total: int
    dice: tuple[int, ...]
    modifier: int


class DiceRoller:
    """Roll dice expressions with the d20 library.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> result = roller.roll("2d6+6")
        >>> 8 <= result.total <= 18
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def roll(self, expression: str) -> DiceResult:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '3d6', '2d6+6', '15+2d6').

        Returns:
            DiceResult containing the total and the individual dice.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result: d20.RollResult = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        outcome = DiceResult(
            expression=expression,
            total=result.total,
            dice=tuple(dice_values),
            modifier=result.total - sum(dice_values),
        )
        logger.debug("Dice rolled", expression=expression, total=result.total)
        return outcome

    def roll_total(self, expression: str) -> int:
        """Roll an expression and return only its total."""
        return self.roll(expression).total

    def roll_pool(self, count: int, sides: int) -> int:
        """Roll ``count`` dice of ``sides`` faces and sum them."""
        return self.roll_total(f"{count}d{sides}")

    def roll_percentile(self) -> int:
        """Roll 1-100."""
        return self.roll_total(PERCENTILE_ROLL)

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Extract kept die faces from a d20 expression tree.

        Args:
            expr: The d20 expression tree.

        Returns:
            List of individual dice values.
        """
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


__all__ = [
    "DiceResult",
    "DiceRoller",
]
