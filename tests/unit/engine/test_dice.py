"""Tests for dice rolling."""

from __future__ import annotations

import pytest

from mythras_builder.core.exceptions import DiceRollError
from mythras_builder.engine.dice import DiceResult, DiceRoller


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_characteristic_roll(self, dice_roller: DiceRoller) -> None:
        """Test a standard 3d6 characteristic roll."""
        result = dice_roller.roll("3d6")

        assert isinstance(result, DiceResult)
        assert 3 <= result.total <= 18
        assert len(result.dice) == 3
        assert result.modifier == 0

    def test_roll_with_modifier(self, dice_roller: DiceRoller) -> None:
        """Test the SIZ/INT roll with its +6 modifier."""
        result = dice_roller.roll("2d6+6")

        assert result.modifier == 6
        assert 8 <= result.total <= 18
        assert len(result.dice) == 2

    def test_leading_constant(self, dice_roller: DiceRoller) -> None:
        """Test an age expression with a leading constant."""
        result = dice_roller.roll("15+2d6")

        assert result.modifier == 15
        assert 17 <= result.total <= 27

    def test_dice_match_total(self, dice_roller: DiceRoller) -> None:
        """Test that dice plus modifier add up to the total."""
        result = dice_roller.roll("4d6+3")

        assert sum(result.dice) + result.modifier == result.total

    def test_invalid_expression_raises_error(self, dice_roller: DiceRoller) -> None:
        """Test that invalid expressions raise DiceRollError."""
        with pytest.raises(DiceRollError) as exc_info:
            dice_roller.roll("invalid")

        assert exc_info.value.details["expression"] == "invalid"

    def test_empty_expression_raises_error(self, dice_roller: DiceRoller) -> None:
        """Test that empty expression raises DiceRollError."""
        with pytest.raises(DiceRollError):
            dice_roller.roll("")

    def test_whitespace_expression_raises_error(self, dice_roller: DiceRoller) -> None:
        """Test that whitespace-only expression raises DiceRollError."""
        with pytest.raises(DiceRollError):
            dice_roller.roll("   ")

    def test_seed_reproducible(self) -> None:
        """Test that the same seed replays the same rolls."""
        first = DiceRoller(seed=1234)
        first_rolls = [first.roll_total("3d6") for _ in range(5)]

        second = DiceRoller(seed=1234)
        second_rolls = [second.roll_total("3d6") for _ in range(5)]

        assert first_rolls == second_rolls
        assert second.seed == 1234


class TestDiceRollerHelpers:
    """Tests for the helper methods."""

    def test_roll_total(self, dice_roller: DiceRoller) -> None:
        """Test roll_total returns an int in range."""
        total = dice_roller.roll_total("1d4")

        assert isinstance(total, int)
        assert 1 <= total <= 4

    def test_roll_pool(self, dice_roller: DiceRoller) -> None:
        """Test rolling a pool of dice for starting money."""
        for _ in range(20):
            assert 2 <= dice_roller.roll_pool(2, 6) <= 12

    def test_roll_percentile(self, dice_roller: DiceRoller) -> None:
        """Test percentile rolls stay within 1-100."""
        for _ in range(50):
            assert 1 <= dice_roller.roll_percentile() <= 100


class TestDiceResult:
    """Tests for the DiceResult dataclass."""

    def test_result_is_frozen(self) -> None:
        """Test that DiceResult is immutable."""
        result = DiceResult(expression="3d6", total=11, dice=(3, 4, 4), modifier=0)

        with pytest.raises(AttributeError):
            result.total = 12  # type: ignore[misc]
