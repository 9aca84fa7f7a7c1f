"""Tests for social class, starting money and purchases."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from mythras_builder.engine.money import MoneyLedger
from mythras_builder.models.catalog import Culture, MoneyFormula, SocialClass
from mythras_builder.models.enums import RejectionReason


@pytest.fixture
def barbarian(catalog: Any) -> Any:
    return catalog.culture("Barbarian")


@pytest.fixture
def ledger_with(catalog: Any, fixed_roller: Callable[..., Any]) -> Callable[..., MoneyLedger]:
    """Factory for a ledger whose rolls return the given totals."""

    def factory(*totals: int) -> MoneyLedger:
        return MoneyLedger(catalog, fixed_roller(*totals))

    return factory


class TestSocialClass:
    """Tests for choosing and rolling a social class."""

    def test_set_by_name(self, ledger_with: Callable[..., MoneyLedger], barbarian: Any) -> None:
        """Test choosing a class is case-insensitive."""
        ledger = ledger_with()

        result = ledger.set_social_class(barbarian, "warrior")

        assert result.success
        assert result.new_value == "Warrior"
        assert ledger.social_class.multiplier == 1.5

    def test_unknown_class(self, ledger_with: Callable[..., MoneyLedger], barbarian: Any) -> None:
        """Test a class the culture does not have is refused."""
        ledger = ledger_with()

        result = ledger.set_social_class(barbarian, "Merchant")

        assert result.rejection == RejectionReason.INELIGIBLE_TARGET
        assert ledger.social_class is None

    @pytest.mark.parametrize(
        ("roll", "expected"),
        [(1, "Slave"), (10, "Slave"), (11, "Freeman"), (95, "Warrior"), (100, "Noble")],
    )
    def test_roll_bands(
        self,
        ledger_with: Callable[..., MoneyLedger],
        barbarian: Any,
        roll: int,
        expected: str,
    ) -> None:
        """Test percentile bands map to classes."""
        ledger = ledger_with(roll)

        result = ledger.roll_social_class(barbarian)

        assert result.new_value == expected

    def test_revalidate_drops_foreign_class(
        self, ledger_with: Callable[..., MoneyLedger], barbarian: Any, catalog: Any
    ) -> None:
        """Test a class missing from the new culture is cleared."""
        ledger = ledger_with()
        ledger.set_social_class(barbarian, "Warrior")

        ledger.revalidate(catalog.culture("Civilized"))

        assert ledger.social_class is None

    def test_revalidate_keeps_shared_class(
        self, ledger_with: Callable[..., MoneyLedger], barbarian: Any, catalog: Any
    ) -> None:
        """Test a class both cultures have survives with the new culture's multiplier."""
        ledger = ledger_with()
        ledger.set_social_class(barbarian, "Noble")

        ledger.revalidate(catalog.culture("Civilized"))

        assert ledger.social_class.name == "Noble"
        assert ledger.social_class.multiplier == 3

    def test_money_after_culture_change(
        self, ledger_with: Callable[..., MoneyLedger], barbarian: Any, catalog: Any
    ) -> None:
        """Test starting money uses the active culture's multiplier for a kept class."""
        civilized = catalog.culture("Civilized")
        ledger = ledger_with(10)
        ledger.set_social_class(barbarian, "Noble")
        ledger.revalidate(civilized)

        ledger.roll_starting_money(civilized)

        assert ledger.starting_money == 300


class TestStartingMoney:
    """Tests for roll_starting_money()."""

    def test_explicit_class(self, ledger_with: Callable[..., MoneyLedger], barbarian: Any) -> None:
        """Test 2d6 x10 scaled by the class multiplier."""
        ledger = ledger_with(7)

        result = ledger.roll_starting_money(barbarian, "Warrior")

        assert result.success
        assert result.new_value == 105
        assert ledger.starting_money == 105
        assert ledger.remaining == 105

    def test_rolls_class_when_unset(
        self, ledger_with: Callable[..., MoneyLedger], barbarian: Any
    ) -> None:
        """Test a class is rolled first when none was chosen."""
        ledger = ledger_with(5, 4)

        ledger.roll_starting_money(barbarian)

        assert ledger.social_class.name == "Slave"
        assert ledger.starting_money == 20

    def test_uses_chosen_class(
        self, ledger_with: Callable[..., MoneyLedger], barbarian: Any
    ) -> None:
        """Test the chosen class is used without another percentile roll."""
        ledger = ledger_with(6)
        ledger.set_social_class(barbarian, "Noble")

        ledger.roll_starting_money(barbarian)

        assert ledger.starting_money == 120

    def test_rounds_half_up(self, ledger_with: Callable[..., MoneyLedger]) -> None:
        """Test fractional silver rounds half up."""
        serfs = Culture(
            key="Serfdom",
            money=MoneyFormula(dice=1, sides=6, multiplier=1),
            social_classes=(SocialClass(name="Serf", low=1, high=100, multiplier=0.5),),
        )
        ledger = ledger_with(3)

        ledger.roll_starting_money(serfs, "Serf")

        assert ledger.starting_money == 2

    def test_unknown_class(self, ledger_with: Callable[..., MoneyLedger], barbarian: Any) -> None:
        """Test an unknown class override is refused before rolling."""
        ledger = ledger_with()

        result = ledger.roll_starting_money(barbarian, "Emperor")

        assert result.rejection == RejectionReason.INELIGIBLE_TARGET
        assert ledger.starting_money is None

    def test_reroll_clears_purchases(
        self, ledger_with: Callable[..., MoneyLedger], barbarian: Any
    ) -> None:
        """Test new starting money starts a fresh ledger."""
        ledger = ledger_with(10, 8)
        ledger.roll_starting_money(barbarian, "Freeman")
        ledger.purchase("Dagger")

        ledger.roll_starting_money(barbarian)

        assert ledger.purchases() == ()
        assert ledger.remaining == 80


class TestPurchases:
    """Tests for the equipment ledger."""

    @pytest.fixture
    def funded(self, ledger_with: Callable[..., MoneyLedger], barbarian: Any) -> MoneyLedger:
        """Ledger holding exactly 30 silver."""
        ledger = ledger_with(3)
        ledger.roll_starting_money(barbarian, "Freeman")
        return ledger

    def test_underfunded_purchase(self, funded: MoneyLedger) -> None:
        """Test an item costing more than the remaining silver is refused."""
        assert funded.remaining == 30

        result = funded.purchase("Short Sword")

        assert result.success is False
        assert result.rejection == RejectionReason.UNDERFUNDED_PURCHASE
        assert funded.remaining == 30
        assert funded.purchases() == ()

    def test_purchase(self, funded: MoneyLedger) -> None:
        """Test a purchase is deducted and recorded."""
        result = funded.purchase("Dagger")

        assert result.success
        assert (result.old_value, result.new_value) == (30, 10)
        assert [item.name for item in funded.purchases()] == ["Dagger"]

    def test_exact_funds(self, funded: MoneyLedger) -> None:
        """Test spending the last silver piece is allowed."""
        assert funded.purchase("Spear").success
        assert funded.remaining == 0

    def test_unknown_item(self, funded: MoneyLedger) -> None:
        """Test an item not in the catalog is refused."""
        result = funded.purchase("Laser Pistol")

        assert result.rejection == RejectionReason.UNKNOWN_REFERENCE

    def test_purchase_before_money(self, ledger_with: Callable[..., MoneyLedger]) -> None:
        """Test nothing can be bought before money is rolled."""
        ledger = ledger_with()

        assert ledger.purchase("Dagger").rejection == RejectionReason.UNDERFUNDED_PURCHASE

    def test_duplicate_purchase(self, funded: MoneyLedger) -> None:
        """Test an item already in the equipment list cannot be bought again."""
        funded.purchase("Backpack")

        result = funded.purchase("Backpack")

        assert result.rejection == RejectionReason.INELIGIBLE_TARGET
        assert funded.remaining == 20
        assert len(funded.purchases()) == 1

    def test_remove_refunds(self, funded: MoneyLedger) -> None:
        """Test removing an item gives its cost back."""
        funded.purchase("Backpack")
        funded.purchase("Dagger")

        result = funded.remove("Backpack")

        assert result.success
        assert funded.remaining == 10
        assert [item.name for item in funded.purchases()] == ["Dagger"]

    def test_buy_again_after_remove(self, funded: MoneyLedger) -> None:
        """Test a returned item can be bought again."""
        funded.purchase("Backpack")
        funded.remove("Backpack")

        assert funded.purchase("Backpack").success

    def test_remove_missing_is_noop(self, funded: MoneyLedger) -> None:
        """Test removing an item that was never bought changes nothing."""
        result = funded.remove("Lantern")

        assert result.success
        assert funded.remaining == 30

    def test_reset(self, funded: MoneyLedger) -> None:
        """Test reset returns all silver."""
        funded.purchase("Dagger")
        funded.purchase("Bedroll")

        funded.reset()

        assert funded.purchases() == ()
        assert funded.remaining == 30
        assert funded.starting_money == 30
