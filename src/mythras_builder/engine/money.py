"""Starting money, social class and the equipment ledger.

Starting silver is the culture's money roll times its multiplier, scaled
by the social class multiplier. Rolling money starts a fresh ledger. A
purchase is checked against the remaining silver at the moment it is
made; silver only comes back on an explicit remove or reset.
"""

from __future__ import annotations

import math

from mythras_builder.core.logging import get_logger
from mythras_builder.engine.dice import DiceRoller
from mythras_builder.models.catalog import Culture, EquipmentItem, ReferenceCatalog, SocialClass
from mythras_builder.models.commands import CommandResult
from mythras_builder.models.enums import RejectionReason
from mythras_builder.models.snapshot import PurchasedItem


logger = get_logger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class MoneyLedger:
    """Tracks social class, starting silver and purchases."""

    def __init__(self, catalog: ReferenceCatalog, roller: DiceRoller) -> None:
        self._catalog = catalog
        self._roller = roller
        self._social_class: SocialClass | None = None
        self._starting_money: int | None = None
        self._purchases: list[EquipmentItem] = []

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def social_class(self) -> SocialClass | None:
        return self._social_class

    @property
    def starting_money(self) -> int | None:
        return self._starting_money

    @property
    def spent(self) -> int:
        return sum(item.cost for item in self._purchases)

    @property
    def remaining(self) -> int:
        return (self._starting_money or 0) - self.spent

    def purchases(self) -> tuple[PurchasedItem, ...]:
        return tuple(PurchasedItem(name=i.name, cost=i.cost) for i in self._purchases)

    # =========================================================================
    # Social Class
    # =========================================================================

    def set_social_class(self, culture: Culture, name: str | None) -> CommandResult:
        """Choose a social class, or clear the choice so the next money roll rolls one.

        Args:
            culture: The active culture, whose table the class must be on.
            name: Class name, or None.

        Returns:
            CommandResult; rejected with INELIGIBLE_TARGET when the culture
            has no such class.
        """
        kind = "set_social_class"
        old = self._social_class.name if self._social_class else None
        if name is None:
            self._social_class = None
            return CommandResult.accepted(kind, "Social class cleared", old_value=old)

        social_class = culture.social_class(name)
        if social_class is None:
            return CommandResult.rejected(
                kind,
                RejectionReason.INELIGIBLE_TARGET,
                f"{culture.key} has no social class {name!r}",
                old_value=old,
            )
        self._social_class = social_class
        return CommandResult.accepted(
            kind,
            f"Social class set to {social_class.name}",
            old_value=old,
            new_value=social_class.name,
        )

    def roll_social_class(self, culture: Culture) -> CommandResult:
        """Pick a social class with a percentile roll on the culture's table."""
        old = self._social_class.name if self._social_class else None
        roll = self._roller.roll_percentile()
        self._social_class = culture.social_class_for_roll(roll)
        logger.info(
            "Social class rolled",
            culture=culture.key,
            roll=roll,
            social_class=self._social_class.name,
        )
        return CommandResult.accepted(
            "roll_social_class",
            f"Rolled {roll}: {self._social_class.name}",
            old_value=old,
            new_value=self._social_class.name,
        )

    def revalidate(self, culture: Culture) -> None:
        """Re-resolve the chosen social class against a new culture.

        A class of the same name is replaced by the new culture's entry so
        its multiplier applies; a class the culture lacks is dropped.
        """
        if self._social_class is None:
            return
        replacement = culture.social_class(self._social_class.name)
        if replacement is None:
            logger.info(
                "Social class cleared by culture change",
                social_class=self._social_class.name,
            )
        self._social_class = replacement

    # =========================================================================
    # Money & Purchases
    # =========================================================================

    def roll_starting_money(
        self, culture: Culture, social_class: str | None = None
    ) -> CommandResult:
        """Roll starting silver and reset the ledger.

        The social class multiplier comes from ``social_class`` when given,
        else from the class already chosen, else from a percentile roll that
        also becomes the chosen class.

        Args:
            culture: The active culture.
            social_class: Optional class name overriding the chosen one.

        Returns:
            CommandResult with the new starting silver.
        """
        kind = "roll_starting_money"
        old = self._starting_money
        if social_class is not None:
            chosen = culture.social_class(social_class)
            if chosen is None:
                return CommandResult.rejected(
                    kind,
                    RejectionReason.INELIGIBLE_TARGET,
                    f"{culture.key} has no social class {social_class!r}",
                    old_value=old,
                )
            self._social_class = chosen
        elif self._social_class is None:
            self.roll_social_class(culture)

        assert self._social_class is not None
        formula = culture.money
        roll = self._roller.roll_pool(formula.dice, formula.sides)
        amount = _round_half_up(roll * formula.multiplier * self._social_class.multiplier)
        self._starting_money = amount
        self._purchases = []
        logger.info(
            "Starting money rolled",
            culture=culture.key,
            social_class=self._social_class.name,
            roll=roll,
            silver=amount,
        )
        return CommandResult.accepted(
            kind,
            f"{amount} sp ({formula.expression} x{formula.multiplier}, {self._social_class.name})",
            old_value=old,
            new_value=amount,
        )

    def purchase(self, name: str) -> CommandResult:
        """Buy an item if the remaining silver covers it and it is not already held."""
        kind = "purchase"
        item = self._catalog.item(name)
        remaining = self.remaining
        if item is None:
            return CommandResult.rejected(
                kind,
                RejectionReason.UNKNOWN_REFERENCE,
                f"Unknown item {name!r}",
                old_value=remaining,
            )
        if item.cost > remaining:
            return CommandResult.rejected(
                kind,
                RejectionReason.UNDERFUNDED_PURCHASE,
                f"{item.name} costs {item.cost} sp, {remaining} sp left",
                old_value=remaining,
            )
        if any(bought.name == item.name for bought in self._purchases):
            return CommandResult.rejected(
                kind,
                RejectionReason.INELIGIBLE_TARGET,
                f"{item.name} is already in the equipment list",
                old_value=remaining,
            )
        self._purchases.append(item)
        return CommandResult.accepted(
            kind, f"Bought {item.name}", old_value=remaining, new_value=self.remaining
        )

    def remove(self, name: str) -> CommandResult:
        """Return a purchased item for a refund; a no-op if it was never bought."""
        remaining = self.remaining
        for index in range(len(self._purchases) - 1, -1, -1):
            if self._purchases[index].name == name:
                del self._purchases[index]
                return CommandResult.accepted(
                    "remove_item",
                    f"Returned {name}",
                    old_value=remaining,
                    new_value=self.remaining,
                )
        return CommandResult.accepted(
            "remove_item", f"{name} was not purchased", old_value=remaining, new_value=remaining
        )

    def reset(self) -> CommandResult:
        remaining = self.remaining
        self._purchases = []
        return CommandResult.accepted(
            "reset_equipment", "Equipment cleared", old_value=remaining, new_value=self.remaining
        )

    # =========================================================================
    # Checkpointing
    # =========================================================================

    def checkpoint(self) -> tuple[SocialClass | None, int | None, list[EquipmentItem]]:
        return (self._social_class, self._starting_money, list(self._purchases))

    def restore(self, state: tuple[SocialClass | None, int | None, list[EquipmentItem]]) -> None:
        self._social_class, self._starting_money, self._purchases = state


__all__ = ["MoneyLedger"]
