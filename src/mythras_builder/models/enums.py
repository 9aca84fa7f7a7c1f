"""Enumeration types for the Mythras character builder."""

from __future__ import annotations

from enum import StrEnum

from mythras_builder.core.constants import MIN_CHARACTERISTIC, MIN_SIZE_INTELLECT


class Characteristic(StrEnum):
    """The seven Mythras characteristics.

    Values are the field names used on ``Characteristics``; the member
    names are the abbreviations printed on a sheet.
    """

    STR = "strength"
    CON = "constitution"
    SIZ = "size"
    DEX = "dexterity"
    INT = "intelligence"
    POW = "power"
    CHA = "charisma"

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation.

        Returns:
            Three-letter abbreviation (e.g., 'STR').
        """
        return self.name

    @property
    def minimum(self) -> int:
        """Get the lowest legal value for this characteristic.

        Returns:
            8 for SIZ and INT, 3 for the rest.
        """
        if self in (Characteristic.SIZ, Characteristic.INT):
            return MIN_SIZE_INTELLECT
        return MIN_CHARACTERISTIC

    @classmethod
    def parse(cls, value: str) -> "Characteristic":
        """Look up a characteristic by abbreviation or field name.

        Args:
            value: 'STR', 'str' or 'strength'.

        Returns:
            The matching characteristic.

        Raises:
            ValueError: If nothing matches.
        """
        key = value.strip()
        if key.upper() in cls.__members__:
            return cls[key.upper()]
        return cls(key.lower())


class GenerationMethod(StrEnum):
    """How characteristics are produced."""

    ROLL = "roll"
    POINT_BUY = "point_buy"
    MANUAL = "manual"


class PoolKind(StrEnum):
    """The three skill point pools."""

    CULTURE = "culture"
    CAREER = "career"
    BONUS = "bonus"


class Side(StrEnum):
    """Archetype side owning a professional skill selection."""

    CULTURE = "culture"
    CAREER = "career"

    @property
    def pool(self) -> PoolKind:
        """Get the pool that funds skills selected on this side."""
        return PoolKind(self.value)


class FormulaKind(StrEnum):
    """Shapes a skill base formula can take."""

    SUM = "sum"
    DOUBLE = "double"


class EquipmentCategory(StrEnum):
    """Equipment catalog sections."""

    WEAPONS = "weapons"
    ARMOUR = "armour"
    TOOLS = "tools"
    PROVISIONS = "provisions"
    MISC = "misc"


class RejectionReason(StrEnum):
    """Why a build command left the session unchanged."""

    OUT_OF_RANGE = "out_of_range"
    INELIGIBLE_TARGET = "ineligible_target"
    SELECTION_LIMIT_EXCEEDED = "selection_limit_exceeded"
    UNDERFUNDED_PURCHASE = "underfunded_purchase"
    UNKNOWN_REFERENCE = "unknown_reference"


__all__ = [
    "Characteristic",
    "GenerationMethod",
    "PoolKind",
    "Side",
    "FormulaKind",
    "EquipmentCategory",
    "RejectionReason",
]
