"""The seven-characteristic set."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mythras_builder.core.constants import DEFAULT_CHARACTERISTIC
from mythras_builder.models.enums import Characteristic


class Characteristics(BaseModel):
    """An immutable set of characteristic values.

    Bounds are enforced by the attribute generator, which knows the active
    generation method; this model only rejects negative values.

    Example:
        >>> chars = Characteristics(strength=12, size=14)
        >>> chars.get(Characteristic.STR) + chars.get(Characteristic.SIZ)
        26
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: int = Field(default=DEFAULT_CHARACTERISTIC, ge=0)
    constitution: int = Field(default=DEFAULT_CHARACTERISTIC, ge=0)
    size: int = Field(default=DEFAULT_CHARACTERISTIC, ge=0)
    dexterity: int = Field(default=DEFAULT_CHARACTERISTIC, ge=0)
    intelligence: int = Field(default=DEFAULT_CHARACTERISTIC, ge=0)
    power: int = Field(default=DEFAULT_CHARACTERISTIC, ge=0)
    charisma: int = Field(default=DEFAULT_CHARACTERISTIC, ge=0)

    def get(self, characteristic: Characteristic) -> int:
        """Get the value of one characteristic."""
        return getattr(self, characteristic.value)

    def with_value(self, characteristic: Characteristic, value: int) -> "Characteristics":
        """Return a copy with one characteristic replaced."""
        return self.model_copy(update={characteristic.value: value})

    @property
    def total(self) -> int:
        """Sum of all seven values."""
        return sum(self.get(c) for c in Characteristic)

    def as_abbreviations(self) -> dict[str, int]:
        """Get the values keyed by sheet abbreviation (STR, CON, ...)."""
        return {c.abbreviation: self.get(c) for c in Characteristic}


__all__ = ["Characteristics"]
