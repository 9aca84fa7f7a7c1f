"""Build commands and their results.

Every change to a build session is expressed as a command. Commands are
frozen pydantic models discriminated on ``kind`` so that a caller (a UI, a
test, a replay log) can hand the session plain dictionaries:

    >>> command = parse_command({"kind": "allocate", "skill": "Athletics",
    ...                          "pool": "culture", "amount": 15})
    >>> result = session.apply(command)
    >>> result.success, result.new_value
    (True, 15)

The session validates and applies the command, then answers with a
``CommandResult``. A rule violation never raises: the result carries
``success=False`` and a ``RejectionReason`` and the session is unchanged.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from mythras_builder.core.exceptions import ValidationError
from mythras_builder.models.enums import (
    Characteristic,
    GenerationMethod,
    PoolKind,
    RejectionReason,
    Side,
)


class BaseCommand(BaseModel):
    """Fields shared by every command."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    command_id: UUID = Field(default_factory=uuid4)


# =============================================================================
# Identity & Characteristics
# =============================================================================


class SetIdentityCommand(BaseCommand):
    """Set name fields. ``None`` leaves a field unchanged."""

    kind: Literal["set_identity"] = "set_identity"
    character_name: str | None = None
    player_name: str | None = None
    sex: str | None = None


class SetMethodCommand(BaseCommand):
    kind: Literal["set_method"] = "set_method"
    method: GenerationMethod


class SetPointBudgetCommand(BaseCommand):
    kind: Literal["set_point_budget"] = "set_point_budget"
    budget: int


class RollCharacteristicsCommand(BaseCommand):
    kind: Literal["roll_characteristics"] = "roll_characteristics"


class SetCharacteristicCommand(BaseCommand):
    kind: Literal["set_characteristic"] = "set_characteristic"
    characteristic: Characteristic
    value: int


# =============================================================================
# Archetypes & Allocation
# =============================================================================


class SetCultureCommand(BaseCommand):
    kind: Literal["set_culture"] = "set_culture"
    key: str


class SetCareerCommand(BaseCommand):
    kind: Literal["set_career"] = "set_career"
    key: str


class SetAgeCommand(BaseCommand):
    kind: Literal["set_age"] = "set_age"
    key: str


class RollAgeCommand(BaseCommand):
    """Roll an age in years from the active age bracket's expression."""

    kind: Literal["roll_age"] = "roll_age"


class ToggleProfessionalCommand(BaseCommand):
    kind: Literal["toggle_professional"] = "toggle_professional"
    side: Side
    skill: str = Field(min_length=1)
    selected: bool


class AllocateCommand(BaseCommand):
    """Set (not add to) a skill's allocation in one pool."""

    kind: Literal["allocate"] = "allocate"
    skill: str = Field(min_length=1)
    pool: PoolKind
    amount: int


class SetBonusSkillCommand(BaseCommand):
    kind: Literal["set_bonus_skill"] = "set_bonus_skill"
    skill: str | None = None


class SetCombatStyleCommand(BaseCommand):
    kind: Literal["set_combat_style"] = "set_combat_style"
    style: str


# =============================================================================
# Money & Equipment
# =============================================================================


class SetSocialClassCommand(BaseCommand):
    """Choose a social class explicitly. ``None`` reverts to rolling."""

    kind: Literal["set_social_class"] = "set_social_class"
    name: str | None = None


class RollSocialClassCommand(BaseCommand):
    kind: Literal["roll_social_class"] = "roll_social_class"


class RollStartingMoneyCommand(BaseCommand):
    kind: Literal["roll_starting_money"] = "roll_starting_money"
    social_class: str | None = None


class PurchaseCommand(BaseCommand):
    kind: Literal["purchase"] = "purchase"
    item: str


class RemoveItemCommand(BaseCommand):
    kind: Literal["remove_item"] = "remove_item"
    item: str


class ResetEquipmentCommand(BaseCommand):
    kind: Literal["reset_equipment"] = "reset_equipment"


Command = Annotated[
    Union[
        SetIdentityCommand,
        SetMethodCommand,
        SetPointBudgetCommand,
        RollCharacteristicsCommand,
        SetCharacteristicCommand,
        SetCultureCommand,
        SetCareerCommand,
        SetAgeCommand,
        RollAgeCommand,
        ToggleProfessionalCommand,
        AllocateCommand,
        SetBonusSkillCommand,
        SetCombatStyleCommand,
        SetSocialClassCommand,
        RollSocialClassCommand,
        RollStartingMoneyCommand,
        PurchaseCommand,
        RemoveItemCommand,
        ResetEquipmentCommand,
    ],
    Field(discriminator="kind"),
]

_COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(data: dict[str, Any]) -> Command:
    """Validate a plain dictionary into a command.

    Args:
        data: Command payload including its ``kind``.

    Returns:
        The typed command.

    Raises:
        ValidationError: If the payload does not describe a valid command.
    """
    try:
        return _COMMAND_ADAPTER.validate_python(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(
            f"Invalid command: {first['msg']}",
            field_name=field_name,
            invalid_value=data.get("kind"),
            details={"error_count": exc.error_count()},
        ) from exc


# =============================================================================
# Results
# =============================================================================


class CommandResult(BaseModel):
    """Outcome of applying a command.

    Attributes:
        command_id: Id of the command this answers, when applied via a session.
        kind: The command kind.
        success: Whether state changed as requested (possibly clamped).
        message: Human-readable outcome.
        rejection: Why the command was refused, when ``success`` is False.
        clamped: True when the applied value differs from the requested one.
        old_value: Value before the command.
        new_value: Value after the command.
    """

    model_config = ConfigDict(frozen=True)

    command_id: UUID | None = None
    kind: str
    success: bool
    message: str
    rejection: RejectionReason | None = None
    clamped: bool = False
    old_value: Any = None
    new_value: Any = None

    @classmethod
    def accepted(
        cls,
        kind: str,
        message: str,
        *,
        old_value: Any = None,
        new_value: Any = None,
        clamped: bool = False,
    ) -> "CommandResult":
        return cls(
            kind=kind,
            success=True,
            message=message,
            old_value=old_value,
            new_value=new_value,
            clamped=clamped,
        )

    @classmethod
    def rejected(
        cls,
        kind: str,
        reason: RejectionReason,
        message: str,
        *,
        old_value: Any = None,
    ) -> "CommandResult":
        # A rejected command leaves the value where it was
        return cls(
            kind=kind,
            success=False,
            message=message,
            rejection=reason,
            old_value=old_value,
            new_value=old_value,
        )


__all__ = [
    "BaseCommand",
    "SetIdentityCommand",
    "SetMethodCommand",
    "SetPointBudgetCommand",
    "RollCharacteristicsCommand",
    "SetCharacteristicCommand",
    "SetCultureCommand",
    "SetCareerCommand",
    "SetAgeCommand",
    "RollAgeCommand",
    "ToggleProfessionalCommand",
    "AllocateCommand",
    "SetBonusSkillCommand",
    "SetCombatStyleCommand",
    "SetSocialClassCommand",
    "RollSocialClassCommand",
    "RollStartingMoneyCommand",
    "PurchaseCommand",
    "RemoveItemCommand",
    "ResetEquipmentCommand",
    "Command",
    "parse_command",
    "CommandResult",
]
