"""Tests for build commands and command results."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from mythras_builder.core.exceptions import ValidationError
from mythras_builder.models.commands import (
    AllocateCommand,
    CommandResult,
    PurchaseCommand,
    RollAgeCommand,
    SetCharacteristicCommand,
    ToggleProfessionalCommand,
    parse_command,
)
from mythras_builder.models.enums import Characteristic, PoolKind, RejectionReason, Side


class TestParseCommand:
    """Tests for parse_command()."""

    def test_allocate(self) -> None:
        """Test an allocation payload becomes a typed command."""
        command = parse_command(
            {"kind": "allocate", "skill": "Athletics", "pool": "culture", "amount": 15}
        )

        assert isinstance(command, AllocateCommand)
        assert command.pool == PoolKind.CULTURE
        assert command.amount == 15

    def test_characteristic_by_value(self) -> None:
        """Test characteristics are addressed by field name."""
        command = parse_command(
            {"kind": "set_characteristic", "characteristic": "strength", "value": 14}
        )

        assert isinstance(command, SetCharacteristicCommand)
        assert command.characteristic == Characteristic.STR

    def test_toggle(self) -> None:
        """Test professional toggles carry their side."""
        command = parse_command(
            {"kind": "toggle_professional", "side": "career", "skill": "Track", "selected": True}
        )

        assert isinstance(command, ToggleProfessionalCommand)
        assert command.side == Side.CAREER

    def test_no_arguments(self) -> None:
        """Test commands without fields need only their kind."""
        assert isinstance(parse_command({"kind": "roll_age"}), RollAgeCommand)

    def test_unknown_kind(self) -> None:
        """Test an unknown discriminator raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            parse_command({"kind": "level_up"})

        assert exc_info.value.details["invalid_value"] == "level_up"

    def test_bad_field(self) -> None:
        """Test the failing field is reported."""
        with pytest.raises(ValidationError) as exc_info:
            parse_command({"kind": "allocate", "skill": "Athletics", "pool": "wealth", "amount": 5})

        assert exc_info.value.details["field_name"] == "allocate.pool"

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown fields are not silently dropped."""
        with pytest.raises(ValidationError):
            parse_command({"kind": "purchase", "item": "Dagger", "quantity": 2})


class TestCommands:
    """Tests for command models."""

    def test_frozen(self) -> None:
        """Test commands cannot be edited after creation."""
        command = PurchaseCommand(item="Dagger")

        with pytest.raises(PydanticValidationError):
            command.item = "Spear"  # type: ignore[misc]

    def test_unique_ids(self) -> None:
        """Test each command gets its own id."""
        assert PurchaseCommand(item="Dagger").command_id != PurchaseCommand(item="Dagger").command_id

    def test_empty_skill_rejected(self) -> None:
        """Test a blank skill name is invalid."""
        with pytest.raises(PydanticValidationError):
            AllocateCommand(skill="", pool=PoolKind.CAREER, amount=5)


class TestCommandResult:
    """Tests for CommandResult constructors."""

    def test_accepted(self) -> None:
        """Test an accepted result."""
        result = CommandResult.accepted("allocate", "ok", old_value=0, new_value=15, clamped=True)

        assert result.success
        assert result.rejection is None
        assert result.clamped
        assert result.new_value == 15

    def test_rejected_keeps_old_value(self) -> None:
        """Test a rejection reports no change."""
        result = CommandResult.rejected(
            "purchase", RejectionReason.UNDERFUNDED_PURCHASE, "too dear", old_value=30
        )

        assert result.success is False
        assert result.rejection == RejectionReason.UNDERFUNDED_PURCHASE
        assert result.new_value == result.old_value == 30
        assert result.command_id is None
