"""Build session: the single owner of a character under construction.

A ``BuildSession`` holds the characteristic generator, the allocation
engine, the money ledger and the identity fields. All mutation goes
through ``apply()``, which dispatches a command to the component that owns
it, checks the engine invariants and logs the outcome. Collaborators only
ever see ``BuildSnapshot`` copies.

Example:
    >>> session = BuildSession(roller=DiceRoller(seed=42))
    >>> session.set_culture("Civilized").success
    True
    >>> session.allocate("Influence", PoolKind.CULTURE, 15).new_value
    15
    >>> session.snapshot().skill("Influence").culture
    15
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any
from uuid import uuid4

from mythras_builder.core.config import Settings, get_settings
from mythras_builder.core.exceptions import UnsupportedCommandError
from mythras_builder.core.logging import get_logger
from mythras_builder.engine.allocation import AllocationEngine
from mythras_builder.engine.attributes import AttributeGenerator
from mythras_builder.engine.derived import derive
from mythras_builder.engine.dice import DiceRoller
from mythras_builder.engine.money import MoneyLedger
from mythras_builder.engine.snapshot import Identity, build_snapshot
from mythras_builder.models.catalog import ReferenceCatalog
from mythras_builder.models.characteristics import Characteristics
from mythras_builder.models.commands import (
    AllocateCommand,
    Command,
    CommandResult,
    PurchaseCommand,
    RemoveItemCommand,
    ResetEquipmentCommand,
    RollAgeCommand,
    RollCharacteristicsCommand,
    RollSocialClassCommand,
    RollStartingMoneyCommand,
    SetAgeCommand,
    SetBonusSkillCommand,
    SetCareerCommand,
    SetCharacteristicCommand,
    SetCombatStyleCommand,
    SetCultureCommand,
    SetIdentityCommand,
    SetMethodCommand,
    SetPointBudgetCommand,
    SetSocialClassCommand,
    ToggleProfessionalCommand,
    parse_command,
)
from mythras_builder.models.data import resolve_catalog
from mythras_builder.models.enums import (
    Characteristic,
    GenerationMethod,
    PoolKind,
    RejectionReason,
    Side,
)
from mythras_builder.models.snapshot import BuildSnapshot, DerivedStats, PoolSummary


logger = get_logger(__name__)

DEFAULT_AGE = "Adult"


class BuildSession:
    """One character build.

    Attributes:
        session_id: Identifier bound into log context for this build.
    """

    def __init__(
        self,
        catalog: ReferenceCatalog | None = None,
        settings: Settings | None = None,
        *,
        roller: DiceRoller | None = None,
        culture: str | None = None,
        career: str | None = None,
        age: str | None = None,
    ) -> None:
        """Start a build with default characteristics.

        Args:
            catalog: Reference data; defaults to the configured catalog.
            settings: Settings; defaults to ``get_settings()``.
            roller: Dice roller; pass a seeded one for reproducible builds.
            culture: Starting culture; defaults to the catalog's first.
            career: Starting career; defaults to the catalog's first.
            age: Starting age bracket; defaults to Adult when present.

        Raises:
            CatalogError: If the catalog cannot be loaded or a starting key
                is unknown.
        """
        self._settings = settings or get_settings()
        self._catalog = catalog or resolve_catalog(self._settings.catalog_path)
        self._roller = roller or DiceRoller()
        self.session_id = uuid4()
        self._log = logger.bind(session_id=str(self.session_id))

        if age is None:
            age = DEFAULT_AGE if self._catalog.age(DEFAULT_AGE) else self._catalog.ages[0].key

        self._attributes = AttributeGenerator(self._settings.generation, self._roller)
        self._allocation = AllocationEngine(
            self._catalog,
            self._settings.allocation,
            culture=culture or self._catalog.cultures[0].key,
            career=career or self._catalog.careers[0].key,
            age=age,
        )
        self._money = MoneyLedger(self._catalog, self._roller)
        self._identity = Identity(combat_style=self._first_combat_style())
        if self._attributes.method == GenerationMethod.ROLL:
            self._attributes.roll()

        self._handlers: dict[str, Callable[[Any], CommandResult]] = {
            "set_identity": self._handle_set_identity,
            "set_method": self._handle_set_method,
            "set_point_budget": self._handle_set_point_budget,
            "roll_characteristics": self._handle_roll_characteristics,
            "set_characteristic": self._handle_set_characteristic,
            "set_culture": self._handle_set_culture,
            "set_career": self._handle_set_career,
            "set_age": self._handle_set_age,
            "roll_age": self._handle_roll_age,
            "toggle_professional": self._handle_toggle_professional,
            "allocate": self._handle_allocate,
            "set_bonus_skill": self._handle_set_bonus_skill,
            "set_combat_style": self._handle_set_combat_style,
            "set_social_class": self._handle_set_social_class,
            "roll_social_class": self._handle_roll_social_class,
            "roll_starting_money": self._handle_roll_starting_money,
            "purchase": self._handle_purchase,
            "remove_item": self._handle_remove_item,
            "reset_equipment": self._handle_reset_equipment,
        }
        self._log.info(
            "Build session started",
            culture=self._allocation.culture.key,
            career=self._allocation.career.key,
            age=self._allocation.age.key,
        )

    # =========================================================================
    # Command Entry Point
    # =========================================================================

    def apply(self, command: Command) -> CommandResult:
        """Apply one command.

        The command either takes full effect or leaves the session exactly
        as it was. Rule violations come back as a rejected result; only
        engine faults raise, after the session has been rolled back.

        Args:
            command: Any build command.

        Returns:
            CommandResult tagged with the command's id.

        Raises:
            UnsupportedCommandError: If no handler exists for the command.
            InvalidBuildStateError: If the command broke an engine invariant.
        """
        handler = self._handlers.get(command.kind)
        if handler is None:
            raise UnsupportedCommandError(
                f"No handler for command {command.kind!r}",
                command_kind=command.kind,
            )

        with self._transaction(command.kind):
            result = handler(command)
            self._allocation.verify()

        result = result.model_copy(update={"command_id": command.command_id})
        if result.success:
            self._log.debug(
                "Command applied",
                kind=command.kind,
                message=result.message,
                clamped=result.clamped,
            )
        else:
            self._log.info(
                "Command rejected",
                kind=command.kind,
                reason=result.rejection,
                message=result.message,
            )
        return result

    def apply_dict(self, data: dict[str, Any]) -> CommandResult:
        """Validate a plain dictionary as a command and apply it.

        Raises:
            ValidationError: If the payload is not a valid command.
        """
        return self.apply(parse_command(data))

    @contextmanager
    def _transaction(self, kind: str) -> Iterator[None]:
        saved = (
            self._attributes.checkpoint(),
            self._allocation.checkpoint(),
            self._money.checkpoint(),
            Identity(**vars(self._identity)),
        )
        try:
            yield
        except Exception:
            attributes, allocation, money, identity = saved
            self._attributes.restore(attributes)
            self._allocation.restore(allocation)
            self._money.restore(money)
            self._identity = identity
            self._log.error("Command failed, session rolled back", kind=kind)
            raise

    # =========================================================================
    # Handlers
    # =========================================================================

    def _handle_set_identity(self, command: SetIdentityCommand) -> CommandResult:
        old = {
            "character_name": self._identity.character_name,
            "player_name": self._identity.player_name,
            "sex": self._identity.sex,
        }
        for field_name in old:
            value = getattr(command, field_name)
            if value is not None:
                setattr(self._identity, field_name, value.strip())
        new = {field_name: getattr(self._identity, field_name) for field_name in old}
        return CommandResult.accepted("set_identity", "Identity updated", old_value=old, new_value=new)

    def _handle_set_method(self, command: SetMethodCommand) -> CommandResult:
        return self._attributes.set_method(command.method)

    def _handle_set_point_budget(self, command: SetPointBudgetCommand) -> CommandResult:
        return self._attributes.set_point_budget(command.budget)

    def _handle_roll_characteristics(self, command: RollCharacteristicsCommand) -> CommandResult:
        return self._attributes.roll()

    def _handle_set_characteristic(self, command: SetCharacteristicCommand) -> CommandResult:
        return self._attributes.set_manual(command.characteristic, command.value)

    def _handle_set_culture(self, command: SetCultureCommand) -> CommandResult:
        result = self._allocation.set_culture(command.key)
        if result.success:
            culture = self._allocation.culture
            if self._identity.combat_style not in culture.combat_styles:
                self._identity.combat_style = self._first_combat_style()
            self._money.revalidate(culture)
        return result

    def _handle_set_career(self, command: SetCareerCommand) -> CommandResult:
        return self._allocation.set_career(command.key)

    def _handle_set_age(self, command: SetAgeCommand) -> CommandResult:
        result = self._allocation.set_age(command.key)
        if result.success and result.old_value != result.new_value:
            # A rolled age belongs to the bracket it was rolled for
            self._identity.age_years = None
        return result

    def _handle_roll_age(self, command: RollAgeCommand) -> CommandResult:
        old = self._identity.age_years
        bracket = self._allocation.age
        self._identity.age_years = self._roller.roll_total(bracket.age_expression)
        return CommandResult.accepted(
            "roll_age",
            f"Age {self._identity.age_years} ({bracket.key}, {bracket.age_expression})",
            old_value=old,
            new_value=self._identity.age_years,
        )

    def _handle_toggle_professional(self, command: ToggleProfessionalCommand) -> CommandResult:
        return self._allocation.toggle_professional(command.side, command.skill, command.selected)

    def _handle_allocate(self, command: AllocateCommand) -> CommandResult:
        return self._allocation.allocate(command.skill, command.pool, command.amount)

    def _handle_set_bonus_skill(self, command: SetBonusSkillCommand) -> CommandResult:
        return self._allocation.set_bonus_skill(command.skill)

    def _handle_set_combat_style(self, command: SetCombatStyleCommand) -> CommandResult:
        culture = self._allocation.culture
        old = self._identity.combat_style
        if command.style not in culture.combat_styles:
            return CommandResult.rejected(
                "set_combat_style",
                RejectionReason.INELIGIBLE_TARGET,
                f"{culture.key} does not teach {command.style!r}",
                old_value=old,
            )
        self._identity.combat_style = command.style
        return CommandResult.accepted(
            "set_combat_style",
            f"Combat style set to {command.style}",
            old_value=old,
            new_value=command.style,
        )

    def _handle_set_social_class(self, command: SetSocialClassCommand) -> CommandResult:
        return self._money.set_social_class(self._allocation.culture, command.name)

    def _handle_roll_social_class(self, command: RollSocialClassCommand) -> CommandResult:
        return self._money.roll_social_class(self._allocation.culture)

    def _handle_roll_starting_money(self, command: RollStartingMoneyCommand) -> CommandResult:
        return self._money.roll_starting_money(self._allocation.culture, command.social_class)

    def _handle_purchase(self, command: PurchaseCommand) -> CommandResult:
        return self._money.purchase(command.item)

    def _handle_remove_item(self, command: RemoveItemCommand) -> CommandResult:
        return self._money.remove(command.item)

    def _handle_reset_equipment(self, command: ResetEquipmentCommand) -> CommandResult:
        return self._money.reset()

    def _first_combat_style(self) -> str | None:
        styles = self._allocation.culture.combat_styles
        return styles[0] if styles else None

    # =========================================================================
    # Convenience Commands
    # =========================================================================

    def set_identity(
        self,
        *,
        character_name: str | None = None,
        player_name: str | None = None,
        sex: str | None = None,
    ) -> CommandResult:
        return self.apply(
            SetIdentityCommand(character_name=character_name, player_name=player_name, sex=sex)
        )

    def set_method(self, method: GenerationMethod | str) -> CommandResult:
        return self.apply(SetMethodCommand(method=GenerationMethod(method)))

    def set_point_budget(self, budget: int) -> CommandResult:
        return self.apply(SetPointBudgetCommand(budget=budget))

    def roll_characteristics(self) -> CommandResult:
        return self.apply(RollCharacteristicsCommand())

    def set_characteristic(self, characteristic: Characteristic | str, value: int) -> CommandResult:
        if isinstance(characteristic, str):
            characteristic = Characteristic.parse(characteristic)
        return self.apply(SetCharacteristicCommand(characteristic=characteristic, value=value))

    def set_culture(self, key: str) -> CommandResult:
        return self.apply(SetCultureCommand(key=key))

    def set_career(self, key: str) -> CommandResult:
        return self.apply(SetCareerCommand(key=key))

    def set_age(self, key: str) -> CommandResult:
        return self.apply(SetAgeCommand(key=key))

    def roll_age(self) -> CommandResult:
        return self.apply(RollAgeCommand())

    def toggle_professional(self, side: Side | str, skill: str, selected: bool) -> CommandResult:
        return self.apply(ToggleProfessionalCommand(side=Side(side), skill=skill, selected=selected))

    def allocate(self, skill: str, pool: PoolKind | str, amount: int) -> CommandResult:
        return self.apply(AllocateCommand(skill=skill, pool=PoolKind(pool), amount=amount))

    def set_bonus_skill(self, skill: str | None) -> CommandResult:
        return self.apply(SetBonusSkillCommand(skill=skill))

    def set_combat_style(self, style: str) -> CommandResult:
        return self.apply(SetCombatStyleCommand(style=style))

    def set_social_class(self, name: str | None) -> CommandResult:
        return self.apply(SetSocialClassCommand(name=name))

    def roll_social_class(self) -> CommandResult:
        return self.apply(RollSocialClassCommand())

    def roll_starting_money(self, social_class: str | None = None) -> CommandResult:
        return self.apply(RollStartingMoneyCommand(social_class=social_class))

    def purchase(self, item: str) -> CommandResult:
        return self.apply(PurchaseCommand(item=item))

    def remove_item(self, item: str) -> CommandResult:
        return self.apply(RemoveItemCommand(item=item))

    def reset_equipment(self) -> CommandResult:
        return self.apply(ResetEquipmentCommand())

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def catalog(self) -> ReferenceCatalog:
        return self._catalog

    @property
    def characteristics(self) -> Characteristics:
        return self._attributes.characteristics

    @property
    def method(self) -> GenerationMethod:
        return self._attributes.method

    def point_buy_remaining(self) -> int:
        return self._attributes.point_buy_remaining()

    def derived(self) -> DerivedStats:
        """Derived stats for the current characteristics, computed fresh."""
        return derive(
            self._attributes.characteristics,
            overflow_offset=self._settings.rules.overflow_offset,
        )

    def compute_base(self, skill: str) -> int:
        return self._allocation.compute_base(skill, self._attributes.characteristics)

    def compute_total(self, skill: str) -> int:
        return self._allocation.compute_total(skill, self._attributes.characteristics)

    def allocation(self, skill: str, pool: PoolKind | str) -> int:
        return self._allocation.allocation(skill, PoolKind(pool))

    def pool_state(self, pool: PoolKind | str) -> PoolSummary:
        return self._allocation.pool_state(PoolKind(pool))

    def eligible_skills(self, pool: PoolKind | str) -> list[str]:
        return self._allocation.eligible_skills(PoolKind(pool))

    def eligible_bonus_skills(self) -> list[str]:
        return self._allocation.eligible_bonus_skills()

    def selected(self, side: Side | str) -> tuple[str, ...]:
        return self._allocation.selected(Side(side))

    @property
    def remaining_money(self) -> int:
        return self._money.remaining

    def snapshot(self) -> BuildSnapshot:
        """Produce an immutable record of the build as it stands."""
        return build_snapshot(
            identity=self._identity,
            attributes=self._attributes,
            allocation=self._allocation,
            money=self._money,
            overflow_offset=self._settings.rules.overflow_offset,
        )


__all__ = [
    "DEFAULT_AGE",
    "BuildSession",
]
