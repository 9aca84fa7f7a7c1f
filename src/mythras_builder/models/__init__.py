"""Pydantic V2 schemas for the Mythras character builder.

Submodules:
    enums: Enumeration types (Characteristic, PoolKind, RejectionReason, ...)
    characteristics: The seven-characteristic value set
    catalog: Reference catalog schemas (cultures, careers, ages, formulas)
    data: Built-in Mythras tables and catalog loading
    commands: Build commands and CommandResult
    snapshot: Immutable BuildSnapshot handed to exporters
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from mythras_builder.models.enums import (
    Characteristic,
    EquipmentCategory,
    FormulaKind,
    GenerationMethod,
    PoolKind,
    RejectionReason,
    Side,
)

# =============================================================================
# Reference Data
# =============================================================================
from mythras_builder.models.catalog import (
    AgeBracket,
    Career,
    Culture,
    EquipmentItem,
    MoneyFormula,
    ReferenceCatalog,
    SkillFormula,
    SocialClass,
    normalize_skill_name,
)
from mythras_builder.models.characteristics import Characteristics
from mythras_builder.models.data import default_catalog, load_catalog, resolve_catalog

# =============================================================================
# Commands & Snapshots
# =============================================================================
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
from mythras_builder.models.snapshot import (
    BuildSnapshot,
    DerivedStats,
    HitLocations,
    PoolSummary,
    PurchasedItem,
    SkillLine,
)


__all__ = [
    # Enums
    "Characteristic",
    "EquipmentCategory",
    "FormulaKind",
    "GenerationMethod",
    "PoolKind",
    "RejectionReason",
    "Side",
    # Reference data
    "AgeBracket",
    "Career",
    "Culture",
    "EquipmentItem",
    "MoneyFormula",
    "ReferenceCatalog",
    "SkillFormula",
    "SocialClass",
    "normalize_skill_name",
    "Characteristics",
    "default_catalog",
    "load_catalog",
    "resolve_catalog",
    # Commands
    "AllocateCommand",
    "Command",
    "CommandResult",
    "PurchaseCommand",
    "RemoveItemCommand",
    "ResetEquipmentCommand",
    "RollAgeCommand",
    "RollCharacteristicsCommand",
    "RollSocialClassCommand",
    "RollStartingMoneyCommand",
    "SetAgeCommand",
    "SetBonusSkillCommand",
    "SetCareerCommand",
    "SetCharacteristicCommand",
    "SetCombatStyleCommand",
    "SetCultureCommand",
    "SetIdentityCommand",
    "SetMethodCommand",
    "SetPointBudgetCommand",
    "SetSocialClassCommand",
    "ToggleProfessionalCommand",
    "parse_command",
    # Snapshots
    "BuildSnapshot",
    "DerivedStats",
    "HitLocations",
    "PoolSummary",
    "PurchasedItem",
    "SkillLine",
]
