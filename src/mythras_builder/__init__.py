"""Mythras Character Builder - rules-driven character creation.

A session-scoped engine that walks a Mythras character through
characteristic generation, culture and career, skill point allocation,
social class and starting equipment.

ARCHITECTURE:
- BuildSession owns all build state and is the only thing that mutates it
- Every change is a typed command answered by a CommandResult
- Rule violations are results, never exceptions
- Collaborators read immutable BuildSnapshot copies

Example:
    >>> from mythras_builder import BuildSession, DiceRoller, PoolKind
    >>>
    >>> session = BuildSession(roller=DiceRoller(seed=42))
    >>> session.roll_characteristics()
    >>> session.set_culture("Nomadic")
    >>> session.allocate("Ride", PoolKind.CULTURE, 15)
    >>> print(session.snapshot().to_summary())

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas (catalog, commands, snapshot).
    engine: Dice, characteristic generation, allocation, money, session.
"""

from __future__ import annotations

# Core
from mythras_builder.core.config import Settings, get_settings
from mythras_builder.core.exceptions import MythrasBuilderError
from mythras_builder.core.logging import configure_logging, get_logger

# Engine
from mythras_builder.engine.dice import DiceRoller
from mythras_builder.engine.session import BuildSession

# Models
from mythras_builder.models.catalog import ReferenceCatalog
from mythras_builder.models.commands import CommandResult, parse_command
from mythras_builder.models.data import default_catalog, load_catalog
from mythras_builder.models.enums import (
    Characteristic,
    GenerationMethod,
    PoolKind,
    RejectionReason,
    Side,
)
from mythras_builder.models.snapshot import BuildSnapshot


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "MythrasBuilderError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Engine
    "BuildSession",
    "DiceRoller",
    # Models
    "ReferenceCatalog",
    "default_catalog",
    "load_catalog",
    "CommandResult",
    "parse_command",
    "BuildSnapshot",
    "Characteristic",
    "GenerationMethod",
    "PoolKind",
    "RejectionReason",
    "Side",
]
