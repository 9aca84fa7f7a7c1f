"""Core module providing configuration, logging, and base exceptions.

This module is the foundation of the Mythras character builder, providing
the infrastructure every engine component relies on.

Exports:
    Exceptions:
        MythrasBuilderError: Base exception for all application errors.
        CatalogError: Reference catalog loading and lookup errors.
        GameEngineError: Rules engine faults.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from mythras_builder.core.config import (
    AllocationSettings,
    GenerationSettings,
    RuleSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from mythras_builder.core.exceptions import (
    CatalogError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidBuildStateError,
    MythrasBuilderError,
    UnsupportedCommandError,
    ValidationError,
)
from mythras_builder.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "MythrasBuilderError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Catalog exceptions
    "CatalogError",
    # Game engine exceptions
    "GameEngineError",
    "DiceRollError",
    "InvalidBuildStateError",
    "UnsupportedCommandError",
    # Configuration
    "Settings",
    "GenerationSettings",
    "AllocationSettings",
    "RuleSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
