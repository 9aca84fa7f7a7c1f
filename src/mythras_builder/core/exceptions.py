"""Custom exception hierarchy for the Mythras character builder.

Rule violations during a build (an over-spent pool, a fourth professional
skill, an unaffordable purchase) are never raised: they come back as
rejected ``CommandResult`` values. The exceptions defined here cover the
faults that sit outside the rules: broken configuration, malformed
commands, unreadable reference data and invalid dice notation.

All exceptions inherit from MythrasBuilderError, enabling unified error
handling at the application boundary while preserving domain context.

Example:
    >>> from mythras_builder.core.exceptions import CatalogError
    >>> raise CatalogError("Unknown culture", catalog_key="Atlantean")
"""

from __future__ import annotations

from typing import Any


class MythrasBuilderError(Exception):
    """Base exception for all character builder errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Reference Data Exceptions
# =============================================================================


class CatalogError(MythrasBuilderError):
    """Raised when reference data cannot be loaded or is inconsistent.

    This covers unreadable catalog files, schema violations and tables that
    break a cross-reference rule (for example social-class percentile bands
    that do not cover 1-100).
    """

    def __init__(
        self,
        message: str,
        *,
        source_file: str | None = None,
        catalog_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error with source context.

        Args:
            message: Human-readable error description.
            source_file: Path to the catalog file that caused the error.
            catalog_key: The table entry involved, if any.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source_file:
            combined_details["source_file"] = source_file
        if catalog_key:
            combined_details["catalog_key"] = catalog_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Build Engine Exceptions
# =============================================================================


class GameEngineError(MythrasBuilderError):
    """Base exception for build engine faults.

    Raised for programming errors inside the engine, never for a command
    that the rules simply refuse.
    """


class DiceRollError(GameEngineError):
    """Raised when dice rolling operations fail.

    This typically occurs when parsing invalid dice notation.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class InvalidBuildStateError(GameEngineError):
    """Raised when a build session breaks one of its own invariants.

    This signals an engine bug: every public operation is supposed to leave
    pools within capacity and allocations within the age cap.
    """

    def __init__(
        self,
        message: str,
        *,
        pool: str | None = None,
        skill: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid state error with pool and skill context.

        Args:
            message: Human-readable error description.
            pool: The pool whose invariant failed.
            skill: The skill whose allocation failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if pool:
            combined_details["pool"] = pool
        if skill:
            combined_details["skill"] = skill
        super().__init__(message, details=combined_details)


class UnsupportedCommandError(GameEngineError):
    """Raised when a session receives a command it has no handler for."""

    def __init__(
        self,
        message: str,
        *,
        command_kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unsupported command error.

        Args:
            message: Human-readable error description.
            command_kind: The discriminator of the offending command.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if command_kind:
            combined_details["command_kind"] = command_kind
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(MythrasBuilderError):
    """Raised when application configuration is invalid.

    This includes invalid values or incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(MythrasBuilderError):
    """Raised when data validation fails.

    Used for malformed command payloads handed to the session, which are a
    caller bug rather than a rule rejection.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "MythrasBuilderError",
    # Reference data exceptions
    "CatalogError",
    # Engine exceptions
    "GameEngineError",
    "DiceRollError",
    "InvalidBuildStateError",
    "UnsupportedCommandError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
