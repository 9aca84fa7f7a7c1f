"""Configuration management for the Mythras character builder.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides. Every
tunable rule number of the build engine (pool sizes, point-buy budget,
characteristic ceilings, rule variants) lives here rather than in code.

Example:
    >>> from mythras_builder.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.generation.point_budget
    75

Environment Variables:
    MYTHRAS_BUILDER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    MYTHRAS_BUILDER_CATALOG_PATH: Optional JSON file replacing the built-in tables
    MYTHRAS_BUILDER_GENERATION_POINT_BUDGET: Point-buy budget (60-120)
    MYTHRAS_BUILDER_ALLOCATION_BONUS_SKILL_AMOUNT: Automatic bonus-skill points
    MYTHRAS_BUILDER_RULES_OVERFLOW_OFFSET: Offset used above 18 (13 or 18)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mythras_builder.core.exceptions import ConfigurationError


class GenerationSettings(BaseSettings):
    """Configuration for characteristic generation.

    Attributes:
        default_method: Generation method a new session starts in.
        point_budget: Default point-buy budget.
        min_point_budget: Lowest budget a session may choose.
        max_point_budget: Highest budget a session may choose.
        standard_max: Characteristic ceiling under roll and point-buy.
        manual_max: Characteristic ceiling under manual entry.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYTHRAS_BUILDER_GENERATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_method: Literal["roll", "point_buy", "manual"] = Field(
        default="point_buy",
        description="Initial characteristic generation method",
    )
    point_budget: int = Field(
        default=75,
        ge=0,
        description="Default point-buy budget",
    )
    min_point_budget: int = Field(
        default=60,
        ge=0,
        description="Lowest selectable point-buy budget",
    )
    max_point_budget: int = Field(
        default=120,
        ge=0,
        description="Highest selectable point-buy budget",
    )
    standard_max: int = Field(
        default=18,
        ge=8,
        le=30,
        description="Characteristic maximum for roll and point-buy",
    )
    manual_max: int = Field(
        default=21,
        ge=8,
        le=30,
        description="Characteristic maximum for manual entry",
    )

    @model_validator(mode="after")
    def validate_budget_range(self) -> "GenerationSettings":
        """Ensure the default budget sits inside its selectable range.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the range is inverted or excludes the default.
        """
        if self.min_point_budget > self.max_point_budget:
            raise ConfigurationError(
                f"min_point_budget ({self.min_point_budget}) must not exceed "
                f"max_point_budget ({self.max_point_budget})",
                config_key="min_point_budget",
            )
        if not self.min_point_budget <= self.point_budget <= self.max_point_budget:
            raise ConfigurationError(
                f"point_budget ({self.point_budget}) must be within "
                f"{self.min_point_budget}-{self.max_point_budget}",
                config_key="point_budget",
            )
        if self.standard_max > self.manual_max:
            raise ConfigurationError(
                f"standard_max ({self.standard_max}) must not exceed "
                f"manual_max ({self.manual_max})",
                config_key="standard_max",
            )
        return self


class AllocationSettings(BaseSettings):
    """Configuration for skill point allocation.

    Attributes:
        culture_pool: Points in the culture pool.
        career_pool: Points in the career pool.
        professional_limit: Professional skills selectable per side.
        bonus_skill_amount: Points the bonus skill receives automatically.
        standard_skill_floor: Lowest total a standard skill can show.
        enforce_culture_minimum: Rule variant giving every culture standard
            skill a minimum culture-pool contribution.
        culture_minimum_points: Size of that minimum contribution.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYTHRAS_BUILDER_ALLOCATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    culture_pool: int = Field(
        default=100,
        ge=0,
        le=1000,
        description="Culture pool capacity",
    )
    career_pool: int = Field(
        default=100,
        ge=0,
        le=1000,
        description="Career pool capacity",
    )
    professional_limit: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Professional skills selectable per side",
    )
    bonus_skill_amount: int = Field(
        default=50,
        ge=0,
        le=300,
        description="Automatic allocation for the bonus skill",
    )
    standard_skill_floor: int = Field(
        default=5,
        ge=0,
        le=50,
        description="Floor applied to standard skill totals",
    )
    enforce_culture_minimum: bool = Field(
        default=False,
        description="Seed and hold a minimum culture allocation on culture standard skills",
    )
    culture_minimum_points: int = Field(
        default=5,
        ge=0,
        le=50,
        description="Minimum culture allocation under the rule variant",
    )


class RuleSettings(BaseSettings):
    """Configuration for rules that have more than one published reading.

    Attributes:
        overflow_offset: Offset subtracted from a characteristic above 18
            before dividing by 6 for experience, healing and luck.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYTHRAS_BUILDER_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    overflow_offset: Literal[13, 18] = Field(
        default=13,
        description="Offset for the above-18 band of derived stat tables",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines instead of console output.
        catalog_path: Optional JSON reference catalog to load at startup.
        generation: Characteristic generation settings.
        allocation: Skill allocation settings.
        rules: Rule variant settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYTHRAS_BUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # Application metadata
    app_name: str = Field(
        default="Mythras Character Builder",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )
    catalog_path: Path | None = Field(
        default=None,
        description="Reference catalog JSON file",
    )

    # Nested settings
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    allocation: AllocationSettings = Field(default_factory=AllocationSettings)
    rules: RuleSettings = Field(default_factory=RuleSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "GenerationSettings",
    "AllocationSettings",
    "RuleSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
