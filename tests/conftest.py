"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Mythras character builder test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

import pytest

from mythras_builder.engine.dice import DiceResult, DiceRoller


if TYPE_CHECKING:
    from collections.abc import Generator


class FixedRoller(DiceRoller):
    """DiceRoller that returns queued totals instead of rolling.

    Lets a test pin the exact outcome of a money or social-class roll.
    """

    def __init__(self, totals: Iterable[int]) -> None:
        super().__init__()
        self._totals = list(totals)
        self.expressions: list[str] = []

    def roll(self, expression: str) -> DiceResult:
        self.expressions.append(expression)
        total = self._totals.pop(0)
        return DiceResult(expression=expression, total=total, dice=(), modifier=0)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from mythras_builder.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "MYTHRAS_BUILDER_DEBUG": "true",
        "MYTHRAS_BUILDER_LOG_LEVEL": "DEBUG",
        "MYTHRAS_BUILDER_GENERATION_POINT_BUDGET": "90",
        "MYTHRAS_BUILDER_ALLOCATION_CULTURE_POOL": "120",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def settings(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Settings built from defaults, isolated from any local .env file.

    Returns:
        Settings instance.
    """
    from mythras_builder.core.config import Settings

    monkeypatch.chdir(tmp_path)
    return Settings()


@pytest.fixture
def allocation_settings() -> Any:
    """Default allocation settings.

    Returns:
        AllocationSettings instance.
    """
    from mythras_builder.core.config import AllocationSettings

    return AllocationSettings()


@pytest.fixture
def generation_settings() -> Any:
    """Default generation settings.

    Returns:
        GenerationSettings instance.
    """
    from mythras_builder.core.config import GenerationSettings

    return GenerationSettings()


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def catalog() -> Any:
    """The built-in reference catalog.

    Returns:
        ReferenceCatalog instance.
    """
    from mythras_builder.models.data import default_catalog

    return default_catalog()


@pytest.fixture
def wide_cap_catalog(catalog: Any) -> Any:
    """Built-in catalog plus an age bracket whose cap does not bind.

    Returns:
        ReferenceCatalog with an extra "Unbounded" age bracket.
    """
    from mythras_builder.models.catalog import AgeBracket

    unbounded = AgeBracket(key="Unbounded", bonus=150, max_increase=100, age_expression="20+1d6")
    return catalog.model_copy(update={"ages": (*catalog.ages, unbounded)})


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Create a DiceRoller with a fixed seed for reproducible tests.

    Returns:
        DiceRoller instance with fixed seed.
    """
    return DiceRoller(seed=42)


@pytest.fixture
def fixed_roller() -> Callable[..., FixedRoller]:
    """Factory for rollers that return queued totals.

    Returns:
        Callable taking the totals to return, in order.
    """

    def factory(*totals: int) -> FixedRoller:
        return FixedRoller(totals)

    return factory


@pytest.fixture
def allocation_engine(catalog: Any, allocation_settings: Any) -> Any:
    """Allocation engine for a Barbarian Agent of Adult age.

    Returns:
        AllocationEngine instance.
    """
    from mythras_builder.engine.allocation import AllocationEngine

    return AllocationEngine(
        catalog,
        allocation_settings,
        culture="Barbarian",
        career="Agent",
        age="Adult",
    )


@pytest.fixture
def session(catalog: Any, settings: Any, dice_roller: DiceRoller) -> Any:
    """Build session on the built-in catalog with a seeded roller.

    Returns:
        BuildSession instance.
    """
    from mythras_builder.engine.session import BuildSession

    return BuildSession(catalog, settings, roller=dice_roller)
