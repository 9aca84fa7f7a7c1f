"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from mythras_builder.core.config import (
    AllocationSettings,
    GenerationSettings,
    RuleSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from mythras_builder.core.exceptions import ConfigurationError


class TestGenerationSettings:
    """Tests for GenerationSettings configuration."""

    def test_default_values(self) -> None:
        """Test default generation settings."""
        settings = GenerationSettings()

        assert settings.default_method == "point_buy"
        assert settings.point_budget == 75
        assert settings.min_point_budget == 60
        assert settings.max_point_budget == 120
        assert settings.standard_max == 18
        assert settings.manual_max == 21

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test budget read from the environment."""
        monkeypatch.setenv("MYTHRAS_BUILDER_GENERATION_POINT_BUDGET", "90")

        settings = GenerationSettings()

        assert settings.point_budget == 90

    def test_budget_outside_range(self) -> None:
        """Test that the default budget must sit within its range."""
        with pytest.raises(ConfigurationError) as exc_info:
            GenerationSettings(point_budget=130)

        assert exc_info.value.details["config_key"] == "point_budget"

    def test_inverted_range(self) -> None:
        """Test that min_point_budget may not exceed max_point_budget."""
        with pytest.raises(ConfigurationError) as exc_info:
            GenerationSettings(min_point_budget=100, max_point_budget=80, point_budget=90)

        assert "min_point_budget" in str(exc_info.value)

    def test_standard_max_above_manual_max(self) -> None:
        """Test that the manual ceiling cannot be below the standard one."""
        with pytest.raises(ConfigurationError):
            GenerationSettings(standard_max=21, manual_max=18)


class TestAllocationSettings:
    """Tests for AllocationSettings configuration."""

    def test_default_values(self) -> None:
        """Test default allocation settings."""
        settings = AllocationSettings()

        assert settings.culture_pool == 100
        assert settings.career_pool == 100
        assert settings.professional_limit == 3
        assert settings.bonus_skill_amount == 50
        assert settings.standard_skill_floor == 5
        assert settings.enforce_culture_minimum is False

    def test_rule_variant_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test enabling the culture minimum through the environment."""
        monkeypatch.setenv("MYTHRAS_BUILDER_ALLOCATION_ENFORCE_CULTURE_MINIMUM", "true")

        settings = AllocationSettings()

        assert settings.enforce_culture_minimum is True


class TestRuleSettings:
    """Tests for RuleSettings configuration."""

    def test_default_offset(self) -> None:
        """Test the default overflow offset."""
        assert RuleSettings().overflow_offset == 13

    def test_alternate_offset(self) -> None:
        """Test selecting the alternate overflow offset."""
        assert RuleSettings(overflow_offset=18).overflow_offset == 18

    def test_rejects_other_offsets(self) -> None:
        """Test that only the two published offsets are accepted."""
        with pytest.raises(ValueError):
            RuleSettings(overflow_offset=15)


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "Mythras Character Builder"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.catalog_path is None
        assert settings.generation.point_budget == 75
        assert settings.allocation.culture_pool == 100

    def test_env_vars(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test nested settings picked up from the environment."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.generation.point_budget == 90
        assert settings.allocation.culture_pool == 120

    def test_is_production_property(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test is_production property."""
        monkeypatch.setenv("MYTHRAS_BUILDER_DEBUG", "false")
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.is_production is True

    def test_catalog_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test catalog path read as a Path."""
        monkeypatch.setenv("MYTHRAS_BUILDER_CATALOG_PATH", str(tmp_path / "catalog.json"))
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.catalog_path == tmp_path / "catalog.json"


class TestGetSettings:
    """Tests for get_settings singleton function."""

    def test_returns_settings_instance(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that get_settings returns a Settings instance."""
        monkeypatch.chdir(tmp_path)
        clear_settings_cache()

        settings = get_settings()

        assert isinstance(settings, Settings)

    def test_caching(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that settings are cached."""
        monkeypatch.chdir(tmp_path)
        clear_settings_cache()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_cache_clear(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that cache can be cleared."""
        monkeypatch.chdir(tmp_path)
        clear_settings_cache()

        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_invalid_env_raises_configuration_error(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a bad environment surfaces as ConfigurationError."""
        monkeypatch.setenv("MYTHRAS_BUILDER_GENERATION_POINT_BUDGET", "500")
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_unparseable_env_is_wrapped(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that pydantic errors are wrapped in ConfigurationError."""
        monkeypatch.setenv("MYTHRAS_BUILDER_LOG_LEVEL", "LOUD")
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert "original_error" in exc_info.value.details
