"""Tests for structured logging helpers."""

from __future__ import annotations

from collections.abc import Generator

import pytest
import structlog
from structlog.testing import capture_logs

from mythras_builder.core.logging import (
    APP_NAME,
    add_app_context,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults so configuration does not leak between tests."""
    yield
    clear_context()
    structlog.reset_defaults()


def test_add_app_context() -> None:
    """Test the processor tags entries with the application name."""
    event_dict = add_app_context(None, "info", {"event": "Build session started"})

    assert event_dict["app"] == APP_NAME


def test_bind_and_clear_context() -> None:
    """Test bound context variables are visible until cleared."""
    bind_context(session_id="3f2a", culture="Civilized")

    assert structlog.contextvars.get_contextvars() == {
        "session_id": "3f2a",
        "culture": "Civilized",
    }

    clear_context()

    assert structlog.contextvars.get_contextvars() == {}


def test_get_logger_emits_key_values() -> None:
    """Test log calls carry their key-value context."""
    with capture_logs() as logs:
        get_logger("tests").info("Points allocated", skill="Athletics", amount=15)

    assert logs == [
        {"event": "Points allocated", "skill": "Athletics", "amount": 15, "log_level": "info"}
    ]


def test_configure_logging_json(capsys: pytest.CaptureFixture[str]) -> None:
    """Test JSON output includes the level and application name."""
    configure_logging(level="INFO", json_format=True)

    get_logger("tests").info("Catalog loaded", cultures=4)

    output = capsys.readouterr().out
    assert '"event": "Catalog loaded"' in output
    assert '"app": "mythras_builder"' in output
    assert '"level": "info"' in output


def test_configure_logging_filters_level(capsys: pytest.CaptureFixture[str]) -> None:
    """Test entries below the configured level are dropped."""
    configure_logging(level="WARNING", json_format=True)

    get_logger("tests").info("Command applied")

    assert "Command applied" not in capsys.readouterr().out
