"""Shared test configuration for icalevent."""

import logging
from collections.abc import Generator
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from icalevent.config import EventParserSettings, reset_settings
from icalevent.event_logging import PACKAGE_LOGGERS, THIRD_PARTY_LOGGERS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Clear ICALEVENT_* variables and cached settings around every test."""
    for name in (
        "ICALEVENT_LOCAL_TIMEZONE",
        "ICALEVENT_RDATE_TRIGGERS_RECURRENCE",
        "ICALEVENT_LOG_LEVEL",
        "ICALEVENT_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def test_timezone() -> str:
    """Return a deterministic zone with DST transitions.

    Using a fixed zone avoids host-local timezone differences which would
    make floating date-time tests flaky.
    """
    return "America/New_York"


@pytest.fixture
def local_zone(test_timezone: str) -> ZoneInfo:
    return ZoneInfo(test_timezone)


@pytest.fixture
def settings(test_timezone: str) -> EventParserSettings:
    """Settings pinned to the test zone, ignoring any .env file."""
    return EventParserSettings(local_timezone=test_timezone, _env_file=None)


@pytest.fixture
def restore_logging() -> Generator[None, Any, None]:
    """Restore logger levels changed by logging configuration tests."""
    names = ["", *PACKAGE_LOGGERS, *THIRD_PARTY_LOGGERS]
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Tests spanning reader and builder")
