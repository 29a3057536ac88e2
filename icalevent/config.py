"""Settings for event conversion using pydantic-settings."""

import logging
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EventParserSettings(BaseSettings):
    """Configuration for the event builder and calendar reader.

    Values can be overridden through ``ICALEVENT_*`` environment variables
    or a ``.env`` file.
    """

    local_timezone: Optional[str] = Field(
        default=None,
        description="IANA zone for floating date-times; process zone when unset",
    )
    rdate_triggers_recurrence: bool = Field(
        default=False,
        description="Assemble recurrence when RDATE is present without RRULE",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    debug: bool = Field(default=False, description="Enable debug logging")

    model_config = SettingsConfigDict(
        env_prefix="ICALEVENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("local_timezone")
    @classmethod
    def validate_local_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Reject zone names unknown to the tz database."""
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    def get_local_zone(self) -> Optional[ZoneInfo]:
        """Return the configured local zone, or None for the process zone."""
        if self.local_timezone is None:
            return None
        return ZoneInfo(self.local_timezone)


_settings: Optional[EventParserSettings] = None


def get_settings() -> EventParserSettings:
    """Get the shared settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = EventParserSettings()
        logger.debug("Loaded settings: %s", _settings.model_dump())
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None
