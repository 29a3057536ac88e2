"""icalevent - typed, validated events from iCalendar VEVENT properties."""

__version__ = "0.1.0"

from .config import EventParserSettings, get_settings, reset_settings
from .datetime_utils import parse_date_or_instant, parse_duration
from .event_builder import PROPERTY_RULES, EventBuilder, build_event
from .event_logging import configure_logging, configure_logging_from_settings
from .exceptions import (
    CalendarParseError,
    EventError,
    EventFormatError,
    EventTimezoneError,
    RecurrenceFormatError,
    UnknownPropertyError,
)
from .field_parsers import parse_priority, parse_sequence, parse_status, parse_transparency
from .models import (
    CivilDate,
    DateOrInstant,
    Event,
    EventStatus,
    EventTransparency,
    Instant,
    PropertyRecord,
)
from .reader import iter_event_properties, parse_events
from .recurrence import RecurrenceSet, parse_recurrence

__all__ = [
    "PROPERTY_RULES",
    "CalendarParseError",
    "CivilDate",
    "DateOrInstant",
    "Event",
    "EventBuilder",
    "EventError",
    "EventFormatError",
    "EventParserSettings",
    "EventStatus",
    "EventTimezoneError",
    "EventTransparency",
    "Instant",
    "PropertyRecord",
    "RecurrenceFormatError",
    "RecurrenceSet",
    "UnknownPropertyError",
    "build_event",
    "configure_logging",
    "configure_logging_from_settings",
    "get_settings",
    "iter_event_properties",
    "parse_date_or_instant",
    "parse_duration",
    "parse_events",
    "parse_priority",
    "parse_recurrence",
    "parse_sequence",
    "parse_status",
    "parse_transparency",
    "reset_settings",
]
