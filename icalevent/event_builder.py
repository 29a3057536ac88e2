"""Single-pass conversion of VEVENT property records into an Event.

Each property name maps to a FieldRule in PROPERTY_RULES. SCALAR rules
overwrite (last write wins), APPEND rules accumulate in order, RRULE marks the
event as recurring, and recurrence-related lines are buffered as
``NAME:value`` text for dateutil.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from typing import Any, Callable, Optional

from .config import EventParserSettings, get_settings
from .datetime_utils import parse_date_or_instant, parse_duration
from .exceptions import EventError, UnknownPropertyError
from .field_parsers import parse_priority, parse_sequence, parse_status, parse_transparency
from .models import Event
from .recurrence import RECURRENCE_PROPERTIES, parse_recurrence

logger = logging.getLogger(__name__)

IGNORED_PREFIX = "X-"


class RuleKind(str, Enum):
    """How a property affects the Event under construction."""

    SCALAR = "scalar"
    APPEND = "append"
    RECURRENCE = "recurrence"
    BUFFER_ONLY = "buffer_only"
    IGNORE = "ignore"


class ValueType(str, Enum):
    """Value grammar of a SCALAR property."""

    TEXT = "text"
    DATE_OR_INSTANT = "date_or_instant"
    DURATION = "duration"
    STATUS = "status"
    TRANSPARENCY = "transparency"
    PRIORITY = "priority"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class FieldRule:
    kind: RuleKind
    field: Optional[str] = None
    value_type: ValueType = ValueType.TEXT


def _scalar(field: str, value_type: ValueType = ValueType.TEXT) -> FieldRule:
    return FieldRule(RuleKind.SCALAR, field, value_type)


def _append(field: str) -> FieldRule:
    return FieldRule(RuleKind.APPEND, field)


PROPERTY_RULES: dict[str, FieldRule] = {
    "UID": _scalar("uid"),
    "SUMMARY": _scalar("summary"),
    "DTSTART": _scalar("start", ValueType.DATE_OR_INSTANT),
    "DTEND": _scalar("end", ValueType.DATE_OR_INSTANT),
    "CREATED": _scalar("created", ValueType.DATE_OR_INSTANT),
    "DURATION": _scalar("duration", ValueType.DURATION),
    "LOCATION": _scalar("location"),
    "DESCRIPTION": _scalar("description"),
    "STATUS": _scalar("status", ValueType.STATUS),
    "LAST-MODIFIED": _scalar("last_modified", ValueType.DATE_OR_INSTANT),
    "TRANSPARENCY": _scalar("transparency", ValueType.TRANSPARENCY),
    "CATEGORIES": _append("categories"),
    "ATTENDEE": _append("attendees"),
    "ORGANIZER": _scalar("organizer"),
    "PRIORITY": _scalar("priority", ValueType.PRIORITY),
    "SEQUENCE": _scalar("sequence", ValueType.SEQUENCE),
    "DTSTAMP": _scalar("dtstamp", ValueType.DATE_OR_INSTANT),
    "RECURRENCE-ID": _scalar("recurrence_id", ValueType.DATE_OR_INSTANT),
    "RRULE": FieldRule(RuleKind.RECURRENCE),
    "RDATE": FieldRule(RuleKind.BUFFER_ONLY),
    "EXRULE": FieldRule(RuleKind.BUFFER_ONLY),
    "EXDATE": FieldRule(RuleKind.BUFFER_ONLY),
    "COMMENT": _scalar("comment"),
    "ATTACH": _append("attachments"),
    "ALARM": _append("alarms"),
    "TRANSP": FieldRule(RuleKind.IGNORE),
    "CLASS": FieldRule(RuleKind.IGNORE),
}

_IGNORE_RULE = FieldRule(RuleKind.IGNORE)


def lookup_rule(name: str) -> FieldRule:
    """Find the rule for a property name.

    Raises:
        UnknownPropertyError: If the name is not handled and not a vendor extension
    """
    rule = PROPERTY_RULES.get(name)
    if rule is not None:
        return rule
    if name.startswith(IGNORED_PREFIX):
        return _IGNORE_RULE
    raise UnknownPropertyError(name)


class EventBuilder:
    """Builds Event objects from ordered property records.

    The builder keeps only configuration; accumulators live inside ``build``
    so one instance can be reused for any number of events.
    """

    def __init__(self, settings: Optional[EventParserSettings] = None):
        """Initialize builder.

        Args:
            settings: Parser settings; shared settings are used when None
        """
        self.settings = settings if settings is not None else get_settings()
        self.local_tz: Optional[tzinfo] = self.settings.get_local_zone()
        self._converters: dict[ValueType, Callable[[str], Any]] = {
            ValueType.TEXT: str,
            ValueType.DATE_OR_INSTANT: self._parse_date,
            ValueType.DURATION: parse_duration,
            ValueType.STATUS: parse_status,
            ValueType.TRANSPARENCY: parse_transparency,
            ValueType.PRIORITY: parse_priority,
            ValueType.SEQUENCE: parse_sequence,
        }

    def _parse_date(self, value: str) -> Any:
        return parse_date_or_instant(value, self.local_tz)

    def build(self, properties: Iterable[tuple[str, Optional[str]]]) -> Event:
        """Convert one component's property records into an Event.

        Args:
            properties: Ordered ``(name, value)`` records; valueless ones are skipped

        Returns:
            Fully populated, frozen Event

        Raises:
            EventFormatError: A value did not match its grammar
            EventTimezoneError: A floating time could not be resolved
            UnknownPropertyError: A property name is not recognized
            RecurrenceFormatError: The recurrence block was rejected
        """
        scalars: dict[str, Any] = {}
        lists: dict[str, list[str]] = {}
        recurrence_lines: list[str] = []
        has_rrule = False
        has_rdate = False

        for name, value in properties:
            if value is None:
                continue

            if name in RECURRENCE_PROPERTIES:
                recurrence_lines.append(f"{name}:{value}")

            rule = lookup_rule(name)

            if rule.kind is RuleKind.SCALAR:
                try:
                    scalars[rule.field] = self._converters[rule.value_type](value)
                except EventError as e:
                    if e.property_name is None:
                        e.property_name = name
                    raise
            elif rule.kind is RuleKind.APPEND:
                lists.setdefault(rule.field, []).append(value)
            elif rule.kind is RuleKind.RECURRENCE:
                has_rrule = True
            elif rule.kind is RuleKind.BUFFER_ONLY and name == "RDATE":
                has_rdate = True

        fields: dict[str, Any] = dict(scalars)
        for field_name, values in lists.items():
            fields[field_name] = tuple(values)

        if has_rrule or (has_rdate and self.settings.rdate_triggers_recurrence):
            fields["recurrence"] = parse_recurrence("\n".join(recurrence_lines))
        elif has_rdate:
            logger.warning(
                "Event %s has RDATE without RRULE; inclusion dates dropped: %s",
                scalars.get("uid"),
                [line for line in recurrence_lines if line.startswith("RDATE:")],
            )

        event = Event(**fields)
        logger.debug(
            "Built event %s (%d fields, recurring=%s)",
            event.uid,
            len(fields),
            event.is_recurring,
        )
        return event


def build_event(
    properties: Iterable[tuple[str, Optional[str]]],
    settings: Optional[EventParserSettings] = None,
) -> Event:
    """Convert property records into an Event with a one-off builder."""
    return EventBuilder(settings).build(properties)
