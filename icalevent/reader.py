"""Adapter from iCalendar text to per-VEVENT property records.

Tokenizing and line unfolding are done by icalendar's content line parser;
this module only tracks component nesting and collects the properties that
belong directly to each VEVENT.
"""

import logging
from collections.abc import Iterator
from typing import Optional

from icalendar.parser import Contentlines

from .config import EventParserSettings
from .event_builder import EventBuilder
from .exceptions import CalendarParseError, EventError
from .models import Event, PropertyRecord

logger = logging.getLogger(__name__)

EVENT_COMPONENT = "VEVENT"


def iter_event_properties(ics_text: str) -> Iterator[list[PropertyRecord]]:
    """Yield the property records of each top-level VEVENT in document order.

    Property names are upper-cased and parameters dropped; values are kept
    as raw text. Properties of nested components such as VALARM are skipped.

    Raises:
        CalendarParseError: If a content line cannot be split or BEGIN/END
            markers do not balance
    """
    stack: list[str] = []
    current: Optional[list[PropertyRecord]] = None

    try:
        lines = Contentlines.from_ical(ics_text)
    except ValueError as e:
        raise CalendarParseError(f"Content is not iCalendar text: {e}") from e

    for line_number, line in enumerate(lines, start=1):
        if not line:
            continue
        try:
            name, _params, value = line.raw_parts()
        except ValueError as e:
            raise CalendarParseError(f"Content line {line_number} is malformed: {e}") from e

        name = name.upper()
        if name == "BEGIN":
            component = value.upper()
            if component == EVENT_COMPONENT and EVENT_COMPONENT not in stack:
                current = []
            stack.append(component)
            continue
        if name == "END":
            component = value.upper()
            if not stack or stack[-1] != component:
                raise CalendarParseError(
                    f"Unexpected END:{component} at content line {line_number}"
                )
            stack.pop()
            if component == EVENT_COMPONENT and current is not None and EVENT_COMPONENT not in stack:
                yield current
                current = None
            continue

        if current is not None and stack and stack[-1] == EVENT_COMPONENT:
            current.append(PropertyRecord(name, value))

    if stack:
        raise CalendarParseError(f"Unterminated component(s): {', '.join(stack)}")


def parse_events(
    ics_text: str,
    settings: Optional[EventParserSettings] = None,
    skip_invalid: bool = False,
) -> list[Event]:
    """Build an Event for every VEVENT in an iCalendar document.

    Args:
        ics_text: Full iCalendar document
        settings: Parser settings passed to the builder
        skip_invalid: Log and skip events that fail instead of raising

    Returns:
        Events in document order
    """
    builder = EventBuilder(settings)
    events: list[Event] = []
    skipped = 0

    for index, properties in enumerate(iter_event_properties(ics_text)):
        try:
            events.append(builder.build(properties))
        except EventError as e:
            if not skip_invalid:
                raise
            skipped += 1
            logger.warning("Event #%d %s, skipping", index, e)

    logger.debug("Parsed %d events (%d skipped)", len(events), skipped)
    return events
