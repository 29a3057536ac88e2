"""Date and duration parsing for iCalendar property values.

The date parser applies a fixed disambiguation order: plain date, UTC
date-time, floating local date-time, then dateutil's best-effort parser.
"""

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from dateutil import parser as dateutil_parser
from dateutil import tz

from .exceptions import EventFormatError, EventTimezoneError
from .models import CivilDate, Instant

logger = logging.getLogger(__name__)

UTC = timezone.utc

_DATE_RE = re.compile(r"\d{8}", re.ASCII)
_UTC_DATETIME_RE = re.compile(r"\d{8}T\d{6}Z", re.ASCII)
_LOCAL_DATETIME_RE = re.compile(r"\d{8}T\d{6}", re.ASCII)
_DURATION_RE = re.compile(
    r"P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?",
    re.ASCII,
)


def resolve_local_time(naive: datetime, local_tz: Optional[tzinfo] = None) -> datetime:
    """Interpret a naive datetime in the local zone and convert it to UTC.

    Args:
        naive: Wall-clock reading without tzinfo
        local_tz: Zone to interpret the reading in; process zone when None

    Returns:
        Aware datetime in UTC

    Raises:
        EventTimezoneError: If the reading does not exist, is ambiguous or
            falls outside the representable UTC range
    """
    zone = local_tz if local_tz is not None else tz.tzlocal()
    localized = naive.replace(tzinfo=zone)

    try:
        if not tz.datetime_exists(localized):
            raise EventTimezoneError(f"Local time {naive.isoformat()} does not exist in {zone}")
        if tz.datetime_ambiguous(localized):
            raise EventTimezoneError(f"Local time {naive.isoformat()} is ambiguous in {zone}")
        return localized.astimezone(UTC)
    except OverflowError as e:
        raise EventTimezoneError(
            f"Local time {naive.isoformat()} in {zone} is out of the UTC range"
        ) from e


def parse_date_or_instant(
    value: str, local_tz: Optional[tzinfo] = None
) -> Union[CivilDate, Instant]:
    """Parse a DATE or DATE-TIME property value.

    Args:
        value: Raw property value, e.g. ``20240101`` or ``20240101T090000Z``
        local_tz: Zone for floating date-times; process zone when None

    Returns:
        CivilDate for 8-digit dates, Instant (UTC) for everything else

    Raises:
        EventFormatError: If no rule can parse the value
        EventTimezoneError: If a floating time cannot be resolved
    """
    try:
        if _DATE_RE.fullmatch(value):
            return CivilDate(value=datetime.strptime(value, "%Y%m%d").date())
    except ValueError:
        pass

    try:
        if _UTC_DATETIME_RE.fullmatch(value):
            dt = datetime.strptime(value, "%Y%m%dT%H%M%SZ")
            return Instant(value=dt.replace(tzinfo=UTC))
    except ValueError:
        pass

    naive: Optional[datetime] = None
    try:
        if _LOCAL_DATETIME_RE.fullmatch(value):
            naive = datetime.strptime(value, "%Y%m%dT%H%M%S")
    except ValueError:
        naive = None
    if naive is not None:
        return Instant(value=resolve_local_time(naive, local_tz))

    # Non-standard formats go through dateutil
    try:
        parsed = dateutil_parser.parse(value)
    except (dateutil_parser.ParserError, ValueError, OverflowError) as e:
        raise EventFormatError(f"Invalid date or date-time: {value!r}") from e

    logger.debug("Parsed non-standard date value %r with dateutil", value)
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        return Instant(value=resolve_local_time(parsed, local_tz))
    try:
        return Instant(value=parsed.astimezone(UTC))
    except OverflowError as e:
        raise EventFormatError(f"Date-time out of range: {value!r}") from e


def parse_duration(value: str) -> timedelta:
    """Parse a ``P[nD][T[nH][nM][nS]]`` duration.

    Weeks, months, years and signs are not part of the accepted grammar.

    Raises:
        EventFormatError: If the whole value does not match the grammar
    """
    match = _DURATION_RE.fullmatch(value)
    if match is None:
        raise EventFormatError(f"Invalid duration format: {value!r}")

    parts = {name: int(raw) if raw else 0 for name, raw in match.groupdict().items()}
    try:
        return timedelta(
            days=parts["days"],
            hours=parts["hours"],
            minutes=parts["minutes"],
            seconds=parts["seconds"],
        )
    except OverflowError as e:
        raise EventFormatError(f"Duration out of range: {value!r}") from e
