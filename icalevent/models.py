"""Data models for converted iCalendar events."""

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .recurrence import RecurrenceSet


class PropertyRecord(NamedTuple):
    """One name/value pair from a parsed calendar component."""

    name: str
    value: Optional[str] = None


class CivilDate(BaseModel):
    """A calendar date with no time of day or zone, used by all-day events."""

    kind: Literal["date"] = "date"
    value: date

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.value.isoformat()


class Instant(BaseModel):
    """An absolute point in time, always stored in UTC."""

    kind: Literal["instant"] = "instant"
    value: datetime

    model_config = ConfigDict(frozen=True)

    @field_validator("value")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Require an aware datetime and convert it to UTC."""
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("Instant requires a timezone-aware datetime")
        return v.astimezone(timezone.utc)

    @field_serializer("value")
    def serialize_value(self, dt: datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()

    def __str__(self) -> str:
        return self.value.isoformat()


DateOrInstant = Annotated[Union[CivilDate, Instant], Field(discriminator="kind")]


class EventStatus(str, Enum):
    """STATUS values allowed on a VEVENT."""

    TENTATIVE = "TENTATIVE"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class EventTransparency(str, Enum):
    """Whether an event blocks its time interval in the calendar."""

    OPAQUE = "OPAQUE"
    TRANSPARENT = "TRANSPARENT"


class Event(BaseModel):
    """Typed view of one VEVENT component following RFC 5545 fields.

    Every field is optional; ``None`` means the property was not present.
    Multi-valued fields keep insertion order and duplicates.
    """

    # Identity and text
    uid: Optional[str] = Field(default=None, description="UID")
    summary: Optional[str] = Field(default=None, description="SUMMARY")
    location: Optional[str] = Field(default=None, description="LOCATION")
    description: Optional[str] = Field(default=None, description="DESCRIPTION")
    organizer: Optional[str] = Field(default=None, description="ORGANIZER")
    comment: Optional[str] = Field(default=None, description="COMMENT")

    # Dates
    created: Optional[DateOrInstant] = Field(default=None, description="CREATED")
    start: Optional[DateOrInstant] = Field(default=None, description="DTSTART")
    end: Optional[DateOrInstant] = Field(default=None, description="DTEND")
    dtstamp: Optional[DateOrInstant] = Field(default=None, description="DTSTAMP")
    recurrence_id: Optional[DateOrInstant] = Field(default=None, description="RECURRENCE-ID")
    last_modified: Optional[DateOrInstant] = Field(default=None, description="LAST-MODIFIED")

    # Other typed scalars
    duration: Optional[timedelta] = Field(default=None, description="DURATION")
    status: Optional[EventStatus] = Field(default=None, description="STATUS")
    transparency: Optional[EventTransparency] = Field(default=None, description="TRANSPARENCY")
    priority: Optional[int] = Field(default=None, ge=0, le=255, description="PRIORITY")
    sequence: Optional[int] = Field(default=None, description="SEQUENCE")

    # Multi-valued
    categories: Optional[tuple[str, ...]] = Field(default=None, description="CATEGORIES")
    attendees: Optional[tuple[str, ...]] = Field(default=None, description="ATTENDEE")
    attachments: Optional[tuple[str, ...]] = Field(default=None, description="ATTACH")
    alarms: Optional[tuple[str, ...]] = Field(default=None, description="ALARM")

    # DTSTART, RRULE, RDATE, EXRULE and EXDATE combined
    recurrence: Optional[RecurrenceSet] = Field(default=None, description="Recurrence set")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def is_all_day(self) -> bool:
        """Check if the event starts on a date rather than at an instant."""
        return isinstance(self.start, CivilDate)

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None
