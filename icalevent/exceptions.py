"""Exception hierarchy for iCalendar event conversion."""

from typing import Optional


class EventError(Exception):
    """Base exception for all event conversion errors."""

    def __init__(self, message: str, property_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.property_name = property_name

    def __str__(self) -> str:
        if self.property_name:
            return f"{self.property_name}: {self.message}"
        return self.message


class EventFormatError(EventError):
    """Raised when a property value does not match its expected grammar.

    Covers dates, durations, integers and enumerated tokens.
    """


class EventTimezoneError(EventError):
    """Raised when a floating local time cannot be resolved to one instant.

    Raised when:
    - The local reading falls in a daylight-saving gap (nonexistent)
    - The local reading falls in a daylight-saving fold (ambiguous)
    """


class UnknownPropertyError(EventError):
    """Raised for a property name that is neither handled nor ignored."""

    def __init__(self, property_name: str):
        super().__init__(f"Unknown property key: {property_name}", property_name)


class RecurrenceFormatError(EventError):
    """Raised when the reconstructed recurrence block cannot be parsed."""


class CalendarParseError(EventError):
    """Raised when iCalendar content cannot be tokenized into components."""
