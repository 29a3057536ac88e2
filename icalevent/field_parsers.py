"""Parsers for enumerated and integer VEVENT properties."""

import re

from .exceptions import EventFormatError
from .models import EventStatus, EventTransparency

_PRIORITY_RE = re.compile(r"\+?\d+", re.ASCII)
_SEQUENCE_RE = re.compile(r"[+-]?\d+", re.ASCII)

MAX_PRIORITY = 255
_SEQUENCE_BOUND = 2**31


def parse_status(value: str) -> EventStatus:
    """Parse STATUS case-insensitively; unknown tokens are errors."""
    try:
        return EventStatus(value.upper())
    except ValueError as e:
        raise EventFormatError(f"Invalid status: {value!r}") from e


def parse_transparency(value: str) -> EventTransparency:
    """Parse TRANSPARENCY case-insensitively; unknown tokens are errors."""
    try:
        return EventTransparency(value.upper())
    except ValueError as e:
        raise EventFormatError(f"Invalid transparency: {value!r}") from e


def parse_priority(value: str) -> int:
    """Parse PRIORITY as a small non-negative integer (0-255)."""
    if not _PRIORITY_RE.fullmatch(value):
        raise EventFormatError(f"Invalid priority: {value!r}")
    priority = int(value)
    if priority > MAX_PRIORITY:
        raise EventFormatError(f"Invalid priority: {value!r}")
    return priority


def parse_sequence(value: str) -> int:
    """Parse SEQUENCE as a signed 32-bit integer."""
    if not _SEQUENCE_RE.fullmatch(value):
        raise EventFormatError(f"Invalid sequence: {value!r}")
    sequence = int(value)
    if not -_SEQUENCE_BOUND <= sequence < _SEQUENCE_BOUND:
        raise EventFormatError(f"Invalid sequence: {value!r}")
    return sequence
