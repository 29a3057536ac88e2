"""Recurrence assembly on top of python-dateutil."""

import logging
from collections.abc import Iterator
from datetime import datetime
from itertools import islice

from dateutil.rrule import rruleset, rrulestr

from .exceptions import RecurrenceFormatError

logger = logging.getLogger(__name__)

# Property names whose lines make up a recurrence block, in RFC 5545 order
RECURRENCE_PROPERTIES = ("RDATE", "RRULE", "EXDATE", "EXRULE", "DTSTART")


class RecurrenceSet:
    """Parsed recurrence block: start anchor, rules, dates and exclusions.

    Iteration is lazy and restartable; every ``iter()`` starts again from the
    first occurrence. Two sets compare equal when built from the same text.
    """

    def __init__(self, source: str, rule_set: rruleset):
        self.source = source
        self.rule_set = rule_set

    def __iter__(self) -> Iterator[datetime]:
        return iter(self.rule_set)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecurrenceSet):
            return NotImplemented
        return self.source == other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        return f"RecurrenceSet({self.source!r})"

    def take_occurrences(self, count: int) -> list[datetime]:
        """Return at most the first ``count`` occurrences."""
        if count < 0:
            raise ValueError("count must be non-negative")
        return list(islice(self.rule_set, count))

    def between(self, after: datetime, before: datetime, inc: bool = False) -> list[datetime]:
        """Return occurrences inside the window, delegating to dateutil."""
        return self.rule_set.between(after, before, inc=inc)


def _check_consistent_awareness(rule_set: rruleset) -> None:
    """Reject blocks mixing floating and zoned date-times.

    dateutil accepts such blocks but fails with TypeError once enumeration
    compares the two kinds.
    """
    rules = rule_set._rrule + rule_set._exrule  # noqa: SLF001
    values = [rule._dtstart for rule in rules]  # noqa: SLF001
    values.extend(rule_set._rdate)  # noqa: SLF001
    values.extend(rule_set._exdate)  # noqa: SLF001

    if len({dt.tzinfo is None for dt in values if dt is not None}) > 1:
        raise RecurrenceFormatError("Recurrence block mixes floating and zoned date-times")


def parse_recurrence(text: str) -> RecurrenceSet:
    """Parse a newline-joined block of ``NAME:value`` recurrence lines.

    Args:
        text: Lines such as ``DTSTART:20240101T090000Z`` and ``RRULE:FREQ=DAILY``

    Returns:
        RecurrenceSet wrapping a dateutil rruleset

    Raises:
        RecurrenceFormatError: If no DTSTART anchor is present or dateutil
            cannot enumerate the block
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not any(line.upper().startswith("DTSTART") for line in lines):
        raise RecurrenceFormatError("Recurrence block has no DTSTART anchor")

    try:
        rule_set = rrulestr("\n".join(lines), forceset=True)
    except (ValueError, TypeError, OverflowError) as e:
        raise RecurrenceFormatError(f"Invalid recurrence block: {e}") from e
    _check_consistent_awareness(rule_set)

    logger.debug("Parsed recurrence block with %d lines", len(lines))
    return RecurrenceSet(text, rule_set)
