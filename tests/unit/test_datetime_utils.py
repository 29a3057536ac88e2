"""Unit tests for icalevent.datetime_utils."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from icalevent.datetime_utils import parse_date_or_instant, parse_duration, resolve_local_time
from icalevent.exceptions import EventFormatError, EventTimezoneError
from icalevent.models import CivilDate, Instant

pytestmark = pytest.mark.unit


class TestParseDateOrInstant:
    """Tests for the ordered date/date-time disambiguation."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("20240101", date(2024, 1, 1)),
            ("20240229", date(2024, 2, 29)),
            ("19991231", date(1999, 12, 31)),
        ],
    )
    def test_eight_digit_value_is_civil_date(self, value, expected):
        """An 8-digit value yields a date with no time component."""
        result = parse_date_or_instant(value)

        assert isinstance(result, CivilDate)
        assert not isinstance(result.value, datetime)
        assert result.value == expected

    def test_utc_marker_yields_utc_instant(self):
        """YYYYMMDDTHHMMSSZ keeps the literal wall-clock reading in UTC."""
        result = parse_date_or_instant("20240315T143000Z")

        assert isinstance(result, Instant)
        assert result.value == datetime(2024, 3, 15, 14, 30, tzinfo=timezone.utc)
        assert result.value.utcoffset() == timedelta(0)

    def test_floating_time_uses_local_zone(self, local_zone):
        """A floating date-time is read in the local zone then stored in UTC."""
        result = parse_date_or_instant("20240115T090000", local_zone)

        assert isinstance(result, Instant)
        assert result.value == datetime(2024, 1, 15, 14, 0, tzinfo=timezone.utc)

    def test_floating_time_in_summer(self, local_zone):
        """Daylight saving offsets are applied for summer readings."""
        result = parse_date_or_instant("20240715T090000", local_zone)

        assert result.value == datetime(2024, 7, 15, 13, 0, tzinfo=timezone.utc)

    def test_floating_time_in_dst_gap_raises(self, local_zone):
        """A nonexistent local reading is a recoverable timezone error."""
        with pytest.raises(EventTimezoneError, match="does not exist"):
            parse_date_or_instant("20240310T023000", local_zone)

    def test_floating_time_in_dst_fold_raises(self, local_zone):
        """An ambiguous local reading is a recoverable timezone error."""
        with pytest.raises(EventTimezoneError, match="ambiguous"):
            parse_date_or_instant("20241103T013000", local_zone)

    def test_fallback_parser_with_offset(self):
        """Non-standard formats go through dateutil and are normalized."""
        result = parse_date_or_instant("2024-03-15T10:00:00+02:00")

        assert isinstance(result, Instant)
        assert result.value == datetime(2024, 3, 15, 8, 0, tzinfo=timezone.utc)

    def test_fallback_parser_naive_result_is_local(self, local_zone):
        """Naive fallback results are resolved like floating times."""
        result = parse_date_or_instant("2024-01-15 09:00", local_zone)

        assert result.value == datetime(2024, 1, 15, 14, 0, tzinfo=timezone.utc)

    def test_iso_date_goes_to_fallback_as_instant(self):
        """Only the compact 8-digit form is a civil date."""
        result = parse_date_or_instant("2024-01-15", ZoneInfo("UTC"))

        assert isinstance(result, Instant)
        assert result.value == datetime(2024, 1, 15, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        ("value", "zone"),
        [
            ("00010101T000000", "Asia/Tokyo"),
            ("99991231T235959", "America/New_York"),
        ],
    )
    def test_floating_time_outside_utc_range_raises(self, value, zone):
        """Readings that leave the datetime range in UTC are timezone errors."""
        with pytest.raises(EventTimezoneError, match="out of the UTC range"):
            parse_date_or_instant(value, ZoneInfo(zone))

    @pytest.mark.parametrize("value", ["9999-12-31T23:00:00-05:00", "0001-01-01T00:00:00+05:00"])
    def test_fallback_offset_outside_utc_range_raises(self, value):
        with pytest.raises(EventFormatError, match="out of range"):
            parse_date_or_instant(value)

    def test_extreme_utc_values_are_kept(self):
        assert parse_date_or_instant("99991231T235959Z").value == datetime(
            9999, 12, 31, 23, 59, 59, tzinfo=timezone.utc
        )
        assert parse_date_or_instant("00010101T000000Z").value == datetime(
            1, 1, 1, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("value", ["garbage", "", "2024-13-45"])
    def test_unparseable_value_raises_format_error(self, value):
        with pytest.raises(EventFormatError):
            parse_date_or_instant(value)


class TestResolveLocalTime:
    """Tests for resolve_local_time helper."""

    def test_returns_aware_utc(self, local_zone):
        result = resolve_local_time(datetime(2024, 6, 1, 12, 0), local_zone)

        assert result.tzinfo is not None
        assert result == datetime(2024, 6, 1, 16, 0, tzinfo=timezone.utc)

    def test_default_zone_is_process_zone(self):
        """Without an explicit zone the result is still an aware datetime."""
        result = resolve_local_time(datetime(2024, 6, 1, 12, 0))

        assert result.utcoffset() == timedelta(0)

    def test_overflow_is_timezone_error(self, local_zone):
        with pytest.raises(EventTimezoneError):
            resolve_local_time(datetime(9999, 12, 31, 23, 0), local_zone)

        with pytest.raises(EventTimezoneError):
            resolve_local_time(datetime(1, 1, 1, 0, 0), ZoneInfo("Asia/Tokyo"))


class TestParseDuration:
    """Tests for the P[nD][T[nH][nM][nS]] duration grammar."""

    def test_all_components(self):
        assert parse_duration("P1DT2H3M4S") == timedelta(days=1, hours=2, minutes=3, seconds=4)

    def test_zero_days(self):
        assert parse_duration("P0D") == timedelta(0)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("PT1H", timedelta(hours=1)),
            ("PT15M", timedelta(minutes=15)),
            ("PT30S", timedelta(seconds=30)),
            ("P2D", timedelta(days=2)),
            ("PT1H30M", timedelta(hours=1, minutes=30)),
            ("P1DT12H", timedelta(days=1, hours=12)),
        ],
    )
    def test_partial_components_default_to_zero(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["P1DX", "XP1D", "P1W", "P1M", "P1Y", "-PT1H", "PT1.5H", "P1D\n", " P1D", "1D", "PT1H2D"],
    )
    def test_rejects_values_outside_grammar(self, value):
        """The grammar is anchored at both ends and has no weeks, months or signs."""
        with pytest.raises(EventFormatError, match="Invalid duration"):
            parse_duration(value)

    def test_overflow_is_format_error(self):
        with pytest.raises(EventFormatError, match="out of range"):
            parse_duration("P9999999999D")
