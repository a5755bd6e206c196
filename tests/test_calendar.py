"""Tests for the calendar service and enumeration mappings."""

from datetime import timedelta, timezone

import pytest
from dateutil import tz as dateutil_tz

from fraclock import (
    DayOfWeek,
    FrozenCalendar,
    InvalidCalendarDate,
    InvalidEnumerationMapping,
    Month,
    SystemCalendar,
)
from fraclock.calendar import (
    MAX_SECONDS,
    MIN_SECONDS,
    month_from_ordinal,
    weekday_from_ordinal,
)


def test_month_mapping_covers_1_to_12():
    """Test that every month ordinal maps to its Month."""
    for ordinal in range(1, 13):
        assert month_from_ordinal(ordinal).value == ordinal
    assert month_from_ordinal(1) is Month.JANUARY
    assert month_from_ordinal(12) is Month.DECEMBER


def test_month_mapping_rejects_out_of_range():
    """Test that month ordinals outside 1-12 raise a mapping error."""
    for ordinal in (0, 13, -1, 255):
        with pytest.raises(InvalidEnumerationMapping, match="Month ordinal"):
            month_from_ordinal(ordinal)


def test_weekday_mapping_is_sunday_first():
    """Test that weekday ordinals count from Sunday = 0."""
    assert weekday_from_ordinal(0) is DayOfWeek.SUNDAY
    assert weekday_from_ordinal(1) is DayOfWeek.MONDAY
    assert weekday_from_ordinal(6) is DayOfWeek.SATURDAY


def test_weekday_mapping_rejects_out_of_range():
    """Test that weekday ordinals outside 0-6 raise a mapping error."""
    for ordinal in (-1, 7, 100):
        with pytest.raises(InvalidEnumerationMapping, match="Weekday ordinal"):
            weekday_from_ordinal(ordinal)


def test_mapping_error_is_a_lookup_error():
    """Test that mapping errors are distinct from date errors."""
    with pytest.raises(LookupError):
        month_from_ordinal(13)
    assert not issubclass(InvalidEnumerationMapping, InvalidCalendarDate)


def test_system_calendar_defaults_to_host_zone():
    """Test that the default local zone is the host's."""
    assert isinstance(SystemCalendar().zone, dateutil_tz.tzlocal)


def test_compose_utc():
    """Test composing UTC fields into POSIX seconds."""
    cal = SystemCalendar(tz="UTC")

    assert cal.compose(1970, 1, 1, 0, 0, 0) == 0
    assert cal.compose(2024, 1, 1, 0, 0, 0) == 1704067200
    assert cal.compose(1969, 12, 31, 23, 59, 59) == -1


def test_compose_local_applies_offset():
    """Test that local composition converts through the zone offset."""
    cal = SystemCalendar(tz="US/Pacific")

    # Midnight Pacific (PST, UTC-8) is 08:00 UTC
    assert cal.compose(2024, 1, 1, 0, 0, 0, local=True) == 1704067200 + 8 * 3600


def test_compose_rejects_invalid_fields():
    """Test that compose raises for invalid fields."""
    cal = SystemCalendar(tz="UTC")

    with pytest.raises(InvalidCalendarDate, match="Invalid calendar date"):
        cal.compose(2024, 13, 1, 0, 0, 0)


def test_compose_rejects_nonexistent_local_time():
    """Test that wall times skipped by DST are rejected."""
    cal = SystemCalendar(tz="US/Pacific")

    with pytest.raises(InvalidCalendarDate, match="does not exist"):
        cal.compose(2024, 3, 10, 2, 30, 0, local=True)


def test_utc_offset_follows_dst():
    """Test that the local offset is resolved per instant."""
    cal = SystemCalendar(tz="US/Pacific")
    winter = cal.compose(2024, 1, 15, 12, 0, 0)
    summer = cal.compose(2024, 7, 15, 12, 0, 0)

    assert cal.utc_offset(winter) == timedelta(hours=-8)
    assert cal.utc_offset(summer) == timedelta(hours=-7)


def test_to_utc_fields_is_aware_utc():
    """Test that decomposition yields aware UTC datetimes."""
    dt = SystemCalendar().to_utc_fields(1704067200)

    assert dt.tzinfo is timezone.utc
    assert (dt.year, dt.month, dt.day, dt.hour) == (2024, 1, 1, 0)


def test_frozen_calendar_pins_and_advances():
    """Test that FrozenCalendar returns a fixed reading until advanced."""
    cal = FrozenCalendar(1704067200, 250)

    assert cal.now() == (1704067200, 250)
    assert cal.now() == (1704067200, 250)

    cal.advance(seconds=1, nanoseconds=999_999_800)
    assert cal.now() == (1704067202, 50)


def test_system_calendar_now_is_normalized():
    """Test that the live clock reading has a sub-second nanosecond part."""
    seconds, nanos = SystemCalendar().now()

    assert seconds > 1704067200
    assert 0 <= nanos < 1_000_000_000


def test_compose_local_rejects_utc_overflow():
    """Test that local fields whose UTC time leaves the range are rejected."""
    cal = SystemCalendar(tz="US/Pacific")

    with pytest.raises(InvalidCalendarDate, match="Invalid calendar date"):
        cal.compose(9999, 12, 31, 23, 0, 0, local=True)


def test_compose_utc_range_edges():
    """Test the first and last representable UTC seconds."""
    cal = SystemCalendar(tz="UTC")

    assert cal.compose(1, 1, 1, 0, 0, 0) == MIN_SECONDS
    assert cal.compose(9999, 12, 31, 23, 59, 59) == MAX_SECONDS


def test_utc_offset_rejects_out_of_range_local_time():
    """Test that offset resolution fails cleanly at the range edge."""
    cal = SystemCalendar(tz="US/Pacific")

    with pytest.raises(InvalidCalendarDate, match="outside years 1-9999"):
        cal.utc_offset(MIN_SECONDS)
