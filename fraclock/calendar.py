"""Calendar service used by Instant.

The calendar service captures "now", decomposes a POSIX reading into
calendar fields, resolves the local UTC offset, and validates calendar
fields when building an instant. Instants receive it as an explicit handle
(``calendar=``); ``SystemCalendar`` is the default, backed by ``datetime``,
``zoneinfo`` and python-dateutil.
"""

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from enum import IntEnum
from time import time_ns
from typing import Protocol
from zoneinfo import ZoneInfo

from dateutil import tz as dateutil_tz
from typing_extensions import override

from fraclock.errors import InvalidCalendarDate, InvalidEnumerationMapping
from fraclock.util import NANOS_PER_SECOND

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# POSIX seconds of 0001-01-01 00:00:00 and 9999-12-31 23:59:59 UTC
MIN_SECONDS = (datetime.min.replace(tzinfo=timezone.utc) - EPOCH) // timedelta(
    seconds=1
)
MAX_SECONDS = (datetime.max.replace(tzinfo=timezone.utc) - EPOCH) // timedelta(
    seconds=1
)


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


class DayOfWeek(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


_MONTH_MAP: dict[int, Month] = {
    1: Month.JANUARY,
    2: Month.FEBRUARY,
    3: Month.MARCH,
    4: Month.APRIL,
    5: Month.MAY,
    6: Month.JUNE,
    7: Month.JULY,
    8: Month.AUGUST,
    9: Month.SEPTEMBER,
    10: Month.OCTOBER,
    11: Month.NOVEMBER,
    12: Month.DECEMBER,
}

# Ordinals count from Sunday = 0
_DAY_MAP: dict[int, DayOfWeek] = {
    0: DayOfWeek.SUNDAY,
    1: DayOfWeek.MONDAY,
    2: DayOfWeek.TUESDAY,
    3: DayOfWeek.WEDNESDAY,
    4: DayOfWeek.THURSDAY,
    5: DayOfWeek.FRIDAY,
    6: DayOfWeek.SATURDAY,
}


def month_from_ordinal(ordinal: int) -> Month:
    """Map a 1-12 month number onto Month."""
    try:
        return _MONTH_MAP[ordinal]
    except KeyError:
        raise InvalidEnumerationMapping(
            f"Month ordinal must be 1-12, got {ordinal!r}"
        ) from None


def weekday_from_ordinal(ordinal: int) -> DayOfWeek:
    """Map a 0-6 (Sunday-first) weekday number onto DayOfWeek."""
    try:
        return _DAY_MAP[ordinal]
    except KeyError:
        raise InvalidEnumerationMapping(
            f"Weekday ordinal must be 0-6 (Sunday=0), got {ordinal!r}"
        ) from None


class Calendar(Protocol):
    """Capabilities an Instant needs from its calendar service."""

    def now(self) -> tuple[int, int]:
        """Return the current UTC reading as (POSIX seconds, nanoseconds)."""
        ...

    def to_utc_fields(self, seconds: int) -> datetime:
        """Return the aware UTC datetime for a POSIX second."""
        ...

    def utc_offset(self, seconds: int) -> timedelta:
        """Return the local UTC offset in effect at a POSIX second.

        Raises:
            InvalidCalendarDate: If the local time falls outside years 1-9999
        """
        ...

    def compose(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        *,
        local: bool = False,
    ) -> int:
        """Validate calendar fields and return their POSIX second.

        Raises:
            InvalidCalendarDate: If the fields do not name a real moment
        """
        ...


class SystemCalendar:
    """Calendar service backed by the host clock and a timezone.

    Args:
        tz: IANA timezone name (e.g., "US/Pacific") or tzinfo used as the
            local zone. Defaults to the host's local zone.
    """

    def __init__(self, tz: str | tzinfo | None = None):
        if tz is None:
            self.zone: tzinfo = dateutil_tz.tzlocal()
        elif isinstance(tz, str):
            self.zone = ZoneInfo(tz)
        else:
            self.zone = tz

    def now(self) -> tuple[int, int]:
        return divmod(time_ns(), NANOS_PER_SECOND)

    def to_utc_fields(self, seconds: int) -> datetime:
        return EPOCH + timedelta(seconds=seconds)

    def utc_offset(self, seconds: int) -> timedelta:
        utc = self.to_utc_fields(seconds)
        try:
            offset = utc.astimezone(self.zone).utcoffset()
        except OverflowError as e:
            raise InvalidCalendarDate(
                f"Local time for {utc.replace(tzinfo=None)} UTC in {self.zone} "
                f"falls outside years 1-9999"
            ) from e
        assert offset is not None
        return offset

    def compose(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        *,
        local: bool = False,
    ) -> int:
        zone = self.zone if local else timezone.utc
        try:
            dt = datetime(year, month, day, hour, minute, second, tzinfo=zone)
            # Wall times skipped by a DST transition have no UTC counterpart
            exists = not local or dateutil_tz.datetime_exists(dt)
            seconds = (dt - EPOCH) // timedelta(seconds=1)
        except (ValueError, OverflowError) as e:
            logger.debug(
                "Rejected calendar fields %04d-%02d-%02d %02d:%02d:%02d: %s",
                year, month, day, hour, minute, second, e,
            )
            raise InvalidCalendarDate(
                f"Invalid calendar date {year}-{month}-{day} "
                f"{hour}:{minute}:{second}: {e}"
            ) from e

        if not exists:
            logger.debug("Local time %s does not exist in %s", dt, zone)
            raise InvalidCalendarDate(
                f"Local time {dt.replace(tzinfo=None)} does not exist in {zone}"
            )
        if not (MIN_SECONDS <= seconds <= MAX_SECONDS):
            logger.debug("Local time %s falls outside the UTC range", dt)
            raise InvalidCalendarDate(
                f"Local time {dt.replace(tzinfo=None)} in {zone} falls outside "
                f"years 1-9999 in UTC"
            )
        return seconds

    @override
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tz={self.zone!r})"


class FrozenCalendar(SystemCalendar):
    """SystemCalendar whose clock is pinned to a fixed reading.

    Useful for deterministic tests; ``advance`` moves the pinned reading.
    """

    def __init__(
        self, seconds: int, nanosecond: int = 0, tz: str | tzinfo | None = None
    ):
        super().__init__(tz)
        self._nanos: int = seconds * NANOS_PER_SECOND + nanosecond

    @override
    def now(self) -> tuple[int, int]:
        return divmod(self._nanos, NANOS_PER_SECOND)

    def advance(self, seconds: int = 0, nanoseconds: int = 0) -> None:
        self._nanos += seconds * NANOS_PER_SECOND + nanoseconds
