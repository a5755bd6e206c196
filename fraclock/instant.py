"""UTC instants with calendar accessors and exact elapsed-time counting."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from typing_extensions import override

from fraclock.calendar import (
    Calendar,
    DayOfWeek,
    Month,
    SystemCalendar,
    month_from_ordinal,
    weekday_from_ordinal,
)
from fraclock.duration import Duration
from fraclock.elapsed import elapsed_units
from fraclock.errors import InvalidCalendarDate
from fraclock.util import NANOS_PER_SECOND


@dataclass(frozen=True)
class Span:
    """Signed difference between two instants.

    ``nanoseconds`` has the same sign as ``seconds`` (or is zero) and its
    magnitude is below one second.
    """

    seconds: int
    nanoseconds: int

    @property
    def total_nanoseconds(self) -> int:
        return self.seconds * NANOS_PER_SECOND + self.nanoseconds


def _format(dt: datetime, nanos: int) -> str:
    """Render calendar fields as ``YYYY-MM-DD HH:MM:SS[.fraction]``."""
    text = (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )
    if nanos == 0:
        return text
    if nanos % 1_000_000 == 0:
        return f"{text}.{nanos // 1_000_000:03d}"
    if nanos % 1_000 == 0:
        return f"{text}.{nanos // 1_000:06d}"
    return f"{text}.{nanos:09d}"


@dataclass(frozen=True, kw_only=True, repr=False)
class Instant:
    """A point in time, stored as UTC at nanosecond resolution.

    Instants are built with ``now``, ``from_utc``, ``from_local`` or
    ``from_timestamp``; the stored fields are private. They are
    compared by subtraction, which yields a ``Span``. The calendar service
    is carried along for calendar accessors and local rendering; it takes no
    part in equality.

    Example:
        >>> from fraclock import Instant, SECOND
        >>> start = Instant.now()
        >>> thirds = Instant.now().since(start, SECOND / 3)
    """

    _seconds: int
    _nanos: int = 0
    calendar: Calendar = field(
        default_factory=SystemCalendar, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        if not (0 <= self._nanos < NANOS_PER_SECOND):
            raise ValueError(
                f"Instant nanoseconds must be 0-999999999, got {self._nanos}"
            )

    @classmethod
    def now(cls, calendar: Calendar | None = None) -> "Instant":
        """Capture the calendar service's current UTC reading."""
        calendar = calendar or SystemCalendar()
        seconds, nanos = calendar.now()
        return cls(_seconds=seconds, _nanos=nanos, calendar=calendar)

    @classmethod
    def from_timestamp(
        cls, seconds: int, nanosecond: int = 0, calendar: Calendar | None = None
    ) -> "Instant":
        """Build an instant from POSIX seconds plus a nanosecond remainder."""
        return cls(
            _seconds=seconds,
            _nanos=nanosecond,
            calendar=calendar or SystemCalendar(),
        )

    @classmethod
    def from_utc(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        calendar: Calendar | None = None,
    ) -> "Instant | None":
        """Define an instant from UTC calendar fields.

        Returns:
            The instant, or None if the fields do not form a valid date
        """
        return cls._compose(
            year, month, day, hour, minute, second, calendar=calendar, local=False
        )

    @classmethod
    def from_local(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        calendar: Calendar | None = None,
    ) -> "Instant | None":
        """Define an instant from wall-clock fields in the calendar's local zone.

        Ambiguous wall times (repeated when clocks fall back) resolve to the
        earlier occurrence; wall times skipped when clocks spring forward are
        rejected.

        Returns:
            The instant, or None if the fields do not form a valid local time
        """
        return cls._compose(
            year, month, day, hour, minute, second, calendar=calendar, local=True
        )

    @classmethod
    def _compose(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        *,
        calendar: Calendar | None,
        local: bool,
    ) -> "Instant | None":
        calendar = calendar or SystemCalendar()
        try:
            seconds = calendar.compose(
                year, month, day, hour, minute, second, local=local
            )
        except InvalidCalendarDate:
            return None
        return cls(_seconds=seconds, calendar=calendar)

    @property
    def _utc(self) -> datetime:
        return self.calendar.to_utc_fields(self._seconds)

    @property
    def year(self) -> int:
        return self._utc.year

    @property
    def month(self) -> Month:
        return month_from_ordinal(self._utc.month)

    @property
    def day(self) -> int:
        """Day of the month (1-31)."""
        return self._utc.day

    @property
    def day_of_week(self) -> DayOfWeek:
        return weekday_from_ordinal(self._utc.isoweekday() % 7)

    @property
    def hour(self) -> int:
        """Hour (0-23)."""
        return self._utc.hour

    @property
    def minute(self) -> int:
        """Minute (0-59)."""
        return self._utc.minute

    @property
    def second(self) -> int:
        """Second (0-59)."""
        return self._utc.second

    @property
    def nanosecond(self) -> int:
        """Nanosecond within the second.

        POSIX readings never encode a leap second, so this stays below
        1,000,000,000 even though the field admits up to 1,999,999,999.
        """
        return self._nanos

    @property
    def _wall(self) -> datetime:
        offset = self.calendar.utc_offset(self._seconds)
        return (self._utc + offset).replace(tzinfo=timezone(offset))

    def local(self) -> datetime:
        """Return this instant as an aware datetime in the local zone.

        Precision is truncated to microseconds, the resolution of datetime.

        Raises:
            InvalidCalendarDate: If the local time falls outside years 1-9999
        """
        return self._wall.replace(microsecond=self._nanos // 1_000)

    def since(self, baseline: "Instant", unit: Duration) -> int:
        """Count whole ``unit`` intervals from ``baseline`` to this instant."""
        return elapsed_units(self, baseline, unit)

    def __sub__(self, other: "Instant") -> Span:
        if not isinstance(other, Instant):
            return NotImplemented
        total = (self._seconds - other._seconds) * NANOS_PER_SECOND + (
            self._nanos - other._nanos
        )
        seconds, nanos = divmod(abs(total), NANOS_PER_SECOND)
        if total < 0:
            return Span(-seconds, -nanos)
        return Span(seconds, nanos)

    @override
    def __repr__(self) -> str:
        """Raw UTC form."""
        return f"Instant({_format(self._utc, self._nanos)})"

    @override
    def __str__(self) -> str:
        """Local wall-clock form, using the offset in effect at this instant."""
        return _format(self._wall, self._nanos)
