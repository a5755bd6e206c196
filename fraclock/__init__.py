from .calendar import Calendar, DayOfWeek, FrozenCalendar, Month, SystemCalendar
from .duration import Duration
from .elapsed import elapsed_units
from .errors import (
    ArithmeticOverflow,
    FraclockError,
    InvalidCalendarDate,
    InvalidDurationDenominator,
    InvalidEnumerationMapping,
)
from .instant import Instant, Span
from .util import (
    DAY,
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
)

__all__ = [
    "Duration",
    "Instant",
    "Span",
    "Calendar",
    "SystemCalendar",
    "FrozenCalendar",
    "Month",
    "DayOfWeek",
    "elapsed_units",
    "NANOSECOND",
    "MICROSECOND",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "FraclockError",
    "InvalidCalendarDate",
    "InvalidDurationDenominator",
    "ArithmeticOverflow",
    "InvalidEnumerationMapping",
]
