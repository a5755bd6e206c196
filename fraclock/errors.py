"""Exceptions raised by fraclock.

Each error also derives from the builtin exception it refines, so callers
that already catch ``ValueError``/``ZeroDivisionError``/``OverflowError``
keep working.
"""


class FraclockError(Exception):
    """Base class for all fraclock errors."""


class InvalidCalendarDate(FraclockError, ValueError):
    """Calendar fields do not form a real date and time."""


class InvalidDurationDenominator(FraclockError, ZeroDivisionError):
    """A Duration with a zero denominator was used in arithmetic."""


class ArithmeticOverflow(FraclockError, OverflowError):
    """An elapsed-units computation left the supported integer range."""


class InvalidEnumerationMapping(FraclockError, LookupError):
    """The calendar service produced a month or weekday ordinal out of range."""
