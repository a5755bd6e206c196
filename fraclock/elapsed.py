"""Count whole duration-sized intervals between two instants.

Everything here is integer arithmetic. The elapsed time is scaled by the
unit's denominator and divided by its numerator; the part of the seconds
quotient that does not divide evenly is carried into the nanosecond term
before dividing, so the result equals truncating the exact ratio
``elapsed / unit``.
"""

import logging
from typing import TYPE_CHECKING

from fraclock.duration import Duration
from fraclock.errors import ArithmeticOverflow, InvalidDurationDenominator
from fraclock.util import NANOS_PER_SECOND

if TYPE_CHECKING:
    from fraclock.instant import Instant

logger = logging.getLogger(__name__)

# Bounds for intermediate products and for the returned count
_I128_MIN = -(2**127)
_I128_MAX = 2**127 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _trem(a: int, b: int) -> int:
    """Remainder matching ``_tdiv``; carries the sign of ``a``."""
    return a - b * _tdiv(a, b)


def _checked(value: int, low: int, high: int, what: str) -> int:
    if not (low <= value <= high):
        logger.warning("Elapsed-units overflow in %s: %d", what, value)
        raise ArithmeticOverflow(
            f"Elapsed-units {what} {value} is outside [{low}, {high}]"
        )
    return value


def elapsed_units(reference: "Instant", baseline: "Instant", unit: Duration) -> int:
    """Return how many whole ``unit`` intervals separate two instants.

    Args:
        reference: The later instant for a positive count
        baseline: The instant counted from
        unit: Size of one interval; must have a non-zero denominator and a
            non-zero numerator

    Returns:
        Count of whole intervals, positive when ``reference`` is after
        ``baseline``, negative when before, zero when equal. Partial
        intervals are truncated toward zero.

    Raises:
        InvalidDurationDenominator: If ``unit.denominator`` is zero
        ValueError: If ``unit`` is zero-length
        ArithmeticOverflow: If an intermediate leaves the signed 128-bit range
            or the count leaves the signed 64-bit range

    Example:
        >>> from fraclock import Instant, MILLISECOND
        >>> a = Instant.from_utc(2024, 1, 1, 0, 0, 0)
        >>> b = Instant.from_utc(2024, 1, 1, 0, 0, 1)
        >>> elapsed_units(b, a, MILLISECOND)
        1000
    """
    if unit.denominator == 0:
        raise InvalidDurationDenominator(
            f"Cannot count elapsed units of {unit}: zero denominator"
        )
    if unit.seconds == 0:
        raise ValueError(f"Cannot count elapsed units of zero-length unit {unit}")

    span = reference - baseline
    numerator = unit.seconds
    denominator = unit.denominator

    seconds = _checked(span.seconds * denominator, _I128_MIN, _I128_MAX, "seconds")
    nanos = _checked(span.nanoseconds * denominator, _I128_MIN, _I128_MAX, "nanos")

    # What the numerator doesn't divide out of the seconds moves to the nanos
    remaining = _trem(seconds, numerator)
    nanos = _checked(
        nanos + remaining * NANOS_PER_SECOND, _I128_MIN, _I128_MAX, "nanos"
    )

    count = _tdiv(seconds, numerator) + _tdiv(
        _tdiv(nanos, numerator), NANOS_PER_SECOND
    )
    return _checked(count, _I64_MIN, _I64_MAX, "count")
