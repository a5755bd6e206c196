"""Named duration constants for fraclock.

Each constant is an exact Duration, so ``SECOND / 3`` is one third of a
second with no rounding.
"""

from fraclock.duration import Duration

NANOSECOND = Duration(1, 1_000_000_000)
MICROSECOND = Duration(1, 1_000_000)
MILLISECOND = Duration(1, 1_000)
SECOND = Duration(1, 1)
MINUTE = Duration(60, 1)
HOUR = Duration(3600, 1)
DAY = Duration(86400, 1)

# Nanoseconds per second, the sub-second resolution of an Instant
NANOS_PER_SECOND = 1_000_000_000
