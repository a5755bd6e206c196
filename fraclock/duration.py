from dataclasses import dataclass
from fractions import Fraction

from typing_extensions import override

from fraclock.errors import InvalidDurationDenominator


@dataclass(frozen=True)
class Duration:
    """An exact amount of time: ``seconds / denominator`` seconds.

    The sign lives on ``seconds``. A zero denominator is accepted here and
    rejected wherever the value is used.
    """

    seconds: int
    denominator: int

    def __post_init__(self) -> None:
        if self.denominator < 0:
            raise ValueError(
                f"Duration denominator must be >= 0, got {self.denominator}"
            )

    def _require_denominator(self) -> None:
        if self.denominator == 0:
            raise InvalidDurationDenominator(
                f"Duration {self} has a zero denominator"
            )

    def __mul__(self, factor: int) -> "Duration":
        if not isinstance(factor, int) or isinstance(factor, bool):
            return NotImplemented
        self._require_denominator()
        seconds = self.seconds
        if factor < 0:
            seconds, factor = -seconds, -factor
        return Duration(seconds * factor, self.denominator)

    __rmul__ = __mul__

    def __truediv__(self, factor: int) -> "Duration":
        # A fraction: dividing scales the denominator.
        if not isinstance(factor, int) or isinstance(factor, bool):
            return NotImplemented
        self._require_denominator()
        if factor == 0:
            raise InvalidDurationDenominator(f"Cannot divide Duration {self} by zero")
        seconds = self.seconds
        if factor < 0:
            seconds, factor = -seconds, -factor
        return Duration(seconds, self.denominator * factor)

    def as_fraction(self) -> Fraction:
        """Return the exact value in seconds."""
        self._require_denominator()
        return Fraction(self.seconds, self.denominator)

    @override
    def __str__(self) -> str:
        return f"{self.seconds}/{self.denominator}"
