"""
Meter primitive - bar to beat conversion.

Beats are quarter-note beats, the session's native time unit. A bar of
numerator/denominator holds numerator * (4 / denominator) beats, so 4/4 has
4 beats per bar, 3/4 has 3, 6/8 has 3.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from chuk_live_sync.constants import DEFAULT_DENOMINATOR, DEFAULT_NUMERATOR


def _positive_number(value: Any) -> float | None:
    """Coerce a remote value to a positive number, or None if it is not one."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number <= 0:  # NaN or non-positive
        return None
    return number


@dataclass(frozen=True)
class Meter:
    """
    A time signature as the session reports it.

    Immutable and hashable.
    """

    numerator: float
    denominator: float

    COMMON_TIME: ClassVar[Meter]

    def __post_init__(self) -> None:
        if self.denominator <= 0:
            raise ValueError(f"Denominator must be positive, got {self.denominator}")

    @property
    def beats_per_bar(self) -> float:
        """Quarter-note beats in one bar."""
        return self.numerator * (4 / self.denominator)

    def bar_to_beats(self, bar: float) -> float:
        """
        Convert a bar count (may be fractional) to beats.

        Bars here are 0-based offsets; subtract one from a 1-based bar
        number before converting to address the start of that bar.
        """
        return bar * self.beats_per_bar

    def __str__(self) -> str:
        return f"{self.numerator:g}/{self.denominator:g}"

    @classmethod
    def coerce(cls, numerator: Any, denominator: Any) -> Meter:
        """
        Build a meter from loosely-typed remote values.

        Missing, zero or non-numeric parts fall back to 4.
        """
        num = _positive_number(numerator) or DEFAULT_NUMERATOR
        den = _positive_number(denominator) or DEFAULT_DENOMINATOR
        return cls(num, den)


Meter.COMMON_TIME = Meter(DEFAULT_NUMERATOR, DEFAULT_DENOMINATOR)
