"""
Velocity humanization.

Generated chords get a small random velocity spread per voice so repeated
chords do not sound identical. The random source is injected, so a seeded
random.Random makes the output reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from chuk_live_sync.constants import MAX_VELOCITY, MIN_VELOCITY
from chuk_live_sync.core.chord import Voice


@dataclass(frozen=True)
class Jitter:
    """
    Spread applied to one voice, as a percentage of the base velocity.

    With only_down the offset is never positive.
    """

    percent: float
    only_down: bool = False

    def bounds(self, base: float) -> tuple[float, float]:
        """Lowest and highest velocity this jitter can produce from base."""
        spread = base * self.percent / 100
        return (base - spread, base if self.only_down else base + spread)

    def apply(self, base: float, rng: random.Random) -> float:
        offset = (rng.random() * 2 - 1) * self.percent / 100
        if self.only_down:
            offset = -abs(offset)
        return base * (1 + offset)


# Per-voice spread: the fifth only ever gets softer
VOICE_JITTER: dict[Voice, Jitter] = {
    Voice.ROOT: Jitter(10),
    Voice.THIRD: Jitter(20),
    Voice.FIFTH: Jitter(10, only_down=True),
    Voice.OCTAVE: Jitter(25),
}


def velocity_for_intensity(intensity: float) -> int:
    """Map intensity 0..1 to a base velocity 70..120."""
    return round(70 + intensity * 50)


def clamp_velocity(value: float, low: int = MIN_VELOCITY, high: int = MAX_VELOCITY) -> int:
    """Round and clamp to the playable MIDI velocity range."""
    return max(low, min(high, round(value)))


class Humanizer:
    """Applies per-voice velocity jitter from an injectable random source."""

    def __init__(
        self,
        rng: random.Random | None = None,
        jitter: dict[Voice, Jitter] | None = None,
        min_velocity: int = MIN_VELOCITY,
        max_velocity: int = MAX_VELOCITY,
    ):
        self.rng = rng or random.Random()
        self.jitter = jitter or VOICE_JITTER
        self.min_velocity = min_velocity
        self.max_velocity = max_velocity

    def velocity(self, voice: Voice, base: int) -> int:
        value = self.jitter[voice].apply(base, self.rng)
        return clamp_velocity(value, self.min_velocity, self.max_velocity)
